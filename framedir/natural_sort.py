"""
Natural ("human") ordering of strings containing numbers.

Embedded runs of digits are compared by their numeric value, everything
else is compared lexically, so ``img2.png`` sorts before ``img10.png``.
"""

from __future__ import annotations

import re
from typing import Iterable

_DIGIT_RUN = re.compile(r"([0-9]+)")


def natural_sort_key(text: str) -> tuple[tuple, str]:
    """
    Creates a sort key for natural ordering.

    Splitting at digit runs always alternates text and number parts
    (``"a10b" -> ["a", "10", "b"]``), so equal positions of two keys always
    hold values of the same type. Text parts compare case-insensitively,
    the original string breaks remaining ties (``"a01"`` vs. ``"a1"``).

    :param text: The string to create the key for
    :return: The sort key
    """
    parts = _DIGIT_RUN.split(text)
    key = tuple(
        int(part) if index % 2 else part.casefold()
        for index, part in enumerate(parts)
    )
    return key, text


def natural_sorted(items: Iterable[str]) -> list[str]:
    """
    Returns the given strings in natural order.

    :param items: The strings to sort
    :return: A new, sorted list
    """
    return sorted(items, key=natural_sort_key)
