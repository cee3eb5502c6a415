"""Base stream classes for framedir.

This module defines the SeekableStream abstract base class shared by all
finite, randomly addressable item sources, together with the seek origin
enumeration and the position clamping arithmetic.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Iterator, Union


class SeekOrigin(IntEnum):
    """Reference point of a seek, numerically equal to os.SEEK_*."""

    BEGIN = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END

    @classmethod
    def parse(cls, value: SeekOriginTypes) -> SeekOrigin:
        """Converts an int, a name like "begin" or a SeekOrigin.

        :param value: The origin to convert
        :return: The seek origin
        :raises ValueError: If the value does not name an origin
        """
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Invalid seek origin: {value!r}") from None
        return cls(value)


SeekOriginTypes = Union[SeekOrigin, int, str]
"Values accepted as seek origin"


def clamp_position(position: int, offset: int, origin: SeekOrigin, length: int) -> int:
    """Computes the target of a seek, clamped into [0, length].

    :param position: The current position
    :param offset: Offset relative to origin
    :param origin: The reference point
    :param length: The stream's length
    :return: The new position
    """
    if origin == SeekOrigin.BEGIN:
        base = 0
    elif origin == SeekOrigin.CURRENT:
        base = position
    else:
        base = length
    return max(0, min(base + offset, length))


class SeekableStream(ABC):
    """Base class for finite streams with random access.

    A stream has a fixed length and a read position in [0, length]. Each
    read returns the item at the position and advances it by one, a position
    equal to the length marks the end of the stream.

    Example:
        stream = ImageDirectoryStream('frames/', '*.png')
        while True:
            image, ok = stream.read()
            if not ok:
                break
            process(image)

        stream.seek(0, SeekOrigin.BEGIN)  # rewind
    """

    is_live_stream: bool = False
    "Live sources (cameras) can not be rewound or measured"
    can_seek: bool = True
    "Whether seek() is supported"

    @abstractmethod
    def read(self) -> tuple[Any, bool]:
        """Reads the item at the current position and advances by one.

        :return: Tuple of (item, True), or (None, False) at the end of the
            stream
        """
        ...

    @property
    @abstractmethod
    def length(self) -> int:
        """Total number of items in the stream."""
        ...

    @property
    @abstractmethod
    def position(self) -> int:
        """Index of the item the next read returns."""
        ...

    @abstractmethod
    def seek(self, offset: int, origin: SeekOriginTypes = SeekOrigin.CURRENT) -> int:
        """Moves the read position.

        :param offset: Item offset relative to origin
        :param origin: The reference point
        :return: The new, clamped position
        """
        ...

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def open(self) -> None:
        """Opens the stream. Does nothing by default."""

    def close(self) -> None:
        """Closes the stream. Does nothing by default."""

    def __enter__(self) -> SeekableStream:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    def grab(self) -> Any:
        """Reads the next item, ignoring the success flag.

        :return: The item or None at the end of the stream
        """
        item, _ = self.read()
        return item

    def _compute_seek(self, offset: int, origin: SeekOriginTypes) -> int:
        """Resolves a seek request against the current position and length."""
        return clamp_position(
            self.position, int(offset), SeekOrigin.parse(origin), self.length
        )

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Any]:
        """Yields the remaining items, starting at the current position."""
        while True:
            item, ok = self.read()
            if not ok:
                return
            yield item
