"""
File discovery for directory backed streams.

Enumerates the files below a root directory whose names match one or more
glob patterns and freezes them into an ordered tuple of absolute paths.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from typing import Iterator, Sequence, Union

from .errors import DirectoryNotFoundError
from .natural_sort import natural_sort_key

logger = logging.getLogger(__name__)

PatternTypes = Union[str, Sequence[str]]
"A single glob pattern or a sequence of glob patterns"


def normalize_patterns(patterns: PatternTypes) -> tuple[str, ...]:
    """
    Converts a single pattern or a sequence of patterns to a tuple.

    :param patterns: The pattern(s), e.g. ``"*.png"`` or ``["*.png", "*.jpg"]``
    :return: The patterns as tuple
    """
    if isinstance(patterns, str):
        patterns = (patterns,)
    patterns = tuple(patterns)
    if not patterns:
        raise ValueError("At least one search pattern is required")
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            raise ValueError(f"Invalid search pattern: {pattern!r}")
    return patterns


def _iter_files(root: str, recursive: bool) -> Iterator[str]:
    """
    Yields the regular files below root in the order the file system
    returns them.

    :param root: The absolute root directory
    :param recursive: Defines if nested directories shall be visited
    """
    if recursive:
        for dir_path, _, file_names in os.walk(root):
            for file_name in file_names:
                path = os.path.join(dir_path, file_name)
                if os.path.isfile(path):
                    yield path
        return
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.is_file():
                yield entry.path


def enumerate_files(
    root: str | os.PathLike,
    patterns: PatternTypes,
    recursive: bool = False,
) -> list[str]:
    """
    Lists all files below root matching any of the given patterns.

    Files are returned pattern by pattern, each in raw file system order.
    A file matching multiple patterns is only listed for the first one.

    :param root: The directory to search
    :param patterns: Glob pattern(s) matched against the file names
    :param recursive: If True all subdirectories are searched as well,
        otherwise only the top directory
    :return: The absolute file paths
    :raises DirectoryNotFoundError: If root does not exist
    """
    root_path = os.path.abspath(os.fspath(root))
    if not os.path.isdir(root_path):
        raise DirectoryNotFoundError(root_path)
    patterns = normalize_patterns(patterns)
    candidates = list(_iter_files(root_path, recursive))
    seen: set[str] = set()
    files: list[str] = []
    for pattern in patterns:
        for path in candidates:
            if path in seen:
                continue
            if fnmatch.fnmatch(os.path.basename(path), pattern):
                seen.add(path)
                files.append(path)
    return files


def discover_files(
    root: str | os.PathLike,
    patterns: PatternTypes,
    natural_sort: bool = True,
    recursive: bool = False,
) -> tuple[str, ...]:
    """
    Enumerates and orders the files of a directory stream.

    :param root: The directory to search
    :param patterns: Glob pattern(s) matched against the file names
    :param natural_sort: If True the full paths are ordered naturally
        (``img2`` before ``img10``), otherwise the raw enumeration order is
        kept
    :param recursive: If True all subdirectories are searched as well
    :return: The ordered, absolute file paths
    :raises DirectoryNotFoundError: If root does not exist
    """
    files = enumerate_files(root, patterns, recursive=recursive)
    if natural_sort:
        files.sort(key=natural_sort_key)
    logger.debug(
        f"Discovered {len(files)} files in {os.fspath(root)} "
        f"(recursive={recursive}, natural_sort={natural_sort})"
    )
    return tuple(files)
