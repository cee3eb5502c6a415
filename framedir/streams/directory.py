"""Directory stream implementation.

This module provides ImageDirectoryStream, which exposes the files of a
directory as a seekable stream of lazily decoded images.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

from ..config import settings
from ..enumeration import PatternTypes, discover_files, normalize_patterns
from ..loaders import Loader, get_loader
from .base import SeekableStream, SeekOrigin, SeekOriginTypes

logger = logging.getLogger(__name__)


class ImageDirectoryStream(SeekableStream):
    """Streams the files of a directory as decoded images.

    The files are discovered once at construction and ordered naturally
    (``frame2.png`` before ``frame10.png``) or in raw file system order.
    Every read decodes the file at the current position through the loader;
    decoded items are not cached, the caller owns what read() returns.

    File name patterns are matched with fnmatch, case-sensitively on POSIX
    systems: ``"*.png"`` does not match ``FRAME1.PNG``.

    Reads are thread-safe: concurrent readers each receive a distinct index.
    seek() and the position accessors are not synchronized with reads.

    If the loader raises, the exception propagates and the position is left
    unchanged, so the next read retries the same file.

    Example:
        stream = ImageDirectoryStream('/data/frames', ['*.png', '*.jpg'])
        print(stream.length)

        for image in stream:
            with image:
                process(image.get_pixels())

        stream.seek(-1, SeekOrigin.END)
        last, ok = stream.read()

    Attributes:
        root: Absolute path of the searched directory
        patterns: The file name patterns
        natural_sort: Whether natural ordering was applied
        recursive: Whether subdirectories were searched
    """

    def __init__(
        self,
        root: str | os.PathLike,
        patterns: PatternTypes | None = None,
        natural_sort: bool | None = None,
        recursive: bool | None = None,
        loader: Loader | None = None,
    ) -> None:
        """Enumerates the directory.

        Arguments left at None use the defaults of :data:`framedir.config.settings`.

        :param root: The directory path
        :param patterns: The file name search pattern(s), e.g. ``"*.png"``
        :param natural_sort: Use natural sorting, otherwise raw file order
        :param recursive: If True searches the directory and all
            subdirectories, otherwise only the top directory
        :param loader: Function turning a path into an item. If None the
            default image loader is used.
        :raises DirectoryNotFoundError: If the directory can not be found
        """
        super().__init__()
        if patterns is None:
            patterns = settings.DEFAULT_PATTERNS
        if natural_sort is None:
            natural_sort = settings.NATURAL_SORT
        if recursive is None:
            recursive = settings.RECURSIVE

        self._paths: tuple[str, ...] = discover_files(
            root, patterns, natural_sort=natural_sort, recursive=recursive
        )
        self.root = os.path.abspath(os.fspath(root))
        self.patterns = normalize_patterns(patterns)
        self.natural_sort = natural_sort
        self.recursive = recursive
        self._loader: Loader = (
            loader if loader is not None else get_loader(settings.DEFAULT_FRAMEWORK)
        )
        self._position: int = 0
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def open(self) -> None:
        """Does nothing, the directory was enumerated at construction.

        The file list is never refreshed; create a new stream to pick up
        changes of the directory.
        """

    def close(self) -> None:
        """Rewinds the stream to the first file. The stream stays usable."""
        self._position = 0

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def read(self) -> tuple[Any, bool]:
        """Loads the file at the current position and advances by one.

        :return: Tuple of (item, True), or (None, False) if all files have
            been read
        """
        with self._lock:
            if self._position >= len(self._paths):
                return (None, False)
            path = self._paths[self._position]
            try:
                item = self._loader(path)
            except Exception as e:
                logger.debug(f"Loading {path} at index {self._position} failed: {e}")
                raise
            self._position += 1
        return (item, True)

    def seek(self, offset: int, origin: SeekOriginTypes = SeekOrigin.CURRENT) -> int:
        """Sets the position within the stream.

        :param offset: A file index offset relative to origin
        :param origin: The reference point, BEGIN, CURRENT or END
        :return: The new position, clamped into [0, length]
        """
        new_position = self._compute_seek(offset, origin)
        logger.debug(
            f"Seek({offset}, {SeekOrigin.parse(origin).name}): "
            f"{self._position} -> {new_position} of {len(self._paths)}"
        )
        self._position = new_position
        return new_position

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def length(self) -> int:
        """Number of files matching the search criteria."""
        return len(self._paths)

    @property
    def position(self) -> int:
        """Index of the file the next read loads."""
        return self._position

    @property
    def current_path(self) -> str | None:
        """Path of the file at the current position.

        None once the position equals the stream length.
        """
        position = self._position
        if position < len(self._paths):
            return self._paths[position]
        return None

    @property
    def paths(self) -> tuple[str, ...]:
        """All file paths in stream order."""
        return self._paths

    def path_at(self, index: int) -> str:
        """Returns the path of the file at the given index.

        :param index: Index in [0, length)
        :return: The absolute file path
        """
        if index < 0 or index >= len(self._paths):
            raise IndexError(f"Index {index} out of range")
        return self._paths[index]

    @property
    def loader(self) -> Loader:
        """The function used to load each file."""
        return self._loader

    def __repr__(self) -> str:
        return (
            f"ImageDirectoryStream(root={self.root!r}, patterns={list(self.patterns)}, "
            f"position={self._position}, length={len(self._paths)})"
        )
