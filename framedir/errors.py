"""Exceptions raised by framedir."""

from __future__ import annotations


class FramedirError(Exception):
    """Base class of all errors raised by this package."""


class DirectoryNotFoundError(FramedirError, FileNotFoundError):
    """The root directory of a directory stream does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Dir: {path} cannot be found!")
        self.path = path


class ImageLoadError(FramedirError, ValueError):
    """An image file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Image {path} could not be loaded: {reason}")
        self.path = path
        self.reason = reason
