"""framedir streams package.

This package provides stream classes for finite, seekable item sources:

- SeekableStream: Abstract base class with read/seek/length/position
- ImageDirectoryStream: The files of a directory as lazily decoded images

Example:
    from framedir.streams import ImageDirectoryStream, SeekOrigin

    stream = ImageDirectoryStream('frames/', '*.png')
    image, ok = stream.read()
    stream.seek(10, SeekOrigin.BEGIN)
    print(stream.position, stream.current_path)
"""

from .base import SeekableStream, SeekOrigin, SeekOriginTypes, clamp_position
from .directory import ImageDirectoryStream

__all__ = [
    "SeekableStream",
    "SeekOrigin",
    "SeekOriginTypes",
    "clamp_position",
    "ImageDirectoryStream",
]
