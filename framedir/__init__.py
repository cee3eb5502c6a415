"""
framedir - Seekable streams of lazily decoded images from a directory
"""

from .definitions import ImsFramework, get_opencv
from .errors import FramedirError, DirectoryNotFoundError, ImageLoadError
from .image import Image, ImageSourceTypes
from .loaders import Loader, load_image, load_image_cv, get_loader
from .natural_sort import natural_sort_key, natural_sorted
from .enumeration import enumerate_files, discover_files
from .streams import (
    SeekableStream,
    SeekOrigin,
    clamp_position,
    ImageDirectoryStream,
)

__all__ = [
    # Images
    "Image",
    "ImageSourceTypes",
    # Framework definitions
    "ImsFramework",
    "get_opencv",
    # Errors
    "FramedirError",
    "DirectoryNotFoundError",
    "ImageLoadError",
    # Loaders
    "Loader",
    "load_image",
    "load_image_cv",
    "get_loader",
    # Enumeration
    "natural_sort_key",
    "natural_sorted",
    "enumerate_files",
    "discover_files",
    # Streams
    "SeekableStream",
    "SeekOrigin",
    "clamp_position",
    "ImageDirectoryStream",
]

__version__ = "0.1.0"
