"""
Loader functions turning a file path into a decoded item.

A loader is any callable taking a path string and returning the decoded
item. Directory streams call it lazily, once per read.
"""

from __future__ import annotations

from typing import Any, Callable, Literal

from .definitions import ImsFramework
from .image import Image

Loader = Callable[[str], Any]
"Signature of a loader: path -> decoded item"


def load_image(path: str) -> Image:
    """
    Decodes an image file with Pillow.

    :param path: The file's path
    :return: The decoded image, owned by the caller
    :raises ImageLoadError: If the file can not be read or decoded
    """
    return Image.from_file(path, framework=ImsFramework.PIL)


def load_image_cv(path: str) -> Image:
    """
    Decodes an image file with OpenCV, keeping bit depth and alpha channel.

    :param path: The file's path
    :return: The decoded image (BGR / BGRA channel order)
    :raises ImageLoadError: If the file can not be decoded
    """
    return Image.from_file(path, framework=ImsFramework.CV)


_LOADERS: dict[ImsFramework, Loader] = {
    ImsFramework.PIL: load_image,
    ImsFramework.CV: load_image_cv,
}


def get_loader(framework: ImsFramework | Literal["PIL", "CV"]) -> Loader:
    """
    Returns the default loader for the given decoding framework.

    :param framework: PIL or CV
    :return: The loader function
    """
    framework = ImsFramework(framework)
    if framework not in _LOADERS:
        raise ValueError(f"No loader available for framework {framework.value}")
    return _LOADERS[framework]
