"""
Framework definitions and lazy access to optional decoding backends.
"""

from __future__ import annotations

from enum import Enum

# Cached OpenCV module, resolved on first use
_cv2_module = None


class ImsFramework(Enum):
    """
    Defines the framework holding an image's decoded pixel data
    """

    PIL = "PIL"
    "Decoded with Pillow, data kept as PIL.Image.Image"
    RAW = "RAW"
    "Data kept as plain numpy array in RGB(A) channel order"
    CV = "CV"
    "Decoded with OpenCV, data kept as numpy array in BGR(A) channel order"


def get_opencv():
    """
    Returns the OpenCV module if it is installed.

    :return: The cv2 module or None if OpenCV is not available
    """
    global _cv2_module
    if _cv2_module is not None:
        return _cv2_module
    try:
        import cv2
    except ImportError:
        return None
    _cv2_module = cv2
    return cv2
