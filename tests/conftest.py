"""
Pytest fixtures for framedir tests
"""

from pathlib import Path

import numpy as np
import PIL.Image
import pytest


def _write_image(path: Path, value: int, size: tuple[int, int] = (4, 3), mode: str = "L") -> Path:
    """
    Writes a small uniformly colored image whose pixels encode ``value``.

    :param path: Target file, the extension selects the format
    :param value: The pixel value (0-255)
    :param size: Width and height
    :param mode: The PIL mode, e.g. "L", "RGB" or "RGBA"
    :return: The path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    channels = {"L": 1, "RGB": 3, "RGBA": 4}[mode]
    shape = (size[1], size[0]) if channels == 1 else (size[1], size[0], channels)
    pixels = np.full(shape, value, dtype=np.uint8)
    PIL.Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def write_image():
    """
    Returns the helper writing small test images.
    """
    return _write_image


@pytest.fixture
def frames_dir(tmp_path) -> Path:
    """
    A flat directory with img1.png, img2.png and img10.png (pixel value =
    number in the name) plus a text file which must never be streamed.
    """
    root = tmp_path / "frames"
    for number in (10, 2, 1):
        _write_image(root / f"img{number}.png", number)
    (root / "notes.txt").write_text("not an image")
    return root


@pytest.fixture
def nested_dir(tmp_path) -> Path:
    """
    A directory tree with images on the top level and in nested folders.
    """
    root = tmp_path / "nested"
    _write_image(root / "a1.png", 1)
    _write_image(root / "a3.jpg", 3, mode="RGB")
    _write_image(root / "sub" / "a2.png", 2)
    _write_image(root / "sub" / "deeper" / "a4.png", 4)
    return root
