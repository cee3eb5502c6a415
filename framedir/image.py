"""
Implements the class :class:`.Image`, the decoded in-memory image returned
by the default loaders of directory streams.

An image owns its decoded pixel buffer. The buffer is released exactly once:
when :meth:`Image.close` is called, when a ``with`` block using the image
ends or, at the latest, when the image is garbage collected.
"""

from __future__ import annotations

import io
import os
import weakref
from typing import Callable, Literal, Union

import numpy as np
import PIL.Image

from .definitions import ImsFramework, get_opencv
from .errors import ImageLoadError

ImageSourceTypes = Union[np.ndarray, PIL.Image.Image]
"The in-memory sources an Image can be created from"

_PIL_MODE_TO_FORMAT = {"L": "GRAY", "RGB": "RGB", "RGBA": "RGBA"}


def _release_buffers(buffers: dict, release: Callable[[], None] | None) -> None:
    """
    Frees the decoded data of an image.

    Called at most once per image via its finalizer, so it must not hold a
    reference to the image itself.

    :param buffers: The image's buffer storage
    :param release: Optional additional release action
    """
    handle = buffers.pop("pil", None)
    buffers.pop("pixels", None)
    if handle is not None:
        handle.close()
    if release is not None:
        release()


class Image:
    """
    A decoded image, either stored as PILLOW image or as numpy array.

    Images read from a directory stream are owned by the caller. Use them as
    context manager or call :meth:`close` to free the decoded data early::

        with stream.grab() as image:
            pixels = image.get_pixels()
    """

    def __init__(
        self,
        source: ImageSourceTypes,
        framework: ImsFramework | Literal["PIL", "RAW", "CV"] | None = None,
        pixel_format: str | None = None,
        release: Callable[[], None] | None = None,
        path: str | None = None,
    ):
        """
        :param source: The decoded data, a PIL image or a numpy array
        :param framework: The framework holding the data. By default PIL for
            PIL images and RAW (RGB order) for numpy arrays.
        :param pixel_format: The pixel format of numpy data, e.g. "RGB",
            "BGR" or "GRAY". Detected from the array's shape if omitted.
        :param release: Optional action run once when the image is released,
            e.g. to free a native buffer the data was decoded into
        :param path: The file the image was loaded from (if any)
        """
        if framework is None:
            framework = (
                ImsFramework.PIL
                if isinstance(source, PIL.Image.Image)
                else ImsFramework.RAW
            )
        self.framework = ImsFramework(framework)
        "The framework being used"
        self.path = path
        "The file the image was loaded from"
        self.width = 0
        "The image's width in pixels"
        self.height = 0
        "The image's height in pixels"
        self.pixel_format = pixel_format
        "The channel layout, e.g. RGB, RGBA, BGR or GRAY"
        self._buffers: dict = {}
        if self.framework == ImsFramework.PIL:
            self._init_as_pil(source)
        elif self.framework in (ImsFramework.RAW, ImsFramework.CV):
            self._init_as_array(source)
        else:
            raise NotImplementedError
        self._finalizer = weakref.finalize(self, _release_buffers, self._buffers, release)

    def _init_as_pil(self, source: PIL.Image.Image | np.ndarray):
        """
        Initializes the image as PIL image

        :param source: The data source
        """
        if isinstance(source, np.ndarray):
            if not source.dtype == np.uint8:
                raise ValueError("Unsupported array source")
            source = PIL.Image.fromarray(source)
        if not isinstance(source, PIL.Image.Image):
            raise NotImplementedError
        if source.mode == "P":
            if "transparency" in source.info:
                source = source.convert("RGBA")
            else:
                source = source.convert("RGB")
        self._buffers["pil"] = source
        self.width = source.width
        self.height = source.height
        self.pixel_format = _PIL_MODE_TO_FORMAT.get(source.mode, source.mode)

    def _init_as_array(self, source: np.ndarray):
        """
        Initializes the image from a numpy array. CV images are expected in
        OpenCV's BGR / BGRA channel order, RAW images in RGB / RGBA order.

        :param source: The data source
        """
        if not isinstance(source, np.ndarray):
            raise NotImplementedError
        if self.pixel_format is None:
            self.pixel_format = self.detect_format(
                source, is_cv2=self.framework == ImsFramework.CV
            )
        self._buffers["pixels"] = source
        self.height, self.width = source.shape[0:2]

    @staticmethod
    def detect_format(pixels: np.ndarray, is_cv2: bool = False) -> str:
        """
        Detects the pixel format of a numpy array by its shape

        :param pixels: The pixel data
        :param is_cv2: Defines if the data is in OpenCV's BGR(A) order
        :return: The pixel format
        """
        if pixels.ndim == 2 or (pixels.ndim == 3 and pixels.shape[2] == 1):
            return "GRAY"
        if pixels.ndim == 3 and pixels.shape[2] == 3:
            return "BGR" if is_cv2 else "RGB"
        if pixels.ndim == 3 and pixels.shape[2] == 4:
            return "BGRA" if is_cv2 else "RGBA"
        raise ValueError(f"Unsupported pixel data shape {pixels.shape}")

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike,
        framework: ImsFramework | Literal["PIL", "CV"] = ImsFramework.PIL,
    ) -> Image:
        """
        Loads and decodes an image file.

        :param path: The file's path
        :param framework: PIL to decode with Pillow, CV to decode with
            OpenCV (unchanged bit depth and channels, BGR order)
        :return: The decoded image
        :raises ImageLoadError: If the file can not be read or decoded
        """
        path = os.fspath(path)
        framework = ImsFramework(framework)
        if framework == ImsFramework.CV:
            return cls._load_cv2(path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ImageLoadError(path, str(e)) from e
        try:
            handle = PIL.Image.open(io.BytesIO(data))
            handle.load()
        except (
            PIL.UnidentifiedImageError,
            PIL.Image.DecompressionBombError,
            OSError,
            SyntaxError,
            EOFError,
            ValueError,
        ) as e:
            raise ImageLoadError(path, "Invalid or damaged image data") from e
        return cls(handle, framework=ImsFramework.PIL, path=path)

    @classmethod
    def _load_cv2(cls, path: str) -> Image:
        """
        Decodes an image file with OpenCV.

        :param path: The file's path
        :return: The decoded image
        """
        cv = get_opencv()
        if cv is None:
            raise RuntimeError("OpenCV (cv2) is required for the CV framework")
        pixels = cv.imread(path, cv.IMREAD_UNCHANGED)
        if pixels is None:
            raise ImageLoadError(path, "OpenCV could not decode the file")
        return cls(pixels, framework=ImsFramework.CV, path=path)

    # -------------------------------------------------------------------------
    # Resource handling
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Releases the decoded data. Calling close more than once is allowed.
        """
        self._finalizer()

    @property
    def closed(self) -> bool:
        """
        Returns if the image's data has been released
        """
        return not self._finalizer.alive

    def __enter__(self) -> Image:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self.closed:
            raise ValueError("Image has been released")

    # -------------------------------------------------------------------------
    # Data access
    # -------------------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        """
        Returns the image's size in pixels

        :return: The size as tuple (width, height)
        """
        return self.width, self.height

    def get_handle(self) -> np.ndarray | PIL.Image.Image:
        """
        Returns the low level data handle, for example a numpy array or
        a PIL handle.

        :return: The handle
        """
        self._ensure_open()
        if self.framework == ImsFramework.PIL:
            return self._buffers["pil"]
        return self._buffers["pixels"]

    @property
    def pixels(self) -> np.ndarray:
        """
        Returns the image's pixel data
        """
        return self.get_pixels()

    def get_pixels(self, desired_format: str | None = None) -> np.ndarray:
        """
        Returns the image's pixel data as :class:`np.ndarray`.

        :param desired_format: The desired channel layout, e.g. "RGB" or
            "BGR". By default the own format
        :return: The numpy array containing the pixels
        """
        handle = self.get_handle()
        pixel_data = np.array(handle) if isinstance(handle, PIL.Image.Image) else handle
        if desired_format is None or desired_format == self.pixel_format:
            return pixel_data
        source_format = self.pixel_format
        if source_format in ("RGBA", "BGRA") and desired_format in ("RGB", "BGR"):
            pixel_data = pixel_data[:, :, 0:3]
            source_format = source_format[0:3]
        if {source_format, desired_format} in ({"RGB", "BGR"}, {"RGBA", "BGRA"}):
            swapped = pixel_data.copy()
            swapped[:, :, 0:3] = pixel_data[:, :, 2::-1]
            return swapped
        if source_format == desired_format:
            return pixel_data
        raise ValueError(
            f"Conversion from {self.pixel_format} to {desired_format} is not supported"
        )

    def to_pil(self) -> PIL.Image.Image:
        """
        Converts the image to a PIL image object

        :return: The PIL image
        """
        handle = self.get_handle()
        if isinstance(handle, PIL.Image.Image):
            return handle
        if self.pixel_format in ("RGBA", "BGRA"):
            return PIL.Image.fromarray(self.get_pixels("RGBA"))
        if self.pixel_format in ("RGB", "BGR"):
            return PIL.Image.fromarray(self.get_pixels("RGB"))
        return PIL.Image.fromarray(self.get_pixels())

    def __str__(self):
        state = "released" if self.closed else self.framework.value
        return (
            f"Image ({self.width}x{self.height} {self.pixel_format}, {state}, "
            f"path={self.path})"
        )
