# io/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> PixelBuffer with 1 (L), 3 (RGB) or 4 (RGBA) channels
- save_image(path, buffer, fmt=None) -> writes image, returns path
- detect_format(path) -> "png" | "jpeg" | "avif" | None
"""

import logging
import os
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError
import pillow_avif  # noqa: F401  registers the AVIF plugin with Pillow

from imgproc.config import JPEG_QUALITY
from imgproc.pixel_buffer import PixelBuffer
from .errors import DecodeError, EncodeError, UnsupportedFormatError

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".avif": "avif",
}
_PIL_FORMATS = {"png": "PNG", "jpeg": "JPEG", "avif": "AVIF"}

# Pillow mode -> mode handed to the filters
_MODE_MAP = {
    "L": "L",
    "1": "L",
    "RGB": "RGB",
    "RGBA": "RGBA",
    "LA": "RGBA",
    "CMYK": "RGB",
    "YCbCr": "RGB",
}
_CHANNELS = {"L": 1, "RGB": 3, "RGBA": 4}


def detect_format(path: str) -> Optional[str]:
    """Format name from the file extension, None when not recognised."""
    ext = os.path.splitext(str(path))[1].lower()
    return _EXTENSIONS.get(ext)


def _target_mode(img: Image.Image) -> str:
    mode = img.mode
    if mode == "P":
        return "RGBA" if "transparency" in img.info else "RGB"
    if mode in _MODE_MAP:
        return _MODE_MAP[mode]
    raise UnsupportedFormatError(f"Unsupported pixel mode '{mode}'.")


def read_image(path: str) -> PixelBuffer:
    """
    Decode `path` into a PixelBuffer.
    - Missing file -> FileNotFoundError
    - Undecodable data -> DecodeError
    - Modes other than gray/RGB/RGBA (after palette/LA/CMYK conversion) -> UnsupportedFormatError
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    try:
        with Image.open(path) as img:
            mode = _target_mode(img)
            if img.mode != mode:
                img = img.convert(mode)
            arr = np.array(img, dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Couldn't decode '{path}'.") from exc
    except OSError as exc:
        raise DecodeError(f"Couldn't read '{path}': {exc}") from exc

    height, width = arr.shape[:2]
    buffer = PixelBuffer(width, height, _CHANNELS[mode], arr.reshape(-1))
    logger.debug("read %s: %dx%d, %d channel(s)", path, width, height, buffer.channels)
    return buffer


def _to_pil(buffer: PixelBuffer, fmt: str) -> Image.Image:
    # HxW -> L, HxWx3 -> RGB, HxWx4 -> RGBA
    img = Image.fromarray(buffer.to_array())
    # JPEG has no alpha channel
    if fmt == "jpeg" and buffer.channels == 4:
        img = img.convert("RGB")
    return img


def save_image(path: str, buffer: PixelBuffer, fmt: Optional[str] = None) -> str:
    """
    Encode `buffer` to `path`. The format comes from `fmt` or the file extension.
    On a write failure the partial file is removed and EncodeError is raised.
    """
    fmt = (fmt or detect_format(path) or "").lower()
    if fmt == "jpg":
        fmt = "jpeg"
    if fmt not in _PIL_FORMATS:
        raise UnsupportedFormatError(f"Can't encode '{path}': unknown format '{fmt}'.")

    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)

    img = _to_pil(buffer, fmt)
    kwargs = {"quality": JPEG_QUALITY} if fmt == "jpeg" else {}
    try:
        img.save(path, format=_PIL_FORMATS[fmt], **kwargs)
    except (OSError, ValueError) as exc:
        if os.path.exists(path):
            os.remove(path)
        raise EncodeError(f"Couldn't write '{path}': {exc}") from exc

    logger.debug("saved %s as %s", path, fmt)
    return path
