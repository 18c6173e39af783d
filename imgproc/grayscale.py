"""
imgproc/grayscale.py

Luma reduction: gray = 0.299*R + 0.587*G + 0.114*B, alpha ignored.
Used by the grayscale tool and as the first stage of Sobel edge detection.
"""

import logging
import numpy as np

from .errors import InvalidArgumentError, OutOfMemoryError
from .pixel_buffer import PixelBuffer, allocate, require_buffer, to_uchar

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def convert_to_one_channel(data: np.ndarray, width: int, height: int, channels: int) -> np.ndarray:
    """
    Return a new flat uint8 array of width*height luma values.
    1 channel -> verbatim copy; 3 or 4 channels -> luma of R, G, B.
    """
    num_pixels = width * height
    out = allocate(num_pixels, "the grayscale image")
    if channels == 1:
        out[:] = data[:num_pixels]
        return out
    if channels not in (3, 4):
        raise InvalidArgumentError(f"Grayscale needs 1, 3 or 4 channels, got {channels}.")

    px = data.reshape(num_pixels, channels)
    try:
        gray = (
            LUMA_WEIGHTS[0] * px[:, 0].astype(np.float64)
            + LUMA_WEIGHTS[1] * px[:, 1]
            + LUMA_WEIGHTS[2] * px[:, 2]
        )
    except MemoryError as exc:
        raise OutOfMemoryError("Couldn't allocate memory for the grayscale image.") from exc
    out[:] = to_uchar(gray)
    return out


def grayscale(buffer: PixelBuffer) -> None:
    """Reduce `buffer` to one luma channel, swapping its storage."""
    buffer = require_buffer(buffer)
    gray = convert_to_one_channel(buffer.data, buffer.width, buffer.height, buffer.channels)
    logger.debug("grayscale %d -> 1 channel(s)", buffer.channels)
    buffer.replace(gray, 1)
