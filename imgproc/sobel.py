"""
imgproc/sobel.py

Sobel gradient magnitude with the 3x3 operator split into 1-D passes:
  derivative [-1, 0, 1]  and  smoothing [1, 2, 1]

Sweep (one input row at a time):
  - dx[i] = derivative along columns of row i      (columns clamped)
  - dy[i] = derivative along rows at row i         (rows clamped)
  both kept in 3-row cyclic buffers at slot i % 3.
  - output row c:  Gx = dx[c-1] + 2*dx[c] + dx[c+1]        (row refs clamped)
                   Gy = dy[c][j-1] + 2*dy[c][j] + dy[c][j+1] (columns clamped)
                   |G| = sqrt(Gx^2 + Gy^2), rounded and saturated.
Row c is emitted once row c+1 is in the buffer, so each derivative row is computed once.
"""

import logging
import numpy as np

from .errors import OutOfMemoryError
from .grayscale import convert_to_one_channel
from .kernels import SOBEL_DERIVATIVE, SOBEL_SMOOTHING
from .pixel_buffer import PixelBuffer, allocate, clamp_indices, require_buffer, to_uchar

logger = logging.getLogger(__name__)


def compute_sobel_magnitude(gray: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Gradient magnitude map of a single-channel image.

    Parameters
    ----------
    gray : np.ndarray
        Flat (or HxW) uint8 luma values, width*height elements.

    Returns
    -------
    np.ndarray
        Flat uint8 array of width*height magnitudes.
    """
    img = np.asarray(gray).reshape(height, width)
    out = allocate((height, width), "the gradient map", zeroed=True)
    dx_buf = allocate((3, width), "the x-derivative rows", dtype=np.float64)
    dy_buf = allocate((3, width), "the y-derivative rows", dtype=np.float64)

    left = clamp_indices(width, -1)
    right = clamp_indices(width, 1)
    d_lo, d_mid, d_hi = SOBEL_DERIVATIVE
    s_lo, s_mid, s_hi = SOBEL_SMOOTHING

    def _clamp_row(r: int) -> int:
        return min(max(r, 0), height - 1)

    def _emit(c: int):
        gx = (
            s_lo * dx_buf[_clamp_row(c - 1) % 3]
            + s_mid * dx_buf[c % 3]
            + s_hi * dx_buf[_clamp_row(c + 1) % 3]
        )
        dy = dy_buf[c % 3]
        gy = s_lo * dy[left] + s_mid * dy + s_hi * dy[right]
        out[c] = to_uchar(np.sqrt(gx * gx + gy * gy))

    for i in range(height):
        row = img[i].astype(np.float64)
        slot = i % 3
        dx_buf[slot] = d_lo * row[left] + d_mid * row + d_hi * row[right]
        above = img[_clamp_row(i - 1)].astype(np.float64)
        below = img[_clamp_row(i + 1)].astype(np.float64)
        dy_buf[slot] = d_lo * above + d_mid * row + d_hi * below
        if i >= 1:
            _emit(i - 1)
    # last row: its lower neighbour clamps onto itself
    _emit(height - 1)

    return out.reshape(-1)


def sobel_edges(buffer: PixelBuffer) -> None:
    """Replace `buffer` with its single-channel Sobel gradient magnitude."""
    buffer = require_buffer(buffer)
    gray = convert_to_one_channel(buffer.data, buffer.width, buffer.height, buffer.channels)
    logger.debug("sobel on %dx%d", buffer.width, buffer.height)
    try:
        gradient = compute_sobel_magnitude(gray, buffer.width, buffer.height)
    except OutOfMemoryError:
        raise
    except MemoryError as exc:
        raise OutOfMemoryError("Couldn't allocate memory during edge detection.") from exc
    buffer.replace(gradient, 1)
