"""
imgproc/convolution.py

Separable convolution and the Gaussian blur built on it.

A 2-D Gaussian is the outer product of two 1-D Gaussians, so the blur runs as
  1) horizontal pass  (image -> temporary buffer)
  2) vertical pass    (temporary buffer -> image)
with O(radius) work per pixel instead of O(radius^2). The vertical pass must only
read from the temporary buffer, never from a plane the same pass is writing.

Borders are clamp-to-edge on both axes. Every pass rounds and saturates to uint8
before storing, the temporary buffer included.
"""

import logging
import math
import numpy as np

from .config import BLUR_IDENTITY_SIGMA
from .errors import InvalidArgumentError, OutOfMemoryError
from .kernels import Kernel, generate_gaussian_kernel
from .parallel import for_each_channel
from .pixel_buffer import PixelBuffer, allocate, clamp_indices, require_buffer, to_uchar

logger = logging.getLogger(__name__)


def horizontal_convolution(plane_in: np.ndarray, plane_out: np.ndarray, kernel: Kernel, acc: np.ndarray):
    """
    Convolve every row of a 2D plane with `kernel`, clamping columns to [0, width-1].
    acc is a float64 scratch plane of the same shape.
    """
    width = plane_in.shape[1]
    acc.fill(0.0)
    for offset in kernel.offsets():
        cols = clamp_indices(width, offset)
        acc += kernel.weight(offset) * plane_in[:, cols]
    plane_out[...] = to_uchar(acc)


def vertical_convolution(plane_in: np.ndarray, plane_out: np.ndarray, kernel: Kernel, acc: np.ndarray):
    """Convolve every column of a 2D plane with `kernel`, clamping rows to [0, height-1]."""
    height = plane_in.shape[0]
    acc.fill(0.0)
    for offset in kernel.offsets():
        rows = clamp_indices(height, offset)
        acc += kernel.weight(offset) * plane_in[rows, :]
    plane_out[...] = to_uchar(acc)


def gaussian_blur(buffer: PixelBuffer, sigma: float, workers: int = 1) -> None:
    """
    Blur `buffer` in place with a Gaussian of standard deviation `sigma`.

    - sigma < 0, nan, inf or missing -> InvalidArgumentError
    - sigma <= 1e-6                  -> no-op
    - allocation failure             -> OutOfMemoryError, buffer left untouched

    Every channel (alpha included) is filtered independently; with workers > 1
    channels run on separate threads.
    """
    buffer = require_buffer(buffer)
    if sigma is None or not math.isfinite(float(sigma)):
        raise InvalidArgumentError(f"Sigma must be a finite number, got {sigma}.")
    sigma = float(sigma)
    if sigma < 0.0:
        raise InvalidArgumentError("Sigma can't be negative.")
    if sigma <= BLUR_IDENTITY_SIGMA:
        logger.debug("sigma %g below threshold, blur skipped", sigma)
        return

    kernel = generate_gaussian_kernel(sigma)
    height, width, channels = buffer.shape
    tmp = allocate(buffer.shape, "the convolution buffer")
    # staged result; committed only after every channel is done
    out = allocate(buffer.shape, "the blurred image")
    src = buffer.pixels()

    def _blur_channel(c: int):
        acc = allocate((height, width), "the convolution accumulator", dtype=np.float64)
        horizontal_convolution(src[:, :, c], tmp[:, :, c], kernel, acc)
        vertical_convolution(tmp[:, :, c], out[:, :, c], kernel, acc)

    logger.debug("gaussian blur sigma=%g radius=%d on %dx%dx%d", sigma, kernel.radius, width, height, channels)
    try:
        for_each_channel(_blur_channel, channels, workers)
    except OutOfMemoryError:
        raise
    except MemoryError as exc:
        raise OutOfMemoryError("Couldn't allocate memory during the blur.") from exc

    np.copyto(src, out)
