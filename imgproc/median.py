"""
imgproc/median.py

Median filter with a sliding histogram.

Per channel:
  1) pad the image by `radius` pixels of edge replication (canvas (H+2r) x (W+2r))
  2) for every output row, count the (2r+1)x(2r+1) window at column 0 into a 256-bucket histogram
  3) emit the lower median: first bucket whose cumulative count exceeds area // 2
  4) slide right: remove the departing column, add the entering column (2r+1 samples each)
  5) repeat across the row

The histograms of all output rows of a channel sit side by side in a (height, 256)
array and slide together; each row keeps its own counts.
"""

import logging
import math
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import InvalidArgumentError, OutOfMemoryError
from .parallel import for_each_channel
from .pixel_buffer import PixelBuffer, allocate, require_buffer

logger = logging.getLogger(__name__)

HISTOGRAM_BINS = 256


def pad_edges(pixels: np.ndarray, radius: int) -> np.ndarray:
    """Copy an (H, W, C) image onto a canvas with `radius` replicated pixels on every side."""
    height, width, channels = pixels.shape
    canvas = allocate((height + 2 * radius, width + 2 * radius, channels), "the padded canvas")
    rows = np.clip(np.arange(height + 2 * radius) - radius, 0, height - 1)
    cols = np.clip(np.arange(width + 2 * radius) - radius, 0, width - 1)
    canvas[...] = pixels[rows[:, None], cols[None, :]]
    return canvas


def window_median(hist: np.ndarray, area: int) -> np.ndarray:
    """Lower median of each histogram row (hist is (rows, 256))."""
    cumulative = np.cumsum(hist, axis=1)
    return np.argmax(cumulative > area // 2, axis=1).astype(np.uint8)


def _median_plane(canvas_plane: np.ndarray, out_plane: np.ndarray, radius: int):
    height, width = out_plane.shape
    win = 2 * radius + 1
    area = win * win

    # columns[y, x] holds canvas rows y..y+2r at canvas column x
    columns = sliding_window_view(canvas_plane, win, axis=0)
    hist = allocate((height, HISTOGRAM_BINS), "the window histograms", dtype=np.int64, zeroed=True)
    row_ids = np.broadcast_to(np.arange(height)[:, None], (height, win))

    for x in range(win):
        np.add.at(hist, (row_ids, columns[:, x, :]), 1)

    for x in range(width):
        out_plane[:, x] = window_median(hist, area)
        if x + 1 < width:
            np.add.at(hist, (row_ids, columns[:, x, :]), -1)
            np.add.at(hist, (row_ids, columns[:, x + win, :]), 1)


def median_filter(buffer: PixelBuffer, radius: int, workers: int = 1) -> None:
    """
    Replace every sample with the median of its (2r+1)x(2r+1) neighbourhood, per channel.

    - radius < 0, nan or inf -> InvalidArgumentError
    - radius == 0            -> no-op
    - allocation failure     -> OutOfMemoryError, buffer left untouched
    """
    buffer = require_buffer(buffer)
    if radius is None or not math.isfinite(float(radius)):
        raise InvalidArgumentError(f"Median radius must be a finite number, got {radius}.")
    if radius < 0:
        raise InvalidArgumentError("Median radius can't be negative.")
    radius = int(radius)
    if radius == 0:
        return

    logger.debug("making a padded copy (radius=%d)", radius)
    src = buffer.pixels()
    canvas = pad_edges(src, radius)
    out = allocate(buffer.shape, "the filtered image")

    def _median_channel(c: int):
        _median_plane(canvas[:, :, c], out[:, :, c], radius)

    logger.debug("applying the median filter")
    try:
        for_each_channel(_median_channel, buffer.channels, workers)
    except OutOfMemoryError:
        raise
    except MemoryError as exc:
        raise OutOfMemoryError("Couldn't allocate memory during the median filter.") from exc

    np.copyto(src, out)
    logger.debug("median filter finished")
