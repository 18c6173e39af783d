"""
imgproc/pixel_buffer.py

Shared data model and pixel helpers used by every filter.

A PixelBuffer owns a flat, row-major, channel-interleaved uint8 array:
  R,G,B,R,G,B,...  (row 0), then row 1, ...
Filters either mutate `data` in place or swap it (together with `channels`)
through PixelBuffer.replace().

Helpers:
- to_uchar(values): round half away from zero, saturate to [0, 255], cast to uint8
- clamp_indices(n, offset): edge-replicate index map for a shifted axis
- allocate(shape, what, ...): numpy allocation that raises OutOfMemoryError
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from .errors import InvalidArgumentError, OutOfMemoryError

SUPPORTED_CHANNELS = (1, 3, 4)


def to_uchar(values) -> np.ndarray:
    """
    Saturating round-to-nearest into uint8.
    Values are clipped to [0, 255] first, so floor(x + 0.5) rounds ties away from zero.
    """
    v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 255.0)
    return np.floor(v + 0.5).astype(np.uint8)


def clamp_indices(n: int, offset: int) -> np.ndarray:
    """Indices i + offset for i in [0, n), pinned to [0, n-1] (clamp-to-edge)."""
    return np.clip(np.arange(n) + offset, 0, n - 1)


def allocate(shape, what: str, dtype=np.uint8, zeroed: bool = False) -> np.ndarray:
    """
    Allocate a scratch array. MemoryError is reported as OutOfMemoryError naming `what`.
    """
    try:
        if zeroed:
            return np.zeros(shape, dtype=dtype)
        return np.empty(shape, dtype=dtype)
    except MemoryError as exc:
        raise OutOfMemoryError(f"Couldn't allocate memory for {what}.") from exc


@dataclass(eq=False)
class PixelBuffer:
    width: int
    height: int
    channels: int
    data: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgumentError(f"Image dimensions must be positive, got {self.width}x{self.height}.")
        if self.channels not in SUPPORTED_CHANNELS:
            raise InvalidArgumentError(f"Unsupported channel count {self.channels}; expected 1, 3 or 4.")
        data = np.asarray(self.data, dtype=np.uint8)
        if data.size != self.width * self.height * self.channels:
            raise InvalidArgumentError(
                f"Buffer holds {data.size} bytes, expected {self.width * self.height * self.channels}."
            )
        data = np.ascontiguousarray(data).reshape(-1)
        if not data.flags.writeable:
            data = data.copy()
        self.data = data

    # --- constructors / conversions ---
    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W) or (H, W, C) array."""
        arr = np.asarray(arr)
        if arr.ndim == 2:
            height, width = arr.shape
            channels = 1
        elif arr.ndim == 3:
            height, width, channels = arr.shape
        else:
            raise InvalidArgumentError("from_array expects an HxW or HxWxC array.")
        return cls(width, height, channels, np.array(arr, dtype=np.uint8).reshape(-1))

    def to_array(self) -> np.ndarray:
        """Copy out as (H, W) for one channel, (H, W, C) otherwise."""
        if self.channels == 1:
            return self.data.reshape(self.height, self.width).copy()
        return self.pixels().copy()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.channels, self.data.copy())

    # --- indexing ---
    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.height, self.width, self.channels)

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    def pixels(self) -> np.ndarray:
        """(height, width, channels) view sharing storage with `data`."""
        return self.data.reshape(self.height, self.width, self.channels)

    def offset(self, row: int, col: int, channel: int = 0) -> int:
        """The one place (row, col, channel) turns into a linear offset."""
        if not (0 <= row < self.height and 0 <= col < self.width and 0 <= channel < self.channels):
            raise IndexError(f"Pixel ({row}, {col}, {channel}) outside {self.height}x{self.width}x{self.channels}.")
        return (row * self.width + col) * self.channels + channel

    def get(self, row: int, col: int, channel: int = 0) -> int:
        return int(self.data[self.offset(row, col, channel)])

    def set(self, row: int, col: int, channel: int, value: int):
        self.data[self.offset(row, col, channel)] = to_uchar(value)

    def replace(self, data: np.ndarray, channels: int):
        """Swap storage and channel count together."""
        data = np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)
        if channels not in SUPPORTED_CHANNELS or data.size != self.num_pixels * channels:
            raise InvalidArgumentError("Replacement data does not match the image geometry.")
        self.data, self.channels = data, channels


def require_buffer(buffer) -> PixelBuffer:
    """Reject absent or empty buffers."""
    if buffer is None or getattr(buffer, "data", None) is None or buffer.data.size == 0:
        raise InvalidArgumentError("Image buffer is absent or empty.")
    return buffer
