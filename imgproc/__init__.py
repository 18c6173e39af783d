"""
Spatial image filters over a flat uint8 pixel buffer.
Exposes the four filter operations and the data model.
"""
from .pixel_buffer import PixelBuffer
from .errors import ImageProcError, InvalidArgumentError, OutOfMemoryError
from .convolution import gaussian_blur
from .sobel import sobel_edges
from .median import median_filter
from .grayscale import grayscale

__all__ = [
    "PixelBuffer",
    "ImageProcError",
    "InvalidArgumentError",
    "OutOfMemoryError",
    "gaussian_blur",
    "sobel_edges",
    "median_filter",
    "grayscale",
]
