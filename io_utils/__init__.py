# io/__init__.py
"""
I/O helpers package for the imgproc filters.
"""
from .errors import ImageIOError, DecodeError, EncodeError, UnsupportedFormatError
from .image_handler import read_image, save_image, detect_format
from .file_utils import default_output_path, make_result_filename, save_parameters_txt

__all__ = [
    "ImageIOError",
    "DecodeError",
    "EncodeError",
    "UnsupportedFormatError",
    "read_image",
    "save_image",
    "detect_format",
    "default_output_path",
    "make_result_filename",
    "save_parameters_txt",
]
