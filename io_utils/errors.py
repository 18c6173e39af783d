# io/errors.py
"""Errors raised while decoding or encoding image files."""


class ImageIOError(Exception):
    """Base exception for image file I/O."""


class DecodeError(ImageIOError):
    """The file exists but could not be decoded."""


class EncodeError(ImageIOError):
    """Writing the encoded image failed; the partial file has been removed."""


class UnsupportedFormatError(ImageIOError):
    """Unknown file format or an unsupported pixel layout."""
