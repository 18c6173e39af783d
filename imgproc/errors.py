"""Exceptions raised by the filter engine."""


class ImageProcError(Exception):
    """Base exception for filter failures."""


class InvalidArgumentError(ImageProcError, ValueError):
    """Absent or empty buffer, or a parameter outside its domain."""


class OutOfMemoryError(ImageProcError, MemoryError):
    """A kernel, scratch buffer or padded canvas could not be allocated."""
