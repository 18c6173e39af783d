"""
imgproc/kernels.py

1-D kernels used by the filters.

Functions:
- generate_gaussian_kernel(sigma) -> Kernel  (normalized, symmetric, radius = ceil(3*sigma))

Constants:
- SOBEL_DERIVATIVE = [-1, 0, 1]
- SOBEL_SMOOTHING  = [1, 2, 1]
"""

import math
from dataclasses import dataclass
import numpy as np

from .errors import InvalidArgumentError, OutOfMemoryError

SOBEL_DERIVATIVE = np.array([-1.0, 0.0, 1.0])
SOBEL_SMOOTHING = np.array([1.0, 2.0, 1.0])


@dataclass(frozen=True, eq=False)
class Kernel:
    """Symmetric 1-D kernel; values[offset + radius] is the weight at offset."""
    radius: int
    values: np.ndarray

    @property
    def size(self) -> int:
        return 2 * self.radius + 1

    def weight(self, offset: int) -> float:
        return float(self.values[offset + self.radius])

    def offsets(self) -> range:
        return range(-self.radius, self.radius + 1)


def generate_gaussian_kernel(sigma: float) -> Kernel:
    """
    Gaussian kernel G(i) = exp(-i^2 / (2*sigma^2)) for i in [-radius, radius],
    divided by its sum so the weights add up to 1.

    Parameters
    ----------
    sigma : float
        Standard deviation, > 0. Blur callers treat sigma <= 1e-6 as identity and never get here.

    Returns
    -------
    Kernel
        radius = ceil(3*sigma), 2*radius+1 float64 weights.
    """
    sigma = float(sigma)
    if sigma <= 0.0:
        raise InvalidArgumentError("Gaussian sigma must be positive.")
    radius = int(math.ceil(3.0 * sigma))
    try:
        i = np.arange(-radius, radius + 1, dtype=np.float64)
        values = np.exp(-(i * i) / (2.0 * sigma * sigma))
    except MemoryError as exc:
        raise OutOfMemoryError("Couldn't allocate memory for the Gaussian kernel.") from exc
    values /= values.sum()
    values.setflags(write=False)
    return Kernel(radius=radius, values=values)
