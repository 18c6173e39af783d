import numpy as np
import pytest
from imgproc.errors import InvalidArgumentError
from imgproc.kernels import SOBEL_DERIVATIVE, SOBEL_SMOOTHING, generate_gaussian_kernel

@pytest.mark.parametrize("sigma", [0.01, 0.5, 1.0, 2.3, 7.0])
def test_kernel_is_normalized(sigma):
    k = generate_gaussian_kernel(sigma)
    assert abs(float(k.values.sum()) - 1.0) < 1e-5

def test_kernel_radius_is_ceil_three_sigma():
    assert generate_gaussian_kernel(1.0).radius == 3
    assert generate_gaussian_kernel(0.5).radius == 2
    assert generate_gaussian_kernel(0.01).radius == 1
    assert generate_gaussian_kernel(2.0).size == 13

def test_kernel_symmetric_with_peak_at_center():
    k = generate_gaussian_kernel(1.5)
    assert np.allclose(k.values, k.values[::-1])
    assert int(np.argmax(k.values)) == k.radius
    assert k.weight(-1) == k.weight(1)

def test_kernel_weights_follow_gaussian_ratio():
    k = generate_gaussian_kernel(1.0)
    # G(1)/G(0) = exp(-1/2)
    assert np.isclose(k.weight(1) / k.weight(0), np.exp(-0.5))

def test_kernel_rejects_non_positive_sigma():
    with pytest.raises(InvalidArgumentError):
        generate_gaussian_kernel(0.0)

def test_sobel_kernels():
    assert SOBEL_DERIVATIVE.tolist() == [-1.0, 0.0, 1.0]
    assert SOBEL_SMOOTHING.tolist() == [1.0, 2.0, 1.0]
