import numpy as np
import pytest
from imgproc.errors import InvalidArgumentError
from imgproc.grayscale import convert_to_one_channel, grayscale
from imgproc.pixel_buffer import PixelBuffer

RED = (255, 0, 0)
BLUE = (0, 0, 255)

def _checkerboard(a, b, size=4, alpha=None):
    channels = 3 if alpha is None else 4
    img = np.zeros((size, size, channels), dtype=np.uint8)
    for r in range(size):
        for c in range(size):
            color = a if (r + c) % 2 == 0 else b
            img[r, c, :3] = color
            if alpha is not None:
                img[r, c, 3] = alpha
    return img

def _expected(a_luma, b_luma, size=4):
    return np.array(
        [[a_luma if (r + c) % 2 == 0 else b_luma for c in range(size)] for r in range(size)],
        dtype=np.uint8,
    )

def test_checkerboard_luma_exact():
    # 0.299*255 = 76.245 -> 76 ; 0.114*255 = 29.07 -> 29
    buf = PixelBuffer.from_array(_checkerboard(RED, BLUE))
    grayscale(buf)
    assert buf.channels == 1
    assert np.array_equal(buf.to_array(), _expected(76, 29))

def test_checkerboard_luma_mixed_colors():
    # 0.299*200 + 0.587*100 + 0.114*50 = 124.2 ; 0.299*10 + 0.587*20 + 0.114*30 = 18.15
    buf = PixelBuffer.from_array(_checkerboard((200, 100, 50), (10, 20, 30)))
    grayscale(buf)
    assert np.array_equal(buf.to_array(), _expected(124, 18))

def test_alpha_is_ignored():
    opaque = PixelBuffer.from_array(_checkerboard(RED, BLUE, alpha=255))
    clear = PixelBuffer.from_array(_checkerboard(RED, BLUE, alpha=0))
    grayscale(opaque)
    grayscale(clear)
    assert np.array_equal(opaque.data, clear.data)
    assert np.array_equal(opaque.to_array(), _expected(76, 29))

def test_white_and_black_stay_extreme():
    img = np.zeros((1, 2, 3), dtype=np.uint8)
    img[0, 1] = 255
    buf = PixelBuffer.from_array(img)
    grayscale(buf)
    assert buf.data.tolist() == [0, 255]

def test_single_channel_is_copied_verbatim():
    data = np.arange(6, dtype=np.uint8)
    out = convert_to_one_channel(data, 3, 2, 1)
    assert np.array_equal(out, data)
    assert out is not data

def test_unsupported_channel_count():
    with pytest.raises(InvalidArgumentError):
        convert_to_one_channel(np.zeros(8, dtype=np.uint8), 2, 2, 2)

def test_grayscale_rejects_absent_buffer():
    with pytest.raises(InvalidArgumentError):
        grayscale(None)
