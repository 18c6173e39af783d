import os
import numpy as np
import pytest
from PIL import Image
from imgproc.grayscale import grayscale
from imgproc.pixel_buffer import PixelBuffer
from io_utils.errors import DecodeError, EncodeError, UnsupportedFormatError
from io_utils.file_utils import default_output_path, make_result_filename, save_parameters_txt
from io_utils.image_handler import detect_format, read_image, save_image

def test_detect_format():
    assert detect_format("a/b.PNG") == "png"
    assert detect_format("x.jpg") == "jpeg"
    assert detect_format("x.jpeg") == "jpeg"
    assert detect_format("x.avif") == "avif"
    assert detect_format("x.bmp") is None

def test_save_and_read_roundtrip_gray(tmp_path):
    arr = np.arange(100).reshape(10, 10).astype(np.uint8)
    p = tmp_path / "test.png"
    save_image(str(p), PixelBuffer.from_array(arr))
    buf = read_image(str(p))
    assert buf.channels == 1
    assert np.array_equal(buf.to_array(), arr)

def test_read_rgba_keeps_alpha(tmp_path):
    arr = np.zeros((10, 10, 4), dtype=np.uint8)
    arr[..., 3] = 128
    p = tmp_path / "rgba.png"
    Image.fromarray(arr).save(p)
    buf = read_image(str(p))
    assert buf.channels == 4
    assert np.all(buf.pixels()[..., 3] == 128)

def test_read_palette_image_as_rgb(tmp_path):
    p = tmp_path / "pal.png"
    Image.new("RGB", (4, 3), (10, 200, 30)).convert("P").save(p)
    buf = read_image(str(p))
    assert buf.channels == 3
    assert buf.shape == (3, 4, 3)

def test_read_gray_alpha_as_rgba(tmp_path):
    p = tmp_path / "la.png"
    Image.new("LA", (3, 3), (90, 255)).save(p)
    buf = read_image(str(p))
    assert buf.channels == 4
    assert buf.pixels()[0, 0].tolist() == [90, 90, 90, 255]

def test_read_sixteen_bit_is_unsupported(tmp_path):
    p = tmp_path / "deep.png"
    Image.fromarray(np.full((4, 4), 1000, dtype=np.uint16)).save(p)
    with pytest.raises(UnsupportedFormatError):
        read_image(str(p))

def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_image(str(tmp_path / "nope.png"))

def test_read_garbage_file(tmp_path):
    p = tmp_path / "junk.png"
    p.write_bytes(b"not an image at all")
    with pytest.raises(DecodeError):
        read_image(str(p))

def test_save_jpeg_drops_alpha(tmp_path):
    arr = np.full((8, 8, 4), 200, dtype=np.uint8)
    p = tmp_path / "out.jpg"
    save_image(str(p), PixelBuffer.from_array(arr))
    buf = read_image(str(p))
    assert buf.channels == 3

def test_save_unknown_format(tmp_path):
    buf = PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))
    with pytest.raises(UnsupportedFormatError):
        save_image(str(tmp_path / "out.bmp"), buf)

def test_save_failure_removes_partial_file(tmp_path, monkeypatch):
    def _broken_save(self, fp, *args, **kwargs):
        with open(fp, "wb") as f:
            f.write(b"partial")
        raise OSError("disk full")
    monkeypatch.setattr(Image.Image, "save", _broken_save)
    p = tmp_path / "out.png"
    with pytest.raises(EncodeError):
        save_image(str(p), PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8)))
    assert not p.exists()

def test_checkerboard_png_roundtrip_then_grayscale(tmp_path):
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    img[::2, ::2] = (255, 0, 0)
    img[1::2, 1::2] = (255, 0, 0)
    img[::2, 1::2] = (0, 0, 255)
    img[1::2, ::2] = (0, 0, 255)
    p = tmp_path / "checker.png"
    Image.fromarray(img).save(p)
    buf = read_image(str(p))
    grayscale(buf)
    expected = np.where((np.add.outer(np.arange(4), np.arange(4)) % 2) == 0, 76, 29)
    assert np.array_equal(buf.to_array(), expected.astype(np.uint8))

def test_default_output_path():
    assert default_output_path("in/photo.jpeg") == os.path.join(".", "output.jpg")
    assert default_output_path("in/photo.png") == os.path.join(".", "output.png")

def test_make_result_filename(tmp_path):
    p = make_result_filename("in/photo.jpg", "median", 3.0, outdir=str(tmp_path))
    assert os.path.basename(p) == "photo_median_p-3.jpg"
    p = make_result_filename("in/photo.jpg", "grayscale", ext="png", outdir=str(tmp_path))
    assert os.path.basename(p) == "photo_grayscale.png"

def test_save_parameters_txt(tmp_path):
    path = save_parameters_txt(str(tmp_path / "run"), {"tool": "gauss", "parameter": 2.0})
    with open(path, encoding="utf-8") as f:
        assert f.read() == "tool: gauss\nparameter: 2.0\n"
