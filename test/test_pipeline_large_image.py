# test/test_pipeline_large_image.py
import numpy as np
from imgproc.config import RunConfig, Tool
from imgproc.pipeline import apply_filter
from imgproc.pixel_buffer import PixelBuffer

def test_large_pipeline():
    img = (np.random.rand(512, 512, 3) * 255).astype(np.uint8)
    for tool, parameter in [(Tool.GAUSS, 2.0), (Tool.MEDIAN, 2), (Tool.EDGE_DETECTION, 0)]:
        buf = PixelBuffer.from_array(img)
        apply_filter(buf, RunConfig(tool=tool, input_path="large.png", parameter=parameter, workers=3))
        assert (buf.height, buf.width) == (512, 512)
        assert buf.data.dtype == np.uint8
