"""
imgproc/pipeline.py

Decode -> one filter -> encode.

API:
- FILTERS: Tool -> callable(buffer, parameter, workers)
- apply_filter(buffer, config): run the configured tool on a PixelBuffer
- resolve_config(config): fill output path / format from the input
- run(config): full file-to-file run (plus optional preview, histogram and parameters.txt),
  returns the filtered PixelBuffer
"""

import logging
import math
from dataclasses import replace
from typing import Callable, Dict

from io_utils.file_utils import default_output_path, save_parameters_txt
from io_utils.image_handler import detect_format, read_image, save_image
from visuals.plots import compare_and_save, plot_intensity_histogram

from .config import RunConfig, Tool
from .convolution import gaussian_blur
from .errors import InvalidArgumentError
from .grayscale import grayscale
from .median import median_filter
from .pixel_buffer import PixelBuffer
from .sobel import sobel_edges

logger = logging.getLogger(__name__)


def _median_radius(parameter: float) -> int:
    """Truncate the float parameter to a radius; nan and inf are rejected before int()."""
    if parameter is None or not math.isfinite(float(parameter)):
        raise InvalidArgumentError(f"Median radius must be a finite number, got {parameter}.")
    return int(parameter)


FILTERS: Dict[Tool, Callable[[PixelBuffer, float, int], None]] = {
    Tool.GAUSS: lambda buf, p, w: gaussian_blur(buf, float(p), workers=w),
    Tool.MEDIAN: lambda buf, p, w: median_filter(buf, _median_radius(p), workers=w),
    Tool.EDGE_DETECTION: lambda buf, p, w: sobel_edges(buf),
    Tool.GRAY: lambda buf, p, w: grayscale(buf),
}


def apply_filter(buffer: PixelBuffer, config: RunConfig) -> PixelBuffer:
    """Apply config.tool to `buffer` (in place) and return it."""
    logger.info("applying %s (parameter=%g) to %dx%dx%d image",
                config.tool.value, config.parameter, buffer.width, buffer.height, buffer.channels)
    FILTERS[config.tool](buffer, config.parameter, config.workers)
    return buffer


def resolve_config(config: RunConfig) -> RunConfig:
    """
    Fill output_path (output.png / output.jpg after the input format) and
    output_format (from the output extension, else the input's) when missing.
    """
    output_path = config.output_path or default_output_path(config.input_path)
    output_format = config.output_format or detect_format(output_path) or detect_format(config.input_path)
    return replace(config, output_path=output_path, output_format=output_format)


def run(config: RunConfig) -> PixelBuffer:
    """Read config.input_path, filter it, write config.output_path."""
    config = resolve_config(config)
    buffer = read_image(config.input_path)
    original = buffer.copy() if config.compare_path else None

    apply_filter(buffer, config)
    save_image(config.output_path, buffer, config.output_format)
    logger.info("saved %s", config.output_path)

    if original is not None:
        compare_and_save(original, buffer, out_path=config.compare_path,
                         titles=("Original", config.tool.value))
    if config.histogram_path:
        plot_intensity_histogram(buffer, out_path=config.histogram_path,
                                 title=f"{config.tool.value} intensity histogram")
    if config.params_dir:
        save_parameters_txt(config.params_dir, config.as_dict())
    return buffer
