"""
visuals/plots.py

Preview figures for filter results.

APIs:
- compare_and_save(original, filtered, out_path=None, titles=None)
- plot_intensity_histogram(image, out_path=None, title=None)

Notes:
- `original` / `filtered` / `image` may be PixelBuffers or HxW / HxWxC uint8 arrays.
- If out_path is None, functions return the matplotlib Figure object (caller can save or display).
"""

from typing import Optional, Sequence, Union
import os
import numpy as np
import matplotlib.pyplot as plt

from imgproc.pixel_buffer import PixelBuffer

ImageLike = Union[PixelBuffer, np.ndarray]

_CHANNEL_COLORS = {1: ("gray",), 3: ("red", "green", "blue"), 4: ("red", "green", "blue", "black")}


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _as_array(image: ImageLike) -> np.ndarray:
    if isinstance(image, PixelBuffer):
        return image.to_array()
    return np.asarray(image)


def _save_or_return(fig: plt.Figure, out_path: Optional[str], dpi: int = 100):
    if out_path is not None:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig


def _show(ax, arr: np.ndarray, title: str):
    if arr.ndim == 2:
        ax.imshow(arr, cmap="gray", vmin=0, vmax=255, interpolation="nearest")
    else:
        ax.imshow(arr.astype(np.uint8), interpolation="nearest")
    ax.set_title(title)
    ax.axis("off")


def compare_and_save(
    original: ImageLike,
    filtered: ImageLike,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Original (left) | Filtered (right).
    Single-channel images are drawn with a fixed 0..255 gray colormap.
    """
    titles = titles or ("Original", "Filtered")
    fig, axs = plt.subplots(1, 2, figsize=(12, 6))
    _show(axs[0], _as_array(original), titles[0])
    _show(axs[1], _as_array(filtered), titles[1])
    return _save_or_return(fig, out_path, dpi=200)


def plot_intensity_histogram(
    image: ImageLike,
    out_path: Optional[str] = None,
    title: Optional[str] = "Intensity Histogram",
):
    """
    256-bin histogram per channel (the same buckets the median filter counts).
    """
    arr = _as_array(image)
    planes = [arr] if arr.ndim == 2 else [arr[..., c] for c in range(arr.shape[2])]
    colors = _CHANNEL_COLORS.get(len(planes), ("gray",) * len(planes))

    fig, ax = plt.subplots(figsize=(8, 4))
    bins = np.arange(257)
    for plane, color in zip(planes, colors):
        counts = np.bincount(plane.reshape(-1), minlength=256)
        ax.stairs(counts, bins, color=color, alpha=0.8)
    ax.set_xlim(0, 256)
    ax.set_xlabel("intensity")
    ax.set_ylabel("count")
    if title:
        ax.set_title(title)
    return _save_or_return(fig, out_path)
