"""
Batch-run every filter across multiple images.

Saves per-image outputs, before/after previews and a CSV log:
- input_path, tool, parameter, output_path, compare_path, histogram_path, channels_in, channels_out, elapsed_s

Usage (from project root):
python -m scripts.batch_demo [image ...]

Edit the IMAGES list below to point to your files if none are given.
"""

import os
import csv
import sys
import time
from datetime import datetime

import matplotlib

from imgproc.config import RunConfig, Tool
from imgproc.pipeline import apply_filter
from io_utils.file_utils import make_result_filename, save_parameters_txt
from io_utils.image_handler import read_image, save_image
from visuals.plots import compare_and_save, plot_intensity_histogram

# CONFIG: list image paths (the data/ directory in the project) you want to test (edit as needed)
IMAGES = [
    "data/Checkerboard_1.png",
    "data/Checkerboard_2.jpg",
]

# (tool, parameter) pairs run on every image
RUNS = [
    (Tool.GAUSS, 2.0),
    (Tool.MEDIAN, 2),
    (Tool.EDGE_DETECTION, 0),
    (Tool.GRAY, 0),
]

WORKERS = os.cpu_count() or 1

# Output directory for this run
timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
OUTDIR = os.path.join("results", f"batch_demo_{timestamp}")

csv_fields = [
    "input_path", "tool", "parameter", "output_path", "compare_path", "histogram_path",
    "channels_in", "channels_out", "elapsed_s",
]


def process_one_image(img_path, tool, parameter):
    buffer = read_image(img_path)
    original = buffer.copy()
    base = os.path.splitext(os.path.basename(img_path))[0]
    run_dir = os.path.join(OUTDIR, base)

    config = RunConfig(tool=tool, input_path=img_path, parameter=parameter, workers=WORKERS)
    start = time.perf_counter()
    apply_filter(buffer, config)
    elapsed = time.perf_counter() - start

    out_path = make_result_filename(img_path, tool.value, parameter if tool.takes_parameter else None,
                                    ext="png", outdir=run_dir)
    save_image(out_path, buffer)

    cmp_path = os.path.join(run_dir, f"{base}_{tool.value}_compare.png")
    try:
        compare_and_save(original, buffer, out_path=cmp_path, titles=("Original", tool.value))
    except Exception as e:
        print("Warning: failed saving comparison:", e)
        cmp_path = ""

    hist_path = os.path.join(run_dir, f"{base}_{tool.value}_histogram.png")
    plot_intensity_histogram(buffer, out_path=hist_path, title=f"{base} {tool.value}")

    return {
        "input_path": img_path,
        "tool": tool.value,
        "parameter": parameter,
        "output_path": out_path,
        "compare_path": cmp_path,
        "histogram_path": hist_path,
        "channels_in": original.channels,
        "channels_out": buffer.channels,
        "elapsed_s": round(elapsed, 4),
    }


def main(images=None):
    images = images or IMAGES
    matplotlib.use("Agg")
    os.makedirs(OUTDIR, exist_ok=True)
    csv_path = os.path.join(OUTDIR, "results.csv")
    save_parameters_txt(OUTDIR, {"workers": WORKERS, "runs": [(t.value, p) for t, p in RUNS]})

    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=csv_fields)
        writer.writeheader()

        for img in images:
            if not os.path.exists(img):
                print("Skipping missing:", img)
                continue
            for tool, parameter in RUNS:
                print("Processing:", img, tool.value)
                rec = process_one_image(img, tool, parameter)
                writer.writerow(rec)
                csvf.flush()
                print(" -> done in", rec["elapsed_s"], "s:", rec["output_path"])

    print("Batch done. Results in:", OUTDIR, "CSV:", csv_path)
    return csv_path


if __name__ == "__main__":
    main(sys.argv[1:])
