# io/file_utils.py
"""
File naming and parameter recording helpers.
"""

import os
from typing import Dict, Optional

from .image_handler import detect_format


def default_output_path(input_path: str, outdir: str = ".") -> str:
    """output.jpg for JPEG input, output.png for anything else."""
    name = "output.jpg" if detect_format(input_path) == "jpeg" else "output.png"
    return os.path.join(outdir, name)


def make_result_filename(
    input_path: str,
    tool: str,
    parameter: Optional[float] = None,
    ext: Optional[str] = None,
    outdir: str = ".",
) -> str:
    base, in_ext = os.path.splitext(os.path.basename(input_path))
    ext = (ext or in_ext.lstrip(".") or "png").lower()
    parts = [base, tool]
    if parameter is not None:
        parts.append(f"p-{parameter:g}")
    fname = "_".join(parts) + f".{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def save_parameters_txt(outdir: str, params: Dict):
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, "parameters.txt")
    with open(path, "w", encoding="utf-8") as f:
        for k, v in params.items():
            f.write(f"{k}: {v}\n")
    return path
