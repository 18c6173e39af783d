"""Run configuration for the imgproc command line and batch runner."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# sigma or radius used when no parameter is given
DEFAULT_PARAMETER = 5.0
# sub-threshold blur is a no-op
BLUR_IDENTITY_SIGMA = 1e-6
JPEG_QUALITY = 100
DEFAULT_WORKERS = 1


class Tool(Enum):
    GAUSS = "gauss"
    MEDIAN = "median"
    EDGE_DETECTION = "edge_detection"
    GRAY = "grayscale"

    @classmethod
    def parse(cls, name: str) -> "Tool":
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown tool '{name}'. Available tools: {choices}") from None

    @property
    def takes_parameter(self) -> bool:
        return self in (Tool.GAUSS, Tool.MEDIAN)


@dataclass(frozen=True)
class RunConfig:
    """Everything one invocation needs; built once by the CLI and passed down unchanged."""

    tool: Tool
    input_path: str
    output_path: Optional[str] = None
    output_format: Optional[str] = None
    parameter: float = DEFAULT_PARAMETER
    workers: int = DEFAULT_WORKERS
    compare_path: Optional[str] = None
    params_dir: Optional[str] = None
    histogram_path: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "tool": self.tool.value,
            "input_path": self.input_path,
            "output_path": self.output_path,
            "output_format": self.output_format,
            "parameter": self.parameter,
            "workers": self.workers,
        }
