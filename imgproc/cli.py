"""
Command-line front end.

Usage:
    imgproc gauss|median|edge_detection|grayscale path/to/image.jpg|png [sigma/radius] [-o output.jpg|png] [--compare PNG] [--histogram PNG]
"""

import argparse
import logging
import sys
from typing import List, Optional

import matplotlib

from io_utils.errors import DecodeError, EncodeError, ImageIOError, UnsupportedFormatError

from .config import DEFAULT_PARAMETER, DEFAULT_WORKERS, RunConfig, Tool
from .errors import ImageProcError, InvalidArgumentError, OutOfMemoryError
from .pipeline import resolve_config, run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgproc",
        description="Apply a spatial filter to a PNG or JPEG image.",
    )
    parser.add_argument("tool", choices=[t.value for t in Tool], help="filter to apply")
    parser.add_argument("input", help="input image (.png, .jpg, .jpeg, .avif)")
    parser.add_argument("parameter", nargs="?", type=float, default=DEFAULT_PARAMETER,
                        help=f"sigma for gauss, radius for median (default {DEFAULT_PARAMETER:g})")
    parser.add_argument("-o", "--output", default=None, help="output image; defaults to output.png/output.jpg")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help="threads for per-channel filters (gauss, median)")
    parser.add_argument("--compare", default=None, metavar="PNG", help="also save a before/after figure")
    parser.add_argument("--save-params", default=None, metavar="DIR", help="write parameters.txt into DIR")
    parser.add_argument("--histogram", default=None, metavar="PNG", help="also save an intensity histogram of the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        tool=Tool.parse(args.tool),
        input_path=args.input,
        output_path=args.output,
        parameter=args.parameter,
        workers=args.workers,
        compare_path=args.compare,
        params_dir=args.save_params,
        histogram_path=args.histogram,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_usage()
        return 1
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # previews are only ever written to files
    matplotlib.use("Agg")

    config = resolve_config(config_from_args(args))
    print(f"Input path: {config.input_path}")
    print(f"Output path: {config.output_path}")

    try:
        run(config)
    except FileNotFoundError:
        print("File not found.", file=sys.stderr)
        return 1
    except OutOfMemoryError:
        print("Couldn't allocate memory.", file=sys.stderr)
        return 1
    except InvalidArgumentError as exc:
        print(f"Invalid argument: {exc}", file=sys.stderr)
        return 1
    except UnsupportedFormatError as exc:
        print(f"Unsupported format: {exc}", file=sys.stderr)
        return 1
    except (DecodeError, EncodeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (ImageProcError, ImageIOError) as exc:
        logger.debug("unexpected failure", exc_info=True)
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
