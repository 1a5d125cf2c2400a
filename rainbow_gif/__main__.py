"""Command line interface for rainbow_gif."""
from __future__ import annotations

import argparse
import logging
import sys

from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_BLEND,
    DEFAULT_COUNT,
    RecolorOptions,
    default_workers,
    load_preset,
)
from .errors import RainbowGifError
from .pipeline import recolor_file
from .validate import validate_args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rainbow-gif",
        description="Blend a cycling color gradient into every frame of a GIF",
    )
    parser.add_argument("input", help="Input GIF or still image")
    parser.add_argument("output", help="Output GIF")
    parser.add_argument(
        "--colors",
        default="",
        help="Comma separated hex gradient stops (default: rainbow preset)",
    )
    parser.add_argument(
        "--wrap", action="store_true", help="Close the gradient back to its first color"
    )
    parser.add_argument(
        "--quantizer",
        default=DEFAULT_ALGORITHM,
        help="scalar | populosity | mediancut (octree and kmeans are reserved)",
    )
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help="Target palette size")
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Parallel frame workers"
    )
    parser.add_argument(
        "--loop", type=int, default=1, help="Replay the frame sequence N times"
    )
    parser.add_argument("--delay", type=int, default=None, help="Frame delay override (ms)")
    parser.add_argument("--blend", default=DEFAULT_BLEND, help="color | hue")
    parser.add_argument(
        "--no-dither",
        dest="dither",
        action="store_false",
        help="Disable Floyd-Steinberg dithering of still images",
    )
    parser.add_argument(
        "--preset", action="append", default=[], help="YAML file with option defaults"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Validate arguments and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    prelim, _ = parser.parse_known_args(argv)
    for path in prelim.preset:
        parser.set_defaults(**load_preset(path))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )

    errs = validate_args(args)
    if errs:
        for e in errs:
            print(f"validation error: {e}", file=sys.stderr)
        raise SystemExit(1)
    if args.validate:
        return

    options = RecolorOptions.from_args(args)
    try:
        out = recolor_file(args.input, args.output, options)
    except (RainbowGifError, OSError, ValueError) as e:
        logging.error("rainbow-gif failed: %s", e)
        raise SystemExit(f"error: {e}") from e
    logging.info("wrote %s", out)


if __name__ == "__main__":  # pragma: no cover
    main()
