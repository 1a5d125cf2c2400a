"""Render the colors a gradient produces as a strip of vertical bands.

Useful to preview what overlay colors a GIF with ``steps`` frames will
receive.  The strip width is rounded down to a multiple of ``steps`` so that
every band has the same width.

Example::

    python tools/gradient_strip.py ff0000,0000ff strip.png 12 --wrap
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from rainbow_gif.color import Color, parse_colors
from rainbow_gif.gradient import DEFAULT_COLORS, new_gradient


def render_strip(
    colors: Sequence[Color],
    steps: int,
    width: int = 512,
    height: int = 512,
    wrap: bool = False,
) -> Image.Image:
    """Return an RGB image with one band per generated gradient color."""
    if steps < 1:
        raise ValueError("steps must be >= 1")
    band = width // steps
    if band < 1:
        raise ValueError("width must be >= steps")
    generated = new_gradient(colors, wrap).generate(steps)
    canvas = np.zeros((height, band * steps, 3), dtype=np.uint8)
    for i, color in enumerate(generated):
        canvas[:, i * band : (i + 1) * band] = color.rgb255()
    return Image.fromarray(canvas)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("colors", help="Comma separated hex colors ('' for the rainbow preset)")
    parser.add_argument("output", help="Output image path")
    parser.add_argument("steps", type=int, help="Number of colors to display")
    parser.add_argument("--width", type=int, default=512)
    parser.add_argument("--height", type=int, default=512)
    parser.add_argument("--wrap", action="store_true")
    args = parser.parse_args(argv)

    colors = parse_colors(args.colors) or list(DEFAULT_COLORS)
    img = render_strip(colors, args.steps, args.width, args.height, args.wrap)
    img.save(Path(args.output))


if __name__ == "__main__":  # pragma: no cover
    main()
