"""Print a hex color in the color spaces used for blending."""

from __future__ import annotations

import argparse
import colorsys
from typing import Dict, Tuple

from rainbow_gif.color import Color


def describe(value: str) -> Dict[str, Tuple[float, ...]]:
    color = Color.from_hex(value)
    h, l, s = colorsys.rgb_to_hls(color.r, color.g, color.b)
    hv, sv, v = colorsys.rgb_to_hsv(color.r, color.g, color.b)
    return {
        "rgb": (color.r, color.g, color.b),
        "lab": color.lab(),
        "hcl": color.hcl(),
        # hue in degrees like HCL
        "hsl": (h * 360.0, s, l),
        "hsv": (hv * 360.0, sv, v),
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("color", help="Hex color, e.g. ff8000")
    args = parser.parse_args(argv)
    for name, values in describe(args.color).items():
        print(f"{name.upper()}: " + ", ".join(f"{v:.4f}" for v in values))


if __name__ == "__main__":  # pragma: no cover
    main()
