"""Blend modes combining an overlay colour with a base colour."""
from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from .color import ACHROMATIC_CHROMA, Color, hcl_to_rgb, rgb_to_hcl


class BlendMode(str, Enum):
    COLOR = "color"
    HUE = "hue"


def blend_normal(
    top: Color, top_alpha: float, bottom: Color, bottom_alpha: float
) -> Tuple[Color, float]:
    """Composite ``top`` over ``bottom`` ("over" operator).

    Returns the blended colour and the resulting alpha.
    """
    alpha_delta = (1.0 - top_alpha) * bottom_alpha
    alpha = alpha_delta + top_alpha
    if alpha == 0:
        raise ValueError("blend_normal: both layers are fully transparent")
    r = (alpha_delta * bottom.r + top_alpha * top.r) / alpha
    g = (alpha_delta * bottom.g + top_alpha * top.g) / alpha
    b = (alpha_delta * bottom.b + top_alpha * top.b) / alpha
    return Color(r, g, b).clamped(), alpha


def blend_color(top: Color, bottom: Color) -> Color:
    """Adopt hue and chroma of ``top`` while keeping the luma of ``bottom``."""
    top_hue, top_chroma, _ = top.hcl()
    _, _, bottom_luma = bottom.hcl()
    return Color.from_hcl(top_hue, top_chroma, bottom_luma)


def blend_hue(top: Color, bottom: Color) -> Color:
    """Adopt the hue of ``top`` while keeping chroma and luma of ``bottom``."""
    top_hue, _, _ = top.hcl()
    _, bottom_chroma, bottom_luma = bottom.hcl()
    return Color.from_hcl(top_hue, bottom_chroma, bottom_luma)


def blend_palette(overlay: Color, rgb: np.ndarray, mode: BlendMode = BlendMode.COLOR) -> np.ndarray:
    """Blend ``overlay`` into every row of an ``(n, 3)`` float RGB array.

    Row ``i`` of the result equals ``blend_color(overlay, rgb[i])`` (or
    :func:`blend_hue` for ``BlendMode.HUE``).
    """
    mode = BlendMode(mode)
    hcl = rgb_to_hcl(rgb)
    top_hue, top_chroma, _ = overlay.hcl()
    hcl[..., 0] = top_hue
    if mode is BlendMode.COLOR:
        hcl[..., 1] = top_chroma
    return hcl_to_rgb(hcl)


def _interp_angle(a0: float, a1: float, t: float) -> float:
    # shortest arc between the two hues
    delta = ((a1 - a0) % 360.0 + 540.0) % 360.0 - 180.0
    return (a0 + t * delta + 360.0) % 360.0


def interpolate_hcl(start: Color, end: Color, t: float) -> Color:
    """Interpolate between two colours in HCL space.

    Hue follows the shortest arc; a grey endpoint borrows the hue of the
    other one so that fades to and from grey do not sweep through the wheel.
    The result is clamped into gamut.
    """
    h1, c1, l1 = start.hcl()
    h2, c2, l2 = end.hcl()
    if c1 <= ACHROMATIC_CHROMA < c2:
        h1 = h2
    elif c2 <= ACHROMATIC_CHROMA < c1:
        h2 = h1
    return Color.from_hcl(
        _interp_angle(h1, h2, t),
        c1 + t * (c2 - c1),
        l1 + t * (l2 - l1),
    )
