"""Colour model and colour space utilities.

Colours travel through the pipeline as sRGB triples in ``[0, 1]``.  The
cylindrical hue/chroma/luma form used for blending is CIE L*C*h under D65:
OpenCV performs the sRGB ↔ L*a*b* step on float32 arrays and the polar
step is done here with NumPy.  The cylindrical form is derived on demand
and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import cv2
import numpy as np

from .errors import ConfigError

# below this chroma a colour is treated as grey and its hue is meaningless
ACHROMATIC_CHROMA = 1e-2


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert an ``(..., 3)`` array of sRGB floats to CIE L*a*b*.

    Parameters
    ----------
    rgb:
        Array with channels in ``[0, 1]``.
    Returns
    -------
    numpy.ndarray
        Float64 array of the same shape, ``L`` in ``[0, 100]``.
    """
    arr = np.asarray(rgb, dtype=np.float32)
    shape = arr.shape
    flat = np.clip(arr.reshape(-1, 1, 3), 0.0, 1.0)
    if flat.shape[0] == 0:
        return np.zeros(shape, dtype=np.float64)
    lab = cv2.cvtColor(np.ascontiguousarray(flat), cv2.COLOR_RGB2Lab)
    return lab.reshape(shape).astype(np.float64)


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert CIE L*a*b* back to sRGB floats clamped into ``[0, 1]``."""
    arr = np.asarray(lab, dtype=np.float32)
    shape = arr.shape
    flat = arr.reshape(-1, 1, 3)
    if flat.shape[0] == 0:
        return np.zeros(shape, dtype=np.float64)
    rgb = cv2.cvtColor(np.ascontiguousarray(flat), cv2.COLOR_Lab2RGB)
    return np.clip(rgb.reshape(shape).astype(np.float64), 0.0, 1.0)


def lab_to_hcl(lab: np.ndarray) -> np.ndarray:
    """Return ``(hue_degrees, chroma, luma)`` rows for L*a*b* rows."""
    lab = np.asarray(lab, dtype=np.float64)
    a = lab[..., 1]
    b = lab[..., 2]
    hue = np.mod(np.degrees(np.arctan2(b, a)), 360.0)
    chroma = np.hypot(a, b)
    return np.stack([hue, chroma, lab[..., 0]], axis=-1)


def hcl_to_lab(hcl: np.ndarray) -> np.ndarray:
    hcl = np.asarray(hcl, dtype=np.float64)
    rad = np.radians(hcl[..., 0])
    chroma = hcl[..., 1]
    return np.stack([hcl[..., 2], chroma * np.cos(rad), chroma * np.sin(rad)], axis=-1)


def rgb_to_hcl(rgb: np.ndarray) -> np.ndarray:
    """sRGB floats → ``(hue, chroma, luma)``."""
    return lab_to_hcl(rgb_to_lab(rgb))


def hcl_to_rgb(hcl: np.ndarray) -> np.ndarray:
    """``(hue, chroma, luma)`` → sRGB floats, gamut clamped."""
    return lab_to_rgb(hcl_to_lab(hcl))


def parse_hex(value: str) -> Tuple[int, int, int]:
    """Convert ``"#rrggbb"``, ``"rrggbb"`` or ``"0xrrggbb"`` to an RGB tuple."""
    raw = str(value).strip()
    if raw.lower().startswith("0x"):
        raw = raw[2:]
    raw = raw.lstrip("#")
    if len(raw) != 6:
        raise ConfigError(f"invalid hex color: {value!r}")
    try:
        return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
    except ValueError:
        raise ConfigError(f"invalid hex color: {value!r}") from None


@dataclass(frozen=True)
class Color:
    """sRGB colour with channels in ``[0, 1]``."""

    r: float
    g: float
    b: float

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "Color":
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        return cls.from_rgb255(*parse_hex(value))

    @classmethod
    def from_hcl(cls, hue: float, chroma: float, luma: float) -> "Color":
        """Build a colour from its cylindrical form, clamped into gamut."""
        r, g, b = hcl_to_rgb(np.array([hue, chroma, luma], dtype=np.float64))
        return cls(float(r), float(g), float(b))

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    def lab(self) -> Tuple[float, float, float]:
        l_value, a_value, b_value = rgb_to_lab(self.as_array())
        return float(l_value), float(a_value), float(b_value)

    def hcl(self) -> Tuple[float, float, float]:
        hue, chroma, luma = rgb_to_hcl(self.as_array())
        return float(hue), float(chroma), float(luma)

    def clamped(self) -> "Color":
        return Color(
            min(max(self.r, 0.0), 1.0),
            min(max(self.g, 0.0), 1.0),
            min(max(self.b, 0.0), 1.0),
        )

    def rgb255(self) -> Tuple[int, int, int]:
        c = self.clamped()
        return (
            int(c.r * 255.0 + 0.5),
            int(c.g * 255.0 + 0.5),
            int(c.b * 255.0 + 0.5),
        )

    def hex(self) -> str:
        return "#%02x%02x%02x" % self.rgb255()


def parse_colors(values: str | Iterable[str] | None) -> List[Color]:
    """Parse a comma separated string (or a list) of hex colours.

    Empty input yields an empty list; the caller decides on a default.
    """
    if values is None:
        return []
    if isinstance(values, str):
        items: Sequence[str] = [v for v in values.split(",")]
    else:
        items = [str(v) for v in values]
    return [Color.from_hex(v) for v in items if v.strip()]
