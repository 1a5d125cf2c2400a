"""Indexed frames and the per-frame overlay transform."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .blend import BlendMode, blend_palette
from .color import Color


@dataclass
class Frame:
    """Single indexed-colour frame.

    Attributes:
        pixels: ``(height, width)`` array of palette indices.
        palette: ``(n, 4)`` RGBA ``uint8`` rows.
        delay_ms: Display time in milliseconds.
        disposal: GIF disposal method as decoded. Informational only: frames
            are fully composited and always written with disposal 2.
    """

    pixels: np.ndarray
    palette: np.ndarray
    delay_ms: int = 100
    disposal: int = 0

    def __post_init__(self) -> None:
        self.pixels = np.asarray(self.pixels)
        self.palette = np.asarray(self.palette, dtype=np.uint8).reshape(-1, 4)
        if self.pixels.ndim != 2:
            raise ValueError("pixels must be a 2D index array")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.pixels.size and (
            self.pixels.min() < 0 or self.pixels.max() >= len(self.palette)
        ):
            raise ValueError("pixel index out of palette range")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def copy(self) -> "Frame":
        return Frame(self.pixels.copy(), self.palette.copy(), self.delay_ms, self.disposal)

    def to_rgba(self) -> np.ndarray:
        """Expand the frame to an ``(height, width, 4)`` RGBA array."""
        return self.palette[self.pixels]


def apply_overlay(frame: Frame, overlay: Color, mode: BlendMode = BlendMode.COLOR) -> Frame:
    """Blend ``overlay`` into every visible palette entry of ``frame``.

    Transparent entries, and entries whose blend does not produce a finite
    colour, are copied through unchanged.  Blended entries become opaque.
    Only the palette is replaced; the index buffer is left untouched.
    """
    palette = frame.palette
    out = palette.copy()
    visible = np.flatnonzero(palette[:, 3] != 0)
    if len(visible):
        rgb = palette[visible, :3].astype(np.float64) / 255.0
        blended = blend_palette(overlay, rgb, mode)
        # rows the colour conversion could not represent stay as they were
        ok = np.isfinite(blended).all(axis=1)
        rows = visible[ok]
        out[rows, :3] = np.floor(blended[ok] * 255.0 + 0.5).astype(np.uint8)
        out[rows, 3] = 255
    frame.palette = out
    return frame
