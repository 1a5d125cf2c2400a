"""Turn a single non-paletted image into indexed frames."""
from __future__ import annotations

import logging
from typing import List

import numpy as np
from PIL import Image

from .errors import ConfigError
from .frames import Frame
from .quantize import Algorithm, Quantizer

GIF_PALETTE_SIZE = 256


def _dither(rgba: np.ndarray, palette: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Floyd–Steinberg dither ``rgba`` against ``palette``.

    Pillow needs a full 256 entry table, so unused slots and transparent
    entries are filled with the first opaque colour and folded back onto it
    afterwards.  Transparent pixels keep their quantizer index.
    """
    transparent_entries = palette[:, 3] == 0
    opaque = np.flatnonzero(~transparent_entries)
    if len(palette) > GIF_PALETTE_SIZE or len(opaque) == 0:
        logging.debug("dither skipped: %d palette entries, %d opaque", len(palette), len(opaque))
        return indices

    fill = palette[opaque[0], :3]
    table = np.repeat(fill[None, :], GIF_PALETTE_SIZE, axis=0)
    table[: len(palette)] = palette[:, :3]
    table[: len(palette)][transparent_entries] = fill
    pal_img = Image.new("P", (1, 1))
    pal_img.putpalette(table.astype(np.uint8).reshape(-1).tolist())

    rgb = rgba[..., :3].copy()
    # transparent pixels must not push error into their neighbours
    rgb[rgba[..., 3] == 0] = fill
    src = Image.fromarray(rgb)
    dithered = np.asarray(
        src.quantize(palette=pal_img, dither=Image.Dither.FLOYDSTEINBERG), dtype=np.intp
    )

    lut = np.full(GIF_PALETTE_SIZE, opaque[0], dtype=np.intp)
    lut[opaque] = opaque
    dithered = lut[dithered]
    return np.where(rgba[..., 3] == 0, indices, dithered)


def static_transform(
    image: Image.Image,
    algorithm: Algorithm | str = Algorithm.MEDIAN_CUT,
    count: int = GIF_PALETTE_SIZE,
    delay_ms: int = 100,
    repeat: int = 1,
    dither: bool = True,
) -> List[Frame]:
    """Quantize ``image`` into one paletted frame, repeated ``repeat`` times.

    Pixels that are not fully opaque become transparent black, as GIF only
    knows binary transparency.
    """
    if repeat < 1:
        raise ConfigError("repeat must be >= 1")

    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8).copy()
    h, w = rgba.shape[:2]
    rgba[rgba[..., 3] != 255] = 0

    palette, mapping = Quantizer(count).quantize(algorithm, rgba.reshape(-1, 4))
    indices = mapping.reshape(h, w)
    if dither:
        indices = _dither(rgba, palette, indices)
    logging.info("static image %dx%d -> %d palette entries", w, h, len(palette))

    frame = Frame(indices, palette, delay_ms=delay_ms, disposal=2)
    return [frame] + [frame.copy() for _ in range(repeat - 1)]
