"""GIF and still-image reading/writing with Pillow."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

import numpy as np
from PIL import Image, ImageSequence

from .config import DEFAULT_DELAY_MS
from .frames import Frame
from .quantize import Algorithm, Quantizer
from .static_image import GIF_PALETTE_SIZE, static_transform


def load_frames(
    path: str | Path,
    algorithm: Algorithm | str = Algorithm.MEDIAN_CUT,
    count: int = GIF_PALETTE_SIZE,
    dither: bool = True,
) -> List[Frame]:
    """Decode ``path`` into indexed frames.

    Animated inputs are composited frame by frame by Pillow and each frame
    is re-indexed (normally an exact palette).  Still images go through
    :func:`static_transform`.
    """
    with Image.open(path) as img:
        if getattr(img, "n_frames", 1) <= 1:
            delay = int(img.info.get("duration") or DEFAULT_DELAY_MS)
            return static_transform(img, algorithm, count, delay_ms=delay, dither=dither)

        quantizer = Quantizer(count)
        frames: List[Frame] = []
        for frame in ImageSequence.Iterator(img):
            rgba = np.asarray(frame.convert("RGBA"), dtype=np.uint8)
            h, w = rgba.shape[:2]
            palette, mapping = quantizer.quantize(algorithm, rgba.reshape(-1, 4))
            frames.append(
                Frame(
                    mapping.reshape(h, w),
                    palette,
                    delay_ms=int(frame.info.get("duration") or DEFAULT_DELAY_MS),
                    disposal=int(getattr(frame, "disposal_method", 0) or 0),
                )
            )
    logging.info("decoded %d frames from %s", len(frames), path)
    return frames


def _to_image(frame: Frame) -> Image.Image:
    if len(frame.palette) > GIF_PALETTE_SIZE:
        raise ValueError(f"palette cannot exceed {GIF_PALETTE_SIZE} colors: {len(frame.palette)}")
    pixels = np.ascontiguousarray(frame.pixels, dtype=np.uint8)
    img = Image.frombytes("P", (frame.width, frame.height), pixels.tobytes())
    img.putpalette(frame.palette[:, :3].reshape(-1).tolist())
    transparent = np.flatnonzero(frame.palette[:, 3] == 0)
    if len(transparent):
        img.info["transparency"] = int(transparent[0])
    return img


def save_frames(frames: Sequence[Frame], path: str | Path, loop: int = 0) -> Path:
    """Write ``frames`` as an animated GIF.

    Frames are fully composited, so every frame is disposed to background.
    """
    if not frames:
        raise ValueError("at least one frame is required")
    out = Path(path)
    images = [_to_image(f) for f in frames]
    # per-frame transparency is read from each image's info
    images[0].save(
        out,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=[f.delay_ms for f in frames],
        loop=loop,
        disposal=2,
        optimize=False,
    )
    logging.debug("wrote %d frames to %s", len(frames), out)
    return out
