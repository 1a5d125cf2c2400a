"""Recolouring pipeline: gradient → overlay colours → parallel frame transform."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .blend import BlendMode
from .codec import load_frames, save_frames
from .config import RecolorOptions
from .frames import Frame
from .gradient import new_gradient
from .scheduler import transform_frames
from .validate import validate_options


def expand_frames(frames: Sequence[Frame], loop: int, delay_ms: Optional[int] = None) -> List[Frame]:
    """Replay ``frames`` ``loop`` times and apply an optional delay override.

    Replays are independent copies so each can receive its own overlay.
    """
    sequence = list(frames)
    for _ in range(loop - 1):
        sequence.extend(f.copy() for f in frames)
    if delay_ms is not None:
        for f in sequence:
            f.delay_ms = delay_ms
    return sequence


def recolor_frames(frames: Sequence[Frame], options: RecolorOptions) -> List[Frame]:
    """Blend one gradient colour into each frame's palette."""
    validate_options(options)
    return _recolor(frames, options)


def _recolor(frames: Sequence[Frame], options: RecolorOptions) -> List[Frame]:
    gradient = new_gradient(options.gradient_colors(), options.wrap)
    sequence = expand_frames(frames, options.loop, options.delay_ms)
    overlays = gradient.generate(len(sequence))
    logging.info(
        "recoloring %d frames (%d stops, wrap=%s) with %d workers",
        len(sequence),
        len(gradient),
        options.wrap,
        options.workers,
    )
    return transform_frames(sequence, overlays, options.workers, BlendMode(options.blend))


def recolor_file(src: str | Path, dst: str | Path, options: Optional[RecolorOptions] = None) -> Path:
    """Read ``src``, recolour every frame and write the GIF to ``dst``.

    Nothing is written if validation or any frame worker fails.
    """
    options = options or RecolorOptions()
    validate_options(options)
    logging.info("quantizer=%s count=%d", options.algorithm, options.count)
    frames = load_frames(src, options.algorithm, options.count, options.dither)
    return save_frames(_recolor(frames, options), dst)
