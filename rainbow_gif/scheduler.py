"""Parallel application of overlay colours to frames.

Frames are split into ``worker_count`` contiguous chunks.  Each chunk runs
as one task on a fixed thread pool and writes only its own output slots, so
the result does not depend on the worker count or on scheduling order.
"""
from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

from .blend import BlendMode
from .color import Color
from .errors import ConfigError, WorkerFailure
from .frames import Frame, apply_overlay


def partition(frame_count: int, worker_count: int) -> List[range]:
    """Split ``range(frame_count)`` into ``worker_count`` contiguous chunks.

    Every chunk except the trailing ones has ``ceil(frame_count /
    worker_count)`` items; surplus workers receive empty ranges.
    """
    if worker_count < 1:
        raise ConfigError("worker count must be >= 1")
    size = math.ceil(frame_count / worker_count)
    return [
        range(min(i * size, frame_count), min((i + 1) * size, frame_count))
        for i in range(worker_count)
    ]


def transform_frames(
    frames: Sequence[Frame],
    overlay_colors: Sequence[Color],
    worker_count: Optional[int] = None,
    mode: BlendMode = BlendMode.COLOR,
) -> List[Frame]:
    """Apply ``overlay_colors[i]`` to ``frames[i]`` on a pool of workers.

    Blocks until every worker has finished.  Any failure inside a worker is
    raised as :class:`WorkerFailure` once all workers are done and no output
    is returned.
    """
    if worker_count is None:
        worker_count = os.cpu_count() or 1
    if len(frames) != len(overlay_colors):
        raise ConfigError(
            f"got {len(frames)} frames but {len(overlay_colors)} overlay colors"
        )
    chunks = partition(len(frames), worker_count)
    output: List[Optional[Frame]] = [None] * len(frames)

    def run(chunk: range) -> int:
        for i in chunk:
            output[i] = apply_overlay(frames[i], overlay_colors[i], mode)
        return len(chunk)

    logging.debug("transform_frames: %d frames on %d workers", len(frames), worker_count)
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="rainbow-gif") as pool:
        futures = [pool.submit(run, chunk) for chunk in chunks]
        wait(futures, return_when=ALL_COMPLETED)

    failures = [f.exception() for f in futures if f.exception() is not None]
    if failures:
        raise WorkerFailure(f"frame worker failed: {failures[0]}") from failures[0]
    return [frame for frame in output if frame is not None]
