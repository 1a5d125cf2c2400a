"""Argument validation helpers for rainbow_gif."""
from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Iterable, List, Optional

from .blend import BlendMode
from .color import parse_colors
from .config import IMAGE_EXTS, RecolorOptions, split_colors
from .errors import ConfigError, UnsupportedAlgorithm
from .quantize import IMPLEMENTED, Algorithm
from .static_image import GIF_PALETTE_SIZE


def _option_errors(
    colors: Iterable[str],
    algorithm: str,
    count: int,
    workers: int,
    loop: int,
    delay_ms: Optional[int],
    blend: str,
) -> List[str]:
    errors: List[str] = []
    try:
        parse_colors(list(colors))
    except ConfigError as e:
        errors.append(f"--colors: {e}")
    try:
        algo = Algorithm.parse(algorithm)
    except UnsupportedAlgorithm:
        errors.append(f"--quantizer: unknown algorithm {algorithm!r}")
    else:
        if algo not in IMPLEMENTED:
            errors.append(f"--quantizer: {algo.value} is not implemented")
    if not 1 <= count <= GIF_PALETTE_SIZE:
        errors.append(f"--count must be within [1,{GIF_PALETTE_SIZE}]")
    if workers < 1:
        errors.append("--workers must be >= 1")
    if loop < 1:
        errors.append("--loop must be >= 1")
    if delay_ms is not None and delay_ms < 0:
        errors.append("--delay must be >= 0")
    if blend not in {m.value for m in BlendMode}:
        errors.append(f"--blend: unknown mode {blend!r}")
    return errors


def validate_args(args: Namespace) -> List[str]:
    """Validate parsed CLI arguments.

    Returns a list of human readable error messages. The caller should abort
    if the list is non-empty.
    """
    errors = _option_errors(
        split_colors(args.colors),
        args.quantizer,
        args.count,
        args.workers,
        args.loop,
        args.delay,
        args.blend,
    )
    if Path(args.input).suffix.lower() not in IMAGE_EXTS:
        errors.append(f"input: unsupported image type {Path(args.input).suffix or '(none)'}")
    if Path(args.output).suffix.lower() != ".gif":
        errors.append("output: must be a .gif file")
    return errors


def validate_options(options: RecolorOptions) -> None:
    """Raise before any frame work starts if ``options`` cannot be run.

    Unimplemented quantizers raise :class:`UnsupportedAlgorithm`, everything
    else :class:`ConfigError`.
    """
    try:
        algo: Optional[Algorithm] = Algorithm.parse(options.algorithm)
    except UnsupportedAlgorithm:
        algo = None
    if algo is not None and algo not in IMPLEMENTED:
        raise UnsupportedAlgorithm(f"{algo.value} quantization is not implemented")
    errors = _option_errors(
        options.colors,
        options.algorithm,
        options.count,
        options.workers,
        options.loop,
        options.delay_ms,
        options.blend,
    )
    if errors:
        raise ConfigError("; ".join(errors))
