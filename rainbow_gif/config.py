"""Configuration defaults and presets for rainbow_gif."""
from __future__ import annotations

import os
from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .color import Color, parse_colors
from .errors import ConfigError
from .gradient import DEFAULT_COLORS

DEFAULT_ALGORITHM = "mediancut"
DEFAULT_COUNT = 256
DEFAULT_DELAY_MS = 100
DEFAULT_BLEND = "color"

IMAGE_EXTS = {".gif", ".png", ".jpg", ".jpeg", ".bmp", ".webp"}


def default_workers() -> int:
    return os.cpu_count() or 1


@dataclass
class RecolorOptions:
    colors: List[str] = field(default_factory=list)
    wrap: bool = False
    algorithm: str = DEFAULT_ALGORITHM
    count: int = DEFAULT_COUNT
    workers: int = field(default_factory=default_workers)
    loop: int = 1
    delay_ms: Optional[int] = None
    blend: str = DEFAULT_BLEND
    dither: bool = True

    @classmethod
    def from_args(cls, args: Namespace) -> "RecolorOptions":
        return cls(
            colors=split_colors(args.colors),
            wrap=bool(args.wrap),
            algorithm=args.quantizer,
            count=args.count,
            workers=args.workers,
            loop=args.loop,
            delay_ms=args.delay,
            blend=args.blend,
            dither=args.dither,
        )

    def gradient_colors(self) -> List[Color]:
        """Parsed gradient stops, or the rainbow preset when none are given."""
        return parse_colors(self.colors) or list(DEFAULT_COLORS)


def split_colors(value: Any) -> List[str]:
    """Normalise ``"ff0000,00ff00"`` or a YAML list into a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


def load_preset(path: str | Path) -> Dict[str, Any]:
    """Read a YAML preset; keys may use dashes like the CLI flags."""
    with open(path, "r", encoding="utf8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"preset {path} must contain a mapping")
    return {str(k).replace("-", "_"): v for k, v in data.items()}
