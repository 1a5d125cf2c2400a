"""Keyframed colour gradients.

A gradient is an ordered list of colours spread evenly over ``[0, 1]``.
:meth:`Gradient.generate` samples it once per animation frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .blend import interpolate_hcl
from .color import Color
from .errors import ConfigError

# red → orange → yellow → green → blue → violet → red
DEFAULT_COLORS: Tuple[Color, ...] = (
    Color(1.0, 0.0, 0.0),
    Color(1.0, 127.0 / 255.0, 0.0),
    Color(1.0, 1.0, 0.0),
    Color(0.0, 1.0, 0.0),
    Color(0.0, 0.0, 1.0),
    Color(139.0 / 255.0, 0.0, 1.0),
    Color(0.9, 0.0, 0.0),
)


@dataclass(frozen=True)
class KeyFrame:
    color: Color
    position: float
    index: int


@dataclass(frozen=True)
class Gradient:
    colors: Tuple[Color, ...] = ()
    positions: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if len(self.colors) != len(self.positions):
            raise ValueError("colors and positions must have the same length")

    def __len__(self) -> int:
        return len(self.colors)

    def keyframe(self, index: int) -> KeyFrame:
        return KeyFrame(self.colors[index], self.positions[index], index)

    def position_search(self, position: float) -> Tuple[KeyFrame, ...]:
        """Return the keyframe(s) bounding ``position``.

        A single keyframe is returned when the gradient has one colour, when
        ``position`` lands exactly on a keyframe, or when it is at or beyond
        the last keyframe.  Otherwise the two surrounding keyframes are
        returned in order.
        """
        if not self.colors:
            raise ConfigError("gradient has no colors")
        length = len(self.colors) - 1
        if length == 0:
            return (self.keyframe(0),)

        base = 1.0 / length
        lower = max(0, math.floor(position / base))
        if lower >= length:
            if position >= self.positions[length]:
                return (self.keyframe(length),)
            # division rounded up just below 1.0
            lower = length - 1
        if lower > 0 and position < self.positions[lower]:
            lower -= 1

        start = self.keyframe(lower)
        if position == start.position:
            return (start,)
        return (start, self.keyframe(lower + 1))

    def generate(self, frame_count: int) -> List[Color]:
        """Return one colour per frame, sampled at ``i / frame_count``.

        The last sample stays short of 1.0 so that a wrapped gradient does
        not repeat its first colour on the final frame.
        """
        if frame_count < 0:
            raise ConfigError("frame_count must be >= 0")
        if frame_count and not self.colors:
            raise ConfigError("gradient has no colors")

        generated: List[Color] = []
        for i in range(frame_count):
            position = i / frame_count
            keyframes = self.position_search(position)
            if len(keyframes) == 1:
                generated.append(keyframes[0].color.clamped())
                continue
            start, end = keyframes
            relative = (position - start.position) / (end.position - start.position)
            generated.append(interpolate_hcl(start.color, end.color, relative))
        return generated


def new_gradient(colors: Sequence[Color], wrap: bool = False) -> Gradient:
    """Build a gradient with ``colors`` distributed evenly over ``[0, 1]``.

    With ``wrap`` a copy of the first colour is appended so the cycle
    closes smoothly.
    """
    stops = list(colors)
    if wrap and len(stops) > 1:
        stops.append(stops[0])
    if len(stops) <= 1:
        return Gradient(tuple(stops), tuple(0.0 for _ in stops))
    intervals = len(stops) - 1
    return Gradient(tuple(stops), tuple(i / intervals for i in range(len(stops))))
