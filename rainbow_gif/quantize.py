"""Palette quantization.

Every algorithm takes an ``(n, 4)`` RGBA ``uint8`` population and returns a
palette (``(m, 4)`` ``uint8``) together with one palette index per input
pixel.  Whenever the population already has at most ``count`` distinct
colours the exact colours are kept (identity pass).

Colours are keyed by packing the four channels into one ``uint32``.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import List, Tuple

import numpy as np

from .errors import ConfigError, UnsupportedAlgorithm

QuantizeResult = Tuple[np.ndarray, np.ndarray]

# keep the top 3/3/2 bits of red/green/blue
SCALAR_MASK = np.array([0xE0, 0xE0, 0xC0], dtype=np.uint8)
# one slot goes to transparency, so blue keeps a single bit
SCALAR_MASK_TRANSPARENT = np.array([0xE0, 0xE0, 0x80], dtype=np.uint8)

_NEAREST_CHUNK = 2048


class Algorithm(str, Enum):
    SCALAR = "scalar"
    POPULOSITY = "populosity"
    MEDIAN_CUT = "mediancut"
    OCTREE = "octree"
    KMEANS = "kmeans"

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedAlgorithm(f"unknown quantizer: {value!r}") from None


IMPLEMENTED = frozenset({Algorithm.SCALAR, Algorithm.POPULOSITY, Algorithm.MEDIAN_CUT})


def pack_colors(colors: np.ndarray) -> np.ndarray:
    """Pack RGBA rows into ``uint32`` keys (``r<<24 | g<<16 | b<<8 | a``)."""
    c = np.asarray(colors, dtype=np.uint8).reshape(-1, 4).astype(np.uint32)
    return (c[:, 0] << 24) | (c[:, 1] << 16) | (c[:, 2] << 8) | c[:, 3]


def unpack_colors(keys: np.ndarray) -> np.ndarray:
    keys = np.asarray(keys, dtype=np.uint32).reshape(-1)
    out = np.empty((len(keys), 4), dtype=np.uint8)
    out[:, 0] = (keys >> 24) & 0xFF
    out[:, 1] = (keys >> 16) & 0xFF
    out[:, 2] = (keys >> 8) & 0xFF
    out[:, 3] = keys & 0xFF
    return out


def _as_rgba(colors) -> np.ndarray:
    arr = np.asarray(colors, dtype=np.uint8)
    if arr.size == 0:
        return np.zeros((0, 4), dtype=np.uint8)
    if arr.shape[-1] == 3:
        alpha = np.full(arr.shape[:-1] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    if arr.shape[-1] != 4:
        raise ValueError("colors must be RGB or RGBA rows")
    return arr.reshape(-1, 4)


def _unique_first_seen(keys: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Distinct keys in first-seen order, per-pixel rank and counts."""
    if len(keys) == 0:
        empty = np.zeros(0, dtype=np.intp)
        return keys, empty, empty
    uniq, first, inverse, counts = np.unique(
        keys, return_index=True, return_inverse=True, return_counts=True
    )
    order = np.argsort(first, kind="stable")
    rank = np.empty(len(order), dtype=np.intp)
    rank[order] = np.arange(len(order))
    return uniq[order], rank[inverse.reshape(-1)], counts[order]


def _nearest_indices(points: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """Index of the nearest palette row for every point (squared RGBA distance).

    ``argmin`` keeps the lowest index on ties.
    """
    pal = palette.astype(np.int64)
    out = np.empty(len(points), dtype=np.intp)
    for start in range(0, len(points), _NEAREST_CHUNK):
        block = points[start : start + _NEAREST_CHUNK].astype(np.int64)
        dist = ((block[:, None, :] - pal[None, :, :]) ** 2).sum(axis=2)
        out[start : start + _NEAREST_CHUNK] = np.argmin(dist, axis=1)
    return out


def median_cut_depth(count: int) -> int:
    """Recursion depth for ``count`` colours; the palette has ``2**depth`` entries."""
    return int(math.floor(math.log2(count) + 0.5))


def _leaf_color(members: np.ndarray) -> np.ndarray:
    rgb = members[:, :3].astype(np.int64)
    mean = rgb.sum(axis=0) // len(members)
    alpha = 255 if np.any(members[:, 3] != 0) else 0
    return np.array([mean[0], mean[1], mean[2], alpha], dtype=np.uint8)


def _median_cut_split(
    members: np.ndarray, bucket: np.ndarray, depth: int, leaves: List[np.ndarray]
) -> None:
    if depth == 0 or len(bucket) == 0:
        # an empty bucket still owns every leaf below it
        leaves.extend([bucket] * (1 << depth))
        return

    rgb = members[bucket, :3].astype(np.int32)
    ranges = rgb.max(axis=0) - rgb.min(axis=0)
    axis = int(np.argmax(ranges))  # first maximum: R > G > B
    ordered = bucket[np.argsort(rgb[:, axis], kind="stable")]
    cut = len(ordered) // 2 + 1
    _median_cut_split(members, ordered[:cut], depth - 1, leaves)
    _median_cut_split(members, ordered[cut:], depth - 1, leaves)


class Quantizer:
    """Reduce a colour population to at most ``count`` palette entries."""

    def __init__(self, count: int = 256):
        if count < 1:
            raise ConfigError("quantizer count must be >= 1")
        self.count = int(count)

    def quantize(self, algorithm: Algorithm | str, colors) -> QuantizeResult:
        algo = Algorithm.parse(algorithm)
        if algo is Algorithm.SCALAR:
            return self.scalar(colors)
        if algo is Algorithm.POPULOSITY:
            return self.populosity(colors)
        if algo is Algorithm.MEDIAN_CUT:
            return self.median_cut(colors)
        if algo is Algorithm.OCTREE:
            return self.octree(colors)
        return self.kmeans(colors)

    def identity(self, colors) -> QuantizeResult:
        """Exact colours in first-seen order; the size is not capped."""
        uniq, mapping, _ = _unique_first_seen(pack_colors(_as_rgba(colors)))
        return unpack_colors(uniq), mapping

    def _fits(self, distinct: int, name: str) -> bool:
        if distinct <= self.count:
            logging.debug("%s: %d colors <= %d, keeping exact palette", name, distinct, self.count)
            return True
        return False

    def scalar(self, colors) -> QuantizeResult:
        """Bucket colours on their top 3/3/2 bits.

        Alpha collapses to opaque or fully transparent; with transparency
        present blue keeps one bit, so the palette never exceeds 256 entries.
        """
        rgba = _as_rgba(colors)
        uniq, mapping, _ = _unique_first_seen(pack_colors(rgba))
        if self._fits(len(uniq), "scalar"):
            return unpack_colors(uniq), mapping
        transparent = rgba[:, 3] == 0
        mask = SCALAR_MASK_TRANSPARENT if transparent.any() else SCALAR_MASK
        bucketed = np.full_like(rgba, 255)
        bucketed[:, :3] = rgba[:, :3] & mask
        bucketed[transparent] = 0
        return self.identity(bucketed)

    def populosity(self, colors) -> QuantizeResult:
        rgba = _as_rgba(colors)
        uniq, mapping, counts = _unique_first_seen(pack_colors(rgba))
        if self._fits(len(uniq), "populosity"):
            return unpack_colors(uniq), mapping

        # stable sort keeps first-seen order among equal counts
        kept = np.argsort(-counts, kind="stable")[: self.count]
        palette = unpack_colors(uniq[kept])
        nearest = _nearest_indices(unpack_colors(uniq), palette)
        return palette, nearest[mapping]

    def median_cut(self, colors) -> QuantizeResult:
        rgba = _as_rgba(colors)
        uniq, mapping, _ = _unique_first_seen(pack_colors(rgba))
        if self._fits(len(uniq), "mediancut"):
            return unpack_colors(uniq), mapping

        depth = median_cut_depth(self.count)
        members = unpack_colors(uniq)
        leaves: List[np.ndarray] = []
        _median_cut_split(members, np.arange(len(members)), depth, leaves)

        palette = np.zeros((len(leaves), 4), dtype=np.uint8)
        leaf_of = np.zeros(len(members), dtype=np.intp)
        for i, leaf in enumerate(leaves):
            if len(leaf) == 0:
                palette[i] = palette[i - 1]
                continue
            palette[i] = _leaf_color(members[leaf])
            leaf_of[leaf] = i
        logging.debug("mediancut: %d colors into %d leaves", len(members), len(leaves))
        return palette, leaf_of[mapping]

    def octree(self, colors) -> QuantizeResult:
        raise UnsupportedAlgorithm("octree quantization is not implemented")

    def kmeans(self, colors) -> QuantizeResult:
        raise UnsupportedAlgorithm("kmeans quantization is not implemented")
