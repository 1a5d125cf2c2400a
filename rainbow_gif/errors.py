"""Exception types raised by rainbow_gif."""
from __future__ import annotations


class RainbowGifError(Exception):
    """Base class for fatal errors reported to the caller."""


class ConfigError(RainbowGifError, ValueError):
    """Invalid run configuration, detected before any frame work starts."""


class UnsupportedAlgorithm(RainbowGifError):
    """The selected quantizer is unknown or not implemented."""


class WorkerFailure(RainbowGifError):
    """A parallel frame task failed; the whole run is aborted."""
