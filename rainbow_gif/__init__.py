"""Rainbow GIF package."""

__all__ = ["recolor_file"]


def recolor_file(*args, **kwargs):
    from .pipeline import recolor_file as _recolor_file

    return _recolor_file(*args, **kwargs)
