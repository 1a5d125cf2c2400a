import numpy as np
import pytest

from rainbow_gif import frames
from rainbow_gif.blend import BlendMode, blend_color, blend_hue
from rainbow_gif.color import Color
from rainbow_gif.frames import Frame, apply_overlay

RED = Color(1.0, 0.0, 0.0)


def make_frame():
    palette = np.array(
        [[0, 0, 0, 0], [128, 128, 128, 255], [200, 50, 50, 255]], dtype=np.uint8
    )
    pixels = np.array([[0, 1, 2], [2, 1, 0]])
    return Frame(pixels, palette, delay_ms=80)


def test_frame_validation():
    palette = np.zeros((2, 4), dtype=np.uint8)
    with pytest.raises(ValueError):
        Frame(np.array([[0, 2]]), palette)
    with pytest.raises(ValueError):
        Frame(np.array([0, 1]), palette)
    with pytest.raises(ValueError):
        Frame(np.array([[0, 1]]), palette, delay_ms=-1)


def test_frame_dimensions_and_rgba():
    f = make_frame()
    assert (f.width, f.height) == (3, 2)
    rgba = f.to_rgba()
    assert rgba.shape == (2, 3, 4)
    assert rgba[0, 1].tolist() == [128, 128, 128, 255]


def test_copy_is_independent():
    f = make_frame()
    c = f.copy()
    c.palette[1] = 0
    c.pixels[0, 0] = 1
    assert f.palette[1].tolist() == [128, 128, 128, 255]
    assert f.pixels[0, 0] == 0
    assert c.delay_ms == 80


@pytest.mark.parametrize("mode, fn", [(BlendMode.COLOR, blend_color), (BlendMode.HUE, blend_hue)])
def test_overlay_recolors_visible_entries(mode, fn):
    f = make_frame()
    pixels = f.pixels.copy()
    out = apply_overlay(f, RED, mode)
    assert out is f
    assert np.array_equal(out.pixels, pixels)
    assert out.palette[0].tolist() == [0, 0, 0, 0]
    for row, src in ((1, (128, 128, 128)), (2, (200, 50, 50))):
        expected = fn(RED, Color.from_rgb255(*src)).rgb255()
        assert np.abs(out.palette[row, :3].astype(int) - expected).max() <= 1
        assert out.palette[row, 3] == 255


def test_overlay_on_fully_transparent_palette_is_noop():
    palette = np.zeros((2, 4), dtype=np.uint8)
    palette[1, :3] = 90
    f = Frame(np.array([[0, 1]]), palette)
    apply_overlay(f, RED)
    assert np.array_equal(f.palette, palette)


def test_overlay_replaces_palette_array():
    f = make_frame()
    original = f.palette
    apply_overlay(f, RED)
    assert original[1].tolist() == [128, 128, 128, 255]
    assert f.palette is not original


def test_overlay_keeps_entries_without_a_finite_blend(monkeypatch):
    def first_row_nan(overlay, rgb, mode):
        out = np.full((len(rgb), 3), 0.2)
        out[0] = np.nan
        return out

    monkeypatch.setattr(frames, "blend_palette", first_row_nan)
    f = make_frame()
    apply_overlay(f, RED)
    assert f.palette[0].tolist() == [0, 0, 0, 0]
    assert f.palette[1].tolist() == [128, 128, 128, 255]
    assert f.palette[2].tolist() == [51, 51, 51, 255]
