import numpy as np
import pytest

from rainbow_gif.blend import (
    BlendMode,
    blend_color,
    blend_hue,
    blend_normal,
    blend_palette,
    interpolate_hcl,
)
from rainbow_gif.color import Color

RED = Color(1.0, 0.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
GREY = Color(0.5, 0.5, 0.5)


def _hue_diff(a, b):
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


def test_blend_normal_opaque_top_wins():
    color, alpha = blend_normal(RED, 1.0, BLUE, 1.0)
    assert color == RED
    assert alpha == 1.0


def test_blend_normal_transparent_top_keeps_bottom():
    color, alpha = blend_normal(RED, 0.0, BLUE, 0.6)
    assert color == BLUE
    assert alpha == pytest.approx(0.6)


def test_blend_normal_half():
    color, alpha = blend_normal(RED, 0.5, BLUE, 1.0)
    assert alpha == pytest.approx(1.0)
    assert color.r == pytest.approx(0.5)
    assert color.b == pytest.approx(0.5)


def test_blend_normal_rejects_two_transparent_layers():
    with pytest.raises(ValueError):
        blend_normal(RED, 0.0, BLUE, 0.0)


def test_blend_color_keeps_bottom_luma():
    top = Color(0.6, 0.45, 0.4)
    out = blend_color(top, GREY)
    top_h, top_c, _ = top.hcl()
    out_h, out_c, out_l = out.hcl()
    assert out_l == pytest.approx(GREY.hcl()[2], abs=0.5)
    assert _hue_diff(out_h, top_h) < 1.0
    assert out_c == pytest.approx(top_c, abs=0.5)


def test_blend_hue_on_grey_stays_grey():
    out = blend_hue(RED, GREY)
    assert np.allclose(out.as_array(), GREY.as_array(), atol=0.01)


def test_blend_hue_keeps_bottom_chroma_and_luma():
    top = Color(0.6, 0.4, 0.4)
    bottom = Color(0.4, 0.5, 0.4)
    out = blend_hue(top, bottom)
    out_h, out_c, out_l = out.hcl()
    _, bottom_c, bottom_l = bottom.hcl()
    assert _hue_diff(out_h, top.hcl()[0]) < 2.0
    assert out_c == pytest.approx(bottom_c, abs=0.5)
    assert out_l == pytest.approx(bottom_l, abs=0.5)


def test_blend_results_are_clamped():
    out = blend_color(RED, Color(0.9, 0.9, 0.9))
    assert all(0.0 <= v <= 1.0 for v in out.as_array())


@pytest.mark.parametrize("mode, fn", [(BlendMode.COLOR, blend_color), (BlendMode.HUE, blend_hue)])
def test_blend_palette_matches_scalar_blend(mode, fn):
    rows = [Color(0.2, 0.3, 0.4), Color(0.7, 0.6, 0.1), GREY]
    out = blend_palette(BLUE, np.array([c.as_array() for c in rows]), mode)
    for got, base in zip(out, rows):
        assert np.allclose(got, fn(BLUE, base).as_array(), atol=1e-4)


def test_interpolate_hcl_endpoints_and_midpoint():
    start = interpolate_hcl(RED, BLUE, 0.0)
    end = interpolate_hcl(RED, BLUE, 1.0)
    mid = interpolate_hcl(RED, BLUE, 0.5)
    assert np.allclose(start.as_array(), RED.as_array(), atol=2e-3)
    assert np.allclose(end.as_array(), BLUE.as_array(), atol=2e-3)
    assert mid != RED and mid != BLUE


def test_interpolate_from_black_keeps_target_hue():
    mid = interpolate_hcl(Color(0.0, 0.0, 0.0), RED, 0.5)
    assert _hue_diff(mid.hcl()[0], RED.hcl()[0]) < 2.0
