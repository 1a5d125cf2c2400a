import numpy as np
import pytest

from rainbow_gif.color import Color
from tools.gradient_strip import main, render_strip

RED = Color(1.0, 0.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)


def test_render_strip_bands():
    img = render_strip([RED, BLUE], steps=4, width=100, height=10)
    assert img.size == (100, 10)
    arr = np.asarray(img)
    assert arr[0, 0].tolist() == [255, 0, 0]
    assert arr[5, 24].tolist() == [255, 0, 0]
    assert arr[0, 25].tolist() != [255, 0, 0]


def test_render_strip_rounds_width_down():
    img = render_strip([RED, BLUE], steps=3, width=100, height=4)
    assert img.size == (99, 4)


def test_render_strip_rejects_bad_sizes():
    with pytest.raises(ValueError):
        render_strip([RED], steps=0)
    with pytest.raises(ValueError):
        render_strip([RED], steps=20, width=10)


def test_main_writes_image(tmp_path):
    out = tmp_path / "strip.png"
    main(["", str(out), "7", "--width", "70", "--height", "5", "--wrap"])
    assert out.exists()
