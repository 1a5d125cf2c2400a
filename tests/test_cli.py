import numpy as np
import pytest
from PIL import Image

from rainbow_gif import __main__ as rg_main
from rainbow_gif.__main__ import parse_args
from rainbow_gif.codec import load_frames
from rainbow_gif.config import RecolorOptions, load_preset
from rainbow_gif.errors import ConfigError


def test_preset_overrides_defaults(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("quantizer: scalar\nworkers: 3\ncolors: ['ff0000', '00ff00']\n")

    args = parse_args(["in.gif", "out.gif", "--preset", str(preset)])
    assert args.quantizer == "scalar"
    assert args.workers == 3
    assert RecolorOptions.from_args(args).colors == ["ff0000", "00ff00"]

    args_cli = parse_args(["in.gif", "out.gif", "--preset", str(preset), "--workers", "5"])
    assert args_cli.workers == 5


def test_preset_dashes_become_underscores(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("count: 32\nthread-count: 2\n")
    assert load_preset(preset) == {"count": 32, "thread_count": 2}


def test_preset_must_be_mapping(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        load_preset(preset)


def test_options_from_args():
    args = parse_args(
        ["in.png", "out.gif", "--colors", "ff0000, 0000ff", "--wrap", "--no-dither", "--delay", "20"]
    )
    options = RecolorOptions.from_args(args)
    assert options.colors == ["ff0000", "0000ff"]
    assert options.wrap
    assert not options.dither
    assert options.delay_ms == 20
    assert options.algorithm == "mediancut"


@pytest.mark.parametrize(
    "flags, needle",
    [
        (["--workers", "0"], "--workers"),
        (["--quantizer", "fancy"], "--quantizer"),
        (["--quantizer", "octree"], "not implemented"),
        (["--count", "300"], "--count"),
        (["--loop", "0"], "--loop"),
        (["--delay", "-5"], "--delay"),
        (["--blend", "multiply"], "--blend"),
        (["--colors", "ff00"], "--colors"),
    ],
)
def test_validate_reports_bad_flags(capsys, flags, needle):
    with pytest.raises(SystemExit):
        rg_main.main(["in.gif", "out.gif", "--validate", *flags])
    err = capsys.readouterr().err
    assert "validation error" in err
    assert needle in err


def test_validate_checks_file_types(capsys):
    with pytest.raises(SystemExit):
        rg_main.main(["in.txt", "out.png", "--validate"])
    err = capsys.readouterr().err
    assert "input" in err
    assert "output" in err


def test_validate_only_does_not_touch_files(tmp_path):
    rg_main.main([str(tmp_path / "missing.gif"), str(tmp_path / "out.gif"), "--validate"])
    assert not (tmp_path / "out.gif").exists()


def test_main_end_to_end(tmp_path):
    src = tmp_path / "in.png"
    rgb = np.zeros((6, 6, 3), dtype=np.uint8)
    rgb[:, :3] = (200, 200, 200)
    rgb[:, 3:] = (40, 80, 120)
    Image.fromarray(rgb).save(src)
    dst = tmp_path / "out.gif"

    rg_main.main([str(src), str(dst), "--loop", "3", "--workers", "2", "--quantizer", "populosity"])
    frames = load_frames(dst)
    assert len(frames) == 3


def test_main_reports_runtime_errors(tmp_path):
    with pytest.raises(SystemExit) as info:
        rg_main.main([str(tmp_path / "missing.png"), str(tmp_path / "out.gif")])
    assert str(info.value.code).startswith("error:")
