"""Test the image generation script."""

import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "generate_ogp_images.py"


@pytest.fixture(scope="module")
def script():
    """Load scripts/generate_ogp_images.py as a module."""
    spec = importlib.util.spec_from_file_location("generate_ogp_images", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_main_generates_and_reports(script, tmp_path, capsys):
    exit_code = script.main(["--output-dir", str(tmp_path), "--total", "3"])

    assert exit_code == 0
    assert sorted(path.name for path in tmp_path.iterdir()) == ["1.png", "2.png", "3.png"]
    assert "Created 3 new image(s), 3 total" in capsys.readouterr().out


def test_main_second_run_creates_nothing(script, tmp_path, capsys):
    script.main(["--output-dir", str(tmp_path), "--total", "2"])
    capsys.readouterr()

    exit_code = script.main(["--output-dir", str(tmp_path), "--total", "2"])

    assert exit_code == 0
    assert "Created 0 new image(s)" in capsys.readouterr().out


def test_main_reports_filesystem_errors(script, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    exit_code = script.main(["--output-dir", str(blocker / "ogp"), "--total", "2"])

    assert exit_code == 1


def test_parse_args_rejects_non_positive_total(script):
    with pytest.raises(SystemExit):
        script.parse_args(["--total", "0"])


def test_parse_args_defaults_come_from_config(script):
    from app.config import get_config

    args = script.parse_args([])

    assert args.total == get_config().OGP_TOTAL_IMAGES
    assert args.output_dir == get_config().ogp_image_dir
    assert args.image_format == get_config().OGP_IMAGE_FORMAT
