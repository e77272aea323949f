import json

from PIL import Image

import render_preview


def _write_config(tmp_path, **overrides):
    config = {
        "seed": 7,
        "noise_settings": {"size_vertical": 1, "height": 32},
        "x_start": -4,
        "width": 10,
        "sea_level": 12,
    }
    config.update(overrides)
    path = tmp_path / "preview.json"
    path.write_text(json.dumps(config))
    return path


def test_cli_writes_png(tmp_path):
    config_path = _write_config(tmp_path)
    output = tmp_path / "out" / "preview.png"

    status = render_preview.main(["--config", str(config_path), "--output", str(output)])

    assert status == 0
    with Image.open(output) as img:
        assert img.size == (10, 32)
        assert img.mode == "RGB"


def test_cli_reports_missing_config(tmp_path):
    status = render_preview.main(["--config", str(tmp_path / "missing.json")])
    assert status == 1


def test_cli_reports_malformed_config(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert render_preview.main(["--config", str(path)]) == 1


def test_cli_reports_invalid_settings(tmp_path):
    config_path = _write_config(tmp_path, noise_settings={"size_horizontal": 0})
    output = tmp_path / "never.png"

    assert render_preview.main(["--config", str(config_path), "--output", str(output)]) == 1
    assert not output.exists()
