"""Tests for the command line entry point."""

from __future__ import annotations

import json

from PIL import Image

from app import main


def test_writes_all_outputs(black_png, tmp_path) -> None:
    gcode = tmp_path / "out.gcode"
    svg = tmp_path / "out.svg"
    preview = tmp_path / "out.png"
    config = tmp_path / "config.json"

    code = main([
        str(black_png),
        "--gcode", str(gcode),
        "--svg", str(svg),
        "--preview", str(preview),
        "--config", str(config),
        "--cell-size", "5",
        "--output-width", "40",
        "--save-config",
    ])

    assert code == 0
    assert gcode.read_text().startswith("; G-Code generated")
    assert "<path" in svg.read_text()
    with Image.open(preview) as image:
        assert image.size == (160, 160)
    saved = json.loads(config.read_text())
    assert saved["cell_size"] == 5
    assert saved["output_width"] == 40.0


def test_settings_come_from_config_file(black_png, tmp_path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"cell_size": 10, "output_width": 20.0, "feed_rate": 750}))
    gcode = tmp_path / "out.gcode"

    assert main([str(black_png), "--gcode", str(gcode), "--config", str(config)]) == 0
    text = gcode.read_text()
    assert "G1 F750" in text
    # 2x2 cells: start + 8 peak/valley points + 1 transition
    assert text.count("\nG1 X") == 9


def test_invalid_settings_exit_code(black_png, tmp_path) -> None:
    gcode = tmp_path / "out.gcode"
    code = main([
        str(black_png),
        "--gcode", str(gcode),
        "--config", str(tmp_path / "config.json"),
        "--cell-size", "0",
    ])
    assert code == 1
    assert not gcode.exists()


def test_unreadable_image_exit_code(tmp_path) -> None:
    code = main([
        str(tmp_path / "missing.png"),
        "--gcode", str(tmp_path / "out.gcode"),
        "--config", str(tmp_path / "config.json"),
    ])
    assert code == 1
