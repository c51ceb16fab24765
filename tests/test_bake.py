"""Tests for baking and exporting."""

import json
from pathlib import Path

import pytest
from PIL import Image

from stickforge.models import ExportConfig, Frame, Project
from stickforge.pipeline.bake import bake, build_export, export_baked, validate_export
from stickforge.player import BakedPlayer
from stickforge.validation import validate_baked_json


def test_loop_bake_covers_one_cycle(head_nod_timeline):
    baked = bake(head_nod_timeline, fps=30)
    assert len(baked) == 31
    assert baked[0].time == 0
    assert baked[-1].time == pytest.approx(1.0)
    assert baked[0].points[0].y == 180
    assert baked[15].points[0].y == pytest.approx(155, abs=2)
    assert baked[-1].points[0].y == 130


def test_pingpong_bake_doubles_length(head_nod_timeline):
    baked = bake(head_nod_timeline, fps=10, mode="pingpong")
    assert len(baked) == 21
    assert baked[10].points[0].y == 130
    assert baked[-1].points[0].y == 180
    assert baked[-1].time == pytest.approx(2.0)


def test_reverse_bake_runs_backwards(head_nod_timeline):
    baked = bake(head_nod_timeline, fps=10, mode="reverse")
    assert baked[0].points[0].y == 130
    assert baked[-1].points[0].y == 180


def test_coordinates_rounded_to_one_decimal(head_nod_timeline):
    for frame in bake(head_nod_timeline, fps=7):
        for p in frame.points:
            assert round(p.x, 1) == p.x
            assert round(p.y, 1) == p.y


def test_bake_is_deterministic(head_nod_timeline):
    assert bake(head_nod_timeline, 30, "pingpong") == bake(head_nod_timeline, 30, "pingpong")


def test_single_keyframe_bakes_one_sample(rest_points):
    baked = bake([Frame(points=rest_points)], fps=30)
    assert len(baked) == 1


def test_bad_fps_rejected(head_nod_timeline):
    with pytest.raises(ValueError):
        bake(head_nod_timeline, fps=0)


def test_build_export_document(head_nod_timeline, move_joint):
    head_nod_timeline[1] = head_nod_timeline[1].model_copy(
        update={"points": move_joint(head_nod_timeline[1].points, 4, 300.6, 229.4)}
    )
    export = build_export("nod", head_nod_timeline, fps=30, mode="pingpong")
    data = export.to_dict()

    assert data["meta"] == {
        "name": "nod",
        "fps": 30,
        "mode": "pingpong",
        "totalDuration": 2.0,
        "totalFrames": 61,
    }
    hand = data["keyframes"][1]["points"][4]
    assert (hand["x"], hand["y"]) == (301, 229)
    assert data["keyframes"][1]["points"][0]["easing"] == "easeInOutCubic"
    assert len(data["bakedAnimation"]) == 61
    assert set(data["bakedAnimation"][0]["points"][0]) == {"id", "x", "y"}
    validate_baked_json(data)


def test_export_writes_json_that_reloads(head_nod_timeline, tmp_path: Path):
    export = build_export("nod", head_nod_timeline)
    path = export_baked(export, ExportConfig(output_dir=tmp_path / "out", name="nod"))
    assert path == tmp_path / "out" / "nod.json"

    data = json.loads(path.read_text())
    project = Project.from_data(data)
    assert len(project.keyframes) == 2
    assert project.keyframes[1].points[0].y == 130

    player = BakedPlayer.from_document(data)
    assert player.duration == pytest.approx(1.0)
    assert len(player.frames) == 31


def test_export_optional_html_and_gif(head_nod_timeline, tmp_path: Path):
    export = build_export("nod", head_nod_timeline, fps=10)
    config = ExportConfig(output_dir=tmp_path, name="nod", include_html=True, include_gif=True)
    export_baked(export, config)

    html = (tmp_path / "player.html").read_text()
    assert "nod" in html
    assert "bakedAnimation" in html

    with Image.open(tmp_path / "nod.gif") as gif:
        assert gif.n_frames > 1


def test_validate_export_dry_run(head_nod_timeline, tmp_path: Path):
    config = ExportConfig(output_dir=tmp_path, fps=30, include_html=True)
    result = validate_export(head_nod_timeline, config)
    assert result.valid
    assert result.estimated_frames == 31
    assert result.estimated_files == 2
    labels = [c.label for c in result.checks]
    assert any("keyframes loaded" in lbl for lbl in labels)
    assert any("schema" in lbl for lbl in labels)
    assert any("template" in lbl for lbl in labels)


def test_validate_export_flags_static_timeline(rest_points, tmp_path: Path):
    result = validate_export([Frame(points=rest_points)], ExportConfig(output_dir=tmp_path))
    assert not result.valid
    assert result.estimated_frames == 1
