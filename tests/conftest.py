"""Shared fixtures for StickForge tests."""

from pathlib import Path

import pytest

from stickforge.models import Frame, Point, Project, rest_pose


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config lookups and created directories out of the real home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def moved(points: list[Point], joint_id: int, x: float, y: float, **extra: object) -> list[Point]:
    """Copy of *points* with one joint relocated."""
    return [p.model_copy(update={"x": x, "y": y, **extra}) if p.id == joint_id else p for p in points]


@pytest.fixture
def move_joint():
    return moved


@pytest.fixture
def rest_points() -> list[Point]:
    return rest_pose()


@pytest.fixture
def head_nod_timeline(rest_points: list[Point]) -> list[Frame]:
    """Two keyframes, 1s apart; only the head moves (400,180) -> (400,130)."""
    end = moved(rest_points, 0, 400, 130, easing="easeInOutCubic")
    return [
        Frame(id=1, duration=1.0, points=rest_points),
        Frame(id=2, duration=1.0, points=end),
    ]


@pytest.fixture
def arm_swing_poses(rest_points: list[Point]) -> tuple[list[Point], list[Point]]:
    """Rest pose and a pose with the left arm raised and the root shifted."""
    b = moved(rest_points, 7, 420, 320)
    b = moved(b, 3, 370, 180)
    b = moved(b, 4, 350, 140)
    b = moved(b, 9, 330, 460)
    return rest_points, b


@pytest.fixture
def sample_project(head_nod_timeline: list[Frame]) -> Project:
    return Project(name="nod", keyframes=head_nod_timeline)


@pytest.fixture
def project_file(sample_project: Project, tmp_path: Path) -> Path:
    return sample_project.save(tmp_path / "nod" / "project.json")
