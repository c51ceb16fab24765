"""Pose, keyframe and baked-sample models."""

from __future__ import annotations

import itertools
import time
from collections.abc import Sequence
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stickforge.models.skeleton import JOINT_COUNT, JOINT_IDS, JOINT_NAMES

# Durations below this are clamped so timeline maths never divides by zero.
MIN_DURATION = 0.01
DEFAULT_DURATION = 0.5

_frame_ids = itertools.count(int(time.time() * 1000))


def next_frame_id() -> int:
    """Return a fresh keyframe id, unique within this process."""
    return next(_frame_ids)


class Point(BaseModel):
    """One joint's position at a keyframe.

    ``easing`` names the curve used when arriving *at* this point; ``None``
    means the default.  ``is_ignored`` excludes the joint from this keyframe
    so the sampler resolves it from neighbouring keyframes instead.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: int
    x: float
    y: float
    easing: str | None = None
    is_ignored: bool = Field(default=False, alias="isIgnored")

    @field_validator("id")
    @classmethod
    def _known_joint(cls, v: int) -> int:
        if v not in JOINT_NAMES:
            msg = f"joint id must be in 0..{JOINT_COUNT - 1}, got {v}"
            raise ValueError(msg)
        return v

    def moved(self, x: float, y: float) -> Point:
        return self.model_copy(update={"x": x, "y": y})

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_defaults=True)


Pose: TypeAlias = list[Point]


class Frame(BaseModel):
    """An authored keyframe: a full pose plus the time until the next one."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: int = Field(default_factory=next_frame_id)
    duration: float = DEFAULT_DURATION
    points: list[Point]

    @field_validator("duration")
    @classmethod
    def _clamp_duration(cls, v: float) -> float:
        return max(v, MIN_DURATION)

    @field_validator("points")
    @classmethod
    def _full_pose(cls, v: list[Point]) -> list[Point]:
        ids = sorted(p.id for p in v)
        if ids != list(JOINT_IDS):
            msg = f"pose must contain each joint id 0..{JOINT_COUNT - 1} exactly once"
            raise ValueError(msg)
        return sorted(v, key=lambda p: p.id)

    def clone(self) -> Frame:
        """Copy this frame under a new id.  Points are immutable and shared."""
        return Frame(duration=self.duration, points=list(self.points))

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "duration": self.duration,
            "points": [p.to_dict() for p in self.points],
        }


Timeline: TypeAlias = Sequence[Frame]


class BakedPoint(BaseModel):
    id: int
    x: float
    y: float


class BakedFrame(BaseModel):
    """A fully resolved, non-authorable sample produced by the baker."""

    time: float
    points: list[BakedPoint]


def total_duration(timeline: Timeline) -> float:
    """Sum of every frame's duration except the last."""
    return sum(f.duration for f in timeline[:-1])


def frame_start_times(timeline: Timeline) -> list[float]:
    """Cumulative start time of each keyframe (frame 0 starts at 0)."""
    starts: list[float] = []
    acc = 0.0
    for frame in timeline:
        starts.append(acc)
        acc += frame.duration
    return starts


def rest_pose() -> Pose:
    """Default T-pose centred on an 800x600 canvas."""
    coords = [
        (400, 180),  # head
        (400, 230),  # neck
        (400, 280),  # spine_mid
        (350, 230),  # l_elbow
        (300, 230),  # l_hand
        (450, 230),  # r_elbow
        (500, 230),  # r_hand
        (400, 330),  # spine_pelvis
        (370, 400),  # l_knee
        (370, 470),  # l_foot
        (430, 400),  # r_knee
        (430, 470),  # r_foot
    ]
    return [Point(id=i, x=x, y=y) for i, (x, y) in enumerate(coords)]


def points_by_id(points: Sequence[Point]) -> dict[int, Point]:
    return {p.id: p for p in points}
