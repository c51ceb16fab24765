"""Resolve a pose at any timeline time, one joint channel at a time.

Unlike :func:`stickforge.pipeline.interpolate.interpolate`, which blends two
known poses hierarchically, the sampler treats every joint as an independent
Cartesian channel.  A joint marked ``is_ignored`` at a keyframe is skipped
there and resolved from the nearest keyframes that do key it, so feet can
stay planted while the arms move through several keyframes.
"""

from __future__ import annotations

import bisect

from stickforge.models.pose import Frame, Point, Pose, Timeline, frame_start_times
from stickforge.models.skeleton import JOINT_IDS
from stickforge.pipeline.easing import ease


def pose_at_time(timeline: Timeline, t: float) -> Pose:
    """Return the resolved pose at global time *t* (seconds)."""
    if not timeline:
        msg = "timeline must contain at least one keyframe"
        raise ValueError(msg)

    starts = frame_start_times(timeline)
    tentative = max(bisect.bisect_right(starts, t) - 1, 0)
    return [_sample_joint(timeline, starts, tentative, joint_id, t) for joint_id in JOINT_IDS]


def _sample_joint(
    timeline: Timeline,
    starts: list[float],
    tentative: int,
    joint_id: int,
    t: float,
) -> Point:
    prev_index = 0
    for i in range(tentative, -1, -1):
        if not _point(timeline[i], joint_id).is_ignored:
            prev_index = i
            break

    next_index: int | None = None
    for i in range(tentative + 1, len(timeline)):
        if not _point(timeline[i], joint_id).is_ignored:
            next_index = i
            break

    prev = _point(timeline[prev_index], joint_id)
    if next_index is None:
        return Point(id=joint_id, x=prev.x, y=prev.y)

    nxt = _point(timeline[next_index], joint_id)
    span = starts[next_index] - starts[prev_index]
    local_t = (t - starts[prev_index]) / span if span > 0 else 1.0
    local_t = min(max(local_t, 0.0), 1.0)
    eased = ease(nxt.easing, local_t)

    return Point(
        id=joint_id,
        x=prev.x + (nxt.x - prev.x) * eased,
        y=prev.y + (nxt.y - prev.y) * eased,
    )


def _point(frame: Frame, joint_id: int) -> Point:
    # Frame validation keeps points sorted by id with every joint present.
    return frame.points[joint_id]
