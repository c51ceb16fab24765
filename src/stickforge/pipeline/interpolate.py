"""Hierarchical forward-kinematics blending between two full poses."""

from __future__ import annotations

import math
from collections.abc import Sequence

from stickforge.models.pose import Point, Pose, points_by_id
from stickforge.models.skeleton import PARENT_MAP, ROOT_ID, TOPOLOGICAL_ORDER
from stickforge.pipeline.easing import ease


def interpolate(pose_a: Sequence[Point], pose_b: Sequence[Point], t: float) -> Pose:
    """Blend *pose_a* toward *pose_b* at normalised time *t*.

    The root is blended in Cartesian space.  Every other joint is blended as
    an (angle, length) pair relative to its parent and re-attached to the
    parent's *already blended* position, so bones rotate rigidly instead of
    stretching.  Each joint eases *t* with the curve on its ``pose_b`` point.

    If either pose has no root entry, *pose_a* is returned unchanged.
    """
    a = points_by_id(pose_a)
    b = points_by_id(pose_b)
    if ROOT_ID not in a or ROOT_ID not in b:
        return list(pose_a)

    root_a, root_b = a[ROOT_ID], b[ROOT_ID]
    root_t = ease(root_b.easing, t)
    positions: dict[int, tuple[float, float]] = {
        ROOT_ID: (_lerp(root_a.x, root_b.x, root_t), _lerp(root_a.y, root_b.y, root_t)),
    }

    for joint_id in TOPOLOGICAL_ORDER:
        parent_id = PARENT_MAP[joint_id]
        if parent_id is None:
            continue
        if joint_id not in a or joint_id not in b or parent_id not in positions:
            continue

        angle_a, length_a = _polar(a[parent_id], a[joint_id])
        angle_b, length_b = _polar(b[parent_id], b[joint_id])
        delta = normalize_angle(angle_b - angle_a)

        joint_t = ease(b[joint_id].easing, t)
        angle = angle_a + delta * joint_t
        length = _lerp(length_a, length_b, joint_t)

        px, py = positions[parent_id]
        positions[joint_id] = (px + math.cos(angle) * length, py + math.sin(angle) * length)

    return [
        Point(id=p.id, x=positions[p.id][0], y=positions[p.id][1])
        if p.id in positions
        else p
        for p in pose_a
    ]


def normalize_angle(angle: float) -> float:
    """Wrap *angle* into (-pi, pi] so rotations take the short way round."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def _polar(parent: Point, child: Point) -> tuple[float, float]:
    dx = child.x - parent.x
    dy = child.y - parent.y
    return math.atan2(dy, dx), math.hypot(dx, dy)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
