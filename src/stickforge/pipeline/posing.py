"""Interactive posing: hit testing and hierarchical drag propagation."""

from __future__ import annotations

import math
from collections.abc import Sequence

from stickforge.models.pose import Point, Pose
from stickforge.models.skeleton import descendants


def hit_test(points: Sequence[Point], x: float, y: float, radius: float) -> int | None:
    """Return the id of the closest joint within *radius* of (x, y)."""
    best: int | None = None
    best_dist = radius
    for p in points:
        dist = math.hypot(p.x - x, p.y - y)
        if dist <= best_dist:
            best, best_dist = p.id, dist
    return best


def drag_joint(points: Sequence[Point], joint_id: int, x: float, y: float) -> Pose:
    """Move *joint_id* to (x, y) and translate all of its descendants with it."""
    moved_ids = {joint_id, *descendants(joint_id)}
    target = next((p for p in points if p.id == joint_id), None)
    if target is None:
        msg = f"unknown joint id: {joint_id}"
        raise KeyError(msg)
    dx = x - target.x
    dy = y - target.y
    return [p.moved(p.x + dx, p.y + dy) if p.id in moved_ids else p for p in points]
