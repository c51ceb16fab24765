"""Closed-form two-joint inverse kinematics for arms and legs.

A chain is root -> mid joint -> effector (shoulder/neck -> elbow -> hand,
pelvis -> knee -> foot).  Segment lengths and the bend side are captured
once when a drag starts and stay fixed until it ends, so elbows and knees
never flip sides mid-gesture.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from stickforge.models.pose import Point, Pose, points_by_id
from stickforge.models.skeleton import IK_CHAINS

IK_EPSILON = 1e-4


@dataclass(frozen=True)
class IKChainState:
    """Chain geometry frozen at drag start."""

    effector_id: int
    mid_id: int
    root_id: int
    root_x: float
    root_y: float
    d1: float
    d2: float
    bend_dir: int


@dataclass(frozen=True)
class IKSolution:
    mid: tuple[float, float]
    effector: tuple[float, float]


def begin_ik(points: Sequence[Point], effector_id: int) -> IKChainState | None:
    """Capture the chain ending at *effector_id*, or ``None`` if it has none."""
    chain = IK_CHAINS.get(effector_id)
    if chain is None:
        return None
    mid_id, root_id = chain
    by_id = points_by_id(points)
    root, mid, effector = by_id[root_id], by_id[mid_id], by_id[effector_id]

    d1 = math.hypot(mid.x - root.x, mid.y - root.y)
    d2 = math.hypot(effector.x - mid.x, effector.y - mid.y)

    # Keep whichever side the joint is already bent toward.
    cross = (mid.x - root.x) * (effector.y - root.y) - (mid.y - root.y) * (effector.x - root.x)
    bend_dir = -1 if cross > 0 else 1

    return IKChainState(
        effector_id=effector_id,
        mid_id=mid_id,
        root_id=root_id,
        root_x=root.x,
        root_y=root.y,
        d1=d1,
        d2=d2,
        bend_dir=bend_dir,
    )


def solve_two_joint_ik(chain: IKChainState, target_x: float, target_y: float) -> IKSolution:
    """Place the mid joint and effector so the effector reaches the target.

    Unreachable targets are not an error: the distance is clamped and the
    chain extends (or folds) as far as it can toward the target.  Both
    segment lengths are preserved exactly.
    """
    d1, d2 = chain.d1, chain.d2
    dx = target_x - chain.root_x
    dy = target_y - chain.root_y

    dist = math.hypot(dx, dy)
    lo = abs(d1 - d2) + IK_EPSILON
    hi = (d1 + d2) * (1 - IK_EPSILON)
    dist = max(lo, min(dist, hi))

    denom = max(2 * d1 * dist, IK_EPSILON)
    cos_alpha = _clamp((d1 * d1 + dist * dist - d2 * d2) / denom, -1.0, 1.0)
    alpha = math.acos(cos_alpha)

    angle_root = math.atan2(dy, dx) + alpha * chain.bend_dir
    mid_x = chain.root_x + d1 * math.cos(angle_root)
    mid_y = chain.root_y + d1 * math.sin(angle_root)

    angle_mid = math.atan2(target_y - mid_y, target_x - mid_x)
    eff_x = mid_x + d2 * math.cos(angle_mid)
    eff_y = mid_y + d2 * math.sin(angle_mid)

    return IKSolution(mid=(mid_x, mid_y), effector=(eff_x, eff_y))


def apply_ik(points: Sequence[Point], chain: IKChainState, solution: IKSolution) -> Pose:
    """Return a copy of *points* with the chain's mid joint and effector moved."""
    updated: Pose = []
    for p in points:
        if p.id == chain.mid_id:
            updated.append(p.moved(*solution.mid))
        elif p.id == chain.effector_id:
            updated.append(p.moved(*solution.effector))
        else:
            updated.append(p)
    return updated


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(v, hi))
