"""Tests for the two-joint IK solver."""

import math

import pytest

from stickforge.models import Point
from stickforge.pipeline.ik import IK_EPSILON, apply_ik, begin_ik, solve_two_joint_ik


def _dist(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@pytest.fixture
def bent_arm(rest_points: list[Point], move_joint) -> list[Point]:
    """Left arm with the elbow dropped below the neck-hand line."""
    return move_joint(rest_points, 3, 350, 260)


def test_only_effectors_have_chains(rest_points):
    assert begin_ik(rest_points, 0) is None
    assert begin_ik(rest_points, 3) is None
    chain = begin_ik(rest_points, 4)
    assert chain is not None
    assert (chain.mid_id, chain.root_id) == (3, 1)
    assert chain.d1 == pytest.approx(50)
    assert chain.d2 == pytest.approx(50)


@pytest.mark.parametrize("target", [(330, 260), (360, 180), (420, 290), (350, 230)])
def test_reachable_target_is_hit_exactly(bent_arm, target: tuple[float, float]):
    chain = begin_ik(bent_arm, 4)
    assert chain is not None
    solution = solve_two_joint_ik(chain, *target)
    root = (chain.root_x, chain.root_y)
    assert _dist(root, solution.mid) == pytest.approx(chain.d1)
    assert _dist(solution.mid, solution.effector) == pytest.approx(chain.d2)
    assert _dist(solution.effector, target) < 1e-6


def test_unreachable_target_extends_toward_it(rest_points):
    chain = begin_ik(rest_points, 9)
    assert chain is not None
    solution = solve_two_joint_ik(chain, 400, 2000)
    root = (chain.root_x, chain.root_y)
    assert _dist(root, solution.mid) == pytest.approx(chain.d1)
    assert _dist(solution.mid, solution.effector) == pytest.approx(chain.d2)
    reach = (chain.d1 + chain.d2) * (1 - IK_EPSILON)
    assert _dist(root, solution.effector) == pytest.approx(reach, rel=1e-3)
    assert solution.effector[1] > chain.root_y


def test_degenerate_inputs_never_raise(rest_points, move_joint):
    chain = begin_ik(rest_points, 4)
    assert chain is not None
    solution = solve_two_joint_ik(chain, chain.root_x, chain.root_y)
    assert all(math.isfinite(v) for v in (*solution.mid, *solution.effector))

    collapsed = move_joint(rest_points, 3, 400, 230)
    chain = begin_ik(collapsed, 4)
    assert chain is not None
    assert chain.d1 == 0
    solution = solve_two_joint_ik(chain, 320, 250)
    assert all(math.isfinite(v) for v in (*solution.mid, *solution.effector))


def test_existing_bend_side_is_kept(bent_arm):
    chain = begin_ik(bent_arm, 4)
    assert chain is not None
    hand = bent_arm[4]
    solution = solve_two_joint_ik(chain, hand.x, hand.y)
    assert solution.mid[0] == pytest.approx(350)
    assert solution.mid[1] == pytest.approx(260)


def test_continuous_target_path_gives_continuous_mid_path(bent_arm):
    chain = begin_ik(bent_arm, 4)
    assert chain is not None
    previous = None
    for step in range(101):
        target = (300 + step * 0.5, 230 + step * 0.3)
        mid = solve_two_joint_ik(chain, *target).mid
        if previous is not None:
            assert _dist(previous, mid) < 5.0
        previous = mid


def test_apply_ik_moves_only_chain_joints(bent_arm):
    chain = begin_ik(bent_arm, 4)
    assert chain is not None
    solution = solve_two_joint_ik(chain, 330, 270)
    result = apply_ik(bent_arm, chain, solution)
    for before, after in zip(bent_arm, result, strict=True):
        if after.id in (3, 4):
            continue
        assert after == before
    assert (result[4].x, result[4].y) == pytest.approx(solution.effector)
    assert (result[3].x, result[3].y) == pytest.approx(solution.mid)
