"""Tests for the independent-channel time sampler."""

import pytest

from stickforge.models import Frame, Point
from stickforge.pipeline.sampler import pose_at_time


def _frames(*poses: list[Point], duration: float = 1.0) -> list[Frame]:
    return [Frame(id=i + 1, duration=duration, points=p) for i, p in enumerate(poses)]


def test_head_nod_midpoint(head_nod_timeline):
    pose = pose_at_time(head_nod_timeline, 0.5)
    assert pose[0].x == pytest.approx(400)
    assert pose[0].y == pytest.approx(155)
    assert pose[7].x == pytest.approx(400)
    assert pose[7].y == pytest.approx(330)


def test_time_outside_timeline_clamps(head_nod_timeline):
    assert pose_at_time(head_nod_timeline, -1.0)[0].y == pytest.approx(180)
    assert pose_at_time(head_nod_timeline, 0.0)[0].y == pytest.approx(180)
    assert pose_at_time(head_nod_timeline, 1.0)[0].y == pytest.approx(130)
    assert pose_at_time(head_nod_timeline, 7.5)[0].y == pytest.approx(130)


def test_uses_easing_of_next_keyframe(rest_points, move_joint):
    end = move_joint(rest_points, 0, 400, 80, easing="easeInQuad")
    pose = pose_at_time(_frames(rest_points, end), 0.5)
    assert pose[0].y == pytest.approx(180 - 100 * 0.25)


def test_ignored_joint_holds_earlier_value(rest_points, move_joint):
    middle = move_joint(rest_points, 9, 999, 999, is_ignored=True)
    middle = move_joint(middle, 0, 400, 100, easing="linear")
    timeline = _frames(rest_points, middle, rest_points)

    pose = pose_at_time(timeline, 1.0)
    assert (pose[9].x, pose[9].y) == pytest.approx((370, 470))
    # Non-ignored joints still hit keyframe 1 exactly.
    assert pose[0].y == pytest.approx(100)


def test_ignored_keyframe_is_skipped_when_blending(rest_points, move_joint):
    middle = move_joint(rest_points, 9, 999, 999, is_ignored=True)
    last = move_joint(rest_points, 9, 470, 470, easing="linear")
    timeline = _frames(rest_points, middle, last)

    assert pose_at_time(timeline, 1.0)[9].x == pytest.approx(420)
    assert pose_at_time(timeline, 1.5)[9].x == pytest.approx(445)


def test_no_future_keyframe_holds_value(rest_points, move_joint):
    middle = move_joint(rest_points, 4, 250, 200, easing="linear")
    last = move_joint(rest_points, 4, 0, 0, is_ignored=True)
    timeline = _frames(rest_points, middle, last)

    pose = pose_at_time(timeline, 1.5)
    assert (pose[4].x, pose[4].y) == pytest.approx((250, 200))


def test_joint_ignored_everywhere_falls_back_to_first_frame(rest_points, move_joint):
    first = move_joint(rest_points, 6, 510, 240, is_ignored=True)
    second = move_joint(rest_points, 6, 600, 300, is_ignored=True)
    pose = pose_at_time(_frames(first, second), 0.5)
    assert (pose[6].x, pose[6].y) == pytest.approx((510, 240))


def test_single_keyframe_timeline(rest_points):
    timeline = _frames(rest_points)
    for t in (0.0, 0.5, 3.0):
        pose = pose_at_time(timeline, t)
        assert [(p.x, p.y) for p in pose] == [(p.x, p.y) for p in rest_points]


def test_uneven_durations(rest_points, move_joint):
    second = move_joint(rest_points, 0, 400, 80, easing="linear")
    third = move_joint(rest_points, 0, 400, 180, easing="linear")
    timeline = [
        Frame(duration=0.5, points=rest_points),
        Frame(duration=2.0, points=second),
        Frame(duration=1.0, points=third),
    ]
    assert pose_at_time(timeline, 0.25)[0].y == pytest.approx(130)
    assert pose_at_time(timeline, 1.5)[0].y == pytest.approx(130)


def test_empty_timeline_rejected():
    with pytest.raises(ValueError):
        pose_at_time([], 0.0)


def test_returns_full_pose(head_nod_timeline):
    pose = pose_at_time(head_nod_timeline, 0.3)
    assert [p.id for p in pose] == list(range(12))
