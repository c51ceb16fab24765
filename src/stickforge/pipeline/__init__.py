"""StickForge motion engine - easing, FK/IK, sampling, playback and baking."""

from stickforge.pipeline.bake import bake, build_export, export_baked, validate_export
from stickforge.pipeline.easing import available_easings, ease, resolve_easing
from stickforge.pipeline.ik import IKChainState, IKSolution, apply_ik, begin_ik, solve_two_joint_ik
from stickforge.pipeline.interpolate import interpolate
from stickforge.pipeline.playback import PlaybackClock, PlaybackPosition, map_time
from stickforge.pipeline.posing import drag_joint, hit_test
from stickforge.pipeline.render import render_baked_gif, render_pose_image
from stickforge.pipeline.sampler import pose_at_time

__all__ = [
    "IKChainState",
    "IKSolution",
    "PlaybackClock",
    "PlaybackPosition",
    "apply_ik",
    "available_easings",
    "bake",
    "begin_ik",
    "build_export",
    "drag_joint",
    "ease",
    "export_baked",
    "hit_test",
    "interpolate",
    "map_time",
    "pose_at_time",
    "render_baked_gif",
    "render_pose_image",
    "resolve_easing",
    "solve_two_joint_ik",
    "validate_export",
]
