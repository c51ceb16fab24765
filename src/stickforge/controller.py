"""Editor controller - the single owner of mutable animation state.

Engine functions in :mod:`stickforge.pipeline` are pure; this controller
holds the timeline, the selection and the undo history, and passes state to
the engine explicitly.  A UI layer calls into it for every edit, drag and
playback tick.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from stickforge.config import AppConfig
from stickforge.models.enums import PlaybackMode
from stickforge.models.pose import MIN_DURATION, Frame, Pose, rest_pose, total_duration
from stickforge.models.project import Background, Project
from stickforge.models.skeleton import joint_id_for
from stickforge.pipeline.bake import build_export
from stickforge.pipeline.ik import IKChainState, apply_ik, begin_ik, solve_two_joint_ik
from stickforge.pipeline.playback import PlaybackClock
from stickforge.pipeline.posing import drag_joint, hit_test
from stickforge.pipeline.sampler import pose_at_time

if TYPE_CHECKING:
    from pathlib import Path

    from stickforge.models.export import BakedExport

logger = logging.getLogger(__name__)


@dataclass
class EditorState:
    frames: list[Frame]
    current_index: int = 0
    selected_joint: int | None = None
    background: Background | None = None


@dataclass(frozen=True)
class _Snapshot:
    frames: tuple[Frame, ...]
    current_index: int
    selected_joint: int | None
    background: Background | None


@dataclass
class _DragSession:
    joint_id: int
    chain: IKChainState | None = None


@dataclass
class EditorController:
    """Keyframe editing, posing, history and live playback."""

    state: EditorState
    config: AppConfig = field(default_factory=AppConfig)
    clock: Callable[[], float] = time.perf_counter

    def __post_init__(self) -> None:
        limit = self.config.editor.history_limit
        self._undo: deque[_Snapshot] = deque(maxlen=limit)
        self._redo: deque[_Snapshot] = deque(maxlen=limit)
        self._drag: _DragSession | None = None
        self._playback = PlaybackClock(self.config.playback.mode, clock=self.clock)

    @classmethod
    def new(cls, frames: list[Frame] | None = None, *, config: AppConfig | None = None) -> EditorController:
        """Start a controller, by default with two rest-pose keyframes."""
        config = config or AppConfig()
        if not frames:
            duration = config.editor.default_duration
            frames = [Frame(duration=duration, points=rest_pose()) for _ in range(2)]
        return cls(state=EditorState(frames=list(frames)), config=config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def frames(self) -> list[Frame]:
        return self.state.frames

    @property
    def current_frame(self) -> Frame:
        return self.state.frames[self.state.current_index]

    def current_pose(self) -> Pose:
        return list(self.current_frame.points)

    def onion_skin_pose(self) -> Pose | None:
        """The previous keyframe's pose, drawn faintly behind the current one."""
        if self.state.current_index == 0:
            return None
        return list(self.state.frames[self.state.current_index - 1].points)

    def total_duration(self) -> float:
        return total_duration(self.state.frames)

    # ------------------------------------------------------------------
    # Keyframe editing
    # ------------------------------------------------------------------

    def select_frame(self, index: int) -> None:
        self._check_index(index)
        self.state.current_index = index

    def add_frame(self) -> Frame:
        """Clone the current keyframe, insert it after, and select the clone."""
        self._push_history()
        clone = self.current_frame.clone()
        index = self.state.current_index + 1
        self.state.frames.insert(index, clone)
        self.state.current_index = index
        return clone

    def delete_frame(self, index: int) -> bool:
        """Delete keyframe *index*; the last remaining keyframe is never deleted."""
        if len(self.state.frames) <= 1:
            logger.debug("Refusing to delete the last keyframe")
            return False
        self._check_index(index)
        self._push_history()
        del self.state.frames[index]
        if self.state.current_index >= len(self.state.frames):
            self.state.current_index = len(self.state.frames) - 1
        return True

    def set_duration(self, index: int, seconds: float) -> None:
        self._check_index(index)
        if not math.isfinite(seconds):
            msg = f"duration must be a finite number, got {seconds}"
            raise ValueError(msg)
        self._push_history()
        frame = self.state.frames[index]
        self.state.frames[index] = frame.model_copy(update={"duration": max(seconds, MIN_DURATION)})

    def set_easing(self, joint_id: int, easing: str | None) -> None:
        """Set the arrival easing of *joint_id* on the current keyframe."""
        joint_id = joint_id_for(joint_id)
        self._push_history()
        self._update_point(joint_id, easing=easing)

    def toggle_ignored(self, joint_id: int) -> bool:
        """Flip whether *joint_id* is keyed on the current keyframe."""
        joint_id = joint_id_for(joint_id)
        self._push_history()
        ignored = not self.current_frame.points[joint_id].is_ignored
        self._update_point(joint_id, is_ignored=ignored)
        return ignored

    def set_background(self, background: Background | None) -> None:
        self._push_history()
        self.state.background = background

    # ------------------------------------------------------------------
    # Posing
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> int | None:
        return hit_test(self.current_frame.points, x, y, self.config.editor.selection_radius)

    def begin_drag(self, joint_id: int, *, use_ik: bool | None = None) -> bool:
        """Start dragging *joint_id*.  Returns ``False`` while playing.

        Raises :class:`KeyError` for an unknown joint before touching history.
        """
        if self.is_playing:
            return False
        joint_id = joint_id_for(joint_id)
        if use_ik is None:
            use_ik = self.config.editor.use_ik
        self._push_history()
        chain = begin_ik(self.current_frame.points, joint_id) if use_ik else None
        self._drag = _DragSession(joint_id=joint_id, chain=chain)
        self.state.selected_joint = joint_id
        return True

    def drag_to(self, x: float, y: float) -> Pose | None:
        """Apply one pointer move to the dragged joint and return the new pose."""
        if self._drag is None:
            return None
        points = self.current_frame.points
        if self._drag.chain is not None:
            solution = solve_two_joint_ik(self._drag.chain, x, y)
            new_points = apply_ik(points, self._drag.chain, solution)
        else:
            new_points = drag_joint(points, self._drag.joint_id, x, y)
        self._replace_points(new_points)
        return list(new_points)

    def end_drag(self) -> None:
        self._drag = None

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._snapshot())
        self._restore(self._undo.pop())
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._snapshot())
        self._restore(self._redo.pop())
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    # ------------------------------------------------------------------
    # Project I/O
    # ------------------------------------------------------------------

    def load_data(self, data: Any) -> None:
        """Replace the timeline from a decoded project document.

        Raises :class:`~stickforge.models.project.ProjectLoadError` without
        touching the current state if the document is malformed.
        """
        project = Project.from_data(data)
        self._apply_project(project)

    def load_project(self, path: Path) -> None:
        project = Project.load(path)
        self._apply_project(project)

    def to_project(self, name: str = "untitled") -> Project:
        return Project(name=name, keyframes=list(self.state.frames), background=self.state.background)

    def save_project(self, path: Path, name: str = "untitled") -> Path:
        return self.to_project(name).save(path)

    def export(
        self,
        name: str,
        fps: int | None = None,
        mode: PlaybackMode | str | None = None,
    ) -> BakedExport:
        return build_export(
            name,
            self.state.frames,
            fps or self.config.playback.fps,
            mode or self.config.playback.mode,
        )

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self._playback.running

    @property
    def playback_mode(self) -> PlaybackMode:
        return self._playback.mode

    def set_playback_mode(self, mode: PlaybackMode | str) -> None:
        self._playback.mode = PlaybackMode(mode)

    def start_playback(self, now: float | None = None) -> None:
        self._drag = None
        self._playback.start(now)

    def stop_playback(self) -> None:
        self._playback.stop()

    def tick(self, now: float | None = None) -> Pose | None:
        """Pose for this display refresh, or ``None`` when not playing."""
        position = self._playback.tick(self.total_duration(), now)
        if position is None:
            return None
        pose = pose_at_time(self.state.frames, position.time)
        if position.finished:
            self._playback.stop()
        return pose

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.state.frames):
            msg = f"frame index out of range: {index}"
            raise IndexError(msg)

    def _apply_project(self, project: Project) -> None:
        self._push_history()
        self.state.frames = list(project.keyframes)
        self.state.current_index = 0
        self.state.selected_joint = None
        self.state.background = project.background
        logger.info("Loaded project '%s' (%d keyframes)", project.name, len(project.keyframes))

    def _update_point(self, joint_id: int, **changes: object) -> None:
        points = list(self.current_frame.points)
        points[joint_id] = points[joint_id].model_copy(update=changes)
        self._replace_points(points)

    def _replace_points(self, points: Pose) -> None:
        index = self.state.current_index
        self.state.frames[index] = self.state.frames[index].model_copy(update={"points": list(points)})

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            frames=tuple(f.model_copy(update={"points": list(f.points)}) for f in self.state.frames),
            current_index=self.state.current_index,
            selected_joint=self.state.selected_joint,
            background=self.state.background.model_copy() if self.state.background else None,
        )

    def _push_history(self) -> None:
        self._undo.append(self._snapshot())
        self._redo.clear()

    def _restore(self, snap: _Snapshot) -> None:
        self.state.frames = [f.model_copy(update={"points": list(f.points)}) for f in snap.frames]
        self.state.current_index = snap.current_index
        self.state.selected_joint = snap.selected_joint
        self.state.background = snap.background.model_copy() if snap.background else None
