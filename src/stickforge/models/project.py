"""Project model - keyframe timeline with save/load."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from stickforge.models.enums import DEFAULT_EASING
from stickforge.models.pose import DEFAULT_DURATION, Frame, next_frame_id

logger = logging.getLogger(__name__)


class ProjectLoadError(ValueError):
    """Raised when a project file cannot be loaded."""


class Background(BaseModel):
    """Reference media drawn behind the figure while posing."""

    source: str | None = None
    opacity: float = Field(default=0.5, ge=0.0, le=1.0)
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0


class Project(BaseModel):
    """A StickForge project: a named keyframe timeline."""

    name: str = "untitled"
    keyframes: list[Frame] = Field(min_length=1)
    background: Background | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "keyframes": [f.to_dict() for f in self.keyframes],
        }
        if self.background is not None:
            data["background"] = self.background.model_dump()
        return data

    def save(self, path: Path) -> Path:
        """Save project to JSON file."""
        save_path = path if path.suffix == ".json" else path / "project.json"
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save_path.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Saved project '%s' (%d keyframes) to %s", self.name, len(self.keyframes), save_path)
        return save_path

    @classmethod
    def from_data(cls, data: Any) -> Project:
        """Validate and coerce a decoded project document.

        Accepts ``{"keyframes": [...]}`` or a bare list of keyframes.  Missing
        frame ids are generated, missing durations default to 0.5 s, missing
        easings default to ``easeInOutCubic`` and a missing point id is taken
        from its position in the list.  Numeric strings are coerced.
        """
        if isinstance(data, list):
            data = {"keyframes": data}
        if not isinstance(data, dict):
            msg = "project must be an object or a list of keyframes"
            raise ProjectLoadError(msg)

        raw_frames = data.get("keyframes")
        if not isinstance(raw_frames, list) or not raw_frames:
            msg = "project has no keyframes"
            raise ProjectLoadError(msg)

        frames: list[dict[str, Any]] = []
        for index, raw in enumerate(raw_frames):
            if not isinstance(raw, dict):
                msg = f"keyframe {index} is not an object"
                raise ProjectLoadError(msg)
            raw_points = raw.get("points")
            if not isinstance(raw_points, list):
                msg = f"keyframe {index} has no points"
                raise ProjectLoadError(msg)
            points = []
            for pos, p in enumerate(raw_points):
                if not isinstance(p, dict):
                    msg = f"keyframe {index} point {pos} is not an object"
                    raise ProjectLoadError(msg)
                point = dict(p)
                if point.get("id") is None:
                    point["id"] = pos
                if not point.get("easing"):
                    point["easing"] = DEFAULT_EASING.value
                points.append(point)
            frame = dict(raw, points=points)
            if frame.get("id") is None:
                frame["id"] = next_frame_id()
            if frame.get("duration") is None:
                frame["duration"] = DEFAULT_DURATION
            frames.append(frame)

        payload = {k: v for k, v in data.items() if k != "keyframes"}
        payload["keyframes"] = frames
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            msg = f"project file has invalid structure: {exc}"
            raise ProjectLoadError(msg) from None

    @classmethod
    def load(cls, path: Path) -> Project:
        """Load project from JSON file."""
        if path.is_dir():
            path = path / "project.json"
        try:
            text = path.read_text()
        except FileNotFoundError:
            msg = f"project file not found: {path}"
            raise ProjectLoadError(msg) from None
        except PermissionError:
            msg = f"permission denied reading project file: {path}"
            raise ProjectLoadError(msg) from None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"project file contains invalid JSON: {exc}"
            raise ProjectLoadError(msg) from None
        project = cls.from_data(data)
        logger.debug("Loaded project '%s' (%d keyframes)", project.name, len(project.keyframes))
        return project
