"""Replay pre-baked animation samples without running the engine."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stickforge.models.pose import BakedFrame

logger = logging.getLogger(__name__)


class PlayerLoadError(ValueError):
    """Raised when a file has no usable baked animation."""


class BakedPlayer:
    """Scrub and play a ``bakedAnimation`` sample list.

    Lookup is nearest-at-or-after: the first sample whose time is >= the
    requested time.  Past the end, the first sample is shown.
    """

    def __init__(self, frames: list[BakedFrame], duration: float | None = None) -> None:
        if not frames:
            msg = "baked animation has no frames"
            raise PlayerLoadError(msg)
        self.frames = frames
        self.duration = duration if duration else frames[-1].time
        self.current_time = 0.0
        self.playing = False

    @classmethod
    def from_document(cls, data: Any) -> BakedPlayer:
        if not isinstance(data, dict) or not isinstance(data.get("bakedAnimation"), list):
            msg = "file doesn't contain baked animation data; re-export it from the editor"
            raise PlayerLoadError(msg)
        try:
            frames = [BakedFrame.model_validate(f) for f in data["bakedAnimation"]]
        except PydanticValidationError as exc:
            msg = f"baked animation has invalid structure: {exc}"
            raise PlayerLoadError(msg) from None

        duration: float | None = None
        meta = data.get("meta")
        if isinstance(meta, dict) and meta.get("totalDuration"):
            duration = float(meta["totalDuration"])
        player = cls(frames, duration)
        logger.debug("Loaded %d baked frames (%.3fs)", len(frames), player.duration)
        return player

    @classmethod
    def load(cls, path: Path) -> BakedPlayer:
        try:
            data = json.loads(path.read_text())
        except FileNotFoundError:
            msg = f"baked file not found: {path}"
            raise PlayerLoadError(msg) from None
        except json.JSONDecodeError as exc:
            msg = f"invalid JSON file: {exc}"
            raise PlayerLoadError(msg) from None
        return cls.from_document(data)

    def frame_at(self, time: float) -> BakedFrame:
        for frame in self.frames:
            if frame.time >= time:
                return frame
        return self.frames[0]

    @property
    def current_frame(self) -> BakedFrame:
        return self.frame_at(self.current_time)

    def play(self) -> None:
        if self.current_time >= self.duration:
            self.current_time = 0.0
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def stop(self) -> None:
        self.pause()
        self.current_time = 0.0

    def seek(self, time: float) -> BakedFrame:
        """Jump to *time*, pausing playback like dragging a scrubber does."""
        self.pause()
        self.current_time = min(max(time, 0.0), self.duration)
        return self.current_frame

    def advance(self, delta: float) -> BakedFrame:
        """Move the playhead by *delta* seconds, looping at the end."""
        if self.playing:
            self.current_time += delta
            if self.current_time >= self.duration:
                self.current_time = 0.0
        return self.current_frame
