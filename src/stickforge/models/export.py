"""Export configuration and baked document models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from stickforge.models.enums import PlaybackMode
from stickforge.models.pose import BakedFrame, Frame


class ExportConfig(BaseModel):
    """Configuration for baking a timeline to disk."""

    output_dir: Path = Path("output")
    name: str = "my_stickman_anim"
    fps: int = Field(default=30, gt=0)
    mode: PlaybackMode = PlaybackMode.LOOP
    include_html: bool = False
    include_gif: bool = False


class BakedMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    fps: int
    mode: PlaybackMode
    total_duration: float = Field(alias="totalDuration")
    total_frames: int = Field(alias="totalFrames")


class BakedExport(BaseModel):
    """The baked export document: metadata, editable keyframes and samples."""

    model_config = ConfigDict(populate_by_name=True)

    meta: BakedMeta
    keyframes: list[Frame]
    baked_animation: list[BakedFrame] = Field(alias="bakedAnimation")

    def to_dict(self) -> dict[str, object]:
        return {
            "meta": self.meta.model_dump(mode="json", by_alias=True),
            "keyframes": [f.to_dict() for f in self.keyframes],
            "bakedAnimation": [b.model_dump() for b in self.baked_animation],
        }
