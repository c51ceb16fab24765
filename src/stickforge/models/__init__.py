"""StickForge data models - pure Pydantic, no I/O beyond project files."""

from stickforge.models.enums import DEFAULT_EASING, EasingName, PlaybackMode
from stickforge.models.export import BakedExport, BakedMeta, ExportConfig
from stickforge.models.pose import (
    BakedFrame,
    BakedPoint,
    Frame,
    Point,
    Pose,
    Timeline,
    frame_start_times,
    rest_pose,
    total_duration,
)
from stickforge.models.project import Background, Project, ProjectLoadError
from stickforge.models.skeleton import (
    IK_CHAINS,
    JOINTS,
    PARENT_MAP,
    ROOT_ID,
    TOPOLOGICAL_ORDER,
    Joint,
)

__all__ = [
    "DEFAULT_EASING",
    "IK_CHAINS",
    "JOINTS",
    "PARENT_MAP",
    "ROOT_ID",
    "TOPOLOGICAL_ORDER",
    "Background",
    "BakedExport",
    "BakedFrame",
    "BakedMeta",
    "BakedPoint",
    "EasingName",
    "ExportConfig",
    "Frame",
    "Joint",
    "PlaybackMode",
    "Point",
    "Pose",
    "Project",
    "ProjectLoadError",
    "Timeline",
    "frame_start_times",
    "rest_pose",
    "total_duration",
]
