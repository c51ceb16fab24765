"""StickForge - 2D stick-figure keyframe animator and motion baker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stickforge")
except PackageNotFoundError:
    __version__ = "unknown"
