"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from PIL import ImageColor
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from stickforge.models.enums import DEFAULT_EASING, PlaybackMode


def _default_config_dir() -> Path:
    return Path.home() / ".stickforge"


def _default_projects_dir() -> Path:
    return _default_config_dir() / "projects"


class CanvasSettings(BaseSettings):
    """Drawing surface in canvas units (origin top-left, y down)."""

    width: int = 800
    height: int = 600


class PlaybackSettings(BaseSettings):
    """Preview and bake defaults."""

    fps: int = Field(default=30, gt=0)
    mode: PlaybackMode = PlaybackMode.LOOP
    refresh_hz: int = 60


class EditorSettings(BaseSettings):
    """Keyframe editing behaviour."""

    default_duration: float = 0.5
    default_easing: str = DEFAULT_EASING.value
    history_limit: int = Field(default=50, ge=1)
    selection_radius: float = 15.0
    use_ik: bool = True


class RenderSettings(BaseSettings):
    """Colours and sizes for rendered previews."""

    skeleton_color: str = "#3b82f6"
    junction_color: str = "#ffffff"
    onion_skin_color: str = "#ffffff"
    onion_skin_opacity: float = 0.2
    background_color: str = "#111827"
    point_radius: int = 6
    line_width: int = 4

    @property
    def background_rgb(self) -> tuple[int, int, int]:
        return _hex_to_rgb(self.background_color)

    @property
    def skeleton_rgb(self) -> tuple[int, int, int]:
        return _hex_to_rgb(self.skeleton_color)

    @property
    def junction_rgb(self) -> tuple[int, int, int]:
        return _hex_to_rgb(self.junction_color)

    @property
    def onion_skin_rgba(self) -> tuple[int, int, int, int]:
        alpha = round(max(0.0, min(self.onion_skin_opacity, 1.0)) * 255)
        return (*_hex_to_rgb(self.onion_skin_color), alpha)


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STICKFORGE_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    projects_dir: Path = Field(default_factory=_default_projects_dir)
    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)
    editor: EditorSettings = Field(default_factory=EditorSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))

    def ensure_dirs(self) -> None:
        """Create config and project directories if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.projects_dir.mkdir(parents=True, exist_ok=True)


def load_config() -> AppConfig:
    """Load application config, creating defaults if needed."""
    config = AppConfig()
    config.ensure_dirs()
    return config


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    r, g, b = ImageColor.getrgb(value)[:3]
    return (r, g, b)
