"""Bake a keyframe timeline to a fixed-rate sample sequence and export it."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader

from stickforge.models.enums import PlaybackMode
from stickforge.models.export import BakedExport, BakedMeta
from stickforge.models.pose import BakedFrame, BakedPoint, Frame, Timeline, total_duration
from stickforge.pipeline.playback import map_time
from stickforge.pipeline.render import render_baked_gif
from stickforge.pipeline.sampler import pose_at_time
from stickforge.validation import schema_path, validate_baked_json

if TYPE_CHECKING:
    from stickforge.config import CanvasSettings, RenderSettings
    from stickforge.models.export import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30
PLAYER_TEMPLATE = "player.html.jinja2"


# ---------------------------------------------------------------------------
# Baking
# ---------------------------------------------------------------------------


def export_duration(timeline: Timeline, mode: PlaybackMode | str) -> float:
    """Length of one baked cycle: twice the timeline for ping-pong."""
    total = total_duration(timeline)
    return 2 * total if PlaybackMode(mode) is PlaybackMode.PINGPONG else total


def bake(
    timeline: Timeline,
    fps: int = DEFAULT_FPS,
    mode: PlaybackMode | str = PlaybackMode.LOOP,
) -> list[BakedFrame]:
    """Sample *timeline* every ``1 / fps`` seconds over one playback cycle.

    Coordinates are rounded to one decimal place.  Sample times are computed
    as ``i / fps`` rather than accumulated, so the output is deterministic.
    """
    if fps <= 0:
        msg = "fps must be positive"
        raise ValueError(msg)
    mode = PlaybackMode(mode)
    total = total_duration(timeline)
    duration = export_duration(timeline, mode)
    count = math.floor(duration * fps + 1e-9) + 1

    baked: list[BakedFrame] = []
    for i in range(count):
        t = i / fps
        pose = pose_at_time(timeline, _cycle_time(t, total, mode))
        baked.append(
            BakedFrame(
                time=round(t, 6),
                points=[BakedPoint(id=p.id, x=round(p.x, 1), y=round(p.y, 1)) for p in pose],
            )
        )
    logger.debug("Baked %d samples at %d fps (%s, %.3fs)", len(baked), fps, mode, duration)
    return baked


def build_export(
    name: str,
    timeline: Timeline,
    fps: int = DEFAULT_FPS,
    mode: PlaybackMode | str = PlaybackMode.LOOP,
) -> BakedExport:
    """Assemble the export document: metadata, editable keyframes and samples."""
    mode = PlaybackMode(mode)
    baked = bake(timeline, fps, mode)
    keyframes = [
        Frame(
            id=f.id,
            duration=f.duration,
            points=[p.moved(round(p.x), round(p.y)) for p in f.points],
        )
        for f in timeline
    ]
    meta = BakedMeta(
        name=name,
        fps=fps,
        mode=mode,
        total_duration=export_duration(timeline, mode),
        total_frames=len(baked),
    )
    return BakedExport(meta=meta, keyframes=keyframes, baked_animation=baked)


def _cycle_time(t: float, total: float, mode: PlaybackMode) -> float:
    """Timeline time for a bake sample at *t* within one cycle.

    Identical to :func:`map_time` except that a sample landing exactly on
    the cycle end stays there instead of wrapping back to the start.
    """
    if total <= 0:
        return 0.0
    if t >= total and mode is not PlaybackMode.PINGPONG:
        return 0.0 if mode is PlaybackMode.REVERSE else total
    if mode is PlaybackMode.PINGPONG and t >= 2 * total:
        return 0.0
    return map_time(t, total, mode).time


# ---------------------------------------------------------------------------
# Dry-run validation
# ---------------------------------------------------------------------------


@dataclass
class DryRunCheck:
    """A single validation result for the dry-run report."""

    label: str
    passed: bool
    message: str = ""


@dataclass
class DryRunResult:
    """Aggregated result of a dry-run export validation."""

    checks: list[DryRunCheck] = field(default_factory=list)
    output_dir: Path = field(default_factory=lambda: Path("output"))
    estimated_frames: int = 0
    estimated_files: int = 0

    @property
    def valid(self) -> bool:
        return all(c.passed for c in self.checks)


def validate_export(timeline: Timeline, config: ExportConfig) -> DryRunResult:
    """Validate export inputs without baking or writing anything."""
    checks: list[DryRunCheck] = []

    count = len(timeline)
    checks.append(
        DryRunCheck(
            label=f"{count} keyframe{'s' if count != 1 else ''} loaded",
            passed=count >= 1,
            message="Timeline is empty" if count < 1 else "",
        )
    )

    duration = export_duration(timeline, config.mode) if count else 0.0
    checks.append(
        DryRunCheck(
            label=f"Export duration {duration:.2f}s ({config.mode})",
            passed=duration > 0,
            message="A single keyframe bakes to one static sample" if duration <= 0 else "",
        )
    )

    checks.append(
        DryRunCheck(
            label="Export schema available",
            passed=schema_path().exists(),
            message=f"Missing: {schema_path().name}" if not schema_path().exists() else "",
        )
    )

    if config.include_html:
        template_ok = (Path(__file__).resolve().parent.parent / "templates" / PLAYER_TEMPLATE).exists()
        checks.append(
            DryRunCheck(
                label="Player template available",
                passed=template_ok,
                message=f"Missing: {PLAYER_TEMPLATE}" if not template_ok else "",
            )
        )

    frames = math.floor(duration * config.fps + 1e-9) + 1
    files = 1 + int(config.include_html) + int(config.include_gif)
    return DryRunResult(
        checks=checks,
        output_dir=config.output_dir,
        estimated_frames=frames,
        estimated_files=files,
    )


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def export_baked(
    export: BakedExport,
    config: ExportConfig,
    *,
    render: RenderSettings | None = None,
    canvas: CanvasSettings | None = None,
) -> Path:
    """Write a baked export document (and optional extras) to disk.

    The output structure is::

        output/
            <name>.json     - baked export document
            player.html     - standalone replay page (``include_html``)
            <name>.gif      - animated preview (``include_gif``)

    Returns
    -------
    Path
        The path of the written JSON document.
    """
    data = export.to_dict()
    validate_baked_json(data)

    out = config.output_dir
    out.mkdir(parents=True, exist_ok=True)

    json_path = out / f"{export.meta.name}.json"
    json_path.write_text(json.dumps(data, indent=2))
    logger.info("Wrote %s (%d samples)", json_path, export.meta.total_frames)

    if config.include_html:
        env = Environment(
            loader=PackageLoader("stickforge", "templates"),
            autoescape=True,
        )
        html = env.get_template(PLAYER_TEMPLATE).render(
            name=export.meta.name,
            width=canvas.width if canvas else 800,
            height=canvas.height if canvas else 600,
            skeleton_color=render.skeleton_color if render else "#3b82f6",
            junction_color=render.junction_color if render else "#ffffff",
            animation=data,
        )
        html_path = out / "player.html"
        html_path.write_text(html)
        logger.info("Rendered %s", html_path)

    if config.include_gif:
        render_baked_gif(
            export.baked_animation,
            out / f"{export.meta.name}.gif",
            fps=export.meta.fps,
            settings=render,
            canvas=canvas,
        )

    return json_path
