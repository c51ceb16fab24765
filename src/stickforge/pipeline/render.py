"""Render stick-figure poses and baked sequences with Pillow."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from PIL import Image, ImageDraw

from stickforge.config import CanvasSettings, RenderSettings
from stickforge.models.skeleton import BONES

if TYPE_CHECKING:
    from pathlib import Path

    from stickforge.models.pose import BakedFrame

logger = logging.getLogger(__name__)


class _Positioned(Protocol):
    id: int
    x: float
    y: float


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def draw_pose(
    points: Sequence[_Positioned],
    *,
    onion: Sequence[_Positioned] | None = None,
    settings: RenderSettings | None = None,
    canvas: CanvasSettings | None = None,
) -> Image.Image:
    """Draw a pose (and optionally a translucent onion-skin pose) to an image."""
    settings = settings or RenderSettings()
    canvas = canvas or CanvasSettings()

    img = Image.new("RGBA", (canvas.width, canvas.height), (*settings.background_rgb, 255))

    if onion is not None:
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        _draw_figure(
            ImageDraw.Draw(layer),
            onion,
            bone_colour=settings.onion_skin_rgba,
            joint_colour=settings.onion_skin_rgba,
            settings=settings,
        )
        img = Image.alpha_composite(img, layer)

    _draw_figure(
        ImageDraw.Draw(img),
        points,
        bone_colour=(*settings.skeleton_rgb, 255),
        joint_colour=(*settings.junction_rgb, 255),
        settings=settings,
    )
    return img


def render_pose_image(
    points: Sequence[_Positioned],
    output_path: Path,
    *,
    onion: Sequence[_Positioned] | None = None,
    settings: RenderSettings | None = None,
    canvas: CanvasSettings | None = None,
) -> Path:
    """Render a single pose to a PNG."""
    img = draw_pose(points, onion=onion, settings=settings, canvas=canvas)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.convert("RGB").save(output_path, "PNG")
    logger.debug("Rendered pose to %s", output_path)
    return output_path


def render_baked_gif(
    frames: Sequence[BakedFrame],
    output_path: Path,
    *,
    fps: int = 30,
    settings: RenderSettings | None = None,
    canvas: CanvasSettings | None = None,
) -> Path:
    """Render a baked sequence to a looping animated GIF preview."""
    if not frames:
        msg = "No baked frames to render"
        raise ValueError(msg)

    images = [
        draw_pose(f.points, settings=settings, canvas=canvas).convert("RGB") for f in frames
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    images[0].save(
        output_path,
        "GIF",
        save_all=True,
        append_images=images[1:],
        duration=max(round(1000 / fps), 1),
        loop=0,
    )
    logger.info("Rendered %d-frame GIF preview to %s", len(images), output_path)
    return output_path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _draw_figure(
    draw: ImageDraw.ImageDraw,
    points: Sequence[_Positioned],
    *,
    bone_colour: tuple[int, int, int, int],
    joint_colour: tuple[int, int, int, int],
    settings: RenderSettings,
) -> None:
    by_id = {p.id: (p.x, p.y) for p in points}

    for a, b in BONES:
        if a in by_id and b in by_id:
            draw.line([by_id[a], by_id[b]], fill=bone_colour, width=settings.line_width)

    r = settings.point_radius
    for px, py in by_id.values():
        draw.ellipse([px - r, py - r, px + r, py + r], fill=joint_colour)
