"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from stickforge.models.enums import PlaybackMode

if TYPE_CHECKING:
    from stickforge.models.project import Project

app = typer.Typer(
    name="stickforge",
    help="2D stick-figure keyframe animator and motion baker.",
    no_args_is_help=True,
)


def _load_project(project_path: Path) -> Project:
    from stickforge.models.project import Project, ProjectLoadError

    try:
        return Project.load(project_path)
    except ProjectLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def new(
    name: Annotated[str, typer.Argument(help="Project name")],
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Project directory"),
    ] = None,
    frames: Annotated[int, typer.Option("--frames", "-f", min=1, help="Number of rest-pose keyframes")] = 2,
) -> None:
    """Create a new project with rest-pose keyframes."""
    from stickforge.config import load_config
    from stickforge.models.pose import Frame, rest_pose
    from stickforge.models.project import Project

    config = load_config()
    project_dir = directory or config.projects_dir / name
    project = Project(
        name=name,
        keyframes=[
            Frame(duration=config.editor.default_duration, points=rest_pose()) for _ in range(frames)
        ],
    )
    save_path = project.save(project_dir)
    typer.echo(f"Created project '{name}' at {save_path}")


@app.command()
def info(
    project_path: Annotated[Path, typer.Argument(help="Path to project directory or JSON")],
) -> None:
    """Show keyframes and timing of a project."""
    from stickforge.models.pose import frame_start_times, total_duration

    project = _load_project(project_path)
    starts = frame_start_times(project.keyframes)
    typer.echo(f"Project: {project.name}")
    typer.echo(f"Keyframes: {len(project.keyframes)}")
    typer.echo(f"Total duration: {total_duration(project.keyframes):.2f}s")
    for index, (frame, start) in enumerate(zip(project.keyframes, starts, strict=True)):
        ignored = [p.id for p in frame.points if p.is_ignored]
        line = f"  #{index + 1} id={frame.id} start={start:.2f}s duration={frame.duration:.2f}s"
        if ignored:
            line += f" ignored={ignored}"
        typer.echo(line)


@app.command()
def sample(
    project_path: Annotated[Path, typer.Argument(help="Path to project directory or JSON")],
    elapsed: Annotated[float, typer.Argument(help="Elapsed playback seconds")],
    mode: Annotated[PlaybackMode, typer.Option("--mode", "-m", help="Playback mode")] = PlaybackMode.LOOP,
) -> None:
    """Print the resolved pose after ELAPSED seconds of playback."""
    from stickforge.models.pose import total_duration
    from stickforge.models.skeleton import JOINT_NAMES
    from stickforge.pipeline.playback import map_time
    from stickforge.pipeline.sampler import pose_at_time

    project = _load_project(project_path)
    position = map_time(elapsed, total_duration(project.keyframes), mode)
    pose = pose_at_time(project.keyframes, position.time)
    suffix = " (finished)" if position.finished else ""
    typer.echo(f"t={position.time:.3f}s{suffix}")
    for p in pose:
        typer.echo(f"  {JOINT_NAMES[p.id]:<13} {p.x:8.2f} {p.y:8.2f}")


@app.command()
def bake(
    project_path: Annotated[Path, typer.Argument(help="Path to project directory or JSON")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory"),
    ] = None,
    fps: Annotated[int | None, typer.Option("--fps", min=1, help="Samples per second")] = None,
    mode: Annotated[PlaybackMode | None, typer.Option("--mode", "-m", help="Playback mode")] = None,
    name: Annotated[str | None, typer.Option("--name", "-n", help="Animation name")] = None,
    html: Annotated[bool, typer.Option("--html", help="Also write a standalone player page")] = False,
    gif: Annotated[bool, typer.Option("--gif", help="Also write an animated GIF preview")] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate export without writing files"),
    ] = False,
) -> None:
    """Bake a project to a fixed-framerate export file."""
    from stickforge.config import load_config
    from stickforge.models.export import ExportConfig

    config = load_config()
    project = _load_project(project_path)
    export_config = ExportConfig(
        output_dir=output or Path("output"),
        name=name or project.name,
        fps=fps or config.playback.fps,
        mode=mode or config.playback.mode,
        include_html=html,
        include_gif=gif,
    )

    if dry_run:
        from stickforge.pipeline.bake import validate_export

        result = validate_export(project.keyframes, export_config)
        typer.echo("Dry run: export validation")
        for check in result.checks:
            symbol = "✓" if check.passed else "✗"
            typer.echo(f"  {symbol} {check.label}")
            if not check.passed and check.message:
                typer.echo(f"    {check.message}")
        typer.echo(f"Export would write to: {result.output_dir}/")
        typer.echo(f"Estimated samples: {result.estimated_frames}")
        typer.echo(f"Estimated files: {result.estimated_files}")
        if not result.valid:
            raise typer.Exit(1)
    else:
        from stickforge.pipeline.bake import build_export, export_baked

        export = build_export(export_config.name, project.keyframes, export_config.fps, export_config.mode)
        path = export_baked(export, export_config, render=config.render, canvas=config.canvas)
        typer.echo(f"Baked {export.meta.total_frames} samples to {path}")


@app.command()
def render(
    project_path: Annotated[Path, typer.Argument(help="Path to project directory or JSON")],
    output: Annotated[Path, typer.Option("--output", "-o", help="PNG file to write")] = Path("pose.png"),
    time: Annotated[float | None, typer.Option("--time", "-t", help="Timeline time in seconds")] = None,
    frame: Annotated[
        int | None, typer.Option("--frame", "-f", min=1, help="Keyframe number (1-based)")
    ] = None,
    onion: Annotated[bool, typer.Option("--onion", help="Draw the previous keyframe faintly")] = False,
) -> None:
    """Render a keyframe or a sampled pose to PNG."""
    from stickforge.config import load_config
    from stickforge.pipeline.render import render_pose_image
    from stickforge.pipeline.sampler import pose_at_time

    config = load_config()
    project = _load_project(project_path)
    onion_pose = None
    if frame is not None:
        if frame > len(project.keyframes):
            typer.echo(f"Error: project has only {len(project.keyframes)} keyframes", err=True)
            raise typer.Exit(1)
        points = project.keyframes[frame - 1].points
        if onion and frame > 1:
            onion_pose = project.keyframes[frame - 2].points
    else:
        points = pose_at_time(project.keyframes, time or 0.0)

    path = render_pose_image(points, output, onion=onion_pose, settings=config.render, canvas=config.canvas)
    typer.echo(f"Rendered {path}")


@app.command()
def play(
    baked_path: Annotated[Path, typer.Argument(help="Baked export JSON")],
    elapsed: Annotated[float, typer.Argument(help="Playback time in seconds")] = 0.0,
) -> None:
    """Look up the baked sample a player would show at ELAPSED seconds."""
    from stickforge.models.skeleton import JOINT_NAMES
    from stickforge.player import BakedPlayer, PlayerLoadError

    try:
        player = BakedPlayer.load(baked_path)
    except PlayerLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    frame = player.frame_at(elapsed)
    typer.echo(f"sample t={frame.time:.3f}s of {player.duration:.3f}s ({len(player.frames)} samples)")
    for p in frame.points:
        typer.echo(f"  {JOINT_NAMES[p.id]:<13} {p.x:8.1f} {p.y:8.1f}")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
) -> None:
    """StickForge - 2D stick-figure keyframe animator and motion baker."""
    if version:
        from stickforge import __version__

        typer.echo(f"stickforge {__version__}")
        raise typer.Exit()
