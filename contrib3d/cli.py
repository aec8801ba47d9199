"""Command line interface for rendering contribution snapshots.

Usage:
    contrib3d export <github-username> --output ./snapshots
    contrib3d stats <github-username>
"""

import asyncio
from pathlib import Path

import typer
from loguru import logger

from contrib3d.core.logger import setup_logger
from contrib3d.errors import ContributionsError
from contrib3d.render.surface import MatplotlibSurface
from contrib3d.services.contributions_service import ContributionsSession
from contrib3d.services.contributions_service import github_fetcher
from contrib3d.services.exporter import save_to_directory
from contrib3d.settings import Settings


app = typer.Typer(help="3D GitHub contribution snapshots", no_args_is_help=True)


def _load(username: str, settings: Settings) -> ContributionsSession:
    session = ContributionsSession()
    try:
        asyncio.run(session.load(username, github_fetcher(settings)))
    except ContributionsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    return session


@app.command()
def export(
    username: str = typer.Argument(..., help="GitHub username"),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
    width: int | None = typer.Option(None, help="Image width in pixels"),
    height: int | None = typer.Option(None, help="Image height in pixels"),
) -> None:
    """Fetch a user's contributions and save a PNG snapshot of the 3D chart."""

    settings = Settings()
    setup_logger(level=settings.log_level)
    session = _load(username, settings)

    surface = MatplotlibSurface(
        width=width or settings.snapshot_width,
        height=height or settings.snapshot_height,
        dpi=settings.snapshot_dpi,
    )
    filename = session.export(surface, save_to_directory(output))
    if filename is None:
        typer.echo("Nothing to export", err=True)
        raise typer.Exit(code=1)

    typer.echo(str(output / filename))


@app.command()
def stats(username: str = typer.Argument(..., help="GitHub username")) -> None:
    """Print contribution statistics for a user."""

    settings = Settings()
    setup_logger(level=settings.log_level)
    session = _load(username, settings)

    scene = session.scene()
    if scene is None:
        raise typer.Exit(code=1)

    logger.debug(f"Computed stats for {scene.username}")
    typer.echo(f"Total:       {scene.total_count:,}")
    typer.echo(f"Active days: {scene.stats.active_days}/{scene.stats.total_days}")
    typer.echo(f"Max daily:   {scene.stats.max_daily_count}")
    typer.echo(f"Avg daily:   {scene.stats.average_daily}")
    typer.echo(f"Active rate: {scene.stats.active_rate_percent}%")


if __name__ == "__main__":
    app()
