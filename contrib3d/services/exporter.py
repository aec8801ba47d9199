from collections.abc import Callable
from pathlib import Path

from loguru import logger

from contrib3d.errors import NoSurfaceMountedError
from contrib3d.render.surface import RenderSurface


SaveAction = Callable[[str, bytes], None]


def snapshot_filename(username: str) -> str:
    return f"{username}_contributions_3d.png"


def capture_frame(surface: RenderSurface | None) -> bytes:
    """Request the current frame from a render surface.

    Raises:
        NoSurfaceMountedError: If there is no surface or nothing is rendered.
    """

    if surface is None or not surface.mounted:
        raise NoSurfaceMountedError("No render surface is mounted")
    return surface.capture_frame()


def export_snapshot(
    surface: RenderSurface | None, username: str, save: SaveAction
) -> str | None:
    """Capture the current frame and hand it to a file-save action.

    Returns the filename that was saved, or None when nothing is rendered.
    """

    try:
        image = capture_frame(surface)
    except NoSurfaceMountedError:
        logger.warning(f"Snapshot export skipped for {username!r}: nothing rendered")
        return None

    filename = snapshot_filename(username)
    save(filename, image)
    logger.info(f"Exported snapshot {filename} ({len(image)} bytes)")
    return filename


def save_to_directory(directory: Path) -> SaveAction:
    """Build a save action that writes snapshots into `directory`."""

    def save(filename: str, image: bytes) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_bytes(image)

    return save
