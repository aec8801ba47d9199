"""Headless render surface for contribution scenes.

The interactive viewer runs in the browser; this module draws the same scene
with matplotlib's 3D toolkit so that a still image of the current view can be
produced on the server or from the command line.
"""

import math
from io import BytesIO
from typing import Protocol

from loguru import logger
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers the 3d projection)

from contrib3d.errors import NoSurfaceMountedError
from contrib3d.services.layout import BAR_WIDTH
from contrib3d.services.scene import Scene


BACKGROUND_COLOR = "#0d1117"
TEXT_COLOR = "#e6edf3"


class RenderSurface(Protocol):
    """Anything that can display a scene and hand back its current frame."""

    @property
    def mounted(self) -> bool: ...

    def mount(self, scene: Scene) -> None: ...

    def unmount(self) -> None: ...

    def capture_frame(self) -> bytes: ...


def camera_angles(position: tuple[float, float, float]) -> tuple[float, float]:
    """Convert a y-up camera position into matplotlib elevation and azimuth.

    Scene coordinates are y-up; matplotlib axes are z-up, so the scene's z
    axis is drawn along matplotlib's y axis.
    """

    x, y, z = position
    horizontal = math.hypot(x, z)
    elevation = math.degrees(math.atan2(y, horizontal))
    azimuth = math.degrees(math.atan2(z, x)) if horizontal else -90.0
    return elevation, azimuth


class MatplotlibSurface:
    """Draws a mounted scene with `bar3d` on an Agg canvas."""

    def __init__(self, width: int = 1280, height: int = 960, dpi: int = 100) -> None:
        self.width = width
        self.height = height
        self.dpi = dpi
        self._scene: Scene | None = None

    @property
    def mounted(self) -> bool:
        return self._scene is not None

    def mount(self, scene: Scene) -> None:
        self._scene = scene

    def unmount(self) -> None:
        self._scene = None

    def capture_frame(self) -> bytes:
        """Render the mounted scene and return it as PNG bytes."""

        if self._scene is None:
            raise NoSurfaceMountedError("No scene is mounted on the render surface")

        figure = self._draw(self._scene)
        buffer = BytesIO()
        figure.savefig(buffer, format="png", facecolor=BACKGROUND_COLOR)
        logger.debug(
            f"Captured {self.width}x{self.height} frame for {self._scene.username}"
        )
        return buffer.getvalue()

    def _draw(self, scene: Scene) -> Figure:
        figure = Figure(
            figsize=(self.width / self.dpi, self.height / self.dpi),
            dpi=self.dpi,
            facecolor=BACKGROUND_COLOR,
        )
        ax = figure.add_subplot(111, projection="3d", facecolor=BACKGROUND_COLOR)

        half_width = BAR_WIDTH / 2
        for bar in scene.bars:
            x, _, z = bar.position
            ax.bar3d(
                x - half_width,
                z - half_width,
                0.0,
                BAR_WIDTH,
                BAR_WIDTH,
                bar.height,
                color=bar.color,
                shade=True,
            )

        half_plane_width = scene.plane.width / 2
        half_plane_depth = scene.plane.depth / 2
        ax.set_xlim(-half_plane_width, half_plane_width)
        ax.set_ylim(-half_plane_depth, half_plane_depth)
        top = max(bar.height for bar in scene.bars) + 0.5
        ax.set_zlim(scene.plane.y, top)
        ax.set_box_aspect((scene.plane.width, scene.plane.depth, top - scene.plane.y))

        elevation, azimuth = camera_angles(scene.camera.position)
        ax.view_init(elev=elevation, azim=azimuth)
        ax.set_axis_off()

        ax.set_title(
            f"{scene.title}\n{scene.total_count:,} total · "
            f"{scene.stats.active_days} active days",
            color=TEXT_COLOR,
        )
        return figure
