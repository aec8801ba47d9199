import math
from dataclasses import dataclass

from contrib3d.services.layout import DEFAULT_WEEK_COUNT


FIELD_OF_VIEW = 45.0
MIN_ORBIT_DISTANCE = 5.0


@dataclass(frozen=True)
class CameraFraming:
    """Initial camera placement and orbit limits for one dataset."""

    position: tuple[float, float, float]
    fov: float
    min_distance: float
    max_distance: float
    label_position: tuple[float, float, float]
    label_scale: float

    @property
    def distance(self) -> float:
        return math.dist((0.0, 0.0, 0.0), self.position)


def frame_camera(week_count: int | None = None) -> CameraFraming:
    """Derive camera framing from the number of weeks in the grid.

    More weeks push the camera further back and raise the zoom-out limit, so
    the whole grid is visible on first render.
    """

    weeks = DEFAULT_WEEK_COUNT if week_count is None else week_count
    if weeks <= 0:
        raise ValueError(f"Week count must be positive, got {weeks}")

    return CameraFraming(
        position=(0.0, weeks * 0.5, weeks * 0.7),
        fov=FIELD_OF_VIEW,
        min_distance=MIN_ORBIT_DISTANCE,
        max_distance=max(weeks * 2.0, MIN_ORBIT_DISTANCE),
        label_position=(0.0, weeks * 0.35, 0.0),
        label_scale=weeks * 0.15,
    )
