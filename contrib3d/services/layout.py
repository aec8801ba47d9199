from dataclasses import dataclass

from contrib3d.models import CalendarDataset
from contrib3d.models import GridCell


DAYS_IN_WEEK = 7
BAR_SPACING = 1.1
BAR_WIDTH = 0.8
# Fallback used only while no dataset is loaded.
DEFAULT_WEEK_COUNT = 52

_COLUMN_OFFSET = (DAYS_IN_WEEK - 1) / 2


@dataclass(frozen=True)
class GroundPlane:
    """Shadow-receiving plane placed just under the bars."""

    width: float
    depth: float
    y: float = -0.1


def resolve_week_count(dataset: CalendarDataset | None) -> int:
    """Return the dataset week count, or the default when nothing is loaded."""

    if dataset is None:
        return DEFAULT_WEEK_COUNT
    return dataset.week_count


def grid_cell(index: int, week_count: int | None = None) -> GridCell:
    """Map a day's sequential index to its grid cell and base position.

    Columns are weekdays and rows are weeks. The grid is centered on the
    origin, with bars standing on the y=0 plane.
    """

    if index < 0:
        raise ValueError(f"Day index must be non-negative, got {index}")
    if week_count is None:
        week_count = DEFAULT_WEEK_COUNT

    column = index % DAYS_IN_WEEK
    row = index // DAYS_IN_WEEK
    x = (column - _COLUMN_OFFSET) * BAR_SPACING
    z = (row - (week_count - 1) / 2) * BAR_SPACING
    return GridCell(column=column, row=row, position=(x, 0.0, z))


def ground_plane(week_count: int | None = None) -> GroundPlane:
    if week_count is None:
        week_count = DEFAULT_WEEK_COUNT

    return GroundPlane(
        width=DAYS_IN_WEEK * BAR_SPACING * 1.5,
        depth=week_count * BAR_SPACING * 1.2,
    )
