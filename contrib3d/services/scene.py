from dataclasses import dataclass
from datetime import date

from contrib3d.models import CalendarDataset
from contrib3d.models import ColorBucket
from contrib3d.models import ContributionStats
from contrib3d.services.encoding import bucket_color
from contrib3d.services.encoding import encode_bar
from contrib3d.services.framing import CameraFraming
from contrib3d.services.framing import frame_camera
from contrib3d.services.interaction import BarHoverState
from contrib3d.services.layout import GroundPlane
from contrib3d.services.layout import grid_cell
from contrib3d.services.layout import ground_plane
from contrib3d.services.normalizer import compute_stats


@dataclass(frozen=True)
class SceneBar:
    """Everything the render surface needs to draw one contribution day."""

    column: int
    row: int
    position: tuple[float, float, float]
    height: float
    color_bucket: ColorBucket
    color: str
    count: int
    date: date

    @property
    def center_y(self) -> float:
        # Box meshes are positioned by their center.
        return self.height / 2

    def hover_state(self) -> BarHoverState:
        return BarHoverState(count=self.count, day=self.date, color=self.color)


@dataclass(frozen=True)
class Scene:
    username: str
    title: str
    total_count: int
    week_count: int
    bars: tuple[SceneBar, ...]
    camera: CameraFraming
    plane: GroundPlane
    stats: ContributionStats


def build_scene(dataset: CalendarDataset, username: str) -> Scene:
    """Lay out and encode every day of a dataset for rendering."""

    week_count = dataset.week_count
    max_count = dataset.max_daily_count

    bars: list[SceneBar] = []
    for index, day in enumerate(dataset.days):
        cell = grid_cell(index, week_count)
        encoded = encode_bar(day.count, max_count)
        bars.append(
            SceneBar(
                column=cell.column,
                row=cell.row,
                position=cell.position,
                height=encoded.height,
                color_bucket=encoded.color_bucket,
                color=bucket_color(encoded.color_bucket),
                count=day.count,
                date=day.date,
            )
        )

    return Scene(
        username=username,
        title=f"{username}'s Contributions",
        total_count=dataset.total_count,
        week_count=week_count,
        bars=tuple(bars),
        camera=frame_camera(week_count),
        plane=ground_plane(week_count),
        stats=compute_stats(dataset),
    )
