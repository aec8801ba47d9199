from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from contrib3d.models import ColorBucket


class ContributionDay(BaseModel):
    """Single day of the flattened contribution calendar."""

    model_config = ConfigDict(populate_by_name=True)

    contribution_count: int = Field(alias="contributionCount", ge=0)
    date: date
    weekday: int = Field(ge=0, le=6)


class ContributionsResponse(BaseModel):
    """Flattened calendar for one user, in provider order."""

    model_config = ConfigDict(populate_by_name=True)

    contributions: list[ContributionDay]
    total_contributions: int = Field(alias="totalContributions")
    weeks: int


class StatsSchema(BaseModel):
    total_days: int
    active_days: int
    max_daily_count: int
    average_daily: float
    active_rate_percent: int


class CameraSchema(BaseModel):
    position: tuple[float, float, float]
    fov: float
    min_distance: float
    max_distance: float
    label_position: tuple[float, float, float]
    label_scale: float


class PlaneSchema(BaseModel):
    width: float
    depth: float
    y: float


class BarSchema(BaseModel):
    """Render instructions for one contribution bar."""

    column: int
    row: int
    position: tuple[float, float, float]
    center_y: float
    height: float
    color_bucket: ColorBucket
    color: str
    count: int
    date: date


class SceneResponse(BaseModel):
    username: str
    title: str
    total_count: int
    week_count: int
    stats: StatsSchema
    camera: CameraSchema
    plane: PlaneSchema
    bars: list[BarSchema]
