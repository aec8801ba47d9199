from dataclasses import dataclass
from datetime import date
from enum import Enum


class ColorBucket(str, Enum):
    """Discrete color intensity classes for a contribution bar."""

    EMPTY = "empty"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


@dataclass(frozen=True)
class DayRecord:
    """Single contribution day taken from the provider calendar."""

    count: int
    date: date
    weekday: int


@dataclass(frozen=True)
class CalendarDataset:
    """Flat, chronologically ordered contribution days for one user.

    `total_count` is the provider-reported total. It can differ from the sum
    of daily counts because the provider may count private contributions.
    """

    days: tuple[DayRecord, ...]
    total_count: int
    week_count: int

    @property
    def max_daily_count(self) -> int:
        return max((day.count for day in self.days), default=0)

    @property
    def summed_count(self) -> int:
        return sum(day.count for day in self.days)


@dataclass(frozen=True)
class ContributionStats:
    total_days: int
    active_days: int
    max_daily_count: int
    average_daily: float
    active_rate_percent: int


@dataclass(frozen=True)
class GridCell:
    column: int
    row: int
    position: tuple[float, float, float]


@dataclass(frozen=True)
class EncodedBar:
    height: float
    color_bucket: ColorBucket
