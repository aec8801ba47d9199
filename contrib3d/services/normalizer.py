import math
from collections.abc import Mapping
from collections.abc import Sequence
from datetime import date
from typing import Any

from contrib3d.errors import EmptyDatasetError
from contrib3d.errors import MalformedPayloadError
from contrib3d.models import CalendarDataset
from contrib3d.models import ContributionStats
from contrib3d.models import DayRecord


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _provider_weekday(day: date) -> int:
    # GitHub counts weekdays from Sunday.
    return (day.weekday() + 1) % 7


def parse_day(item: Any) -> DayRecord:
    """Convert one provider day entry into a `DayRecord`.

    Raises:
        MalformedPayloadError: If `count` or `date` is missing or invalid.
    """

    if not isinstance(item, Mapping):
        raise MalformedPayloadError("Contribution day entry must be an object")

    raw_count = item.get("count")
    raw_date = item.get("date")
    if raw_count is None or raw_date is None:
        raise MalformedPayloadError("Contribution day entry is missing count or date")
    if not _is_count(raw_count):
        raise MalformedPayloadError(f"Invalid contribution count: {raw_count!r}")
    if not isinstance(raw_date, str):
        raise MalformedPayloadError(f"Invalid contribution date: {raw_date!r}")

    try:
        parsed_day = date.fromisoformat(raw_date)
    except ValueError as exc:
        raise MalformedPayloadError(f"Invalid contribution date: {raw_date!r}") from exc

    raw_weekday = item.get("weekday")
    if raw_weekday is None:
        weekday = _provider_weekday(parsed_day)
    elif isinstance(raw_weekday, int) and not isinstance(raw_weekday, bool) and 0 <= raw_weekday <= 6:
        weekday = raw_weekday
    else:
        raise MalformedPayloadError(f"Invalid weekday: {raw_weekday!r}")

    return DayRecord(count=raw_count, date=parsed_day, weekday=weekday)


def normalize_calendar(payload: Mapping[str, Any]) -> CalendarDataset:
    """Flatten a week-grouped calendar payload into a `CalendarDataset`.

    Day entries are concatenated in the order the provider sent them; the
    provider ordering already encodes chronology and weekday alignment, so
    nothing is re-sorted. Ragged first and last weeks are kept as they are.

    Raises:
        MalformedPayloadError: If the payload does not match the calendar shape.
        EmptyDatasetError: If the payload is valid but contains no days.
    """

    if not isinstance(payload, Mapping):
        raise MalformedPayloadError("Calendar payload must be an object")

    weeks = payload.get("weeks")
    if not _is_sequence(weeks):
        raise MalformedPayloadError("Calendar weeks must be a list")

    total = payload.get("totalContributions", 0)
    if not _is_count(total):
        raise MalformedPayloadError(f"Invalid total contribution count: {total!r}")

    days: list[DayRecord] = []
    seen_dates: set[date] = set()
    for week in weeks:
        if not isinstance(week, Mapping) or not _is_sequence(week.get("days")):
            raise MalformedPayloadError("Calendar week must contain a list of days")
        for item in week["days"]:
            record = parse_day(item)
            if record.date in seen_dates:
                raise MalformedPayloadError(
                    f"Duplicate contribution date: {record.date.isoformat()}"
                )
            seen_dates.add(record.date)
            days.append(record)

    if not days:
        raise EmptyDatasetError("Calendar contains no contribution days")

    return CalendarDataset(days=tuple(days), total_count=total, week_count=len(weeks))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values, as chart labels do."""

    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def compute_stats(dataset: CalendarDataset) -> ContributionStats:
    """Summarize a dataset for display next to the chart."""

    total_days = len(dataset.days)
    active_days = sum(1 for day in dataset.days if day.count > 0)

    return ContributionStats(
        total_days=total_days,
        active_days=active_days,
        max_daily_count=dataset.max_daily_count,
        average_daily=round_half_up(dataset.total_count / total_days, 2),
        active_rate_percent=int(round_half_up(active_days / total_days * 100)),
    )
