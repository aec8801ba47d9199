from collections.abc import Callable
from datetime import date
from datetime import timedelta
from typing import Any

import pytest


PayloadFactory = Callable[..., dict[str, Any]]


def make_calendar_payload(
    counts: list[int],
    start: date = date(2024, 1, 7),
    total: int | None = None,
    leading_days: int = 0,
) -> dict[str, Any]:
    """Build a provider calendar payload with one entry per count.

    `leading_days` shortens the first week, the way GitHub starts a calendar
    mid-week.
    """

    weeks: list[dict[str, Any]] = []
    days: list[dict[str, Any]] = []
    first_week_size = 7 - leading_days
    for index, count in enumerate(counts):
        day = start + timedelta(days=index)
        days.append(
            {"count": count, "date": day.isoformat(), "weekday": (day.weekday() + 1) % 7}
        )
        week_full = len(days) == (first_week_size if not weeks else 7)
        if week_full:
            weeks.append({"days": days})
            days = []
    if days:
        weeks.append({"days": days})

    return {
        "totalContributions": sum(counts) if total is None else total,
        "weeks": weeks,
    }


@pytest.fixture
def calendar_payload() -> PayloadFactory:
    return make_calendar_payload


@pytest.fixture
def year_payload() -> dict[str, Any]:
    """A full 53-week calendar with a repeating activity pattern."""

    counts = [(index * 7) % 13 if index % 3 else 0 for index in range(371)]
    return make_calendar_payload(counts, start=date(2025, 10, 12), total=sum(counts) + 40)
