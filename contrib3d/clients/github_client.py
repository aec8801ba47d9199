from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from contrib3d.errors import ConfigurationError
from contrib3d.errors import MalformedPayloadError
from contrib3d.errors import ProviderError
from contrib3d.errors import TransportError


CONTRIBUTION_CALENDAR_QUERY = """
query($userName: String!) {
  user(login: $userName) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
            weekday
            color
          }
        }
      }
    }
  }
}
"""


def to_calendar_payload(calendar: Mapping[str, Any]) -> dict[str, Any]:
    """Translate a GraphQL contribution calendar into the calendar payload shape.

    Entries are copied as they are, in order; shape validation is left to the
    normalizer.
    """

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        return {"totalContributions": calendar.get("totalContributions"), "weeks": weeks}

    translated_weeks: list[Any] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            translated_weeks.append(week)
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            translated_weeks.append({"days": contribution_days})
            continue

        days: list[Any] = []
        for item in contribution_days:
            if not isinstance(item, Mapping):
                days.append(item)
                continue
            days.append(
                {
                    "count": item.get("contributionCount"),
                    "date": item.get("date"),
                    "weekday": item.get("weekday"),
                }
            )
        translated_weeks.append({"days": days})

    return {
        "totalContributions": calendar.get("totalContributions"),
        "weeks": translated_weeks,
    }


async def fetch_contribution_calendar(
    username: str,
    token: str | None,
    graphql_url: str,
    timeout: float = 20.0,
) -> dict[str, Any]:
    """Fetch the last year of contributions for a user from GitHub GraphQL API.

    Raises:
        ConfigurationError: If no token is available.
        TransportError: If GitHub cannot be reached or returns a non-2xx status.
        ProviderError: If GitHub reports errors or the user has no calendar.
        MalformedPayloadError: If the response body is not a JSON object.
    """

    if not token:
        raise ConfigurationError("GITHUB_TOKEN is required for GraphQL requests")

    headers = {
        "Authorization": f"bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": "contrib3d",
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(
                graphql_url,
                json={
                    "query": CONTRIBUTION_CALENDAR_QUERY,
                    "variables": {"userName": username},
                },
                headers=headers,
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        logger.error(f"GitHub API HTTP error for {username}: {status_code}")
        raise TransportError(
            f"Failed to fetch data from GitHub: HTTP {status_code}",
            status_code=status_code,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error(f"GitHub API request failed for {username}: {exc}")
        raise TransportError("GitHub API request failed") from exc

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise MalformedPayloadError("GitHub GraphQL response is not JSON") from exc
    if not isinstance(payload, Mapping):
        raise MalformedPayloadError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message"))
            for error in errors
            if isinstance(error, Mapping) and error.get("message")
        ]
        logger.error(f"GitHub API returned GraphQL errors for {username}: {messages}")
        raise ProviderError(f"GitHub API error: {', '.join(messages) or 'unknown error'}")

    data = payload.get("data")
    user = data.get("user") if isinstance(data, Mapping) else None
    collection = (
        user.get("contributionsCollection") if isinstance(user, Mapping) else None
    )
    calendar = (
        collection.get("contributionCalendar")
        if isinstance(collection, Mapping)
        else None
    )
    if not isinstance(calendar, Mapping):
        logger.warning(f"No contribution calendar found for user {username}")
        raise ProviderError(f"No contribution data found from GitHub for {username}")

    return to_calendar_payload(calendar)
