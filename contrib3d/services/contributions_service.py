from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from contrib3d.clients.github_client import fetch_contribution_calendar
from contrib3d.errors import ContributionsError
from contrib3d.models import CalendarDataset
from contrib3d.render.surface import RenderSurface
from contrib3d.services.exporter import SaveAction
from contrib3d.services.exporter import export_snapshot
from contrib3d.services.normalizer import normalize_calendar
from contrib3d.services.scene import Scene
from contrib3d.services.scene import build_scene
from contrib3d.settings import Settings


CalendarFetcher = Callable[[str], Awaitable[Mapping[str, Any]]]


def normalize_username(username: str) -> str:
    if not isinstance(username, str) or not username.strip():
        raise ValueError("Username is required")
    return username.strip()


def build_contributions(username: str, payload: Mapping[str, Any]) -> CalendarDataset:
    """Turn a raw calendar payload for `username` into a dataset.

    Raises:
        ValueError: If the username is empty.
        MalformedPayloadError: If the payload shape is invalid.
        EmptyDatasetError: If the payload has no contribution days.
    """

    normalize_username(username)
    return normalize_calendar(payload)


def github_fetcher(settings: Settings, token: str | None = None) -> CalendarFetcher:
    """Build a fetcher bound to the configured GitHub endpoint and token."""

    async def fetch(username: str) -> Mapping[str, Any]:
        return await fetch_contribution_calendar(
            username=username,
            token=token or settings.github_token,
            graphql_url=settings.github_graphql_url,
            timeout=settings.github_timeout_seconds,
        )

    return fetch


async def load_contributions(username: str, fetcher: CalendarFetcher) -> CalendarDataset:
    """Run one fetch-and-normalize cycle without any session state."""

    username = normalize_username(username)
    payload = await fetcher(username)
    return build_contributions(username, payload)


@dataclass(frozen=True)
class FetchTicket:
    token: int
    username: str


class ContributionsSession:
    """Owns the dataset currently on display.

    Every fetch is issued a ticket. Only the result of the most recently
    issued ticket is applied, so a late response for an earlier username
    never replaces fresher data.
    """

    def __init__(self) -> None:
        self._latest_token = 0
        self.username: str | None = None
        self.dataset: CalendarDataset | None = None
        self.error: ContributionsError | None = None

    def begin(self, username: str) -> FetchTicket:
        username = normalize_username(username)
        self._latest_token += 1
        self.username = username
        self.dataset = None
        self.error = None
        logger.info(f"Fetching contributions for {username} (ticket {self._latest_token})")
        return FetchTicket(token=self._latest_token, username=username)

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.token == self._latest_token

    def resolve(self, ticket: FetchTicket, payload: Mapping[str, Any]) -> bool:
        """Install the dataset built from `payload` if `ticket` is still current.

        Returns False when the ticket was superseded and the payload ignored.
        """

        if not self.is_current(ticket):
            logger.info(
                f"Ignoring stale contributions for {ticket.username} (ticket {ticket.token})"
            )
            return False

        try:
            dataset = build_contributions(ticket.username, payload)
        except ContributionsError as exc:
            self.error = exc
            raise

        self.dataset = dataset
        logger.info(
            f"Loaded {len(dataset.days)} days over {dataset.week_count} weeks "
            f"for {ticket.username}"
        )
        return True

    def reject(self, ticket: FetchTicket, error: ContributionsError) -> bool:
        """Record a failed fetch if `ticket` is still current."""

        if not self.is_current(ticket):
            logger.info(
                f"Ignoring stale failure for {ticket.username} (ticket {ticket.token}): {error}"
            )
            return False

        self.dataset = None
        self.error = error
        return True

    async def load(self, username: str, fetcher: CalendarFetcher) -> CalendarDataset | None:
        """Fetch and install contributions for `username`.

        Returns None when a newer fetch superseded this one while it was in
        flight. Failures of the current fetch propagate to the caller.
        """

        ticket = self.begin(username)
        try:
            payload = await fetcher(ticket.username)
        except ContributionsError as exc:
            if self.reject(ticket, exc):
                raise
            return None

        if not self.resolve(ticket, payload):
            return None
        return self.dataset

    def scene(self) -> Scene | None:
        if self.dataset is None or self.username is None:
            return None
        return build_scene(self.dataset, self.username)

    def export(self, surface: RenderSurface, save: SaveAction) -> str | None:
        """Save a snapshot of the current dataset; a no-op when nothing is loaded."""

        scene = self.scene()
        if scene is None:
            surface.unmount()
        else:
            surface.mount(scene)
        return export_snapshot(surface, self.username or "", save)
