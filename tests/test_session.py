import asyncio

import pytest

from contrib3d.errors import EmptyDatasetError
from contrib3d.errors import MalformedPayloadError
from contrib3d.errors import ProviderError
from contrib3d.errors import TransportError
from contrib3d.services.contributions_service import ContributionsSession
from contrib3d.services.contributions_service import build_contributions
from contrib3d.services.contributions_service import load_contributions


def test_build_contributions_requires_username(calendar_payload) -> None:
    with pytest.raises(ValueError):
        build_contributions("  ", calendar_payload([1]))


def test_build_contributions_returns_dataset(calendar_payload) -> None:
    dataset = build_contributions("octocat", calendar_payload([1, 0, 2]))

    assert [day.count for day in dataset.days] == [1, 0, 2]


@pytest.mark.asyncio
async def test_load_contributions_runs_one_cycle(calendar_payload) -> None:
    requested: list[str] = []

    async def fetcher(username: str):
        requested.append(username)
        return calendar_payload([4, 0, 0])

    dataset = await load_contributions(" octocat ", fetcher)

    assert requested == ["octocat"]
    assert dataset.total_count == 4


@pytest.mark.asyncio
async def test_session_installs_dataset_and_scene(calendar_payload) -> None:
    session = ContributionsSession()

    async def fetcher(username: str):
        return calendar_payload([2, 0, 5, 1])

    dataset = await session.load("octocat", fetcher)
    scene = session.scene()

    assert dataset is session.dataset
    assert scene is not None
    assert scene.title == "octocat's Contributions"
    assert len(scene.bars) == 4


@pytest.mark.asyncio
async def test_late_response_does_not_overwrite_newer_data(calendar_payload) -> None:
    session = ContributionsSession()
    release_slow = asyncio.Event()

    async def fetcher(username: str):
        if username == "slow":
            await release_slow.wait()
            return calendar_payload([9, 9, 9])
        return calendar_payload([1])

    slow_task = asyncio.create_task(session.load("slow", fetcher))
    await asyncio.sleep(0)
    fast_result = await session.load("fast", fetcher)
    release_slow.set()
    slow_result = await slow_task

    assert fast_result is not None
    assert slow_result is None
    assert session.username == "fast"
    assert session.dataset is fast_result
    assert [day.count for day in session.dataset.days] == [1]


@pytest.mark.asyncio
async def test_stale_failure_is_ignored(calendar_payload) -> None:
    session = ContributionsSession()
    release_slow = asyncio.Event()

    async def fetcher(username: str):
        if username == "slow":
            await release_slow.wait()
            raise TransportError("GitHub API request failed")
        return calendar_payload([3])

    slow_task = asyncio.create_task(session.load("slow", fetcher))
    await asyncio.sleep(0)
    await session.load("fast", fetcher)
    release_slow.set()

    assert await slow_task is None
    assert session.error is None
    assert session.dataset is not None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [TransportError("down", status_code=503), ProviderError("unknown user")]
)
async def test_fetch_failure_clears_dataset(calendar_payload, error) -> None:
    session = ContributionsSession()

    async def ok(username: str):
        return calendar_payload([1, 2])

    async def failing(username: str):
        raise error

    await session.load("octocat", ok)

    with pytest.raises(type(error)):
        await session.load("octocat", failing)

    assert session.dataset is None
    assert session.error is error
    assert session.scene() is None


@pytest.mark.asyncio
async def test_normalize_failures_are_reported(calendar_payload) -> None:
    session = ContributionsSession()

    async def empty(username: str):
        return {"totalContributions": 0, "weeks": []}

    async def malformed(username: str):
        return {"totalContributions": 0, "weeks": None}

    with pytest.raises(EmptyDatasetError):
        await session.load("ghost", empty)
    with pytest.raises(MalformedPayloadError):
        await session.load("ghost", malformed)

    assert isinstance(session.error, MalformedPayloadError)


@pytest.mark.asyncio
async def test_new_attempt_starts_from_clean_slate(calendar_payload) -> None:
    session = ContributionsSession()

    async def failing(username: str):
        raise ProviderError("unknown user")

    with pytest.raises(ProviderError):
        await session.load("nobody", failing)

    ticket = session.begin("octocat")

    assert session.error is None
    assert session.dataset is None
    assert session.resolve(ticket, calendar_payload([1]))
    assert session.dataset is not None


def test_begin_rejects_empty_username() -> None:
    with pytest.raises(ValueError):
        ContributionsSession().begin("")
