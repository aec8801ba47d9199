import pytest

from contrib3d.core.observability import init_sentry
from contrib3d.settings import Settings


DSN = "https://examplePublicKey@o0.ingest.sentry.io/0"


@pytest.fixture
def sentry_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(
        "contrib3d.core.observability.sentry_sdk.init",
        lambda **kwargs: calls.append(kwargs),
    )
    return calls


@pytest.mark.parametrize("dsn", [None, ""])
def test_error_reporting_disabled_without_dsn(sentry_calls, dsn) -> None:
    init_sentry(Settings(sentry_dsn=dsn))

    assert sentry_calls == []


def test_error_reporting_uses_environment_settings(sentry_calls, monkeypatch) -> None:
    """Release and sampling come from the environment; PII is never sent."""

    monkeypatch.setenv("SENTRY_DSN", DSN)
    monkeypatch.setenv("RELEASE", "contrib3d@0.1.0")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.5")
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    init_sentry(Settings())

    assert sentry_calls == [
        {
            "dsn": DSN,
            "environment": "development",
            "release": "contrib3d@0.1.0",
            "traces_sample_rate": 0.5,
            "send_default_pii": False,
        }
    ]


def test_create_app_reports_to_configured_dsn(sentry_calls, monkeypatch) -> None:
    """The app factory wires Sentry from environment settings."""

    monkeypatch.setenv("SENTRY_DSN", DSN)
    monkeypatch.setenv("ENVIRONMENT", "staging")

    from contrib3d.main import create_app

    create_app()

    assert [call["environment"] for call in sentry_calls] == ["staging"]
