from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_graphql_url: str = "https://api.github.com/graphql"
    github_token: str | None = None
    github_timeout_seconds: float = 20.0
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    rate_limited_paths: list[str] = ["/api/github-contributions", "/contributions/"]
    log_level: str = "INFO"
    snapshot_width: int = 1280
    snapshot_height: int = 960
    snapshot_dpi: int = 100

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
