from fastapi import FastAPI
from loguru import logger

from contrib3d.api.routes.contributions import router
from contrib3d.core.logger import setup_logger
from contrib3d.core.middleware import ContributionsRateLimitMiddleware
from contrib3d.core.observability import init_sentry
from contrib3d.settings import Settings


def create_app() -> FastAPI:
    """Build the FastAPI application with logging, Sentry and rate limiting."""

    settings = Settings()
    setup_logger(level=settings.log_level)
    init_sentry(settings)

    app = FastAPI(title="3D GitHub Contributions")
    app.add_middleware(
        ContributionsRateLimitMiddleware,
        limited_paths=settings.rate_limited_paths,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.include_router(router)

    if not settings.github_token:
        logger.warning("GITHUB_TOKEN is not set; requests need a Bearer token")

    return app


app = create_app()
