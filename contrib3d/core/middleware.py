from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class SlidingWindowCounter:
    """Counts hits per key over a trailing time window."""

    def __init__(self, max_hits: int, window_seconds: int) -> None:
        self.max_hits = max(1, max_hits)
        self.window_seconds = max(1, window_seconds)
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()

    def hit(self, key: str, now: float) -> int | None:
        """Record a hit for `key`.

        Returns None when the hit is allowed, otherwise the number of seconds
        until the oldest hit leaves the window.
        """

        with self._lock:
            window = self._hits[key]
            while window and window[0] <= now - self.window_seconds:
                window.popleft()

            if len(window) >= self.max_hits:
                return max(1, int(self.window_seconds - (now - window[0])))

            window.append(now)
            return None


class ContributionsRateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limits GET requests to the routes that call the GitHub API."""

    def __init__(
        self,
        app,
        limited_paths: Sequence[str],
        requests_per_window: int = 30,
        window_seconds: int = 60,
    ) -> None:
        super().__init__(app)
        self.limited_paths = tuple(limited_paths)
        self.counter = SlidingWindowCounter(requests_per_window, window_seconds)

    def is_limited(self, request: Request) -> bool:
        return request.method == "GET" and request.url.path.startswith(
            self.limited_paths
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not self.is_limited(request):
            return await call_next(request)

        client_key = client_address(request)
        retry_after = self.counter.hit(client_key, monotonic())
        if retry_after is not None:
            logger.warning(
                f"Rate limit reached for {client_key} on {request.url.path}, "
                f"retry in {retry_after}s"
            )
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)


def client_address(request: Request) -> str:
    # Cloud Run and reverse proxies usually set X-Forwarded-For.
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip() or "unknown"

    if request.client and request.client.host:
        return request.client.host

    return "unknown"
