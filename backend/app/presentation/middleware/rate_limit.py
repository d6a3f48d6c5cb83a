"""Fixed-window request limiter keyed by client address.

Two budgets apply to ``/api`` requests: a general one for every request
and a stricter one for multipart uploads. A budget of 0 disables it.
State is in-process, so each worker counts on its own.
"""

import logging
import math
import time
from collections.abc import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.domain.exceptions import RateLimitExceededError
from app.presentation.error_handlers import error_response

logger = logging.getLogger(__name__)


class FixedWindowCounter:
    """Counts hits per key inside consecutive windows of ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> int | None:
        """Count one request. Returns seconds until reset if over the limit."""
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)
        if len(self._windows) > 10_000:
            self._prune(now)

        if count > self.limit:
            return max(1, math.ceil(started + self.window_seconds - now))
        return None

    def _prune(self, now: float) -> None:
        self._windows = {
            key: (started, count)
            for key, (started, count) in self._windows.items()
            if now - started < self.window_seconds
        }


def _is_upload(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return request.method in ("POST", "PUT") and content_type.startswith("multipart/form-data")


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        window_seconds: int,
        max_requests: int,
        upload_max_requests: int,
        path_prefix: str = "/api",
    ):
        super().__init__(app)
        self._path_prefix = path_prefix
        self._general = FixedWindowCounter(max_requests, window_seconds) if max_requests > 0 else None
        self._uploads = (
            FixedWindowCounter(upload_max_requests, window_seconds) if upload_max_requests > 0 else None
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith(self._path_prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        counters = [self._general]
        if _is_upload(request):
            counters.append(self._uploads)

        for counter in counters:
            if counter is None:
                continue
            retry_after = counter.hit(client)
            if retry_after is not None:
                logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
                return error_response(RateLimitExceededError(retry_after))

        return await call_next(request)
