# core/rate_limiter.py

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from core.logging_config import logger


RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class SlidingWindowRateLimiter:
    """
    In-memory sliding window: at most `max_requests` per identifier
    within the last `window_seconds`.

    State lives on the instance (one per app), not in the module,
    so each app built by create_app() starts with a clean slate.
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 900, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, List[float]] = defaultdict(list)
        self._last_sweep = clock()

    def hit(self, identifier: str) -> Tuple[bool, int]:
        """
        Record one request for `identifier`.

        Returns:
            Tuple of (allowed: bool, remaining: int)
        """
        now = self._clock()
        window_start = now - self.window_seconds

        if now - self._last_sweep >= self.window_seconds:
            self._sweep(window_start)
            self._last_sweep = now

        # Drop timestamps that slid out of the window
        hits = [ts for ts in self._hits[identifier] if ts > window_start]

        if len(hits) >= self.max_requests:
            self._hits[identifier] = hits
            return False, 0

        hits.append(now)
        self._hits[identifier] = hits
        return True, self.max_requests - len(hits)

    def _sweep(self, window_start: float) -> None:
        """Forget identifiers whose every hit has expired."""
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in stale:
            del self._hits[key]

    @property
    def tracked(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        self._hits.clear()


def get_rate_limit_identifier(request: Request, trust_proxy: bool = False) -> str:
    """
    Client IP. X-Forwarded-For is set by the caller, so its first hop
    is only used behind a trusted proxy (Render, a load balancer).
    """
    if trust_proxy:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return f"ip:{forwarded_for.split(',')[0].strip()}"

    client_ip = request.client.host if request.client else "unknown"
    return f"ip:{client_ip}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies the limiter to every request and answers 429 once a client
    exceeds it.
    """

    def __init__(self, app: ASGIApp, limiter: Optional[SlidingWindowRateLimiter] = None, trust_proxy: bool = False):
        super().__init__(app)
        self.limiter = limiter or SlidingWindowRateLimiter()
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        identifier = get_rate_limit_identifier(request, self.trust_proxy)
        allowed, remaining = self.limiter.hit(identifier)

        limit_headers = {
            "X-RateLimit-Limit": str(self.limiter.max_requests),
            "X-RateLimit-Remaining": str(remaining),
        }

        if not allowed:
            logger.warning(f"Rate limit exceeded for {identifier} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE},
                headers={**limit_headers, "Retry-After": str(self.limiter.window_seconds)},
            )

        response = await call_next(request)
        response.headers.update(limit_headers)
        return response
