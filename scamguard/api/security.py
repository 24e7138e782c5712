"""
API key check and per-client rate limiting for the ScamGuard API.
"""

import time
import logging
from collections import defaultdict, deque
from typing import Deque, Dict, Optional, Tuple

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from scamguard.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name=settings.api_token_header, auto_error=False)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def verify_api_token(
    request: Request,
    api_key: Optional[str] = Security(api_key_header),
):
    """
    Require a valid API key when one is configured.

    With no token configured (local development) every request passes.
    """
    if not settings.api_token:
        if settings.is_production:
            logger.warning("API token not configured in production mode!")
        return None

    if not api_key:
        logger.warning(f"Missing API key from {_client_host(request)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing API key. Provide {settings.api_token_header} header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if api_key != settings.api_token:
        logger.warning(f"Invalid API key attempt from {_client_host(request)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key


class RateLimiter:
    """
    Sliding-window rate limiter kept in process memory.
    Counts are per key (client IP) and are lost on restart.
    Keys with no requests left in the window are dropped.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = clock()

    def _prune(self, key: str, window: int, now: float):
        timestamps = self._requests.get(key)
        if timestamps is None:
            return
        while timestamps and now - timestamps[0] >= window:
            timestamps.popleft()
        if not timestamps:
            del self._requests[key]

    def _sweep(self, window: int, now: float):
        # at most once per window, so idle clients do not pile up
        if now - self._last_sweep < window:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._prune(key, window, now)

    def is_allowed(self, key: str, limit: int, window: int) -> Tuple[bool, int]:
        """
        Record a request for ``key`` if it fits in the window.

        Returns:
            (allowed, remaining)
        """
        now = self._clock()
        self._sweep(window, now)
        self._prune(key, window, now)

        count = len(self._requests.get(key, ()))
        if count >= limit:
            return False, 0

        self._requests[key].append(now)
        return True, limit - count - 1

    def get_retry_after(self, key: str, window: int) -> int:
        """Seconds until the oldest request in the window expires."""
        timestamps = self._requests.get(key)
        if not timestamps:
            return 0
        return max(0, int(window - (self._clock() - timestamps[0])))

    def tracked_keys(self) -> int:
        return len(self._requests)

    def reset(self):
        self._requests.clear()


rate_limiter = RateLimiter()


async def check_rate_limit(request: Request):
    """Rate limiting dependency, keyed by client IP."""
    if not settings.rate_limit_requests:
        return  # disabled

    client_ip = _client_host(request)
    allowed, remaining = rate_limiter.is_allowed(
        key=client_ip,
        limit=settings.rate_limit_requests,
        window=settings.rate_limit_window,
    )

    request.state.rate_limit_remaining = remaining
    request.state.rate_limit_limit = settings.rate_limit_requests

    if not allowed:
        retry_after = rate_limiter.get_retry_after(client_ip, settings.rate_limit_window)
        logger.warning(f"Rate limit exceeded for {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Try again in {retry_after} seconds.",
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(settings.rate_limit_requests),
                "X-RateLimit-Remaining": "0",
            },
        )
