"""
Rate Limiting Module

Sliding-window rate limiting backed by Redis sorted sets.
Falls back to in-memory storage if Redis is unavailable.

Used on the login endpoint to slow down password guessing.
"""

import logging
import time

from fastapi import HTTPException, Request, status

from scholarship_portal.core.config import settings
from scholarship_portal.core.redis import get_redis

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}

# When each key's newest hit leaves its window: {key: expires_at}
_memory_expiry: dict[str, float] = {}


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "RATE_LIMIT_EXCEEDED",
                "message": f"Too many requests. Maximum {limit} per {window_seconds} seconds.",
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(
    client,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using Redis.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "login:127.0.0.1")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _check_rate_limit_memory(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using in-memory storage.

    Only correct for a single server process.
    """
    now = time.time()
    window_start = now - window_seconds

    _evict_expired(now)

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]

    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    _memory_expiry[key] = now + window_seconds
    return True


def _evict_expired(now: float) -> None:
    """Drop keys with no hit left inside their window."""
    expired = [key for key, expires_at in _memory_expiry.items() if expires_at <= now]
    for key in expired:
        _memory_store.pop(key, None)
        del _memory_expiry[key]


def reset_memory_store() -> None:
    """Forget all in-memory counters."""
    _memory_store.clear()
    _memory_expiry.clear()


async def check_rate_limit(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check if a request is within rate limits.

    Tries Redis first, falls back to in-memory storage.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    redis_client = await get_redis()

    if redis_client is not None:
        try:
            return await _check_rate_limit_redis(redis_client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def login_rate_limit(request: Request) -> None:
    """
    FastAPI dependency limiting login attempts per client IP.

    Raises:
        RateLimitExceeded: When the client exceeded LOGIN_RATE_LIMIT
    """
    limit = settings.login_rate_limit
    window_seconds = settings.login_rate_limit_window_seconds
    if limit <= 0:
        return

    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:login:{client_ip}"

    if not await check_rate_limit(key, limit, window_seconds):
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window_seconds}s")
        raise RateLimitExceeded(limit, window_seconds)


__all__ = [
    "check_rate_limit",
    "login_rate_limit",
    "reset_memory_store",
    "RateLimitExceeded",
]
