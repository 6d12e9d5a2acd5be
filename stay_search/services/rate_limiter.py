"""Fixed-window request rate limiting.

Counts requests per ``(endpoint, client_ip, minute)`` in an external store.
Windows start on wall-clock minute boundaries and reset fully, so a client
that exhausted one minute is admitted again as soon as the next begins.
"""

import logging
import time
from collections.abc import Callable
from typing import Protocol

from redis.asyncio import Redis

logger = logging.getLogger(__name__)

WINDOW_MS = 60_000
# counters expire two minutes after their window opens
EXPIRY_AFTER_WINDOW_MS = 120_000
DEFAULT_LIMIT = 60


class RateLimitStore(Protocol):
    async def get_count(self, key: str) -> int: ...

    async def increment(self, key: str, expire_at: int) -> int: ...


class RedisRateLimitStore:
    def __init__(self, redis: Redis):
        self._redis = redis

    async def get_count(self, key: str) -> int:
        value = await self._redis.get(key)
        return int(value) if value is not None else 0

    async def increment(self, key: str, expire_at: int) -> int:
        """INCR (creating at 0) and set absolute expiry, in one transaction."""
        async with self._redis.pipeline(transaction=True) as pipe:
            count, _ = await pipe.incr(key).expireat(key, expire_at).execute()
        return int(count)


def window_start(now_ms: int) -> int:
    return (now_ms // WINDOW_MS) * WINDOW_MS


def counter_key(endpoint: str, client_ip: str, window_ms: int) -> str:
    return f"{endpoint}:{client_ip}:{window_ms}"


class RateLimiter:
    def __init__(self, store: RateLimitStore, clock: Callable[[], float] = time.time):
        self._store = store
        self._clock = clock

    async def is_allowed(
        self, endpoint: str, client_ip: str, limit: int = DEFAULT_LIMIT
    ) -> bool:
        """Admit and count the request unless the window's quota is used up.

        Store failures admit the request.
        """
        now_ms = int(self._clock() * 1000)
        window_ms = window_start(now_ms)
        key = counter_key(endpoint, client_ip, window_ms)

        try:
            count = await self._store.get_count(key)
            logger.debug("Rate limit %s: %d/%d this minute", key, count, limit)
            if count >= limit:
                return False

            expire_at = (window_ms + EXPIRY_AFTER_WINDOW_MS) // 1000
            await self._store.increment(key, expire_at)
        except Exception:
            logger.exception("Rate limit store unavailable, allowing %s", client_ip)
            return True

        return True
