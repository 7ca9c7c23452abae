"""Fixed-window rate limiter on top of the cache store."""

from dataclasses import dataclass

from loguru import logger

from planet_service.config import settings
from planet_service.protocols import CacheStore

RATE_LIMIT_PREFIX = "rate_limit"


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single admission check.

    Attributes:
        allowed: Whether the request may proceed
        count: Requests seen in the current window, or None if the
            counter was unavailable (fail open)
        limit: Maximum requests per window
        window_seconds: Window length
    """

    allowed: bool
    count: int | None
    limit: int
    window_seconds: int

    @property
    def remaining(self) -> int:
        if self.count is None:
            return self.limit
        return max(0, self.limit - self.count)


class RateLimiter:
    """Per-client fixed-window counter.

    The first request of a window creates the counter at 1 and arms its
    expiry; later requests only increment, so the window never slides.
    Once the key expires the next request opens a new window.

    If the cache backend is unavailable the limiter fails open.
    """

    def __init__(
        self,
        cache: CacheStore,
        limit: int | None = None,
        window_seconds: int | None = None,
    ) -> None:
        self._cache = cache
        self._limit = limit or settings.rate_limit_requests
        self._window = window_seconds or settings.rate_limit_window

    @classmethod
    def create(
        cls,
        cache: CacheStore,
        limit: int | None = None,
        window_seconds: int | None = None,
    ) -> "RateLimiter":
        """Factory method; limit and window default to settings."""
        return cls(cache=cache, limit=limit, window_seconds=window_seconds)

    @staticmethod
    def key_for(identity: str) -> str:
        return f"{RATE_LIMIT_PREFIX}:{identity}"

    async def hit(self, identity: str) -> RateLimitDecision:
        """Count one request for ``identity`` and decide whether to admit it.

        Args:
            identity: Client identity, usually the source address

        Returns:
            RateLimitDecision for this request
        """
        count = await self._cache.increment_window(self.key_for(identity), self._window)
        if count is None:
            logger.warning("Rate limiter unavailable, admitting request from {}", identity)
            return RateLimitDecision(
                allowed=True, count=None, limit=self._limit, window_seconds=self._window
            )

        allowed = count <= self._limit
        if not allowed:
            logger.info("Rate limit exceeded for {} ({}/{})", identity, count, self._limit)
        return RateLimitDecision(
            allowed=allowed, count=count, limit=self._limit, window_seconds=self._window
        )

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window
