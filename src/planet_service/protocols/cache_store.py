"""Cache storage protocol.

Defines the interface for the key-value substrate shared by the
read-through cache and the rate limiter.

Every method is advisory: implementations log and absorb backend
failures instead of raising, so a broken cache degrades the service to
"always read from the store" rather than failing requests.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache backends with per-key expiration."""

    async def get(self, key: str) -> Any | None:
        """Fetch and deserialize a cached value.

        Args:
            key: The cache key

        Returns:
            The cached value, or None on a miss, an expired key,
            a deserialization failure or a backend failure
        """
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Serialize and store a value, overwriting any previous one.

        Args:
            key: The cache key
            value: A JSON-serializable value
            ttl: Time-to-live in seconds

        Returns:
            True if stored, False if the write failed (already logged)
        """
        ...

    async def delete(self, *keys: str) -> bool:
        """Remove keys immediately.

        Args:
            keys: The cache keys to invalidate

        Returns:
            True if the delete reached the backend, False otherwise
        """
        ...

    async def increment_window(self, key: str, window_seconds: int) -> int | None:
        """Atomically increment a counter, arming its expiry only when created.

        Args:
            key: The counter key
            window_seconds: Expiration armed on the transition from absent to 1

        Returns:
            The post-increment count, or None if the backend failed
        """
        ...

    async def ping(self) -> bool:
        """Check if the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend connections."""
        ...
