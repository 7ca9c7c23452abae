"""Repository layer for data access.

This layer abstracts external dependencies (PostgreSQL, Redis) behind
protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from planet_service.protocols import CacheStore, PlanetStore

from .postgres_repository import PostgresPlanetRepository
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "PlanetStore",
    "PostgresPlanetRepository",
    "RedisCacheRepository",
]
