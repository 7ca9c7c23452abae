"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> Memcached, PostgreSQL -> SQLite, etc.)
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .planet_store import PlanetStore

__all__ = [
    "CacheStore",
    "PlanetStore",
]
