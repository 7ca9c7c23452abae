"""Domain errors.

Store errors propagate to the handler layer and become HTTP errors.
Cache errors are absorbed inside the cache repository and only surface
at startup, where an unreachable cache is fatal.
"""


class PlanetServiceError(Exception):
    """Base class for all planet service errors."""


class PlanetNotFoundError(PlanetServiceError):
    """No planet row matched (or was affected by) the operation."""

    def __init__(self, planet_id: int) -> None:
        super().__init__(f"planet {planet_id} not found")
        self.planet_id = planet_id


class StoreError(PlanetServiceError):
    """The record store failed to execute a query or is unreachable."""


class CacheError(PlanetServiceError):
    """The cache backend is misconfigured or unreachable."""
