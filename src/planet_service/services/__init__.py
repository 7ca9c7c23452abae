"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .planet_service import ALL_PLANETS_KEY, PlanetService, planet_key
from .rate_limiter import RateLimitDecision, RateLimiter

__all__ = [
    "ALL_PLANETS_KEY",
    "PlanetService",
    "planet_key",
    "RateLimitDecision",
    "RateLimiter",
]
