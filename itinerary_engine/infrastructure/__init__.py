"""Infrastructure services and cross-cutting utilities."""

from itinerary_engine.infrastructure.cache import MemoryCache, make_cache_key
from itinerary_engine.infrastructure.logging import StructuredLogger, get_logger

__all__ = [
    "MemoryCache",
    "StructuredLogger",
    "get_logger",
    "make_cache_key",
]
