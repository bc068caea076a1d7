"""Thread-safe in-memory cache with TTL and simple eviction.

Instances are created and owned by callers and passed to the optimizer
explicitly; this module keeps no process-wide cache.
"""

from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, Optional

from pydantic import BaseModel


class MemoryCache:
    def __init__(self, default_ttl: float = 300.0, max_size: int = 500):
        self._store: dict[str, tuple[Any, float]] = {}
        self._default_ttl = default_ttl
        self._max_size = max_size
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, expire_at = entry
            if time.monotonic() > expire_at:
                del self._store[key]
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        with self._lock:
            if key not in self._store and len(self._store) >= self._max_size:
                # Drop the soonest-expiring tenth.
                items = sorted(self._store.items(), key=lambda x: x[1][1])
                for k, _ in items[: self._max_size // 10 + 1]:
                    del self._store[k]
            self._store[key] = (value, time.monotonic() + ttl)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    @property
    def stats(self) -> dict[str, Any]:
        with self._lock:
            size, hits, misses = len(self._store), self._hits, self._misses
        total = hits + misses
        return {
            "size": size,
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / total, 3) if total > 0 else 0.0,
        }


def _jsonable(part: Any) -> Any:
    if isinstance(part, BaseModel):
        return part.model_dump(mode="json")
    if isinstance(part, (list, tuple)):
        return [_jsonable(item) for item in part]
    return part


def make_cache_key(*parts: Any) -> str:
    """Content hash of ``parts``; pydantic models hash by their JSON dump."""
    raw = json.dumps([_jsonable(p) for p in parts], sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(raw.encode()).hexdigest()


__all__ = ["MemoryCache", "make_cache_key"]
