"""In-process metrics for route optimisation calls."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field

_HISTORY_LIMIT = 200
_LATENCY_WINDOW = 5000


@dataclass
class _LatencyAgg:
    total_ms: float = 0.0
    count: int = 0
    max_ms: float = 0.0
    values: list[float] = field(default_factory=list)

    def add(self, value_ms: float) -> None:
        val = max(0.0, float(value_ms))
        self.total_ms += val
        self.count += 1
        if val > self.max_ms:
            self.max_ms = val
        self.values.append(val)
        if len(self.values) > _LATENCY_WINDOW:
            self.values = self.values[-_LATENCY_WINDOW:]

    def p95(self) -> float:
        if not self.values:
            return 0.0
        rows = sorted(self.values)
        idx = max(0, min(len(rows) - 1, math.ceil(len(rows) * 0.95) - 1))
        return rows[idx]

    def snapshot(self) -> dict[str, float]:
        avg_ms = (self.total_ms / self.count) if self.count else 0.0
        return {
            "count": self.count,
            "avg_ms": round(avg_ms, 2),
            "max_ms": round(self.max_ms, 2),
            "p95_ms": round(self.p95(), 2),
        }


class OptimizeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset_unlocked()

    def _reset_unlocked(self) -> None:
        self._total_requests = 0
        self._status_counts: dict[str, int] = {}
        self._mode_counts: dict[str, int] = {}
        self._cache_hits = 0
        self._latency = _LatencyAgg()
        self._history: list[dict[str, object]] = []

    def record(
        self,
        *,
        status: str,
        latency_ms: float,
        activity_count: int = 0,
        validation_mode: str = "lenient",
        cache_hit: bool = False,
        trace_id: str = "",
        efficiency: int | None = None,
    ) -> None:
        key_status = status or "unknown"
        key_mode = validation_mode or "unknown"
        with self._lock:
            self._total_requests += 1
            self._status_counts[key_status] = self._status_counts.get(key_status, 0) + 1
            self._mode_counts[key_mode] = self._mode_counts.get(key_mode, 0) + 1
            if cache_hit:
                self._cache_hits += 1
            self._latency.add(latency_ms)
            self._history.append(
                {
                    "trace_id": trace_id,
                    "status": key_status,
                    "validation_mode": key_mode,
                    "activity_count": max(0, int(activity_count)),
                    "cache_hit": bool(cache_hit),
                    "efficiency": efficiency,
                    "latency_ms": round(max(0.0, float(latency_ms)), 2),
                }
            )
            if len(self._history) > _HISTORY_LIMIT:
                self._history = self._history[-_HISTORY_LIMIT:]

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            total = self._total_requests
            return {
                "total_requests": total,
                "status_counts": dict(self._status_counts),
                "validation_mode_counts": dict(self._mode_counts),
                "cache_hit_rate": round(self._cache_hits / total, 4) if total else 0.0,
                "latency": self._latency.snapshot(),
                "last_requests": list(self._history),
            }

    def reset(self) -> None:
        with self._lock:
            self._reset_unlocked()


_metrics_lock = threading.Lock()
_metrics: OptimizeMetrics | None = None


def get_optimize_metrics() -> OptimizeMetrics:
    global _metrics
    with _metrics_lock:
        if _metrics is None:
            _metrics = OptimizeMetrics()
        return _metrics


def observe_optimize_request(
    *,
    status: str,
    latency_ms: float,
    activity_count: int = 0,
    validation_mode: str = "lenient",
    cache_hit: bool = False,
    trace_id: str = "",
    efficiency: int | None = None,
) -> None:
    get_optimize_metrics().record(
        status=status,
        latency_ms=latency_ms,
        activity_count=activity_count,
        validation_mode=validation_mode,
        cache_hit=cache_hit,
        trace_id=trace_id,
        efficiency=efficiency,
    )


__all__ = ["OptimizeMetrics", "get_optimize_metrics", "observe_optimize_request"]
