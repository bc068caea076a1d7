"""Observability utilities."""

from itinerary_engine.observability.metrics import get_optimize_metrics, observe_optimize_request

__all__ = ["get_optimize_metrics", "observe_optimize_request"]
