"""Domain planning steps bound to the Haversine kernel and the speed model."""

from __future__ import annotations

from datetime import date, time
from typing import Optional

from itinerary_engine.domain.constants import (
    DEFAULT_BUFFER_MINUTES,
    DEFAULT_CLUSTER_DISTANCE_KM,
    DEFAULT_DAY_START,
)
from itinerary_engine.domain.enums import TransportMode
from itinerary_engine.domain.models import Activity, Coordinate, ScheduleConflict
from itinerary_engine.domain.planning import cluster, conflicts, ordering, scheduling
from itinerary_engine.planner.distance import calculate_distance, estimate_travel_time


def optimize_route_order(
    activities: list[Activity],
    start_location: Optional[Coordinate] = None,
) -> list[Activity]:
    return ordering.optimize_route_order(
        activities,
        distance_fn=calculate_distance,
        start_location=start_location,
    )


def reconcile_time_slots(
    activities: list[Activity],
    mode: TransportMode | str = TransportMode.DRIVING,
    *,
    day_start: time = DEFAULT_DAY_START,
    plan_date: Optional[date] = None,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> list[Activity]:
    return scheduling.reconcile_time_slots(
        activities,
        mode=TransportMode(mode),
        distance_fn=calculate_distance,
        travel_time_fn=estimate_travel_time,
        day_start=day_start,
        plan_date=plan_date,
        buffer_minutes=buffer_minutes,
    )


def detect_schedule_conflicts(
    activities: list[Activity],
    mode: TransportMode | str = TransportMode.DRIVING,
) -> list[ScheduleConflict]:
    return conflicts.detect_schedule_conflicts(
        activities,
        mode=TransportMode(mode),
        distance_fn=calculate_distance,
        travel_time_fn=estimate_travel_time,
    )


def find_location_clusters(
    activities: list[Activity],
    max_cluster_distance_km: float = DEFAULT_CLUSTER_DISTANCE_KM,
) -> list[list[Activity]]:
    return cluster.find_location_clusters(
        activities,
        distance_fn=calculate_distance,
        max_cluster_distance_km=max_cluster_distance_km,
    )


__all__ = [
    "detect_schedule_conflicts",
    "find_location_clusters",
    "optimize_route_order",
    "reconcile_time_slots",
]
