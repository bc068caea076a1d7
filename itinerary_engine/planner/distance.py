"""Deterministic distance and travel-time estimation."""

from __future__ import annotations

import math

from itinerary_engine.domain.constants import EARTH_RADIUS_KM, TRAVEL_SPEED_KMH
from itinerary_engine.domain.enums import TransportMode
from itinerary_engine.domain.models import Activity, Coordinate, TravelSegment


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km; ``nan`` when any coordinate is not finite."""
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    # Rounding can leave a just outside [0, 1] near antipodes.
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in km. Coordinate ranges are not checked."""
    return haversine(a.lat, a.lng, b.lat, b.lng)


def estimate_travel_time(
    distance_km: float,
    mode: TransportMode | str = TransportMode.DRIVING,
) -> int:
    speed = TRAVEL_SPEED_KMH[TransportMode(mode)]
    if not math.isfinite(distance_km):
        return 0
    return round(distance_km / speed * 60)


def activity_distance(a: Activity, b: Activity) -> float:
    return calculate_distance(a.location, b.location)


def route_distance_km(activities: list[Activity]) -> float:
    """Total length of the open path through ``activities`` in order."""
    return sum(
        activity_distance(activities[i], activities[i + 1])
        for i in range(len(activities) - 1)
    )


def build_travel_segments(
    activities: list[Activity],
    mode: TransportMode | str = TransportMode.DRIVING,
) -> list[TravelSegment]:
    mode = TransportMode(mode)
    segments: list[TravelSegment] = []
    for origin, destination in zip(activities, activities[1:]):
        dist = activity_distance(origin, destination)
        segments.append(
            TravelSegment(
                from_activity=origin,
                to_activity=destination,
                distance_km=dist,
                travel_time_minutes=estimate_travel_time(dist, mode),
                mode=mode,
            )
        )
    return segments


__all__ = [
    "activity_distance",
    "build_travel_segments",
    "calculate_distance",
    "estimate_travel_time",
    "haversine",
    "route_distance_km",
]
