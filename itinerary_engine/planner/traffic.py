"""Time-of-day traffic delay model for driving segments."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from itinerary_engine.domain.constants import (
    TRAFFIC_ALTERNATE_ROUTE_MINUTES,
    TRAFFIC_MULTIPLIER_CAP,
    TRAFFIC_REPORT_THRESHOLD_MINUTES,
)
from itinerary_engine.domain.enums import TrafficSeverity, TransportMode
from itinerary_engine.domain.models import Activity, TrafficCondition, TrafficImpact
from itinerary_engine.planner.distance import build_travel_segments


def traffic_multiplier(hour: int, distance_km: float) -> float:
    if 7 <= hour <= 9 or 17 <= hour <= 19:
        multiplier = 1.6
    elif 6 <= hour <= 10 or 16 <= hour <= 20:
        multiplier = 1.3
    elif 11 <= hour <= 15:
        multiplier = 1.1
    else:
        multiplier = 1.0

    if distance_km > 10:
        multiplier += 0.2
    elif distance_km > 5:
        multiplier += 0.1
    return round(min(multiplier, TRAFFIC_MULTIPLIER_CAP), 2)


def classify_delay(delay_minutes: int) -> TrafficSeverity:
    if delay_minutes > 30:
        return TrafficSeverity.SEVERE
    if delay_minutes > 15:
        return TrafficSeverity.HEAVY
    if delay_minutes > 8:
        return TrafficSeverity.MODERATE
    return TrafficSeverity.LIGHT


def departure_time(activity: Activity) -> Optional[datetime]:
    # Keyed on the end, not the start: a stop is left when it finishes.
    return activity.time_slot.end or activity.time_slot.start


def segment_delay_minutes(base_minutes: int, hour: int, distance_km: float) -> tuple[int, float]:
    multiplier = traffic_multiplier(hour, distance_km)
    return round(base_minutes * (multiplier - 1)), multiplier


def estimate_traffic(
    activities: list[Activity],
    mode: TransportMode | str = TransportMode.DRIVING,
) -> TrafficImpact:
    """Base travel time plus modelled traffic delay along ``activities``.

    Only driving segments accrue delay, and only when the departure time is
    known. Every delay counts toward the total; delays of five minutes or less
    are left out of ``conditions``.
    """
    mode = TransportMode(mode)
    segments = build_travel_segments(activities, mode)
    base_time = sum(seg.travel_time_minutes for seg in segments)
    if mode != TransportMode.DRIVING:
        return TrafficImpact(base_time=base_time)

    total_delay = 0
    conditions: list[TrafficCondition] = []
    for seg in segments:
        departs = departure_time(seg.from_activity)
        if departs is None:
            continue
        delay, multiplier = segment_delay_minutes(seg.travel_time_minutes, departs.hour, seg.distance_km)
        total_delay += delay
        if delay <= TRAFFIC_REPORT_THRESHOLD_MINUTES:
            continue
        conditions.append(
            TrafficCondition(
                segment=f"{seg.from_activity.title} -> {seg.to_activity.title}",
                severity=classify_delay(delay),
                delay_minutes=delay,
                multiplier=multiplier,
                alternate_route="Consider alternate route" if delay > TRAFFIC_ALTERNATE_ROUTE_MINUTES else None,
            )
        )
    return TrafficImpact(base_time=base_time, traffic_delay=total_delay, conditions=conditions)


__all__ = [
    "classify_delay",
    "departure_time",
    "estimate_traffic",
    "segment_delay_minutes",
    "traffic_multiplier",
]
