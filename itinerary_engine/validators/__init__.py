"""Validator orchestration."""

from __future__ import annotations

from itinerary_engine.domain.constants import DEFAULT_BUFFER_MINUTES
from itinerary_engine.domain.models import Activity, OptimizationOptions, ValidationIssue
from itinerary_engine.domain.planning.ordering import DistanceFn
from itinerary_engine.domain.planning.scheduling import TravelTimeFn
from itinerary_engine.planner.distance import calculate_distance, estimate_travel_time
from itinerary_engine.validators.coordinate_validator import validate_coordinates
from itinerary_engine.validators.identity_validator import validate_unique_ids
from itinerary_engine.validators.lock_validator import validate_locks
from itinerary_engine.validators.time_validator import validate_time_zones


def run_all_validators(
    activities: list[Activity],
    options: OptimizationOptions,
    *,
    distance_fn: DistanceFn = calculate_distance,
    travel_time_fn: TravelTimeFn = estimate_travel_time,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    issues.extend(validate_coordinates(activities, start_location=options.start_location))
    issues.extend(validate_unique_ids(activities))
    issues.extend(validate_time_zones(activities))
    issues.extend(
        validate_locks(
            activities,
            mode=options.travel_mode,
            distance_fn=distance_fn,
            travel_time_fn=travel_time_fn,
            buffer_minutes=buffer_minutes,
        )
    )
    return issues


__all__ = [
    "run_all_validators",
    "validate_coordinates",
    "validate_locks",
    "validate_time_zones",
    "validate_unique_ids",
]
