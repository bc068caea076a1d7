"""Lock validator: locked activities need a start and must leave room for travel."""

from __future__ import annotations

from datetime import timedelta

from itinerary_engine.domain.constants import DEFAULT_BUFFER_MINUTES
from itinerary_engine.domain.enums import TransportMode
from itinerary_engine.domain.models import Activity, Severity, ValidationIssue
from itinerary_engine.domain.planning.ordering import DistanceFn
from itinerary_engine.domain.planning.scheduling import (
    TravelTimeFn,
    aligned_window,
    is_effectively_locked,
    reference_tzinfo,
)


def validate_locks(
    activities: list[Activity],
    *,
    mode: TransportMode,
    distance_fn: DistanceFn,
    travel_time_fn: TravelTimeFn,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for activity in activities:
        if activity.is_locked and activity.time_slot.start is None:
            issues.append(
                ValidationIssue(
                    code="LOCK_WITHOUT_START",
                    severity=Severity.HIGH,
                    message=f"Locked activity {activity.id} has no start time",
                    activity_ids=[activity.id],
                    suggestions=["Give the activity a start time or unlock it"],
                )
            )

    tz = reference_tzinfo(activities)
    locked = sorted(
        ((aligned_window(act, tz), act) for act in activities if is_effectively_locked(act)),
        key=lambda row: row[0][0],
    )
    for ((_, current_end), current), ((next_start, _), nxt) in zip(locked, locked[1:]):
        travel = travel_time_fn(distance_fn(current.location, nxt.location), mode)
        required = current_end + timedelta(minutes=travel + buffer_minutes)
        if required > next_start:
            short_by = round((required - next_start).total_seconds() / 60)
            issues.append(
                ValidationIssue(
                    code="LOCK_CONFLICT",
                    severity=Severity.HIGH,
                    message=(
                        f'Locked "{current.title}" and "{nxt.title}" are {short_by}min short '
                        f"of the {travel}min travel plus {buffer_minutes}min buffer"
                    ),
                    activity_ids=[current.id, nxt.id],
                    suggestions=["Move one of the locked activities", "Unlock one of them"],
                )
            )
    return issues
