"""Schedule conflict detection between consecutive timed activities."""

from __future__ import annotations

from itinerary_engine.domain.enums import ConflictKind, Severity, TransportMode
from itinerary_engine.domain.models import Activity, ScheduleConflict
from itinerary_engine.domain.planning.ordering import DistanceFn
from itinerary_engine.domain.planning.scheduling import TravelTimeFn, aligned_window, reference_tzinfo


def detect_schedule_conflicts(
    activities: list[Activity],
    *,
    mode: TransportMode,
    distance_fn: DistanceFn,
    travel_time_fn: TravelTimeFn,
) -> list[ScheduleConflict]:
    """Naive times are read in the zone of the first timezone-aware start."""
    tz = reference_tzinfo(activities)
    timed = sorted(
        (
            (aligned_window(act, tz), act)
            for act in activities
            if act.time_slot.start is not None and act.time_slot.end is not None
        ),
        key=lambda row: row[0][0],
    )
    conflicts: list[ScheduleConflict] = []
    for ((_, current_end), current), ((next_start, _), nxt) in zip(timed, timed[1:]):
        gap_minutes = (next_start - current_end).total_seconds() / 60
        if gap_minutes < 0:
            conflicts.append(
                ScheduleConflict(
                    kind=ConflictKind.OVERLAP,
                    activity_ids=[current.id, nxt.id],
                    message=f'"{current.title}" overlaps with "{nxt.title}"',
                    severity=Severity.HIGH,
                )
            )
            continue
        travel = travel_time_fn(distance_fn(current.location, nxt.location), mode)
        if travel > gap_minutes:
            conflicts.append(
                ScheduleConflict(
                    kind=ConflictKind.TRAVEL_TIME,
                    activity_ids=[current.id, nxt.id],
                    message=f"Need {travel}min travel time, but only {round(gap_minutes)}min available",
                    severity=Severity.MEDIUM,
                )
            )
    return conflicts


__all__ = ["detect_schedule_conflicts"]
