"""Time validator: a day plan should not mix naive and timezone-aware starts."""

from __future__ import annotations

from itinerary_engine.domain.models import Activity, Severity, ValidationIssue


def validate_time_zones(activities: list[Activity]) -> list[ValidationIssue]:
    timed = [act for act in activities if act.time_slot.start is not None]
    naive = [act.id for act in timed if act.time_slot.start.tzinfo is None]
    if not naive or len(naive) == len(timed):
        return []
    return [
        ValidationIssue(
            code="MIXED_TIMEZONES",
            severity=Severity.MEDIUM,
            message=(
                f"{len(naive)} activities have naive start times while others carry a timezone; "
                "naive times are read in the first timezone found"
            ),
            activity_ids=naive,
            suggestions=["Give every start time the same timezone"],
        )
    ]
