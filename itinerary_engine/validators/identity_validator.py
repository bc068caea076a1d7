"""Identity validator: activity ids must be unique within a day plan."""

from __future__ import annotations

from collections import Counter

from itinerary_engine.domain.models import Activity, Severity, ValidationIssue


def validate_unique_ids(activities: list[Activity]) -> list[ValidationIssue]:
    counts = Counter(act.id for act in activities)
    return [
        ValidationIssue(
            code="DUPLICATE_ACTIVITY_ID",
            severity=Severity.MEDIUM,
            message=f"Activity id {activity_id} appears {count} times",
            activity_ids=[activity_id],
        )
        for activity_id, count in counts.items()
        if count > 1
    ]
