"""Coordinate validator: flag latitudes/longitudes outside the valid ranges."""

from __future__ import annotations

import math
from typing import Optional

from itinerary_engine.domain.models import Activity, Coordinate, Severity, ValidationIssue


def _in_range(coord: Coordinate) -> bool:
    if not (math.isfinite(coord.lat) and math.isfinite(coord.lng)):
        return False
    return -90.0 <= coord.lat <= 90.0 and -180.0 <= coord.lng <= 180.0


def validate_coordinates(
    activities: list[Activity],
    *,
    start_location: Optional[Coordinate] = None,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for activity in activities:
        if _in_range(activity.location):
            continue
        issues.append(
            ValidationIssue(
                code="COORDINATE_OUT_OF_RANGE",
                severity=Severity.HIGH,
                message=(
                    f"Activity {activity.id} location ({activity.location.lat}, {activity.location.lng}) "
                    "is outside lat [-90, 90] / lng [-180, 180]"
                ),
                activity_ids=[activity.id],
                suggestions=["Check whether latitude and longitude were swapped"],
            )
        )
    if start_location is not None and not _in_range(start_location):
        issues.append(
            ValidationIssue(
                code="START_LOCATION_OUT_OF_RANGE",
                severity=Severity.HIGH,
                message=f"Start location ({start_location.lat}, {start_location.lng}) is out of range",
            )
        )
    return issues
