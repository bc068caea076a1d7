"""Time-slot reconciliation for an ordered day plan."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Optional

from itinerary_engine.domain.constants import DEFAULT_BUFFER_MINUTES, DEFAULT_DAY_START
from itinerary_engine.domain.enums import TransportMode
from itinerary_engine.domain.models import Activity, ActivityTimeSlot
from itinerary_engine.domain.planning.ordering import DistanceFn

TravelTimeFn = Callable[[float, TransportMode], int]

_LOGGER = logging.getLogger("itinerary-engine.scheduling")


def reference_tzinfo(activities: list[Activity]) -> Optional[tzinfo]:
    """tzinfo of the first timezone-aware start, or ``None`` when all starts are naive."""
    starts = (act.time_slot.start for act in activities if act.time_slot.start is not None)
    return next((start.tzinfo for start in starts if start.tzinfo is not None), None)


def aligned_window(activity: Activity, tz: Optional[tzinfo]) -> tuple[datetime, datetime]:
    """Start and end of a timed activity, with naive times read in ``tz`` when given."""
    start, end = activity.time_slot.start, activity.time_slot.end
    if tz is not None and start.tzinfo is None:
        start, end = start.replace(tzinfo=tz), end.replace(tzinfo=tz)
    return start, end


def resolve_day_start(
    activities: list[Activity],
    *,
    day_start: time = DEFAULT_DAY_START,
    plan_date: Optional[date] = None,
) -> datetime:
    """Clock origin for the day: ``plan_date`` (or the first known start date) at ``day_start``."""
    reference = next((act.time_slot.start for act in activities if act.time_slot.start is not None), None)
    tz = reference_tzinfo(activities)
    if plan_date is None:
        plan_date = reference.date() if reference is not None else date.today()
    return datetime.combine(plan_date, day_start, tzinfo=tz)


def is_effectively_locked(activity: Activity) -> bool:
    return activity.is_locked and activity.time_slot.start is not None


def reconcile_time_slots(
    activities: list[Activity],
    *,
    mode: TransportMode,
    distance_fn: DistanceFn,
    travel_time_fn: TravelTimeFn,
    day_start: time = DEFAULT_DAY_START,
    plan_date: Optional[date] = None,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> list[Activity]:
    """Recompute clock times along ``activities`` in their given order.

    Locked activities pin the clock to their own start and are returned
    untouched. Every unlocked activity is rescheduled at the running clock,
    whatever it held before. Incompatible locks are not rejected here.
    """
    if not activities:
        return []
    clock = resolve_day_start(activities, day_start=day_start, plan_date=plan_date)
    buffer = timedelta(minutes=buffer_minutes)
    reconciled: list[Activity] = []

    for idx, activity in enumerate(activities):
        duration = timedelta(minutes=activity.time_slot.duration)
        if activity.is_locked and activity.time_slot.start is None:
            _LOGGER.warning("locked activity %s has no start time; scheduling it as unlocked", activity.id)

        if is_effectively_locked(activity):
            clock = activity.time_slot.start + duration + buffer
            reconciled.append(activity)
            continue

        slot = ActivityTimeSlot.starting_at(clock, activity.time_slot.duration)
        reconciled.append(activity.model_copy(update={"time_slot": slot}))

        travel = 0
        if idx + 1 < len(activities):
            nxt = activities[idx + 1]
            travel = travel_time_fn(distance_fn(activity.location, nxt.location), mode)
        clock = clock + duration + timedelta(minutes=travel) + buffer

    return reconciled


__all__ = [
    "TravelTimeFn",
    "aligned_window",
    "is_effectively_locked",
    "reconcile_time_slots",
    "reference_tzinfo",
    "resolve_day_start",
]
