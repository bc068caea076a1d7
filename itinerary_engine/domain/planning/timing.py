"""Category-based time-of-day advice. Advisory only, never reschedules."""

from __future__ import annotations

from itinerary_engine.domain.constants import CATEGORY_PROFILES
from itinerary_engine.domain.models import Activity, TimingAdvice


def _format_hours(hours: tuple[int, ...]) -> str:
    return ", ".join(f"{hour}:00" for hour in hours)


def timing_advice_for(activity: Activity) -> str | None:
    start = activity.time_slot.start
    if start is None:
        return None
    profile = CATEGORY_PROFILES[activity.category]
    if start.hour in profile.avoid_hours:
        return f"Consider rescheduling {activity.title} to avoid {profile.avoid_reason}"
    if profile.ideal_hours and start.hour not in profile.ideal_hours:
        return f"{activity.title} works best around {_format_hours(profile.ideal_hours)}"
    return None


def suggest_optimal_timing(activities: list[Activity]) -> TimingAdvice:
    suggestions = [advice for advice in (timing_advice_for(act) for act in activities) if advice]
    return TimingAdvice(suggestions=suggestions)


__all__ = ["suggest_optimal_timing", "timing_advice_for"]
