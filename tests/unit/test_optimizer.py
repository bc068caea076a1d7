"""End-to-end behaviour of optimize_route."""

from __future__ import annotations

import json
import math
from datetime import date, datetime, time, timezone

import pytest

from itinerary_engine import ItineraryValidationError, optimize_route
from itinerary_engine.config.settings import EngineSettings
from itinerary_engine.domain.enums import ConflictKind, TransportMode, ValidationMode
from itinerary_engine.domain.models import (
    Activity,
    ActivityCategory,
    ActivityTimeSlot,
    Coordinate,
    OptimizationOptions,
)
from itinerary_engine.infrastructure.cache import MemoryCache
from itinerary_engine.observability.metrics import get_optimize_metrics
from itinerary_engine.planner.core import EMPTY_PLAN_SUGGESTION, WELL_OPTIMIZED_SUGGESTION

PLAN_DAY = date(2026, 5, 1)


def _activity(
    aid: str,
    lat: float,
    lng: float,
    *,
    start: datetime | None = None,
    duration: int = 60,
    locked: bool = False,
    category: ActivityCategory = ActivityCategory.SIGHTSEEING,
) -> Activity:
    return Activity(
        id=aid,
        title=aid.upper(),
        category=category,
        location=Coordinate(lat=lat, lng=lng),
        time_slot=ActivityTimeSlot(start=start, duration=duration),
        is_locked=locked,
    )


def _ids(activities) -> list[str]:
    return [act.id for act in activities]


def _events(log_buffer) -> list[dict]:
    return [json.loads(line) for line in log_buffer.getvalue().splitlines() if line.strip()]


@pytest.fixture
def triangle():
    return [_activity("a", 0, 0), _activity("c", 1, 1), _activity("b", 0, 1)]


def test_empty_plan(quiet_logger):
    result = optimize_route([], logger=quiet_logger)
    assert result.optimized_activities == []
    assert result.total_travel_time == 0
    assert result.total_distance == 0.0
    assert result.route_analysis.efficiency == 100
    assert result.route_analysis.suggestions == [EMPTY_PLAN_SUGGESTION]


def test_single_activity_is_returned_unchanged(quiet_logger):
    solo = _activity("solo", 48.85, 2.35, start=datetime(2026, 5, 1, 15, 0))
    result = optimize_route([solo], logger=quiet_logger)
    assert result.optimized_activities == [solo]
    assert result.total_distance == 0.0
    assert result.route_analysis.efficiency == 100
    assert result.route_analysis.suggestions == []


def test_reorders_and_reports_savings(triangle, quiet_logger):
    options = OptimizationOptions(consider_traffic=False, plan_date=PLAN_DAY)
    result = optimize_route(triangle, options, logger=quiet_logger)

    assert _ids(result.optimized_activities) == ["a", "b", "c"]
    assert result.total_distance == pytest.approx(222.39, abs=0.01)
    assert result.total_travel_time == 534
    assert result.traffic_impact.traffic_delay == 0
    assert result.estimated_savings.time == 110
    assert result.estimated_savings.distance == pytest.approx(46.05, abs=0.01)
    assert result.route_analysis.efficiency == 100
    assert result.conflicts == []

    starts = [act.time_slot.start for act in result.optimized_activities]
    assert starts == [
        datetime(2026, 5, 1, 9, 0),
        datetime(2026, 5, 1, 14, 57),
        datetime(2026, 5, 1, 20, 54),
    ]

    suggestions = result.route_analysis.suggestions
    assert suggestions[:3] == [
        "Optimized route saves 110 minutes including traffic delays",
        "Reduces total travel distance by 46.1 km",
        "Saves 6.07 in total travel costs",
    ]
    assert "Consider eco-friendly transport - this route produces 46.7kg CO2" in suggestions
    assert "Found 3 location clusters - consider scheduling by area" in suggestions
    assert suggestions[-1] == "C works best around 9:00, 10:00, 11:00, 14:00, 15:00, 16:00"


def test_travel_time_includes_traffic_delay(triangle, quiet_logger):
    result = optimize_route(triangle, OptimizationOptions(plan_date=PLAN_DAY), logger=quiet_logger)
    impact = result.traffic_impact
    assert impact.traffic_delay > 0
    assert result.total_travel_time == impact.base_time + impact.traffic_delay


def test_input_activities_are_not_mutated(triangle, quiet_logger):
    before = [act.model_dump() for act in triangle]
    optimize_route(triangle, OptimizationOptions(plan_date=PLAN_DAY), logger=quiet_logger)
    assert [act.model_dump() for act in triangle] == before


def test_locked_activity_keeps_its_slot(quiet_logger):
    lunch_start = datetime(2026, 5, 1, 13, 0)
    stops = [
        _activity("museum", 48.8606, 2.3376),
        _activity("lunch", 48.8566, 2.3522, start=lunch_start, locked=True, category=ActivityCategory.DINING),
        _activity("tower", 48.8584, 2.2945),
        _activity("arc", 48.8738, 2.2950),
    ]
    result = optimize_route(stops, OptimizationOptions(plan_date=PLAN_DAY), logger=quiet_logger)

    assert sorted(_ids(result.optimized_activities)) == sorted(_ids(stops))
    [lunch] = [act for act in result.optimized_activities if act.id == "lunch"]
    assert lunch == stops[1]
    assert lunch.time_slot.start == lunch_start


@pytest.mark.parametrize("mode", list(TransportMode))
def test_result_invariants_hold_for_every_mode(mode, quiet_logger):
    stops = [_activity(f"s{i}", 48.85 + (i % 3) * 0.01, 2.29 + i * 0.008) for i in range(7)]
    result = optimize_route(
        stops,
        OptimizationOptions(travel_mode=mode, plan_date=PLAN_DAY),
        logger=quiet_logger,
    )
    assert sorted(_ids(result.optimized_activities)) == sorted(_ids(stops))
    assert 0 <= result.route_analysis.efficiency <= 100
    assert result.estimated_savings.time >= 0
    assert result.estimated_savings.distance >= 0
    assert result.estimated_savings.cost >= 0
    assert result.route_analysis.suggestions
    for act in result.optimized_activities:
        assert (act.time_slot.end - act.time_slot.start).total_seconds() == act.time_slot.duration * 60


def test_well_optimized_fallback(quiet_logger):
    stops = [_activity("a", 0, 0), _activity("b", 0, 0.01)]
    options = OptimizationOptions(travel_mode=TransportMode.WALKING, preserve_time_constraints=False)
    result = optimize_route(stops, options, logger=quiet_logger)

    assert _ids(result.optimized_activities) == ["a", "b"]
    assert result.route_analysis.suggestions == [WELL_OPTIMIZED_SUGGESTION]
    assert result.cost_estimation.total == 0.0
    # 13 walking minutes each way: 13 / (13 + 1).
    assert result.route_analysis.efficiency == 93


def test_detour_bound_keeps_input_order(quiet_logger):
    stops = [_activity("a", 0, 0), _activity("b", 0, 1), _activity("c", 0, 2)]
    base = dict(
        start_location=Coordinate(lat=0.0, lng=1.05),
        preserve_time_constraints=False,
        consider_traffic=False,
    )

    free = optimize_route(stops, OptimizationOptions(**base), logger=quiet_logger)
    assert _ids(free.optimized_activities) == ["b", "a", "c"]
    assert free.estimated_savings.distance == 0.0

    bounded = optimize_route(stops, OptimizationOptions(max_detour_for_savings=0, **base), logger=quiet_logger)
    assert _ids(bounded.optimized_activities) == ["a", "b", "c"]


def test_strict_mode_rejects_invalid_plans(quiet_logger, log_buffer):
    stops = [_activity("x", 0, 0), _activity("x", 0, 0.01)]
    options = OptimizationOptions(validation_mode=ValidationMode.STRICT)

    with pytest.raises(ItineraryValidationError) as excinfo:
        optimize_route(stops, options, logger=quiet_logger)

    assert [issue.code for issue in excinfo.value.issues] == ["DUPLICATE_ACTIVITY_ID"]
    assert get_optimize_metrics().snapshot()["status_counts"] == {"rejected": 1}
    assert any(event["event"] == "error" for event in _events(log_buffer))


def test_strict_mode_from_environment(monkeypatch, quiet_logger):
    monkeypatch.setenv("ITINERARY_VALIDATION_MODE", "strict")
    with pytest.raises(ItineraryValidationError):
        optimize_route([_activity("far", 120.0, 0), _activity("b", 0, 0)], logger=quiet_logger)


def test_lenient_mode_continues_and_reports_conflicts(quiet_logger, log_buffer):
    stops = [
        _activity("a", 0, 0, start=datetime(2026, 5, 1, 9, 0), locked=True),
        _activity("b", 0, 1, start=datetime(2026, 5, 1, 11, 0), locked=True),
    ]
    result = optimize_route(stops, logger=quiet_logger)

    assert [conflict.kind for conflict in result.conflicts] == [ConflictKind.TRAVEL_TIME]
    assert result.conflicts[0].activity_ids == ["a", "b"]
    warnings = [event for event in _events(log_buffer) if event["event"] == "warning"]
    assert {event["stage"] for event in warnings} == {"validate", "reconcile"}


def test_settings_drive_buffer_and_day_start(quiet_logger):
    stops = [_activity("a", 0, 0), _activity("b", 0, 0)]
    settings = EngineSettings(buffer_minutes=0, day_start=time(7, 0))
    result = optimize_route(
        stops,
        OptimizationOptions(travel_mode=TransportMode.WALKING, plan_date=PLAN_DAY),
        settings=settings,
        logger=quiet_logger,
    )
    starts = [act.time_slot.start for act in result.optimized_activities]
    assert starts == [datetime(2026, 5, 1, 7, 0), datetime(2026, 5, 1, 8, 0)]


def test_cache_returns_independent_copies(triangle, quiet_logger):
    cache = MemoryCache()
    options = OptimizationOptions(plan_date=PLAN_DAY)

    first = optimize_route(triangle, options, cache=cache, logger=quiet_logger)
    second = optimize_route(triangle, options, cache=cache, logger=quiet_logger)
    assert second == first
    assert second is not first

    second.route_analysis.suggestions.clear()
    third = optimize_route(triangle, options, cache=cache, logger=quiet_logger)
    assert third.route_analysis.suggestions == first.route_analysis.suggestions

    snapshot = get_optimize_metrics().snapshot()
    assert snapshot["total_requests"] == 3
    assert snapshot["cache_hit_rate"] == pytest.approx(2 / 3, abs=1e-4)


def test_stage_logs_and_metrics(triangle, quiet_logger, log_buffer):
    optimize_route(triangle, OptimizationOptions(plan_date=PLAN_DAY), logger=quiet_logger)

    events = _events(log_buffer)
    assert all(event["trace_id"] == "test" for event in events)
    stage_ends = {event["stage"] for event in events if event["event"] == "stage_end"}
    assert {"optimize", "sequence", "reconcile"} <= stage_ends

    snapshot = get_optimize_metrics().snapshot()
    assert snapshot["total_requests"] == 1
    assert snapshot["status_counts"] == {"ok": 1}
    assert snapshot["last_requests"][0]["activity_count"] == 3
    assert snapshot["last_requests"][0]["trace_id"] == "test"


def test_unchanged_order_is_measured_on_the_same_clock(quiet_logger):
    stops = [_activity("a", 0, 0), _activity("b", 0, 0.2), _activity("c", 0, 0.4)]
    result = optimize_route(stops, OptimizationOptions(plan_date=PLAN_DAY), logger=quiet_logger)

    assert _ids(result.optimized_activities) == ["a", "b", "c"]
    assert result.traffic_impact.traffic_delay > 0
    assert result.estimated_savings.time == 0
    total = result.total_travel_time
    assert result.route_analysis.efficiency == round(total / (total + 1) * 100)
    assert result.route_analysis.efficiency == 99


def test_lenient_mode_survives_out_of_range_coordinates(quiet_logger):
    stops = [_activity("a", 100.0, 0.0), _activity("b", 80.0, 180.0)]
    result = optimize_route(stops, logger=quiet_logger)
    assert sorted(_ids(result.optimized_activities)) == ["a", "b"]
    assert result.total_distance >= 0.0


def test_lenient_mode_survives_non_finite_coordinates(quiet_logger):
    stops = [_activity("a", float("nan"), 0.0), _activity("b", 0.0, 1.0)]
    result = optimize_route(stops, logger=quiet_logger)
    assert _ids(result.optimized_activities) == ["a", "b"]
    assert math.isnan(result.total_distance)
    assert result.total_travel_time == 0
    assert result.estimated_savings.distance == 0.0


def test_naive_and_aware_starts_are_aligned(quiet_logger):
    stops = [
        _activity("a", 0, 0, start=datetime(2026, 5, 1, 9, 0)),
        _activity("b", 0, 0.01, start=datetime(2026, 5, 1, 13, 0, tzinfo=timezone.utc), locked=True),
    ]
    result = optimize_route(stops, logger=quiet_logger)

    a, b = result.optimized_activities
    assert a.time_slot.start == datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)
    assert b.time_slot.start == datetime(2026, 5, 1, 13, 0, tzinfo=timezone.utc)
    assert result.conflicts == []
