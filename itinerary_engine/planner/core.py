"""Route optimisation pipeline: validate, sequence, reconcile, measure, advise."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from itinerary_engine.config.settings import EngineSettings, load_settings
from itinerary_engine.domain.constants import (
    SUGGEST_CO2_KG,
    SUGGEST_COST_SAVINGS,
    SUGGEST_DISTANCE_SAVINGS_KM,
    SUGGEST_TIME_SAVINGS_MINUTES,
)
from itinerary_engine.domain.enums import TrafficSeverity, ValidationMode
from itinerary_engine.domain.exceptions import ItineraryValidationError
from itinerary_engine.domain.models import (
    Activity,
    CostEstimation,
    EstimatedSavings,
    OptimizationOptions,
    OptimizationResult,
    RouteAnalysis,
    TrafficImpact,
)
from itinerary_engine.domain.planning.timing import suggest_optimal_timing
from itinerary_engine.infrastructure.cache import MemoryCache, make_cache_key
from itinerary_engine.infrastructure.logging import StructuredLogger, get_logger
from itinerary_engine.observability.metrics import observe_optimize_request
from itinerary_engine.planner.costs import estimate_route_costs
from itinerary_engine.planner.distance import build_travel_segments, route_distance_km
from itinerary_engine.planner.stages import (
    detect_schedule_conflicts,
    find_location_clusters,
    optimize_route_order,
    reconcile_time_slots,
)
from itinerary_engine.planner.traffic import estimate_traffic
from itinerary_engine.validators import run_all_validators

EMPTY_PLAN_SUGGESTION = "Add activities to optimize your route"
WELL_OPTIMIZED_SUGGESTION = "Your route is already well optimized!"
HEAVY_TRAFFIC_SUGGESTION = "Heavy traffic detected - consider adjusting departure times"


@dataclass(frozen=True)
class RouteMetrics:
    distance_km: float
    traffic: TrafficImpact
    costs: CostEstimation

    @property
    def travel_time(self) -> int:
        return self.traffic.base_time + self.traffic.traffic_delay


def measure_route(activities: list[Activity], options: OptimizationOptions) -> RouteMetrics:
    if options.consider_traffic:
        traffic = estimate_traffic(activities, options.travel_mode)
    else:
        segments = build_travel_segments(activities, options.travel_mode)
        traffic = TrafficImpact(base_time=sum(seg.travel_time_minutes for seg in segments))
    return RouteMetrics(
        distance_km=route_distance_km(activities),
        traffic=traffic,
        costs=estimate_route_costs(activities, options),
    )


def efficiency_score(original_time: float, optimized_time: float) -> int:
    return max(0, min(100, round(original_time / (optimized_time + 1) * 100)))


def build_suggestions(
    savings: EstimatedSavings,
    optimized: RouteMetrics,
    *,
    cluster_count: int,
    timing_suggestions: list[str],
) -> list[str]:
    suggestions: list[str] = []
    if savings.time > SUGGEST_TIME_SAVINGS_MINUTES:
        suggestions.append(f"Optimized route saves {round(savings.time)} minutes including traffic delays")
    if savings.distance > SUGGEST_DISTANCE_SAVINGS_KM:
        suggestions.append(f"Reduces total travel distance by {savings.distance:.1f} km")
    if savings.cost > SUGGEST_COST_SAVINGS:
        suggestions.append(f"Saves {savings.cost:.2f} in total travel costs")
    if any(
        cond.severity in (TrafficSeverity.HEAVY, TrafficSeverity.SEVERE)
        for cond in optimized.traffic.conditions
    ):
        suggestions.append(HEAVY_TRAFFIC_SUGGESTION)
    co2 = optimized.costs.fuel.co2_emissions
    if co2 > SUGGEST_CO2_KG:
        suggestions.append(f"Consider eco-friendly transport - this route produces {co2:.1f}kg CO2")
    if cluster_count > 1:
        suggestions.append(f"Found {cluster_count} location clusters - consider scheduling by area")
    suggestions.extend(timing_suggestions)
    if not suggestions:
        suggestions.append(WELL_OPTIMIZED_SUGGESTION)
    return suggestions


def _validate(
    activities: list[Activity],
    options: OptimizationOptions,
    *,
    validation_mode: ValidationMode,
    settings: EngineSettings,
    logger: StructuredLogger,
) -> None:
    issues = run_all_validators(activities, options, buffer_minutes=settings.buffer_minutes)
    if not issues:
        return
    codes = sorted({issue.code for issue in issues})
    if validation_mode == ValidationMode.STRICT:
        raise ItineraryValidationError(issues)
    logger.warning("validate", "continuing despite validation issues", codes=codes, count=len(issues))


def _schedule(
    activities: list[Activity],
    options: OptimizationOptions,
    settings: EngineSettings,
) -> list[Activity]:
    if not options.preserve_time_constraints:
        return list(activities)
    return reconcile_time_slots(
        activities,
        options.travel_mode,
        day_start=options.day_start or settings.day_start,
        plan_date=options.plan_date,
        buffer_minutes=settings.buffer_minutes,
    )


def _optimize(
    activities: list[Activity],
    options: OptimizationOptions,
    *,
    validation_mode: ValidationMode,
    settings: EngineSettings,
    logger: StructuredLogger,
) -> OptimizationResult:
    if not activities:
        return OptimizationResult(
            route_analysis=RouteAnalysis(efficiency=100, suggestions=[EMPTY_PLAN_SUGGESTION]),
        )

    _validate(activities, options, validation_mode=validation_mode, settings=settings, logger=logger)
    if len(activities) == 1:
        return OptimizationResult(optimized_activities=list(activities))

    # Both orders are measured on a reconciled clock so traffic applies alike.
    baseline = measure_route(_schedule(activities, options, settings), options)

    logger.stage_start("sequence", activity_count=len(activities))
    ordered = optimize_route_order(activities, options.start_location)
    detour_km = route_distance_km(ordered) - baseline.distance_km
    if options.max_detour_for_savings is not None and detour_km > options.max_detour_for_savings:
        logger.warning(
            "sequence",
            "optimized order exceeds detour bound; keeping input order",
            detour_km=round(detour_km, 3),
            max_detour_km=options.max_detour_for_savings,
        )
        ordered = list(activities)
    logger.stage_end("sequence")

    if options.preserve_time_constraints:
        logger.stage_start("reconcile")
        ordered = _schedule(ordered, options, settings)
        logger.stage_end("reconcile")

    optimized = measure_route(ordered, options)
    savings = EstimatedSavings(
        time=max(0, baseline.travel_time - optimized.travel_time),
        distance=max(0.0, baseline.distance_km - optimized.distance_km),
        cost=max(0.0, baseline.costs.total - optimized.costs.total),
    )

    conflicts = detect_schedule_conflicts(ordered, options.travel_mode)
    if conflicts:
        logger.warning(
            "reconcile",
            "schedule has conflicts",
            conflicts=[conflict.kind.value for conflict in conflicts],
        )

    suggestions = build_suggestions(
        savings,
        optimized,
        cluster_count=len(find_location_clusters(ordered, settings.cluster_distance_km)),
        timing_suggestions=suggest_optimal_timing(ordered).suggestions,
    )
    return OptimizationResult(
        optimized_activities=ordered,
        total_travel_time=optimized.travel_time,
        total_distance=optimized.distance_km,
        traffic_impact=optimized.traffic,
        cost_estimation=optimized.costs,
        estimated_savings=savings,
        route_analysis=RouteAnalysis(
            efficiency=efficiency_score(baseline.travel_time, optimized.travel_time),
            suggestions=suggestions,
        ),
        conflicts=conflicts,
    )


def optimize_route(
    activities: Sequence[Activity],
    options: Optional[OptimizationOptions] = None,
    *,
    settings: Optional[EngineSettings] = None,
    cache: Optional[MemoryCache] = None,
    logger: Optional[StructuredLogger] = None,
) -> OptimizationResult:
    """Order a day's activities to cut travel and report the effect.

    Caller-owned activities are never modified; rescheduled activities are
    returned as copies. Pass ``cache`` to reuse results for identical input.
    """
    activities = list(activities)
    options = options or OptimizationOptions()
    settings = settings or load_settings()
    validation_mode = options.validation_mode or settings.validation_mode
    logger = logger or get_logger()
    started = time.perf_counter()

    cache_key = ""
    if cache is not None:
        plan_day = options.plan_date or date.today()
        cache_key = make_cache_key("optimize_route", activities, options, settings, plan_day.isoformat())
        cached = cache.get(cache_key)
        if cached is not None:
            observe_optimize_request(
                status="ok",
                latency_ms=(time.perf_counter() - started) * 1000,
                activity_count=len(activities),
                validation_mode=validation_mode.value,
                cache_hit=True,
                trace_id=logger.trace_id,
                efficiency=cached.route_analysis.efficiency,
            )
            return cached.model_copy(deep=True)

    logger.stage_start("optimize", activity_count=len(activities), validation_mode=validation_mode.value)
    try:
        result = _optimize(
            activities,
            options,
            validation_mode=validation_mode,
            settings=settings,
            logger=logger,
        )
    except ItineraryValidationError as exc:
        logger.error("optimize", str(exc), codes=[issue.code for issue in exc.issues])
        observe_optimize_request(
            status="rejected",
            latency_ms=(time.perf_counter() - started) * 1000,
            activity_count=len(activities),
            validation_mode=validation_mode.value,
            trace_id=logger.trace_id,
        )
        raise
    logger.stage_end(
        "optimize",
        total_distance_km=round(result.total_distance, 3),
        total_travel_minutes=result.total_travel_time,
        efficiency=result.route_analysis.efficiency,
    )

    if cache is not None:
        cache.set(cache_key, result.model_copy(deep=True), ttl=settings.cache_ttl_seconds)
    observe_optimize_request(
        status="ok",
        latency_ms=(time.perf_counter() - started) * 1000,
        activity_count=len(activities),
        validation_mode=validation_mode.value,
        trace_id=logger.trace_id,
        efficiency=result.route_analysis.efficiency,
    )
    return result


__all__ = [
    "EMPTY_PLAN_SUGGESTION",
    "RouteMetrics",
    "WELL_OPTIMIZED_SUGGESTION",
    "build_suggestions",
    "efficiency_score",
    "measure_route",
    "optimize_route",
]
