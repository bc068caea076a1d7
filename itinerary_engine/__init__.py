"""Single-day itinerary route and cost optimization engine."""

from itinerary_engine.domain import (
    Activity,
    ActivityCategory,
    ActivityTimeSlot,
    Coordinate,
    ItineraryValidationError,
    OptimizationOptions,
    OptimizationResult,
    TransportMode,
    ValidationMode,
    VehicleType,
)
from itinerary_engine.domain.planning.timing import suggest_optimal_timing
from itinerary_engine.planner.core import optimize_route
from itinerary_engine.planner.costs import estimate_route_costs
from itinerary_engine.planner.distance import calculate_distance, estimate_travel_time
from itinerary_engine.planner.stages import (
    detect_schedule_conflicts,
    find_location_clusters,
    optimize_route_order,
    reconcile_time_slots,
)
from itinerary_engine.planner.traffic import estimate_traffic

__version__ = "0.1.0"

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityTimeSlot",
    "Coordinate",
    "ItineraryValidationError",
    "OptimizationOptions",
    "OptimizationResult",
    "TransportMode",
    "ValidationMode",
    "VehicleType",
    "calculate_distance",
    "detect_schedule_conflicts",
    "estimate_route_costs",
    "estimate_traffic",
    "estimate_travel_time",
    "find_location_clusters",
    "optimize_route",
    "optimize_route_order",
    "reconcile_time_slots",
    "suggest_optimal_timing",
]
