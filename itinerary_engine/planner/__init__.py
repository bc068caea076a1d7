"""Geometry, traffic and cost estimators plus the optimisation entry point."""

from itinerary_engine.planner.core import optimize_route
from itinerary_engine.planner.costs import estimate_route_costs
from itinerary_engine.planner.distance import (
    build_travel_segments,
    calculate_distance,
    estimate_travel_time,
    route_distance_km,
)
from itinerary_engine.planner.traffic import estimate_traffic, traffic_multiplier

__all__ = [
    "build_travel_segments",
    "calculate_distance",
    "estimate_route_costs",
    "estimate_traffic",
    "estimate_travel_time",
    "optimize_route",
    "route_distance_km",
    "traffic_multiplier",
]
