"""Domain package exports."""

from itinerary_engine.domain.constants import (
    CATEGORY_PROFILES,
    DEFAULT_BUFFER_MINUTES,
    DEFAULT_CLUSTER_DISTANCE_KM,
    DEFAULT_DAY_START,
    CategoryProfile,
)
from itinerary_engine.domain.enums import (
    ActivityCategory,
    ConflictKind,
    Severity,
    TrafficSeverity,
    TransportMode,
    ValidationMode,
    VehicleType,
)
from itinerary_engine.domain.exceptions import DomainError, ItineraryValidationError
from itinerary_engine.domain.models import (
    Activity,
    ActivityTimeSlot,
    Coordinate,
    CostEstimation,
    EstimatedSavings,
    OptimizationOptions,
    OptimizationResult,
    RouteAnalysis,
    ScheduleConflict,
    TimingAdvice,
    TrafficCondition,
    TrafficImpact,
    TravelSegment,
    ValidationIssue,
)

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityTimeSlot",
    "CATEGORY_PROFILES",
    "CategoryProfile",
    "ConflictKind",
    "Coordinate",
    "CostEstimation",
    "DEFAULT_BUFFER_MINUTES",
    "DEFAULT_CLUSTER_DISTANCE_KM",
    "DEFAULT_DAY_START",
    "DomainError",
    "EstimatedSavings",
    "ItineraryValidationError",
    "OptimizationOptions",
    "OptimizationResult",
    "RouteAnalysis",
    "ScheduleConflict",
    "Severity",
    "TimingAdvice",
    "TrafficCondition",
    "TrafficImpact",
    "TrafficSeverity",
    "TransportMode",
    "TravelSegment",
    "ValidationIssue",
    "ValidationMode",
    "VehicleType",
]
