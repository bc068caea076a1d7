"""Domain enums."""

from enum import Enum


class ActivityCategory(str, Enum):
    SIGHTSEEING = "sightseeing"
    DINING = "dining"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    ACCOMMODATION = "accommodation"
    TRANSPORT = "transport"


class TransportMode(str, Enum):
    WALKING = "walking"
    DRIVING = "driving"
    PUBLIC_TRANSPORT = "public_transport"


class VehicleType(str, Enum):
    COMPACT = "compact"
    STANDARD = "standard"
    SUV = "suv"
    ELECTRIC = "electric"


class TrafficSeverity(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    SEVERE = "severe"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConflictKind(str, Enum):
    OVERLAP = "overlap"
    TRAVEL_TIME = "travel_time"


class ValidationMode(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"
