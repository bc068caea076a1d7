"""Domain constants shared by deterministic logic."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from itinerary_engine.domain.enums import ActivityCategory, TransportMode, VehicleType

EARTH_RADIUS_KM = 6371.0

# km/h; driving has city congestion baked in, public transport amortizes waiting.
TRAVEL_SPEED_KMH = {
    TransportMode.WALKING: 5.0,
    TransportMode.DRIVING: 25.0,
    TransportMode.PUBLIC_TRANSPORT: 20.0,
}

DEFAULT_DAY_START = time(9, 0)
DEFAULT_BUFFER_MINUTES = 30
DEFAULT_CLUSTER_DISTANCE_KM = 2.0
DEFAULT_FUEL_PRICE_PER_LITER = 1.45

# km per liter; electric vehicles burn no fuel.
VEHICLE_EFFICIENCY_KM_PER_LITER: dict[VehicleType, float | None] = {
    VehicleType.COMPACT: 14.5,
    VehicleType.STANDARD: 11.0,
    VehicleType.SUV: 8.5,
    VehicleType.ELECTRIC: None,
}

CO2_KG_PER_LITER = 2.31

TOLL_DISTANCE_THRESHOLD_KM = 50.0
TOLL_RATE_PER_KM = 0.15
TOLL_CAP = 25.0

TRAFFIC_MULTIPLIER_CAP = 2.5
TRAFFIC_REPORT_THRESHOLD_MINUTES = 5
TRAFFIC_ALTERNATE_ROUTE_MINUTES = 20


@dataclass(frozen=True)
class CategoryProfile:
    parking_rate_per_hour: float
    ideal_hours: tuple[int, ...]
    avoid_hours: tuple[int, ...]
    avoid_reason: str = "peak times"


CATEGORY_PROFILES: dict[ActivityCategory, CategoryProfile] = {
    ActivityCategory.SIGHTSEEING: CategoryProfile(
        parking_rate_per_hour=3.50,
        ideal_hours=(9, 10, 11, 14, 15, 16),
        avoid_hours=(12, 13),
    ),
    ActivityCategory.DINING: CategoryProfile(
        parking_rate_per_hour=2.00,
        ideal_hours=(12, 13, 18, 19, 20),
        avoid_hours=(),
    ),
    ActivityCategory.SHOPPING: CategoryProfile(
        parking_rate_per_hour=2.50,
        ideal_hours=(10, 11, 14, 15, 16),
        avoid_hours=(12, 13, 18, 19),
    ),
    ActivityCategory.ENTERTAINMENT: CategoryProfile(
        parking_rate_per_hour=4.00,
        ideal_hours=(19, 20, 21),
        avoid_hours=(8, 9, 10),
    ),
    # Check-in window.
    ActivityCategory.ACCOMMODATION: CategoryProfile(
        parking_rate_per_hour=15.00,
        ideal_hours=(15, 16, 17),
        avoid_hours=(8, 9, 10, 11),
    ),
    ActivityCategory.TRANSPORT: CategoryProfile(
        parking_rate_per_hour=0.0,
        ideal_hours=(),
        avoid_hours=(7, 8, 17, 18),
        avoid_reason="rush hour",
    ),
}

SUGGEST_TIME_SAVINGS_MINUTES = 15
SUGGEST_DISTANCE_SAVINGS_KM = 1.0
SUGGEST_COST_SAVINGS = 5.0
SUGGEST_CO2_KG = 20.0
