"""Fuel, toll and parking estimates for a sequenced day plan."""

from __future__ import annotations

from itinerary_engine.domain.constants import (
    CATEGORY_PROFILES,
    CO2_KG_PER_LITER,
    TOLL_CAP,
    TOLL_DISTANCE_THRESHOLD_KM,
    TOLL_RATE_PER_KM,
    VEHICLE_EFFICIENCY_KM_PER_LITER,
)
from itinerary_engine.domain.enums import TransportMode, VehicleType
from itinerary_engine.domain.models import (
    Activity,
    CostEstimation,
    FuelCost,
    OptimizationOptions,
    ParkingCost,
    ParkingLocation,
    TollCost,
    TollSegment,
)
from itinerary_engine.planner.distance import route_distance_km


def estimate_fuel(distance_km: float, vehicle_type: VehicleType, fuel_price_per_liter: float) -> FuelCost:
    efficiency = VEHICLE_EFFICIENCY_KM_PER_LITER[vehicle_type]
    if not efficiency:
        return FuelCost()
    liters = distance_km / efficiency
    return FuelCost(
        cost=liters * fuel_price_per_liter,
        liters=liters,
        co2_emissions=liters * CO2_KG_PER_LITER,
    )


def estimate_tolls(distance_km: float) -> TollCost:
    # Long days likely touch highways; flat per-km heuristic.
    if distance_km <= TOLL_DISTANCE_THRESHOLD_KM:
        return TollCost()
    cost = min(distance_km * TOLL_RATE_PER_KM, TOLL_CAP)
    return TollCost(cost=cost, segments=[TollSegment(name="Highway tolls", cost=cost)])


def estimate_parking(activities: list[Activity]) -> ParkingCost:
    locations: list[ParkingLocation] = []
    total = 0.0
    for activity in activities:
        rate = CATEGORY_PROFILES[activity.category].parking_rate_per_hour
        hours = activity.time_slot.duration / 60
        total += rate * hours
        locations.append(ParkingLocation(name=activity.title, hourly_rate=rate, estimated_hours=hours))
    return ParkingCost(total_cost=total, locations=locations)


def estimate_route_costs(activities: list[Activity], options: OptimizationOptions) -> CostEstimation:
    """Costs only accrue when driving; each part honours its own option flag."""
    if options.travel_mode != TransportMode.DRIVING:
        return CostEstimation()

    distance = route_distance_km(activities)
    fuel = estimate_fuel(distance, options.vehicle_type, options.fuel_price_per_liter)
    tolls = estimate_tolls(distance) if options.consider_tolls else TollCost()
    parking = estimate_parking(activities) if options.consider_parking else ParkingCost()
    return CostEstimation(
        fuel=fuel,
        tolls=tolls,
        parking=parking,
        total=fuel.cost + tolls.cost + parking.total_cost,
    )


__all__ = [
    "estimate_fuel",
    "estimate_parking",
    "estimate_route_costs",
    "estimate_tolls",
]
