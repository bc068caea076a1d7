"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from itinerary_engine.domain.constants import DEFAULT_FUEL_PRICE_PER_LITER
from itinerary_engine.domain.enums import (
    ActivityCategory,
    ConflictKind,
    Severity,
    TrafficSeverity,
    TransportMode,
    ValidationMode,
    VehicleType,
)


class Coordinate(BaseModel):
    lat: float
    lng: float


class ActivityTimeSlot(BaseModel):
    """Half-open window ``[start, end)``; ``duration`` is in minutes.

    When both ends are known the duration is derived from them. When only the
    start is known the end is derived from the duration.
    """

    start: Optional[dt.datetime] = None
    end: Optional[dt.datetime] = None
    duration: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _derive_window(self) -> "ActivityTimeSlot":
        if self.start is not None and self.end is not None:
            if (self.start.tzinfo is None) != (self.end.tzinfo is None):
                raise ValueError("time slot mixes naive and timezone-aware datetimes")
            if self.end < self.start:
                raise ValueError("time slot end precedes its start")
            self.duration = int(round((self.end - self.start).total_seconds() / 60))
            self.end = self.start + dt.timedelta(minutes=self.duration)
        elif self.start is not None:
            self.end = self.start + dt.timedelta(minutes=self.duration)
        return self

    @classmethod
    def starting_at(cls, start: dt.datetime, duration: int) -> "ActivityTimeSlot":
        return cls(start=start, end=start + dt.timedelta(minutes=duration), duration=duration)


class Activity(BaseModel):
    id: str
    title: str
    category: ActivityCategory
    location: Coordinate
    time_slot: ActivityTimeSlot = Field(default_factory=ActivityTimeSlot)
    is_locked: bool = False
    description: str = ""
    notes: str = ""


class TravelSegment(BaseModel):
    from_activity: Activity
    to_activity: Activity
    distance_km: float
    travel_time_minutes: int
    mode: TransportMode


class TrafficCondition(BaseModel):
    segment: str
    severity: TrafficSeverity
    delay_minutes: int
    multiplier: float = 1.0
    alternate_route: Optional[str] = None


class TrafficImpact(BaseModel):
    base_time: int = 0
    traffic_delay: int = 0
    conditions: list[TrafficCondition] = Field(default_factory=list)


class FuelCost(BaseModel):
    cost: float = 0.0
    liters: float = 0.0
    co2_emissions: float = 0.0


class TollSegment(BaseModel):
    name: str
    cost: float


class TollCost(BaseModel):
    cost: float = 0.0
    segments: list[TollSegment] = Field(default_factory=list)


class ParkingLocation(BaseModel):
    name: str
    hourly_rate: float
    estimated_hours: float


class ParkingCost(BaseModel):
    total_cost: float = 0.0
    locations: list[ParkingLocation] = Field(default_factory=list)


class CostEstimation(BaseModel):
    fuel: FuelCost = Field(default_factory=FuelCost)
    tolls: TollCost = Field(default_factory=TollCost)
    parking: ParkingCost = Field(default_factory=ParkingCost)
    total: float = 0.0


class EstimatedSavings(BaseModel):
    time: float = 0.0
    distance: float = 0.0
    cost: float = 0.0


class RouteAnalysis(BaseModel):
    efficiency: int = 100
    suggestions: list[str] = Field(default_factory=list)


class ScheduleConflict(BaseModel):
    kind: ConflictKind
    activity_ids: list[str] = Field(default_factory=list)
    message: str = ""
    severity: Severity = Severity.MEDIUM


class TimingAdvice(BaseModel):
    suggestions: list[str] = Field(default_factory=list)


class OptimizationOptions(BaseModel):
    travel_mode: TransportMode = TransportMode.DRIVING
    start_location: Optional[Coordinate] = None
    vehicle_type: VehicleType = VehicleType.STANDARD
    fuel_price_per_liter: float = Field(default=DEFAULT_FUEL_PRICE_PER_LITER, ge=0)
    consider_traffic: bool = True
    consider_tolls: bool = False
    consider_parking: bool = False
    preserve_time_constraints: bool = True
    max_detour_for_savings: Optional[float] = Field(default=None, ge=0)
    validation_mode: Optional[ValidationMode] = None
    plan_date: Optional[dt.date] = None
    day_start: Optional[dt.time] = None


class OptimizationResult(BaseModel):
    optimized_activities: list[Activity] = Field(default_factory=list)
    total_travel_time: int = 0
    total_distance: float = 0.0
    traffic_impact: TrafficImpact = Field(default_factory=TrafficImpact)
    cost_estimation: CostEstimation = Field(default_factory=CostEstimation)
    estimated_savings: EstimatedSavings = Field(default_factory=EstimatedSavings)
    route_analysis: RouteAnalysis = Field(default_factory=RouteAnalysis)
    conflicts: list[ScheduleConflict] = Field(default_factory=list)


class ValidationIssue(BaseModel):
    code: str
    severity: Severity = Severity.MEDIUM
    message: str = ""
    activity_ids: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
