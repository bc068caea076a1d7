"""Engine settings resolved from the environment (optionally seeded from a .env file)."""

from __future__ import annotations

import logging
import os
from datetime import time
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from itinerary_engine.domain.constants import (
    DEFAULT_BUFFER_MINUTES,
    DEFAULT_CLUSTER_DISTANCE_KM,
    DEFAULT_DAY_START,
)
from itinerary_engine.domain.enums import ValidationMode

_LOGGER = logging.getLogger("itinerary-engine.config")

ENV_VALIDATION_MODE = "ITINERARY_VALIDATION_MODE"
ENV_DAY_START = "ITINERARY_DAY_START"
ENV_BUFFER_MINUTES = "ITINERARY_BUFFER_MINUTES"
ENV_CLUSTER_DISTANCE_KM = "ITINERARY_CLUSTER_DISTANCE_KM"
ENV_CACHE_TTL_SECONDS = "ITINERARY_CACHE_TTL_SECONDS"


class EngineSettings(BaseModel):
    validation_mode: ValidationMode = Field(default=ValidationMode.LENIENT)
    day_start: time = Field(default=DEFAULT_DAY_START)
    buffer_minutes: int = Field(default=DEFAULT_BUFFER_MINUTES, ge=0)
    cluster_distance_km: float = Field(default=DEFAULT_CLUSTER_DISTANCE_KM, gt=0)
    cache_ttl_seconds: float = Field(default=300.0, gt=0)


def _raw(name: str) -> str:
    return str(os.getenv(name) or "").strip()


def resolve_validation_mode() -> ValidationMode:
    raw = _raw(ENV_VALIDATION_MODE).lower()
    if not raw:
        return ValidationMode.LENIENT
    try:
        return ValidationMode(raw)
    except ValueError:
        _LOGGER.warning("ignoring invalid %s=%r", ENV_VALIDATION_MODE, raw)
        return ValidationMode.LENIENT


def resolve_day_start_time() -> time:
    raw = _raw(ENV_DAY_START)
    if not raw:
        return DEFAULT_DAY_START
    try:
        return time.fromisoformat(raw)
    except ValueError:
        _LOGGER.warning("ignoring invalid %s=%r", ENV_DAY_START, raw)
        return DEFAULT_DAY_START


def _resolve_number(name: str, default: float, *, minimum: float, cast=float):
    raw = _raw(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        _LOGGER.warning("ignoring invalid %s=%r", name, raw)
        return default
    if value < minimum:
        _LOGGER.warning("ignoring out-of-range %s=%r", name, raw)
        return default
    return value


def load_settings(*, env_file: Optional[str] = None) -> EngineSettings:
    """Build settings from ``ITINERARY_*`` variables.

    ``env_file`` is loaded first with python-dotenv; variables already present
    in the process environment win.
    """
    if env_file:
        load_dotenv(dotenv_path=env_file, override=False)
    return EngineSettings(
        validation_mode=resolve_validation_mode(),
        day_start=resolve_day_start_time(),
        buffer_minutes=_resolve_number(ENV_BUFFER_MINUTES, DEFAULT_BUFFER_MINUTES, minimum=0, cast=int),
        cluster_distance_km=_resolve_number(
            ENV_CLUSTER_DISTANCE_KM, DEFAULT_CLUSTER_DISTANCE_KM, minimum=1e-9
        ),
        cache_ttl_seconds=_resolve_number(ENV_CACHE_TTL_SECONDS, 300.0, minimum=1e-9),
    )


__all__ = [
    "EngineSettings",
    "load_settings",
    "resolve_day_start_time",
    "resolve_validation_mode",
]
