from __future__ import annotations

from datetime import time

from itinerary_engine.config.settings import EngineSettings, load_settings
from itinerary_engine.domain.enums import ValidationMode


def test_defaults_without_environment():
    assert load_settings() == EngineSettings()
    settings = load_settings()
    assert settings.validation_mode == ValidationMode.LENIENT
    assert settings.day_start == time(9, 0)
    assert settings.buffer_minutes == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ITINERARY_VALIDATION_MODE", "STRICT")
    monkeypatch.setenv("ITINERARY_DAY_START", "08:30")
    monkeypatch.setenv("ITINERARY_BUFFER_MINUTES", "15")
    monkeypatch.setenv("ITINERARY_CLUSTER_DISTANCE_KM", "3.5")
    monkeypatch.setenv("ITINERARY_CACHE_TTL_SECONDS", "60")

    settings = load_settings()
    assert settings.validation_mode == ValidationMode.STRICT
    assert settings.day_start == time(8, 30)
    assert settings.buffer_minutes == 15
    assert settings.cluster_distance_km == 3.5
    assert settings.cache_ttl_seconds == 60.0


def test_invalid_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("ITINERARY_VALIDATION_MODE", "paranoid")
    monkeypatch.setenv("ITINERARY_DAY_START", "nine o'clock")
    monkeypatch.setenv("ITINERARY_BUFFER_MINUTES", "-5")
    monkeypatch.setenv("ITINERARY_CLUSTER_DISTANCE_KM", "far")
    monkeypatch.setenv("ITINERARY_CACHE_TTL_SECONDS", "0")

    assert load_settings() == EngineSettings()


def test_env_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ITINERARY_VALIDATION_MODE=strict\nITINERARY_BUFFER_MINUTES=45\n", encoding="utf-8")

    settings = load_settings(env_file=str(env_file))
    assert settings.validation_mode == ValidationMode.STRICT
    assert settings.buffer_minutes == 45


def test_process_environment_wins_over_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("ITINERARY_BUFFER_MINUTES=45\n", encoding="utf-8")
    monkeypatch.setenv("ITINERARY_BUFFER_MINUTES", "10")

    assert load_settings(env_file=str(env_file)).buffer_minutes == 10
