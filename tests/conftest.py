"""pytest global fixtures: environment isolation."""

import io
import os

import pytest

from itinerary_engine.infrastructure.logging import StructuredLogger
from itinerary_engine.observability.metrics import get_optimize_metrics

_ENV_PREFIX = "ITINERARY_"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Tests never see ITINERARY_* settings from the host or from earlier .env loads."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    get_optimize_metrics().reset()
    yield
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIX):
            os.environ.pop(key, None)
    get_optimize_metrics().reset()


@pytest.fixture
def log_buffer():
    return io.StringIO()


@pytest.fixture
def quiet_logger(log_buffer):
    return StructuredLogger(trace_id="test", output=log_buffer)
