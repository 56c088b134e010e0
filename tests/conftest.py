"""Pytest configuration and fixtures for test suite."""

import pytest
from core.services.telemetry_manager import telemetry_manager

NOW = 1_700_000_000_000  # fixed evaluation time (epoch ms)


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Start every test with an empty sample store and zeroed counters."""
    telemetry_manager.clear()

    yield

    telemetry_manager.clear()
