"""Pytest configuration and fixtures for test suite."""

import pytest
from fastapi.testclient import TestClient

from core.config_loader import config_loader
from core.service_manager import service_manager
from main import app, settings
from tests.factories import FAST_INTERVAL_MS


@pytest.fixture(autouse=True)
def reset_services():
    """Make sure no dashboard session leaks between tests."""
    if service_manager.running:
        service_manager.stop_services()
    yield
    if service_manager.running:
        service_manager.stop_services()
    config_loader.reload_config()


@pytest.fixture
def client():
    """Client with the app lifespan running and a fast generator."""
    original = settings.interval_ms
    settings.interval_ms = FAST_INTERVAL_MS
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        settings.interval_ms = original
