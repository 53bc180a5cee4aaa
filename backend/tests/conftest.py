"""
Shared test fixtures.

Points the app at an in-memory SQLite database before anything from
fieldroute is imported.
"""

import itertools
import os
from datetime import datetime, timedelta

import pytest

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fieldroute.features.routes import Waypoint  # noqa: E402


BASE_TIME = datetime(2025, 3, 1, 8, 0, 0)


@pytest.fixture
def make_waypoint():
    """
    Factory for route waypoints.

    Each call gets a unique id and, unless given, a timestamp one minute
    after the previous one.
    """
    counter = itertools.count(1)

    def _make(created_by="emp-a", *, is_start=False, is_end=False, timestamp=None, **kwargs):
        n = next(counter)
        return Waypoint(
            id=kwargs.pop("id", f"wp-{n}"),
            name=kwargs.pop("name", f"Pole {n}"),
            latitude=kwargs.pop("latitude", 21.25 + n * 0.001),
            longitude=kwargs.pop("longitude", 81.63),
            route_type=kwargs.pop("route_type", "new"),
            route_starting_point=kwargs.pop("route_starting_point", "Substation A"),
            route_ending_point=kwargs.pop("route_ending_point", "Village B"),
            created_by=created_by,
            path_owner=kwargs.pop("path_owner", created_by),
            timestamp=timestamp or BASE_TIME + timedelta(minutes=n),
            is_start=is_start,
            is_end=is_end,
            **kwargs,
        )

    return _make


@pytest.fixture
def client():
    """API client on a fresh in-memory database."""
    from fastapi.testclient import TestClient

    from fieldroute.db.session import async_engine
    from fieldroute.main import app

    with TestClient(app) as test_client:
        try:
            yield test_client
        finally:
            # Drop the shared connection so the next test starts empty
            test_client.portal.call(async_engine.dispose)
