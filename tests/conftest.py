"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from src.signal_timing import Lane


@pytest.fixture
async def client():
    """Async test client fixture."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def default_lanes():
    """
    Deliberately imbalanced five-lane intersection.

    Both high-density straight lanes are under-timed and both turn lanes
    are over-timed for a 90 second cycle.
    """
    return [
        Lane(id=1, name="North Straight", type="straight",
             density_level="high", vehicles_per_cycle=10, green_time_seconds=10),
        Lane(id=2, name="North Left Turn", type="turn",
             density_level="medium", vehicles_per_cycle=3, green_time_seconds=30),
        Lane(id=3, name="South Straight", type="straight",
             density_level="high", vehicles_per_cycle=8, green_time_seconds=12),
        Lane(id=4, name="East Straight", type="straight",
             density_level="medium", vehicles_per_cycle=6, green_time_seconds=18),
        Lane(id=5, name="West Right Turn", type="turn",
             density_level="low", vehicles_per_cycle=4, green_time_seconds=15),
    ]
