"""Tests for /timing endpoints."""

import pytest

from src.signal_timing import __engine_version__


@pytest.fixture
def payload():
    """Imbalanced five-lane intersection as a request body."""
    return {
        "cycle_time_seconds": 90,
        "lanes": [
            {"id": 1, "name": "North Straight", "type": "straight",
             "density_level": "high", "vehicles_per_cycle": 10,
             "green_time_seconds": 10},
            {"id": 2, "name": "North Left Turn", "type": "turn",
             "density_level": "medium", "vehicles_per_cycle": 3,
             "green_time_seconds": 30},
            {"id": 3, "name": "South Straight", "type": "straight",
             "density_level": "high", "vehicles_per_cycle": 8,
             "green_time_seconds": 12},
            {"id": 4, "name": "East Straight", "type": "straight",
             "density_level": "medium", "vehicles_per_cycle": 6,
             "green_time_seconds": 18},
            {"id": 5, "name": "West Right Turn", "type": "turn",
             "density_level": "low", "vehicles_per_cycle": 4,
             "green_time_seconds": 15},
        ],
    }


class TestEngineInfo:
    """Tests for GET /timing/info."""

    @pytest.mark.asyncio
    async def test_info(self, client):
        response = await client.get("/timing/info")
        assert response.status_code == 200

        data = response.json()
        assert data["engine_version"] == __engine_version__
        assert data["saturation_flow"] == 1800
        assert data["density_multipliers"] == {
            "low": 0.5, "medium": 1.0, "high": 1.5, "peak": 2.2
        }
        assert data["min_green"] == 8


class TestEvaluate:
    """Tests for POST /timing/evaluate."""

    @pytest.mark.asyncio
    async def test_basic_evaluation(self, client, payload):
        response = await client.post("/timing/evaluate", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["engine_version"] == __engine_version__
        assert len(data["lanes"]) == 5

        first = data["lanes"][0]
        assert first["lane_id"] == 1
        assert first["metrics"]["volume_capacity_ratio"] == 1.99
        assert first["metrics"]["average_delay_seconds"] == 300
        assert first["metrics"]["queue_length"] == 10
        assert first["metrics"]["los"] == "F"
        assert first["metrics"]["saturation_level"] == "oversaturated"

    @pytest.mark.asyncio
    async def test_invalid_density(self, client, payload):
        payload["lanes"][0]["density_level"] = "gridlock"
        response = await client.post("/timing/evaluate", json=payload)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_cycle_out_of_range(self, client, payload):
        payload["cycle_time_seconds"] = 240
        response = await client.post("/timing/evaluate", json=payload)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_negative_vehicles(self, client, payload):
        payload["lanes"][0]["vehicles_per_cycle"] = -3
        response = await client.post("/timing/evaluate", json=payload)
        assert response.status_code == 422


class TestOptimize:
    """Tests for POST /timing/optimize."""

    @pytest.mark.asyncio
    async def test_optimized_greens(self, client, payload):
        response = await client.post("/timing/optimize", json=payload)
        assert response.status_code == 200

        data = response.json()
        greens = [l["optimized_green_time_seconds"] for l in data["optimized_lanes"]]
        assert greens == [27, 8, 22, 11, 8]
        assert data["usable_green_seconds"] == 75
        assert [e["green_time_seconds"] for e in data["after"]] == greens

    @pytest.mark.asyncio
    async def test_empty_lanes(self, client):
        response = await client.post(
            "/timing/optimize",
            json={"cycle_time_seconds": 90, "lanes": []},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "validation_error"


class TestOptimalCycle:
    """Tests for POST /timing/optimal-cycle."""

    @pytest.mark.asyncio
    async def test_suggestion(self, client, payload):
        response = await client.post("/timing/optimal-cycle", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["current_cycle_seconds"] == 90
        assert data["suggested_cycle_seconds"] == 180

    @pytest.mark.asyncio
    async def test_empty_lanes(self, client):
        response = await client.post(
            "/timing/optimal-cycle",
            json={"cycle_time_seconds": 90, "lanes": []},
        )
        assert response.status_code == 422


class TestProjection:
    """Tests for POST /timing/projection."""

    @pytest.mark.asyncio
    async def test_default_steps(self, client, payload):
        response = await client.post("/timing/projection", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["steps"] == 20
        assert len(data["series"]) == 20
        assert data["series"][0][0]["queue"] == 7

    @pytest.mark.asyncio
    async def test_custom_steps(self, client, payload):
        payload["steps"] = 4
        response = await client.post("/timing/projection", json=payload)
        assert response.status_code == 200
        assert len(response.json()["series"]) == 4

    @pytest.mark.asyncio
    async def test_zero_steps_rejected(self, client, payload):
        payload["steps"] = 0
        response = await client.post("/timing/projection", json=payload)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_repeatable(self, client, payload):
        first = await client.post("/timing/projection", json=payload)
        second = await client.post("/timing/projection", json=payload)
        assert first.content == second.content


class TestRun:
    """Tests for POST /timing/run."""

    @pytest.mark.asyncio
    async def test_full_run(self, client, payload):
        response = await client.post("/timing/run", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["engine_version"] == __engine_version__
        assert data["suggested_cycle_seconds"] == 180
        assert len(data["before"]) == 5
        assert len(data["after"]) == 5
        assert len(data["projection"]) == 20

        summary = data["summary"]
        assert summary["lane_count"] == 5
        assert summary["before_wait"] == pytest.approx(137.47, abs=0.01)
        assert summary["throughput_gain_percent"] == pytest.approx(59.1)

    @pytest.mark.asyncio
    async def test_replay_matches(self, client, payload):
        """Posting a stored run's lanes again reproduces the run."""
        first = (await client.post("/timing/run", json=payload)).json()
        replay = {
            "cycle_time_seconds": int(first["cycle_time_seconds"]),
            "lanes": first["lanes"],
        }
        second = (await client.post("/timing/run", json=replay)).json()
        assert second == first

    @pytest.mark.asyncio
    async def test_empty_lanes(self, client):
        response = await client.post(
            "/timing/run",
            json={"cycle_time_seconds": 90, "lanes": []},
        )
        assert response.status_code == 422
