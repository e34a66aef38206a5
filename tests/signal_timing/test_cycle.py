"""Tests for Webster's optimal cycle estimate."""

import pytest
from src.signal_timing import DegenerateInputError, Lane, estimate_optimal_cycle
from src.signal_timing.cycle import compute_flow_ratio


def _lanes(count, vehicles, density="medium", lane_type="straight"):
    return [
        Lane(id=i, type=lane_type, density_level=density,
             vehicles_per_cycle=vehicles, green_time_seconds=15)
        for i in range(count)
    ]


class TestFlowRatio:
    """y = weight * 40 / 1800."""

    def test_straight(self):
        lane = _lanes(1, 8)[0]
        assert compute_flow_ratio(lane) == pytest.approx(320 / 1800)

    def test_turn_penalized(self):
        lane = _lanes(1, 8, lane_type="turn")[0]
        assert compute_flow_ratio(lane) == pytest.approx(320 * 1.15 / 1800)


class TestOptimalCycle:
    """Cycle estimates and clamping."""

    def test_mid_range(self):
        """Four lanes at Y = 0.711: (1.5 * 14 + 5) / 0.289 = 90."""
        assert estimate_optimal_cycle(_lanes(4, 8)) == 90

    def test_light_demand_clamped_to_40(self):
        assert estimate_optimal_cycle(_lanes(1, 3)) == 40

    def test_zero_demand(self):
        assert estimate_optimal_cycle(_lanes(2, 0)) == 40

    def test_saturated_clamped_to_180(self, default_lanes):
        assert estimate_optimal_cycle(default_lanes) == 180

    def test_oversaturated_uses_floor(self):
        """Y above 1 falls back to the 0.05 floor instead of going negative."""
        assert estimate_optimal_cycle(_lanes(3, 30, density="peak")) == 180

    def test_always_in_bounds(self):
        for count in (1, 2, 4, 8):
            for vehicles in (0, 1, 4, 8, 15, 30):
                for density in ("low", "medium", "high", "peak"):
                    cycle = estimate_optimal_cycle(_lanes(count, vehicles, density))
                    assert 40 <= cycle <= 180

    def test_empty_lanes(self):
        with pytest.raises(DegenerateInputError):
            estimate_optimal_cycle([])
