"""
Webster's optimal cycle length.

    C0 = (1.5 * L + 5) / (1 - Y)

Where:
    L = total lost time per cycle (seconds)
    Y = sum of critical flow ratios (flow / saturation flow)

The estimate is advisory; it never changes the cycle the optimizer uses.
"""

from .capacity import SATURATION_FLOW
from .demand import compute_lane_weight
from .exceptions import DegenerateInputError
from .models import Lane
from .numeric import round_half_up


# Lane demand is per cycle; hourly flow assumes this reference cycle
REFERENCE_CYCLE = 90.0

LOST_TIME_PER_PHASE = 3.5

# Keeps the denominator away from zero as Y approaches 1
MIN_SPARE_CAPACITY = 0.05

MIN_CYCLE = 40
MAX_CYCLE = 180


def compute_flow_ratio(lane: Lane) -> float:
    """
    Flow ratio y = q / s for one lane.

    The per-cycle weight is scaled to an hourly flow as though the cycle
    were the 90 second reference cycle.
    """
    flow_per_hour = compute_lane_weight(lane) * (3600.0 / REFERENCE_CYCLE)
    return flow_per_hour / SATURATION_FLOW


def estimate_optimal_cycle(lanes: list[Lane]) -> int:
    """
    Estimate the optimal cycle length for a set of lanes.

    Y = sum(y_i)
    L = 3.5 * n
    C0 = round((1.5 * L + 5) / max(1 - Y, 0.05)), clamped to [40, 180]

    Args:
        lanes: Lanes sharing the cycle

    Returns:
        Suggested cycle length in whole seconds

    Raises:
        DegenerateInputError: If lanes is empty
    """
    if not lanes:
        raise DegenerateInputError(
            "estimate_optimal_cycle requires at least one lane"
        )

    Y = sum(compute_flow_ratio(lane) for lane in lanes)
    L = LOST_TIME_PER_PHASE * len(lanes)

    cycle = round_half_up((1.5 * L + 5.0) / max(1.0 - Y, MIN_SPARE_CAPACITY))

    return min(max(cycle, MIN_CYCLE), MAX_CYCLE)
