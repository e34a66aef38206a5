"""
Demand-proportional green time allocation.

Every lane gets a phase; the usable green in a cycle is what remains after
a fixed intergreen loss per phase, shared out in proportion to each lane's
turn-penalized demand.
"""

from .demand import compute_lane_weight
from .exceptions import DegenerateInputError
from .models import Lane, OptimizedLane
from .numeric import round_half_up


# Intergreen lost per phase transition (seconds)
LOST_TIME_PER_PHASE = 3.0

# Usable green never drops below this, however many phases share the cycle
MIN_USABLE_GREEN = 20.0

# No lane is starved below this green time (seconds)
MIN_GREEN = 8


def compute_usable_green(lane_count: int, cycle_time_seconds: float) -> float:
    """
    Green time available for sharing after intergreen losses.

    usable = max(C - 3 * n, 20)

    Args:
        lane_count: Number of lanes (one phase each)
        cycle_time_seconds: Cycle length

    Returns:
        Usable green in seconds
    """
    lost_time = LOST_TIME_PER_PHASE * lane_count
    return max(cycle_time_seconds - lost_time, MIN_USABLE_GREEN)


def optimize_timing(
    lanes: list[Lane],
    cycle_time_seconds: float
) -> list[OptimizedLane]:
    """
    Reallocate green time across lanes in proportion to demand.

    Allocation:
        1. weight_i = vehicles * density multiplier * turn factor
        2. green_i = max(8, round(weight_i / sum(weight) * usable))
        3. green_i = max(8, round(green_i * usable / sum(green)))

    The second pass pulls the total back towards the usable green after the
    8 second floor and rounding have pushed it off. The result is an
    approximation: the total may differ from usable by about a second per
    lane.

    When every lane has zero demand the weight sum is taken as 1, so all
    lanes fall to the floor and share equally.

    Args:
        lanes: Lanes sharing the cycle, in phase order
        cycle_time_seconds: Cycle length

    Returns:
        New OptimizedLane objects in the same order; the inputs are untouched

    Raises:
        DegenerateInputError: If lanes is empty
        ValueError: If cycle_time_seconds is not positive
    """
    if not lanes:
        raise DegenerateInputError("optimize_timing requires at least one lane")
    if cycle_time_seconds <= 0:
        raise ValueError("cycle_time_seconds must be positive")

    usable = compute_usable_green(len(lanes), cycle_time_seconds)

    weights = [compute_lane_weight(lane) for lane in lanes]
    weight_sum = sum(weights) or 1.0

    greens = [
        max(MIN_GREEN, round_half_up(weight / weight_sum * usable))
        for weight in weights
    ]
    green_sum = sum(greens)

    return [
        OptimizedLane(
            **lane.model_dump(include=set(Lane.model_fields)),
            optimized_green_time_seconds=max(
                MIN_GREEN, round_half_up(green * usable / green_sum)
            ),
        )
        for lane, green in zip(lanes, greens)
    ]
