"""
Lane delay model.

Orchestrates the per-lane computation pipeline:
    1. Effective demand
    2. Capacity per cycle
    3. v/c ratio
    4. Uniform + overflow delay
    5. Queue, throughput and congestion
    6. Saturation band and LOS
"""

from .capacity import compute_capacity, compute_green_share, compute_vc_ratio
from .classification import classify_los, classify_saturation
from .delay import compute_average_delay
from .demand import compute_effective_demand
from .models import DensityLevel, Lane, LaneEvaluation, LaneMetrics
from .numeric import round_half_up


# Linear scale from v/c ratio to the 0-100 congestion indicator
CONGESTION_SCALE = 65


def evaluate_lane(
    vehicles_per_cycle: float,
    green_time_seconds: float,
    cycle_time_seconds: float,
    density_level: DensityLevel | str = DensityLevel.MEDIUM
) -> LaneMetrics:
    """
    Compute delay, queue and throughput for a single lane.

    This is the main entry point for the lane delay model. It is a pure
    function of its arguments.

    Calculation sequence:
        1. effective demand = vehicles * density multiplier
        2. capacity = 1800 * green / 3600
        3. X = min(demand / max(capacity, 0.01), 1.99)
        4. delay = min(d1 + d2, 300)
        5. queue = max(0, round(demand - capacity))
           throughput = min(demand, capacity)
           congestion = min(100, round(X * 65))

    The turn penalty used when sharing green time is deliberately not part
    of the demand here.

    Args:
        vehicles_per_cycle: Arrivals per cycle
        green_time_seconds: Green time allocated to the lane
        cycle_time_seconds: Shared cycle length
        density_level: Density band; omitted means 'medium'

    Returns:
        LaneMetrics with all computed values

    Raises:
        InvalidDensityError: If density_level is not a known band
        ValueError: If any numeric input is out of range

    Example:
        >>> metrics = evaluate_lane(10, 10, 90, "high")
        >>> metrics.queue_length, metrics.average_delay_seconds
        (10, 300.0)
    """
    demand = compute_effective_demand(vehicles_per_cycle, density_level)
    capacity = compute_capacity(green_time_seconds)
    vc_ratio = compute_vc_ratio(demand, capacity)
    green_share = compute_green_share(green_time_seconds, cycle_time_seconds)

    d1, d2, average_delay = compute_average_delay(
        green_share=green_share,
        cycle_length=cycle_time_seconds,
        vc_ratio=vc_ratio
    )

    return LaneMetrics(
        effective_demand=demand,
        capacity=capacity,
        volume_capacity_ratio=vc_ratio,
        uniform_delay=d1,
        overflow_delay=d2,
        average_delay_seconds=average_delay,
        queue_length=max(0, round_half_up(demand - capacity)),
        throughput=min(demand, capacity),
        congestion_percent=min(100, round_half_up(vc_ratio * CONGESTION_SCALE)),
        saturation_level=classify_saturation(vc_ratio),
        los=classify_los(average_delay),
    )


def evaluate_lanes(
    lanes: list[Lane],
    cycle_time_seconds: float
) -> list[LaneEvaluation]:
    """Evaluate every lane with its own current green time."""
    return [
        LaneEvaluation(
            lane_id=lane.id,
            name=lane.name,
            green_time_seconds=lane.green_time_seconds,
            metrics=evaluate_lane(
                lane.vehicles_per_cycle,
                lane.green_time_seconds,
                cycle_time_seconds,
                lane.density_level,
            ),
        )
        for lane in lanes
    ]
