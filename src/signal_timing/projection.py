"""
Queue build-up projection over successive cycles.

This is an illustrative growth curve, not a simulated queueing process.
Each lane's steady-state queue and wait are ramped up over the steps and
modulated by a fixed sine oscillation keyed on the lane id, so the same
inputs always produce the same series.
"""

import math

from .engine import evaluate_lane
from .models import Lane, QueueSnapshot
from .numeric import round_half_up


DEFAULT_STEPS = 20


def compute_noise(step: int, lane_id: int) -> float:
    """Oscillation term: sin(0.9 * step + 2.1 * lane_id) * 0.1."""
    return math.sin(step * 0.9 + lane_id * 2.1) * 0.1


def project_queues(
    lanes: list[Lane],
    cycle_time_seconds: float,
    steps: int = DEFAULT_STEPS
) -> list[list[QueueSnapshot]]:
    """
    Project per-lane queue and wait over a number of steps.

    For step s with t = (s + 1) / steps:
        queue = max(0, round(base_queue * (0.6 + 0.4 * t + noise)))
        wait  = max(0, base_wait * (0.75 + 0.25 * t + 0.5 * noise))

    Base values come from the lane delay model at the lane's current green.

    Args:
        lanes: Lanes to project
        cycle_time_seconds: Cycle length
        steps: Number of time steps

    Returns:
        One list of QueueSnapshot per step, lanes in input order

    Raises:
        ValueError: If steps is less than 1
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")

    base = [
        evaluate_lane(
            lane.vehicles_per_cycle,
            lane.green_time_seconds,
            cycle_time_seconds,
            lane.density_level,
        )
        for lane in lanes
    ]

    series: list[list[QueueSnapshot]] = []
    for step in range(steps):
        t = (step + 1) / steps
        snapshots = []
        for lane, metrics in zip(lanes, base):
            noise = compute_noise(step, lane.id)
            queue = round_half_up(
                metrics.queue_length * (0.6 + 0.4 * t + noise)
            )
            wait = metrics.average_delay_seconds * (0.75 + 0.25 * t + 0.5 * noise)
            snapshots.append(QueueSnapshot(
                lane_id=lane.id,
                name=lane.name,
                queue=max(0, queue),
                wait=max(0.0, wait),
            ))
        series.append(snapshots)

    return series
