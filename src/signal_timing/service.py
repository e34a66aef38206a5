"""
Optimization run service.

Main entry point for the full before/after pipeline:
    1. Evaluate every lane at its current green ("before")
    2. Reallocate green time across the lanes
    3. Re-evaluate every lane at its optimized green ("after")
    4. Project queue build-up
    5. Summarize the improvement

The suggested cycle length is computed alongside and reported only.
"""

import logging

from . import __engine_version__
from .cycle import estimate_optimal_cycle
from .demand import get_density_multiplier
from .engine import evaluate_lane, evaluate_lanes
from .models import (
    IntersectionTotals,
    Lane,
    LaneEvaluation,
    OptimizationRun,
    OptimizedLane,
    RunSummary,
)
from .numeric import round_half_up
from .optimizer import optimize_timing
from .projection import DEFAULT_STEPS, project_queues

logger = logging.getLogger(__name__)


def _percent_change(numerator: float, denominator: float, floor: float) -> float:
    """Percentage change floored at zero, with a guarded denominator."""
    return round(max(0.0, numerator / max(denominator, floor) * 100.0), 1)


def compute_intersection_totals(
    evaluations: list[LaneEvaluation]
) -> IntersectionTotals:
    """
    Aggregate lane evaluations into intersection-wide measures.

    Waits and congestion are averaged over lanes; throughput and queues are
    summed. An empty list yields zeros.

    Args:
        evaluations: Per-lane evaluations for one green allocation

    Returns:
        IntersectionTotals for the allocation
    """
    count = len(evaluations)
    divisor = max(count, 1)

    return IntersectionTotals(
        lane_count=count,
        mean_wait_seconds=sum(
            e.metrics.average_delay_seconds for e in evaluations
        ) / divisor,
        mean_congestion_percent=sum(
            e.metrics.congestion_percent for e in evaluations
        ) / divisor,
        total_throughput=sum(e.metrics.throughput for e in evaluations),
        total_queue=sum(e.metrics.queue_length for e in evaluations),
    )


def count_effective_vehicles(lanes: list[Lane]) -> int:
    """Sum of density-adjusted vehicles per cycle, each rounded."""
    return sum(
        round_half_up(
            lane.vehicles_per_cycle * get_density_multiplier(lane.density_level)
        )
        for lane in lanes
    )


def evaluate_optimized(
    optimized_lanes: list[OptimizedLane],
    cycle_time_seconds: float
) -> list[LaneEvaluation]:
    """Evaluate every lane at the green time the optimizer assigned."""
    return [
        LaneEvaluation(
            lane_id=lane.id,
            name=lane.name,
            green_time_seconds=lane.optimized_green_time_seconds,
            metrics=evaluate_lane(
                lane.vehicles_per_cycle,
                lane.optimized_green_time_seconds,
                cycle_time_seconds,
                lane.density_level,
            ),
        )
        for lane in optimized_lanes
    ]


def summarize_run(
    lanes: list[Lane],
    before: list[LaneEvaluation],
    after: list[LaneEvaluation],
    cycle_time_seconds: float
) -> RunSummary:
    """
    Compare before and after evaluations.

    wait improvement       = max(0, (before - after) / max(before, 0.01)) %
    congestion reduction   = max(0, (before - after) / max(before, 1)) %
    throughput gain        = max(0, (after - before) / max(before, 0.01)) %

    Args:
        lanes: Lanes as configured
        before: Evaluations at the configured green
        after: Evaluations at the optimized green
        cycle_time_seconds: Cycle length

    Returns:
        RunSummary with rounded figures
    """
    b = compute_intersection_totals(before)
    a = compute_intersection_totals(after)

    return RunSummary(
        lane_count=len(lanes),
        cycle_time_seconds=cycle_time_seconds,
        total_effective_vehicles=count_effective_vehicles(lanes),
        before_wait=round(b.mean_wait_seconds, 2),
        after_wait=round(a.mean_wait_seconds, 2),
        before_congestion=round(b.mean_congestion_percent, 2),
        after_congestion=round(a.mean_congestion_percent, 2),
        before_throughput=round(b.total_throughput, 2),
        after_throughput=round(a.total_throughput, 2),
        wait_improvement_percent=_percent_change(
            b.mean_wait_seconds - a.mean_wait_seconds,
            b.mean_wait_seconds,
            0.01,
        ),
        congestion_reduction_percent=_percent_change(
            b.mean_congestion_percent - a.mean_congestion_percent,
            b.mean_congestion_percent,
            1.0,
        ),
        throughput_gain_percent=_percent_change(
            a.total_throughput - b.total_throughput,
            b.total_throughput,
            0.01,
        ),
    )


def run_optimization(
    lanes: list[Lane],
    cycle_time_seconds: float,
    steps: int = DEFAULT_STEPS
) -> OptimizationRun:
    """
    Run the complete evaluate / optimize / re-evaluate pipeline.

    Replaying a stored run means calling this again with the stored lanes
    and cycle length; nothing is cached between calls.

    Args:
        lanes: Lanes sharing the cycle
        cycle_time_seconds: Cycle length
        steps: Number of projection steps

    Returns:
        OptimizationRun with before/after evaluations, projection,
        suggested cycle and summary

    Raises:
        DegenerateInputError: If lanes is empty
        InvalidDensityError: If a lane carries an unknown density
        ValueError: If cycle_time_seconds or steps is out of range

    Example:
        >>> run = run_optimization(lanes, 90)
        >>> print(f"{run.summary.before_wait}s -> {run.summary.after_wait}s")
    """
    logger.debug(
        "Running optimization | lanes=%s cycle=%s steps=%s",
        len(lanes),
        cycle_time_seconds,
        steps,
    )

    optimized = optimize_timing(lanes, cycle_time_seconds)
    before = evaluate_lanes(lanes, cycle_time_seconds)
    after = evaluate_optimized(optimized, cycle_time_seconds)

    summary = summarize_run(lanes, before, after, cycle_time_seconds)

    logger.debug(
        "Optimization complete | before_wait=%.1f after_wait=%.1f",
        summary.before_wait,
        summary.after_wait,
    )

    return OptimizationRun(
        engine_version=__engine_version__,
        cycle_time_seconds=cycle_time_seconds,
        lanes=lanes,
        before=before,
        optimized_lanes=optimized,
        after=after,
        projection=project_queues(lanes, cycle_time_seconds, steps),
        suggested_cycle_seconds=estimate_optimal_cycle(lanes),
        summary=summary,
    )
