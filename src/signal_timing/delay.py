"""
Per-vehicle delay using Webster's deterministic formula.

The formula is applied at cycle granularity (demand and capacity in vehicles
per cycle) rather than per-hour flows:

    d = min(d1 + d2, 300)

Where:
    d1 = uniform delay, assuming evenly spread arrivals
    d2 = overflow delay, only once demand reaches capacity

The 300 second cap keeps results realistic where the overflow term blows up
near saturation.
"""

import math


# Uniform delay treats the lane as just below saturation at worst
MAX_DELAY_RATIO = 0.999

MAX_AVERAGE_DELAY = 300.0


def compute_uniform_delay(
    green_share: float,
    cycle_length: float,
    vc_ratio: float
) -> float:
    """
    Compute uniform delay (d1).

    d1 = C * (1 - g/C)^2 / (2 * (1 - min(X, 0.999) * g/C))

    Where:
        C = cycle length (seconds)
        g/C = green share
        X = v/c ratio

    Args:
        green_share: Green time over cycle length (0 to 1)
        cycle_length: Cycle length (seconds)
        vc_ratio: Volume-to-capacity ratio

    Returns:
        Uniform delay in seconds
    """
    if cycle_length <= 0:
        raise ValueError("cycle_length must be positive")

    x_capped = min(vc_ratio, MAX_DELAY_RATIO)

    numerator = cycle_length * (1.0 - green_share) ** 2
    denominator = 2.0 * (1.0 - x_capped * green_share)

    return numerator / denominator


def compute_overflow_delay(vc_ratio: float) -> float:
    """
    Compute overflow delay (d2).

    d2 = 900 * ((X - 1) + sqrt((X - 1)^2 + X / 450))   for X >= 1
    d2 = 0                                             otherwise

    Args:
        vc_ratio: Volume-to-capacity ratio

    Returns:
        Overflow delay in seconds
    """
    if vc_ratio < 1.0:
        return 0.0

    X = vc_ratio
    return 900.0 * ((X - 1.0) + math.sqrt((X - 1.0) ** 2 + X / 450.0))


def compute_average_delay(
    green_share: float,
    cycle_length: float,
    vc_ratio: float
) -> tuple[float, float, float]:
    """
    Compute average delay per vehicle.

    Args:
        green_share: Green time over cycle length
        cycle_length: Cycle length (seconds)
        vc_ratio: Volume-to-capacity ratio

    Returns:
        Tuple of (uniform_delay, overflow_delay, average_delay)
        All values in seconds, average capped at 300
    """
    d1 = compute_uniform_delay(
        green_share=green_share,
        cycle_length=cycle_length,
        vc_ratio=vc_ratio
    )
    d2 = compute_overflow_delay(vc_ratio)

    return (d1, d2, min(d1 + d2, MAX_AVERAGE_DELAY))
