"""Numeric helpers shared by the timing calculations."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded toward +infinity.

    Python's round() uses banker's rounding (round(7.5) == 8 but
    round(32.5) == 32). Green times, queues and congestion all need the
    conventional behaviour so that 32.5 becomes 33.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))
