"""
Lane capacity and volume-to-capacity ratio.

All quantities are per signal cycle rather than per hour: the saturation
flow is converted to the number of vehicles a lane can discharge during its
green time.
"""


# Vehicles per hour a lane discharges under continuous green
SATURATION_FLOW = 1800.0

# Guards the ratio against a zero-length green
CAPACITY_EPSILON = 0.01

# Upper clamp applied to the reported v/c ratio
MAX_VC_RATIO = 1.99


def compute_capacity(green_time: float) -> float:
    """
    Compute lane capacity for one cycle.

    c = s * g / 3600

    Where:
        s = saturation flow (1800 veh/h)
        g = green time (seconds)

    Args:
        green_time: Green time allocated to the lane (seconds)

    Returns:
        Vehicles dischargeable per cycle

    Raises:
        ValueError: If green_time is negative
    """
    if green_time < 0:
        raise ValueError("green_time cannot be negative")

    return SATURATION_FLOW * green_time / 3600.0


def compute_vc_ratio(demand: float, capacity: float) -> float:
    """
    Compute the volume-to-capacity ratio (X).

    X = min(v / max(c, 0.01), 1.99)

    The denominator is floored so a lane with no green still yields a finite
    ratio, and the result is clamped so oversaturation stays bounded.

    Args:
        demand: Effective demand per cycle
        capacity: Capacity per cycle

    Returns:
        Clamped v/c ratio
    """
    if demand < 0:
        raise ValueError("demand cannot be negative")

    return min(demand / max(capacity, CAPACITY_EPSILON), MAX_VC_RATIO)


def compute_green_share(green_time: float, cycle_length: float) -> float:
    """
    Fraction of the cycle that is green for the lane (g/C).

    Clamped to 1.0 when the caller hands over a green longer than the cycle.
    """
    if cycle_length <= 0:
        raise ValueError("cycle_length must be positive")

    return min(green_time / cycle_length, 1.0)
