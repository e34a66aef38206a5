"""
Lane demand calculations.

Arrivals per cycle are scaled by the lane's density band. The optimizer and
the optimal cycle estimator additionally penalize turning lanes, which
discharge more slowly than through lanes.
"""

from .exceptions import InvalidDensityError
from .models import DensityLevel, Lane, LaneType


# Demand multipliers per density band
DENSITY_MULTIPLIERS = {
    DensityLevel.LOW: 0.5,
    DensityLevel.MEDIUM: 1.0,
    DensityLevel.HIGH: 1.5,
    DensityLevel.PEAK: 2.2,
}

TURN_PENALTY = 1.15


def parse_density_level(density_level: DensityLevel | str) -> DensityLevel:
    """
    Coerce a density key to a DensityLevel.

    Args:
        density_level: DensityLevel or its string value

    Returns:
        The matching DensityLevel

    Raises:
        InvalidDensityError: If the key is not a known density band
    """
    if isinstance(density_level, DensityLevel):
        return density_level
    try:
        return DensityLevel(density_level)
    except ValueError:
        raise InvalidDensityError(density_level) from None


def get_density_multiplier(density_level: DensityLevel | str) -> float:
    """Demand multiplier for a density band (0.5, 1.0, 1.5 or 2.2)."""
    return DENSITY_MULTIPLIERS[parse_density_level(density_level)]


def get_turn_factor(lane_type: LaneType) -> float:
    """Flow penalty for the lane geometry: 1.15 for turns, 1.0 otherwise."""
    if lane_type == LaneType.TURN:
        return TURN_PENALTY
    return 1.0


def compute_effective_demand(
    vehicles_per_cycle: float,
    density_level: DensityLevel | str
) -> float:
    """
    Compute density-adjusted arrivals per cycle.

    effective = vehicles * density multiplier

    The delay model uses this value as-is; no turn penalty is applied here.

    Args:
        vehicles_per_cycle: Arrivals per signal cycle
        density_level: Density band of the lane

    Returns:
        Effective demand in vehicles per cycle

    Raises:
        ValueError: If vehicles_per_cycle is negative
        InvalidDensityError: If the density band is unknown
    """
    if vehicles_per_cycle < 0:
        raise ValueError("vehicles_per_cycle cannot be negative")

    return vehicles_per_cycle * get_density_multiplier(density_level)


def compute_lane_weight(lane: Lane) -> float:
    """
    Compute the demand weight used to share green time between lanes.

    weight = vehicles * density multiplier * turn factor

    Args:
        lane: Lane to weigh

    Returns:
        Turn-penalized effective demand per cycle
    """
    return (
        compute_effective_demand(lane.vehicles_per_cycle, lane.density_level)
        * get_turn_factor(lane.type)
    )
