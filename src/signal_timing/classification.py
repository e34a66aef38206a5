"""
Qualitative grading of lane performance.

Reference: HCM 6th Edition, Chapter 19, Exhibit 19-8 (LOS by control delay)
"""

from .models import LevelOfService, SaturationLevel


# Upper delay bound (seconds, inclusive) for each grade; anything above is F
LOS_DELAY_BOUNDS = (
    (10.0, LevelOfService.A),
    (20.0, LevelOfService.B),
    (35.0, LevelOfService.C),
    (55.0, LevelOfService.D),
    (80.0, LevelOfService.E),
)

# Upper v/c bound (exclusive) for each band; anything above is oversaturated
SATURATION_BOUNDS = (
    (0.5, SaturationLevel.FREE),
    (0.75, SaturationLevel.LIGHT),
    (0.9, SaturationLevel.MODERATE),
    (1.1, SaturationLevel.HEAVY),
)


def classify_los(average_delay: float) -> LevelOfService:
    """
    Grade a lane's average delay as a Level of Service.

    Args:
        average_delay: Average delay per vehicle in seconds

    Returns:
        Level of Service grade A through F

    Raises:
        ValueError: If average_delay is negative
    """
    if average_delay < 0:
        raise ValueError("average_delay cannot be negative")

    for bound, grade in LOS_DELAY_BOUNDS:
        if average_delay <= bound:
            return grade
    return LevelOfService.F


def classify_saturation(vc_ratio: float) -> SaturationLevel:
    """Band a v/c ratio into free, light, moderate, heavy or oversaturated."""
    for bound, level in SATURATION_BOUNDS:
        if vc_ratio < bound:
            return level
    return SaturationLevel.OVERSATURATED
