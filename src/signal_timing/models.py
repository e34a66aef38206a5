"""
Pydantic models for intersection signal timing calculations.

Lanes are caller-owned inputs; every other model is derived output that is
recomputed on demand and never stored by the engine.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class LaneType(str, Enum):
    """Lane geometry. Turning lanes carry a flow penalty in the optimizer."""
    STRAIGHT = "straight"
    TURN = "turn"


class DensityLevel(str, Enum):
    """Traffic density band applied as a demand multiplier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    PEAK = "peak"


class SaturationLevel(str, Enum):
    """Banding of the volume-to-capacity ratio."""
    FREE = "free"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    OVERSATURATED = "oversaturated"


class LevelOfService(str, Enum):
    """HCM Level of Service grades for signalized intersections."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


class Lane(BaseModel):
    """A single lane approaching the intersection."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        description="Stable unique lane identifier"
    )
    name: str = Field(
        default="",
        description="Display label (not used in calculations)"
    )
    type: LaneType = Field(
        default=LaneType.STRAIGHT,
        description="Lane geometry: 'straight' or 'turn'"
    )
    density_level: DensityLevel = Field(
        default=DensityLevel.MEDIUM,
        description="Density band: low, medium, high or peak"
    )
    vehicles_per_cycle: float = Field(
        ...,
        ge=0,
        description="Vehicle arrivals per signal cycle"
    )
    green_time_seconds: float = Field(
        ...,
        ge=0,
        description="Allocated green time in seconds"
    )


class OptimizedLane(Lane):
    """A lane together with the green time the optimizer assigned to it."""

    optimized_green_time_seconds: int = Field(
        ...,
        ge=0,
        description="Demand-proportional green time in seconds"
    )


class LaneMetrics(BaseModel):
    """Delay, queue and throughput for one lane under one green allocation."""

    model_config = ConfigDict(frozen=True)

    effective_demand: float = Field(
        description="Density-adjusted arrivals per cycle"
    )
    capacity: float = Field(
        description="Vehicles dischargeable per cycle"
    )
    volume_capacity_ratio: float = Field(
        description="Demand over capacity, clamped to 1.99"
    )
    uniform_delay: float = Field(
        description="Webster uniform delay d1 (seconds)"
    )
    overflow_delay: float = Field(
        description="Overflow delay d2 (seconds), zero below capacity"
    )
    average_delay_seconds: float = Field(
        description="Average delay per vehicle, capped at 300 seconds"
    )
    queue_length: int = Field(
        description="Vehicles left over at the end of green"
    )
    throughput: float = Field(
        description="Vehicles served per cycle"
    )
    congestion_percent: int = Field(
        description="Congestion indicator, 0 to 100"
    )
    saturation_level: SaturationLevel = Field(
        description="Banding of the v/c ratio"
    )
    los: LevelOfService = Field(
        description="Level of Service grade from average delay"
    )


class LaneEvaluation(BaseModel):
    """Metrics for a lane, tagged with the lane and green time evaluated."""

    lane_id: int
    name: str
    green_time_seconds: float
    metrics: LaneMetrics


class QueueSnapshot(BaseModel):
    """Projected queue and wait for one lane at one time step."""

    lane_id: int
    name: str
    queue: int = Field(ge=0, description="Projected queue (vehicles)")
    wait: float = Field(ge=0, description="Projected wait (seconds)")


class IntersectionTotals(BaseModel):
    """Aggregate measures across all lanes for one green allocation."""

    lane_count: int
    mean_wait_seconds: float
    mean_congestion_percent: float
    total_throughput: float
    total_queue: int


class RunSummary(BaseModel):
    """Before/after comparison for one optimization run."""

    lane_count: int = Field(description="Number of lanes evaluated")
    cycle_time_seconds: float = Field(description="Shared cycle length")
    total_effective_vehicles: int = Field(
        description="Sum of density-adjusted vehicles per cycle"
    )

    before_wait: float = Field(description="Mean wait before (seconds)")
    after_wait: float = Field(description="Mean wait after (seconds)")
    before_congestion: float = Field(description="Mean congestion before (%)")
    after_congestion: float = Field(description="Mean congestion after (%)")
    before_throughput: float = Field(description="Total throughput before")
    after_throughput: float = Field(description="Total throughput after")

    wait_improvement_percent: float = Field(
        description="Reduction of mean wait, floored at 0"
    )
    congestion_reduction_percent: float = Field(
        description="Reduction of mean congestion, floored at 0"
    )
    throughput_gain_percent: float = Field(
        description="Increase of total throughput, floored at 0"
    )


class OptimizationRun(BaseModel):
    """Complete result of the evaluate / optimize / re-evaluate pipeline."""

    engine_version: str
    cycle_time_seconds: float
    lanes: list[Lane]
    before: list[LaneEvaluation]
    optimized_lanes: list[OptimizedLane]
    after: list[LaneEvaluation]
    projection: list[list[QueueSnapshot]]
    suggested_cycle_seconds: int = Field(
        description="Advisory Webster optimal cycle length"
    )
    summary: RunSummary
