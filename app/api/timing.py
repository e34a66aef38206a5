"""
Signal timing compute endpoints.

These endpoints run the deterministic signal timing engine on the lanes in
the request. Nothing is persisted; callers keep their own run history and
replay it by posting the stored lanes again.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from src.signal_timing import (
    Lane,
    LaneEvaluation,
    OptimizationRun,
    OptimizedLane,
    QueueSnapshot,
    __engine_version__,
    estimate_optimal_cycle,
    evaluate_lanes,
    optimize_timing,
    project_queues,
    run_optimization,
)
from src.signal_timing.capacity import SATURATION_FLOW
from src.signal_timing.demand import DENSITY_MULTIPLIERS, TURN_PENALTY
from src.signal_timing.optimizer import (
    LOST_TIME_PER_PHASE,
    MIN_GREEN,
    compute_usable_green,
)
from src.signal_timing.service import evaluate_optimized

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Request/Response Models ---

class IntersectionRequest(BaseModel):
    """
    Lanes sharing one signal cycle.

    The cycle length is limited to the practical 30-180 second range.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "cycle_time_seconds": 90,
                "lanes": [
                    {
                        "id": 1,
                        "name": "North Straight",
                        "type": "straight",
                        "density_level": "high",
                        "vehicles_per_cycle": 10,
                        "green_time_seconds": 10
                    },
                    {
                        "id": 2,
                        "name": "North Left Turn",
                        "type": "turn",
                        "density_level": "medium",
                        "vehicles_per_cycle": 3,
                        "green_time_seconds": 30
                    }
                ]
            }
        }
    )

    lanes: list[Lane] = Field(
        ...,
        description="Lanes in phase order"
    )
    cycle_time_seconds: int = Field(
        ...,
        ge=30,
        le=180,
        description="Shared signal cycle length in seconds"
    )


class ProjectionRequest(IntersectionRequest):
    """Lanes and cycle plus the number of projection steps."""

    steps: int = Field(
        default=settings.default_projection_steps,
        ge=1,
        le=settings.max_projection_steps,
        description="Number of projected time steps"
    )


class EvaluateResponse(BaseModel):
    """Per-lane metrics at the configured green times."""

    engine_version: str
    cycle_time_seconds: int
    lanes: list[LaneEvaluation]


class OptimizeResponse(BaseModel):
    """Optimized green times and the metrics they produce."""

    engine_version: str
    cycle_time_seconds: int
    usable_green_seconds: float
    optimized_lanes: list[OptimizedLane]
    after: list[LaneEvaluation]


class OptimalCycleResponse(BaseModel):
    """Advisory cycle length next to the current one."""

    engine_version: str
    current_cycle_seconds: int
    suggested_cycle_seconds: int


class ProjectionResponse(BaseModel):
    """Queue build-up series, one list of lane snapshots per step."""

    engine_version: str
    steps: int
    series: list[list[QueueSnapshot]]


class EngineInfoResponse(BaseModel):
    """Engine version and fixed constants."""

    engine_version: str = Field(description="Signal timing engine version")
    description: str = Field(description="Engine description")
    saturation_flow: float = Field(description="Saturation flow (veh/h)")
    density_multipliers: dict[str, float] = Field(
        description="Demand multiplier per density level"
    )
    turn_penalty: float = Field(description="Turning lane weight factor")
    lost_time_per_phase: float = Field(description="Intergreen per phase (s)")
    min_green: int = Field(description="Minimum optimized green (s)")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    detail: Any = Field(default=None, description="Additional error details")


ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Computation error"},
}


def _compute(label: str, func, *args):
    """Run an engine call, mapping engine errors to HTTP errors."""
    try:
        return func(*args)
    except ValueError as e:
        logger.error("Validation error in %s: %s", label, str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "validation_error", "message": str(e)},
        )
    except Exception as e:
        logger.exception("Computation error in %s", label)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "computation_error", "message": str(e)},
        )


# --- Endpoints ---

@router.get("/info", response_model=EngineInfoResponse)
async def get_engine_info() -> EngineInfoResponse:
    """Get signal timing engine information."""
    return EngineInfoResponse(
        engine_version=__engine_version__,
        description="Webster delay and demand-proportional signal timing",
        saturation_flow=SATURATION_FLOW,
        density_multipliers={
            level.value: multiplier
            for level, multiplier in DENSITY_MULTIPLIERS.items()
        },
        turn_penalty=TURN_PENALTY,
        lost_time_per_phase=LOST_TIME_PER_PHASE,
        min_green=MIN_GREEN,
    )


@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    responses=ERROR_RESPONSES,
    summary="Evaluate lanes at their configured green times",
)
async def evaluate(request: IntersectionRequest) -> EvaluateResponse:
    """
    Compute delay, queue, throughput and congestion for every lane.

    - Capacity: c = 1800 × g / 3600 (vehicles per cycle)
    - v/c ratio clamped to 1.99
    - Delay: d = min(d₁ + d₂, 300)
    """
    logger.info(
        "Evaluating lanes | engine=%s lanes=%s cycle=%s",
        __engine_version__,
        len(request.lanes),
        request.cycle_time_seconds,
    )

    evaluations = _compute(
        "evaluate", evaluate_lanes, request.lanes, request.cycle_time_seconds
    )

    return EvaluateResponse(
        engine_version=__engine_version__,
        cycle_time_seconds=request.cycle_time_seconds,
        lanes=evaluations,
    )


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    responses=ERROR_RESPONSES,
    summary="Reallocate green time in proportion to demand",
)
async def optimize(request: IntersectionRequest) -> OptimizeResponse:
    """Share the usable green among lanes and evaluate the new allocation."""
    logger.info(
        "Optimizing timing | engine=%s lanes=%s cycle=%s",
        __engine_version__,
        len(request.lanes),
        request.cycle_time_seconds,
    )

    optimized = _compute(
        "optimize", optimize_timing, request.lanes, request.cycle_time_seconds
    )
    after = _compute(
        "optimize", evaluate_optimized, optimized, request.cycle_time_seconds
    )

    return OptimizeResponse(
        engine_version=__engine_version__,
        cycle_time_seconds=request.cycle_time_seconds,
        usable_green_seconds=compute_usable_green(
            len(request.lanes), request.cycle_time_seconds
        ),
        optimized_lanes=optimized,
        after=after,
    )


@router.post(
    "/optimal-cycle",
    response_model=OptimalCycleResponse,
    responses=ERROR_RESPONSES,
    summary="Estimate Webster's optimal cycle length",
)
async def optimal_cycle(request: IntersectionRequest) -> OptimalCycleResponse:
    """Advisory only; the submitted cycle is not changed."""
    suggested = _compute(
        "optimal-cycle", estimate_optimal_cycle, request.lanes
    )

    return OptimalCycleResponse(
        engine_version=__engine_version__,
        current_cycle_seconds=request.cycle_time_seconds,
        suggested_cycle_seconds=suggested,
    )


@router.post(
    "/projection",
    response_model=ProjectionResponse,
    responses=ERROR_RESPONSES,
    summary="Project queue build-up over successive cycles",
)
async def projection(request: ProjectionRequest) -> ProjectionResponse:
    """Deterministic queue and wait series for the configured green times."""
    series = _compute(
        "projection",
        project_queues,
        request.lanes,
        request.cycle_time_seconds,
        request.steps,
    )

    return ProjectionResponse(
        engine_version=__engine_version__,
        steps=request.steps,
        series=series,
    )


@router.post(
    "/run",
    response_model=OptimizationRun,
    responses=ERROR_RESPONSES,
    summary="Run the full before/after optimization",
    description="""
Evaluate the lanes, reallocate green time, re-evaluate, project queue
build-up and summarize the change.

**Notes:**
- All calculations are deterministic
- No persistence; post a stored run's lanes again to replay it
- The suggested cycle length is advisory only
""",
)
async def run(request: ProjectionRequest) -> OptimizationRun:
    """Full optimization run for one intersection."""
    logger.info(
        "Running optimization | engine=%s lanes=%s cycle=%s",
        __engine_version__,
        len(request.lanes),
        request.cycle_time_seconds,
    )

    result = _compute(
        "run",
        run_optimization,
        request.lanes,
        request.cycle_time_seconds,
        request.steps,
    )

    logger.info(
        "Optimization complete | before_wait=%.1f after_wait=%.1f",
        result.summary.before_wait,
        result.summary.after_wait,
    )

    return result
