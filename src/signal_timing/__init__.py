"""
Intersection Signal Timing Engine

Deterministic queueing delay, green time allocation, optimal cycle and
queue build-up calculations for a single signalized intersection.
"""

__version__ = "0.1.0"
__engine_version__ = "SIGTIME-0.1.0"

from .cycle import estimate_optimal_cycle
from .engine import evaluate_lane, evaluate_lanes
from .exceptions import (
    DegenerateInputError,
    InvalidDensityError,
    SignalTimingError,
)
from .models import (
    DensityLevel,
    Lane,
    LaneEvaluation,
    LaneMetrics,
    LaneType,
    LevelOfService,
    OptimizationRun,
    OptimizedLane,
    QueueSnapshot,
    RunSummary,
    SaturationLevel,
)
from .optimizer import optimize_timing
from .projection import project_queues
from .service import run_optimization, summarize_run

__all__ = [
    "__version__",
    "__engine_version__",
    "evaluate_lane",
    "evaluate_lanes",
    "optimize_timing",
    "estimate_optimal_cycle",
    "project_queues",
    "run_optimization",
    "summarize_run",
    "DensityLevel",
    "Lane",
    "LaneEvaluation",
    "LaneMetrics",
    "LaneType",
    "LevelOfService",
    "OptimizationRun",
    "OptimizedLane",
    "QueueSnapshot",
    "RunSummary",
    "SaturationLevel",
    "SignalTimingError",
    "InvalidDensityError",
    "DegenerateInputError",
]
