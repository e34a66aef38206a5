"""
Error types raised by the signal timing engine.

All engine errors derive from ValueError so callers that already treat
ValueError as bad input (the compute API does) handle them unchanged.
"""


class SignalTimingError(ValueError):
    """Base class for signal timing engine errors."""


class InvalidDensityError(SignalTimingError):
    """Raised when a density level is not one of low, medium, high, peak."""

    def __init__(self, density_level: object):
        self.density_level = density_level
        super().__init__(
            f"unknown density level {density_level!r}; "
            "expected one of 'low', 'medium', 'high', 'peak'"
        )


class DegenerateInputError(SignalTimingError):
    """Raised when a computation needs at least one lane and got none."""
