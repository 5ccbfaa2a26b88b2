"""Models package for the robot scheduler."""

from .errors import (
    SchedulingError,
    InvalidConfiguration,
    UnreachableTarget,
    SchedulingInvariantViolation,
)
from .station import StationType, StationInstance
from .problem import SchedulingProblem, DEFAULT_TARGET_CYCLES

__all__ = [
    'SchedulingError', 'InvalidConfiguration', 'UnreachableTarget', 'SchedulingInvariantViolation',
    'StationType', 'StationInstance', 'SchedulingProblem', 'DEFAULT_TARGET_CYCLES',
]
