"""Error types raised while building or running a schedule."""


class SchedulingError(Exception):
    """Base class for all scheduler errors."""


class InvalidConfiguration(SchedulingError, ValueError):
    """Station configuration is malformed (negative counts or durations, missing fields...)."""


class UnreachableTarget(SchedulingError, ValueError):
    """Target cycle count is lower than the number of initial loads."""


class SchedulingInvariantViolation(SchedulingError, RuntimeError):
    """The dispatch engine reached a state that should be impossible."""
