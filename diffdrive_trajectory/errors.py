"""Error codes and exceptions raised while planning and tracking trajectories."""

from __future__ import annotations

from enum import Enum


class GenerationError(Enum):
    TOO_FEW_WAYPOINTS = "too_few_waypoints"
    DEGENERATE_SPLINE = "degenerate_spline"
    TOO_FEW_SAMPLES = "too_few_samples"
    INVALID_VELOCITY_CAP = "invalid_velocity_cap"
    EMPTY_ACCELERATION_WINDOW = "empty_acceleration_window"
    ZERO_VELOCITY_DEADLOCK = "zero_velocity_deadlock"
    BOUNDARY_UNREACHABLE = "boundary_unreachable"


class TrajectoryGenerationError(RuntimeError):
    """Base class for failures while building a trajectory.

    Generation never falls back to a partial trajectory; callers get one of
    the two subclasses below and the request is abandoned.
    """

    def __init__(self, error: GenerationError, message: str):
        super().__init__(message)
        self.error = error


class TrajectoryConstructionError(TrajectoryGenerationError):
    """The request itself is malformed (waypoints, splines, velocity caps)."""


class TrajectoryInfeasibleError(TrajectoryGenerationError):
    """The constraints admit no velocity profile for the requested path."""


class TrackerError(Enum):
    NOT_STARTED = "not_started"
    FINISHED = "finished"


class TrackerMisuseError(RuntimeError):
    def __init__(self, error: TrackerError, message: str):
        super().__init__(message)
        self.error = error
