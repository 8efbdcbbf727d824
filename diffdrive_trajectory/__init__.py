"""Spline trajectory generation and Ramsete tracking for wheeled robots."""

from .errors import (
    GenerationError,
    TrackerError,
    TrackerMisuseError,
    TrajectoryConstructionError,
    TrajectoryGenerationError,
    TrajectoryInfeasibleError,
)
from .geometry import ChassisVelocityCommand, PathSample, Pose2d
from .timing import (
    CentripetalAccelerationConstraint,
    TimedState,
    Trajectory,
    TrajectoryConfig,
    TrajectoryGenerator,
    TrajectoryIterator,
    Waypoint,
)
from .tracking import RamseteTracker, TrackerConfig, TrajectoryTrackerCommand

__all__ = [
    "CentripetalAccelerationConstraint",
    "ChassisVelocityCommand",
    "GenerationError",
    "PathSample",
    "Pose2d",
    "RamseteTracker",
    "TimedState",
    "TrackerConfig",
    "TrackerError",
    "TrackerMisuseError",
    "Trajectory",
    "TrajectoryConfig",
    "TrajectoryConstructionError",
    "TrajectoryGenerationError",
    "TrajectoryGenerator",
    "TrajectoryInfeasibleError",
    "TrajectoryIterator",
    "TrajectoryTrackerCommand",
    "Waypoint",
]
