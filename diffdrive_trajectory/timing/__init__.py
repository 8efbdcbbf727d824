"""Time-parameterization of sampled paths into immutable trajectories."""

from .config import TrajectoryConfig
from .constraints import (
    AngularAccelerationConstraint,
    CentripetalAccelerationConstraint,
    DifferentialDriveKinematicsConstraint,
    MinMaxAcceleration,
    TimingConstraint,
    VelocityLimitConstraint,
    VelocityLimitRegionConstraint,
)
from .generator import TrajectoryGenerator, Waypoint
from .io import read_trajectory_csv, trajectory_to_frame, write_trajectory_csv
from .trajectory import TimedState, Trajectory, TrajectoryIterator

__all__ = [
    "AngularAccelerationConstraint",
    "CentripetalAccelerationConstraint",
    "DifferentialDriveKinematicsConstraint",
    "MinMaxAcceleration",
    "TimedState",
    "TimingConstraint",
    "Trajectory",
    "TrajectoryConfig",
    "TrajectoryGenerator",
    "TrajectoryIterator",
    "VelocityLimitConstraint",
    "VelocityLimitRegionConstraint",
    "Waypoint",
    "read_trajectory_csv",
    "trajectory_to_frame",
    "write_trajectory_csv",
]
