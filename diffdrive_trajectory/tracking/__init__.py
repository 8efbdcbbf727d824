"""Closed-loop trajectory tracking for differential-drive robots."""

from .config import RamseteConfig, TrackerConfig
from .feedforward import FeedForwardTracker
from .follower import DriveBase, FollowingStatus, TrajectoryTrackerCommand
from .ramsete import RamseteTracker
from .tracker import (
    PoseError,
    ReferencePoint,
    TrackerState,
    TrajectoryTracker,
)

__all__ = [
    "DriveBase",
    "FeedForwardTracker",
    "FollowingStatus",
    "PoseError",
    "RamseteConfig",
    "RamseteTracker",
    "ReferencePoint",
    "TrackerConfig",
    "TrackerState",
    "TrajectoryTracker",
    "TrajectoryTrackerCommand",
]
