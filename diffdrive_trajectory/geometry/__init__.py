"""Planar poses, path samples and chassis commands."""

from .commands import ChassisVelocityCommand
from .path_sample import PathSample
from .pose import Pose2d, lerp_angle, wrap_angle

__all__ = [
    "ChassisVelocityCommand",
    "PathSample",
    "Pose2d",
    "lerp_angle",
    "wrap_angle",
]
