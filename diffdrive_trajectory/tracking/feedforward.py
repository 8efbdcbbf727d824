from __future__ import annotations

from ..geometry import ChassisVelocityCommand
from ..timing import TimedState
from .tracker import PoseError, TrajectoryTracker


class FeedForwardTracker(TrajectoryTracker):
    """Open-loop playback of the reference velocities; ignores the pose error."""

    def _compute_command(
        self, error: PoseError, reference: TimedState
    ) -> ChassisVelocityCommand:
        return ChassisVelocityCommand(reference.velocity, reference.angular_velocity)
