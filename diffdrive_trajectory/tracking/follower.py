from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..geometry import ChassisVelocityCommand, Pose2d
from ..timing import Trajectory
from .tracker import TrajectoryTracker

logger = logging.getLogger(__name__)


class DriveBase(Protocol):
    def robot_position(self) -> Pose2d: ...

    def set_output(self, command: ChassisVelocityCommand) -> None: ...

    def set_neutral(self) -> None: ...


@dataclass
class FollowingStatus:
    """Observation published for dashboards; never read back by the controller."""

    is_following: bool = False
    path_x: float = math.nan
    path_y: float = math.nan
    path_heading: float = math.nan
    reference_index: int = -1


class TrajectoryTrackerCommand:
    """Runs one trajectory on a drive base, one ``execute`` per control tick.

    Cancelling is the caller's job: stop calling ``execute`` and call
    ``end(interrupted=True)``, which puts the drive in neutral.
    """

    def __init__(
        self,
        drive: DriveBase,
        tracker: TrajectoryTracker,
        trajectory_source: Callable[[], Trajectory],
        status: FollowingStatus | None = None,
    ):
        self.drive = drive
        self.tracker = tracker
        self._trajectory_source = trajectory_source
        self.status = status or FollowingStatus()

    def initialize(self) -> None:
        self.tracker.reset(self._trajectory_source())
        self.status.is_following = True
        logger.info("Started following trajectory")

    def execute(self) -> ChassisVelocityCommand:
        command = self.tracker.next_state(self.drive.robot_position())
        self.drive.set_output(command)

        reference = self.tracker.reference_point
        if reference is not None:
            pose = reference.state.pose
            self.status.path_x = pose.x
            self.status.path_y = pose.y
            self.status.path_heading = pose.heading
            self.status.reference_index = reference.index
        return command

    def end(self, interrupted: bool = False) -> None:
        self.drive.set_neutral()
        self.status.is_following = False
        if interrupted:
            logger.warning("Trajectory following interrupted")
        else:
            logger.info("Finished following trajectory")

    def is_finished(self) -> bool:
        return self.tracker.is_finished

    def run(self, max_ticks: int | None = None) -> int:
        """Drive the command to completion synchronously; returns ticks executed.

        ``max_ticks`` acts as a watchdog: hitting it ends the command as
        interrupted.
        """
        self.initialize()
        ticks = 0
        interrupted = True
        try:
            while not self.is_finished():
                if max_ticks is not None and ticks >= max_ticks:
                    break
                self.execute()
                ticks += 1
            interrupted = not self.is_finished()
        finally:
            self.end(interrupted)
        return ticks
