from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ..errors import TrackerError, TrackerMisuseError
from ..geometry import ChassisVelocityCommand, Pose2d
from ..timing import TimedState, Trajectory, TrajectoryIterator
from .config import TrackerConfig

logger = logging.getLogger(__name__)


class TrackerState(Enum):
    UNINITIALIZED = "uninitialized"
    TRACKING = "tracking"
    FINISHED = "finished"


@dataclass(frozen=True)
class ReferencePoint:
    state: TimedState
    index: int


@dataclass(frozen=True)
class PoseError:
    """Reference pose expressed in the robot frame."""

    longitudinal: float
    lateral: float
    heading: float

    @classmethod
    def between(cls, current: Pose2d, reference: Pose2d) -> PoseError:
        delta = reference.relative_to(current)
        return cls(delta.x, delta.y, delta.heading)

    @property
    def distance(self) -> float:
        return math.hypot(self.longitudinal, self.lateral)


class TrajectoryTracker(ABC):
    """Per-tick feedback controller following a time-indexed reference.

    ``next_state`` is synchronous and does no I/O so any fixed-rate loop can
    drive it. A tracker instance and its iterator belong to one control loop.
    """

    def __init__(self, config: TrackerConfig | None = None):
        self._config = config or TrackerConfig()
        self._iterator: TrajectoryIterator | None = None
        self._state = TrackerState.UNINITIALIZED
        self._reference_point: ReferencePoint | None = None
        self._last_error: PoseError | None = None

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state is TrackerState.FINISHED

    @property
    def reference_point(self) -> ReferencePoint | None:
        return self._reference_point

    @property
    def last_error(self) -> PoseError | None:
        return self._last_error

    @property
    def iterator(self) -> TrajectoryIterator | None:
        return self._iterator

    def reset(self, trajectory: Trajectory) -> None:
        self._iterator = TrajectoryIterator(trajectory)
        self._reference_point = ReferencePoint(self._iterator.current_state, 0)
        self._last_error = None
        self._state = (
            TrackerState.FINISHED if trajectory.duration <= 0.0 else TrackerState.TRACKING
        )
        logger.info("%s reset with %s", type(self).__name__, trajectory)

    def next_state(self, current_pose: Pose2d) -> ChassisVelocityCommand:
        if self._state is TrackerState.UNINITIALIZED:
            logger.warning("next_state called before reset")
            raise TrackerMisuseError(
                TrackerError.NOT_STARTED, "Tracker has no trajectory; call reset() first."
            )
        if self._state is TrackerState.FINISHED:
            logger.warning("next_state called after the trajectory finished")
            raise TrackerMisuseError(
                TrackerError.FINISHED, "Trajectory already finished; call reset() to start another."
            )

        iterator = self._iterator
        reference = iterator.advance(self._config.period_s)
        self._reference_point = ReferencePoint(reference, iterator.current_index)

        error = PoseError.between(current_pose, reference.pose)
        self._last_error = error
        command = self._compute_command(error, reference)

        if iterator.is_done and self._within_completion_tolerance(error):
            self._state = TrackerState.FINISHED
            logger.info("%s finished after %.3f s", type(self).__name__, iterator.time)
        return command

    def _within_completion_tolerance(self, error: PoseError) -> bool:
        position_tol = self._config.completion_position_tolerance
        heading_tol = self._config.completion_heading_tolerance
        if position_tol is not None and error.distance > position_tol:
            return False
        if heading_tol is not None and abs(error.heading) > heading_tol:
            return False
        return True

    @abstractmethod
    def _compute_command(
        self, error: PoseError, reference: TimedState
    ) -> ChassisVelocityCommand: ...
