"""Two-pass velocity profiling over a sampled path.

The forward pass limits how fast speed can build up from the start velocity,
the backward pass limits how late the robot may start braking for the end
velocity, and the result is the pointwise minimum of the two. Acceleration
windows are re-evaluated at the velocity each pass settles on, so
velocity-dependent constraints are honoured.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from ..errors import (
    GenerationError,
    TrajectoryConstructionError,
    TrajectoryInfeasibleError,
)
from ..geometry import PathSample, Pose2d
from ..spline import SampledPath, sample_splines, splines_from_waypoints
from .config import TrajectoryConfig
from .constraints import MinMaxAcceleration, TimingConstraint
from .trajectory import TimedState, Trajectory

logger = logging.getLogger(__name__)

EPSILON = 1e-9
BOUNDARY_TOL = 1e-6
# Upper bound on re-evaluations of a single step; each one only lowers the
# predecessor's acceleration so this is never reached with sane constraints.
MAX_CONSTRAINT_ITERATIONS = 100


@dataclass(frozen=True)
class Waypoint:
    pose: Pose2d
    max_velocity: float | None = None

    def __post_init__(self) -> None:
        if self.max_velocity is not None and self.max_velocity < 0.0:
            raise ValueError("Waypoint max_velocity must be non-negative.")


class TrajectoryGenerator:
    def __init__(
        self,
        config: TrajectoryConfig | None = None,
        constraints: Iterable[TimingConstraint] = (),
    ):
        self._config = config or TrajectoryConfig()
        self._constraints: tuple[TimingConstraint, ...] = tuple(constraints)

    @property
    def config(self) -> TrajectoryConfig:
        return self._config

    @property
    def constraints(self) -> tuple[TimingConstraint, ...]:
        return self._constraints

    def generate(self, waypoints: Sequence[Pose2d | Waypoint]) -> Trajectory:
        """Build splines through ``waypoints`` and time-parameterize them.

        Waypoint headings are the robot's heading. For reversed trajectories
        the splines are laid along the direction of travel (heading + pi) and
        the samples are mirrored back afterwards.
        """
        poses = [wp.pose if isinstance(wp, Waypoint) else wp for wp in waypoints]
        if self._config.reversed:
            poses = [pose.rotated_by(math.pi) for pose in poses]

        path = sample_splines(splines_from_waypoints(poses), self._config.sampler)
        if self._config.reversed:
            path = SampledPath(
                samples=tuple(sample.mirrored() for sample in path.samples),
                distances=path.distances,
                waypoint_indices=path.waypoint_indices,
            )

        waypoint_caps = {
            path.waypoint_indices[idx]: wp.max_velocity
            for idx, wp in enumerate(waypoints)
            if isinstance(wp, Waypoint) and wp.max_velocity is not None
        }
        return self.time_parameterize(path, waypoint_caps)

    def time_parameterize(
        self,
        path: SampledPath,
        waypoint_caps: Mapping[int, float] | None = None,
    ) -> Trajectory:
        config = self._config
        samples = path.samples
        distances = path.distances
        count = len(samples)
        if count < 2:
            raise TrajectoryConstructionError(
                GenerationError.TOO_FEW_SAMPLES,
                f"At least two path samples are required; received {count}.",
            )

        sign = -1.0 if config.reversed else 1.0
        caps = self._velocity_caps(samples, waypoint_caps or {})
        if config.start_velocity > caps[0] + BOUNDARY_TOL:
            raise TrajectoryInfeasibleError(
                GenerationError.BOUNDARY_UNREACHABLE,
                f"Start velocity {config.start_velocity:.3f} exceeds the cap {caps[0]:.3f} at the first sample.",
            )

        velocity = np.zeros(count, dtype=float)
        min_accel = np.full(count, -config.max_acceleration, dtype=float)
        max_accel = np.full(count, config.max_acceleration, dtype=float)

        velocity[0] = min(config.start_velocity, caps[0])
        window = self._acceleration_window(samples[0], sign * velocity[0], 0)
        min_accel[0], max_accel[0] = window.min_acceleration, window.max_acceleration

        self._forward_pass(samples, distances, caps, velocity, min_accel, max_accel, sign)

        if velocity[-1] < config.end_velocity - BOUNDARY_TOL:
            raise TrajectoryInfeasibleError(
                GenerationError.BOUNDARY_UNREACHABLE,
                f"End velocity {config.end_velocity:.3f} cannot be reached; "
                f"at most {velocity[-1]:.3f} is attainable.",
            )
        velocity[-1] = config.end_velocity
        window = self._acceleration_window(samples[-1], sign * velocity[-1], count - 1)
        min_accel[-1], max_accel[-1] = window.min_acceleration, window.max_acceleration

        self._backward_pass(samples, distances, velocity, min_accel, max_accel, sign)

        if velocity[0] < config.start_velocity - BOUNDARY_TOL:
            raise TrajectoryInfeasibleError(
                GenerationError.BOUNDARY_UNREACHABLE,
                f"Cannot brake from start velocity {config.start_velocity:.3f} in time; "
                f"at most {velocity[0]:.3f} is admissible at the first sample.",
            )

        states = self._integrate_time(samples, distances, velocity, sign)
        trajectory = Trajectory(states, reversed=config.reversed)
        logger.debug(
            "Generated %s from %d samples (peak speed %.3f m/s)",
            trajectory,
            count,
            float(np.max(velocity)),
        )
        return trajectory

    def _velocity_caps(
        self, samples: Sequence[PathSample], waypoint_caps: Mapping[int, float]
    ) -> np.ndarray:
        caps = np.full(len(samples), self._config.max_velocity, dtype=float)
        for idx, sample in enumerate(samples):
            for constraint in self._constraints:
                limit = constraint.max_velocity(sample)
                if math.isnan(limit) or limit < 0.0:
                    raise TrajectoryConstructionError(
                        GenerationError.INVALID_VELOCITY_CAP,
                        f"{type(constraint).__name__} returned velocity cap {limit} at sample {idx}.",
                    )
                caps[idx] = min(caps[idx], limit)
        for idx, limit in waypoint_caps.items():
            caps[idx] = min(caps[idx], limit)
        return caps

    def _acceleration_window(
        self, sample: PathSample, velocity: float, index: int
    ) -> MinMaxAcceleration:
        window = MinMaxAcceleration(
            -self._config.max_acceleration, self._config.max_acceleration
        )
        for constraint in self._constraints:
            window = window.intersect(constraint.min_max_acceleration(sample, velocity))
        if not window.valid:
            raise TrajectoryInfeasibleError(
                GenerationError.EMPTY_ACCELERATION_WINDOW,
                f"No admissible acceleration at sample {index} "
                f"(min {window.min_acceleration:.3f} > max {window.max_acceleration:.3f}).",
            )
        if self._config.reversed:
            # Constraints bound the robot-frame acceleration; while backing up,
            # gaining speed is a negative robot-frame acceleration.
            window = MinMaxAcceleration(-window.max_acceleration, -window.min_acceleration)
        return window

    @staticmethod
    def _unsettled(index: int) -> TrajectoryInfeasibleError:
        return TrajectoryInfeasibleError(
            GenerationError.EMPTY_ACCELERATION_WINDOW,
            f"Acceleration limits at sample {index} did not settle after "
            f"{MAX_CONSTRAINT_ITERATIONS} re-evaluations.",
        )

    def _forward_pass(
        self,
        samples: Sequence[PathSample],
        distances: np.ndarray,
        caps: np.ndarray,
        velocity: np.ndarray,
        min_accel: np.ndarray,
        max_accel: np.ndarray,
        sign: float,
    ) -> None:
        for idx in range(1, len(samples)):
            ds = distances[idx] - distances[idx - 1]
            for _ in range(MAX_CONSTRAINT_ITERATIONS):
                reachable_sq = velocity[idx - 1] ** 2 + 2.0 * max_accel[idx - 1] * ds
                velocity[idx] = min(caps[idx], math.sqrt(max(0.0, reachable_sq)))
                window = self._acceleration_window(samples[idx], sign * velocity[idx], idx)
                min_accel[idx] = window.min_acceleration
                max_accel[idx] = window.max_acceleration
                if ds < EPSILON:
                    break
                actual = (velocity[idx] ** 2 - velocity[idx - 1] ** 2) / (2.0 * ds)
                if window.max_acceleration < actual - EPSILON:
                    # Arriving this fast would violate the limit here; accelerate less.
                    max_accel[idx - 1] = window.max_acceleration
                else:
                    break
            else:
                raise self._unsettled(idx)

    def _backward_pass(
        self,
        samples: Sequence[PathSample],
        distances: np.ndarray,
        velocity: np.ndarray,
        min_accel: np.ndarray,
        max_accel: np.ndarray,
        sign: float,
    ) -> None:
        for idx in range(len(samples) - 2, -1, -1):
            ds = distances[idx + 1] - distances[idx]
            for _ in range(MAX_CONSTRAINT_ITERATIONS):
                reachable_sq = velocity[idx + 1] ** 2 - 2.0 * min_accel[idx + 1] * ds
                reachable = math.sqrt(max(0.0, reachable_sq))
                if reachable >= velocity[idx]:
                    break
                velocity[idx] = reachable
                window = self._acceleration_window(samples[idx], sign * velocity[idx], idx)
                min_accel[idx] = window.min_acceleration
                max_accel[idx] = window.max_acceleration
                if ds < EPSILON:
                    break
                actual = (velocity[idx + 1] ** 2 - velocity[idx] ** 2) / (2.0 * ds)
                if window.min_acceleration > actual + EPSILON:
                    min_accel[idx + 1] = window.min_acceleration
                else:
                    break
            else:
                raise self._unsettled(idx)

    def _integrate_time(
        self,
        samples: Sequence[PathSample],
        distances: np.ndarray,
        velocity: np.ndarray,
        sign: float,
    ) -> list[TimedState]:
        count = len(samples)
        acceleration = np.zeros(count, dtype=float)
        t = np.zeros(count, dtype=float)
        for idx in range(1, count):
            ds = distances[idx] - distances[idx - 1]
            if ds < EPSILON:
                t[idx] = t[idx - 1]
                continue
            acceleration[idx] = (velocity[idx] ** 2 - velocity[idx - 1] ** 2) / (2.0 * ds)
            speed_sum = velocity[idx] + velocity[idx - 1]
            if speed_sum < EPSILON:
                raise TrajectoryInfeasibleError(
                    GenerationError.ZERO_VELOCITY_DEADLOCK,
                    f"Velocity profile stalls at zero between samples {idx - 1} and {idx} "
                    f"(distance {distances[idx - 1]:.3f} m).",
                )
            t[idx] = t[idx - 1] + 2.0 * ds / speed_sum
        acceleration[0] = acceleration[1]

        return [
            TimedState(
                sample=samples[idx],
                distance=distances[idx],
                t=t[idx],
                velocity=sign * velocity[idx],
                acceleration=sign * acceleration[idx],
            )
            for idx in range(count)
        ]
