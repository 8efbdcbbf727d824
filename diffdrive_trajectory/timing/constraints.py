"""Velocity and acceleration limits evaluated along a sampled path.

Every constraint is a pure function of the sample (and, for acceleration, the
signed velocity at that sample); none keeps state between calls.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from ..geometry import PathSample

# Curvature magnitudes below this are treated as a straight line.
STRAIGHT_CURVATURE_EPS = 1e-9


@dataclass(frozen=True)
class MinMaxAcceleration:
    min_acceleration: float = -math.inf
    max_acceleration: float = math.inf

    NO_LIMITS: ClassVar[MinMaxAcceleration]

    @property
    def valid(self) -> bool:
        return (
            not math.isnan(self.min_acceleration)
            and not math.isnan(self.max_acceleration)
            and self.min_acceleration <= self.max_acceleration
        )

    def intersect(self, other: MinMaxAcceleration) -> MinMaxAcceleration:
        return MinMaxAcceleration(
            max(self.min_acceleration, other.min_acceleration),
            min(self.max_acceleration, other.max_acceleration),
        )


MinMaxAcceleration.NO_LIMITS = MinMaxAcceleration()


class TimingConstraint(ABC):
    @abstractmethod
    def max_velocity(self, sample: PathSample) -> float:
        """Largest admissible speed at ``sample``; ``math.inf`` for no limit."""

    def min_max_acceleration(
        self, sample: PathSample, velocity: float
    ) -> MinMaxAcceleration:
        return MinMaxAcceleration.NO_LIMITS


class VelocityLimitConstraint(TimingConstraint):
    def __init__(self, max_velocity: float):
        if max_velocity < 0.0:
            raise ValueError("max_velocity must be non-negative.")
        self._max_velocity = float(max_velocity)

    def max_velocity(self, sample: PathSample) -> float:
        return self._max_velocity


class CentripetalAccelerationConstraint(TimingConstraint):
    """Caps lateral acceleration v^2 * |curvature|."""

    def __init__(self, max_centripetal_acceleration: float):
        if max_centripetal_acceleration <= 0.0:
            raise ValueError("max_centripetal_acceleration must be strictly positive.")
        self.max_centripetal_acceleration = float(max_centripetal_acceleration)

    def max_velocity(self, sample: PathSample) -> float:
        curvature = abs(sample.curvature)
        if curvature < STRAIGHT_CURVATURE_EPS:
            return math.inf
        return math.sqrt(self.max_centripetal_acceleration / curvature)


class VelocityLimitRegionConstraint(TimingConstraint):
    """Caps speed while the sample lies inside an axis-aligned rectangle."""

    def __init__(
        self,
        min_corner: tuple[float, float],
        max_corner: tuple[float, float],
        max_velocity: float,
    ):
        if max_velocity < 0.0:
            raise ValueError("max_velocity must be non-negative.")
        self.x_min, self.x_max = sorted((float(min_corner[0]), float(max_corner[0])))
        self.y_min, self.y_max = sorted((float(min_corner[1]), float(max_corner[1])))
        self._max_velocity = float(max_velocity)

    def contains(self, sample: PathSample) -> bool:
        pose = sample.pose
        return self.x_min <= pose.x <= self.x_max and self.y_min <= pose.y <= self.y_max

    def max_velocity(self, sample: PathSample) -> float:
        return self._max_velocity if self.contains(sample) else math.inf


class DifferentialDriveKinematicsConstraint(TimingConstraint):
    """Keeps the faster wheel of a differential drive under its speed limit.

    The outer wheel travels at |v| * (1 + |curvature| * track_width / 2).
    """

    def __init__(self, track_width: float, max_wheel_speed: float):
        if track_width <= 0.0:
            raise ValueError("track_width must be strictly positive.")
        if max_wheel_speed <= 0.0:
            raise ValueError("max_wheel_speed must be strictly positive.")
        self.track_width = float(track_width)
        self.max_wheel_speed = float(max_wheel_speed)

    def max_velocity(self, sample: PathSample) -> float:
        return self.max_wheel_speed / (
            1.0 + abs(sample.curvature) * self.track_width / 2.0
        )


class AngularAccelerationConstraint(TimingConstraint):
    """Bounds the chassis angular acceleration.

    With omega = v * curvature, d(omega)/dt = a * curvature + v^2 * dcurvature_ds,
    which gives a velocity-dependent window on the linear acceleration ``a``.
    """

    def __init__(self, max_angular_acceleration: float):
        if max_angular_acceleration <= 0.0:
            raise ValueError("max_angular_acceleration must be strictly positive.")
        self.max_angular_acceleration = float(max_angular_acceleration)

    def max_velocity(self, sample: PathSample) -> float:
        # With a = 0 the curvature change alone must stay within the limit.
        dk_ds = abs(sample.dcurvature_ds)
        if dk_ds < STRAIGHT_CURVATURE_EPS:
            return math.inf
        return math.sqrt(self.max_angular_acceleration / dk_ds)

    def min_max_acceleration(
        self, sample: PathSample, velocity: float
    ) -> MinMaxAcceleration:
        curvature = sample.curvature
        if abs(curvature) < STRAIGHT_CURVATURE_EPS:
            return MinMaxAcceleration.NO_LIMITS
        coupling = velocity * velocity * sample.dcurvature_ds
        bound_a = (-self.max_angular_acceleration - coupling) / curvature
        bound_b = (self.max_angular_acceleration - coupling) / curvature
        return MinMaxAcceleration(min(bound_a, bound_b), max(bound_a, bound_b))
