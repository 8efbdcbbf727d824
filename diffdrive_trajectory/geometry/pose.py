from __future__ import annotations

import math
from dataclasses import dataclass


def wrap_angle(rad: float) -> float:
    """Normalize an angle to the half-open range (-pi, pi]."""
    wrapped = math.remainder(float(rad), 2.0 * math.pi)
    if wrapped <= -math.pi:
        wrapped = math.pi
    return wrapped


def lerp_angle(a: float, b: float, alpha: float) -> float:
    diff = math.remainder(b - a, 2.0 * math.pi)
    return wrap_angle(a + alpha * diff)


@dataclass(frozen=True)
class Pose2d:
    """Rigid 2D transform: translation in metres, heading in radians.

    Poses compose like transforms, ``a + b`` applies ``b`` in the frame of
    ``a`` and ``-a`` is the inverse, so ``a - b`` is ``a + (-b)``.
    """

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "heading", wrap_angle(self.heading))

    @property
    def cos(self) -> float:
        return math.cos(self.heading)

    @property
    def sin(self) -> float:
        return math.sin(self.heading)

    def transform_by(self, other: Pose2d) -> Pose2d:
        c, s = self.cos, self.sin
        return Pose2d(
            x=self.x + c * other.x - s * other.y,
            y=self.y + s * other.x + c * other.y,
            heading=self.heading + other.heading,
        )

    def inverse(self) -> Pose2d:
        c, s = self.cos, self.sin
        return Pose2d(
            x=-(c * self.x + s * self.y),
            y=s * self.x - c * self.y,
            heading=-self.heading,
        )

    def relative_to(self, origin: Pose2d) -> Pose2d:
        """Express this pose in the frame of ``origin``."""
        return origin.inverse().transform_by(self)

    def __add__(self, other: Pose2d) -> Pose2d:
        return self.transform_by(other)

    def __neg__(self) -> Pose2d:
        return self.inverse()

    def __sub__(self, other: Pose2d) -> Pose2d:
        return self.transform_by(other.inverse())

    def rotated_by(self, angle_rad: float) -> Pose2d:
        """Spin the heading in place, leaving the translation untouched."""
        return Pose2d(self.x, self.y, self.heading + angle_rad)

    def distance_to(self, other: Pose2d) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def interpolate(self, other: Pose2d, fraction: float) -> Pose2d:
        alpha = max(0.0, min(1.0, float(fraction)))
        return Pose2d(
            x=self.x + alpha * (other.x - self.x),
            y=self.y + alpha * (other.y - self.y),
            heading=lerp_angle(self.heading, other.heading, alpha),
        )

    def is_close(self, other: Pose2d, tol: float = 1e-9) -> bool:
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(math.remainder(self.heading - other.heading, 2.0 * math.pi)) <= tol
        )
