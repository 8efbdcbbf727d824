from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.polynomial import Polynomial

from ..errors import GenerationError, TrajectoryConstructionError
from ..geometry import Pose2d
from .parametric import ParametricSpline

# Tangent magnitude relative to the chord between the two waypoints.
TANGENT_SCALE = 1.2
MIN_SEGMENT_LENGTH_M = 1e-6


def _hermite_coefficients(
    p0: float, d0: float, dd0: float, p1: float, d1: float, dd1: float
) -> Polynomial:
    a = -6.0 * p0 - 3.0 * d0 - 0.5 * dd0 + 0.5 * dd1 - 3.0 * d1 + 6.0 * p1
    b = 15.0 * p0 + 8.0 * d0 + 1.5 * dd0 - dd1 + 7.0 * d1 - 15.0 * p1
    c = -10.0 * p0 - 6.0 * d0 - 1.5 * dd0 + 0.5 * dd1 - 4.0 * d1 + 10.0 * p1
    return Polynomial([p0, d0, 0.5 * dd0, c, b, a])


class QuinticHermiteSpline(ParametricSpline):
    """Quintic Hermite segment between two poses.

    Endpoint tangents follow the pose headings and endpoint second
    derivatives are zero, so chained segments share heading and have zero
    curvature at every waypoint.
    """

    def __init__(self, start: Pose2d, end: Pose2d):
        chord = start.distance_to(end)
        if chord < MIN_SEGMENT_LENGTH_M:
            raise TrajectoryConstructionError(
                GenerationError.DEGENERATE_SPLINE,
                f"Spline endpoints coincide ({chord:.3g} m apart).",
            )
        self.start = start
        self.end = end

        scale = TANGENT_SCALE * chord
        self._x = _hermite_coefficients(
            start.x, start.cos * scale, 0.0, end.x, end.cos * scale, 0.0
        )
        self._y = _hermite_coefficients(
            start.y, start.sin * scale, 0.0, end.y, end.sin * scale, 0.0
        )
        self._dx = self._x.deriv(1)
        self._dy = self._y.deriv(1)
        self._ddx = self._x.deriv(2)
        self._ddy = self._y.deriv(2)
        self._dddx = self._x.deriv(3)
        self._dddy = self._y.deriv(3)

    def point(self, t: float) -> np.ndarray:
        return np.array([self._x(t), self._y(t)], dtype=float)

    def heading(self, t: float) -> float:
        return math.atan2(float(self._dy(t)), float(self._dx(t)))

    def velocity(self, t: float) -> float:
        return math.hypot(float(self._dx(t)), float(self._dy(t)))

    def curvature(self, t: float) -> float:
        dx, dy = float(self._dx(t)), float(self._dy(t))
        ddx, ddy = float(self._ddx(t)), float(self._ddy(t))
        speed_sq = dx * dx + dy * dy
        return (dx * ddy - ddx * dy) / (speed_sq * math.sqrt(speed_sq))

    def dcurvature(self, t: float) -> float:
        dx, dy = float(self._dx(t)), float(self._dy(t))
        ddx, ddy = float(self._ddx(t)), float(self._ddy(t))
        dddx, dddy = float(self._dddx(t)), float(self._dddy(t))
        speed_sq = dx * dx + dy * dy
        numerator = (dx * dddy - dddx * dy) * speed_sq - 3.0 * (dx * ddy - ddx * dy) * (
            dx * ddx + dy * ddy
        )
        return numerator / (speed_sq * speed_sq * math.sqrt(speed_sq))


def splines_from_waypoints(waypoints: Sequence[Pose2d]) -> list[QuinticHermiteSpline]:
    if len(waypoints) < 2:
        raise TrajectoryConstructionError(
            GenerationError.TOO_FEW_WAYPOINTS,
            f"At least two waypoints are required; received {len(waypoints)}.",
        )
    return [
        QuinticHermiteSpline(start, end)
        for start, end in zip(waypoints[:-1], waypoints[1:])
    ]
