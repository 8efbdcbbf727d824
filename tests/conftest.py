"""Shared fixtures: an exact circular-arc spline for constant-curvature cases."""

from __future__ import annotations

import math

import numpy as np
import pytest

from diffdrive_trajectory.spline import ParametricSpline


class ArcSpline(ParametricSpline):
    """Left-turning circular arc starting at the origin, heading +x."""

    def __init__(self, radius: float, sweep_rad: float):
        self.radius = radius
        self.sweep_rad = sweep_rad

    def point(self, t: float) -> np.ndarray:
        theta = self.sweep_rad * t
        return np.array(
            [self.radius * math.sin(theta), self.radius * (1.0 - math.cos(theta))]
        )

    def heading(self, t: float) -> float:
        return self.sweep_rad * t

    def curvature(self, t: float) -> float:
        return 1.0 / self.radius

    def dcurvature(self, t: float) -> float:
        return 0.0

    def velocity(self, t: float) -> float:
        return self.radius * self.sweep_rad


@pytest.fixture
def arc_spline():
    def factory(radius: float = 2.0, sweep_rad: float = math.pi) -> ArcSpline:
        return ArcSpline(radius, sweep_rad)

    return factory
