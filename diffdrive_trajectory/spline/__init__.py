"""Spline interpolation between waypoints and arc-length resampling."""

from .parametric import ParametricSpline
from .quintic_hermite import QuinticHermiteSpline, splines_from_waypoints
from .sampler import SampledPath, SamplerConfig, sample_splines

__all__ = [
    "ParametricSpline",
    "QuinticHermiteSpline",
    "SampledPath",
    "SamplerConfig",
    "sample_splines",
    "splines_from_waypoints",
]
