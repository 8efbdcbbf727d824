from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
from scipy import integrate

from ..errors import GenerationError, TrajectoryConstructionError
from ..geometry import PathSample
from .parametric import ParametricSpline

logger = logging.getLogger(__name__)

MIN_PARAMETRIC_SPEED = 1e-9


@dataclass(frozen=True)
class SamplerConfig:
    """Tolerances for adaptive spline subdivision.

    Lengths are in metres, angles in radians. An interval is bisected while
    any of its chord length, lateral drift, heading change or arc-minus-chord
    error exceeds the matching limit.
    """

    max_dx: float = 0.05
    max_dy: float = 0.00127
    max_dtheta: float = 0.1
    arc_tolerance: float = 1e-4
    max_depth: int = 24

    def __post_init__(self) -> None:
        if self.max_dx <= 0.0 or self.max_dy <= 0.0:
            raise ValueError("Sampler distance tolerances must be strictly positive.")
        if self.max_dtheta <= 0.0:
            raise ValueError("max_dtheta must be strictly positive.")
        if self.arc_tolerance <= 0.0:
            raise ValueError("arc_tolerance must be strictly positive.")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1.")


@dataclass(frozen=True)
class SampledPath:
    samples: tuple[PathSample, ...]
    distances: np.ndarray
    waypoint_indices: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        distances = np.asarray(self.distances, dtype=float)
        if distances.shape != (len(self.samples),):
            raise ValueError(
                f"SampledPath.distances must match the sample count; received shape {distances.shape}"
            )
        distances = distances.copy()
        distances.setflags(write=False)
        object.__setattr__(self, "samples", tuple(self.samples))
        object.__setattr__(self, "distances", distances)
        object.__setattr__(self, "waypoint_indices", tuple(self.waypoint_indices))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[PathSample]:
        return iter(self.samples)

    @property
    def length(self) -> float:
        return float(self.distances[-1]) if len(self.distances) else 0.0


def _sample_at(spline: ParametricSpline, t: float) -> PathSample:
    if spline.velocity(t) < MIN_PARAMETRIC_SPEED:
        raise TrajectoryConstructionError(
            GenerationError.DEGENERATE_SPLINE,
            f"Spline has a cusp at t={t:.4f}; curvature is undefined there.",
        )
    return spline.sample(t)


def _arc_length(spline: ParametricSpline, t0: float, t1: float) -> float:
    value, _ = integrate.quad(spline.velocity, t0, t1, limit=50)
    return float(value)


def _subdivide(
    spline: ParametricSpline,
    t0: float,
    t1: float,
    start: PathSample,
    depth: int,
    config: SamplerConfig,
    out: list[tuple[float, PathSample]],
) -> PathSample:
    end = _sample_at(spline, t1)
    arc = _arc_length(spline, t0, t1)
    delta = end.pose.relative_to(start.pose)
    chord = math.hypot(delta.x, delta.y)

    too_coarse = (
        abs(delta.x) > config.max_dx
        or abs(delta.y) > config.max_dy
        or abs(delta.heading) > config.max_dtheta
        or arc - chord > config.arc_tolerance
    )
    if too_coarse and depth < config.max_depth:
        t_mid = 0.5 * (t0 + t1)
        mid = _subdivide(spline, t0, t_mid, start, depth + 1, config, out)
        return _subdivide(spline, t_mid, t1, mid, depth + 1, config, out)

    out.append((arc, end))
    return end


def sample_splines(
    splines: Sequence[ParametricSpline], config: SamplerConfig | None = None
) -> SampledPath:
    """Resample chained splines at roughly uniform arc-length spacing."""
    config = config or SamplerConfig()
    if not splines:
        raise TrajectoryConstructionError(
            GenerationError.TOO_FEW_WAYPOINTS, "No splines to sample."
        )

    first = _sample_at(splines[0], 0.0)
    samples: list[PathSample] = [first]
    distances: list[float] = [0.0]
    waypoint_indices: list[int] = [0]

    for spline in splines:
        segments: list[tuple[float, PathSample]] = []
        # Each spline starts where the previous one ended; that sample is
        # already in the output.
        _subdivide(spline, 0.0, 1.0, _sample_at(spline, 0.0), 0, config, segments)
        for arc, sample in segments:
            distances.append(distances[-1] + arc)
            samples.append(sample)
        waypoint_indices.append(len(samples) - 1)

    logger.debug(
        "Sampled %d splines into %d samples over %.3f m",
        len(splines),
        len(samples),
        distances[-1],
    )
    return SampledPath(
        samples=tuple(samples),
        distances=np.array(distances, dtype=float),
        waypoint_indices=tuple(waypoint_indices),
    )
