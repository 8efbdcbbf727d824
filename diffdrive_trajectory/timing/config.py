from __future__ import annotations

from dataclasses import dataclass, field

from ..spline import SamplerConfig


@dataclass(frozen=True)
class TrajectoryConfig:
    """Limits and boundary conditions for time-parameterizing a path.

    Velocities are speeds (m/s, non-negative) regardless of ``reversed``; the
    sign of the generated velocities encodes the travel direction.
    """

    max_velocity: float = 3.0
    max_acceleration: float = 2.0
    start_velocity: float = 0.0
    end_velocity: float = 0.0
    reversed: bool = False
    sampler: SamplerConfig = field(default_factory=SamplerConfig)

    def __post_init__(self) -> None:
        if self.max_velocity <= 0.0:
            raise ValueError("max_velocity must be strictly positive.")
        if self.max_acceleration <= 0.0:
            raise ValueError("max_acceleration must be strictly positive.")
        if self.start_velocity < 0.0 or self.end_velocity < 0.0:
            raise ValueError("Boundary velocities are speeds and must be non-negative.")
        if self.start_velocity > self.max_velocity or self.end_velocity > self.max_velocity:
            raise ValueError("Boundary velocities must not exceed max_velocity.")
