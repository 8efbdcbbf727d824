from dataclasses import dataclass
import math


@dataclass(frozen=True)
class SimulatorConfig:
    """Configuration parameters for the differential-drive simulator."""

    dt: float = 0.02
    velocity_time_constant: float = 0.05
    max_linear_velocity: float = 5.0
    max_angular_velocity: float = 2.0 * math.pi

    def __post_init__(self) -> None:
        if self.dt <= 0.0:
            raise ValueError("dt must be positive.")
        if self.velocity_time_constant < 0.0:
            raise ValueError("velocity_time_constant must be non-negative.")
        if self.max_linear_velocity <= 0.0 or self.max_angular_velocity <= 0.0:
            raise ValueError("Velocity limits must be strictly positive.")
