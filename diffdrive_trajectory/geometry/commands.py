from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChassisVelocityCommand:
    """Body-frame velocity setpoint handed to the drivetrain output layer."""

    linear_velocity: float = 0.0
    angular_velocity: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "linear_velocity", float(self.linear_velocity))
        object.__setattr__(self, "angular_velocity", float(self.angular_velocity))

    @classmethod
    def zero(cls) -> ChassisVelocityCommand:
        return cls(0.0, 0.0)
