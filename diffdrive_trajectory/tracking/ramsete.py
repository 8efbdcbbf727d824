from __future__ import annotations

import math

from ..geometry import ChassisVelocityCommand
from ..timing import TimedState
from .config import RamseteConfig, TrackerConfig
from .tracker import PoseError, TrajectoryTracker


def _sinc(x: float) -> float:
    if abs(x) < 1e-9:
        return 1.0 - x * x / 6.0
    return math.sin(x) / x


class RamseteTracker(TrajectoryTracker):
    """Nonlinear unicycle tracking law (Samson / Ramsete).

    The gain ``k`` scales with the reference speeds, and every correction
    term vanishes with the pose error, so a robot sitting on the reference
    receives exactly the feed-forward command.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        ramsete: RamseteConfig | None = None,
    ):
        super().__init__(config)
        self._ramsete = ramsete or RamseteConfig()

    @property
    def ramsete(self) -> RamseteConfig:
        return self._ramsete

    def _compute_command(
        self, error: PoseError, reference: TimedState
    ) -> ChassisVelocityCommand:
        beta = self._ramsete.beta
        v_ref = reference.velocity
        w_ref = reference.angular_velocity
        k = 2.0 * self._ramsete.zeta * math.sqrt(w_ref * w_ref + beta * v_ref * v_ref)

        linear = v_ref * math.cos(error.heading) + k * error.longitudinal
        angular = (
            w_ref
            + k * error.heading
            + beta * v_ref * _sinc(error.heading) * error.lateral
        )
        return ChassisVelocityCommand(linear, angular)
