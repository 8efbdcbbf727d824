from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackerConfig:
    """Timing and completion policy shared by all trajectory trackers.

    With both completion tolerances left as ``None`` the tracker finishes as
    soon as its reference reaches the end of the trajectory. Setting either
    one keeps it tracking the final reference until the robot is that close.
    """

    period_s: float = 0.02
    completion_position_tolerance: float | None = None
    completion_heading_tolerance: float | None = None

    def __post_init__(self) -> None:
        if self.period_s <= 0.0:
            raise ValueError("period_s must be strictly positive.")
        for name in ("completion_position_tolerance", "completion_heading_tolerance"):
            value = getattr(self, name)
            if value is not None and value < 0.0:
                raise ValueError(f"{name} must be non-negative.")


@dataclass(frozen=True)
class RamseteConfig:
    """Gains of the Ramsete feedback law.

    ``beta`` (> 0) stiffens convergence like a proportional gain, ``zeta``
    (0 < zeta < 1) adds damping.
    """

    beta: float = 2.0
    zeta: float = 0.7

    def __post_init__(self) -> None:
        if self.beta <= 0.0:
            raise ValueError("beta must be strictly positive.")
        if not 0.0 < self.zeta < 1.0:
            raise ValueError("zeta must lie in (0, 1).")
