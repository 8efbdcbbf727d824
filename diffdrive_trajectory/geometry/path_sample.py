from __future__ import annotations

import math
from dataclasses import dataclass, field

from .pose import Pose2d


@dataclass(frozen=True)
class PathSample:
    """A pose on a path with its signed curvature and dκ/ds."""

    pose: Pose2d = field(default_factory=Pose2d)
    curvature: float = 0.0
    dcurvature_ds: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "curvature", float(self.curvature))
        object.__setattr__(self, "dcurvature_ds", float(self.dcurvature_ds))

    def interpolate(self, other: PathSample, fraction: float) -> PathSample:
        alpha = max(0.0, min(1.0, float(fraction)))
        return PathSample(
            pose=self.pose.interpolate(other.pose, alpha),
            curvature=self.curvature + alpha * (other.curvature - self.curvature),
            dcurvature_ds=self.dcurvature_ds
            + alpha * (other.dcurvature_ds - self.dcurvature_ds),
        )

    def mirrored(self) -> PathSample:
        # Same point driven backwards: the robot faces the other way, so the
        # curvature seen in its own frame changes sign.
        return PathSample(
            pose=self.pose.rotated_by(math.pi),
            curvature=-self.curvature,
            dcurvature_ds=-self.dcurvature_ds,
        )
