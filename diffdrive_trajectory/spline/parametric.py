from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..geometry import PathSample, Pose2d


class ParametricSpline(ABC):
    """Curve over the normalized parameter t in [0, 1].

    ``dcurvature`` is the derivative with respect to t; ``sample`` converts it
    to a derivative with respect to arc length by dividing by the speed.
    """

    @abstractmethod
    def point(self, t: float) -> np.ndarray: ...

    @abstractmethod
    def heading(self, t: float) -> float: ...

    @abstractmethod
    def curvature(self, t: float) -> float: ...

    @abstractmethod
    def dcurvature(self, t: float) -> float: ...

    @abstractmethod
    def velocity(self, t: float) -> float: ...

    def pose(self, t: float) -> Pose2d:
        x, y = self.point(t)
        return Pose2d(x, y, self.heading(t))

    def sample(self, t: float) -> PathSample:
        return PathSample(
            pose=self.pose(t),
            curvature=self.curvature(t),
            dcurvature_ds=self.dcurvature(t) / self.velocity(t),
        )
