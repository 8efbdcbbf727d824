from __future__ import annotations

import math

from diffdrive_trajectory.geometry import Pose2d
from diffdrive_trajectory.timing import Waypoint


def s_curve_waypoints(length_m: float = 6.0, offset_m: float = 2.0) -> list[Pose2d]:
    if length_m <= 0.0:
        raise ValueError("length_m must be positive")
    return [
        Pose2d(0.0, 0.0, 0.0),
        Pose2d(0.5 * length_m, 0.5 * offset_m, math.radians(35.0)),
        Pose2d(length_m, offset_m, 0.0),
    ]


def slalom_waypoints(
    gate_spacing_m: float = 3.0,
    lateral_offset_m: float = 1.2,
    num_gates: int = 4,
    gate_speed_m_s: float | None = None,
) -> list[Pose2d | Waypoint]:
    """Weave left and right of a line of gates, optionally slowing at each gate."""
    if num_gates <= 0:
        raise ValueError("num_gates must be positive")
    if gate_spacing_m <= 0.0:
        raise ValueError("gate_spacing_m must be positive")

    waypoints: list[Pose2d | Waypoint] = [Pose2d(0.0, 0.0, 0.0)]
    sign = 1.0
    for idx in range(1, num_gates + 1):
        pose = Pose2d(idx * gate_spacing_m, sign * lateral_offset_m, 0.0)
        waypoints.append(Waypoint(pose, max_velocity=gate_speed_m_s))
        sign *= -1.0
    waypoints.append(Pose2d((num_gates + 1) * gate_spacing_m, 0.0, 0.0))
    return waypoints


def reverse_parking_waypoints(depth_m: float = 3.0, offset_m: float = 1.5) -> list[Pose2d]:
    # Robot keeps facing +x while backing into a bay behind and to the left.
    return [
        Pose2d(0.0, 0.0, 0.0),
        Pose2d(-depth_m, offset_m, 0.0),
    ]
