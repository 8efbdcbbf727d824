"""Example scripts driving the simulated robot along generated trajectories."""

from .common import DEFAULT_CONSTRAINTS, analyze_history, run_tracking_example
from .waypoints import reverse_parking_waypoints, s_curve_waypoints, slalom_waypoints

__all__ = [
    "DEFAULT_CONSTRAINTS",
    "analyze_history",
    "reverse_parking_waypoints",
    "run_tracking_example",
    "s_curve_waypoints",
    "slalom_waypoints",
]
