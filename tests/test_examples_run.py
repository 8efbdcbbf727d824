from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from diffdrive_trajectory.geometry import Pose2d
from diffdrive_trajectory.timing import TrajectoryConfig, read_trajectory_csv
from examples import (
    reverse_parking_waypoints,
    run_tracking_example,
    s_curve_waypoints,
    slalom_waypoints,
)


def _example_cases():
    return [
        ("s_curve", s_curve_waypoints(), TrajectoryConfig(max_velocity=2.0, max_acceleration=1.5)),
        ("slalom", slalom_waypoints(), TrajectoryConfig(max_velocity=2.0, max_acceleration=1.5)),
        (
            "reverse_parking",
            reverse_parking_waypoints(depth_m=3.0, offset_m=1.5),
            TrajectoryConfig(max_velocity=1.0, max_acceleration=1.0, reversed=True),
        ),
    ]


@pytest.mark.parametrize(("name", "waypoints", "config"), _example_cases())
def test_examples_track_reference(name: str, waypoints, config: TrajectoryConfig, tmp_path: Path) -> None:
    history = run_tracking_example(
        waypoints,
        log_dir=tmp_path,
        name=name,
        trajectory_config=config,
        initial_offset=Pose2d(0.0, 0.1, 0.05),
    )

    assert history, f"{name} example produced no simulation steps"
    trajectory_path = tmp_path / f"{name}_trajectory.csv"
    tracking_path = tmp_path / f"{name}_tracking.csv"
    assert trajectory_path.exists(), f"{name} trajectory was not written"
    assert tracking_path.exists(), f"{name} log was not written"

    trajectory = read_trajectory_csv(trajectory_path)
    assert trajectory.reversed is config.reversed

    log = pd.read_csv(tracking_path)
    assert len(log) == len(history)

    settled = log[log["time_s"] > 2.0]
    assert not settled.empty, "No samples remained after settling period"
    position_error = np.hypot(settled["err_longitudinal"], settled["err_lateral"])
    rms = float(np.sqrt(np.mean(position_error**2)))
    assert rms < 0.2, f"{name} position RMS too high: {rms:.3f} m"
    assert float(position_error.max()) < 0.4, f"{name} position max too high"

    final = history[-1].state.pose
    assert final.distance_to(trajectory.last_state.pose) < 0.2
