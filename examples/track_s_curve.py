from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from diffdrive_trajectory.geometry import Pose2d
from diffdrive_trajectory.timing import TrajectoryConfig
from examples import run_tracking_example, s_curve_waypoints

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"


def main() -> None:
    run_tracking_example(
        s_curve_waypoints(length_m=6.0, offset_m=2.0),
        log_dir=LOG_DIR,
        name="s_curve",
        trajectory_config=TrajectoryConfig(max_velocity=2.0, max_acceleration=1.5),
        # Start slightly off the path so the feedback has something to do.
        initial_offset=Pose2d(-0.1, 0.15, 0.05),
    )


if __name__ == "__main__":
    main()
