from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from diffdrive_trajectory.timing import TrajectoryConfig
from examples import reverse_parking_waypoints, run_tracking_example

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"


def main() -> None:
    run_tracking_example(
        reverse_parking_waypoints(depth_m=3.0, offset_m=1.5),
        log_dir=LOG_DIR,
        name="reverse_parking",
        trajectory_config=TrajectoryConfig(max_velocity=1.0, max_acceleration=1.0, reversed=True),
    )


if __name__ == "__main__":
    main()
