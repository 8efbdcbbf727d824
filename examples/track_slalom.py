from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from diffdrive_trajectory.timing import TrajectoryConfig
from examples import run_tracking_example, slalom_waypoints

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"


def main() -> None:
    run_tracking_example(
        slalom_waypoints(gate_spacing_m=3.0, lateral_offset_m=1.2, num_gates=4, gate_speed_m_s=1.0),
        log_dir=LOG_DIR,
        name="slalom",
        trajectory_config=TrajectoryConfig(max_velocity=2.5, max_acceleration=2.0),
    )


if __name__ == "__main__":
    main()
