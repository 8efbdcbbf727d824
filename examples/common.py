from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from diffdrive_trajectory.geometry import Pose2d
from diffdrive_trajectory.sim import (
    DifferentialDriveSimulator,
    SimulatedDriveBase,
    SimulationStep,
    SimulatorConfig,
    TelemetryLogger,
)
from diffdrive_trajectory.timing import (
    CentripetalAccelerationConstraint,
    DifferentialDriveKinematicsConstraint,
    TimingConstraint,
    Trajectory,
    TrajectoryConfig,
    TrajectoryGenerator,
    Waypoint,
    write_trajectory_csv,
)
from diffdrive_trajectory.tracking import (
    RamseteConfig,
    RamseteTracker,
    TrackerConfig,
    TrajectoryTrackerCommand,
)

DEFAULT_CONSTRAINTS: tuple[TimingConstraint, ...] = (
    CentripetalAccelerationConstraint(max_centripetal_acceleration=1.5),
    DifferentialDriveKinematicsConstraint(track_width=0.6, max_wheel_speed=2.5),
)


def analyze_history(history: Iterable[SimulationStep], trajectory: Trajectory) -> None:
    history = list(history)
    if not history:
        print("No simulation history recorded.")
        return

    position_errors: list[float] = []
    for step in history:
        reference = trajectory.sample(step.time_s)
        position_errors.append(step.state.pose.distance_to(reference.pose))

    rms_error = math.sqrt(float(np.mean(np.square(position_errors))))
    max_error = float(np.max(position_errors))
    final_pose = history[-1].state.pose
    goal = trajectory.last_state.pose

    print(f"Trajectory: {trajectory}")
    print(f"Simulated {len(history)} steps over {history[-1].time_s:.2f} s.")
    print(f"Final pose: x={final_pose.x:.3f} y={final_pose.y:.3f} heading={final_pose.heading:.3f}")
    print(f"Final distance to goal: {final_pose.distance_to(goal):.3f} m")
    print(f"RMS position error: {rms_error:.3f} m")
    print(f"Max position error: {max_error:.3f} m")


def run_tracking_example(
    waypoints: Sequence[Pose2d | Waypoint],
    log_dir: Path,
    name: str,
    *,
    trajectory_config: TrajectoryConfig | None = None,
    constraints: Sequence[TimingConstraint] = DEFAULT_CONSTRAINTS,
    simulator_config: SimulatorConfig | None = None,
    ramsete: RamseteConfig | None = None,
    initial_offset: Pose2d | None = None,
) -> list[SimulationStep]:
    generator = TrajectoryGenerator(trajectory_config, constraints)
    trajectory = generator.generate(waypoints)

    simulator_config = simulator_config or SimulatorConfig()
    start = trajectory.first_state.pose
    if initial_offset is not None:
        start = start.transform_by(initial_offset)
    simulator = DifferentialDriveSimulator(simulator_config, initial_pose=start)
    drive = SimulatedDriveBase(simulator)
    tracker = RamseteTracker(TrackerConfig(period_s=simulator_config.dt), ramsete)
    command = TrajectoryTrackerCommand(drive, tracker, lambda: trajectory)

    log_dir.mkdir(parents=True, exist_ok=True)
    write_trajectory_csv(trajectory, log_dir / f"{name}_trajectory.csv")
    log_path = log_dir / f"{name}_tracking.csv"

    with TelemetryLogger(log_path) as logger:
        command.initialize()
        interrupted = True
        try:
            max_ticks = int(math.ceil(trajectory.duration / simulator_config.dt)) + 1
            for _ in range(max_ticks):
                if command.is_finished():
                    break
                output = command.execute()
                reference = tracker.reference_point
                logger.log(
                    drive.history[-1],
                    output,
                    reference=reference.state if reference is not None else None,
                    error=tracker.last_error,
                )
            interrupted = not command.is_finished()
        finally:
            command.end(interrupted)

    analyze_history(drive.history, trajectory)
    print(f"Telemetry log written to: {log_path}")
    return drive.history
