"""Unit tests for the differential-drive simulator and its telemetry log."""

import math

import numpy as np
import pandas as pd
import pytest

from diffdrive_trajectory.geometry import ChassisVelocityCommand, PathSample, Pose2d
from diffdrive_trajectory.sim import (
    DifferentialDriveSimulator,
    SimulatedDriveBase,
    SimulatorConfig,
    TelemetryLogger,
)
from diffdrive_trajectory.timing import TimedState
from diffdrive_trajectory.tracking import PoseError


def test_constant_velocity_command_reached() -> None:
    config = SimulatorConfig(dt=0.02, velocity_time_constant=0.05)
    sim = DifferentialDriveSimulator(config)

    command = ChassisVelocityCommand(1.0, 0.0)
    for _ in range(int(2.0 / config.dt)):
        sim.step(command)

    assert sim.state.linear_velocity == pytest.approx(1.0, abs=1e-3)
    assert sim.state.pose.y == pytest.approx(0.0, abs=1e-12)
    # The lag costs roughly one time constant of travel.
    assert sim.state.pose.x == pytest.approx(2.0 - 0.05, abs=0.03)


def test_half_circle_lands_on_exact_arc() -> None:
    config = SimulatorConfig(dt=0.01, velocity_time_constant=0.0)
    sim = DifferentialDriveSimulator(config)

    # Radius 1 m: half a turn at pi rad/s takes one second.
    command = ChassisVelocityCommand(math.pi, math.pi)
    history = sim.run(1.0, lambda t, state: command)

    assert len(history) == 100
    assert history[-1].time_s == pytest.approx(1.0)
    final = sim.state.pose
    assert final.x == pytest.approx(0.0, abs=1e-9)
    assert final.y == pytest.approx(2.0, abs=1e-9)
    assert abs(final.heading) == pytest.approx(math.pi, abs=1e-9)


def test_velocity_limits_are_enforced() -> None:
    config = SimulatorConfig(velocity_time_constant=0.0, max_linear_velocity=1.0, max_angular_velocity=0.5)
    sim = DifferentialDriveSimulator(config)

    step = sim.step(ChassisVelocityCommand(-4.0, 3.0))

    assert step.state.linear_velocity == -1.0
    assert step.state.angular_velocity == 0.5
    assert step.command.linear_velocity == -4.0


def test_history_snapshots_are_independent() -> None:
    sim = DifferentialDriveSimulator(SimulatorConfig(velocity_time_constant=0.0))
    first = sim.step(ChassisVelocityCommand(1.0, 0.0))
    sim.step(ChassisVelocityCommand(1.0, 0.0))

    assert first.state.pose.x == pytest.approx(0.02)
    assert sim.state.pose.x == pytest.approx(0.04)


def test_reset_and_invalid_dt() -> None:
    sim = DifferentialDriveSimulator(initial_pose=Pose2d(1.0, 1.0, 0.0))
    sim.step(ChassisVelocityCommand(1.0, 1.0))
    sim.reset(Pose2d(-2.0, 0.0, 1.0))

    assert sim.time_s == 0.0
    assert sim.state.pose == Pose2d(-2.0, 0.0, 1.0)
    assert sim.state.linear_velocity == 0.0
    with pytest.raises(ValueError):
        sim.step(ChassisVelocityCommand(), dt=0.0)
    with pytest.raises(ValueError):
        SimulatorConfig(dt=-0.01)


def test_simulated_drive_base_records_outputs() -> None:
    drive = SimulatedDriveBase(DifferentialDriveSimulator(SimulatorConfig(velocity_time_constant=0.0)))

    drive.set_output(ChassisVelocityCommand(0.5, 0.0))
    drive.set_output(ChassisVelocityCommand(0.5, 0.0))
    assert len(drive.history) == 2
    assert drive.robot_position().x == pytest.approx(0.02)
    assert not drive.neutral

    drive.set_neutral()
    assert drive.neutral
    assert drive.last_command == ChassisVelocityCommand.zero()
    # Going neutral does not advance the simulation.
    assert len(drive.history) == 2


def test_telemetry_logger_writes_rows(tmp_path) -> None:
    sim = DifferentialDriveSimulator(SimulatorConfig(velocity_time_constant=0.0))
    reference = TimedState(PathSample(Pose2d(0.1, 0.0, 0.0)), 0.1, 0.02, 1.0, 0.0)
    command = ChassisVelocityCommand(1.0, 0.2)

    log_path = tmp_path / "logs" / "tracking.csv"
    with TelemetryLogger(log_path) as logger:
        logger.log(sim.step(command), command, reference=reference, error=PoseError(0.08, 0.0, 0.0))
        logger.log(sim.step(command), command)

    df = pd.read_csv(log_path)
    assert list(df.columns) == TelemetryLogger.HEADERS
    assert len(df) == 2
    assert df.loc[0, "ref_x"] == pytest.approx(0.1)
    assert df.loc[0, "err_longitudinal"] == pytest.approx(0.08)
    assert df.loc[1, "cmd_angular"] == pytest.approx(0.2)
    assert np.isnan(df.loc[1, "ref_velocity"])
    assert df["time_s"].tolist() == pytest.approx([0.02, 0.04])
