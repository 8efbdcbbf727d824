from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable

import numpy as np

from ..geometry import ChassisVelocityCommand, Pose2d
from .config import SimulatorConfig


@dataclass
class DriveState:
    """State tracked by the simulator."""

    pose: Pose2d = field(default_factory=Pose2d)
    linear_velocity: float = 0.0
    angular_velocity: float = 0.0

    def copy(self) -> DriveState:
        return replace(self)


@dataclass
class SimulationStep:
    time_s: float
    state: DriveState
    command: ChassisVelocityCommand


class DifferentialDriveSimulator:
    """Unicycle kinematics behind a first-order velocity lag."""

    def __init__(
        self, config: SimulatorConfig | None = None, initial_pose: Pose2d | None = None
    ) -> None:
        self._config = config or SimulatorConfig()
        self.dt = float(self._config.dt)
        self.state = DriveState(pose=initial_pose or Pose2d())
        self.time_s = 0.0

    @property
    def config(self) -> SimulatorConfig:
        return self._config

    def reset(self, pose: Pose2d | None = None, time_s: float = 0.0) -> None:
        self.state = DriveState(pose=pose or Pose2d())
        self.time_s = float(time_s)

    def step(
        self, command: ChassisVelocityCommand, dt: float | None = None
    ) -> SimulationStep:
        dt = float(dt if dt is not None else self.dt)
        if dt <= 0.0:
            raise ValueError("dt must be positive")

        tau = self._config.velocity_time_constant
        alpha = 1.0 if tau <= 0.0 else dt / (tau + dt)

        v = self.state.linear_velocity + alpha * (
            command.linear_velocity - self.state.linear_velocity
        )
        w = self.state.angular_velocity + alpha * (
            command.angular_velocity - self.state.angular_velocity
        )
        v = float(np.clip(v, -self._config.max_linear_velocity, self._config.max_linear_velocity))
        w = float(
            np.clip(w, -self._config.max_angular_velocity, self._config.max_angular_velocity)
        )

        # Integrate along the constant-twist arc rather than a straight chord.
        dtheta = w * dt
        if abs(dtheta) < 1e-9:
            dx, dy = v * dt, 0.0
        else:
            radius = v / w
            dx = radius * math.sin(dtheta)
            dy = radius * (1.0 - math.cos(dtheta))

        self.state.pose = self.state.pose.transform_by(Pose2d(dx, dy, dtheta))
        self.state.linear_velocity = v
        self.state.angular_velocity = w

        self.time_s += dt
        return SimulationStep(time_s=self.time_s, state=self.state.copy(), command=command)

    def run(
        self,
        final_time_s: float,
        command_fn: Callable[[float, DriveState], ChassisVelocityCommand],
        progress_callback: Callable[[SimulationStep], None] | None = None,
    ) -> list[SimulationStep]:
        steps = int(np.ceil((final_time_s - self.time_s) / self.dt - 1e-9))
        history: list[SimulationStep] = []
        for _ in range(max(0, steps)):
            cmd = command_fn(self.time_s, self.state.copy())
            step = self.step(cmd, dt=self.dt)
            history.append(step)
            if progress_callback is not None:
                progress_callback(step)
        return history


class SimulatedDriveBase:
    """Drive base backed by the simulator: each output advances one period."""

    def __init__(self, simulator: DifferentialDriveSimulator) -> None:
        self.simulator = simulator
        self.history: list[SimulationStep] = []
        self.last_command: ChassisVelocityCommand | None = None
        self.neutral = False

    def robot_position(self) -> Pose2d:
        return self.simulator.state.pose

    def set_output(self, command: ChassisVelocityCommand) -> None:
        self.neutral = False
        self.last_command = command
        self.history.append(self.simulator.step(command))

    def set_neutral(self) -> None:
        self.neutral = True
        self.last_command = ChassisVelocityCommand.zero()
