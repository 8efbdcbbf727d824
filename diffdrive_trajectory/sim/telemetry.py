import csv
from pathlib import Path
from typing import Self

from ..geometry import ChassisVelocityCommand
from ..timing import TimedState
from ..tracking import PoseError
from .simulator import SimulationStep


class TelemetryLogger:
    """CSV logger for closed-loop tracking runs."""

    HEADERS = [
        "time_s",
        "ref_x",
        "ref_y",
        "ref_heading",
        "ref_velocity",
        "ref_angular_velocity",
        "veh_x",
        "veh_y",
        "veh_heading",
        "veh_velocity",
        "veh_angular_velocity",
        "cmd_linear",
        "cmd_angular",
        "err_longitudinal",
        "err_lateral",
        "err_heading",
    ]

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", newline="")
        self._writer = csv.writer(self._file)
        self._writer.writerow(self.HEADERS)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log(
        self,
        step: SimulationStep,
        command: ChassisVelocityCommand,
        reference: TimedState | None = None,
        error: PoseError | None = None,
    ) -> None:
        nan = float("nan")
        if reference is not None:
            ref = [
                reference.pose.x,
                reference.pose.y,
                reference.pose.heading,
                reference.velocity,
                reference.angular_velocity,
            ]
        else:
            ref = [nan] * 5
        err = (
            [error.longitudinal, error.lateral, error.heading]
            if error is not None
            else [nan] * 3
        )

        pose = step.state.pose
        row = [
            step.time_s,
            *ref,
            pose.x,
            pose.y,
            pose.heading,
            step.state.linear_velocity,
            step.state.angular_velocity,
            command.linear_velocity,
            command.angular_velocity,
            *err,
        ]
        self._writer.writerow(row)
        self._file.flush()
