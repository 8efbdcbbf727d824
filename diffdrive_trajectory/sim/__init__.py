from .config import SimulatorConfig
from .simulator import (
    DifferentialDriveSimulator,
    DriveState,
    SimulatedDriveBase,
    SimulationStep,
)
from .telemetry import TelemetryLogger

__all__ = [
    "DifferentialDriveSimulator",
    "DriveState",
    "SimulatedDriveBase",
    "SimulationStep",
    "SimulatorConfig",
    "TelemetryLogger",
]
