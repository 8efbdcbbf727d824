from __future__ import annotations

import csv
from pathlib import Path

import pandas as pd

from .trajectory import Trajectory

RECORD_FIELDS = [
    "time",
    "distance",
    "velocity",
    "acceleration",
    "x",
    "y",
    "heading",
    "curvature",
    "dcurvature_ds",
]


def trajectory_to_frame(trajectory: Trajectory) -> pd.DataFrame:
    return pd.DataFrame.from_records(trajectory.to_records(), columns=RECORD_FIELDS)


def write_trajectory_csv(trajectory: Trajectory, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=RECORD_FIELDS)
        writer.writeheader()
        writer.writerows(trajectory.to_records())
    return path


def read_trajectory_csv(path: Path) -> Trajectory:
    df = pd.read_csv(path)
    missing = [col for col in RECORD_FIELDS if col not in df.columns and col != "dcurvature_ds"]
    if missing:
        raise ValueError(f"Trajectory file {path} is missing columns: {missing}")
    records = df.to_dict(orient="records")
    return Trajectory.from_records(records)
