from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from diffdrive_trajectory.timing import read_trajectory_csv, trajectory_to_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot the geometry and velocity profile of a generated trajectory."
    )
    parser.add_argument("trajectory", type=Path, help="Path to a trajectory CSV file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional path to save the figure instead of displaying it.",
    )
    return parser


def plot_trajectory(df: pd.DataFrame, output: Path | None) -> None:
    fig, axes = plt.subplots(4, 1, figsize=(10, 13))

    axes[0].plot(df["x"], df["y"], marker=".", markersize=2)
    axes[0].set_xlabel("x (m)")
    axes[0].set_ylabel("y (m)")
    axes[0].set_aspect("equal", adjustable="datalim")
    axes[0].grid(True, linestyle=":")

    axes[1].plot(df["distance"], df["velocity"], label="Velocity (m/s)")
    axes[1].plot(df["distance"], df["acceleration"], linestyle="--", label="Acceleration (m/s²)")
    axes[1].set_xlabel("Distance (m)")
    axes[1].legend(loc="upper right", fontsize="small")
    axes[1].grid(True, linestyle=":")

    axes[2].plot(df["time"], df["velocity"])
    axes[2].set_xlabel("Time (s)")
    axes[2].set_ylabel("Velocity (m/s)")
    axes[2].grid(True, linestyle=":")

    axes[3].plot(df["distance"], df["curvature"])
    axes[3].set_xlabel("Distance (m)")
    axes[3].set_ylabel("Curvature (1/m)")
    axes[3].grid(True, linestyle=":")

    fig.tight_layout()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=200)
    else:
        plt.show()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.trajectory.exists():
        raise SystemExit(f"Trajectory file not found: {args.trajectory}")

    trajectory = read_trajectory_csv(args.trajectory)
    print(f"Loaded {trajectory}")
    plot_trajectory(trajectory_to_frame(trajectory), args.output)


if __name__ == "__main__":
    main()
