from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot telemetry captured from a simulated tracking run."
    )
    parser.add_argument("logfile", type=Path, help="Path to a tracking CSV log")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional path to save the figure instead of displaying it.",
    )
    return parser


def plot_tracking_telemetry(df: pd.DataFrame, output: Path | None) -> None:
    time = df["time_s"].to_numpy()

    fig = plt.figure(figsize=(12, 12))
    grid = fig.add_gridspec(4, 2)
    ax_path = fig.add_subplot(grid[:2, 0])
    ax_err = fig.add_subplot(grid[0, 1])
    ax_head = fig.add_subplot(grid[1, 1], sharex=ax_err)
    ax_lin = fig.add_subplot(grid[2, :])
    ax_ang = fig.add_subplot(grid[3, :], sharex=ax_lin)

    ax_path.plot(df["ref_x"], df["ref_y"], linestyle="--", label="Reference")
    ax_path.plot(df["veh_x"], df["veh_y"], label="Robot")
    ax_path.set_xlabel("x (m)")
    ax_path.set_ylabel("y (m)")
    ax_path.set_aspect("equal", adjustable="datalim")
    ax_path.legend(loc="best", fontsize="small")
    ax_path.grid(True, linestyle=":")

    ax_err.plot(time, df["err_longitudinal"], label="Longitudinal")
    ax_err.plot(time, df["err_lateral"], label="Lateral")
    ax_err.set_ylabel("Error (m)")
    ax_err.legend(loc="upper right", fontsize="small")
    ax_err.grid(True, linestyle=":")

    ax_head.plot(time, np.rad2deg(df["err_heading"].to_numpy()), label="Heading error")
    ax_head.set_ylabel("Heading error (deg)")
    ax_head.grid(True, linestyle=":")

    ax_lin.plot(time, df["veh_velocity"], label="Robot")
    ax_lin.plot(time, df["ref_velocity"], linestyle="--", label="Reference")
    ax_lin.plot(time, df["cmd_linear"], linestyle=":", label="Command")
    ax_lin.set_ylabel("Linear velocity (m/s)")
    ax_lin.legend(loc="upper right", fontsize="small")
    ax_lin.grid(True, linestyle=":")

    ax_ang.plot(time, df["veh_angular_velocity"], label="Robot")
    ax_ang.plot(time, df["ref_angular_velocity"], linestyle="--", label="Reference")
    ax_ang.plot(time, df["cmd_angular"], linestyle=":", label="Command")
    ax_ang.set_ylabel("Angular velocity (rad/s)")
    ax_ang.set_xlabel("Time (s)")
    ax_ang.legend(loc="upper right", fontsize="small")
    ax_ang.grid(True, linestyle=":")

    fig.tight_layout()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=200)
    else:
        plt.show()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.logfile.exists():
        raise SystemExit(f"Telemetry log not found: {args.logfile}")

    df = pd.read_csv(args.logfile)
    missing = [col for col in ("veh_x", "ref_x", "cmd_linear") if col not in df]
    if missing:
        raise SystemExit(f"Log is missing expected columns: {missing}")

    plot_tracking_telemetry(df, args.output)


if __name__ == "__main__":
    main()
