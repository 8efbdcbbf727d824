from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from ..geometry import PathSample, Pose2d

MONOTONIC_TOL = 1e-9


@dataclass(frozen=True)
class TimedState:
    """Path sample stamped with time, travelled distance, speed and acceleration.

    ``velocity`` and ``acceleration`` are signed: negative velocity means the
    robot drives backwards. ``acceleration`` is the constant acceleration of
    the segment that ends at this state (the first state repeats the first
    segment's value).
    """

    sample: PathSample
    distance: float
    t: float
    velocity: float
    acceleration: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "distance", float(self.distance))
        object.__setattr__(self, "t", float(self.t))
        object.__setattr__(self, "velocity", float(self.velocity))
        object.__setattr__(self, "acceleration", float(self.acceleration))

    @property
    def pose(self) -> Pose2d:
        return self.sample.pose

    @property
    def curvature(self) -> float:
        return self.sample.curvature

    @property
    def angular_velocity(self) -> float:
        return self.velocity * self.sample.curvature

    def to_record(self) -> dict[str, float]:
        pose = self.sample.pose
        return {
            "time": self.t,
            "distance": self.distance,
            "velocity": self.velocity,
            "acceleration": self.acceleration,
            "x": pose.x,
            "y": pose.y,
            "heading": pose.heading,
            "curvature": self.sample.curvature,
            "dcurvature_ds": self.sample.dcurvature_ds,
        }

    @classmethod
    def from_record(cls, record: dict[str, float]) -> TimedState:
        return cls(
            sample=PathSample(
                pose=Pose2d(record["x"], record["y"], record["heading"]),
                curvature=record["curvature"],
                dcurvature_ds=record.get("dcurvature_ds", 0.0),
            ),
            distance=record["distance"],
            t=record["time"],
            velocity=record["velocity"],
            acceleration=record["acceleration"],
        )


def _interpolate_segment(lower: TimedState, upper: TimedState, t: float) -> TimedState:
    duration = upper.t - lower.t
    if duration <= 0.0:
        return upper
    dt = max(0.0, min(duration, t - lower.t))
    alpha = dt / duration

    # Speed is linear in time inside a segment, so distance is the area of
    # the speed trapezoid up to ``dt``.
    speed_lower = abs(lower.velocity)
    speed_upper = abs(upper.velocity)
    travelled = dt * (speed_lower + 0.5 * (speed_upper - speed_lower) * alpha)

    span = upper.distance - lower.distance
    fraction = travelled / span if span > 0.0 else alpha
    return TimedState(
        sample=lower.sample.interpolate(upper.sample, fraction),
        distance=lower.distance + min(travelled, span),
        t=lower.t + dt,
        velocity=lower.velocity + alpha * (upper.velocity - lower.velocity),
        acceleration=upper.acceleration,
    )


class Trajectory:
    """Immutable, time-ordered sequence of timed states starting at t = 0."""

    def __init__(self, states: Iterable[TimedState], reversed: bool = False):
        states = tuple(states)
        if not states:
            raise ValueError("Trajectory must contain at least one state.")
        if abs(states[0].t) > MONOTONIC_TOL:
            raise ValueError(f"Trajectory must start at t=0; first state is at {states[0].t}.")
        if any(
            later.t < earlier.t - MONOTONIC_TOL
            or later.distance < earlier.distance - MONOTONIC_TOL
            for earlier, later in zip(states, states[1:])
        ):
            raise ValueError("Trajectory times and distances must be non-decreasing.")

        self._states = states
        self._reversed = bool(reversed)
        times = np.array([state.t for state in states], dtype=float)
        times.setflags(write=False)
        self._times = times

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[TimedState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> TimedState:
        return self._states[index]

    def __repr__(self) -> str:
        return (
            f"Trajectory(states={len(self)}, duration={self.duration:.3f}s, "
            f"length={self.length:.3f}m, reversed={self._reversed})"
        )

    @property
    def states(self) -> tuple[TimedState, ...]:
        return self._states

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def reversed(self) -> bool:
        return self._reversed

    @property
    def first_state(self) -> TimedState:
        return self._states[0]

    @property
    def last_state(self) -> TimedState:
        return self._states[-1]

    @property
    def duration(self) -> float:
        return self._states[-1].t

    @property
    def length(self) -> float:
        return self._states[-1].distance - self._states[0].distance

    def _bracket(self, t: float) -> tuple[int, int]:
        upper = int(np.searchsorted(self._times, t, side="right"))
        upper = max(1, min(upper, len(self._states) - 1))
        return upper - 1, upper

    def sample(self, t: float) -> TimedState:
        """State at time ``t``, clamped to the trajectory's time span."""
        if len(self._states) == 1 or t <= 0.0:
            return self._states[0]
        if t >= self.duration:
            return self._states[-1]
        lower, upper = self._bracket(t)
        return _interpolate_segment(self._states[lower], self._states[upper], t)

    def index_at(self, t: float) -> int:
        """Index of the last stored state at or before ``t``."""
        if len(self._states) == 1:
            return 0
        if t >= self.duration:
            return len(self._states) - 1
        return self._bracket(t)[0]

    def states_between(self, t_start: float, t_end: float) -> tuple[TimedState, ...]:
        """States covering [t_start, t_end], with interpolated end points."""
        if t_end < t_start:
            raise ValueError("t_end must not precede t_start.")
        t_start = max(0.0, min(t_start, self.duration))
        t_end = max(0.0, min(t_end, self.duration))
        first = self.sample(t_start)
        last = self.sample(t_end)
        inner = [state for state in self._states if t_start < state.t < t_end]
        if t_end == t_start:
            return (first,)
        return (first, *inner, last)

    def to_records(self) -> list[dict[str, float]]:
        return [state.to_record() for state in self._states]

    @classmethod
    def from_records(
        cls, records: Sequence[dict[str, float]], reversed: bool | None = None
    ) -> Trajectory:
        states = [TimedState.from_record(record) for record in records]
        if reversed is None:
            reversed = any(state.velocity < 0.0 for state in states)
        return cls(states, reversed=reversed)


class TrajectoryIterator:
    """Forward-only time cursor over a trajectory."""

    def __init__(self, trajectory: Trajectory):
        self._trajectory = trajectory
        self._time = 0.0
        self._current = trajectory.sample(0.0)

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def time(self) -> float:
        return self._time

    @property
    def is_done(self) -> bool:
        return self._time >= self._trajectory.duration

    @property
    def progress(self) -> float:
        duration = self._trajectory.duration
        return 1.0 if duration <= 0.0 else self._time / duration

    @property
    def current_state(self) -> TimedState:
        return self._current

    @property
    def current_index(self) -> int:
        return self._trajectory.index_at(self._time)

    def advance(self, dt: float) -> TimedState:
        if dt < 0.0 or math.isnan(dt):
            raise ValueError(f"Iterator can only move forward; received dt={dt}.")
        self._time = min(self._time + dt, self._trajectory.duration)
        self._current = self._trajectory.sample(self._time)
        return self._current
