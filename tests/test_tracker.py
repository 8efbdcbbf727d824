"""Tests for the tracker state machine and the Ramsete feedback law."""

from __future__ import annotations

import math

import pytest

from diffdrive_trajectory.errors import TrackerError, TrackerMisuseError
from diffdrive_trajectory.geometry import PathSample, Pose2d
from diffdrive_trajectory.timing import (
    CentripetalAccelerationConstraint,
    TimedState,
    Trajectory,
    TrajectoryConfig,
    TrajectoryGenerator,
)
from diffdrive_trajectory.tracking import (
    FeedForwardTracker,
    PoseError,
    RamseteConfig,
    RamseteTracker,
    TrackerConfig,
    TrackerState,
)


def _constant_speed_line(speed: float, duration: float = 10.0) -> Trajectory:
    """Straight line along x driven at constant signed ``speed``; heading stays 0."""
    length = abs(speed) * duration
    end_x = math.copysign(length, speed)
    return Trajectory(
        [
            TimedState(PathSample(Pose2d(0.0, 0.0, 0.0)), 0.0, 0.0, speed, 0.0),
            TimedState(PathSample(Pose2d(end_x, 0.0, 0.0)), length, duration, speed, 0.0),
        ],
        reversed=speed < 0.0,
    )


@pytest.fixture(scope="module")
def curved_trajectory() -> Trajectory:
    config = TrajectoryConfig(max_velocity=1.5, max_acceleration=1.0)
    return TrajectoryGenerator(config, [CentripetalAccelerationConstraint(1.0)]).generate(
        [Pose2d(), Pose2d(3.0, 2.0, math.radians(60.0)), Pose2d(5.0, 4.0, 0.0)]
    )


@pytest.mark.parametrize("tracker_cls", [RamseteTracker, FeedForwardTracker])
def test_zero_error_reproduces_feed_forward(tracker_cls, curved_trajectory: Trajectory) -> None:
    config = TrackerConfig(period_s=0.02)
    tracker = tracker_cls(config)
    tracker.reset(curved_trajectory)

    t = 0.0
    while not tracker.is_finished:
        t = min(t + config.period_s, curved_trajectory.duration)
        expected = curved_trajectory.sample(t)
        command = tracker.next_state(expected.pose)

        assert tracker.reference_point.state.t == pytest.approx(t, abs=1e-12)
        assert command.linear_velocity == pytest.approx(expected.velocity, abs=1e-9)
        assert command.angular_velocity == pytest.approx(expected.angular_velocity, abs=1e-9)


def test_ticks_to_finish_match_duration(curved_trajectory: Trajectory) -> None:
    tracker = RamseteTracker(TrackerConfig(period_s=0.02))
    tracker.reset(curved_trajectory)

    ticks = 0
    while not tracker.is_finished:
        tracker.next_state(tracker.reference_point.state.pose)
        ticks += 1

    expected = math.ceil(curved_trajectory.duration / 0.02)
    assert abs(ticks - expected) <= 1
    assert tracker.iterator.is_done


def test_next_state_before_reset_is_rejected() -> None:
    tracker = RamseteTracker()
    assert tracker.state is TrackerState.UNINITIALIZED
    with pytest.raises(TrackerMisuseError) as excinfo:
        tracker.next_state(Pose2d())
    assert excinfo.value.error is TrackerError.NOT_STARTED


def test_next_state_after_finish_is_rejected_until_reset() -> None:
    trajectory = _constant_speed_line(1.0, duration=0.1)
    tracker = RamseteTracker(TrackerConfig(period_s=0.05))
    tracker.reset(trajectory)
    tracker.next_state(Pose2d())
    tracker.next_state(Pose2d(0.05, 0.0, 0.0))
    assert tracker.state is TrackerState.FINISHED

    with pytest.raises(TrackerMisuseError) as excinfo:
        tracker.next_state(Pose2d(0.1, 0.0, 0.0))
    assert excinfo.value.error is TrackerError.FINISHED

    tracker.reset(trajectory)
    assert tracker.state is TrackerState.TRACKING
    assert tracker.iterator.time == 0.0
    tracker.next_state(Pose2d())


def test_zero_duration_trajectory_finishes_on_reset() -> None:
    trajectory = Trajectory([TimedState(PathSample(Pose2d(1.0, 2.0, 0.5)), 0.0, 0.0, 0.0, 0.0)])
    tracker = RamseteTracker()
    tracker.reset(trajectory)

    assert tracker.is_finished
    assert tracker.reference_point.state is trajectory.first_state
    with pytest.raises(TrackerMisuseError):
        tracker.next_state(Pose2d())


def test_completion_tolerance_holds_final_reference() -> None:
    trajectory = _constant_speed_line(1.0, duration=0.1)
    tracker = RamseteTracker(
        TrackerConfig(period_s=0.05, completion_position_tolerance=0.05)
    )
    tracker.reset(trajectory)

    far_behind = Pose2d(-1.0, 0.0, 0.0)
    for _ in range(5):
        command = tracker.next_state(far_behind)
        assert tracker.state is TrackerState.TRACKING
    assert tracker.iterator.is_done
    assert tracker.reference_point.state is trajectory.last_state
    assert command.linear_velocity > trajectory.last_state.velocity

    tracker.next_state(trajectory.last_state.pose)
    assert tracker.is_finished


def test_ramsete_pushes_robot_towards_reference() -> None:
    trajectory = _constant_speed_line(1.0)
    ff = FeedForwardTracker()
    ff.reset(trajectory)
    reference = ff.next_state(Pose2d(0.02, 0.0, 0.0))

    def first_command(pose: Pose2d):
        tracker = RamseteTracker()
        tracker.reset(trajectory)
        return tracker.next_state(pose)

    behind = first_command(Pose2d(-0.5, 0.0, 0.0))
    assert behind.linear_velocity > reference.linear_velocity

    ahead = first_command(Pose2d(0.5, 0.0, 0.0))
    assert ahead.linear_velocity < reference.linear_velocity

    # Reference is to the robot's left: turn left.
    right_of_path = first_command(Pose2d(0.02, -0.3, 0.0))
    assert right_of_path.angular_velocity > 0.0

    # Robot yawed clockwise of the path: steer back counter-clockwise.
    yawed = first_command(Pose2d(0.02, 0.0, -0.2))
    assert yawed.angular_velocity > 0.0


def test_ramsete_backs_up_faster_when_lagging_in_reverse() -> None:
    trajectory = _constant_speed_line(-1.0)
    tracker = RamseteTracker()
    tracker.reset(trajectory)

    command = tracker.next_state(Pose2d(0.5, 0.0, 0.0))
    assert command.linear_velocity < -1.0


def test_reference_point_and_error_are_published(curved_trajectory: Trajectory) -> None:
    tracker = RamseteTracker(TrackerConfig(period_s=0.1))
    tracker.reset(curved_trajectory)
    assert tracker.reference_point.index == 0
    assert tracker.last_error is None

    robot = Pose2d(0.1, -0.05, 0.02)
    for _ in range(7):
        tracker.next_state(robot)

    reference = tracker.reference_point
    assert reference.state.t == pytest.approx(0.7)
    assert reference.index == curved_trajectory.index_at(tracker.iterator.time)
    assert tracker.last_error == PoseError.between(robot, reference.state.pose)


def test_pose_error_is_expressed_in_robot_frame() -> None:
    error = PoseError.between(Pose2d(0.0, 0.0, math.pi / 2.0), Pose2d(0.0, 1.0, math.pi / 2.0))
    assert error.longitudinal == pytest.approx(1.0)
    assert error.lateral == pytest.approx(0.0, abs=1e-12)
    assert error.heading == pytest.approx(0.0, abs=1e-12)
    assert error.distance == pytest.approx(1.0)


def test_tracker_config_validation() -> None:
    with pytest.raises(ValueError):
        TrackerConfig(period_s=0.0)
    with pytest.raises(ValueError):
        TrackerConfig(completion_position_tolerance=-0.1)
    with pytest.raises(ValueError):
        RamseteConfig(beta=0.0)
    with pytest.raises(ValueError):
        RamseteConfig(zeta=1.0)
