"""Tests for the geometric feature extractor, rolling window and feedback queue."""

import pytest

from classifiers.feedback import FeedbackQueue
from filters import RollingWindow
from kinematics import (
    Landmark,
    calculate_angle,
    distance,
    landmarks_present,
    landmarks_visible,
    midpoint,
    parse_frame,
    round_half_up,
)

from conftest import bend, make_frame


class TestCalculateAngle:
    def test_right_angle(self):
        assert calculate_angle((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)

    def test_straight_line(self):
        assert calculate_angle((0, 0), (0.5, 0.5), (1, 1)) == pytest.approx(180.0)

    def test_reflex_angles_fold_back_into_range(self):
        # 270 degrees measured one way is 90 the other way
        assert calculate_angle((0, -1), (0, 0), (-1, 0)) == pytest.approx(90.0)

    def test_symmetric(self):
        a, b, c = (0.2, 0.1), (0.5, 0.5), (0.9, 0.3)
        assert calculate_angle(a, b, c) == pytest.approx(calculate_angle(c, b, a))

    def test_degenerate_ray_does_not_raise(self):
        angle = calculate_angle((0.5, 0.5), (0.5, 0.5), (0.7, 0.5))
        assert 0.0 <= angle <= 180.0

    def test_accepts_landmarks_and_dicts(self):
        a = Landmark(x=1, y=0, visibility=1)
        c = {"x": 0, "y": 1}
        assert calculate_angle(a, (0, 0), c) == pytest.approx(90.0)

    @pytest.mark.parametrize("angle", [30, 90, 135, 170])
    def test_bend_helper_builds_requested_angle(self, angle):
        a, b = (0.5, 0.3), (0.5, 0.5)
        assert calculate_angle(a, b, bend(a, b, angle)) == pytest.approx(angle)


class TestGeometry:
    def test_distance(self):
        assert distance((0, 0), (0.3, 0.4)) == pytest.approx(0.5)

    def test_midpoint(self):
        mid = midpoint(Landmark(0.2, 0.4), Landmark(0.4, 0.8))
        assert mid.x == pytest.approx(0.3)
        assert mid.y == pytest.approx(0.6)

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (2.49, 2), (-2.5, -2), (0.5, 1), (179.6, 180)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestParseFrame:
    def test_none_stays_none(self):
        assert parse_frame(None) is None

    def test_dicts_become_landmarks(self):
        frame = parse_frame(make_frame())
        assert len(frame) == 33
        assert isinstance(frame[0], Landmark)
        assert frame[0].visibility == 1.0

    def test_missing_visibility_defaults_to_zero(self):
        frame = parse_frame([{"x": 0.1, "y": 0.2}, None])
        assert frame[0].visibility == 0.0
        assert frame[1] is None


class TestVisibilityGate:
    def test_all_visible(self):
        assert landmarks_visible(parse_frame(make_frame()), (11, 23, 25))

    def test_empty_frame(self):
        assert not landmarks_visible([], (11,))

    def test_short_frame(self):
        assert not landmarks_visible(parse_frame(make_frame())[:20], (11, 23))

    def test_low_visibility(self):
        frame = parse_frame(make_frame(hidden=(25,)))
        assert not landmarks_visible(frame, (11, 23, 25))
        assert landmarks_visible(frame, (11, 23))

    def test_threshold_is_inclusive(self):
        frame = parse_frame(make_frame(visibility=0.5))
        assert landmarks_visible(frame, (11,))

    def test_missing_entry(self):
        frame = parse_frame(make_frame())
        frame[11] = None
        assert not landmarks_visible(frame, (11,))

    def test_present_ignores_visibility(self):
        frame = parse_frame(make_frame(hidden=(13,)))
        assert landmarks_present(frame, (13, 14))
        frame[14] = None
        assert not landmarks_present(frame, (13, 14))
        assert not landmarks_present(frame[:10], (13,))
        assert landmarks_present(frame, ())


class TestRollingWindow:
    def test_evicts_oldest(self):
        window = RollingWindow(3)
        for value in range(5):
            window.push(value)
        assert list(window) == [2, 3, 4]
        assert window.is_full

    def test_as_array(self):
        window = RollingWindow(4)
        window.push((0.1, 0.2))
        window.push((0.3, 0.4))
        assert window.as_array().shape == (2, 2)

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            RollingWindow(0)


class TestFeedbackQueue:
    def test_empty_resolves_to_none(self):
        assert FeedbackQueue().resolve() is None

    def test_safety_preempts_coaching(self):
        feedback = FeedbackQueue()
        feedback.coaching("GO LOWER!")
        feedback.safety("PUSH KNEES OUT!")
        assert feedback.has_safety
        assert feedback.resolve() == "PUSH KNEES OUT!"

    def test_first_message_wins_within_severity(self):
        feedback = FeedbackQueue()
        feedback.info("Great running form!")
        feedback.coaching("HEAD FORWARD - look ahead!")
        feedback.coaching("ARM SWING UNEVEN!")
        assert feedback.resolve() == "HEAD FORWARD - look ahead!"
