"""Cardio classifiers: open/close counters, alternation and the burpee cycle."""

import pytest

from conftest import bend, make_frame


def jack_frame(arm_angle, ankle_spread):
    left_shoulder, left_hip = (0.6, 0.3), (0.6, 0.55)
    right_shoulder, right_hip = (0.4, 0.3), (0.4, 0.55)
    return make_frame({
        11: left_shoulder,
        12: right_shoulder,
        23: left_hip,
        24: right_hip,
        15: bend(left_hip, left_shoulder, arm_angle, length=0.25, sign=-1),
        16: bend(right_hip, right_shoulder, arm_angle, length=0.25, sign=1),
        27: (0.5 + ankle_spread / 2, 0.9),
        28: (0.5 - ankle_spread / 2, 0.9),
    })


def knees_frame(left_up=False, right_up=False):
    return make_frame({
        25: (0.57, 0.5 if left_up else 0.72),
        26: (0.43, 0.5 if right_up else 0.72),
    })


BURPEE_STAND = {11: (0.5, 0.2), 23: (0.5, 0.5), 25: (0.5, 0.7), 27: (0.5, 0.9)}
BURPEE_SQUAT = {11: (0.6, 0.4), 23: (0.5, 0.6), 25: (0.65, 0.6), 27: (0.65, 0.8)}
BURPEE_PLANK = {11: (0.3, 0.65), 23: (0.55, 0.65), 25: (0.7, 0.65), 27: (0.85, 0.65)}


def run(engine, exercise, frames):
    engine.switch_exercise(exercise)
    for frame in frames:
        engine.on_frame(frame)
    return engine.state


class TestJumpingJack:
    def test_open_close_counts_once(self, engine):
        state = run(engine, "JUMPING_JACK", [
            jack_frame(20, 0.05),
            jack_frame(160, 0.3),
            jack_frame(160, 0.3),
            jack_frame(20, 0.05),
            jack_frame(20, 0.05),
        ])
        assert state.rep_counter == 1
        assert state.stage == "DOWN"

    def test_arms_without_legs_do_not_count(self, engine):
        state = run(engine, "JUMPING_JACK", [
            jack_frame(20, 0.05),
            jack_frame(160, 0.05),
            jack_frame(20, 0.05),
        ])
        assert state.rep_counter == 0


class TestHighKnees:
    def test_alternating_knees(self, engine):
        state = run(engine, "HIGH_KNEES", [
            knees_frame(left_up=True),
            knees_frame(left_up=True),
            knees_frame(right_up=True),
        ])
        assert state.rep_counter == 2
        assert state.stage == "RIGHT"

    def test_rest_rearms_both_sides(self, engine):
        run(engine, "HIGH_KNEES", [knees_frame(left_up=True), knees_frame()])
        assert engine.state.stage == "READY"
        assert engine.state.feedback_message == "KNEES HIGHER!"

        engine.on_frame(knees_frame(left_up=True))
        assert engine.state.rep_counter == 2
        assert engine.state.feedback_message is None


class TestMountainClimber:
    def test_counts_while_warning_about_body_line(self, engine):
        hip, knee = (0.57, 0.55), (0.57, 0.72)
        driven = make_frame({27: bend(hip, knee, 60, length=0.18, sign=-1), 11: (0.57, 0.3)})
        state = run(engine, "MOUNTAIN_CLIMBER", [driven])
        assert state.rep_counter == 1
        assert state.stage == "LEFT"
        assert state.feedback_message == "KEEP BODY STRAIGHT!"

    def test_missing_right_hip_falls_back_to_guidance(self, engine):
        engine.switch_exercise("MOUNTAIN_CLIMBER")
        frame = make_frame()
        frame[24] = None
        engine.on_frame(frame)
        assert engine.state.feedback_message == "Full body must be visible, side view!"
        assert engine.state.rep_counter == 0


class TestBurpee:
    def test_full_cycle(self, engine):
        engine.switch_exercise("BURPEE")
        stages = []
        for points in (BURPEE_STAND, BURPEE_SQUAT, BURPEE_PLANK, BURPEE_SQUAT, BURPEE_STAND):
            stages.append(engine.on_frame(make_frame(points)).stage)

        assert stages == ["UP", "SQUAT", "PLANK", "SQUAT", "STAND"]
        assert engine.state.rep_counter == 1

    @pytest.mark.parametrize(
        "sequence",
        [
            (BURPEE_STAND, BURPEE_SQUAT, BURPEE_STAND),
            (BURPEE_STAND, BURPEE_PLANK, BURPEE_STAND),
            (BURPEE_SQUAT, BURPEE_PLANK, BURPEE_STAND),
        ],
    )
    def test_partial_cycles_do_not_count(self, engine, sequence):
        state = run(engine, "BURPEE", [make_frame(points) for points in sequence])
        assert state.rep_counter == 0


class TestStepCounter:
    def test_alternating_feet(self, engine):
        state = run(engine, "STEP_COUNTER", [
            make_frame({27: (0.57, 0.9), 28: (0.43, 0.85)}),
            make_frame({27: (0.57, 0.9), 28: (0.43, 0.85)}),
            make_frame({27: (0.57, 0.85), 28: (0.43, 0.9)}),
        ])
        assert state.rep_counter == 2
        assert state.stage == "STEP"

    def test_feet_hidden(self, engine):
        state = run(engine, "STEP_COUNTER", [make_frame(hidden=(28,))])
        assert state.feedback_message == "Feet must be visible!"
