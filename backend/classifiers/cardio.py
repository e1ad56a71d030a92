"""Cardio exercises: open/close counters, alternation trackers and the burpee cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kinematics import PoseLandmark as P, calculate_angle
from session import ExerciseId, SessionState

from .base import ExerciseClassifier, Landmarks, PhaseState
from .feedback import FeedbackQueue

LEFT = "LEFT"
RIGHT = "RIGHT"


@dataclass
class AlternationPhase(PhaseState):
    """Last side that scored; a side can only score again after the other one did
    or after both sides returned to rest."""

    last_side: Optional[str] = None


class JumpingJackClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.JUMPING_JACK
    initial_stage = "DOWN"
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_WRIST, P.RIGHT_WRIST, P.LEFT_HIP,
        P.RIGHT_HIP, P.LEFT_ANKLE, P.RIGHT_ANKLE,
    )
    visibility_message = "Stand facing camera, full body visible!"

    ARMS_UP = 140
    ARMS_DOWN = 50
    LEGS_APART = 0.15
    LEGS_TOGETHER = 0.08

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_arm = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_SHOULDER], lm[P.LEFT_WRIST])
        right_arm = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_SHOULDER], lm[P.RIGHT_WRIST])
        leg_spread = abs(lm[P.LEFT_ANKLE].x - lm[P.RIGHT_ANKLE].x)

        arms_up = left_arm > self.ARMS_UP and right_arm > self.ARMS_UP
        arms_down = left_arm < self.ARMS_DOWN and right_arm < self.ARMS_DOWN
        is_open = arms_up and leg_spread > self.LEGS_APART
        is_closed = arms_down and leg_spread < self.LEGS_TOGETHER

        if is_open and state.stage == "DOWN":
            state.stage = "UP"
        elif is_closed and state.stage == "UP":
            state.stage = "DOWN"
            state.increment()

        state.hide_feedback()


class HighKneesClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.HIGH_KNEES
    initial_stage = "UP"
    required_landmarks = (P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE, P.RIGHT_KNEE)

    KNEE_ABOVE_HIP = 0.02

    def new_phase(self) -> AlternationPhase:
        return AlternationPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: AlternationPhase = self.phase
        hip_y = (lm[P.LEFT_HIP].y + lm[P.RIGHT_HIP].y) / 2
        left_high = lm[P.LEFT_KNEE].y < hip_y - self.KNEE_ABOVE_HIP
        right_high = lm[P.RIGHT_KNEE].y < hip_y - self.KNEE_ABOVE_HIP

        if left_high and phase.last_side != LEFT:
            phase.last_side = LEFT
            state.increment()
            state.stage = LEFT
        elif right_high and phase.last_side != RIGHT:
            phase.last_side = RIGHT
            state.increment()
            state.stage = RIGHT
        elif not left_high and not right_high:
            phase.last_side = None
            state.stage = "READY"

        feedback = FeedbackQueue()
        if not left_high and not right_high:
            feedback.coaching("KNEES HIGHER!")
        self.apply_feedback(state, feedback)


class MountainClimberClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.MOUNTAIN_CLIMBER
    initial_stage = "UP"
    required_landmarks = (
        P.LEFT_SHOULDER, P.LEFT_HIP, P.LEFT_KNEE, P.RIGHT_KNEE, P.LEFT_ANKLE,
        P.RIGHT_ANKLE,
    )
    tracked_landmarks = (P.RIGHT_HIP,)
    visibility_message = "Full body must be visible, side view!"

    KNEE_DRIVEN = 90
    BODY_STRAIGHT = 140

    def new_phase(self) -> AlternationPhase:
        return AlternationPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: AlternationPhase = self.phase
        body = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP], lm[P.LEFT_ANKLE])
        left_knee = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE])
        right_knee = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_KNEE], lm[P.RIGHT_ANKLE])

        left_driven = left_knee < self.KNEE_DRIVEN
        right_driven = right_knee < self.KNEE_DRIVEN

        if left_driven and phase.last_side != LEFT:
            phase.last_side = LEFT
            state.increment()
            state.stage = LEFT
        elif right_driven and phase.last_side != RIGHT:
            phase.last_side = RIGHT
            state.increment()
            state.stage = RIGHT
        elif not left_driven and not right_driven:
            phase.last_side = None

        feedback = FeedbackQueue()
        if body < self.BODY_STRAIGHT:
            feedback.safety("KEEP BODY STRAIGHT!")
        self.apply_feedback(state, feedback)


BURPEE_STANDING = "STANDING"
BURPEE_SQUAT_DOWN = "SQUAT_DOWN"
BURPEE_PLANK = "PLANK"
BURPEE_SQUAT_UP = "SQUAT_UP"


@dataclass
class BurpeePhase(PhaseState):
    cursor: str = BURPEE_STANDING


class BurpeeClassifier(ExerciseClassifier):
    """STANDING -> SQUAT_DOWN -> PLANK -> SQUAT_UP -> STANDING counts one rep."""

    exercise_id = ExerciseId.BURPEE
    initial_stage = "UP"
    required_landmarks = (P.LEFT_SHOULDER, P.LEFT_HIP, P.LEFT_KNEE, P.LEFT_ANKLE)

    STANDING_ANGLE = 150
    SQUAT_KNEE = 110
    SQUAT_HIP = 120
    PLANK_HIP = 150
    PLANK_HIP_Y = 0.6

    def new_phase(self) -> BurpeePhase:
        return BurpeePhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: BurpeePhase = self.phase
        hip = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP], lm[P.LEFT_KNEE])
        knee = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE])

        is_standing = hip > self.STANDING_ANGLE and knee > self.STANDING_ANGLE
        is_squat = knee < self.SQUAT_KNEE and hip < self.SQUAT_HIP
        is_plank = hip > self.PLANK_HIP and lm[P.LEFT_HIP].y > self.PLANK_HIP_Y

        if phase.cursor == BURPEE_STANDING and is_squat:
            phase.cursor = BURPEE_SQUAT_DOWN
            state.stage = "SQUAT"
        elif phase.cursor == BURPEE_SQUAT_DOWN and is_plank:
            phase.cursor = BURPEE_PLANK
            state.stage = "PLANK"
        elif phase.cursor == BURPEE_PLANK and is_squat:
            phase.cursor = BURPEE_SQUAT_UP
            state.stage = "SQUAT"
        elif phase.cursor == BURPEE_SQUAT_UP and is_standing:
            phase.cursor = BURPEE_STANDING
            state.stage = "STAND"
            state.increment()

        state.hide_feedback()


class StepCounterClassifier(ExerciseClassifier):
    """Counts a step each time the raised foot swaps sides."""

    exercise_id = ExerciseId.STEP_COUNTER
    initial_stage = "READY"
    required_landmarks = (P.LEFT_ANKLE, P.RIGHT_ANKLE)
    visibility_message = "Feet must be visible!"

    STEP_OFFSET = 0.04

    def new_phase(self) -> AlternationPhase:
        return AlternationPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: AlternationPhase = self.phase
        diff = lm[P.LEFT_ANKLE].y - lm[P.RIGHT_ANKLE].y

        if diff > self.STEP_OFFSET and phase.last_side != RIGHT:
            phase.last_side = RIGHT
            state.increment()
            state.stage = "STEP"
        elif diff < -self.STEP_OFFSET and phase.last_side != LEFT:
            phase.last_side = LEFT
            state.increment()
            state.stage = "STEP"

        state.hide_feedback()
