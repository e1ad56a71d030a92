"""
Analysis modes. These do not count cycles: ``rep_counter`` carries a live
reading (angle, score or height) tagged by ``counter_kind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from filters import RollingWindow
from kinematics import PoseLandmark as P, calculate_angle, midpoint, round_half_up
from session import CounterKind, ExerciseId, SessionState

from .base import ExerciseClassifier, Landmarks, PhaseState
from .feedback import FeedbackQueue


def score_band(score: int, top: str, middle: str, bottom: str) -> str:
    if score > 80:
        return top
    if score > 50:
        return middle
    return bottom


class KneeAngleClassifier(ExerciseClassifier):
    """Live readout: ``stage`` shows the left knee, ``rep_counter`` the right knee."""

    exercise_id = ExerciseId.KNEE_ANGLE
    initial_stage = "0°"
    counter_kind = CounterKind.MEASUREMENT
    required_landmarks = (
        P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE, P.RIGHT_KNEE, P.LEFT_ANKLE, P.RIGHT_ANKLE,
    )
    visibility_message = "Legs must be fully visible!"

    DEEP_BEND = 90
    STRAIGHT = 170

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left = round_half_up(calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE]))
        right = round_half_up(calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_KNEE], lm[P.RIGHT_ANKLE]))

        state.stage = f"L:{left}°"
        state.rep_counter = right
        state.extra_data = {
            "leftKnee": left,
            "rightKnee": right,
            "label": f"Left: {left}° | Right: {right}°",
        }

        feedback = FeedbackQueue()
        if left < self.DEEP_BEND or right < self.DEEP_BEND:
            feedback.info("Deep bend detected")
        elif left > self.STRAIGHT and right > self.STRAIGHT:
            feedback.info("Legs straight")
        self.apply_feedback(state, feedback)


@dataclass
class BalancePhase(PhaseState):
    # (x, y, t) of the hip midpoint
    history: RollingWindow = field(default_factory=lambda: RollingWindow(BalanceClassifier.WINDOW))


class BalanceClassifier(ExerciseClassifier):
    """Stability score from horizontal sway of the hip midpoint over ~2 s."""

    exercise_id = ExerciseId.BALANCE
    initial_stage = "READY"
    counter_kind = CounterKind.SCORE
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_ANKLE,
        P.RIGHT_ANKLE,
    )

    WINDOW = 60
    SWAY_SCALE = 2000

    def new_phase(self) -> BalancePhase:
        return BalancePhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: BalancePhase = self.phase
        cog = midpoint(lm[P.LEFT_HIP], lm[P.RIGHT_HIP])
        phase.history.push((cog.x, cog.y, now))

        # population standard deviation of x
        sway = float(np.std(phase.history.as_array()[:, 0]))
        score = self.stability_score(sway)

        state.rep_counter = score
        state.stage = score_band(score, "STABLE", "FAIR", "UNSTABLE")
        state.extra_data = {"score": score, "sway": round(sway * 100, 2)}

        if score > 80:
            state.show_feedback("Excellent balance!")
        elif score > 50:
            state.show_feedback("Try to hold still!")
        else:
            state.show_feedback("Too much sway!")

    @classmethod
    def stability_score(cls, sway: float) -> int:
        return min(100, max(0, round_half_up(100 - sway * cls.SWAY_SCALE)))


@dataclass
class JumpPhase(PhaseState):
    baseline: Optional[float] = None
    max_height: int = 0


class JumpHeightClassifier(ExerciseClassifier):
    """Hip rise above a standing baseline, reported in rough centimetres.

    The first visible frame calibrates the baseline; ``rep_counter`` keeps the
    best height of the session.
    """

    exercise_id = ExerciseId.JUMP_HEIGHT
    initial_stage = "GROUND"
    counter_kind = CounterKind.MEASUREMENT
    required_landmarks = (P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_ANKLE, P.RIGHT_ANKLE)

    CM_PER_UNIT = 300
    AIRBORNE_CM = 5

    def new_phase(self) -> JumpPhase:
        return JumpPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: JumpPhase = self.phase
        hip_y = (lm[P.LEFT_HIP].y + lm[P.RIGHT_HIP].y) / 2

        if phase.baseline is None:
            phase.baseline = hip_y
            state.show_feedback("Stand still to calibrate, then JUMP!")
            return

        jump_cm = round_half_up((phase.baseline - hip_y) * self.CM_PER_UNIT)

        if jump_cm > self.AIRBORNE_CM:
            if jump_cm > phase.max_height:
                phase.max_height = jump_cm
                state.rep_counter = jump_cm
            state.stage = "AIR"
            state.show_feedback(f"{jump_cm} cm!")
        else:
            state.stage = "GROUND"
            if phase.max_height > 0:
                state.show_feedback(f"Best: {phase.max_height} cm. Jump again!")
            else:
                state.hide_feedback()

        state.extra_data = {"currentHeight": jump_cm, "maxHeight": phase.max_height}


class RunningPostureClassifier(ExerciseClassifier):
    """Posture score starting at 100 with a fixed deduction per failed check."""

    exercise_id = ExerciseId.RUNNING_POSTURE
    initial_stage = "READY"
    counter_kind = CounterKind.SCORE
    required_landmarks = (
        P.NOSE, P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE,
        P.RIGHT_KNEE,
    )
    tracked_landmarks = (P.LEFT_ELBOW, P.RIGHT_ELBOW, P.LEFT_WRIST, P.RIGHT_WRIST)

    SPINE_MIN = 150
    ARM_SWING_DIFF = 40
    KNEE_LIFT = 0.03

    HEAD_PENALTY = 20
    ARM_PENALTY = 15
    KNEE_PENALTY = 10

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        spine = calculate_angle(lm[P.NOSE], lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP])
        feedback = FeedbackQueue()
        score = 100

        if spine < self.SPINE_MIN:
            feedback.coaching("HEAD FORWARD - look ahead!")
            score -= self.HEAD_PENALTY

        left_elbow = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_ELBOW], lm[P.LEFT_WRIST])
        right_elbow = calculate_angle(lm[P.RIGHT_SHOULDER], lm[P.RIGHT_ELBOW], lm[P.RIGHT_WRIST])
        if abs(left_elbow - right_elbow) > self.ARM_SWING_DIFF:
            feedback.coaching("ARM SWING UNEVEN!")
            score -= self.ARM_PENALTY

        if abs(lm[P.LEFT_KNEE].y - lm[P.RIGHT_KNEE].y) <= self.KNEE_LIFT:
            feedback.coaching("LIFT KNEES HIGHER!")
            score -= self.KNEE_PENALTY

        score = max(0, score)
        state.rep_counter = score
        state.stage = score_band(score, "GOOD", "FAIR", "POOR")

        if not len(feedback):
            feedback.info("Great running form!")
        self.apply_feedback(state, feedback)
        state.extra_data = {"score": score, "spineAngle": round_half_up(spine)}
