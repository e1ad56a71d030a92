"""Holds and flows: plank timer, yoga pose matching and tai chi smoothness."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from filters import RollingWindow
from kinematics import PoseLandmark as P, calculate_angle, distance, round_half_up
from session import CounterKind, ExerciseId, SessionState

from .base import ExerciseClassifier, Landmarks, PhaseState
from .feedback import FeedbackQueue


@dataclass
class PlankPhase(PhaseState):
    start_time: Optional[float] = None
    duration: int = 0


class PlankClassifier(ExerciseClassifier):
    """Hold timer: ``rep_counter`` and ``stage`` carry whole seconds in good posture.

    Any sag or pike frame drops the timer back to zero; the next good frame
    starts a new hold.
    """

    exercise_id = ExerciseId.PLANK
    initial_stage = "0s"
    counter_kind = CounterKind.DURATION
    required_landmarks = (
        P.LEFT_SHOULDER, P.LEFT_ELBOW, P.LEFT_HIP, P.LEFT_KNEE, P.LEFT_ANKLE,
    )
    visibility_message = "Side view: full body must be visible!"

    SAG_ANGLE = 155
    PIKE_ANGLE = 190

    def new_phase(self) -> PlankPhase:
        return PlankPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: PlankPhase = self.phase
        shoulder, hip, ankle = lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP], lm[P.LEFT_ANKLE]
        body = calculate_angle(shoulder, hip, ankle)
        hip_sag = body < self.SAG_ANGLE
        hip_pike = body > self.PIKE_ANGLE or (hip.y < shoulder.y and hip.y < ankle.y)

        feedback = FeedbackQueue()
        if hip_sag:
            feedback.safety("HIPS TOO LOW! Engage core.")
        elif hip_pike:
            feedback.safety("HIPS TOO HIGH! Flatten your back.")

        if feedback.has_safety:
            phase.start_time = None
            phase.duration = 0
        else:
            if phase.start_time is None:
                phase.start_time = now
            phase.duration = int(math.floor(now - phase.start_time))

        self.apply_feedback(state, feedback)
        state.stage = f"{phase.duration}s"
        state.rep_counter = phase.duration
        state.extra_data = {"duration": phase.duration, "bodyAngle": round_half_up(body)}


POSE_TREE = "Tree Pose 🌳"
POSE_WARRIOR_II = "Warrior II ⚔️"
POSE_T = "T-Pose ✈️"
POSE_NONE = "No Pose"


class YogaClassifier(ExerciseClassifier):
    """Matches the frame against tree, warrior II and T-pose signatures, in that order."""

    exercise_id = ExerciseId.YOGA
    initial_stage = "READY"
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_ELBOW, P.RIGHT_ELBOW, P.LEFT_WRIST,
        P.RIGHT_WRIST, P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE, P.RIGHT_KNEE, P.LEFT_ANKLE,
        P.RIGHT_ANKLE,
    )

    ANKLE_TO_KNEE = 0.08
    ARM_SPREAD = 0.4
    LEG_SPREAD = 0.2
    KNEE_BENT = 120
    ARM_LEVEL_MIN = 70
    ARM_LEVEL_MAX = 120

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_ankle_near_right_knee = distance(lm[P.LEFT_ANKLE], lm[P.RIGHT_KNEE]) < self.ANKLE_TO_KNEE
        right_ankle_near_left_knee = distance(lm[P.RIGHT_ANKLE], lm[P.LEFT_KNEE]) < self.ANKLE_TO_KNEE
        arms_above_head = (
            lm[P.LEFT_WRIST].y < lm[P.LEFT_SHOULDER].y
            and lm[P.RIGHT_WRIST].y < lm[P.RIGHT_SHOULDER].y
        )

        arm_spread = abs(lm[P.LEFT_WRIST].x - lm[P.RIGHT_WRIST].x) > self.ARM_SPREAD
        leg_spread = abs(lm[P.LEFT_ANKLE].x - lm[P.RIGHT_ANKLE].x) > self.LEG_SPREAD
        front_knee_bent = (
            calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE]) < self.KNEE_BENT
            or calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_KNEE], lm[P.RIGHT_ANKLE]) < self.KNEE_BENT
        )

        left_arm = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_SHOULDER], lm[P.LEFT_WRIST])
        right_arm = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_SHOULDER], lm[P.RIGHT_WRIST])
        arms_level = (
            self.ARM_LEVEL_MIN < left_arm < self.ARM_LEVEL_MAX
            and self.ARM_LEVEL_MIN < right_arm < self.ARM_LEVEL_MAX
        )

        feedback = FeedbackQueue()
        if (left_ankle_near_right_knee or right_ankle_near_left_knee) and arms_above_head:
            pose, state.stage = POSE_TREE, "TREE"
            feedback.info("Great Tree Pose! Hold it!")
        elif arm_spread and leg_spread and front_knee_bent:
            pose, state.stage = POSE_WARRIOR_II, "WARRIOR"
            feedback.info("Strong Warrior II!")
        elif arms_level and not leg_spread:
            pose, state.stage = POSE_T, "T-POSE"
        else:
            pose, state.stage = POSE_NONE, "READY"
            feedback.coaching("Try a yoga pose!")

        self.apply_feedback(state, feedback)
        state.extra_data = {"pose": pose}


@dataclass
class TaiChiPhase(PhaseState):
    # rows of (left_x, left_y, right_x, right_y)
    wrists: RollingWindow = field(default_factory=lambda: RollingWindow(TaiChiClassifier.WINDOW))


class TaiChiClassifier(ExerciseClassifier):
    """Smoothness from the jerk (second difference) of the left wrist path."""

    exercise_id = ExerciseId.TAI_CHI
    initial_stage = "READY"
    counter_kind = CounterKind.SCORE
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_WRIST, P.RIGHT_WRIST, P.LEFT_HIP,
        P.RIGHT_HIP,
    )

    WINDOW = 30
    MIN_SAMPLES = 5
    JERK_SCALE = 5000

    def new_phase(self) -> TaiChiPhase:
        return TaiChiPhase()

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        phase: TaiChiPhase = self.phase
        left, right = lm[P.LEFT_WRIST], lm[P.RIGHT_WRIST]
        phase.wrists.push((left.x, left.y, right.x, right.y))

        if len(phase.wrists) < self.MIN_SAMPLES:
            state.show_feedback("Begin moving slowly...")
            return

        path = phase.wrists.as_array()[:, :2]
        velocity = np.diff(path, axis=0)
        jerk = np.linalg.norm(np.diff(velocity, axis=0), axis=1)
        mean_jerk = float(jerk.sum()) / len(phase.wrists)
        smoothness = max(0, round_half_up(100 - mean_jerk * self.JERK_SCALE))

        state.rep_counter = smoothness
        if smoothness > 80:
            state.stage = "FLOW"
            state.show_feedback("Beautiful flow! 🌊")
        elif smoothness > 50:
            state.stage = "GOOD"
            state.show_feedback("Slow down, breathe...")
        else:
            state.stage = "CHOPPY"
            state.show_feedback("Move more smoothly")

        state.extra_data = {"smoothness": smoothness}
