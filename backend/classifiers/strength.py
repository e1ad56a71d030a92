"""Strength exercises: two-stage angle counters with form checks."""

from __future__ import annotations

from kinematics import PoseLandmark as P, calculate_angle
from session import ExerciseId, SessionState

from .base import ExerciseClassifier, Landmarks
from .feedback import FeedbackQueue


class SquatClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.SQUAT
    initial_stage = "UP"
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE,
        P.RIGHT_KNEE, P.LEFT_ANKLE, P.RIGHT_ANKLE, P.LEFT_HEEL, P.RIGHT_HEEL,
        P.LEFT_FOOT_INDEX, P.RIGHT_FOOT_INDEX,
    )
    visibility_message = "Move back - full body not visible!"

    KNEE_DOWN = 100
    KNEE_UP = 160
    VALGUS_KNEE_ANGLE = 150
    VALGUS_RATIO = 0.7

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_knee = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE])
        right_knee = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_KNEE], lm[P.RIGHT_ANKLE])
        avg_knee = (left_knee + right_knee) / 2
        knee_distance = abs(lm[P.LEFT_KNEE].x - lm[P.RIGHT_KNEE].x)
        ankle_distance = abs(lm[P.LEFT_ANKLE].x - lm[P.RIGHT_ANKLE].x)

        feedback = FeedbackQueue()
        if avg_knee < self.VALGUS_KNEE_ANGLE and knee_distance < ankle_distance * self.VALGUS_RATIO:
            feedback.safety("PUSH KNEES OUT!")

        knees_down = left_knee < self.KNEE_DOWN and right_knee < self.KNEE_DOWN
        knees_up = left_knee > self.KNEE_UP and right_knee > self.KNEE_UP

        if knees_down and state.stage == "UP" and not feedback.has_safety:
            state.stage = "DOWN"
        elif knees_up and state.stage == "DOWN":
            state.stage = "UP"
            state.increment()

        if state.stage == "UP" and not knees_up and avg_knee > self.KNEE_DOWN:
            feedback.coaching("GO LOWER!")
        self.apply_feedback(state, feedback)


class BicepCurlClassifier(ExerciseClassifier):
    """Left-arm curl seen from the side."""

    exercise_id = ExerciseId.BICEP_CURL
    initial_stage = "DOWN"
    required_landmarks = (P.LEFT_SHOULDER, P.LEFT_ELBOW, P.LEFT_WRIST, P.LEFT_HIP)
    visibility_message = "Show left side clearly!"

    CURL_UP = 40
    CURL_DOWN = 160
    ELBOW_DRIFT = 0.1

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        elbow = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_ELBOW], lm[P.LEFT_WRIST])
        elbow_hip_distance = abs(lm[P.LEFT_ELBOW].x - lm[P.LEFT_HIP].x)

        feedback = FeedbackQueue()
        if elbow_hip_distance > self.ELBOW_DRIFT:
            feedback.safety("KEEP ELBOW AT SIDE!")

        curl_up = elbow < self.CURL_UP
        curl_down = elbow > self.CURL_DOWN

        if curl_up and state.stage == "DOWN" and not feedback.has_safety:
            state.stage = "UP"
        elif curl_down and state.stage == "UP":
            state.stage = "DOWN"
            state.increment()

        if state.stage == "DOWN" and not curl_up and elbow < self.CURL_DOWN:
            feedback.coaching("CURL HIGHER!")
        elif state.stage == "UP" and not curl_down and elbow > self.CURL_UP:
            feedback.coaching("LOWER ALL THE WAY!")
        self.apply_feedback(state, feedback)


class PushUpClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.PUSH_UP
    initial_stage = "UP"
    required_landmarks = (
        P.LEFT_SHOULDER, P.LEFT_ELBOW, P.LEFT_WRIST, P.LEFT_HIP, P.LEFT_KNEE,
        P.LEFT_ANKLE,
    )
    visibility_message = "Show your side profile clearly!"

    ARM_DOWN = 90
    ARM_UP = 150
    BODY_STRAIGHT = 140

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        elbow = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_ELBOW], lm[P.LEFT_WRIST])
        body = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP], lm[P.LEFT_ANKLE])

        feedback = FeedbackQueue()
        if body < self.BODY_STRAIGHT:
            feedback.safety("KEEP BODY STRAIGHT!")

        arm_down = elbow < self.ARM_DOWN
        arm_up = elbow > self.ARM_UP

        if arm_down and state.stage == "UP" and not feedback.has_safety:
            state.stage = "DOWN"
        elif arm_up and state.stage == "DOWN":
            state.stage = "UP"
            state.increment()

        self.apply_feedback(state, feedback)


class SitUpClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.SIT_UP
    initial_stage = "UP"
    required_landmarks = (P.LEFT_SHOULDER, P.LEFT_HIP, P.LEFT_KNEE)
    visibility_message = "Lie on your side, facing camera!"

    LYING = 140
    CRUNCHED = 70

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        hip = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_HIP], lm[P.LEFT_KNEE])
        is_down = hip > self.LYING
        is_up = hip < self.CRUNCHED

        if is_down and state.stage == "UP":
            state.stage = "DOWN"
        elif is_up and state.stage == "DOWN":
            state.stage = "UP"
            state.increment()

        feedback = FeedbackQueue()
        if state.stage == "DOWN" and not is_up and hip > self.CRUNCHED:
            feedback.coaching("COME UP HIGHER!")
        self.apply_feedback(state, feedback)


class LungeClassifier(ExerciseClassifier):
    """The more bent knee is treated as the front leg."""

    exercise_id = ExerciseId.LUNGE
    initial_stage = "UP"
    required_landmarks = (
        P.LEFT_HIP, P.RIGHT_HIP, P.LEFT_KNEE, P.RIGHT_KNEE, P.LEFT_ANKLE, P.RIGHT_ANKLE,
    )

    FRONT_DOWN = 110
    STANDING = 160
    TOO_LOW = 70

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_knee = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_KNEE], lm[P.LEFT_ANKLE])
        right_knee = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_KNEE], lm[P.RIGHT_ANKLE])
        front_knee = min(left_knee, right_knee)
        back_knee = max(left_knee, right_knee)

        is_down = front_knee < self.FRONT_DOWN
        is_up = front_knee > self.STANDING and back_knee > self.STANDING

        feedback = FeedbackQueue()
        if is_down and front_knee < self.TOO_LOW:
            feedback.safety("DON'T GO TOO LOW!")

        if is_down and state.stage == "UP" and not feedback.has_safety:
            state.stage = "DOWN"
        elif is_up and state.stage == "DOWN":
            state.stage = "UP"
            state.increment()

        if state.stage == "UP" and self.FRONT_DOWN < front_knee < self.STANDING:
            feedback.coaching("GO LOWER!")
        self.apply_feedback(state, feedback)


class ShoulderPressClassifier(ExerciseClassifier):
    exercise_id = ExerciseId.SHOULDER_PRESS
    initial_stage = "DOWN"
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_ELBOW, P.RIGHT_ELBOW, P.LEFT_WRIST,
        P.RIGHT_WRIST,
    )
    visibility_message = "Upper body must be visible!"

    PRESSED = 160
    RACKED = 90
    MAX_ARM_DIFF = 30

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_elbow = calculate_angle(lm[P.LEFT_SHOULDER], lm[P.LEFT_ELBOW], lm[P.LEFT_WRIST])
        right_elbow = calculate_angle(lm[P.RIGHT_SHOULDER], lm[P.RIGHT_ELBOW], lm[P.RIGHT_WRIST])
        avg_elbow = (left_elbow + right_elbow) / 2

        left_wrist_above = lm[P.LEFT_WRIST].y < lm[P.LEFT_SHOULDER].y
        right_wrist_above = lm[P.RIGHT_WRIST].y < lm[P.RIGHT_SHOULDER].y

        is_up = avg_elbow > self.PRESSED and left_wrist_above and right_wrist_above
        is_down = avg_elbow < self.RACKED

        if is_down and state.stage == "UP":
            state.stage = "DOWN"
        elif is_up and state.stage == "DOWN":
            state.stage = "UP"
            state.increment()

        # symmetry is reported but does not hold back the count
        feedback = FeedbackQueue()
        if abs(left_elbow - right_elbow) > self.MAX_ARM_DIFF:
            feedback.safety("EVEN OUT YOUR ARMS!")
        self.apply_feedback(state, feedback)


class ArmRaiseClassifier(ExerciseClassifier):
    """Lateral raise measured by the hip-shoulder-wrist angle on both sides."""

    exercise_id = ExerciseId.ARM_RAISE
    initial_stage = "DOWN"
    required_landmarks = (
        P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_ELBOW, P.RIGHT_ELBOW, P.LEFT_WRIST,
        P.RIGHT_WRIST, P.LEFT_HIP, P.RIGHT_HIP,
    )
    visibility_message = "Full upper body must be visible!"

    RAISED = 70
    LOWERED = 25
    MAX_ARM_DIFF = 25

    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        left_arm = calculate_angle(lm[P.LEFT_HIP], lm[P.LEFT_SHOULDER], lm[P.LEFT_WRIST])
        right_arm = calculate_angle(lm[P.RIGHT_HIP], lm[P.RIGHT_SHOULDER], lm[P.RIGHT_WRIST])
        avg_arm = (left_arm + right_arm) / 2

        if avg_arm > self.RAISED and state.stage == "DOWN":
            state.stage = "UP"
        elif avg_arm < self.LOWERED and state.stage == "UP":
            state.stage = "DOWN"
            state.increment()

        feedback = FeedbackQueue()
        if abs(left_arm - right_arm) > self.MAX_ARM_DIFF:
            feedback.safety("RAISE BOTH ARMS EVENLY!")
        self.apply_feedback(state, feedback)
