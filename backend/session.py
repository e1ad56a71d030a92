"""
Session state exposed to the UI for the active exercise.

One SessionState exists per active exercise and is rebuilt whenever the
exercise changes. The UI reads ``to_dict()`` after every frame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ExerciseId(str, Enum):
    SQUAT = "SQUAT"
    BICEP_CURL = "BICEP_CURL"
    PUSH_UP = "PUSH_UP"
    SIT_UP = "SIT_UP"
    JUMPING_JACK = "JUMPING_JACK"
    LUNGE = "LUNGE"
    SHOULDER_PRESS = "SHOULDER_PRESS"
    ARM_RAISE = "ARM_RAISE"
    HIGH_KNEES = "HIGH_KNEES"
    MOUNTAIN_CLIMBER = "MOUNTAIN_CLIMBER"
    BURPEE = "BURPEE"
    STEP_COUNTER = "STEP_COUNTER"
    PLANK = "PLANK"
    YOGA = "YOGA"
    KNEE_ANGLE = "KNEE_ANGLE"
    BALANCE = "BALANCE"
    JUMP_HEIGHT = "JUMP_HEIGHT"
    RUNNING_POSTURE = "RUNNING_POSTURE"
    TAI_CHI = "TAI_CHI"

    @classmethod
    def parse(cls, value: Any) -> Optional["ExerciseId"]:
        """Return the matching id, or None for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


class CounterKind(str, Enum):
    """What ``rep_counter`` carries for a given exercise."""

    COUNT = "count"              # completed cycles, only ever increases
    DURATION = "duration"        # seconds held
    SCORE = "score"              # live 0-100 quality score
    MEASUREMENT = "measurement"  # live physical reading (degrees, cm)


@dataclass
class SessionState:
    exercise_id: ExerciseId
    stage: str
    counter_kind: CounterKind = CounterKind.COUNT
    rep_counter: int = 0
    feedback_message: Optional[str] = None
    extra_data: Optional[Dict[str, Any]] = None

    def show_feedback(self, message: str):
        self.feedback_message = message

    def hide_feedback(self):
        self.feedback_message = None

    def increment(self):
        self.rep_counter += 1

    def summary(self) -> Dict[str, Any]:
        """Final numbers for an external workout history."""
        return {
            "exercise": self.exercise_id.value,
            "rep_counter": self.rep_counter,
            "counter_kind": self.counter_kind.value,
            "stage": self.stage,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exerciseId": self.exercise_id.value,
            "repCounter": self.rep_counter,
            "counterKind": self.counter_kind.value,
            "stage": self.stage,
            "feedbackMessage": self.feedback_message,
            "extraData": dict(self.extra_data) if self.extra_data is not None else None,
        }
