"""Common interfaces for the per-exercise classifiers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from kinematics import Frame, Landmark, landmarks_present, landmarks_visible
from session import CounterKind, ExerciseId, SessionState

from .feedback import FeedbackQueue

Landmarks = List[Optional[Landmark]]


@dataclass
class PhaseState:
    """Classifier-private state. Subclassed per exercise; never exposed to the UI."""


class ExerciseClassifier(ABC):
    """One state machine per exercise kind.

    ``process`` runs the shared frame protocol (absent-frame no-op, visibility
    gate) and hands visible frames to ``classify``. Subclasses own their
    private state in ``self.phase`` which is created fresh for every instance.
    """

    exercise_id: ExerciseId
    initial_stage: str = "UP"
    counter_kind: CounterKind = CounterKind.COUNT
    required_landmarks: Tuple[int, ...] = ()
    # read by classify but not held to the visibility threshold
    tracked_landmarks: Tuple[int, ...] = ()
    visibility_message: str = "Full body must be visible!"

    def __init__(self):
        self.phase = self.new_phase()

    def new_phase(self) -> PhaseState:
        return PhaseState()

    def new_session(self) -> SessionState:
        return SessionState(
            exercise_id=self.exercise_id,
            stage=self.initial_stage,
            counter_kind=self.counter_kind,
        )

    def process(self, landmarks: Frame, state: SessionState, now: float) -> None:
        if landmarks is None:
            return
        if not (
            landmarks_visible(landmarks, self.required_landmarks)
            and landmarks_present(landmarks, self.tracked_landmarks)
        ):
            state.show_feedback(self.visibility_message)
            return
        self.classify(landmarks, state, now)

    @abstractmethod
    def classify(self, lm: Landmarks, state: SessionState, now: float) -> None:
        """Update stage, counter, feedback and metrics from one visible frame."""

    @staticmethod
    def apply_feedback(state: SessionState, feedback: FeedbackQueue):
        state.feedback_message = feedback.resolve()
