"""
Rep-counting engine: routes each pose frame to the active exercise
classifier and owns the reset protocol used when the exercise changes.

Usage:
    engine = RepCountingEngine("SQUAT")
    engine.on_frame(landmarks)        # once per camera frame
    engine.state.to_dict()            # what the UI renders

    engine.switch_exercise("PLANK")   # fresh counters and private state
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, Optional

from classifiers import ExerciseClassifier, UnknownExerciseError, build_classifier
from kinematics import parse_frame
from session import ExerciseId, SessionState


class RepCountingEngine:
    """Single-session dispatcher. Not thread-safe; one engine per client."""

    def __init__(self, exercise: Any = ExerciseId.SQUAT):
        self.logger = logging.getLogger(__name__)
        self.classifier: ExerciseClassifier
        self.state: SessionState
        self.switch_exercise(exercise)

    @property
    def exercise_id(self) -> ExerciseId:
        return self.state.exercise_id

    def switch_exercise(self, exercise: Any) -> SessionState:
        """Discard the current classifier and start the new exercise from scratch.

        Raises UnknownExerciseError for ids outside the registry.
        """
        classifier = build_classifier(exercise)
        self.classifier = classifier
        self.state = classifier.new_session()
        self.logger.info(
            "Active exercise set to %s (stage=%s)",
            self.state.exercise_id.value,
            self.state.stage,
        )
        return self.state

    def reset(self) -> Dict[str, Any]:
        """Restart the active exercise; returns the final numbers of the abandoned run."""
        summary = self.state.summary()
        self.switch_exercise(self.state.exercise_id)
        return summary

    def summary(self) -> Dict[str, Any]:
        return self.state.summary()

    def process(
        self,
        exercise: Any,
        frame: Optional[Iterable[Any]],
        now: Optional[float] = None,
    ) -> SessionState:
        """Feed one frame to the classifier for ``exercise``.

        Unknown ids are ignored. A known id other than the active one switches
        to it first.
        """
        exercise_id = ExerciseId.parse(exercise)
        if exercise_id is None:
            self.logger.debug("Ignoring frame for unknown exercise %r", exercise)
            return self.state
        if exercise_id is not self.state.exercise_id:
            self.switch_exercise(exercise_id)

        landmarks = parse_frame(frame)
        if landmarks is None:
            return self.state

        if now is None:
            now = time.time()

        previous = self.state.rep_counter
        self.classifier.process(landmarks, self.state, now)
        if self.state.rep_counter != previous:
            self.logger.debug(
                "%s %s %d -> %d (stage=%s)",
                self.state.exercise_id.value,
                self.state.counter_kind.value,
                previous,
                self.state.rep_counter,
                self.state.stage,
            )
        return self.state

    def on_frame(self, frame: Optional[Iterable[Any]], now: Optional[float] = None) -> SessionState:
        return self.process(self.state.exercise_id, frame, now)


__all__ = ["RepCountingEngine", "UnknownExerciseError"]
