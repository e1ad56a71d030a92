"""Exercise classifier registry.

Binds every ``ExerciseId`` to the state machine that scores it, so the
engine can swap exercises without knowing any of their internals.
"""

from typing import Dict, List, Type

from session import ExerciseId

from .analysis import (
    BalanceClassifier,
    JumpHeightClassifier,
    KneeAngleClassifier,
    RunningPostureClassifier,
)
from .base import ExerciseClassifier, PhaseState
from .cardio import (
    BurpeeClassifier,
    HighKneesClassifier,
    JumpingJackClassifier,
    MountainClimberClassifier,
    StepCounterClassifier,
)
from .feedback import FeedbackQueue
from .flexibility import PlankClassifier, TaiChiClassifier, YogaClassifier
from .strength import (
    ArmRaiseClassifier,
    BicepCurlClassifier,
    LungeClassifier,
    PushUpClassifier,
    ShoulderPressClassifier,
    SitUpClassifier,
    SquatClassifier,
)


class UnknownExerciseError(ValueError):
    pass


CLASSIFIER_REGISTRY: Dict[ExerciseId, Type[ExerciseClassifier]] = {
    cls.exercise_id: cls
    for cls in (
        SquatClassifier,
        BicepCurlClassifier,
        PushUpClassifier,
        SitUpClassifier,
        JumpingJackClassifier,
        LungeClassifier,
        ShoulderPressClassifier,
        ArmRaiseClassifier,
        HighKneesClassifier,
        MountainClimberClassifier,
        BurpeeClassifier,
        StepCounterClassifier,
        PlankClassifier,
        YogaClassifier,
        KneeAngleClassifier,
        BalanceClassifier,
        JumpHeightClassifier,
        RunningPostureClassifier,
        TaiChiClassifier,
    )
}


def get_available_exercises() -> List[str]:
    """Return the list of registered exercise ids."""
    return [exercise.value for exercise in CLASSIFIER_REGISTRY]


def build_classifier(exercise) -> ExerciseClassifier:
    """Instantiate a fresh classifier (and private state) for an exercise id."""
    exercise_id = ExerciseId.parse(exercise)
    classifier_cls = CLASSIFIER_REGISTRY.get(exercise_id) if exercise_id else None
    if not classifier_cls:
        raise UnknownExerciseError(
            f"Unknown exercise '{exercise}'. "
            f"Available options: {', '.join(get_available_exercises())}"
        )
    return classifier_cls()


__all__ = [
    "CLASSIFIER_REGISTRY",
    "ExerciseClassifier",
    "FeedbackQueue",
    "PhaseState",
    "UnknownExerciseError",
    "build_classifier",
    "get_available_exercises",
]
