"""
Kinematic feature utilities for the rep-counting engine.

Implements:
- The 33-point body landmark topology used by the pose collaborator
- Frame normalization (dicts / landmark objects -> Landmark)
- 2D joint angles, distances and midpoints in normalized image space
- The per-frame visibility gate every classifier runs first
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

DEFAULT_MIN_VISIBILITY = 0.5


class PoseLandmark(IntEnum):
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


NUM_LANDMARKS = len(PoseLandmark)


@dataclass(frozen=True)
class Landmark:
    """One tracked keypoint in normalized image coordinates."""

    x: float
    y: float
    visibility: float = 0.0
    z: float = 0.0

    @classmethod
    def from_any(cls, raw: Any) -> Optional["Landmark"]:
        if raw is None:
            return None
        if isinstance(raw, Landmark):
            return raw
        if isinstance(raw, dict):
            return cls(
                x=float(raw["x"]),
                y=float(raw["y"]),
                visibility=float(raw.get("visibility", 0.0)),
                z=float(raw.get("z", 0.0)),
            )
        # MediaPipe NormalizedLandmark and friends
        return cls(
            x=float(raw.x),
            y=float(raw.y),
            visibility=float(getattr(raw, "visibility", 0.0)),
            z=float(getattr(raw, "z", 0.0)),
        )


Frame = Optional[List[Optional[Landmark]]]


def parse_frame(raw: Optional[Iterable[Any]]) -> Frame:
    """Normalize a raw landmark sequence; ``None`` stays ``None`` (no detection)."""
    if raw is None:
        return None
    return [Landmark.from_any(lm) for lm in raw]


def _xy(point: Any):
    if hasattr(point, "x"):
        return point.x, point.y
    if isinstance(point, dict):
        return point["x"], point["y"]
    return point[0], point[1]


def calculate_angle(a, b, c) -> float:
    """Calculate the angle at point b formed by points a-b-c, in [0, 180]."""
    a = np.array(_xy(a), dtype=float)
    b = np.array(_xy(b), dtype=float)
    c = np.array(_xy(c), dtype=float)

    radians = np.arctan2(c[1] - b[1], c[0] - b[0]) - np.arctan2(
        a[1] - b[1], a[0] - b[0]
    )
    angle = np.abs(radians * 180.0 / np.pi)

    if angle > 180.0:
        angle = 360 - angle

    return float(angle)


def distance(a, b) -> float:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return math.sqrt((ax - bx) ** 2 + (ay - by) ** 2)


def midpoint(a, b) -> Landmark:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return Landmark(x=(ax + bx) / 2, y=(ay + by) / 2)


def landmarks_visible(
    landmarks: Frame,
    indices: Sequence[int],
    min_visibility: float = DEFAULT_MIN_VISIBILITY,
) -> bool:
    """False if any required landmark is missing or below the visibility threshold."""
    if not landmarks:
        return False
    for idx in indices:
        if idx >= len(landmarks):
            return False
        lm = landmarks[idx]
        if lm is None or lm.visibility < min_visibility:
            return False
    return True


def landmarks_present(landmarks: Frame, indices: Sequence[int]) -> bool:
    """True if every index has a landmark entry, whatever its visibility."""
    if not landmarks:
        return not indices
    return all(idx < len(landmarks) and landmarks[idx] is not None for idx in indices)


def round_half_up(value: float) -> int:
    # Ties go toward +inf, unlike Python's banker's rounding.
    return int(math.floor(value + 0.5))
