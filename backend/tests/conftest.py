import math
import os
import sys

import pytest

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from engine import RepCountingEngine
from kinematics import NUM_LANDMARKS, PoseLandmark as P


# Upright, facing the camera, arms hanging, legs straight.
STANDING_POSE = {
    P.NOSE: (0.5, 0.15),
    P.LEFT_SHOULDER: (0.6, 0.3),
    P.RIGHT_SHOULDER: (0.4, 0.3),
    P.LEFT_ELBOW: (0.62, 0.42),
    P.RIGHT_ELBOW: (0.38, 0.42),
    P.LEFT_WRIST: (0.63, 0.52),
    P.RIGHT_WRIST: (0.37, 0.52),
    P.LEFT_HIP: (0.57, 0.55),
    P.RIGHT_HIP: (0.43, 0.55),
    P.LEFT_KNEE: (0.57, 0.72),
    P.RIGHT_KNEE: (0.43, 0.72),
    P.LEFT_ANKLE: (0.57, 0.9),
    P.RIGHT_ANKLE: (0.43, 0.9),
    P.LEFT_HEEL: (0.56, 0.92),
    P.RIGHT_HEEL: (0.44, 0.92),
    P.LEFT_FOOT_INDEX: (0.6, 0.94),
    P.RIGHT_FOOT_INDEX: (0.4, 0.94),
}


def make_frame(overrides=None, visibility=1.0, hidden=()):
    """Build a 33-landmark frame as the websocket would deliver it (list of dicts)."""
    points = dict(STANDING_POSE)
    points.update(overrides or {})
    frame = []
    for idx in range(NUM_LANDMARKS):
        x, y = points.get(idx, (0.5, 0.1))
        frame.append({
            "x": x,
            "y": y,
            "z": 0.0,
            "visibility": 0.0 if idx in hidden else visibility,
        })
    return frame


def bend(a, b, angle, length=0.2, sign=1):
    """Point c such that the angle a-b-c equals ``angle`` degrees.

    The ray b->a is rotated by ``angle`` (counter-clockwise in image
    coordinates for sign=1) and scaled to ``length``.
    """
    ux, uy = a[0] - b[0], a[1] - b[1]
    norm = math.hypot(ux, uy)
    ux, uy = ux / norm, uy / norm
    theta = math.radians(angle) * sign
    rx = ux * math.cos(theta) - uy * math.sin(theta)
    ry = ux * math.sin(theta) + uy * math.cos(theta)
    return (b[0] + rx * length, b[1] + ry * length)


@pytest.fixture
def engine():
    return RepCountingEngine()


def squat_frame(knee_angle):
    # Wide stance, ankles tucked under the midline so the valgus check stays quiet.
    left_hip, left_knee = (0.7, 0.5), (0.7, 0.7)
    right_hip, right_knee = (0.3, 0.5), (0.3, 0.7)
    return make_frame({
        P.LEFT_HIP: left_hip,
        P.RIGHT_HIP: right_hip,
        P.LEFT_KNEE: left_knee,
        P.RIGHT_KNEE: right_knee,
        P.LEFT_ANKLE: bend(left_hip, left_knee, knee_angle, sign=-1),
        P.RIGHT_ANKLE: bend(right_hip, right_knee, knee_angle, sign=1),
    })
