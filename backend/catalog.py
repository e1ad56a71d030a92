"""
Exercise catalog: display metadata for every supported exercise.

Purely descriptive; the engine never reads it.
"""

from typing import Any, Dict, List, Optional

from session import ExerciseId

CATEGORIES = {
    "STRENGTH": {"label": "Strength", "color": "#EF4444", "icon": "💪"},
    "CARDIO": {"label": "Cardio", "color": "#F59E0B", "icon": "🔥"},
    "FLEXIBILITY": {"label": "Flexibility", "color": "#10B981", "icon": "🧘"},
    "ANALYSIS": {"label": "Analysis", "color": "#6366F1", "icon": "📊"},
}

EXERCISE_CATALOG: Dict[ExerciseId, Dict[str, Any]] = {
    # --- STRENGTH ---
    ExerciseId.SQUAT: {
        "name": "Squats",
        "icon": "🦵",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand back so your full body is visible.",
        "description": "Track your squats with knee angle detection and form feedback.",
    },
    ExerciseId.BICEP_CURL: {
        "name": "Bicep Curls",
        "icon": "💪",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Sit sideways with your left arm visible.",
        "description": "Count bicep curls and check elbow positioning.",
    },
    ExerciseId.PUSH_UP: {
        "name": "Push-ups",
        "icon": "🫸",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Place camera at side angle to see your full body.",
        "description": "Detect push-up reps by tracking arm extension and body alignment.",
    },
    ExerciseId.SIT_UP: {
        "name": "Sit-ups",
        "icon": "🔄",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Lie down with your side facing the camera.",
        "description": "Count sit-ups by monitoring torso angle changes.",
    },
    ExerciseId.LUNGE: {
        "name": "Lunges",
        "icon": "🏋️",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand facing the camera with room to step forward.",
        "description": "Track lunge reps and check knee alignment.",
    },
    ExerciseId.SHOULDER_PRESS: {
        "name": "Shoulder Press",
        "icon": "🙌",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand facing the camera, arms visible.",
        "description": "Count overhead press reps and track arm symmetry.",
    },
    ExerciseId.ARM_RAISE: {
        "name": "Arm Raises",
        "icon": "🤚",
        "category": "STRENGTH",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand facing the camera with arms at your sides.",
        "description": "Count lateral arm raises to shoulder height.",
    },
    # --- CARDIO ---
    ExerciseId.JUMPING_JACK: {
        "name": "Jumping Jacks",
        "icon": "⭐",
        "category": "CARDIO",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand with full body visible, arms at sides.",
        "description": "Count jumping jacks by detecting arm and leg spread.",
    },
    ExerciseId.HIGH_KNEES: {
        "name": "High Knees",
        "icon": "🦶",
        "category": "CARDIO",
        "type": "counter",
        "tier": 1,
        "instruction": "Stand facing the camera, full body visible.",
        "description": "Count high knee lifts alternating left and right.",
    },
    ExerciseId.MOUNTAIN_CLIMBER: {
        "name": "Mountain Climbers",
        "icon": "⛰️",
        "category": "CARDIO",
        "type": "counter",
        "tier": 2,
        "instruction": "Position camera at side angle in plank position.",
        "description": "Count mountain climber reps by tracking alternating knee drives.",
    },
    ExerciseId.BURPEE: {
        "name": "Burpees",
        "icon": "🏃",
        "category": "CARDIO",
        "type": "counter",
        "tier": 2,
        "instruction": "Stand with full body visible, enough room to drop down.",
        "description": "Track full burpee cycles: stand → squat → plank → stand.",
    },
    ExerciseId.STEP_COUNTER: {
        "name": "Step Counter",
        "icon": "👣",
        "category": "CARDIO",
        "type": "counter",
        "tier": 3,
        "instruction": "Walk or jog in place, facing the camera.",
        "description": "Camera-based step counting via leg motion detection.",
    },
    # --- FLEXIBILITY ---
    ExerciseId.PLANK: {
        "name": "Plank Hold",
        "icon": "🧱",
        "category": "FLEXIBILITY",
        "type": "timer",
        "tier": 2,
        "instruction": "Position camera at side angle in plank position.",
        "description": "Hold plank with real-time posture feedback and timer.",
    },
    ExerciseId.YOGA: {
        "name": "Yoga Poses",
        "icon": "🧘",
        "category": "FLEXIBILITY",
        "type": "pose",
        "tier": 2,
        "instruction": "Stand with full body visible. Hold each pose steadily.",
        "description": "Detect Tree Pose, Warrior II and T-Pose.",
    },
    ExerciseId.TAI_CHI: {
        "name": "Tai Chi Flow",
        "icon": "☯️",
        "category": "FLEXIBILITY",
        "type": "flow",
        "tier": 3,
        "instruction": "Stand facing the camera with arms relaxed.",
        "description": "Analyze smooth movement flow and coordination.",
    },
    # --- ANALYSIS ---
    ExerciseId.KNEE_ANGLE: {
        "name": "Knee Angle",
        "icon": "📐",
        "category": "ANALYSIS",
        "type": "analysis",
        "tier": 2,
        "instruction": "Stand with full body visible for real-time angle display.",
        "description": "Real-time knee angle measurement and display.",
    },
    ExerciseId.BALANCE: {
        "name": "Balance Test",
        "icon": "⚖️",
        "category": "ANALYSIS",
        "type": "analysis",
        "tier": 3,
        "instruction": "Stand on one leg, facing the camera.",
        "description": "Analyze balance stability and body sway.",
    },
    ExerciseId.JUMP_HEIGHT: {
        "name": "Jump Height",
        "icon": "📏",
        "category": "ANALYSIS",
        "type": "measurement",
        "tier": 3,
        "instruction": "Stand facing the camera. Jump when ready.",
        "description": "Measure vertical jump height from hip displacement.",
    },
    ExerciseId.RUNNING_POSTURE: {
        "name": "Running Form",
        "icon": "🏃‍♂️",
        "category": "ANALYSIS",
        "type": "analysis",
        "tier": 3,
        "instruction": "Run in place or on a treadmill, side view preferred.",
        "description": "Analyze running posture, spine alignment, and stride.",
    },
}


def get_exercise_info(exercise) -> Optional[Dict[str, Any]]:
    exercise_id = ExerciseId.parse(exercise)
    if exercise_id is None:
        return None
    return {"id": exercise_id.value, **EXERCISE_CATALOG[exercise_id]}


def list_exercises(category: Optional[str] = None) -> List[Dict[str, Any]]:
    """All catalog entries, optionally filtered by category (case-insensitive)."""
    wanted = category.upper() if category else None
    return [
        {"id": exercise_id.value, **info}
        for exercise_id, info in EXERCISE_CATALOG.items()
        if wanted is None or info["category"] == wanted
    ]
