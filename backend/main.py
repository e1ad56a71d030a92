import json
import logging
import os
import time
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from catalog import CATEGORIES, get_exercise_info, list_exercises
from classifiers import get_available_exercises
from engine import RepCountingEngine, UnknownExerciseError

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

DEFAULT_EXERCISE = os.getenv("DEFAULT_EXERCISE", "SQUAT")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

app = FastAPI()


class LandmarkModel(BaseModel):
    x: float
    y: float
    z: float = 0.0
    visibility: float = 0.0

    class Config:
        extra = "ignore"


class FrameMessage(BaseModel):
    # null means the pose collaborator found nobody in this frame
    landmarks: Optional[List[Optional[LandmarkModel]]] = None
    ts: Optional[float] = None


class CommandMessage(BaseModel):
    command: str
    exercise: Optional[str] = None


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    return {
        "message": "Welcome to FitCoachAR - Real-Time Exercise Rep Counting API",
        "default_exercise": DEFAULT_EXERCISE,
        "available_exercises": get_available_exercises(),
    }


@app.get("/exercises")
def get_exercises(category: Optional[str] = None):
    return {"categories": CATEGORIES, "exercises": list_exercises(category)}


@app.get("/exercises/{exercise_id}")
def get_exercise(exercise_id: str):
    info = get_exercise_info(exercise_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown exercise '{exercise_id}'")
    return info


def handle_command(engine: RepCountingEngine, message: CommandMessage) -> Dict[str, Any]:
    """Apply one control message to a connection's engine and build the reply."""
    if message.command == "select_exercise":
        try:
            state = engine.switch_exercise(message.exercise)
        except UnknownExerciseError as e:
            logger.warning("Rejected exercise selection: %s", e)
            return {"event": "error", "message": str(e)}
        return {
            "event": "exercise_selected",
            "exercise": state.exercise_id.value,
            "state": state.to_dict(),
        }

    if message.command == "reset":
        summary = engine.reset()
        logger.info("Session reset: %s", summary)
        return {"event": "reset", "summary": summary, "state": engine.state.to_dict()}

    if message.command == "get_state":
        return {"event": "state", "state": engine.state.to_dict()}

    return {"event": "error", "message": f"Unknown command '{message.command}'"}


def handle_frame(engine: RepCountingEngine, message: FrameMessage) -> Dict[str, Any]:
    frame = None
    if message.landmarks is not None:
        frame = [lm.dict() if lm is not None else None for lm in message.landmarks]

    process_start = time.perf_counter()
    state = engine.on_frame(frame)
    latency_ms = (time.perf_counter() - process_start) * 1000

    payload = state.to_dict()
    payload["latency_ms"] = latency_ms
    if message.ts is not None:
        payload["client_ts"] = message.ts
    return payload


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    logger.info("WebSocket connection attempt received (exercise=%s).", DEFAULT_EXERCISE)
    await websocket.accept()
    logger.info("WebSocket connection accepted.")

    try:
        engine = RepCountingEngine(DEFAULT_EXERCISE)
    except UnknownExerciseError as e:
        logger.error("DEFAULT_EXERCISE is invalid, falling back to SQUAT: %s", e)
        engine = RepCountingEngine()

    try:
        while True:
            data = await websocket.receive_text()

            try:
                parsed_payload = json.loads(data)
            except json.JSONDecodeError:
                logger.warning("Received malformed data packet")
                continue
            if not isinstance(parsed_payload, dict):
                logger.warning("Received non-object data packet")
                continue

            try:
                if "command" in parsed_payload:
                    response = handle_command(engine, CommandMessage(**parsed_payload))
                else:
                    response = handle_frame(engine, FrameMessage(**parsed_payload))
            except ValidationError as validation_error:
                logger.warning("Invalid message skipped: %s", validation_error)
                continue

            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    finally:
        logger.info(
            "Client connection closed (%s)",
            engine.summary(),
        )


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT, loop="uvloop")
