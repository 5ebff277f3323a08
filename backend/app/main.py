import logging
import threading
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rref.config import MAX_SESSIONS
from rref.engine import StepEngine
from rref.errors import SessionError, ValidationError
from rref.session import StepSession

logger = logging.getLogger("rref.api")

app = FastAPI(title="RREF Stepper API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MatrixRequest(BaseModel):
    matrix: str


class StepInfo(BaseModel):
    kind: str
    description: str
    data: dict


class ViewInfo(BaseModel):
    cells: list[list[str]]
    roles: list[list[str]]
    values: list[list[float]]
    cursor: Optional[list[int]]
    description: str
    active: bool


class SessionResponse(BaseModel):
    session_id: str
    description: str
    view: Optional[ViewInfo]
    log: list[str]
    can_advance: bool


class StepResponse(SessionResponse):
    step: Optional[StepInfo]
    done: bool


class ClassificationInfo(BaseModel):
    verdict: str
    num_pivots: int
    num_variables: int
    free_variables: int
    contradiction_row: Optional[int]


class RrefResponse(BaseModel):
    steps: list[StepInfo]
    matrix: list[list[float]]
    classification: Optional[ClassificationInfo]


# ── Session registry ────────────────────────────────────────────────────
# One lock for the whole registry: it serializes every call on a session,
# which the engine requires. Insertion order is creation order; past
# MAX_SESSIONS the oldest sessions are evicted.

_sessions: dict[str, StepSession] = {}
_lock = threading.Lock()


def _get_session(session_id: str) -> StepSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def _session_payload(session_id: str, session: StepSession) -> dict:
    view = session.view()
    return {
        "session_id": session_id,
        "description": session.description,
        "view": view.to_dict() if view is not None else None,
        "log": session.log,
        "can_advance": session.can_advance,
    }


# ── Endpoints ───────────────────────────────────────────────────────────

@app.post("/api/sessions", response_model=SessionResponse, status_code=201)
def create_session(req: MatrixRequest):
    session = StepSession()
    try:
        session.start(req.matrix)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = uuid.uuid4().hex
    with _lock:
        while len(_sessions) >= MAX_SESSIONS:
            evicted = next(iter(_sessions))
            del _sessions[evicted]
            logger.info("Evicted session %s", evicted)
        _sessions[session_id] = session
    logger.info("Created session %s", session_id)
    return _session_payload(session_id, session)


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str):
    with _lock:
        session = _get_session(session_id)
        return _session_payload(session_id, session)


@app.post("/api/sessions/{session_id}/step", response_model=StepResponse)
def step_session(session_id: str):
    with _lock:
        session = _get_session(session_id)
        try:
            step = session.advance()
        except SessionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            logger.exception("Step failed for session %s", session_id)
            raise HTTPException(status_code=500, detail=f"Engine error: {str(e)}")
        payload = _session_payload(session_id, session)
    payload["step"] = step.to_dict() if step is not None else None
    payload["done"] = step is None
    return payload


@app.post("/api/sessions/{session_id}/reset", response_model=SessionResponse)
def reset_session(session_id: str):
    with _lock:
        session = _get_session(session_id)
        session.reset()
        return _session_payload(session_id, session)


@app.delete("/api/sessions/{session_id}", status_code=204)
def delete_session(session_id: str):
    with _lock:
        _get_session(session_id)
        del _sessions[session_id]
    return Response(status_code=204)


@app.post("/api/rref", response_model=RrefResponse)
def rref(req: MatrixRequest):
    matrix = req.matrix.strip()
    if not matrix:
        raise HTTPException(status_code=400, detail="Matrix cannot be empty.")

    try:
        engine = StepEngine.from_text(matrix)
        steps = engine.run()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Engine error: {str(e)}")

    classification = engine.classification
    return {
        "steps": [s.to_dict() for s in steps],
        "matrix": engine.snapshot().tolist(),
        "classification": classification.to_dict() if classification else None,
    }
