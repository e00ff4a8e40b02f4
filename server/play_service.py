"""REST service to play the four-seat trick game against computer opponents."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import asdict
from typing import Dict, Iterator, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from bots.bot_arena import BOT_REGISTRY, build_bot
from engine.cards import card_from_id
from engine.clock import ImmediateScheduler, Scheduler, WallClockScheduler
from engine.config import GameConfig, Timings
from engine.game import GameEngine
from engine.players import HUMAN_PLAYER_ID
from engine.rules import RULE_SETS
from engine.service import GameService

log = logging.getLogger(__name__)


class StartRequest(BaseModel):
    rule_set: Union[int, str] = 0
    player_name: str = ""
    seed: Optional[int] = None
    opponent: str = "random"
    cards_per_player: int = Field(13, ge=1, le=13)
    instant: bool = False


class PlayRequest(BaseModel):
    card_id: str
    player_id: str = HUMAN_PLAYER_ID


class RenameRequest(BaseModel):
    name: str


class ResetRequest(BaseModel):
    rule_set: Optional[Union[int, str]] = None


class SessionState:
    def __init__(self, service: GameService, scheduler: Scheduler) -> None:
        self.service = service
        self.scheduler = scheduler
        self.lock = threading.Lock()

    def poll(self) -> None:
        if isinstance(self.scheduler, WallClockScheduler):
            self.scheduler.poll()


sessions: Dict[str, SessionState] = {}


app = FastAPI(title="Trick Table Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_session(session_id: str) -> SessionState:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@contextmanager
def locked_session(session_id: str) -> Iterator[SessionState]:
    """Hold the session lock across polling, the action and serialization."""
    session = ensure_session(session_id)
    with session.lock:
        session.poll()
        yield session


def serialize_state(session: SessionState, *, accepted: Optional[bool] = None) -> Dict[str, object]:
    payload: Dict[str, object] = {"state": asdict(session.service.get_table_view(perspective=0))}
    if accepted is not None:
        payload["accepted"] = accepted
    return payload


@app.get("/rule-sets")
def list_rule_sets() -> Dict[str, object]:
    return {"rule_sets": [dict(rule_set.describe(), index=index) for index, rule_set in enumerate(RULE_SETS)]}


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    if request.opponent not in BOT_REGISTRY:
        raise HTTPException(status_code=400, detail=f"Unknown opponent {request.opponent!r}")
    try:
        config = GameConfig(
            rule_set=request.rule_set,
            player_name=request.player_name,
            seed=request.seed,
            cards_per_player=request.cards_per_player,
            timings=Timings.instant() if request.instant else Timings(),
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    scheduler: Scheduler = ImmediateScheduler() if request.instant else WallClockScheduler()
    policy = None if request.opponent == "random" else build_bot(request.opponent)
    engine = GameEngine(config, scheduler=scheduler, policy=policy)
    session = SessionState(GameService(engine), scheduler)
    session_id = uuid.uuid4().hex
    sessions[session_id] = session
    log.info("Created session %s (rule set %s, opponent %s)", session_id, engine.rule_set.id, request.opponent)
    return {"session_id": session_id, **serialize_state(session)}


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    with locked_session(session_id) as session:
        return serialize_state(session)


@app.delete("/session/{session_id}")
def close_session(session_id: str) -> Dict[str, object]:
    with locked_session(session_id) as session:
        session.service.engine.close()
        sessions.pop(session_id, None)
    log.info("Closed session %s", session_id)
    return {"session_id": session_id, "closed": True}


@app.post("/session/{session_id}/deal")
def deal_session(session_id: str) -> Dict[str, object]:
    with locked_session(session_id) as session:
        accepted = session.service.start_game()
        return serialize_state(session, accepted=accepted)


@app.post("/session/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    with locked_session(session_id) as session:
        try:
            card = card_from_id(request.card_id)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        accepted = session.service.play_card(request.player_id, card)
        return serialize_state(session, accepted=accepted)


@app.post("/session/{session_id}/auto-play")
def auto_play(session_id: str) -> Dict[str, object]:
    with locked_session(session_id) as session:
        accepted = session.service.auto_play()
        return serialize_state(session, accepted=accepted)


@app.post("/session/{session_id}/rename")
def rename_player(session_id: str, request: RenameRequest) -> Dict[str, object]:
    with locked_session(session_id) as session:
        session.service.rename(request.name)
        return serialize_state(session)


@app.post("/session/{session_id}/reset")
def reset_session(session_id: str, request: ResetRequest) -> Dict[str, object]:
    with locked_session(session_id) as session:
        try:
            session.service.reset_game(request.rule_set)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return serialize_state(session)
