"""REST service exposing UNO sessions to browser clients."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from engine.cards import Color, parse_color
from engine.errors import InvalidRoster
from engine.game import SeatSpec
from engine.service import ConcurrentModification, GameService, IntentResult, SessionNotFound

logger = logging.getLogger(__name__)


class SeatRequest(BaseModel):
    id: str
    name: str
    is_bot: bool = False


class StartRequest(BaseModel):
    room_id: str
    seats: List[SeatRequest]
    max_players: Optional[int] = Field(None, ge=2)
    viewer: Optional[str] = None


class SeatActionRequest(BaseModel):
    seat_id: str


class PlayRequest(SeatActionRequest):
    hand_index: int
    chosen_color: Optional[str] = None


service = GameService()


app = FastAPI(title="UNO Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def session_view(session_id: str, viewer: Optional[str]) -> Dict[str, object]:
    try:
        return asdict(service.snapshot(session_id, viewer))
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found") from None


def intent_response(session_id: str, seat_id: str, result: IntentResult) -> Dict[str, object]:
    if not result.accepted:
        raise HTTPException(
            status_code=400,
            detail={"code": result.rejection_code, "reason": result.rejection_reason},
        )
    return {"result": asdict(result), "state": session_view(session_id, seat_id)}


def parse_chosen_color(value: Optional[str]) -> Optional[Color]:
    if value is None:
        return None
    try:
        return parse_color(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"code": "illegal_move", "reason": str(exc)}) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/sessions")
def start_session(request: StartRequest) -> Dict[str, object]:
    seats = [SeatSpec(id=seat.id, name=seat.name, is_bot=seat.is_bot) for seat in request.seats]
    try:
        view = service.start_session(request.room_id, seats, max_players=request.max_players, viewer_seat_id=request.viewer)
    except InvalidRoster as exc:
        raise HTTPException(status_code=400, detail={"code": exc.code, "reason": str(exc)}) from exc
    except ConcurrentModification as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"session_id": request.room_id, "state": asdict(view)}


@app.get("/sessions/{session_id}")
def get_session(session_id: str, viewer: Optional[str] = None) -> Dict[str, object]:
    return session_view(session_id, viewer)


@app.post("/sessions/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    color = parse_chosen_color(request.chosen_color)
    try:
        result = service.submit_play(session_id, request.seat_id, request.hand_index, color)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found") from None
    return intent_response(session_id, request.seat_id, result)


@app.post("/sessions/{session_id}/draw")
def draw_card(session_id: str, request: SeatActionRequest) -> Dict[str, object]:
    try:
        result = service.submit_draw(session_id, request.seat_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found") from None
    return intent_response(session_id, request.seat_id, result)


@app.post("/sessions/{session_id}/declare")
def declare_low_hand(session_id: str, request: SeatActionRequest) -> Dict[str, object]:
    try:
        result = service.submit_low_hand_declaration(session_id, request.seat_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found") from None
    return intent_response(session_id, request.seat_id, result)


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> Dict[str, bool]:
    service.discard_session(session_id)
    logger.info("Room %s discarded", session_id)
    return {"success": True}
