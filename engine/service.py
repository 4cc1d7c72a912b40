"""Convenience service layer for transports and UIs."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from random import Random
from typing import Dict, Optional, Protocol, Sequence, runtime_checkable

from bots.heuristic import HeuristicBot

from .cards import Color, card_label, serialize_card
from .errors import Rejection
from .game import BotMove, BotPolicy, SeatSpec, run_bot_turns, settle, start_session
from .mechanics import legal_moves
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import SessionState
from .turns import DeclareLowHand, DrawCard, Intent, PlayCard, apply_intent

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """Raised when no session is stored under the given id."""


class ConcurrentModification(RuntimeError):
    """Raised when a save is based on a stale session version."""


@dataclass
class SeatView:
    id: str
    name: str
    is_bot: bool
    card_count: int
    has_declared_low_hand: bool
    hand: list[dict]
    hand_labels: list[str]


@dataclass
class PublicSessionView:
    room_id: str
    phase: str
    version: int
    seats: list[SeatView]
    current_seat_index: int
    current_seat_id: str
    direction: int
    current_color: Optional[str]
    top_card: Optional[dict]
    top_card_label: Optional[str]
    pending_draw_count: int
    deck_count: int
    started: bool
    over: bool
    winner_id: Optional[str]
    last_action: str
    legal_moves: list[int]


@dataclass
class IntentResult:
    accepted: bool
    rejection_reason: Optional[str] = None
    rejection_code: Optional[str] = None
    game_over: bool = False
    winner_id: Optional[str] = None
    bot_moves: list[dict] = field(default_factory=list)


@runtime_checkable
class SessionStore(Protocol):
    """Persistence for session states. ``load`` raises ``SessionNotFound``."""

    def load(self, session_id: str) -> SessionState:
        ...

    def create(self, session_id: str, state: SessionState) -> None:
        ...

    def save(self, session_id: str, state: SessionState, *, expected_version: int) -> None:
        ...

    def delete(self, session_id: str) -> None:
        ...


class InMemorySessionStore:
    """Session states keyed by id, saved with an optimistic version check."""

    def __init__(self) -> None:
        self._states: Dict[str, SessionState] = {}
        self._guard = threading.Lock()

    def load(self, session_id: str) -> SessionState:
        try:
            return self._states[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None

    def create(self, session_id: str, state: SessionState) -> None:
        with self._guard:
            if session_id in self._states:
                raise ConcurrentModification(f"Session {session_id} already exists.")
            self._states[session_id] = state

    def save(self, session_id: str, state: SessionState, *, expected_version: int) -> None:
        with self._guard:
            current = self.load(session_id)
            if current.version != expected_version:
                raise ConcurrentModification(
                    f"Session {session_id} is at v{current.version}, expected v{expected_version}."
                )
            self._states[session_id] = state

    def delete(self, session_id: str) -> None:
        with self._guard:
            self._states.pop(session_id, None)


class GameService:
    """Facade around the rules engine for transport consumers.

    Writers to one session are serialized by a per-session lock; snapshots read
    the stored immutable state without locking.
    """

    def __init__(
        self,
        *,
        rules: RuleSet = DEFAULT_RULES,
        store: Optional[SessionStore] = None,
        policy: Optional[BotPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.rules = rules
        self.store: SessionStore = store if store is not None else InMemorySessionStore()
        self.policy = policy or HeuristicBot()
        self._seed = seed
        self._rngs: Dict[str, Random] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # Session lifecycle -------------------------------------------------

    def start_session(
        self,
        room_id: str,
        seats: Sequence[SeatSpec],
        max_players: Optional[int] = None,
        viewer_seat_id: Optional[str] = None,
    ) -> PublicSessionView:
        """Deal a new game and play any opening bot turns. Raises ``InvalidRoster``."""
        rng = Random(self._seed)
        state = start_session(room_id, seats, rng=rng, rules=self.rules, max_players=max_players)
        with self._lock_for(room_id):
            state, _ = settle(state, None, self.policy, rng=rng, rules=self.rules)
            self.store.create(room_id, state)
            self._rngs[room_id] = rng
        return self.snapshot(room_id, viewer_seat_id)

    def discard_session(self, session_id: str) -> None:
        with self._lock_for(session_id):
            self.store.delete(session_id)
            self._rngs.pop(session_id, None)
        with self._locks_guard:
            self._locks.pop(session_id, None)

    # Actions -----------------------------------------------------------

    def submit_play(
        self,
        session_id: str,
        seat_id: str,
        hand_index: int,
        chosen_color: Optional[Color] = None,
    ) -> IntentResult:
        return self._submit(session_id, PlayCard(seat_id, hand_index, chosen_color))

    def submit_draw(self, session_id: str, seat_id: str) -> IntentResult:
        return self._submit(session_id, DrawCard(seat_id))

    def submit_low_hand_declaration(self, session_id: str, seat_id: str) -> IntentResult:
        return self._submit(session_id, DeclareLowHand(seat_id))

    # Views -------------------------------------------------------------

    def snapshot(self, session_id: str, viewer_seat_id: Optional[str] = None) -> PublicSessionView:
        state = self.store.load(session_id)
        top = state.top_card
        seats = []
        for seat in state.seats:
            visible = list(seat.hand) if seat.id == viewer_seat_id else []
            seats.append(
                SeatView(
                    id=seat.id,
                    name=seat.name,
                    is_bot=seat.is_bot,
                    card_count=len(seat.hand),
                    has_declared_low_hand=seat.has_declared_low_hand,
                    hand=[serialize_card(card) for card in visible],
                    hand_labels=[card_label(card) for card in visible],
                )
            )

        playable: list[int] = []
        current = state.current_seat
        if top is not None and not state.over and current.id == viewer_seat_id:
            playable = legal_moves(current.hand, top, state.current_color, state.pending_draw_count, self.rules.stacking)

        return PublicSessionView(
            room_id=state.room_id,
            phase=state.phase.name.lower(),
            version=state.version,
            seats=seats,
            current_seat_index=state.current_seat_index,
            current_seat_id=current.id,
            direction=state.direction,
            current_color=state.current_color.value if state.current_color else None,
            top_card=serialize_card(top) if top else None,
            top_card_label=card_label(top) if top else None,
            pending_draw_count=state.pending_draw_count,
            deck_count=len(state.draw_pile),
            started=state.started,
            over=state.over,
            winner_id=state.winner_id,
            last_action=state.last_action,
            legal_moves=playable,
        )

    # Helpers -----------------------------------------------------------

    def _submit(self, session_id: str, intent: Intent) -> IntentResult:
        self.store.load(session_id)
        with self._lock_for(session_id):
            state = self.store.load(session_id)
            rng = self._rng_for(session_id)
            try:
                played = apply_intent(state, intent, rng=rng, rules=self.rules)
            except Rejection as exc:
                logger.info("Room %s rejected %s: %s", session_id, type(intent).__name__, exc)
                return IntentResult(accepted=False, rejection_reason=str(exc), rejection_code=exc.code)
            settled, moves = run_bot_turns(played, self.policy, rng=rng, rules=self.rules)
            self.store.save(session_id, settled, expected_version=state.version)
        return IntentResult(
            accepted=True,
            game_over=settled.over,
            winner_id=settled.winner_id,
            bot_moves=[_describe_move(move) for move in moves],
        )

    def _rng_for(self, session_id: str) -> Random:
        # Sessions started by another service sharing the store get a fresh generator.
        return self._rngs.setdefault(session_id, Random(self._seed))

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(session_id, threading.Lock())


def _describe_move(move: BotMove) -> dict:
    return {"seat_id": move.seat_id, "action": type(move.intent).__name__, "description": move.description}
