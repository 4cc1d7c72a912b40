"""High-level game orchestration for UNO: dealing, player moves and bot cascades."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import List, Optional, Protocol, Sequence, Tuple

from .cards import Card
from .deck import deal
from .errors import CascadeLimitExceeded, IllegalBotMove, InvalidRoster, Rejection
from .rules_schema import DECK_SIZE, DEFAULT_RULES, RuleSet
from .state import Seat, SessionState
from .turns import Intent, apply_intent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeatSpec:
    id: str
    name: str
    is_bot: bool = False


@dataclass(frozen=True)
class BotMove:
    seat_id: str
    intent: Intent
    description: str


class BotPolicy(Protocol):
    def decide(self, state: SessionState, seat_index: int, rules: RuleSet = ...):
        ...


def start_session(
    room_id: str,
    seats: Sequence[SeatSpec],
    *,
    rng: Random,
    rules: RuleSet = DEFAULT_RULES,
    max_players: Optional[int] = None,
    deck: Optional[Sequence[Card]] = None,
) -> SessionState:
    """Deal a new game for ``seats`` in seat order. Bot turns are not played here."""
    upper = rules.max_players if max_players is None else max_players
    if not rules.min_players <= len(seats) <= upper:
        raise InvalidRoster(f"Rooms need {rules.min_players} to {upper} players, got {len(seats)}.")
    ids = [seat.id for seat in seats]
    if len(set(ids)) != len(ids):
        raise InvalidRoster("Seat ids must be unique.")
    if len(seats) * rules.hand_size >= DECK_SIZE:
        raise InvalidRoster(f"A {DECK_SIZE}-card deck cannot deal {len(seats)} hands of {rules.hand_size}.")

    dealt = deal(
        len(seats),
        rng=rng,
        deck=deck,
        hand_size=rules.hand_size,
        opening_discard=rules.opening_discard,
    )
    state = SessionState(
        room_id=room_id,
        seats=tuple(
            Seat(id=spec.id, name=spec.name, hand=hand, is_bot=spec.is_bot)
            for spec, hand in zip(seats, dealt.hands)
        ),
        draw_pile=dealt.draw_pile,
        discard_pile=(dealt.opening_card,),
        set_aside=dealt.set_aside,
        current_color=dealt.opening_card.color,
        started=True,
        last_action="Game started!",
    )
    logger.info("Room %s started with %d seats", room_id, len(seats))
    return state


def run_bot_turns(
    state: SessionState,
    policy: BotPolicy,
    *,
    rng: Random,
    rules: RuleSet = DEFAULT_RULES,
) -> Tuple[SessionState, List[BotMove]]:
    """Play bot seats until a human seat is current or the game ends.

    Bot moves go through ``apply_intent`` exactly like human moves.
    """
    moves: List[BotMove] = []
    turns = 0
    while not state.over and state.current_seat.is_bot:
        if turns >= rules.bot_turn_limit:
            raise CascadeLimitExceeded(f"Room {state.room_id} exceeded {rules.bot_turn_limit} bot turns.")
        index = state.current_seat_index
        seat = state.seats[index]
        decision = policy.decide(state, index, rules)
        for intent in decision.intents(seat.id):
            try:
                state = apply_intent(state, intent, rng=rng, rules=rules)
            except Rejection as exc:
                raise IllegalBotMove(f"Bot {seat.id} in room {state.room_id}: {exc}") from exc
            moves.append(BotMove(seat.id, intent, state.last_action))
            if state.over:
                break
        turns += 1
    return state, moves


def settle(
    state: SessionState,
    intent: Optional[Intent],
    policy: BotPolicy,
    *,
    rng: Random,
    rules: RuleSet = DEFAULT_RULES,
) -> Tuple[SessionState, List[BotMove]]:
    """Apply ``intent`` (if any) and then every bot turn it hands control to."""
    if intent is not None:
        state = apply_intent(state, intent, rng=rng, rules=rules)
    return run_bot_turns(state, policy, rng=rng, rules=rules)
