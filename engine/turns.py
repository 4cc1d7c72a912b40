"""Turn engine: validates player intents and produces the next session state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from random import Random
from typing import Optional, Union

from .cards import Color
from .deck import draw_cards
from .effects import advance_turn, resolve_card
from .errors import DeclarationRejected, GameNotActive, IllegalMove, InvalidCardIndex, MissingColorChoice, NotYourTurn
from .mechanics import is_legal
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayCard:
    seat_id: str
    hand_index: int
    chosen_color: Optional[Color] = None


@dataclass(frozen=True)
class DrawCard:
    seat_id: str


@dataclass(frozen=True)
class DeclareLowHand:
    seat_id: str


Intent = Union[PlayCard, DrawCard, DeclareLowHand]


def apply_intent(
    state: SessionState,
    intent: Intent,
    *,
    rng: Random,
    rules: RuleSet = DEFAULT_RULES,
) -> SessionState:
    """Return the state after ``intent``; raise a ``Rejection`` and leave ``state`` untouched otherwise."""
    if isinstance(intent, PlayCard):
        updated = play_card(state, intent, rules=rules)
    elif isinstance(intent, DrawCard):
        updated = draw_card(state, intent, rng=rng)
    elif isinstance(intent, DeclareLowHand):
        updated = declare_low_hand(state, intent)
    else:
        raise TypeError(f"Unsupported intent: {intent!r}")
    logger.debug("Room %s v%d: %s", updated.room_id, state.version + 1, updated.last_action)
    return replace(updated, version=state.version + 1)


def _require_turn(state: SessionState, seat_id: str) -> int:
    if not state.started or state.over:
        raise GameNotActive(f"Room {state.room_id} is not accepting moves.")
    index = state.seat_index(seat_id)
    if index != state.current_seat_index:
        raise NotYourTurn(f"It is {state.current_seat.name}'s turn.")
    return index


def play_card(state: SessionState, intent: PlayCard, *, rules: RuleSet = DEFAULT_RULES) -> SessionState:
    index = _require_turn(state, intent.seat_id)
    seat = state.seats[index]
    if not 0 <= intent.hand_index < len(seat.hand):
        raise InvalidCardIndex(f"Hand index {intent.hand_index} is out of range for {len(seat.hand)} cards.")

    card = seat.hand[intent.hand_index]
    top = state.top_card
    assert top is not None
    if not is_legal(card, top, state.current_color, state.pending_draw_count, rules.stacking):
        raise IllegalMove(f"{card} cannot be played on {top} (color {state.current_color}).")

    color = card.color
    if card.is_wild():
        if intent.chosen_color is Color.WILD:
            raise IllegalMove("Wild is not a playable color.")
        if intent.chosen_color is not None:
            color = intent.chosen_color
        elif rules.require_human_color and not seat.is_bot:
            raise MissingColorChoice(f"Choose a color when playing {card}.")
        else:
            color = rules.wild_default()

    hand = seat.hand[: intent.hand_index] + seat.hand[intent.hand_index + 1 :]
    updated = state.with_seat(index, seat.with_hand(hand))
    updated = replace(updated, discard_pile=state.discard_pile + (card,))

    if not hand:
        logger.info("Room %s won by %s", state.room_id, seat.name)
        return replace(updated, over=True, winner_id=seat.id, last_action=f"{seat.name} wins!")

    return resolve_card(updated, card, color, seat.name)


def draw_card(state: SessionState, intent: DrawCard, *, rng: Random) -> SessionState:
    """Draw one card, or the whole pending penalty, and end the turn."""
    index = _require_turn(state, intent.seat_id)
    seat = state.seats[index]
    count = state.pending_draw_count or 1
    drawn, pile, discards = draw_cards(count, state.draw_pile, state.discard_pile, rng=rng)

    updated = state.with_seat(index, seat.with_hand(seat.hand + drawn))
    if state.pending_draw_count:
        description = f"{seat.name} drew {len(drawn)} cards"
    else:
        description = f"{seat.name} drew a card"
    updated = replace(
        updated,
        draw_pile=pile,
        discard_pile=discards,
        pending_draw_count=0,
        last_action=description,
    )
    return advance_turn(updated)


def declare_low_hand(state: SessionState, intent: DeclareLowHand) -> SessionState:
    """Flag a one-card hand as declared; any seat may declare at any time during play."""
    if not state.started or state.over:
        raise GameNotActive(f"Room {state.room_id} is not accepting moves.")
    index = state.seat_index(intent.seat_id)
    seat = state.seats[index]
    if len(seat.hand) != 1:
        raise DeclarationRejected(f"{seat.name} holds {len(seat.hand)} cards, not one.")
    updated = state.with_seat(index, replace(seat, has_declared_low_hand=True))
    return replace(updated, last_action=f"{seat.name} called UNO!")
