"""Resolution of played-card effects and the turn advance that follows."""

from __future__ import annotations

from dataclasses import replace

from .cards import Card, Color, Face
from .state import SessionState


def advance_turn(state: SessionState, steps: int = 1) -> SessionState:
    """Move the current seat ``steps`` seats along the direction of play."""
    return replace(state, current_seat_index=state.next_index(steps))


def resolve_card(state: SessionState, card: Card, color: Color, actor: str) -> SessionState:
    """Apply the effect of ``card`` (already on the discard pile) and pass the turn.

    ``color`` is the color the table continues in: the chosen color for wild
    cards, the card's own color otherwise. Skip, and reverse with two seats,
    pass over exactly one seat.
    """
    description = f"{actor} played {card}"
    steps = 1
    direction = state.direction
    pending = state.pending_draw_count

    if card.face is Face.WILD:
        description = f"{actor} played Wild! Color: {color}"
    elif card.face is Face.WILD_DRAW_FOUR:
        pending += 4
        description = f"{actor} played Wild Draw Four! Color: {color}"
    elif card.face is Face.SKIP:
        steps = 2
        description += " - next player skipped!"
    elif card.face is Face.REVERSE:
        direction = -direction
        if len(state.seats) == 2:
            steps = 2
        description += " - direction reversed!"
    elif card.face is Face.DRAW_TWO:
        pending += 2
        description += " - next player must draw 2!"

    resolved = replace(
        state,
        current_color=color,
        direction=direction,
        pending_draw_count=pending,
        last_action=description,
    )
    return advance_turn(resolved, steps)
