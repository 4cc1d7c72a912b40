"""Legal move generation for UNO."""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional

from .cards import Card, Color, Face

StackingRule = Literal["any", "strict"]


def can_stack(card: Card, top_card: Card, stacking: StackingRule = "any") -> bool:
    """Return True if ``card`` may answer a pending forced draw."""
    if not card.is_stacking():
        return False
    if stacking == "any":
        return True
    if card.face is Face.DRAW_TWO:
        return top_card.face is Face.DRAW_TWO
    return top_card.is_stacking()


def is_legal(
    card: Card,
    top_card: Card,
    current_color: Optional[Color],
    pending_draw_count: int,
    stacking: StackingRule = "any",
) -> bool:
    """Return True if ``card`` can be played on the current table."""
    if pending_draw_count > 0:
        return can_stack(card, top_card, stacking)
    if card.is_wild():
        return True
    if card.color is current_color:
        return True
    return card.face is top_card.face


def legal_moves(
    hand: Iterable[Card],
    top_card: Card,
    current_color: Optional[Color],
    pending_draw_count: int,
    stacking: StackingRule = "any",
) -> List[int]:
    """Return the hand indices that are legal to play, in hand order."""
    return [
        index
        for index, card in enumerate(hand)
        if is_legal(card, top_card, current_color, pending_draw_count, stacking)
    ]
