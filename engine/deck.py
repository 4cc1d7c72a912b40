"""Deck creation, dealing and reshuffling for UNO."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import List, Literal, Optional, Sequence, Tuple

from .cards import ACTION_FACES, NUMBER_FACES, PLAYABLE_COLORS, WILD_FACES, Card, CardKind, Color, Face
from .errors import DegenerateReshuffle
from .rules_schema import DECK_SIZE

logger = logging.getLogger(__name__)

WILD_COPIES = 4


def build_deck() -> List[Card]:
    """Return the ordered 108-card deck."""
    cards: List[Card] = []
    for color in PLAYABLE_COLORS:
        for face in NUMBER_FACES:
            copies = 1 if face is Face.ZERO else 2
            cards.extend(Card(color, face) for _ in range(copies))
        for face in ACTION_FACES:
            cards.extend(Card(color, face) for _ in range(2))
    for face in WILD_FACES:
        cards.extend(Card(Color.WILD, face) for _ in range(WILD_COPIES))
    assert len(cards) == DECK_SIZE
    return cards


def shuffled(cards: Sequence[Card], rng: Random) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``."""
    result = list(cards)
    rng.shuffle(result)
    return result


@dataclass(frozen=True)
class Deal:
    hands: Tuple[Tuple[Card, ...], ...]
    draw_pile: Tuple[Card, ...]
    opening_card: Card
    set_aside: Tuple[Card, ...]


def deal(
    seat_count: int,
    *,
    rng: Random,
    deck: Optional[Sequence[Card]] = None,
    hand_size: int = 7,
    opening_discard: Literal["remove", "return"] = "remove",
) -> Deal:
    """Deal ``hand_size`` cards per seat from the top, then pick an opening number card.

    The top of the pile is index 0. With ``opening_discard="remove"`` rejected
    opening cards leave circulation and are reported in ``set_aside``; with
    ``"return"`` they go back into the draw pile, which is reshuffled.
    """
    cards = list(deck) if deck is not None else shuffled(build_deck(), rng)
    needed = seat_count * hand_size
    if len(cards) <= needed:
        raise ValueError(f"Deck of {len(cards)} cards cannot deal {seat_count} hands of {hand_size}.")

    hands = tuple(tuple(cards[i * hand_size : (i + 1) * hand_size]) for i in range(seat_count))
    remaining = cards[needed:]

    set_aside: List[Card] = []
    while True:
        if not remaining:
            raise ValueError("Draw pile holds no number card for the opening discard.")
        candidate = remaining.pop(0)
        if candidate.kind is CardKind.NUMBER:
            break
        if opening_discard == "return":
            remaining.append(candidate)
            if all(card.kind is not CardKind.NUMBER for card in remaining):
                raise ValueError("Draw pile holds no number card for the opening discard.")
            rng.shuffle(remaining)
        else:
            set_aside.append(candidate)

    if set_aside:
        logger.debug("Opening search removed %d cards from circulation", len(set_aside))
    return Deal(
        hands=hands,
        draw_pile=tuple(remaining),
        opening_card=candidate,
        set_aside=tuple(set_aside),
    )


def reshuffle(
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    *,
    rng: Random,
) -> Tuple[Tuple[Card, ...], Tuple[Card, ...]]:
    """Turn all but the top discard into a fresh shuffled draw pile.

    Returns ``(draw_pile, discard_pile)``. The current draw pile must be empty.
    """
    if len(discard_pile) < 2:
        raise DegenerateReshuffle(f"Cannot reshuffle a discard pile of {len(discard_pile)} card(s).")
    if draw_pile:
        raise DegenerateReshuffle("Reshuffle requested while the draw pile still has cards.")
    top = discard_pile[-1]
    new_pile = shuffled(discard_pile[:-1], rng)
    logger.debug("Reshuffled %d discards into the draw pile", len(new_pile))
    return tuple(new_pile), (top,)


def draw_cards(
    count: int,
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    *,
    rng: Random,
) -> Tuple[Tuple[Card, ...], Tuple[Card, ...], Tuple[Card, ...]]:
    """Draw up to ``count`` cards, reshuffling the discard pile whenever the draw pile runs out.

    Returns ``(drawn, draw_pile, discard_pile)``. When both piles are exhausted
    the draw stops short.
    """
    pile = tuple(draw_pile)
    discards = tuple(discard_pile)
    drawn: List[Card] = []
    while len(drawn) < count:
        if not pile:
            if len(discards) < 2:
                logger.warning("Draw stopped after %d of %d cards: no cards left to reshuffle", len(drawn), count)
                break
            pile, discards = reshuffle(pile, discards, rng=rng)
        take = min(count - len(drawn), len(pile))
        drawn.extend(pile[:take])
        pile = pile[take:]
    return tuple(drawn), pile, discards
