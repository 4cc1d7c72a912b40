"""Card-related data structures and helpers for UNO."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping


class Color(Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"

    def __str__(self) -> str:
        return self.value


class Face(Enum):
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw-two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild-draw-four"

    def __str__(self) -> str:
        return self.value


class CardKind(Enum):
    NUMBER = auto()
    ACTION = auto()
    WILD = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Playable colors in precedence order; ties in bot color choice resolve to the first.
PLAYABLE_COLORS: tuple[Color, ...] = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)

NUMBER_FACES: tuple[Face, ...] = (
    Face.ZERO,
    Face.ONE,
    Face.TWO,
    Face.THREE,
    Face.FOUR,
    Face.FIVE,
    Face.SIX,
    Face.SEVEN,
    Face.EIGHT,
    Face.NINE,
)

ACTION_FACES: tuple[Face, ...] = (Face.SKIP, Face.REVERSE, Face.DRAW_TWO)
WILD_FACES: tuple[Face, ...] = (Face.WILD, Face.WILD_DRAW_FOUR)

# Faces that may answer a pending forced draw.
STACKING_FACES: frozenset[Face] = frozenset({Face.DRAW_TWO, Face.WILD_DRAW_FOUR})


@dataclass(frozen=True)
class Card:
    """Immutable representation of an UNO card.

    Cards carry no identity beyond their value: two red fives are equal.
    """

    color: Color
    face: Face

    def __post_init__(self) -> None:
        if (self.face in WILD_FACES) != (self.color is Color.WILD):
            raise ValueError(f"Face {self.face} cannot carry color {self.color}.")

    @property
    def kind(self) -> CardKind:
        if self.face in WILD_FACES:
            return CardKind.WILD
        if self.face in ACTION_FACES:
            return CardKind.ACTION
        return CardKind.NUMBER

    def is_wild(self) -> bool:
        return self.kind is CardKind.WILD

    def is_stacking(self) -> bool:
        return self.face in STACKING_FACES

    def __str__(self) -> str:
        return card_label(self)


def parse_color(value: str) -> Color:
    """Return the playable color named by ``value``; wild is not a choosable color."""
    try:
        color = Color(value.lower())
    except ValueError as exc:
        raise ValueError(f"Unknown color: {value!r}") from exc
    if color is Color.WILD:
        raise ValueError("Wild is not a playable color.")
    return color


def count_colors(cards: Iterable[Card]) -> dict[Color, int]:
    """Count the non-wild cards of each playable color."""
    counts = {color: 0 for color in PLAYABLE_COLORS}
    for card in cards:
        if card.color is not Color.WILD:
            counts[card.color] += 1
    return counts


def serialize_card(card: Card) -> dict[str, str]:
    return {"kind": str(card.kind), "color": card.color.value, "face": card.face.value}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    return Card(Color(payload["color"].lower()), Face(payload["face"].lower()))


def card_label(card: Card) -> str:
    if card.is_wild():
        return card.face.value.replace("-", " ").title()
    return f"{card.color.value.title()} {card.face.value.replace('-', ' ').title()}"
