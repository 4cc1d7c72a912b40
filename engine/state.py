"""Immutable session state for UNO."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Tuple

from .cards import Card, Color
from .errors import UnknownSeat


class Phase(Enum):
    NOT_STARTED = auto()
    AWAITING_SEAT = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class Seat:
    id: str
    name: str
    hand: Tuple[Card, ...] = ()
    is_bot: bool = False
    has_declared_low_hand: bool = False

    def with_hand(self, hand: Tuple[Card, ...]) -> "Seat":
        """Return a copy holding ``hand``; the declaration only survives a one-card hand."""
        declared = self.has_declared_low_hand and len(hand) == 1
        return replace(self, hand=tuple(hand), has_declared_low_hand=declared)


@dataclass(frozen=True)
class SessionState:
    room_id: str
    seats: Tuple[Seat, ...]
    draw_pile: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    set_aside: Tuple[Card, ...] = ()
    current_seat_index: int = 0
    direction: int = 1
    current_color: Optional[Color] = None
    pending_draw_count: int = 0
    started: bool = False
    over: bool = False
    winner_id: Optional[str] = None
    last_action: str = ""
    version: int = field(default=0, compare=False)

    @property
    def phase(self) -> Phase:
        if self.over:
            return Phase.GAME_OVER
        if not self.started:
            return Phase.NOT_STARTED
        return Phase.AWAITING_SEAT

    @property
    def top_card(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def current_seat(self) -> Seat:
        return self.seats[self.current_seat_index]

    def seat_index(self, seat_id: str) -> int:
        for index, seat in enumerate(self.seats):
            if seat.id == seat_id:
                return index
        raise UnknownSeat(f"Seat {seat_id!r} is not part of room {self.room_id}.")

    def next_index(self, steps: int = 1) -> int:
        count = len(self.seats)
        return (self.current_seat_index + steps * self.direction) % count

    def with_seat(self, index: int, seat: Seat) -> "SessionState":
        seats = list(self.seats)
        seats[index] = seat
        return replace(self, seats=tuple(seats))

    def total_cards(self) -> int:
        """Count every card in the session, including cards out of circulation."""
        in_hands = sum(len(seat.hand) for seat in self.seats)
        return len(self.draw_pile) + len(self.discard_pile) + len(self.set_aside) + in_hands

    def hand_sizes(self) -> Tuple[int, ...]:
        return tuple(len(seat.hand) for seat in self.seats)
