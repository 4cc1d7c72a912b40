"""Exceptions raised by the UNO rules engine."""

from __future__ import annotations


class Rejection(ValueError):
    """Base class for intents refused by the engine.

    A rejected intent never changes session state. ``code`` is a stable
    identifier for callers; the message is human readable.
    """

    code = "rejected"


class NotYourTurn(Rejection):
    """Raised when a seat acts while another seat is current."""

    code = "not_your_turn"


class InvalidCardIndex(Rejection):
    """Raised when a hand index is outside the seat's hand."""

    code = "invalid_card_index"


class IllegalMove(Rejection):
    """Raised when a card cannot be played on the current table."""

    code = "illegal_move"


class MissingColorChoice(IllegalMove):
    """Raised when a human plays a wild card without choosing a color."""

    code = "missing_color_choice"


class InvalidRoster(Rejection):
    """Raised when a session is started with too few or too many seats."""

    code = "invalid_roster"


class GameNotActive(Rejection):
    """Raised when an intent arrives before the deal or after game over."""

    code = "game_not_active"


class DeclarationRejected(Rejection):
    """Raised when a low-hand declaration is made without exactly one card."""

    code = "declaration_rejected"


class UnknownSeat(Rejection):
    """Raised when the seat id is not part of the session."""

    code = "unknown_seat"


class DegenerateReshuffle(AssertionError):
    """Raised when a reshuffle is attempted with fewer than two discards.

    Signals a broken invariant, never a user error.
    """


class CascadeLimitExceeded(RuntimeError):
    """Raised when bot turns keep cascading past the configured limit."""


class IllegalBotMove(RuntimeError):
    """Raised when a bot policy submits an intent the engine rejects."""
