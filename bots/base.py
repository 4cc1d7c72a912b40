"""Common bot strategy interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from engine.cards import Color
from engine.mechanics import legal_moves
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.state import SessionState
from engine.turns import DeclareLowHand, DrawCard, Intent, PlayCard


@dataclass(frozen=True)
class BotDecision:
    """A bot's move: play ``hand_index`` (or draw when None), optionally declaring a low hand."""

    hand_index: Optional[int] = None
    chosen_color: Optional[Color] = None
    declare_low_hand: bool = False

    def intents(self, seat_id: str) -> List[Intent]:
        """Translate the decision into the intents submitted on the bot's behalf."""
        if self.hand_index is None:
            return [DrawCard(seat_id)]
        moves: List[Intent] = [PlayCard(seat_id, self.hand_index, self.chosen_color)]
        if self.declare_low_hand:
            moves.append(DeclareLowHand(seat_id))
        return moves


DRAW = BotDecision()


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def legal_indices(self, state: SessionState, seat_index: int, rules: RuleSet = DEFAULT_RULES) -> List[int]:
        top = state.top_card
        assert top is not None
        hand = state.seats[seat_index].hand
        return legal_moves(hand, top, state.current_color, state.pending_draw_count, rules.stacking)

    def decide(self, state: SessionState, seat_index: int, rules: RuleSet = DEFAULT_RULES) -> BotDecision:
        """Return the move for the seat at ``seat_index``; plays the first legal card by default."""
        legal = self.legal_indices(state, seat_index, rules)
        if not legal:
            return DRAW
        hand = state.seats[seat_index].hand
        card = hand[legal[0]]
        color = rules.wild_default() if card.is_wild() else None
        return BotDecision(legal[0], color, declare_low_hand=len(hand) == 2)
