"""Baseline heuristic bot: wilds first, then action cards, then anything legal."""

from __future__ import annotations

from typing import Sequence

from engine.cards import PLAYABLE_COLORS, Card, CardKind, Color, count_colors
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.state import SessionState

from .base import DRAW, BotDecision, BotStrategy

# Lower sorts first; Python's sort is stable so hand order breaks ties.
KIND_PRIORITY = {CardKind.WILD: 0, CardKind.ACTION: 1, CardKind.NUMBER: 2}


def choose_color(remaining: Sequence[Card]) -> Color:
    """Pick the most common color among ``remaining``; red, blue, green, yellow break ties."""
    counts = count_colors(remaining)
    best = PLAYABLE_COLORS[0]
    for color in PLAYABLE_COLORS:
        if counts[color] > counts[best]:
            best = color
    return best


class HeuristicBot(BotStrategy):
    name = "Heuristic"

    def decide(self, state: SessionState, seat_index: int, rules: RuleSet = DEFAULT_RULES) -> BotDecision:
        legal = self.legal_indices(state, seat_index, rules)
        if not legal:
            return DRAW

        hand = state.seats[seat_index].hand
        index = sorted(legal, key=lambda i: KIND_PRIORITY[hand[i].kind])[0]
        card = hand[index]

        color = None
        if card.is_wild():
            remaining = hand[:index] + hand[index + 1 :]
            color = choose_color(remaining)
        return BotDecision(index, color, declare_low_hand=len(hand) == 2)
