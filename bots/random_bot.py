"""Random baseline bot for simulations."""

from __future__ import annotations

import random
from typing import Optional

from engine.cards import PLAYABLE_COLORS
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.state import SessionState

from .base import DRAW, BotDecision, BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def decide(self, state: SessionState, seat_index: int, rules: RuleSet = DEFAULT_RULES) -> BotDecision:
        legal = self.legal_indices(state, seat_index, rules)
        if not legal:
            return DRAW
        hand = state.seats[seat_index].hand
        index = self._rng.choice(legal)
        color = self._rng.choice(PLAYABLE_COLORS) if hand[index].is_wild() else None
        return BotDecision(index, color, declare_low_hand=len(hand) == 2)
