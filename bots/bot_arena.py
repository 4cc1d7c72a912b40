"""Simple bot arena for UNO."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Sequence

from engine.game import SeatSpec, run_bot_turns, start_session
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.state import SessionState

from .base import BotDecision, BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "heuristic": HeuristicBot,
    "random": RandomBot,
}


class SeatedPolicy:
    """Route each seat's decision to its own strategy."""

    def __init__(self, bots: Sequence[BotStrategy]) -> None:
        self.bots = list(bots)

    def decide(self, state: SessionState, seat_index: int, rules: RuleSet = DEFAULT_RULES) -> BotDecision:
        return self.bots[seat_index].decide(state, seat_index, rules)


def run_match(
    bots: Sequence[BotStrategy],
    *,
    seed: int | None = None,
    rules: RuleSet = DEFAULT_RULES,
) -> dict:
    """Play one all-bot game to the end and summarize it."""
    rng = Random(seed)
    seats = [SeatSpec(id=f"bot_{index}", name=f"{bot.name} {index + 1}", is_bot=True) for index, bot in enumerate(bots)]
    state = start_session("arena", seats, rng=rng, rules=rules)
    state, moves = run_bot_turns(state, SeatedPolicy(bots), rng=rng, rules=rules)
    winner = state.seats[state.seat_index(state.winner_id)] if state.winner_id else None
    return {
        "winner_id": state.winner_id,
        "winner_name": winner.name if winner else None,
        "moves": len(moves),
        "hand_sizes": list(state.hand_sizes()),
        "total_cards": state.total_cards(),
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run bot-only UNO games.")
    parser.add_argument("--bots", nargs="+", default=["heuristic", "random"], choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    wins: Dict[str, int] = {}
    for game in range(args.n):
        bots = [BOT_REGISTRY[name]() for name in args.bots]
        result = run_match(bots, seed=args.seed + game)
        wins[result["winner_name"]] = wins.get(result["winner_name"], 0) + 1

    for name, count in sorted(wins.items(), key=lambda item: -item[1]):
        print(f"{name}: {count}/{args.n} wins")


if __name__ == "__main__":
    main()
