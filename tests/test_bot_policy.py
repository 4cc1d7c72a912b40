from random import Random

from bots.base import BotDecision
from bots.heuristic import HeuristicBot, choose_color
from bots.random_bot import RandomBot
from engine.cards import Card, Color, Face
from engine.game import run_bot_turns
from engine.state import Seat, SessionState
from engine.turns import DeclareLowHand, DrawCard, PlayCard


def card(color: str, face: str) -> Card:
    return Card(Color(color), Face(face))


def table(bot_hand, top, *, pending=0, other_hand=None, other_is_bot=False):
    other = other_hand or [card("yellow", "1"), card("yellow", "2"), card("yellow", "3")]
    return SessionState(
        room_id="ROOM",
        seats=(
            Seat(id="bot", name="Bot 1", hand=tuple(bot_hand), is_bot=True),
            Seat(id="human", name="Alice", hand=tuple(other), is_bot=other_is_bot),
        ),
        draw_pile=tuple(card("green", str(n)) for n in range(10)),
        discard_pile=(top,),
        current_color=top.color,
        pending_draw_count=pending,
        started=True,
    )


def test_prefers_wild_then_action_then_number():
    bot = HeuristicBot()
    hand = [card("red", "5"), card("red", "skip"), card("blue", "3"), card("wild", "wild"), card("red", "reverse")]
    decision = bot.decide(table(hand, card("red", "3")), 0)
    assert decision.hand_index == 3

    hand = [card("red", "5"), card("red", "skip"), card("blue", "3"), card("red", "reverse")]
    decision = bot.decide(table(hand, card("red", "3")), 0)
    assert decision.hand_index == 1
    assert decision.chosen_color is None

    hand = [card("green", "5"), card("blue", "3"), card("red", "8")]
    decision = bot.decide(table(hand, card("red", "3")), 0)
    assert decision.hand_index == 1


def test_draws_without_legal_card():
    decision = HeuristicBot().decide(table([card("green", "5"), card("wild", "wild")], card("red", "draw-two"), pending=2), 0)
    assert decision == BotDecision()
    assert decision.intents("bot") == [DrawCard("bot")]


def test_wild_color_follows_remaining_hand():
    hand = [card("green", "1"), card("wild", "wild"), card("green", "7"), card("blue", "2")]
    decision = HeuristicBot().decide(table(hand, card("red", "3")), 0)
    assert decision.hand_index == 1
    assert decision.chosen_color is Color.GREEN


def test_color_ties_follow_precedence():
    assert choose_color([card("yellow", "1"), card("blue", "2")]) is Color.BLUE
    assert choose_color([card("wild", "wild")]) is Color.RED
    assert choose_color([]) is Color.RED


def test_declares_when_two_cards_remain():
    decision = HeuristicBot().decide(table([card("red", "5"), card("blue", "9")], card("red", "3")), 0)
    assert decision.declare_low_hand
    assert decision.intents("bot") == [PlayCard("bot", 0, None), DeclareLowHand("bot")]


def test_cascade_stops_at_human_seat():
    state = table([card("red", "5"), card("blue", "9")], card("red", "3"))

    after, moves = run_bot_turns(state, HeuristicBot(), rng=Random(0))

    assert after.current_seat_index == 1
    assert after.seats[0].hand == (card("blue", "9"),)
    assert after.seats[0].has_declared_low_hand
    assert [type(move.intent) for move in moves] == [PlayCard, DeclareLowHand]
    assert after.version == 2


def test_cascade_skips_repeat_bot_in_two_seat_game():
    state = table([card("red", "skip"), card("red", "7"), card("blue", "1")], card("red", "3"))

    after, moves = run_bot_turns(state, HeuristicBot(), rng=Random(0))

    assert after.current_seat_index == 1
    assert len(after.seats[0].hand) == 1
    assert len(moves) == 3


def test_random_bot_only_plays_legal_cards():
    bot = RandomBot(seed=11)
    hand = [card("red", "5"), card("blue", "4"), card("wild", "wild"), card("green", "2")]
    state = table(hand, card("red", "3"))
    for _ in range(20):
        decision = bot.decide(state, 0)
        assert decision.hand_index in (0, 2)
        if decision.hand_index == 2:
            assert decision.chosen_color in (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)
