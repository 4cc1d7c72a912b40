from dataclasses import replace
from random import Random

import pytest

from engine.cards import Card, Color, Face
from engine.errors import (
    DeclarationRejected,
    GameNotActive,
    IllegalMove,
    InvalidCardIndex,
    MissingColorChoice,
    NotYourTurn,
    UnknownSeat,
)
from engine.state import Phase, Seat, SessionState
from engine.turns import DeclareLowHand, DrawCard, PlayCard, apply_intent


def card(color: str, face: str) -> Card:
    return Card(Color(color), Face(face))


def table(hands, top, *, color=None, pending=0, current=0, deck=None, bots=()):
    seats = tuple(
        Seat(id=f"p{index}", name=f"Player {index}", hand=tuple(hand), is_bot=index in bots)
        for index, hand in enumerate(hands)
    )
    return SessionState(
        room_id="ROOM",
        seats=seats,
        draw_pile=tuple(deck) if deck is not None else (card("yellow", "1"), card("yellow", "2"), card("yellow", "3"), card("yellow", "4")),
        discard_pile=(top,),
        current_seat_index=current,
        current_color=color or top.color,
        pending_draw_count=pending,
        started=True,
    )


def test_play_matching_color_passes_turn():
    state = table([[card("red", "5"), card("green", "1")], [card("blue", "5"), card("yellow", "2")]], card("red", "3"))

    after = apply_intent(state, PlayCard("p0", 0), rng=Random(0))

    assert after.current_color is Color.RED
    assert after.current_seat_index == 1
    assert after.top_card == card("red", "5")
    assert after.seats[0].hand == (card("green", "1"),)
    assert after.version == state.version + 1
    assert after.phase is Phase.AWAITING_SEAT


def test_rejections_leave_state_unchanged():
    state = table([[card("blue", "4"), card("green", "1")], [card("blue", "5")]], card("red", "3"))

    with pytest.raises(NotYourTurn):
        apply_intent(state, PlayCard("p1", 0), rng=Random(0))
    with pytest.raises(InvalidCardIndex):
        apply_intent(state, PlayCard("p0", 2), rng=Random(0))
    with pytest.raises(InvalidCardIndex):
        apply_intent(state, PlayCard("p0", -1), rng=Random(0))
    with pytest.raises(IllegalMove):
        apply_intent(state, PlayCard("p0", 0), rng=Random(0))
    with pytest.raises(UnknownSeat):
        apply_intent(state, DrawCard("ghost"), rng=Random(0))

    assert state.seats[0].hand == (card("blue", "4"), card("green", "1"))
    assert state.discard_pile == (card("red", "3"),)
    assert state.current_seat_index == 0
    assert state.version == 0


def test_intents_rejected_when_game_not_active():
    state = table([[card("red", "5")], [card("blue", "5")]], card("red", "3"))

    with pytest.raises(GameNotActive):
        apply_intent(replace(state, started=False), DrawCard("p0"), rng=Random(0))
    with pytest.raises(GameNotActive):
        apply_intent(replace(state, over=True), DrawCard("p0"), rng=Random(0))


def test_emptying_hand_wins_without_card_effects():
    state = table([[card("blue", "skip")], [card("blue", "5"), card("red", "1")], [card("green", "5")]], card("blue", "3"))

    after = apply_intent(state, PlayCard("p0", 0), rng=Random(0))

    assert after.over
    assert after.winner_id == "p0"
    assert after.phase is Phase.GAME_OVER
    assert after.current_seat_index == 0
    assert after.last_action == "Player 0 wins!"


def test_winning_wild_draw_four_applies_nothing():
    state = table([[card("wild", "wild-draw-four")], [card("blue", "5")]], card("blue", "3"))

    after = apply_intent(state, PlayCard("p0", 0, Color.GREEN), rng=Random(0))

    assert after.over
    assert after.current_color is Color.BLUE
    assert after.pending_draw_count == 0


def test_draw_ends_turn_even_if_playable():
    state = table([[card("green", "1"), card("green", "2")], [card("blue", "5")]], card("red", "3"), deck=[card("red", "8"), card("blue", "1")])

    after = apply_intent(state, DrawCard("p0"), rng=Random(0))

    assert after.seats[0].hand[-1] == card("red", "8")
    assert len(after.seats[0].hand) == 3
    assert after.draw_pile == (card("blue", "1"),)
    assert after.current_seat_index == 1
    assert after.last_action == "Player 0 drew a card"


def test_draw_takes_pending_penalty():
    state = table([[card("green", "1")], [card("blue", "5"), card("blue", "6")]], card("red", "draw-two"), pending=4, current=1)

    after = apply_intent(state, DrawCard("p1"), rng=Random(0))

    assert len(after.seats[1].hand) == 6
    assert after.pending_draw_count == 0
    assert after.current_seat_index == 0
    assert after.draw_pile == ()


def test_draw_with_empty_pile_reshuffles_discards():
    state = table([[card("green", "1"), card("green", "2")], [card("blue", "5")]], card("red", "3"), deck=[])

    discards = (card("red", "1"), card("blue", "2"), card("green", "3"), card("yellow", "4"), card("red", "9"))
    state = replace(state, discard_pile=discards)

    after = apply_intent(state, DrawCard("p0"), rng=Random(5))

    assert after.discard_pile == (card("red", "9"),)
    assert len(after.draw_pile) == 3
    assert len(after.seats[0].hand) == 3
    assert after.total_cards() == state.total_cards()


def test_human_wild_requires_color():
    state = table([[card("wild", "wild"), card("green", "1")], [card("blue", "5")]], card("red", "3"))

    with pytest.raises(MissingColorChoice):
        apply_intent(state, PlayCard("p0", 0), rng=Random(0))
    with pytest.raises(IllegalMove):
        apply_intent(state, PlayCard("p0", 0, Color.WILD), rng=Random(0))

    after = apply_intent(state, PlayCard("p0", 0, Color.YELLOW), rng=Random(0))
    assert after.current_color is Color.YELLOW
    assert after.last_action == "Player 0 played Wild! Color: yellow"


def test_bot_wild_defaults_to_red():
    state = table([[card("wild", "wild"), card("green", "1")], [card("blue", "5")]], card("blue", "3"), bots=(0,))

    after = apply_intent(state, PlayCard("p0", 0), rng=Random(0))

    assert after.current_color is Color.RED


def test_chosen_color_ignored_for_colored_card():
    state = table([[card("red", "5"), card("green", "1")], [card("blue", "5")]], card("red", "3"))

    after = apply_intent(state, PlayCard("p0", 0, Color.BLUE), rng=Random(0))

    assert after.current_color is Color.RED


def test_low_hand_declaration_outside_turn():
    state = table([[card("red", "5"), card("green", "1")], [card("blue", "5")]], card("red", "3"))

    after = apply_intent(state, DeclareLowHand("p1"), rng=Random(0))
    assert after.seats[1].has_declared_low_hand
    assert after.current_seat_index == 0

    with pytest.raises(DeclarationRejected):
        apply_intent(state, DeclareLowHand("p0"), rng=Random(0))


def test_low_hand_flag_cleared_when_hand_grows():
    state = table([[card("red", "5"), card("green", "1")], [card("blue", "5"), card("blue", "6")]], card("red", "3"))

    state = apply_intent(state, PlayCard("p0", 0), rng=Random(0))
    assert not state.seats[0].has_declared_low_hand
    state = apply_intent(state, DeclareLowHand("p0"), rng=Random(0))
    assert state.seats[0].has_declared_low_hand

    state = apply_intent(state, DrawCard("p1"), rng=Random(0))
    state = apply_intent(state, DrawCard("p0"), rng=Random(0))
    assert len(state.seats[0].hand) == 2
    assert not state.seats[0].has_declared_low_hand
