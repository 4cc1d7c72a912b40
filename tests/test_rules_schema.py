import pytest
from pydantic import ValidationError

from engine.cards import Color
from engine.rules_schema import RuleSet


def test_defaults_match_reference_rules():
    rules = RuleSet()
    assert rules.min_players == 2
    assert rules.max_players == 10
    assert rules.hand_size == 7
    assert rules.opening_discard == "remove"
    assert rules.stacking == "any"
    assert rules.wild_default() is Color.RED


def test_default_color_is_normalized():
    assert RuleSet(default_wild_color="Blue").wild_default() is Color.BLUE
    with pytest.raises(ValidationError):
        RuleSet(default_wild_color="wild")
    with pytest.raises(ValidationError):
        RuleSet(default_wild_color="purple")


def test_table_size_validation():
    with pytest.raises(ValidationError):
        RuleSet(min_players=4, max_players=3)
    with pytest.raises(ValidationError):
        RuleSet(max_players=16)
    with pytest.raises(ValidationError):
        RuleSet(min_players=1)
    assert RuleSet(max_players=14).max_players == 14


def test_policy_literals():
    with pytest.raises(ValidationError):
        RuleSet(stacking="sometimes")
    with pytest.raises(ValidationError):
        RuleSet(opening_discard="bury")
