"""Validation schema for UNO rules configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from .cards import Color, parse_color

DECK_SIZE = 108


class RuleSet(BaseModel):
    min_players: int = Field(2, ge=2, description="Smallest roster allowed at start.")
    max_players: int = Field(10, ge=2, description="Largest roster allowed at start.")
    hand_size: int = Field(7, ge=1, description="Cards dealt to each seat.")
    opening_discard: Literal["remove", "return"] = Field(
        "remove",
        description="Where rejected non-number opening cards go: out of circulation, or back into the deck.",
    )
    stacking: Literal["any", "strict"] = Field(
        "any",
        description="'any' lets either draw card answer any pending draw; 'strict' only same-or-higher rank.",
    )
    default_wild_color: str = Field("red", description="Color used when a wild arrives without a choice.")
    require_human_color: bool = Field(True, description="Reject wild plays from human seats without a color.")
    bot_turn_limit: int = Field(5000, ge=1, description="Maximum bot turns applied in one cascade.")

    @field_validator("default_wild_color")
    @classmethod
    def validate_default_color(cls, value: str) -> str:
        return parse_color(value).value

    @model_validator(mode="after")
    def validate_table_size(self) -> "RuleSet":
        if self.max_players < self.min_players:
            raise ValueError("max_players must be at least min_players.")
        if self.max_players * self.hand_size >= DECK_SIZE:
            raise ValueError(
                f"{self.max_players} hands of {self.hand_size} leave no cards for the draw pile."
            )
        return self

    def wild_default(self) -> Color:
        return Color(self.default_wild_color)


DEFAULT_RULES = RuleSet()
