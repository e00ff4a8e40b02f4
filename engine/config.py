"""Validation schema for game configuration."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .deck import CARDS_PER_PLAYER
from .rules import rule_set_index


class Timings(BaseModel):
    dealing_delay_ms: int = Field(500, ge=0, description="Pause before the cards appear.")
    dealing_animation_ms: int = Field(800, ge=0, description="Pause between dealing and the first play.")
    card_play_delay_ms: int = Field(1000, ge=0, description="Pause between the last card of a trick and its winner.")
    ai_play_delay_ms: int = Field(1200, ge=0, description="Pause before each computer card.")
    trick_evaluation_delay_ms: int = Field(2000, ge=0, description="How long a resolved trick stays on the table.")
    lead_delay_ms: int = Field(800, ge=0, description="Pause before a computer trick winner leads again.")

    @classmethod
    def instant(cls) -> "Timings":
        return cls(
            dealing_delay_ms=0,
            dealing_animation_ms=0,
            card_play_delay_ms=0,
            ai_play_delay_ms=0,
            trick_evaluation_delay_ms=0,
            lead_delay_ms=0,
        )


class GameConfig(BaseModel):
    rule_set: Union[int, str] = Field(0, description="Rule set index or id; stored as the index.")
    player_name: str = Field("", description="Display name for the human seat.")
    cards_per_player: int = Field(CARDS_PER_PLAYER, ge=1, le=CARDS_PER_PLAYER)
    seed: Optional[int] = Field(None, description="Seed for shuffling and opponent choices.")
    timings: Timings = Field(default_factory=Timings)

    @field_validator("rule_set")
    @classmethod
    def resolve_rule_set(cls, value: Union[int, str]) -> int:
        return rule_set_index(value)

    @field_validator("player_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()
