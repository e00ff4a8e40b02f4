"""Baseline counter bot aiming to shed low cards."""

from __future__ import annotations

from typing import Sequence

from engine.cards import Card
from engine.opponent import TrickContext

from .base import BotStrategy, by_strength


class CounterBot(BotStrategy):
    name = "Counter"

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        if not hand:
            raise RuntimeError("No cards available for bot.")
        return by_strength(hand)[0]
