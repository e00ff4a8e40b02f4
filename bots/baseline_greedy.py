"""Baseline greedy bot."""

from __future__ import annotations

from typing import Sequence

from engine.cards import Card
from engine.opponent import TrickContext

from .base import BotStrategy, by_strength, winning_cards


class GreedyBot(BotStrategy):
    name = "Greedy"

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        if not hand:
            raise RuntimeError("No cards available for bot.")
        if trick.is_leading():
            return by_strength(hand)[-1]
        winners = winning_cards(hand, trick)
        if winners:
            return winners[0]
        return by_strength(hand)[0]
