"""Baseline bot focused on trump management."""

from __future__ import annotations

from typing import Sequence

from engine.cards import Card
from engine.opponent import TrickContext
from engine.rules import TrumpSuit

from .base import by_strength, winning_cards
from .baseline_greedy import GreedyBot


class TrumpManagerBot(GreedyBot):
    """Greedy play that saves trumps for tricks it cannot win otherwise."""

    name = "TrumpManager"

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        if not isinstance(trick.rule_set, TrumpSuit):
            return super().choose_card(hand, trick)
        if not hand:
            raise RuntimeError("No cards available for bot.")

        trump = trick.rule_set.trump
        non_trump = [card for card in hand if card.suit is not trump]
        if trick.is_leading():
            return by_strength(non_trump or hand)[-1]

        winners = winning_cards(hand, trick)
        plain_winners = [card for card in winners if card.suit is not trump]
        if plain_winners:
            return plain_winners[0]
        if winners:
            return winners[0]
        return by_strength(non_trump or hand)[0]
