"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List, Sequence

from engine.cards import Card, card_strength
from engine.opponent import OpponentPolicy, TrickContext


def by_strength(cards: Sequence[Card]) -> List[Card]:
    """Cards ordered weakest first; suit order breaks ties deterministically."""
    return sorted(cards, key=lambda c: (card_strength(c), c.suit.value))


def winning_cards(hand: Sequence[Card], trick: TrickContext) -> List[Card]:
    """Cards that would put the acting player on top of the trick so far."""
    return [card for card in by_strength(hand) if trick.winner_with(card) == trick.player_id]


class BotStrategy(OpponentPolicy):
    """Base class for bot policies."""

    name: str = "BaseBot"

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        """Return the first card in deal order."""
        if not hand:
            raise RuntimeError("No cards available for bot.")
        return hand[0]
