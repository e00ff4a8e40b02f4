"""Deck creation utilities."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from .cards import MAX_RANK, MIN_RANK, SUIT_ORDER, Card

DECK_SIZE = 52
PLAYER_COUNT = 4
CARDS_PER_PLAYER = 13


class DealError(ValueError):
    """Raised when a deck cannot cover the requested deal."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck (suit-major, rank-minor)."""
    return [Card(suit, rank) for suit in SUIT_ORDER for rank in range(MIN_RANK, MAX_RANK + 1)]


def shuffle(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``; the input is left untouched."""
    if rng is None:
        rng = Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def deal(
    deck: Sequence[Card],
    num_players: int = PLAYER_COUNT,
    per_player: int = CARDS_PER_PLAYER,
) -> List[List[Card]]:
    """Split the top ``num_players * per_player`` cards into contiguous hands."""
    if num_players <= 0 or per_player <= 0:
        raise DealError("Deal needs at least one player and one card per player.")
    needed = num_players * per_player
    if len(deck) < needed:
        raise DealError(f"Deck has {len(deck)} cards, {needed} are needed.")
    return [list(deck[seat * per_player : (seat + 1) * per_player]) for seat in range(num_players)]
