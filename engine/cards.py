"""Card-related data structures and helpers for the four-seat trick game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class Suit(Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


# Deck order, suit-major.
SUIT_ORDER: list[Suit] = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]

ACE = 1
MIN_RANK = 1
MAX_RANK = 13

# Aces rank above kings when comparing cards.
ACE_VALUE = 14

RANK_NAMES: dict[int, str] = {
    1: "Ace",
    11: "Jack",
    12: "Queen",
    13: "King",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(f"Rank must be between {MIN_RANK} and {MAX_RANK}, got {self.rank!r}.")

    @property
    def id(self) -> str:
        return f"{self.suit.value}-{self.rank}"

    @property
    def value(self) -> int:
        return ACE_VALUE if self.rank == ACE else self.rank


def card_strength(card: Card) -> int:
    """Return the comparison value of a card (aces high)."""
    return card.value


def rank_label(rank: int) -> str:
    return RANK_NAMES.get(rank, str(rank))


def card_label(card: Card) -> str:
    return f"{rank_label(card.rank)} of {card.suit.value.title()}"


def card_from_id(card_id: str) -> Card:
    """Parse a ``"<suit>-<rank>"`` identifier."""
    suit_name, sep, rank_text = card_id.strip().lower().partition("-")
    if not sep or not rank_text.isdigit():
        raise ValueError(f"Malformed card id: {card_id!r}")
    try:
        suit = Suit(suit_name)
    except ValueError as exc:
        raise ValueError(f"Unknown suit in card id: {card_id!r}") from exc
    return Card(suit, int(rank_text))


def serialize_card(card: Card) -> dict[str, Union[str, int]]:
    return {"id": card.id, "suit": card.suit.value, "rank": card.rank, "value": card.value}


def deserialize_card(payload: Mapping[str, object]) -> Card:
    if "id" in payload and payload["id"] is not None:
        return card_from_id(str(payload["id"]))
    try:
        suit = Suit(str(payload["suit"]).lower())
        rank = int(payload["rank"])  # type: ignore[arg-type]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed card payload: {dict(payload)!r}") from exc
    return Card(suit, rank)
