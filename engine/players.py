"""Seat registry: the human player and the three computer opponents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .cards import Card

HUMAN_PLAYER_ID = "player1"
DEFAULT_HUMAN_NAME = "Player"
OPPONENT_SEATS: tuple[tuple[str, str], ...] = (
    ("player2", "Alex"),
    ("player3", "Sam"),
    ("player4", "Jordan"),
)
MAX_NAME_LENGTH = 20

_TAG_RE = re.compile(r"<[^>]*>")
_UNSAFE_RE = re.compile(r"[<>'\"&]")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_ZERO_WIDTH_RE = re.compile(r"[\u200b-\u200d\ufeff]")
_SPACE_RE = re.compile(r"\s+")
_SPECIAL_RE = re.compile(r"[^\w\s]")


def sanitize_username(raw: Optional[str], max_length: int = MAX_NAME_LENGTH) -> str:
    """Reduce free-text input to a short, markup-free display name."""
    if not raw or not isinstance(raw, str):
        return ""
    cleaned = _TAG_RE.sub("", raw.strip())
    cleaned = _UNSAFE_RE.sub("", cleaned)
    cleaned = _CONTROL_RE.sub("", cleaned)
    cleaned = _ZERO_WIDTH_RE.sub("", cleaned)
    cleaned = _SPACE_RE.sub(" ", cleaned.strip())
    cleaned = _SPECIAL_RE.sub("", cleaned)
    return cleaned[:max_length].strip()


@dataclass
class Player:
    id: str
    name: str
    is_human: bool = False
    hand: List[Card] = field(default_factory=list)
    score: int = 0
    is_active: bool = False

    def has_card(self, card: Card) -> bool:
        return any(held.id == card.id for held in self.hand)

    def remove_card(self, card: Card) -> Card:
        for index, held in enumerate(self.hand):
            if held.id == card.id:
                return self.hand.pop(index)
        raise ValueError(f"{card.id} is not in {self.id}'s hand.")

    def card_count(self) -> int:
        return len(self.hand)


def display_name(player: Optional[Player]) -> str:
    if player is None or not player.name:
        return ""
    if player.is_human:
        return f"{player.name} (You)"
    return player.name


class PlayerRegistry:
    """Fixed four-seat table; seat 0 is always the human."""

    def __init__(self, human_name: str = "") -> None:
        self.players: List[Player] = [Player(HUMAN_PLAYER_ID, DEFAULT_HUMAN_NAME, is_human=True)]
        self.players.extend(Player(player_id, name) for player_id, name in OPPONENT_SEATS)
        if human_name:
            self.rename_human(human_name)

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)

    def __getitem__(self, index: int) -> Player:
        return self.players[index]

    @property
    def human(self) -> Player:
        return self.players[0]

    @property
    def opponents(self) -> List[Player]:
        return self.players[1:]

    def get(self, player_id: Optional[str]) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: Optional[str]) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise KeyError(player_id)

    def rename_human(self, raw_name: Optional[str]) -> str:
        self.human.name = sanitize_username(raw_name) or DEFAULT_HUMAN_NAME
        return self.human.name

    def deal_hands(self, hands: Sequence[Sequence[Card]]) -> None:
        if len(hands) != len(self.players):
            raise ValueError(f"Expected {len(self.players)} hands, got {len(hands)}.")
        for player, hand in zip(self.players, hands):
            player.hand = list(hand)
            player.score = 0

    def set_active(self, index: Optional[int]) -> None:
        for seat, player in enumerate(self.players):
            player.is_active = seat == index

    def scores(self) -> List[int]:
        return [player.score for player in self.players]

    def reset(self) -> None:
        for player in self.players:
            player.hand = []
            player.score = 0
            player.is_active = False
