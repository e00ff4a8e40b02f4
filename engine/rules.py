"""Trick-winner rule sets.

Each rule set is a pure evaluator over the cards of one trick, keyed by player
id in play order. Exactly one rule set is active per game; the registry below
is indexed the same way the table's rule selector is.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .cards import Card, Suit

TrickCards = Mapping[str, Card]


def lead_suit(cards: TrickCards, lead_player_id: Optional[str]) -> Optional[Suit]:
    """Suit of the lead card, falling back to the first card played."""
    if lead_player_id and lead_player_id in cards:
        return cards[lead_player_id].suit
    for card in cards.values():
        return card.suit
    return None


def highest_card(entries: Sequence[Tuple[str, Card]]) -> Optional[str]:
    """Player holding the highest value; earlier plays keep ties."""
    if not entries:
        return None
    winner, best = entries[0][0], 0
    for player_id, card in entries:
        if card.value > best:
            winner, best = player_id, card.value
    return winner


def highest_in_suit(entries: Iterable[Tuple[str, Card]], suit: Suit) -> Optional[str]:
    return highest_card([(player_id, card) for player_id, card in entries if card.suit is suit])


def default_winner(cards: TrickCards, lead_player_id: Optional[str]) -> Optional[str]:
    if lead_player_id and lead_player_id in cards:
        return lead_player_id
    for player_id in cards:
        return player_id
    return None


class RuleSet:
    """Base class for trick evaluators."""

    id: str = "base"
    name: str = "Base"
    description: str = ""

    def evaluate_winner(self, cards: TrickCards, lead_player_id: Optional[str]) -> Optional[str]:
        raise NotImplementedError

    def describe(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class HighestCardWins(RuleSet):
    id = "highest-card"
    name = "Highest Card Wins"
    description = "The highest card value wins the trick"

    def evaluate_winner(self, cards: TrickCards, lead_player_id: Optional[str]) -> Optional[str]:
        if not cards:
            return default_winner(cards, lead_player_id)
        return highest_card(list(cards.items()))


class SuitFollows(RuleSet):
    id = "suit-follows"
    name = "Suit Follows"
    description = "Must follow lead suit, highest of lead suit wins"

    def evaluate_winner(self, cards: TrickCards, lead_player_id: Optional[str]) -> Optional[str]:
        led = lead_suit(cards, lead_player_id)
        if led is None:
            return default_winner(cards, lead_player_id)
        return highest_in_suit(cards.items(), led) or default_winner(cards, lead_player_id)


class TrumpSuit(SuitFollows):
    """Cards of the trump suit beat every other suit; otherwise the lead suit wins."""

    trump: Suit = Suit.SPADES

    def evaluate_winner(self, cards: TrickCards, lead_player_id: Optional[str]) -> Optional[str]:
        trumped = highest_in_suit(cards.items(), self.trump)
        if trumped is not None:
            return trumped
        return super().evaluate_winner(cards, lead_player_id)


class SpadesTrump(TrumpSuit):
    id = "spades-trump"
    name = "Spades Trump"
    description = "Spades are trump cards and beat all other suits"
    trump = Suit.SPADES


RULE_SETS: Tuple[RuleSet, ...] = (HighestCardWins(), SuitFollows(), SpadesTrump())


def rule_set_index(key: Union[int, str]) -> int:
    """Resolve a registry index or rule-set id to an index."""
    if isinstance(key, bool):
        raise ValueError(f"Unknown rule set: {key!r}")
    if isinstance(key, int):
        if 0 <= key < len(RULE_SETS):
            return key
        raise ValueError(f"Rule set index out of range: {key}")
    for index, rule_set in enumerate(RULE_SETS):
        if rule_set.id == key:
            return index
    raise ValueError(f"Unknown rule set: {key!r}")


def get_rule_set(key: Union[int, str]) -> RuleSet:
    return RULE_SETS[rule_set_index(key)]
