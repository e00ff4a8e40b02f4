"""Opponent turn driver and the card-choice policy contract."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .cards import Card, Suit
from .players import Player
from .rules import RuleSet, lead_suit
from .trick import PlayArea


@dataclass(frozen=True)
class TrickContext:
    """What a computer seat may see when choosing a card."""

    player_id: str
    plays: Tuple[Tuple[str, Card], ...]
    lead_player_id: Optional[str]
    rule_set: RuleSet

    @classmethod
    def from_play_area(cls, player_id: str, area: PlayArea, rule_set: RuleSet) -> "TrickContext":
        return cls(
            player_id=player_id,
            plays=tuple(area.entries()),
            lead_player_id=area.lead_player_id,
            rule_set=rule_set,
        )

    def is_leading(self) -> bool:
        return not self.plays

    def cards(self) -> Dict[str, Card]:
        return dict(self.plays)

    def led_suit(self) -> Optional[Suit]:
        return lead_suit(self.cards(), self.lead_player_id)

    def current_winner(self) -> Optional[str]:
        if not self.plays:
            return None
        return self.rule_set.evaluate_winner(self.cards(), self.lead_player_id)

    def winner_with(self, card: Card) -> Optional[str]:
        """Winner of the trick so far if ``card`` were played now."""
        cards = self.cards()
        cards[self.player_id] = card
        return self.rule_set.evaluate_winner(cards, self.lead_player_id or self.player_id)


class OpponentPolicy:
    """Base class for computer card choice."""

    name: str = "Base"

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        raise NotImplementedError


class RandomPolicy(OpponentPolicy):
    name = "Random"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def choose_card(self, hand: Sequence[Card], trick: TrickContext) -> Card:
        if not hand:
            raise RuntimeError("No cards available for opponent.")
        return self._rng.choice(list(hand))


class OpponentDriver:
    """Ask the right policy for a computer seat's card and check the answer."""

    def __init__(
        self,
        policy: OpponentPolicy,
        seat_policies: Optional[Mapping[int, OpponentPolicy]] = None,
    ) -> None:
        self.policy = policy
        self.seat_policies: Dict[int, OpponentPolicy] = dict(seat_policies or {})

    def policy_for(self, seat: int) -> OpponentPolicy:
        return self.seat_policies.get(seat, self.policy)

    def choose(self, seat: int, player: Player, area: PlayArea, rule_set: RuleSet) -> Card:
        policy = self.policy_for(seat)
        context = TrickContext.from_play_area(player.id, area, rule_set)
        card = policy.choose_card(tuple(player.hand), context)
        if not player.has_card(card):
            raise RuntimeError(f"{policy.name} policy chose {card.id}, which {player.id} does not hold.")
        return card
