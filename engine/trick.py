"""Play area for the trick in progress."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .cards import Card, Suit
from .rules import RuleSet, lead_suit


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class PlayArea:
    size: int = 4
    plays: Dict[str, Card] = field(default_factory=dict)
    lead_player_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.plays

    def is_complete(self) -> bool:
        return len(self.plays) >= self.size

    def count(self) -> int:
        return len(self.plays)

    def check_play(self, player_id: str) -> None:
        if self.is_complete():
            raise TrickError("Trick already complete.")
        if player_id in self.plays:
            raise TrickError(f"{player_id} already played in this trick.")

    def add_play(self, player_id: str, card: Card) -> None:
        self.check_play(player_id)
        if not self.plays:
            self.lead_player_id = player_id
        self.plays[player_id] = card

    def led_suit(self) -> Optional[Suit]:
        return lead_suit(self.plays, self.lead_player_id)

    def cards(self) -> Dict[str, Card]:
        return dict(self.plays)

    def entries(self) -> List[Tuple[str, Card]]:
        return list(self.plays.items())

    def winner(self, rule_set: RuleSet) -> Optional[str]:
        return rule_set.evaluate_winner(self.cards(), self.lead_player_id)

    def clear(self) -> None:
        self.plays = {}
        self.lead_player_id = None
