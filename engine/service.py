"""Convenience service layer for UI consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .cards import Card, card_label, deserialize_card, serialize_card
from .game import GameEngine
from .players import display_name
from .state import GamePhase


@dataclass
class PlayView:
    player: str
    card: dict
    label: str


@dataclass
class SeatView:
    id: str
    name: str
    display_name: str
    is_human: bool
    is_active: bool
    score: int
    card_count: int
    hand: Optional[list[dict]]


@dataclass
class NoticeView:
    kind: str
    level: str
    message: str


@dataclass
class TableView:
    phase: str
    current_player: int
    dealing: bool
    seats: list[SeatView]
    play_area: list[PlayView]
    lead_player_id: Optional[str]
    scores: list[int]
    round: int
    max_rounds: int
    trick_winner: Optional[str]
    game_winner: Optional[str]
    rule_set: dict
    notifications: list[NoticeView]
    playable: list[str]


class GameService:
    """Facade around GameEngine for UI consumers."""

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()

    # Actions -----------------------------------------------------------

    def start_game(self) -> bool:
        return self.engine.start_game()

    def play_card(self, player_id: str, card_payload: Union[Card, Mapping[str, object]]) -> bool:
        card = card_payload if isinstance(card_payload, Card) else deserialize_card(card_payload)
        return self.engine.play_card(card, player_id)

    def auto_play(self) -> bool:
        return self.engine.auto_play()

    def rename(self, name: str) -> str:
        return self.engine.rename_player(name)

    def reset_game(self, rule_set: Optional[Union[int, str]] = None) -> None:
        self.engine.reset_game(rule_set)

    # Views -------------------------------------------------------------

    def get_table_view(self, perspective: int = 0, notifications: int = 5) -> TableView:
        engine = self.engine
        state = engine.state
        seats = [
            SeatView(
                id=player.id,
                name=player.name,
                display_name=display_name(player),
                is_human=player.is_human,
                is_active=player.is_active,
                score=player.score,
                card_count=player.card_count(),
                hand=[serialize_card(card) for card in player.hand] if seat == perspective else None,
            )
            for seat, player in enumerate(engine.players)
        ]
        winner = engine.game_winner()
        viewer = engine.players[perspective]
        playable = [card.id for card in viewer.hand if engine.can_play(card, viewer.id)]

        return TableView(
            phase=state.phase.value,
            current_player=state.current_player,
            dealing=engine.dealing,
            seats=seats,
            play_area=[
                PlayView(player=player_id, card=serialize_card(card), label=card_label(card))
                for player_id, card in engine.play_area.entries()
            ],
            lead_player_id=engine.play_area.lead_player_id,
            scores=engine.players.scores(),
            round=state.round,
            max_rounds=state.max_rounds,
            trick_winner=engine.trick_winner,
            game_winner=winner.id if winner is not None else None,
            rule_set=engine.rule_set.describe(),
            notifications=[
                NoticeView(kind=event.kind.name.lower(), level=event.level.value, message=event.message)
                for event in engine.events.recent(notifications)
            ],
            playable=playable,
        )

    def is_over(self) -> bool:
        return self.engine.phase is GamePhase.GAME_OVER
