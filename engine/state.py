"""Game state record and phase transitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, List

from .deck import CARDS_PER_PLAYER, PLAYER_COUNT


class GamePhase(Enum):
    WAITING = "waiting"
    DEALING = "dealing"
    PLAYING = "playing"
    EVALUATING = "evaluating"
    GAME_OVER = "game_over"


# Reset is handled separately: it is legal from every phase.
TRANSITIONS: Dict[GamePhase, FrozenSet[GamePhase]] = {
    GamePhase.WAITING: frozenset({GamePhase.DEALING}),
    GamePhase.DEALING: frozenset({GamePhase.PLAYING}),
    GamePhase.PLAYING: frozenset({GamePhase.EVALUATING}),
    GamePhase.EVALUATING: frozenset({GamePhase.PLAYING, GamePhase.GAME_OVER}),
    GamePhase.GAME_OVER: frozenset(),
}


class InvalidTransition(RuntimeError):
    """Raised when the engine attempts a phase change the state machine forbids."""


@dataclass
class GameState:
    phase: GamePhase = GamePhase.WAITING
    current_player: int = 0
    scores: List[int] = field(default_factory=lambda: [0] * PLAYER_COUNT)
    round: int = 1
    max_rounds: int = CARDS_PER_PLAYER

    def transition(self, phase: GamePhase) -> None:
        if phase not in TRANSITIONS[self.phase]:
            raise InvalidTransition(f"Cannot move from {self.phase.value} to {phase.value}.")
        self.phase = phase

    def copy(self) -> "GameState":
        return replace(self, scores=list(self.scores))
