"""Notifications published by the engine for toast-style display."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Deque, List, Optional

log = logging.getLogger(__name__)


class EventKind(Enum):
    GAME_STARTED = auto()
    CARDS_DEALT = auto()
    TURN = auto()
    CARD_PLAYED = auto()
    AUTO_PLAY = auto()
    TRICK_WON = auto()
    GAME_OVER = auto()
    GAME_RESET = auto()
    PLAYER_RENAMED = auto()


class Level(Enum):
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    message: str
    level: Level = Level.INFO
    player_id: Optional[str] = None


Listener = Callable[[GameEvent], None]


class EventBus:
    def __init__(self, history_size: int = 50) -> None:
        self._listeners: List[Listener] = []
        self.history: Deque[GameEvent] = deque(maxlen=history_size)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: GameEvent) -> None:
        self.history.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Listener %r failed on %s", listener, event.kind.name)

    def recent(self, limit: int = 5) -> List[GameEvent]:
        if limit <= 0:
            return []
        return list(self.history)[-limit:]
