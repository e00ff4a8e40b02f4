"""High-level game orchestration: the turn and phase state machine."""

from __future__ import annotations

import logging
from random import Random
from typing import Callable, List, Mapping, Optional, Union

from .cards import Card
from .clock import ImmediateScheduler, Scheduler, Timer
from .config import GameConfig
from .deck import build_deck, deal, shuffle
from .events import EventBus, EventKind, GameEvent, Level, Listener
from .opponent import OpponentDriver, OpponentPolicy, RandomPolicy
from .players import Player, PlayerRegistry, display_name
from .rules import RuleSet, get_rule_set
from .scoring import get_winner, is_game_over
from .state import GamePhase, GameState
from .trick import PlayArea

log = logging.getLogger(__name__)


class GameEngine:
    """Run one table of four: a human at seat 0 and three computer seats.

    Illegal requests (wrong phase, wrong turn, a card the player does not
    hold) are ignored and reported by a ``False`` return. Every delayed step
    goes through the scheduler and is tagged with the current epoch, so
    ``reset_game`` and ``close`` invalidate anything still in flight.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[Random] = None,
        policy: Optional[OpponentPolicy] = None,
        seat_policies: Optional[Mapping[int, OpponentPolicy]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or Random(self.config.seed)
        self.scheduler = scheduler or ImmediateScheduler()
        self.driver = OpponentDriver(policy or RandomPolicy(self.rng), seat_policies)
        self.events = EventBus()
        self.players = PlayerRegistry(self.config.player_name)
        self.rule_set: RuleSet = get_rule_set(self.config.rule_set)
        self.state = self._initial_state()
        self.play_area = PlayArea(size=len(self.players))
        self.trick_winner: Optional[str] = None
        self.dealing = False
        self._epoch = 0
        self._timers: List[Timer] = []
        self._advance_timer: Optional[Timer] = None

    # Queries -----------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def current_player(self) -> int:
        return self.state.current_player

    @property
    def scores(self) -> List[int]:
        return list(self.state.scores)

    def snapshot(self) -> GameState:
        return self.state.copy()

    def can_play(self, card: Card, player_id: str) -> bool:
        if self.state.phase is not GamePhase.PLAYING:
            return False
        seat = self.players[self.state.current_player]
        return seat.id == player_id and seat.has_card(card)

    def game_winner(self) -> Optional[Player]:
        if self.state.phase is not GamePhase.GAME_OVER:
            return None
        winner, _ = get_winner(self.state.scores, self.players.players)
        return winner

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.events.subscribe(listener)

    # Actions -----------------------------------------------------------

    def start_game(self) -> bool:
        if self.state.phase is not GamePhase.WAITING:
            log.debug("start_game ignored in phase %s", self.state.phase.value)
            return False
        self.state.current_player = 0
        self.state.transition(GamePhase.DEALING)
        self.dealing = True
        log.info("Starting game with rule set %s", self.rule_set.id)
        self._notify(EventKind.GAME_STARTED, "Game starting! Cards are being dealt...", Level.SUCCESS)
        self._later(self.config.timings.dealing_delay_ms, self._deal)
        return True

    def play_card(self, card: Card, player_id: str) -> bool:
        if not self.can_play(card, player_id):
            log.debug(
                "Ignored play of %s by %s (phase=%s, current=%d)",
                card.id,
                player_id,
                self.state.phase.value,
                self.state.current_player,
            )
            return False
        self._cancel_advance()
        self._apply_play(self.players[self.state.current_player], card)
        self._after_play()
        return True

    def auto_play(self) -> bool:
        """Play a random card for the human when their turn timer runs out."""
        human = self.players.human
        if self.state.phase is not GamePhase.PLAYING or self.state.current_player != 0 or not human.hand:
            return False
        card = self.rng.choice(human.hand)
        self._notify(EventKind.AUTO_PLAY, "Time's up! Auto-playing a card...", player_id=human.id)
        return self.play_card(card, human.id)

    def rename_player(self, name: Optional[str]) -> str:
        applied = self.players.rename_human(name)
        self._notify(EventKind.PLAYER_RENAMED, f"Playing as {applied}", player_id=self.players.human.id)
        return applied

    def reset_game(self, rule_set: Optional[Union[int, str]] = None) -> None:
        if rule_set is not None:
            self.config = GameConfig.model_validate({**self.config.model_dump(), "rule_set": rule_set})
            self.rule_set = get_rule_set(self.config.rule_set)
        self._cancel_timers()
        self.state = self._initial_state()
        self.play_area.clear()
        self.trick_winner = None
        self.dealing = False
        self.players.reset()
        log.info("Game reset")
        self._notify(EventKind.GAME_RESET, "Game reset! Ready for a new game?")

    def close(self) -> None:
        self._cancel_timers()

    # Phase steps -------------------------------------------------------

    def _deal(self) -> None:
        deck = shuffle(build_deck(), self.rng)
        hands = deal(deck, len(self.players), self.config.cards_per_player)
        self.players.deal_hands(hands)
        self.state.scores = [0] * len(self.players)
        self.play_area.clear()
        self._notify(EventKind.CARDS_DEALT, f"Dealt {self.config.cards_per_player} cards to each player")
        self._later(self.config.timings.dealing_animation_ms, self._begin_play)

    def _begin_play(self) -> None:
        self.dealing = False
        self.state.transition(GamePhase.PLAYING)
        self.players.set_active(self.state.current_player)
        self._notify(EventKind.TURN, "Your turn! Play a card to lead the first trick.", player_id=self.players.human.id)
        self._schedule_advance(0)

    def _apply_play(self, seat: Player, card: Card) -> None:
        self.play_area.check_play(seat.id)
        played = seat.remove_card(card)
        self.play_area.add_play(seat.id, played)
        if self.play_area.is_complete():
            self.state.transition(GamePhase.EVALUATING)
        else:
            self.state.current_player = (self.state.current_player + 1) % len(self.players)
            self.players.set_active(self.state.current_player)

        if seat.is_human:
            self._notify(EventKind.CARD_PLAYED, "Card played!", Level.SUCCESS, seat.id)
        else:
            self._notify(EventKind.CARD_PLAYED, f"{seat.name} plays a card", player_id=seat.id)

    def _after_play(self) -> None:
        if self.state.phase is GamePhase.EVALUATING:
            self._later(self.config.timings.card_play_delay_ms, self._announce_trick_winner)
        else:
            self._schedule_advance(self.config.timings.ai_play_delay_ms)

    def _advance(self) -> None:
        """Let computer seats play until the trick fills or the human must act."""
        self._advance_timer = None
        while self.state.phase is GamePhase.PLAYING:
            seat_index = self.state.current_player
            seat = self.players[seat_index]
            if seat.is_human:
                return
            card = self.driver.choose(seat_index, seat, self.play_area, self.rule_set)
            self._apply_play(seat, card)
            delay = self.config.timings.ai_play_delay_ms
            if self.state.phase is GamePhase.EVALUATING or delay > 0:
                self._after_play()
                return

    def _announce_trick_winner(self) -> None:
        winner_id = self.play_area.winner(self.rule_set)
        if winner_id is None:
            # Only reachable with an empty table; fall back to the lead seat.
            winner_id = self.players[self.state.current_player].id
        self.trick_winner = winner_id
        winner = self.players.get(winner_id)
        log.info("Trick %d won by %s", self.state.round, winner_id)
        self._notify(EventKind.TRICK_WON, f"{display_name(winner)} wins the trick!", Level.SUCCESS, winner_id)
        self._later(self.config.timings.trick_evaluation_delay_ms, self._commit_trick)

    def _commit_trick(self) -> None:
        index = self.players.index_of(self.trick_winner)
        self.state.scores[index] += 1
        self.players[index].score += 1
        self.play_area.clear()
        self.trick_winner = None
        self.state.current_player = index

        if is_game_over(self.players.players):
            self.state.transition(GamePhase.GAME_OVER)
            self.players.set_active(None)
            self._announce_game_winner()
            return

        self.state.round += 1
        self.state.transition(GamePhase.PLAYING)
        self.players.set_active(index)
        self._schedule_advance(self.config.timings.lead_delay_ms)

    def _announce_game_winner(self) -> None:
        winner, score = get_winner(self.state.scores, self.players.players)
        log.info("Game over: %s wins with %d tricks", winner.id, score)
        if winner.is_human:
            self._notify(EventKind.GAME_OVER, "Congratulations! You won the game!", Level.SUCCESS, winner.id)
        else:
            self._notify(EventKind.GAME_OVER, f"{display_name(winner)} wins the game!", player_id=winner.id)

    # Helpers -----------------------------------------------------------

    def _initial_state(self) -> GameState:
        return GameState(scores=[0] * len(self.players), max_rounds=self.config.cards_per_player)

    def _cancel_advance(self) -> None:
        if self._advance_timer is not None:
            self._advance_timer.cancel()
            self._advance_timer = None

    def _schedule_advance(self, delay_ms: int) -> None:
        self._cancel_advance()
        if self.players[self.state.current_player].is_human:
            return
        timer = self._later(delay_ms, self._advance)
        # Immediate schedulers may already have run it.
        if timer.active:
            self._advance_timer = timer

    def _later(self, delay_ms: int, action: Callable[[], None]) -> Timer:
        epoch = self._epoch

        def fire() -> None:
            if epoch != self._epoch:
                log.debug("Dropped timer from superseded epoch %d", epoch)
                return
            action()

        self._timers = [timer for timer in self._timers if timer.active]
        timer = self.scheduler.call_later(delay_ms, fire)
        self._timers.append(timer)
        return timer

    def _cancel_timers(self) -> None:
        self._epoch += 1
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self._advance_timer = None

    def _notify(
        self,
        kind: EventKind,
        message: str,
        level: Level = Level.INFO,
        player_id: Optional[str] = None,
    ) -> None:
        self.events.publish(GameEvent(kind, message, level, player_id))
