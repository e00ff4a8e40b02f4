"""Simple bot arena: complete games with a bot in every seat."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from engine.clock import ImmediateScheduler
from engine.config import GameConfig, Timings
from engine.deck import CARDS_PER_PLAYER
from engine.game import GameEngine
from engine.opponent import OpponentPolicy, RandomPolicy, TrickContext
from engine.state import GamePhase

from .baseline_counter import CounterBot
from .baseline_greedy import GreedyBot
from .baseline_trump_manager import TrumpManagerBot

BOT_REGISTRY: Dict[str, Callable[[], OpponentPolicy]] = {
    "random": RandomPolicy,
    "greedy": GreedyBot,
    "counter": CounterBot,
    "trump": TrumpManagerBot,
}


def build_bot(name: str, rng: Optional[Random] = None) -> OpponentPolicy:
    if name not in BOT_REGISTRY:
        raise ValueError(f"Unknown bot {name!r}; choose from {sorted(BOT_REGISTRY)}")
    if name == "random":
        return RandomPolicy(rng)
    return BOT_REGISTRY[name]()


def play_game(engine: GameEngine, seat_zero: OpponentPolicy) -> List[int]:
    """Play one game to the end, driving seat 0 through the public play path."""
    engine.start_game()
    human = engine.players.human
    while engine.phase is not GamePhase.GAME_OVER:
        if engine.phase is not GamePhase.PLAYING or engine.current_player != 0:
            raise RuntimeError(f"Game stalled in phase {engine.phase.value}.")
        trick = TrickContext.from_play_area(human.id, engine.play_area, engine.rule_set)
        card = seat_zero.choose_card(tuple(human.hand), trick)
        if not engine.play_card(card, human.id):
            raise RuntimeError(f"{seat_zero.name} made an illegal play: {card.id}")
    return engine.scores


def run_match(
    policies: Sequence[OpponentPolicy],
    *,
    n_games: int = 10,
    seed: Optional[int] = None,
    rule_set: int = 0,
    cards_per_player: int = CARDS_PER_PLAYER,
) -> dict:
    if len(policies) != 4:
        raise ValueError("A match needs exactly four policies.")
    config = GameConfig(
        rule_set=rule_set,
        cards_per_player=cards_per_player,
        seed=seed,
        timings=Timings.instant(),
    )
    engine = GameEngine(
        config,
        scheduler=ImmediateScheduler(),
        seat_policies={seat: policy for seat, policy in enumerate(policies) if seat},
    )
    tricks = [0, 0, 0, 0]
    wins = [0, 0, 0, 0]
    history = []
    for _ in range(n_games):
        scores = play_game(engine, policies[0])
        winner = engine.game_winner()
        assert winner is not None
        wins[engine.players.index_of(winner.id)] += 1
        tricks = [total + score for total, score in zip(tricks, scores)]
        history.append({"scores": scores, "winner": winner.id})
        engine.reset_game()
    return {"tricks": tricks, "wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a four-seat bot match.")
    parser.add_argument(
        "--bots",
        default="greedy,random,random,random",
        help="Comma-separated bot names for seats 0-3: " + ", ".join(sorted(BOT_REGISTRY)),
    )
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--rule-set", type=int, default=0, choices=[0, 1, 2])
    parser.add_argument("--cards", type=int, default=CARDS_PER_PLAYER, help="Cards dealt to each seat.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    names = [name.strip() for name in args.bots.split(",")]
    if len(names) != 4:
        parser.error("--bots needs exactly four names")
    rng = Random(args.seed)
    policies = [build_bot(name, rng) for name in names]
    results = run_match(
        policies,
        n_games=args.n,
        seed=args.seed,
        rule_set=args.rule_set,
        cards_per_player=args.cards,
    )

    print(f"Tricks after {args.n} games: {results['tricks']}")
    for name, wins in zip(names, results["wins"]):
        print(f"  {name:<8} {wins}/{args.n} games won")


if __name__ == "__main__":
    main()
