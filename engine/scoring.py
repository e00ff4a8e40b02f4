"""Score helpers: game winner, leaderboard ranks and the end-of-game test."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .players import Player


class ScoringError(ValueError):
    """Raised for malformed score inputs."""


def _check(scores: Sequence[int], players: Sequence[Player]) -> None:
    if not scores:
        raise ScoringError("No scores to evaluate.")
    if len(scores) != len(players):
        raise ScoringError(f"{len(scores)} scores for {len(players)} players.")


def get_winner(scores: Sequence[int], players: Sequence[Player]) -> Tuple[Player, int]:
    """Return the top scorer; ties go to the lowest seat index."""
    _check(scores, players)
    best = max(scores)
    return players[list(scores).index(best)], best


def player_rank(scores: Sequence[int], index: int) -> int:
    """1-based competition rank of the seat at ``index``."""
    if not 0 <= index < len(scores):
        raise ScoringError(f"No seat {index} among {len(scores)} scores.")
    return 1 + sum(1 for score in scores if score > scores[index])


def standings(players: Sequence[Player], scores: Sequence[int]) -> List[Tuple[int, Player, int]]:
    _check(scores, players)
    order = sorted(range(len(players)), key=lambda seat: (-scores[seat], seat))
    return [(player_rank(scores, seat), players[seat], scores[seat]) for seat in order]


def is_game_over(players: Sequence[Player]) -> bool:
    # Symmetric dealing: the human running out means every hand is empty.
    return not players[0].hand
