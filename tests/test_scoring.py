import pytest

from engine.cards import Card, Suit
from engine.players import PlayerRegistry
from engine.scoring import ScoringError, get_winner, is_game_over, player_rank, standings


def test_get_winner_prefers_lowest_seat_on_ties():
    players = PlayerRegistry().players
    winner, score = get_winner([2, 5, 5, 1], players)
    assert winner.id == "player2"
    assert score == 5


def test_get_winner_rejects_malformed_input():
    players = PlayerRegistry().players
    with pytest.raises(ScoringError):
        get_winner([], players)
    with pytest.raises(ScoringError):
        get_winner([1, 2], players)


def test_competition_ranking():
    scores = [3, 3, 1, 0]
    assert [player_rank(scores, seat) for seat in range(4)] == [1, 1, 3, 4]
    with pytest.raises(ScoringError):
        player_rank(scores, 4)


def test_standings_order():
    players = PlayerRegistry().players
    table = standings(players, [1, 4, 4, 2])
    assert [(rank, player.id, score) for rank, player, score in table] == [
        (1, "player2", 4),
        (1, "player3", 4),
        (3, "player4", 2),
        (4, "player1", 1),
    ]


def test_game_over_when_human_hand_empty():
    registry = PlayerRegistry()
    registry.deal_hands([[Card(Suit.HEARTS, 2)], [], [], []])
    assert not is_game_over(registry.players)
    registry.human.hand.clear()
    assert is_game_over(registry.players)
