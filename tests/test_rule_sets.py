import pytest

from engine.cards import Card, Suit
from engine.rules import (
    RULE_SETS,
    HighestCardWins,
    SpadesTrump,
    SuitFollows,
    get_rule_set,
    rule_set_index,
)


def trick(*plays):
    return {player_id: Card(suit, rank) for player_id, suit, rank in plays}


def test_registry_order_and_lookup():
    assert [rule_set.id for rule_set in RULE_SETS] == ["highest-card", "suit-follows", "spades-trump"]
    assert isinstance(get_rule_set(0), HighestCardWins)
    assert isinstance(get_rule_set("suit-follows"), SuitFollows)
    assert rule_set_index("spades-trump") == 2
    with pytest.raises(ValueError):
        get_rule_set(3)
    with pytest.raises(ValueError):
        get_rule_set("no-trumps")


def test_highest_card_wins():
    cards = trick(
        ("p1", Suit.HEARTS, 5),
        ("p2", Suit.DIAMONDS, 10),
        ("p3", Suit.CLUBS, 3),
        ("p4", Suit.SPADES, 8),
    )
    assert HighestCardWins().evaluate_winner(cards, "p1") == "p2"


def test_highest_card_ace_is_high_and_first_tie_keeps():
    cards = trick(
        ("p1", Suit.HEARTS, 13),
        ("p2", Suit.CLUBS, 1),
        ("p3", Suit.DIAMONDS, 1),
        ("p4", Suit.SPADES, 13),
    )
    assert HighestCardWins().evaluate_winner(cards, "p1") == "p2"


def test_suit_follows_only_lead_suit_can_win():
    cards = trick(
        ("p1", Suit.HEARTS, 5),
        ("p2", Suit.DIAMONDS, 10),
        ("p3", Suit.HEARTS, 12),
        ("p4", Suit.SPADES, 1),
    )
    assert SuitFollows().evaluate_winner(cards, "p1") == "p3"


def test_suit_follows_uses_lead_player_not_first_entry():
    cards = trick(
        ("p3", Suit.CLUBS, 2),
        ("p4", Suit.HEARTS, 9),
        ("p1", Suit.CLUBS, 4),
        ("p2", Suit.HEARTS, 3),
    )
    assert SuitFollows().evaluate_winner(cards, "p4") == "p4"
    # Without a lead player the first card played decides the suit.
    assert SuitFollows().evaluate_winner(cards, None) == "p1"


def test_spades_trump_beats_higher_cards():
    cards = trick(
        ("p1", Suit.HEARTS, 10),
        ("p2", Suit.CLUBS, 9),
        ("p3", Suit.SPADES, 2),
        ("p4", Suit.HEARTS, 12),
    )
    assert SpadesTrump().evaluate_winner(cards, "p1") == "p3"


def test_spades_trump_highest_spade_wins():
    cards = trick(
        ("p1", Suit.SPADES, 4),
        ("p2", Suit.SPADES, 1),
        ("p3", Suit.SPADES, 13),
        ("p4", Suit.HEARTS, 12),
    )
    assert SpadesTrump().evaluate_winner(cards, "p1") == "p2"


def test_spades_trump_without_spades_follows_lead():
    cards = trick(
        ("p1", Suit.CLUBS, 7),
        ("p2", Suit.HEARTS, 13),
        ("p3", Suit.CLUBS, 11),
        ("p4", Suit.DIAMONDS, 2),
    )
    assert SpadesTrump().evaluate_winner(cards, "p1") == "p3"


@pytest.mark.parametrize("rule_set", RULE_SETS)
def test_empty_trick_falls_back(rule_set):
    assert rule_set.evaluate_winner({}, "p2") is None
    assert rule_set.evaluate_winner({}, None) is None


@pytest.mark.parametrize("rule_set", RULE_SETS)
def test_evaluation_does_not_mutate_input(rule_set):
    cards = trick(("p1", Suit.CLUBS, 7), ("p2", Suit.SPADES, 3))
    before = dict(cards)
    winner = rule_set.evaluate_winner(cards, "p1")
    assert cards == before
    assert winner in cards
