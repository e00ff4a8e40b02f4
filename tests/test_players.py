import pytest

from engine.cards import Card, Suit
from engine.players import (
    DEFAULT_HUMAN_NAME,
    HUMAN_PLAYER_ID,
    PlayerRegistry,
    display_name,
    sanitize_username,
)


def test_registry_seats():
    registry = PlayerRegistry()
    assert len(registry) == 4
    assert registry.human.id == HUMAN_PLAYER_ID
    assert registry.human.is_human
    assert [p.name for p in registry.opponents] == ["Alex", "Sam", "Jordan"]
    assert not any(p.is_human for p in registry.opponents)
    assert registry.index_of("player3") == 2
    assert registry.get("player9") is None
    with pytest.raises(KeyError):
        registry.index_of("player9")


def test_display_name_marks_human():
    registry = PlayerRegistry("Robin")
    assert display_name(registry.human) == "Robin (You)"
    assert display_name(registry[1]) == "Alex"
    assert display_name(None) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Robin  ", "Robin"),
        ("<b>Kim</b>", "Kim"),
        ("Lee   Ann", "Lee Ann"),
        ("Zoë!", "Zoë"),
        ("a​b\x07c", "abc"),
        ("x" * 30, "x" * 20),
        ("", ""),
        (None, ""),
    ],
)
def test_sanitize_username(raw, expected):
    assert sanitize_username(raw) == expected


def test_rename_falls_back_to_default():
    registry = PlayerRegistry()
    assert registry.rename_human("  Casey ") == "Casey"
    assert registry.rename_human("   ") == DEFAULT_HUMAN_NAME
    assert registry.rename_human("<>") == DEFAULT_HUMAN_NAME


def test_hand_mutation_and_reset():
    registry = PlayerRegistry()
    hands = [[Card(Suit.HEARTS, rank)] for rank in range(1, 5)]
    registry.deal_hands(hands)
    human = registry.human
    assert human.has_card(Card(Suit.HEARTS, 1))
    assert human.remove_card(Card(Suit.HEARTS, 1)) == Card(Suit.HEARTS, 1)
    assert human.card_count() == 0
    with pytest.raises(ValueError):
        human.remove_card(Card(Suit.HEARTS, 1))

    registry.set_active(2)
    assert [p.is_active for p in registry] == [False, False, True, False]
    registry[2].score = 3
    registry.reset()
    assert registry.scores() == [0, 0, 0, 0]
    assert all(not p.hand and not p.is_active for p in registry)


def test_deal_hands_requires_one_hand_per_seat():
    with pytest.raises(ValueError):
        PlayerRegistry().deal_hands([[]])
