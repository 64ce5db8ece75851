"""
Craps Quest - Card Deck Tests
"""

import random
from collections import Counter

import pytest
from src.engine.base import CardType, PermanentCard, PointCard, SingleUseCard
from src.engine.cards import (
    POINT_CARD_TEMPLATES,
    create_card_deck,
    create_shuffled_deck,
    draw_cards,
    get_card_counts_by_type,
    get_total_card_count,
    is_permanent_card,
    is_point_card,
    is_single_use_card,
    shuffle_cards,
)


class TestCreateCardDeck:
    """Tests for the card catalog."""

    def test_total_count(self):
        assert len(create_card_deck()) == get_total_card_count() == 45

    def test_counts_by_type(self):
        assert get_card_counts_by_type() == {
            CardType.PERMANENT: 15,
            CardType.SINGLE_USE: 10,
            CardType.POINT: 20,
        }

    def test_deck_matches_counts(self):
        counts = Counter(card.card_type for card in create_card_deck())
        assert dict(counts) == get_card_counts_by_type()

    def test_ids_unique(self):
        deck = create_card_deck()
        assert len({card.id for card in deck}) == len(deck)

    def test_ids_unique_across_decks(self):
        first = {card.id for card in create_card_deck()}
        second = {card.id for card in create_card_deck()}
        assert first.isdisjoint(second)

    def test_id_prefixes(self):
        for card in create_card_deck():
            if isinstance(card, PermanentCard):
                assert card.id.startswith("perm-")
            elif isinstance(card, SingleUseCard):
                assert card.id.startswith("single-")
            else:
                assert card.id.startswith("point-")

    def test_catalog_order(self):
        deck = create_card_deck()
        assert is_permanent_card(deck[0])
        assert is_single_use_card(deck[15])
        assert is_point_card(deck[-1])

    def test_point_card_values(self):
        points = Counter(card.points for card in create_card_deck() if isinstance(card, PointCard))
        assert points == {t.points: t.copies for t in POINT_CARD_TEMPLATES}

    def test_shield_card(self):
        shields = [c for c in create_card_deck() if c.name == "Shield"]
        assert len(shields) == 2
        assert all(c.cost == 4 for c in shields)


class TestShuffle:
    """Tests for shuffle_cards() and create_shuffled_deck()."""

    def test_shuffle_is_permutation(self):
        items = list(range(30))
        assert sorted(shuffle_cards(items, random.Random(1))) == items

    def test_input_untouched(self):
        items = list(range(10))
        shuffle_cards(items, random.Random(1))
        assert items == list(range(10))

    def test_seeded_shuffle_reproducible(self):
        items = list(range(30))
        assert shuffle_cards(items, random.Random(5)) == shuffle_cards(items, random.Random(5))

    def test_shuffle_changes_order(self):
        items = list(range(30))
        assert shuffle_cards(items, random.Random(5)) != items

    @pytest.mark.parametrize("items", [[], [1]])
    def test_trivial_inputs(self, items):
        assert shuffle_cards(items) == items

    def test_shuffled_deck_is_full(self, rng):
        deck = create_shuffled_deck(rng)
        assert len(deck) == 45
        assert len({card.id for card in deck}) == 45


class TestDrawCards:
    """Tests for draw_cards()."""

    def test_draw_from_top(self):
        deck = create_card_deck()
        drawn, remaining = draw_cards(deck, 8)
        assert drawn == tuple(deck[:8])
        assert remaining == tuple(deck[8:])

    def test_draw_more_than_available(self):
        deck = create_card_deck()[:3]
        drawn, remaining = draw_cards(deck, 8)
        assert len(drawn) == 3
        assert remaining == ()

    def test_draw_zero(self):
        deck = create_card_deck()
        drawn, remaining = draw_cards(deck, 0)
        assert drawn == ()
        assert len(remaining) == 45
