"""
Craps Quest - Marketplace Tests
"""

from dataclasses import replace

import pytest
from src.engine.base import CardType, Marketplace
from src.engine.cards import create_card_deck
from src.engine.errors import InvalidActionError
from src.engine.hand import add_permanent_card
from src.engine.marketplace import (
    describe_card,
    get_affordable_cards,
    get_marketplace_by_type,
    get_marketplace_card,
    get_marketplace_card_count,
    is_marketplace_full,
    is_marketplace_low,
    remove_marketplace_card,
    restock_marketplace,
    sort_cards_by_cost,
    sort_cards_by_type_and_cost,
    validate_card_purchase,
    validate_marketplace_refresh,
)


@pytest.fixture
def market(make_permanent, make_single_use, make_point_card) -> Marketplace:
    return Marketplace(cards=(
        make_permanent(cost=3),
        make_single_use(cost=2),
        make_point_card(cost=6, points=3),
    ))


class TestPurchaseValidation:
    """Tests for validate_card_purchase()."""

    def test_valid(self, player, market):
        assert validate_card_purchase(player, market, "perm-test").id == "perm-test"

    def test_missing_card(self, player, market):
        with pytest.raises(InvalidActionError, match="not found"):
            validate_card_purchase(player, market, "perm-404")

    def test_unaffordable(self, player, market):
        with pytest.raises(InvalidActionError, match="Card costs 6, you have 4"):
            validate_card_purchase(player, market, "point-test")

    def test_full_permanent_hand(self, player, market, make_permanent):
        for i in range(6):
            player = add_permanent_card(player, make_permanent(card_id=f"perm-{i}"))
        with pytest.raises(InvalidActionError, match="permanent cards"):
            validate_card_purchase(replace(player, gold=10), market, "perm-test")

    def test_affordable_cards(self, player, market):
        assert {c.id for c in get_affordable_cards(player, market)} == {"perm-test", "single-test"}


class TestRefresh:
    def test_refresh_cost(self, player):
        assert validate_marketplace_refresh(player) == 3

    def test_refresh_unaffordable(self, player):
        with pytest.raises(InvalidActionError, match="Refresh costs 3"):
            validate_marketplace_refresh(replace(player, gold=2))

    def test_restock_cycles_unsold_cards(self):
        deck = tuple(create_card_deck())
        market = Marketplace(cards=deck[:8])
        new_market, remaining = restock_marketplace(market, deck[8:])
        assert new_market.cards == deck[8:16]
        assert remaining[-8:] == deck[:8]
        assert len(remaining) + len(new_market.available_cards) == 45

    def test_restock_skips_sold_slots(self):
        deck = tuple(create_card_deck())
        market = remove_marketplace_card(Marketplace(cards=deck[:8]), deck[0].id)
        new_market, remaining = restock_marketplace(market, deck[8:])
        assert len(remaining) + len(new_market.available_cards) == 44
        assert deck[0] not in remaining

    def test_restock_short_deck(self):
        deck = tuple(create_card_deck())
        new_market, remaining = restock_marketplace(Marketplace(cards=deck[:2]), ())
        assert new_market.cards == deck[:2]
        assert remaining == ()


class TestMarketplaceQueries:
    def test_get_card(self, market):
        assert get_marketplace_card(market, "single-test").cost == 2
        assert get_marketplace_card(market, "nope") is None

    def test_remove_leaves_empty_slot(self, market):
        updated = remove_marketplace_card(market, "single-test")
        assert updated.cards[1] is None
        assert get_marketplace_card_count(updated) == 2

    def test_full_and_low(self, market):
        assert is_marketplace_full(market) is False
        assert is_marketplace_low(market) is False
        assert is_marketplace_low(remove_marketplace_card(market, "perm-test")) is True
        assert is_marketplace_full(Marketplace(cards=tuple(create_card_deck()[:8])))

    def test_by_type(self, market):
        grouped = get_marketplace_by_type(market)
        assert [c.id for c in grouped[CardType.POINT]] == ["point-test"]
        assert len(grouped) == 3

    def test_sorting(self, market):
        cards = market.available_cards
        assert [c.cost for c in sort_cards_by_cost(cards)] == [2, 3, 6]
        assert [c.cost for c in sort_cards_by_cost(cards, ascending=False)] == [6, 3, 2]
        assert [c.card_type for c in sort_cards_by_type_and_cost(cards)] == [
            CardType.PERMANENT, CardType.SINGLE_USE, CardType.POINT,
        ]

    def test_describe(self, make_permanent, make_point_card):
        assert describe_card(make_permanent(cost=3)) == (
            "Reroll (Permanent, 3 gold): Reroll one die after seeing the result"
        )
        assert describe_card(make_point_card(cost=4, points=2)) == (
            "+2 Point (Victory Points, 4 gold): Gain 2 victory points"
        )
