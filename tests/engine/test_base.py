"""
Craps Quest - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

import pytest
from src.engine.base import (
    CardType,
    DiceRoll,
    Marketplace,
    Monster,
    MonsterType,
    PermanentCard,
    PointCard,
    SingleUseCard,
    TurnPhase,
    TurnState,
)
from src.engine.errors import GameRuleError, InvalidActionError, InvalidPoint, InvalidRoll
from src.engine.validators import (
    validate_dice_values,
    validate_gold_amount,
    validate_point,
    validate_roll_sum,
)


class TestTurnPhase:
    """Tests for TurnPhase enum."""

    def test_phase_values(self):
        assert TurnPhase.MARKETPLACE_REFRESH.value == "marketplace_refresh"
        assert TurnPhase.POINT_PHASE.value == "point_phase"
        assert TurnPhase.GAME_OVER.value == "game_over"

    def test_seven_phases(self):
        assert len(TurnPhase) == 7


class TestCardTypes:
    """Card classes report their type without storing it."""

    def test_card_type_class_vars(self, make_permanent, make_single_use, make_point_card):
        assert make_permanent().card_type is CardType.PERMANENT
        assert make_single_use().card_type is CardType.SINGLE_USE
        assert make_point_card().card_type is CardType.POINT

    def test_cards_are_frozen(self, make_point_card):
        card = make_point_card()
        with pytest.raises(AttributeError):
            card.cost = 0


class TestDiceRoll:
    """Tests for DiceRoll dataclass."""

    def test_create_valid_roll(self):
        roll = DiceRoll(values=(3, 4))
        assert len(roll) == 2
        assert roll[0] == 3
        assert roll.total == 7

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError, match="Invalid die value 7"):
            DiceRoll(values=(1, 7))

    def test_zero_value_raises(self):
        with pytest.raises(ValueError, match="Invalid die value 0"):
            DiceRoll(values=(0, 1))

    def test_from_sequence(self):
        roll = DiceRoll.from_sequence([5, 6])
        assert roll.values == (5, 6)
        assert roll.total == 11


class TestMarketplace:
    """Tests for Marketplace slots."""

    def test_sold_slots_hidden(self, make_permanent, make_point_card):
        market = Marketplace(cards=(make_permanent(), None, make_point_card()))
        assert len(market.available_cards) == 2
        assert market.card_ids == frozenset({"perm-test", "point-test"})

    def test_empty_default(self):
        assert Marketplace().available_cards == ()


class TestMonster:
    """Tests for Monster dataclass."""

    def _monster(self, remaining=(4, 10), monster_type=MonsterType.GOBLIN):
        return Monster(
            id="m-1", name="Cave Goblin", monster_type=monster_type, position=1,
            numbers_to_hit=(4, 10), remaining_numbers=remaining, points=1, gold_reward=2,
        )

    def test_not_defeated_with_numbers_left(self):
        assert self._monster().is_defeated is False

    def test_defeated_when_empty(self):
        assert self._monster(remaining=()).is_defeated is True

    def test_hit_numbers(self):
        assert self._monster(remaining=(10,)).hit_numbers == (4,)

    def test_is_boss(self):
        assert self._monster(monster_type=MonsterType.BOSS).is_boss is True
        assert self._monster().is_boss is False

    def test_remaining_must_be_subset(self):
        with pytest.raises(ValueError, match="not on monster"):
            self._monster(remaining=(4, 6))

    def test_numbers_required(self):
        with pytest.raises(ValueError, match="must have numbers"):
            Monster(
                id="m-1", name="Nothing", monster_type=MonsterType.GOBLIN, position=1,
                numbers_to_hit=(), remaining_numbers=(), points=1, gold_reward=1,
            )


class TestTurnState:
    """Tests for TurnState dataclass."""

    def test_defaults(self):
        state = TurnState(phase=TurnPhase.MARKETPLACE_REFRESH, active_player_id="p1")
        assert state.point is None
        assert state.turn_damage == 0
        assert state.has_used_revive is False
        assert state.consecutive_turns == 1
        assert state.pending_choice is None

    @pytest.mark.parametrize("point", [2, 3, 7, 11, 12])
    def test_invalid_point_raises(self, point):
        with pytest.raises(ValueError, match="Invalid point"):
            TurnState(phase=TurnPhase.POINT_PHASE, active_player_id="p1", point=point)


class TestErrors:
    """Engine errors are ValueErrors."""

    @pytest.mark.parametrize("error", [InvalidRoll, InvalidPoint, InvalidActionError])
    def test_hierarchy(self, error):
        assert issubclass(error, GameRuleError)
        assert issubclass(error, ValueError)


class TestValidateDiceValues:
    """Tests for validate_dice_values function."""

    def test_valid_values(self):
        assert validate_dice_values([1, 6]) == (1, 6)

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="At least 1 dice required"):
            validate_dice_values([])

    def test_empty_allowed_with_zero_min(self):
        assert validate_dice_values([], min_count=0) == ()

    def test_too_many(self):
        with pytest.raises(ValueError, match="At most 2 dice allowed"):
            validate_dice_values([1, 2, 3], max_count=2)

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="must be between 1 and 6"):
            validate_dice_values([1, 9])

    def test_non_integer(self):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_dice_values([1, "2"])


class TestValidateRollSum:
    """Tests for validate_roll_sum function."""

    @pytest.mark.parametrize("total", range(2, 13))
    def test_valid_sums(self, total):
        assert validate_roll_sum(total) == total

    @pytest.mark.parametrize("total", [0, 1, 13, -4])
    def test_invalid_sums(self, total):
        with pytest.raises(InvalidRoll, match=f"Invalid dice sum: {total}"):
            validate_roll_sum(total)


class TestValidatePoint:
    """Tests for validate_point function."""

    @pytest.mark.parametrize("point", [4, 5, 6, 8, 9, 10])
    def test_valid_points(self, point):
        assert validate_point(point) == point

    @pytest.mark.parametrize("point", [2, 3, 7, 11, 12])
    def test_invalid_points(self, point):
        with pytest.raises(InvalidPoint, match="Point must be 4, 5, 6, 8, 9, or 10"):
            validate_point(point)


class TestValidateGoldAmount:
    """Tests for validate_gold_amount function."""

    def test_zero_ok(self):
        assert validate_gold_amount(0) == 0

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_gold_amount(-1)

    def test_bool_rejected(self):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_gold_amount(True)
