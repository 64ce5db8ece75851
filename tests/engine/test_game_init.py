"""
Craps Quest - Game Initialization Tests
"""

import random

import pytest
from src.engine.base import TurnPhase
from src.engine.errors import GameSetupError
from src.engine.game_init import (
    create_initial_marketplace,
    create_initial_turn_state,
    create_player,
    find_player_by_id,
    find_player_index_by_id,
    get_next_player_index,
    initialize_game,
    reset_turn_state,
    validate_player_names,
)
from src.engine.cards import create_card_deck


class TestValidatePlayerNames:
    """Tests for validate_player_names()."""

    def test_valid(self):
        result = validate_player_names(["Alice", "Bob"])
        assert result.is_valid is True
        assert result.error is None

    def test_too_few(self):
        result = validate_player_names(["Alice"])
        assert result.is_valid is False
        assert result.error == "Minimum 2 players required."

    def test_too_many(self):
        result = validate_player_names([f"P{i}" for i in range(9)])
        assert result.error == "Maximum 8 players allowed."

    def test_eight_allowed(self):
        assert validate_player_names([f"P{i}" for i in range(8)]).is_valid

    def test_blank_name(self):
        result = validate_player_names(["Alice", "   "])
        assert result.error == "Player 2 must have a name."

    def test_duplicate_ignores_case_and_whitespace(self):
        result = validate_player_names(["Alice", "Bob", " alice "])
        assert result.error == (
            "Player names must be unique: Player 3 has the same name as Player 1."
        )

    def test_count_checked_first(self):
        assert validate_player_names([""]).error == "Minimum 2 players required."


class TestCreatePlayer:
    def test_starting_values(self):
        player = create_player("  Alice ", 0)
        assert player.name == "Alice"
        assert player.gold == 4
        assert player.victory_points == 0
        assert player.damage_count == 0
        assert player.permanent_cards == ()
        assert player.id.startswith("player-0-")

    def test_ids_unique(self):
        assert create_player("A", 0).id != create_player("A", 0).id


class TestTurnStateFactories:
    def test_initial_turn(self):
        turn = create_initial_turn_state("p1")
        assert turn.phase is TurnPhase.MARKETPLACE_REFRESH
        assert turn.active_player_id == "p1"
        assert turn.roll_count == 0

    def test_reset_clears_revive(self):
        assert reset_turn_state("p2").has_used_revive is False

    def test_reset_preserves_revive(self):
        assert reset_turn_state("p2", preserve_revive=True).has_used_revive is True

    def test_initial_marketplace(self):
        deck = create_card_deck()
        market, remaining = create_initial_marketplace(deck)
        assert market.cards == tuple(deck[:8])
        assert len(remaining) == 37


class TestInitializeGame:
    """Tests for initialize_game()."""

    def test_structure(self, new_game):
        assert len(new_game.players) == 3
        assert new_game.current_player_index == 0
        assert new_game.turn_state.active_player_id == new_game.players[0].id
        assert new_game.turn_state.phase is TurnPhase.MARKETPLACE_REFRESH
        assert len(new_game.marketplace.available_cards) == 8
        assert len(new_game.card_deck) == 37
        assert len(new_game.monsters) == 10
        assert new_game.current_monster_index == 0
        assert new_game.bets == ()
        assert new_game.is_game_over is False
        assert new_game.winner_id is None
        assert new_game.damage_leader_id is None

    def test_no_snapshot_yet(self, new_game):
        assert new_game.turn_state.monster_state_before_turn is None

    def test_cards_unique(self, new_game):
        ids = [c.id for c in new_game.card_deck] + list(new_game.marketplace.card_ids)
        assert len(ids) == len(set(ids)) == 45

    def test_seed_reproducible(self):
        first = initialize_game(["A", "B"], rng=random.Random(9))
        second = initialize_game(["A", "B"], rng=random.Random(9))
        assert [c.name for c in first.card_deck] == [c.name for c in second.card_deck]

    def test_invalid_names_raise(self):
        with pytest.raises(GameSetupError, match="Minimum 2 players required."):
            initialize_game(["Solo"])

    def test_setup_error_is_value_error(self):
        with pytest.raises(ValueError):
            initialize_game(["A", "a"])


class TestPlayerLookup:
    def test_next_index_wraps(self):
        assert get_next_player_index(0, 3) == 1
        assert get_next_player_index(2, 3) == 0

    def test_find(self, new_game):
        bob = new_game.players[1]
        assert find_player_by_id(new_game.players, bob.id) == bob
        assert find_player_index_by_id(new_game.players, bob.id) == 1

    def test_find_missing(self, new_game):
        assert find_player_by_id(new_game.players, "ghost") is None
        assert find_player_index_by_id(new_game.players, "ghost") == -1
