"""
Craps Quest - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from dataclasses import replace
from typing import Callable

import pytest

from src.engine.base import (
    DiceRoll,
    GameState,
    PermanentCard,
    PermanentEffect,
    Player,
    PointCard,
    SingleUseCard,
    SingleUseEffect,
    TurnPhase,
)
from src.engine.game import GameEngine
from src.engine.game_init import initialize_game


# =============================================================================
# DICE
# =============================================================================

# One fixed pair of dice per 2d6 sum
DICE_FOR_TOTAL: dict[int, tuple[int, int]] = {
    2: (1, 1),
    3: (1, 2),
    4: (2, 2),
    5: (2, 3),
    6: (3, 3),
    7: (3, 4),
    8: (4, 4),
    9: (4, 5),
    10: (5, 5),
    11: (5, 6),
    12: (6, 6),
}


@pytest.fixture
def roll_for() -> Callable[[int], DiceRoll]:
    """Build a DiceRoll that sums to the given total."""
    def _roll(total: int) -> DiceRoll:
        return DiceRoll(values=DICE_FOR_TOTAL[total])
    return _roll


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# =============================================================================
# PLAYERS & CARDS
# =============================================================================

@pytest.fixture
def player() -> Player:
    """A player with starting resources and an empty hand."""
    return Player(id="player-0-test", name="Alice", gold=4, victory_points=0, damage_count=0)


@pytest.fixture
def make_permanent() -> Callable[..., PermanentCard]:
    def _make(card_id: str = "perm-test", cost: int = 3,
              effect: PermanentEffect = PermanentEffect.REROLL) -> PermanentCard:
        return PermanentCard(id=card_id, name="Reroll", cost=cost, effect=effect,
                             description="Reroll one die after seeing the result")
    return _make


@pytest.fixture
def make_single_use() -> Callable[..., SingleUseCard]:
    def _make(card_id: str = "single-test", cost: int = 2,
              effect: SingleUseEffect = SingleUseEffect.STUN) -> SingleUseCard:
        return SingleUseCard(id=card_id, name="Stun", cost=cost, effect=effect,
                             description="Skip your rolling phase this turn")
    return _make


@pytest.fixture
def make_point_card() -> Callable[..., PointCard]:
    def _make(card_id: str = "point-test", cost: int = 2, points: int = 1) -> PointCard:
        return PointCard(id=card_id, name=f"+{points} Point", cost=cost, points=points)
    return _make


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def new_game() -> GameState:
    """A fresh three-player game with a seeded shuffle."""
    return initialize_game(["Alice", "Bob", "Cara"], rng=random.Random(42))


@pytest.fixture
def betting_game(new_game: GameState) -> GameState:
    """Alice's turn, ready for side bets. The reward deck is emptied."""
    state = GameEngine.start_turn(replace(new_game, card_deck=()))
    return GameEngine.set_phase(state, TurnPhase.BETTING)


@pytest.fixture
def come_out_game(betting_game: GameState) -> GameState:
    """Alice's turn, ready for the come-out roll against the Cave Goblin (4, 10)."""
    return GameEngine.set_phase(betting_game, TurnPhase.COME_OUT_ROLL)


@pytest.fixture
def point_game(come_out_game: GameState, roll_for) -> GameState:
    """Alice's turn in the point phase with the point set to 6."""
    state, _ = GameEngine.resolve_come_out_roll(come_out_game, roll=roll_for(6))
    return state
