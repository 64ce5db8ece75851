"""
Craps Quest Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles dice, the monster gauntlet, the card marketplace, side bets
and the turn state machine.
"""

from src.engine.base import (
    Bet,
    BetType,
    Card,
    CardType,
    DiceRoll,
    GameState,
    Marketplace,
    Monster,
    MonsterType,
    PendingChoice,
    PermanentCard,
    PermanentEffect,
    Player,
    PointCard,
    SingleUseCard,
    SingleUseEffect,
    TurnEndReason,
    TurnPhase,
    TurnState,
)
from src.engine.errors import (
    GameRuleError,
    GameSetupError,
    InvalidActionError,
    InvalidPhaseTransition,
    InvalidPoint,
    InvalidRoll,
)
from src.engine.game import GameEngine
from src.engine.game_init import initialize_game

__all__ = [
    # Data Classes
    "Bet",
    "Card",
    "DiceRoll",
    "GameState",
    "Marketplace",
    "Monster",
    "PermanentCard",
    "Player",
    "PointCard",
    "SingleUseCard",
    "TurnState",
    # Enums
    "BetType",
    "CardType",
    "MonsterType",
    "PendingChoice",
    "PermanentEffect",
    "SingleUseEffect",
    "TurnEndReason",
    "TurnPhase",
    # Errors
    "GameRuleError",
    "GameSetupError",
    "InvalidActionError",
    "InvalidPhaseTransition",
    "InvalidPoint",
    "InvalidRoll",
    # Engine
    "GameEngine",
    "initialize_game",
]
