"""
Craps Quest - Engine Exceptions

Typed errors raised by the rules engine. Every error is a ValueError so
callers can treat them as bad input for the current game state.
"""


class GameRuleError(ValueError):
    """Base exception for all rules-engine errors."""


class InvalidRoll(GameRuleError):
    """A roll with the wrong number of dice, or a sum outside the 2-12 range."""


class InvalidPoint(GameRuleError):
    """A point value that is not 4, 5, 6, 8, 9 or 10."""


class GameSetupError(GameRuleError):
    """A game could not be created from the given player names."""


class InvalidPhaseTransition(GameRuleError):
    """The turn cannot move from its current phase to the requested one."""


class InvalidActionError(GameRuleError):
    """Action is not legal in the current state."""
