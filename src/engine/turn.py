"""
Craps Quest - Turn Phase State Machine

The allowed phase transitions within a single turn. A new turn is not a
transition: it starts from a fresh TurnState in MARKETPLACE_REFRESH.
"""

from dataclasses import replace

from src.engine.base import TurnPhase, TurnState
from src.engine.errors import InvalidPhaseTransition

ALLOWED_TRANSITIONS: dict[TurnPhase, frozenset[TurnPhase]] = {
    TurnPhase.MARKETPLACE_REFRESH: frozenset({
        TurnPhase.MARKET_PURCHASE, TurnPhase.BETTING, TurnPhase.GAME_OVER,
    }),
    TurnPhase.MARKET_PURCHASE: frozenset({TurnPhase.BETTING, TurnPhase.GAME_OVER}),
    TurnPhase.BETTING: frozenset({TurnPhase.COME_OUT_ROLL, TurnPhase.GAME_OVER}),
    TurnPhase.COME_OUT_ROLL: frozenset({
        TurnPhase.POINT_PHASE, TurnPhase.RESOLUTION, TurnPhase.GAME_OVER,
    }),
    TurnPhase.POINT_PHASE: frozenset({TurnPhase.RESOLUTION, TurnPhase.GAME_OVER}),
    TurnPhase.RESOLUTION: frozenset({TurnPhase.GAME_OVER}),
    TurnPhase.GAME_OVER: frozenset(),
}

ENTRY_PHASE = TurnPhase.MARKETPLACE_REFRESH
TERMINAL_PHASE = TurnPhase.GAME_OVER


def can_transition(current: TurnPhase, target: TurnPhase) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def validate_transition(current: TurnPhase, target: TurnPhase) -> TurnPhase:
    """
    Raises:
        InvalidPhaseTransition: If the pair is not in the transition table
    """
    if not can_transition(current, target):
        raise InvalidPhaseTransition(
            f"Cannot move from {current.name} to {target.name}."
        )
    return target


def transition(turn_state: TurnState, target: TurnPhase) -> TurnState:
    """Move the turn to a new phase."""
    validate_transition(turn_state.phase, target)
    return replace(turn_state, phase=target)


def is_terminal(phase: TurnPhase) -> bool:
    return phase is TERMINAL_PHASE
