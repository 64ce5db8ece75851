"""
Craps Quest - Come-Out Roll Evaluation

The first roll of a fight:
    - Natural (7 or 11): the monster is defeated outright
    - Craps (2, 3 or 12): the turn ends and the shooter pays the penalty
    - Point (4, 5, 6, 8, 9, 10): establishes the point for the point phase
"""

from dataclasses import dataclass
from typing import Union

from src.engine.dice import is_craps, is_natural
from src.engine.validators import validate_roll_sum


@dataclass(frozen=True)
class Natural:
    sum: int


@dataclass(frozen=True)
class Craps:
    sum: int


@dataclass(frozen=True)
class PointEstablished:
    point_value: int


ComeOutResult = Union[Natural, Craps, PointEstablished]


def evaluate_come_out_roll(total: int) -> ComeOutResult:
    """
    Classify a come-out roll.

    Raises:
        InvalidRoll: If total is outside 2-12
    """
    validate_roll_sum(total)

    if is_natural(total):
        return Natural(sum=total)
    if is_craps(total):
        return Craps(sum=total)
    # Every remaining 2d6 sum is a point number
    return PointEstablished(point_value=total)


def describe_come_out_result(result: ComeOutResult) -> str:
    """Human-readable sentence for a come-out result."""
    if isinstance(result, Natural):
        return f"Natural {result.sum}! Instant win!"
    if isinstance(result, Craps):
        return f"Craps {result.sum}! Turn ends."
    return f"Point established: {result.point_value}"
