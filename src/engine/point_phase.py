"""
Craps Quest - Point Phase Roll Evaluation

Once a point is established, every roll is classified into exactly one
outcome. Order of checks matters, first match wins:

    1. Crap-out (7): always, even if 7 were a monster number
    2. Point hit: roll equals the point, even if also a monster number
    3. Monster hit: roll is one of the monster's remaining numbers
    4. Escape offered (2): snake eyes that did not hit the monster
    5. Miss: anything else
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Union

from src.engine.dice import is_crap_out, is_escape_roll, is_monster_hit, is_point_hit
from src.engine.validators import validate_point, validate_roll_sum


class PointPhaseOutcome(Enum):
    """Kinds of point-phase results."""
    CRAP_OUT = "crap_out"
    POINT_HIT = "point_hit"
    HIT = "hit"
    ESCAPE_OFFERED = "escape_offered"
    MISS = "miss"


@dataclass(frozen=True)
class CrapOut:
    kind: ClassVar[PointPhaseOutcome] = PointPhaseOutcome.CRAP_OUT


@dataclass(frozen=True)
class PointHit:
    point_value: int

    kind: ClassVar[PointPhaseOutcome] = PointPhaseOutcome.POINT_HIT


@dataclass(frozen=True)
class MonsterHit:
    hit_number: int

    kind: ClassVar[PointPhaseOutcome] = PointPhaseOutcome.HIT


@dataclass(frozen=True)
class EscapeOffered:
    kind: ClassVar[PointPhaseOutcome] = PointPhaseOutcome.ESCAPE_OFFERED


@dataclass(frozen=True)
class Miss:
    sum: int

    kind: ClassVar[PointPhaseOutcome] = PointPhaseOutcome.MISS


PointPhaseResult = Union[CrapOut, PointHit, MonsterHit, EscapeOffered, Miss]


def evaluate_point_phase_roll(
    total: int,
    point: int,
    monster_numbers: Iterable[int]
) -> PointPhaseResult:
    """
    Classify a point-phase roll.

    Args:
        total: Sum of the two dice
        point: The point established on the come-out roll
        monster_numbers: The current monster's remaining numbers

    Returns:
        Exactly one PointPhaseResult variant

    Raises:
        InvalidRoll: If total is outside 2-12
        InvalidPoint: If point is not 4, 5, 6, 8, 9 or 10
    """
    validate_roll_sum(total)
    validate_point(point)

    if is_crap_out(total):
        return CrapOut()

    if is_point_hit(total, point):
        return PointHit(point_value=point)

    # A 2 on the monster is a hit, not an escape
    if is_monster_hit(total, monster_numbers):
        return MonsterHit(hit_number=total)

    if is_escape_roll(total):
        return EscapeOffered()

    return Miss(sum=total)


def describe_point_phase_result(result: PointPhaseResult) -> str:
    """Human-readable sentence for a point-phase result."""
    if isinstance(result, CrapOut):
        return "Crap out! Seven rolled - turn ends with penalty."
    if isinstance(result, PointHit):
        return f"Point {result.point_value} hit! Cross a number off the monster."
    if isinstance(result, MonsterHit):
        return f"Hit! Rolled {result.hit_number} - damage dealt to monster."
    if isinstance(result, EscapeOffered):
        return "Snake eyes! You may escape or continue."
    return f"Rolled {result.sum} - no effect. Continue rolling."


def is_turn_ending(result: PointPhaseResult) -> bool:
    """Crap-outs and point hits end the shooter's turn."""
    return result.kind in (PointPhaseOutcome.CRAP_OUT, PointPhaseOutcome.POINT_HIT)


def is_positive_outcome(result: PointPhaseResult) -> bool:
    """Point hits and monster hits benefit the shooter."""
    return result.kind in (PointPhaseOutcome.POINT_HIT, PointPhaseOutcome.HIT)
