"""
Craps Quest - Dice Utilities

Craps arithmetic over six-sided dice. Everything here is pure except
roll_dice, which draws from the given random source (the process-wide
`random` module by default).
"""

import random
from typing import Iterable

from src.engine.base import DiceRoll
from src.engine.constants import (
    CRAP_OUT_NUMBER,
    CRAPS_NUMBERS,
    DEFAULT_DICE_COUNT,
    DICE_SIDES,
    ESCAPE_NUMBER,
    MAX_ROLL_SUM,
    MIN_ROLL_SUM,
    NATURAL_NUMBERS,
    POINT_NUMBERS,
    TWO_DICE_OUTCOMES,
)


def create_rng(seed: int | None = None) -> random.Random:
    """Create an independent random source, seeded for reproducible games."""
    return random.Random(seed)


def roll_dice(count: int = DEFAULT_DICE_COUNT, rng: random.Random | None = None) -> tuple[int, ...]:
    """
    Roll `count` six-sided dice.

    Args:
        count: Number of dice to roll (default: 2)
        rng: Random source (default: the `random` module)

    Returns:
        Tuple of dice values, each between 1 and 6
    """
    source = rng or random
    return tuple(source.randint(1, DICE_SIDES) for _ in range(count))


def roll(count: int = DEFAULT_DICE_COUNT, rng: random.Random | None = None) -> DiceRoll:
    """Roll dice and wrap them in a DiceRoll."""
    return DiceRoll(values=roll_dice(count, rng))


def sum_dice(values: Iterable[int]) -> int:
    """Sum of the dice; 0 for no dice."""
    return sum(values)


def is_natural(total: int) -> bool:
    """7 or 11."""
    return total in NATURAL_NUMBERS


def is_craps(total: int) -> bool:
    """2, 3 or 12."""
    return total in CRAPS_NUMBERS


def is_point(total: int) -> bool:
    """4, 5, 6, 8, 9 or 10."""
    return total in POINT_NUMBERS


def is_crap_out(total: int) -> bool:
    """A seven during the point phase."""
    return total == CRAP_OUT_NUMBER


def is_escape_roll(total: int) -> bool:
    """Snake eyes during the point phase."""
    return total == ESCAPE_NUMBER


def is_point_hit(total: int, point: int) -> bool:
    return total == point


def is_monster_hit(total: int, monster_numbers: Iterable[int]) -> bool:
    """Whether the roll matches one of the monster's remaining numbers."""
    return total in set(monster_numbers)


def get_possible_sums(dice_count: int) -> list[int]:
    """
    Every attainable sum for `dice_count` dice, ascending.

    Example: 1 die -> [1..6], 2 dice -> [2..12]
    """
    return list(range(dice_count, dice_count * DICE_SIDES + 1))


def get_combinations(total: int) -> int:
    """
    Number of ordered (die1, die2) pairs that roll `total` with 2d6.

    Returns 0 outside 2-12. The counts over 2..12 add up to 36.
    """
    if not (MIN_ROLL_SUM <= total <= MAX_ROLL_SUM):
        return 0
    return DICE_SIDES - abs(CRAP_OUT_NUMBER - total)


def get_probability(total: int) -> float:
    """Probability of rolling `total` with 2d6."""
    return get_combinations(total) / TWO_DICE_OUTCOMES
