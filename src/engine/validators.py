"""
Craps Quest - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

from src.engine.constants import (
    DICE_SIDES,
    MAX_ROLL_SUM,
    MIN_ROLL_SUM,
    POINT_NUMBERS,
)
from src.engine.errors import InvalidPoint, InvalidRoll


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 1,
    max_count: int | None = None
) -> tuple[int, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    if not values:
        if min_count > 0:
            raise ValueError(f"At least {min_count} dice required.")
        return tuple()

    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= DICE_SIDES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DICE_SIDES}."
            )

    return values_tuple


def validate_roll_sum(total: int) -> int:
    """
    Validate the sum of two six-sided dice.

    Raises:
        InvalidRoll: If the sum is outside 2-12
    """
    if not (MIN_ROLL_SUM <= total <= MAX_ROLL_SUM):
        raise InvalidRoll(
            f"Invalid dice sum: {total}. Sum must be between "
            f"{MIN_ROLL_SUM} and {MAX_ROLL_SUM}."
        )
    return total


def validate_point(point: int) -> int:
    """
    Validate an established point.

    Raises:
        InvalidPoint: If the point is not 4, 5, 6, 8, 9 or 10
    """
    if point not in POINT_NUMBERS:
        raise InvalidPoint(
            f"Invalid point value: {point}. Point must be 4, 5, 6, 8, 9, or 10."
        )
    return point


def validate_gold_amount(amount: int) -> int:
    """
    Validate a gold amount.

    Args:
        amount: Gold to add, remove or wager

    Returns:
        Validated amount

    Raises:
        ValueError: If amount is not a non-negative integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Gold amount must be an integer, got {type(amount).__name__}.")

    if amount < 0:
        raise ValueError(f"Gold amount cannot be negative, got {amount}.")

    return amount
