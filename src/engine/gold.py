"""
Craps Quest - Gold Transactions

Players are frozen; every transaction returns the updated Player.
"""

import math
from dataclasses import replace

from src.engine.base import Player
from src.engine.constants import CRAP_OUT_GOLD_PENALTY_PERCENT
from src.engine.errors import InvalidActionError
from src.engine.validators import validate_gold_amount


def can_afford(player: Player, cost: int) -> bool:
    """Whether the player has at least `cost` gold."""
    return player.gold >= cost


def add_gold(player: Player, amount: int) -> Player:
    """
    Give gold to a player.

    Raises:
        ValueError: If amount is negative
    """
    validate_gold_amount(amount)
    return replace(player, gold=player.gold + amount)


def remove_gold(player: Player, amount: int) -> Player:
    """
    Take gold from a player.

    Raises:
        ValueError: If amount is negative
        InvalidActionError: If the player cannot afford it
    """
    validate_gold_amount(amount)
    if not can_afford(player, amount):
        raise InvalidActionError(
            f"Insufficient gold. {player.name} has {player.gold} but needs {amount}."
        )
    return replace(player, gold=player.gold - amount)


def calculate_crap_out_loss(current_gold: int) -> int:
    """Gold lost on a crap-out: half, rounded down."""
    return math.floor(current_gold * CRAP_OUT_GOLD_PENALTY_PERCENT)


def apply_crap_out_penalty(player: Player) -> tuple[Player, int]:
    """
    Apply the crap-out penalty.

    Returns:
        Tuple of (updated player, gold lost)
    """
    loss = calculate_crap_out_loss(player.gold)
    return replace(player, gold=player.gold - loss), loss


def transfer_gold(sender: Player, receiver: Player, amount: int) -> tuple[Player, Player]:
    """
    Move gold between players.

    Raises:
        InvalidActionError: If the sender cannot afford it
    """
    return remove_gold(sender, amount), add_gold(receiver, amount)


def format_gold_change(amount: int) -> str:
    """Signed display string, e.g. "+5" or "-3"."""
    return f"+{amount}" if amount >= 0 else str(amount)
