"""
Craps Quest - Card Hand Management

Capacity checks and hand changes for permanent and single-use cards.
"""

from dataclasses import replace

from src.engine.base import (
    Card,
    PermanentCard,
    PermanentEffect,
    Player,
    SingleUseCard,
    SingleUseEffect,
)
from src.engine.constants import MAX_PERMANENT_CARDS, MAX_SINGLE_USE_CARDS
from src.engine.errors import InvalidActionError


def can_hold_permanent(player: Player) -> bool:
    """Whether the player has a free permanent slot (max 6)."""
    return len(player.permanent_cards) < MAX_PERMANENT_CARDS


def can_hold_single_use(player: Player) -> bool:
    """Whether the player has a free single-use slot (max 8)."""
    return len(player.single_use_cards) < MAX_SINGLE_USE_CARDS


def get_remaining_permanent_slots(player: Player) -> int:
    return MAX_PERMANENT_CARDS - len(player.permanent_cards)


def get_remaining_single_use_slots(player: Player) -> int:
    return MAX_SINGLE_USE_CARDS - len(player.single_use_cards)


def add_permanent_card(player: Player, card: PermanentCard) -> Player:
    """
    Add a permanent card to the player's hand.

    Raises:
        InvalidActionError: If the hand is full or already holds this card
    """
    if not can_hold_permanent(player):
        raise InvalidActionError(
            f"Cannot add permanent card. Player already has maximum ({MAX_PERMANENT_CARDS})."
        )
    if card.id in player.owned_card_ids:
        raise InvalidActionError("Cannot add duplicate card (same ID already in hand).")
    return replace(player, permanent_cards=player.permanent_cards + (card,))


def add_single_use_card(player: Player, card: SingleUseCard) -> Player:
    """
    Add a single-use card to the player's hand.

    Raises:
        InvalidActionError: If the hand is full or already holds this card
    """
    if not can_hold_single_use(player):
        raise InvalidActionError(
            f"Cannot add single-use card. Player already has maximum ({MAX_SINGLE_USE_CARDS})."
        )
    if card.id in player.owned_card_ids:
        raise InvalidActionError("Cannot add duplicate card (same ID already in hand).")
    return replace(player, single_use_cards=player.single_use_cards + (card,))


def can_hold_card(player: Player, card: Card) -> bool:
    """Capacity check for any card. Point cards are never held."""
    if isinstance(card, PermanentCard):
        return can_hold_permanent(player)
    if isinstance(card, SingleUseCard):
        return can_hold_single_use(player)
    return True


def use_single_use_card(player: Player, card_id: str) -> tuple[Player, SingleUseCard]:
    """
    Consume a single-use card.

    Returns:
        Tuple of (updated player, the consumed card)

    Raises:
        InvalidActionError: If the card is not in the player's hand
    """
    card = find_single_use_card(player, card_id)
    if card is None:
        raise InvalidActionError(f'Card with ID "{card_id}" not found in player\'s hand.')
    remaining = tuple(c for c in player.single_use_cards if c.id != card_id)
    return replace(player, single_use_cards=remaining), card


def remove_permanent_card(player: Player, card_id: str) -> Player:
    """
    Remove a permanent card from the player's hand.

    Raises:
        InvalidActionError: If the card is not in the player's hand
    """
    if find_permanent_card(player, card_id) is None:
        raise InvalidActionError(f'Permanent card with ID "{card_id}" not found in player\'s hand.')
    return replace(
        player,
        permanent_cards=tuple(c for c in player.permanent_cards if c.id != card_id),
    )


def discard_hand(player: Player) -> tuple[Player, tuple[Card, ...]]:
    """
    Discard every card the player holds (the price of a revive).

    Returns:
        Tuple of (player with empty hands, discarded cards)
    """
    discarded: tuple[Card, ...] = player.permanent_cards + player.single_use_cards
    return replace(player, permanent_cards=(), single_use_cards=()), discarded


def find_permanent_card(player: Player, card_id: str) -> PermanentCard | None:
    return next((c for c in player.permanent_cards if c.id == card_id), None)


def find_single_use_card(player: Player, card_id: str) -> SingleUseCard | None:
    return next((c for c in player.single_use_cards if c.id == card_id), None)


def has_permanent_effect(player: Player, effect: PermanentEffect) -> bool:
    return any(c.effect is effect for c in player.permanent_cards)


def has_single_use_effect(player: Player, effect: SingleUseEffect) -> bool:
    return any(c.effect is effect for c in player.single_use_cards)


def get_total_card_count(player: Player) -> int:
    return len(player.permanent_cards) + len(player.single_use_cards)


def is_hand_empty(player: Player) -> bool:
    return get_total_card_count(player) == 0
