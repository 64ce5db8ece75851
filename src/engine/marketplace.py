"""
Craps Quest - Marketplace Rules

Purchase and refresh validation plus read-only marketplace queries.
Mutations live in GameEngine.
"""

from typing import Sequence

from src.engine.base import Card, CardType, Marketplace, PermanentCard, Player, PointCard, SingleUseCard
from src.engine.cards import draw_cards
from src.engine.constants import MARKETPLACE_REFRESH_COST, MARKETPLACE_SIZE
from src.engine.errors import InvalidActionError
from src.engine.gold import can_afford
from src.engine.hand import can_hold_permanent, can_hold_single_use

_TYPE_ORDER = {CardType.PERMANENT: 0, CardType.SINGLE_USE: 1, CardType.POINT: 2}
_TYPE_LABELS = {
    CardType.PERMANENT: "Permanent",
    CardType.SINGLE_USE: "Single Use",
    CardType.POINT: "Victory Points",
}


def get_marketplace_card(marketplace: Marketplace, card_id: str) -> Card | None:
    return next((c for c in marketplace.available_cards if c.id == card_id), None)


def validate_card_purchase(player: Player, marketplace: Marketplace, card_id: str) -> Card:
    """
    Check that a player may buy a card.

    Returns:
        The card to buy

    Raises:
        InvalidActionError: If the card is missing, unaffordable or cannot be held
    """
    card = get_marketplace_card(marketplace, card_id)
    if card is None:
        raise InvalidActionError("Card not found in marketplace.")

    if not can_afford(player, card.cost):
        raise InvalidActionError(
            f"Not enough gold. Card costs {card.cost}, you have {player.gold}."
        )

    # Point cards are cashed in immediately, so they need no slot
    if isinstance(card, PermanentCard) and not can_hold_permanent(player):
        raise InvalidActionError("Cannot hold more permanent cards. Max limit reached.")
    if isinstance(card, SingleUseCard) and not can_hold_single_use(player):
        raise InvalidActionError("Cannot hold more single-use cards. Max limit reached.")

    return card


def validate_marketplace_refresh(player: Player) -> int:
    """
    Check that a player can pay for a refresh.

    Returns:
        The refresh cost

    Raises:
        InvalidActionError: If the player cannot afford it
    """
    if not can_afford(player, MARKETPLACE_REFRESH_COST):
        raise InvalidActionError(
            f"Not enough gold. Refresh costs {MARKETPLACE_REFRESH_COST}, you have {player.gold}."
        )
    return MARKETPLACE_REFRESH_COST


def remove_marketplace_card(marketplace: Marketplace, card_id: str) -> Marketplace:
    """Mark the card's slot as sold."""
    return Marketplace(cards=tuple(
        None if card is not None and card.id == card_id else card
        for card in marketplace.cards
    ))


def restock_marketplace(
    marketplace: Marketplace,
    deck: Sequence[Card]
) -> tuple[Marketplace, tuple[Card, ...]]:
    """
    Swap the offer for fresh cards.

    Unsold cards go to the bottom of the deck, then a full offer is drawn
    from the top.

    Returns:
        Tuple of (new marketplace, remaining deck)
    """
    cycled = tuple(deck) + marketplace.available_cards
    drawn, remaining = draw_cards(cycled, MARKETPLACE_SIZE)
    return Marketplace(cards=drawn), remaining


def get_affordable_cards(player: Player, marketplace: Marketplace) -> list[Card]:
    """Cards the player could buy right now."""
    affordable = []
    for card in marketplace.available_cards:
        try:
            validate_card_purchase(player, marketplace, card.id)
        except InvalidActionError:
            continue
        affordable.append(card)
    return affordable


def get_marketplace_by_type(marketplace: Marketplace) -> dict[CardType, list[Card]]:
    grouped: dict[CardType, list[Card]] = {card_type: [] for card_type in CardType}
    for card in marketplace.available_cards:
        grouped[card.card_type].append(card)
    return grouped


def get_marketplace_card_count(marketplace: Marketplace) -> int:
    return len(marketplace.available_cards)


def is_marketplace_full(marketplace: Marketplace) -> bool:
    return get_marketplace_card_count(marketplace) >= MARKETPLACE_SIZE


def is_marketplace_low(marketplace: Marketplace, threshold: int = 3) -> bool:
    return get_marketplace_card_count(marketplace) < threshold


def sort_cards_by_cost(cards: Sequence[Card], ascending: bool = True) -> list[Card]:
    return sorted(cards, key=lambda c: c.cost, reverse=not ascending)


def sort_cards_by_type_and_cost(cards: Sequence[Card]) -> list[Card]:
    """Permanent, single-use, then point cards; cheapest first within a type."""
    return sorted(cards, key=lambda c: (_TYPE_ORDER[c.card_type], c.cost))


def describe_card(card: Card) -> str:
    """
    One-line description for display.

    Example: "Shield (Permanent, 4 gold): Block one 7 (negate crap-out once per turn)"
    """
    if isinstance(card, PointCard):
        plural = "s" if card.points > 1 else ""
        text = f"Gain {card.points} victory point{plural}"
    else:
        text = card.description
    return f"{card.name} ({_TYPE_LABELS[card.card_type]}, {card.cost} gold): {text}"
