"""
Craps Quest - Card Deck

The fixed card catalog and the draw pile built from it. Card ids are unique
for the life of the process, so cards from different decks never collide.
"""

import itertools
import random
from dataclasses import dataclass
from typing import Sequence, TypeVar

from src.engine.base import (
    Card,
    CardType,
    PermanentCard,
    PermanentEffect,
    PointCard,
    SingleUseCard,
    SingleUseEffect,
)

T = TypeVar("T")


@dataclass(frozen=True)
class PermanentCardTemplate:
    name: str
    effect: PermanentEffect
    cost: int
    description: str
    copies: int


@dataclass(frozen=True)
class SingleUseCardTemplate:
    name: str
    effect: SingleUseEffect
    cost: int
    description: str
    copies: int


@dataclass(frozen=True)
class PointCardTemplate:
    name: str
    points: int
    cost: int
    copies: int


PERMANENT_CARD_TEMPLATES: tuple[PermanentCardTemplate, ...] = (
    PermanentCardTemplate("+1 Die", PermanentEffect.PLUS_ONE_DIE, 5, "Roll 3 dice and keep the best 2", 2),
    PermanentCardTemplate("Reroll", PermanentEffect.REROLL, 3, "Reroll one die after seeing the result", 3),
    PermanentCardTemplate("Shield", PermanentEffect.SHIELD, 4, "Block one 7 (negate crap-out once per turn)", 2),
    PermanentCardTemplate("Lucky Charm", PermanentEffect.LUCKY, 4, "Guarantee non-7 on next roll", 2),
    PermanentCardTemplate("Armor", PermanentEffect.ARMOR, 3, "Next crap-out doesn't lose gold", 2),
    PermanentCardTemplate("Point Bonus", PermanentEffect.POINT_BONUS, 4, "Point hit removes 2 numbers instead of 1", 2),
    PermanentCardTemplate("Double Strike", PermanentEffect.DOUBLE, 5, "Next monster hit counts as 2 hits", 2),
)

SINGLE_USE_CARD_TEMPLATES: tuple[SingleUseCardTemplate, ...] = (
    SingleUseCardTemplate("Stun", SingleUseEffect.STUN, 2, "Skip your rolling phase this turn", 2),
    SingleUseCardTemplate("Rapid Fire", SingleUseEffect.RAPID_FIRE, 3, "Roll twice this turn", 2),
    SingleUseCardTemplate("Momentum", SingleUseEffect.MOMENTUM, 3, "After 2 hits, gain +1 die for your next roll", 2),
    SingleUseCardTemplate("Charm", SingleUseEffect.CHARM, 4, "Take 2 consecutive turns", 1),
    SingleUseCardTemplate("Curse", SingleUseEffect.CURSE, 3, "Target player's next roll is treated as 7", 2),
    SingleUseCardTemplate("Heal", SingleUseEffect.HEAL, 2, "Un-cross one number from the current monster", 1),
)

POINT_CARD_TEMPLATES: tuple[PointCardTemplate, ...] = (
    PointCardTemplate("+1 Point", 1, 2, 8),
    PointCardTemplate("+2 Points", 2, 4, 6),
    PointCardTemplate("+3 Points", 3, 6, 4),
    PointCardTemplate("+5 Points", 5, 10, 2),
)

_card_ids = itertools.count(1)


def _next_card_id(prefix: str) -> str:
    return f"{prefix}-{next(_card_ids)}"


def create_card_deck() -> list[Card]:
    """
    Build every catalog card once, in catalog order.

    Returns:
        List of all cards (permanent, then single-use, then point cards)
    """
    deck: list[Card] = []

    for template in PERMANENT_CARD_TEMPLATES:
        for _ in range(template.copies):
            deck.append(PermanentCard(
                id=_next_card_id("perm"),
                name=template.name,
                cost=template.cost,
                effect=template.effect,
                description=template.description,
            ))

    for template in SINGLE_USE_CARD_TEMPLATES:
        for _ in range(template.copies):
            deck.append(SingleUseCard(
                id=_next_card_id("single"),
                name=template.name,
                cost=template.cost,
                effect=template.effect,
                description=template.description,
            ))

    for template in POINT_CARD_TEMPLATES:
        for _ in range(template.copies):
            deck.append(PointCard(
                id=_next_card_id("point"),
                name=template.name,
                cost=template.cost,
                points=template.points,
            ))

    return deck


def shuffle_cards(cards: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Fisher-Yates shuffle into a new list. The input is left untouched.

    Args:
        cards: Items to shuffle
        rng: Random source (default: the `random` module)
    """
    source = rng or random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def create_shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """Every catalog card exactly once, in random order."""
    return shuffle_cards(create_card_deck(), rng)


def draw_cards(deck: Sequence[Card], count: int) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """
    Draw from the top of the deck.

    Returns:
        Tuple of (drawn cards, remaining deck)
    """
    return tuple(deck[:count]), tuple(deck[count:])


def get_total_card_count() -> int:
    """Size of a full deck."""
    return sum(counts for counts in get_card_counts_by_type().values())


def get_card_counts_by_type() -> dict[CardType, int]:
    """Number of catalog cards per card type."""
    return {
        CardType.PERMANENT: sum(t.copies for t in PERMANENT_CARD_TEMPLATES),
        CardType.SINGLE_USE: sum(t.copies for t in SINGLE_USE_CARD_TEMPLATES),
        CardType.POINT: sum(t.copies for t in POINT_CARD_TEMPLATES),
    }


def is_permanent_card(card: Card) -> bool:
    return card.card_type is CardType.PERMANENT


def is_single_use_card(card: Card) -> bool:
    return card.card_type is CardType.SINGLE_USE


def is_point_card(card: Card) -> bool:
    return card.card_type is CardType.POINT
