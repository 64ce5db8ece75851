"""
Craps Quest - Monster Gauntlet

The fixed monster track: ten monsters of rising difficulty ending with the
boss. Monsters are frozen; hitting one returns a new Monster.
"""

import itertools
from dataclasses import dataclass, replace

from src.engine.base import Monster, MonsterType
from src.engine.constants import MONSTER_COUNT


@dataclass(frozen=True)
class MonsterTemplate:
    name: str
    monster_type: MonsterType
    numbers_to_hit: tuple[int, ...]
    points: int
    gold_reward: int


MONSTER_TEMPLATES: tuple[MonsterTemplate, ...] = (
    MonsterTemplate("Cave Goblin", MonsterType.GOBLIN, (4, 10), 1, 2),
    MonsterTemplate("Skeletal Warrior", MonsterType.SKELETON, (5, 9), 1, 2),
    MonsterTemplate("Orc Berserker", MonsterType.ORC, (4, 6, 10), 1, 3),
    MonsterTemplate("Mountain Troll", MonsterType.TROLL, (5, 8, 9), 2, 3),
    MonsterTemplate("Vengeful Wraith", MonsterType.WRAITH, (4, 6, 8, 10), 2, 4),
    MonsterTemplate("Stone Golem", MonsterType.GOLEM, (4, 5, 9, 10), 2, 4),
    MonsterTemplate("Infernal Demon", MonsterType.DEMON, (4, 5, 6, 8, 9), 3, 5),
    MonsterTemplate("Ancient Dragon", MonsterType.DRAGON, (4, 5, 6, 9, 10), 3, 5),
    MonsterTemplate("Dread Lich", MonsterType.LICH, (4, 5, 6, 8, 9, 10), 4, 6),
    MonsterTemplate("The Abyssal Tyrant", MonsterType.BOSS, (4, 5, 6, 8, 9, 10), 5, 8),
)

_monster_ids = itertools.count(1)


def get_monster_template(position: int) -> MonsterTemplate:
    """
    Template for a track position.

    Raises:
        ValueError: If position is outside 1-MONSTER_COUNT
    """
    if not (1 <= position <= MONSTER_COUNT):
        raise ValueError(f"Monster position must be between 1 and {MONSTER_COUNT}, got {position}.")
    return MONSTER_TEMPLATES[position - 1]


def create_monster(position: int) -> Monster:
    """Create a fresh monster with all of its numbers still to hit."""
    template = get_monster_template(position)
    return Monster(
        id=f"monster-{position}-{next(_monster_ids)}",
        name=template.name,
        monster_type=template.monster_type,
        position=position,
        numbers_to_hit=template.numbers_to_hit,
        remaining_numbers=template.numbers_to_hit,
        points=template.points,
        gold_reward=template.gold_reward,
    )


def create_monster_gauntlet() -> tuple[Monster, ...]:
    """The full track, position 1 first."""
    return tuple(create_monster(position) for position in range(1, MONSTER_COUNT + 1))


def hit_monster_number(monster: Monster, number: int) -> Monster:
    """
    Cross a number off the monster.

    Raises:
        ValueError: If the number is not among the remaining numbers
    """
    if number not in monster.remaining_numbers:
        raise ValueError(f"{number} is not a remaining number on {monster.name}.")
    return replace(
        monster,
        remaining_numbers=tuple(n for n in monster.remaining_numbers if n != number),
    )


def defeat_monster(monster: Monster) -> Monster:
    """Cross off every remaining number at once."""
    return replace(monster, remaining_numbers=())


def get_total_gauntlet_points() -> int:
    return sum(template.points for template in MONSTER_TEMPLATES)


def get_total_gauntlet_gold() -> int:
    return sum(template.gold_reward for template in MONSTER_TEMPLATES)


def get_monster_difficulty(monster: Monster) -> str:
    """Easy, Medium, Hard or Boss, by the count of numbers to hit."""
    if monster.is_boss:
        return "Boss"
    count = len(monster.numbers_to_hit)
    if count <= 2:
        return "Easy"
    if count <= 4:
        return "Medium"
    return "Hard"
