"""
Craps Quest - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so every state
transition produces a new value and earlier snapshots stay valid.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Sequence, Union

from src.engine.constants import DICE_SIDES, POINT_NUMBERS


class TurnPhase(Enum):
    """Phases of a single turn, in play order."""
    MARKETPLACE_REFRESH = "marketplace_refresh"
    MARKET_PURCHASE = "market_purchase"
    BETTING = "betting"
    COME_OUT_ROLL = "come_out_roll"
    POINT_PHASE = "point_phase"
    RESOLUTION = "resolution"
    GAME_OVER = "game_over"


class PendingChoice(Enum):
    """Decisions the shooter must make before rolling again."""
    SELECT_NUMBER = "select_number"  # point hit: pick a number to cross off
    ESCAPE = "escape"                # snake eyes: escape or keep rolling
    REVIVE = "revive"                # crap-out: discard hand to keep rolling


class TurnEndReason(Enum):
    """Why the active player's turn is over."""
    DEFEATED = "defeated"
    ESCAPED = "escaped"
    CRAPPED_OUT = "crapped_out"
    CRAPS = "craps"
    POINT_MADE = "point_made"


class CardType(Enum):
    """Card variants sold in the marketplace."""
    PERMANENT = "permanent"
    SINGLE_USE = "single_use"
    POINT = "point"


class PermanentEffect(Enum):
    """Effects of permanent cards."""
    PLUS_ONE_DIE = "plus_one_die"
    REROLL = "reroll"
    SHIELD = "shield"
    LUCKY = "lucky"
    ARMOR = "armor"
    POINT_BONUS = "point_bonus"
    DOUBLE = "double"


class SingleUseEffect(Enum):
    """Effects of single-use cards."""
    STUN = "stun"
    RAPID_FIRE = "rapid_fire"
    MOMENTUM = "momentum"
    CHARM = "charm"
    CURSE = "curse"
    HEAL = "heal"


class MonsterType(Enum):
    """Monsters along the gauntlet. BOSS is always last."""
    GOBLIN = "goblin"
    SKELETON = "skeleton"
    ORC = "orc"
    TROLL = "troll"
    WRAITH = "wraith"
    GOLEM = "golem"
    DEMON = "demon"
    DRAGON = "dragon"
    LICH = "lich"
    BOSS = "boss"


class BetType(Enum):
    """Side bets placed by the other players on the shooter."""
    FOR = "for"
    AGAINST = "against"


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of a dice roll.

    Attributes:
        values: Tuple of dice face values
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in self.values:
            if not (1 <= value <= DICE_SIDES):
                raise ValueError(
                    f"Invalid die value {value}. "
                    f"Must be between 1 and {DICE_SIDES}."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    @property
    def total(self) -> int:
        """Sum of all dice."""
        return sum(self.values)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DiceRoll":
        """Create a DiceRoll from any sequence type."""
        return cls(values=tuple(values))


# =============================================================================
# CARDS
# =============================================================================

@dataclass(frozen=True)
class PermanentCard:
    """A card kept in hand for the rest of the game (max six per player)."""
    id: str
    name: str
    cost: int
    effect: PermanentEffect
    description: str

    card_type: ClassVar[CardType] = CardType.PERMANENT


@dataclass(frozen=True)
class SingleUseCard:
    """A card consumed when played."""
    id: str
    name: str
    cost: int
    effect: SingleUseEffect
    description: str

    card_type: ClassVar[CardType] = CardType.SINGLE_USE


@dataclass(frozen=True)
class PointCard:
    """A card converted into victory points on purchase."""
    id: str
    name: str
    cost: int
    points: int

    card_type: ClassVar[CardType] = CardType.POINT


Card = Union[PermanentCard, SingleUseCard, PointCard]


@dataclass(frozen=True)
class Marketplace:
    """
    Cards on offer this turn.

    Attributes:
        cards: Card slots in display order; None marks a sold slot
    """
    cards: tuple[Card | None, ...] = field(default_factory=tuple)

    @property
    def available_cards(self) -> tuple[Card, ...]:
        """Cards still for sale."""
        return tuple(card for card in self.cards if card is not None)

    @property
    def card_ids(self) -> frozenset[str]:
        return frozenset(card.id for card in self.available_cards)


# =============================================================================
# PLAYERS & MONSTERS
# =============================================================================

@dataclass(frozen=True)
class Player:
    """
    A player and everything they own.

    Attributes:
        id: Unique player id
        name: Display name (trimmed)
        gold: Currency, never negative
        victory_points: Points toward the win
        damage_count: Monster numbers crossed off over the game
        permanent_cards: Permanent cards in hand
        single_use_cards: Single-use cards in hand
    """
    id: str
    name: str
    gold: int
    victory_points: int
    damage_count: int
    permanent_cards: tuple[PermanentCard, ...] = field(default_factory=tuple)
    single_use_cards: tuple[SingleUseCard, ...] = field(default_factory=tuple)

    @property
    def owned_card_ids(self) -> frozenset[str]:
        return frozenset(
            card.id for card in self.permanent_cards + self.single_use_cards
        )


@dataclass(frozen=True)
class Monster:
    """
    A monster on the gauntlet track.

    Attributes:
        id: Unique monster id
        name: Display name
        monster_type: Kind of monster (BOSS closes the track)
        position: 1-based position along the track
        numbers_to_hit: Numbers assigned at creation
        remaining_numbers: Numbers not yet crossed off; empty means defeated
        points: Victory points awarded on defeat
        gold_reward: Gold awarded on defeat
    """
    id: str
    name: str
    monster_type: MonsterType
    position: int
    numbers_to_hit: tuple[int, ...]
    remaining_numbers: tuple[int, ...]
    points: int
    gold_reward: int

    def __post_init__(self) -> None:
        """Validate the monster's numbers."""
        if not self.numbers_to_hit:
            raise ValueError(f"Monster {self.name} must have numbers to hit.")
        extra = set(self.remaining_numbers) - set(self.numbers_to_hit)
        if extra:
            raise ValueError(
                f"Remaining numbers {sorted(extra)} are not on monster {self.name}."
            )

    @property
    def is_defeated(self) -> bool:
        return len(self.remaining_numbers) == 0

    @property
    def is_boss(self) -> bool:
        return self.monster_type is MonsterType.BOSS

    @property
    def hit_numbers(self) -> tuple[int, ...]:
        """Numbers already crossed off."""
        return tuple(
            n for n in self.numbers_to_hit if n not in self.remaining_numbers
        )


@dataclass(frozen=True)
class Bet:
    """A side bet on the shooter's turn."""
    player_id: str
    bet_type: BetType
    amount: int


# =============================================================================
# TURN & GAME STATE
# =============================================================================

@dataclass(frozen=True)
class TurnState:
    """
    Complete state of a player's turn.

    Attributes:
        phase: Current turn phase
        active_player_id: The shooter
        point: Point established on the come-out roll
        turn_damage: Numbers crossed off this turn (banked at turn end)
        monster_state_before_turn: Monster as it was when the turn began
        has_used_revive: Whether the revive has been spent
        consecutive_turns: Turns in a row for this player
        roll_count: Rolls taken this turn
        pending_choice: Decision required before the next roll
        end_reason: Why the turn ended, once in RESOLUTION
    """
    phase: TurnPhase
    active_player_id: str
    point: int | None = None
    turn_damage: int = 0
    monster_state_before_turn: Monster | None = None
    has_used_revive: bool = False
    consecutive_turns: int = 1
    roll_count: int = 0
    pending_choice: PendingChoice | None = None
    end_reason: TurnEndReason | None = None

    def __post_init__(self) -> None:
        """Validate the established point."""
        if self.point is not None and self.point not in POINT_NUMBERS:
            raise ValueError(f"Invalid point {self.point}.")


@dataclass(frozen=True)
class GameState:
    """
    The full game aggregate.

    Attributes:
        players: Seated players, fixed once created
        current_player_index: Index of the shooter
        turn_state: State of the current turn
        marketplace: Cards for sale
        card_deck: Remaining draw pile (top first)
        monsters: The gauntlet track
        current_monster_index: Index of the monster being fought
        bets: Side bets on the current turn
        damage_leader_id: Player with the most damage, if any
        is_game_over: Whether the game has ended
        winner_id: Winner, once decided
    """
    players: tuple[Player, ...]
    current_player_index: int
    turn_state: TurnState
    marketplace: Marketplace
    card_deck: tuple[Card, ...]
    monsters: tuple[Monster, ...]
    current_monster_index: int = 0
    bets: tuple[Bet, ...] = field(default_factory=tuple)
    damage_leader_id: str | None = None
    is_game_over: bool = False
    winner_id: str | None = None

    @property
    def active_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def current_monster(self) -> Monster:
        return self.monsters[self.current_monster_index]
