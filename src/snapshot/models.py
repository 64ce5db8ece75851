"""
Craps Quest - Snapshot Models

Pydantic models that mirror the engine dataclasses. Built straight from a
GameState via `from_attributes`, and dumped to JSON for saves and logs.
"""

from pydantic import BaseModel, Field

from src.engine.base import (
    BetType,
    CardType,
    GameState,
    MonsterType,
    PendingChoice,
    PermanentEffect,
    SingleUseEffect,
    TurnEndReason,
    TurnPhase,
)


class CardSnapshot(BaseModel):
    """Any card; fields not used by its type stay None."""

    id: str
    name: str
    cost: int = Field(ge=0)
    card_type: CardType
    effect: PermanentEffect | SingleUseEffect | None = None
    description: str | None = None
    points: int | None = None

    model_config = {"from_attributes": True}


class MarketplaceSnapshot(BaseModel):
    """Card slots in display order; None marks a sold slot."""

    cards: list[CardSnapshot | None] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PlayerSnapshot(BaseModel):

    id: str
    name: str
    gold: int = Field(ge=0)
    victory_points: int = Field(ge=0)
    damage_count: int = Field(ge=0)
    permanent_cards: list[CardSnapshot] = Field(default_factory=list)
    single_use_cards: list[CardSnapshot] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class MonsterSnapshot(BaseModel):

    id: str
    name: str
    monster_type: MonsterType
    position: int
    numbers_to_hit: list[int]
    remaining_numbers: list[int]
    points: int
    gold_reward: int

    model_config = {"from_attributes": True}


class BetSnapshot(BaseModel):

    player_id: str
    bet_type: BetType
    amount: int = Field(gt=0)

    model_config = {"from_attributes": True}


class TurnStateSnapshot(BaseModel):

    phase: TurnPhase
    active_player_id: str
    point: int | None = None
    turn_damage: int = 0
    monster_state_before_turn: MonsterSnapshot | None = None
    has_used_revive: bool = False
    consecutive_turns: int = 1
    roll_count: int = 0
    pending_choice: PendingChoice | None = None
    end_reason: TurnEndReason | None = None

    model_config = {"from_attributes": True}


class GameSnapshot(BaseModel):
    """Whole-game mirror of a GameState."""

    players: list[PlayerSnapshot]
    current_player_index: int
    turn_state: TurnStateSnapshot
    marketplace: MarketplaceSnapshot
    card_deck: list[CardSnapshot]
    monsters: list[MonsterSnapshot]
    current_monster_index: int = 0
    bets: list[BetSnapshot] = Field(default_factory=list)
    damage_leader_id: str | None = None
    is_game_over: bool = False
    winner_id: str | None = None

    model_config = {"from_attributes": True}


def snapshot_game(state: GameState) -> GameSnapshot:
    return GameSnapshot.model_validate(state)
