"""
Craps Quest - Game Initialization

Builds players, the first turn, the opening marketplace and the full game
state. Player-name validation reports problems as a ValidationResult;
initialize_game turns an invalid result into a GameSetupError.
"""

import logging
import random
import uuid
from dataclasses import dataclass
from typing import Sequence

from src.engine.base import (
    Card,
    GameState,
    Marketplace,
    Player,
    TurnPhase,
    TurnState,
)
from src.engine.cards import create_shuffled_deck, draw_cards
from src.engine.constants import (
    MARKETPLACE_SIZE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    STARTING_DAMAGE,
    STARTING_GOLD,
    STARTING_VICTORY_POINTS,
)
from src.engine.errors import GameSetupError
from src.engine.monsters import create_monster_gauntlet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating player names.

    Attributes:
        is_valid: Whether a game can be created
        error: Message for the first rule broken, None when valid
    """
    is_valid: bool
    error: str | None = None


def create_player(name: str, index: int) -> Player:
    """
    Create a player with starting resources.

    The id embeds the seat index ("player-<index>-...") plus a random suffix.
    """
    return Player(
        id=f"player-{index}-{uuid.uuid4().hex[:12]}",
        name=name.strip(),
        gold=STARTING_GOLD,
        victory_points=STARTING_VICTORY_POINTS,
        damage_count=STARTING_DAMAGE,
    )


def create_players(names: Sequence[str]) -> tuple[Player, ...]:
    return tuple(create_player(name, index) for index, name in enumerate(names))


def validate_player_names(names: Sequence[str]) -> ValidationResult:
    """
    Validate player names for a new game.

    Rules, in order (the first one broken is reported):
        1. At least MIN_PLAYERS names
        2. At most MAX_PLAYERS names
        3. No empty or whitespace-only names
        4. No duplicates, ignoring case and surrounding whitespace
    """
    if len(names) < MIN_PLAYERS:
        return ValidationResult(False, f"Minimum {MIN_PLAYERS} players required.")

    if len(names) > MAX_PLAYERS:
        return ValidationResult(False, f"Maximum {MAX_PLAYERS} players allowed.")

    trimmed = [name.strip() for name in names]
    for index, name in enumerate(trimmed):
        if not name:
            return ValidationResult(False, f"Player {index + 1} must have a name.")

    seen: dict[str, int] = {}
    for index, name in enumerate(trimmed):
        key = name.lower()
        if key in seen:
            return ValidationResult(
                False,
                f"Player names must be unique: Player {index + 1} has the same name "
                f"as Player {seen[key] + 1}.",
            )
        seen[key] = index

    return ValidationResult(True)


def create_initial_turn_state(active_player_id: str) -> TurnState:
    """First turn of the game: marketplace refresh, nothing rolled yet."""
    return TurnState(phase=TurnPhase.MARKETPLACE_REFRESH, active_player_id=active_player_id)


def reset_turn_state(active_player_id: str, preserve_revive: bool = False) -> TurnState:
    """Fresh turn state; only the revive flag may carry over."""
    return TurnState(
        phase=TurnPhase.MARKETPLACE_REFRESH,
        active_player_id=active_player_id,
        has_used_revive=preserve_revive,
    )


def create_initial_marketplace(deck: Sequence[Card]) -> tuple[Marketplace, tuple[Card, ...]]:
    """
    Fill the marketplace from the top of the deck.

    Returns:
        Tuple of (marketplace, remaining deck)
    """
    drawn, remaining = draw_cards(deck, MARKETPLACE_SIZE)
    return Marketplace(cards=drawn), remaining


def initialize_game(names: Sequence[str], rng: random.Random | None = None) -> GameState:
    """
    Create a complete new game.

    Args:
        names: Player display names, in seat order
        rng: Random source for the deck shuffle (default: the `random` module)

    Raises:
        GameSetupError: If the names fail validation
    """
    validation = validate_player_names(names)
    if not validation.is_valid:
        raise GameSetupError(validation.error)

    players = create_players(names)
    marketplace, remaining_deck = create_initial_marketplace(create_shuffled_deck(rng))

    state = GameState(
        players=players,
        current_player_index=0,
        turn_state=create_initial_turn_state(players[0].id),
        marketplace=marketplace,
        card_deck=remaining_deck,
        monsters=create_monster_gauntlet(),
        current_monster_index=0,
        bets=(),
        damage_leader_id=None,
        is_game_over=False,
        winner_id=None,
    )
    logger.info(
        "Game created for %d players (%d cards left in deck)",
        len(players), len(remaining_deck),
    )
    return state


def get_next_player_index(current_index: int, player_count: int) -> int:
    return (current_index + 1) % player_count


def find_player_by_id(players: Sequence[Player], player_id: str) -> Player | None:
    return next((p for p in players if p.id == player_id), None)


def find_player_index_by_id(players: Sequence[Player], player_id: str) -> int:
    """Seat index of the player, -1 when absent."""
    return next((i for i, p in enumerate(players) if p.id == player_id), -1)
