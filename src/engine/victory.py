"""
Craps Quest - Victory Point Tracking

Victory checks, damage leader bonus and tie-breaking.

The damage leader (strictly most damage dealt, nobody on zero) is worth
DAMAGE_LEADER_BONUS extra points. Ties between players past the threshold
are broken by effective VP, then gold, then permanent card count.
"""

from dataclasses import replace
from typing import Sequence

from src.engine.base import Player
from src.engine.constants import DAMAGE_LEADER_BONUS, VICTORY_POINTS_TO_WIN


def add_victory_points(player: Player, points: int) -> Player:
    """
    Award victory points.

    Raises:
        ValueError: If points is negative
    """
    if points < 0:
        raise ValueError(f"Victory points cannot be negative, got {points}.")
    return replace(player, victory_points=player.victory_points + points)


def check_victory(player: Player) -> bool:
    """Base victory points only, without the damage leader bonus."""
    return player.victory_points >= VICTORY_POINTS_TO_WIN


def get_effective_victory_points(player: Player, is_damage_leader: bool) -> int:
    bonus = DAMAGE_LEADER_BONUS if is_damage_leader else 0
    return player.victory_points + bonus


def check_victory_with_bonus(player: Player, is_damage_leader: bool) -> bool:
    return get_effective_victory_points(player, is_damage_leader) >= VICTORY_POINTS_TO_WIN


def calculate_damage_leader(players: Sequence[Player]) -> str | None:
    """
    Id of the player with the most damage.

    The earliest seat wins a tie.
    Returns None when no player has dealt damage.
    """
    leader_id: str | None = None
    max_damage = 0
    for player in players:
        if player.damage_count > max_damage:
            max_damage = player.damage_count
            leader_id = player.id
    return leader_id


def get_winners(players: Sequence[Player], damage_leader_id: str | None) -> list[Player]:
    """All players at or past the victory threshold, in seat order."""
    return [
        p for p in players
        if check_victory_with_bonus(p, p.id == damage_leader_id)
    ]


def get_winner(players: Sequence[Player], damage_leader_id: str | None) -> Player | None:
    """First player in seat order to reach the threshold."""
    winners = get_winners(players, damage_leader_id)
    return winners[0] if winners else None


def _ranking_key(player: Player, damage_leader_id: str | None) -> tuple[int, int, int]:
    return (
        get_effective_victory_points(player, player.id == damage_leader_id),
        player.gold,
        len(player.permanent_cards),
    )


def resolve_tie_breaker(
    winners: Sequence[Player],
    damage_leader_id: str | None
) -> Player | None:
    """
    Pick a single winner.

    Returns:
        The winner, or None when no winners or a full tie remains
    """
    if not winners:
        return None
    if len(winners) == 1:
        return winners[0]

    ranked = sorted(winners, key=lambda p: _ranking_key(p, damage_leader_id), reverse=True)
    if _ranking_key(ranked[0], damage_leader_id) == _ranking_key(ranked[1], damage_leader_id):
        return None
    return ranked[0]


def get_player_rankings(players: Sequence[Player], damage_leader_id: str | None) -> list[Player]:
    """Players by effective victory points, highest first (stable)."""
    return sorted(
        players,
        key=lambda p: get_effective_victory_points(p, p.id == damage_leader_id),
        reverse=True,
    )


def points_to_win(player: Player, is_damage_leader: bool) -> int:
    """Points still needed, 0 once the threshold is reached."""
    return max(0, VICTORY_POINTS_TO_WIN - get_effective_victory_points(player, is_damage_leader))


def format_victory_points(player: Player, is_damage_leader: bool) -> str:
    """e.g. "7 VP" or "7 VP (+3)"."""
    if is_damage_leader:
        return f"{player.victory_points} VP (+{DAMAGE_LEADER_BONUS})"
    return f"{player.victory_points} VP"
