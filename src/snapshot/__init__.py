"""
Craps Quest Snapshots.

Pydantic models mirroring the engine state for JSON export.
"""

from src.snapshot.models import (
    BetSnapshot,
    CardSnapshot,
    GameSnapshot,
    MarketplaceSnapshot,
    MonsterSnapshot,
    PlayerSnapshot,
    TurnStateSnapshot,
    snapshot_game,
)

__all__ = [
    "BetSnapshot",
    "CardSnapshot",
    "GameSnapshot",
    "MarketplaceSnapshot",
    "MonsterSnapshot",
    "PlayerSnapshot",
    "TurnStateSnapshot",
    "snapshot_game",
]
