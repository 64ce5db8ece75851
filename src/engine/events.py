"""
Craps Quest - Game Events

Event types and payloads describing what changed between two game states,
for turn logs and anything that mirrors the game elsewhere.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import GameState, PendingChoice, TurnEndReason


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_WON = auto()
    TURN_ADVANCED = auto()
    MONSTER_DEFEATED = auto()
    CRAPPED_OUT = auto()
    ESCAPED = auto()
    POINT_ESTABLISHED = auto()
    MONSTER_HIT = auto()
    CARD_PURCHASED = auto()
    MARKETPLACE_REFRESHED = auto()
    BET_PLACED = auto()
    PHASE_CHANGED = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """A classified change, with the player it concerns."""

    event: GameEvent
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


_END_REASON_EVENTS: dict[TurnEndReason, GameEvent] = {
    TurnEndReason.DEFEATED: GameEvent.MONSTER_DEFEATED,
    TurnEndReason.CRAPPED_OUT: GameEvent.CRAPPED_OUT,
    TurnEndReason.CRAPS: GameEvent.CRAPPED_OUT,
    TurnEndReason.ESCAPED: GameEvent.ESCAPED,
}


def classify_state_change(old: GameState, new: GameState) -> EventPayload:
    """
    Pick the most significant event between two states.

    Checks run from game-level changes down to phase changes; the first
    match wins and STATE_UPDATED is the fallback.
    """
    player_id = old.turn_state.active_player_id
    old_turn, new_turn = old.turn_state, new.turn_state

    if new.is_game_over and not old.is_game_over:
        return EventPayload(GameEvent.GAME_WON, new.winner_id)

    if new_turn.active_player_id != old_turn.active_player_id:
        return EventPayload(
            GameEvent.TURN_ADVANCED,
            new_turn.active_player_id,
            {"previous_player_id": old_turn.active_player_id},
        )

    if new_turn.end_reason is not None and old_turn.end_reason is None:
        event = _END_REASON_EVENTS.get(new_turn.end_reason)
        if event is not None:
            return EventPayload(event, player_id, {"monster": old.current_monster.name})

    # a crap-out with the revive still available leaves the turn open
    if new_turn.pending_choice is PendingChoice.REVIVE and old_turn.pending_choice is None:
        return EventPayload(GameEvent.CRAPPED_OUT, player_id, {"monster": old.current_monster.name})

    if new_turn.point is not None and old_turn.point is None:
        return EventPayload(GameEvent.POINT_ESTABLISHED, player_id, {"point": new_turn.point})

    if new_turn.turn_damage > old_turn.turn_damage:
        return EventPayload(
            GameEvent.MONSTER_HIT,
            player_id,
            {"monster": new.current_monster.name, "turn_damage": new_turn.turn_damage},
        )

    if old.marketplace != new.marketplace:
        old_ids, new_ids = set(old.marketplace.card_ids), set(new.marketplace.card_ids)
        if new_ids < old_ids:
            return EventPayload(GameEvent.CARD_PURCHASED, player_id, {"card_ids": sorted(old_ids - new_ids)})
        return EventPayload(GameEvent.MARKETPLACE_REFRESHED, player_id)

    if len(new.bets) > len(old.bets):
        bet = new.bets[-1]
        return EventPayload(
            GameEvent.BET_PLACED,
            bet.player_id,
            {"bet_type": bet.bet_type.value, "amount": bet.amount},
        )

    if new_turn.phase != old_turn.phase:
        return EventPayload(
            GameEvent.PHASE_CHANGED,
            player_id,
            {"from": old_turn.phase.value, "to": new_turn.phase.value},
        )

    return EventPayload(GameEvent.STATE_UPDATED, player_id)


_DESCRIPTIONS: dict[GameEvent, str] = {
    GameEvent.GAME_WON: "{player} wins the game!",
    GameEvent.TURN_ADVANCED: "It is now {player}'s turn.",
    GameEvent.MONSTER_DEFEATED: "{player} defeated {monster}!",
    GameEvent.CRAPPED_OUT: "{player} crapped out.",
    GameEvent.ESCAPED: "{player} escaped from {monster}.",
    GameEvent.POINT_ESTABLISHED: "{player} set the point to {point}.",
    GameEvent.MONSTER_HIT: "{player} hit {monster}.",
    GameEvent.CARD_PURCHASED: "{player} bought a card.",
    GameEvent.MARKETPLACE_REFRESHED: "{player} refreshed the marketplace.",
    GameEvent.BET_PLACED: "{player} bet {amount} gold {bet_type}.",
    GameEvent.PHASE_CHANGED: "{player} moved to {phase}.",
    GameEvent.STATE_UPDATED: "{player} updated the game.",
}


def describe_event(payload: EventPayload, player_name: str) -> str:
    """Turn-log line for an event."""
    data = payload.data
    phase = data.get("to")
    return _DESCRIPTIONS[payload.event].format(
        player=player_name,
        monster=data.get("monster", "the monster"),
        point=data.get("point"),
        amount=data.get("amount"),
        bet_type=str(data.get("bet_type", "")).upper(),
        phase=phase.replace("_", " ") if phase else "a new phase",
    )
