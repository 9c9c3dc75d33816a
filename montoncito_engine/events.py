"""Semantic events emitted by the engine.

Events describe what a move did. Callers forward them to observers; the
state returned alongside them is the source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """All event types the engine can emit."""

    GAME_STARTED = "GameStarted"
    DREW_TO_HAND = "DrewToHand"
    PLAYED_TO_BUILD = "PlayedToBuild"
    BUILD_COMPLETED = "BuildCompleted"
    BUILD_CLEARED = "BuildCleared"
    DISCARDED = "Discarded"
    TURN_ENDED = "TurnEnded"
    INVALID_MOVE = "InvalidMove"
    GAME_OVER = "GameOver"


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One event with an optional small payload."""

    type: EventType
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize event to a JSON-compatible dictionary."""
        return {"type": self.type.value, "payload": dict(self.payload)}


# =============================================================================
# Event Factory Functions
# =============================================================================


def game_started() -> GameEvent:
    return GameEvent(EventType.GAME_STARTED)


def drew_to_hand(player_id: str, count: int) -> GameEvent:
    return GameEvent(EventType.DREW_TO_HAND, {"player_id": player_id, "count": count})


def played_to_build(player_id: str, source: str, card_id: str, build_id: str) -> GameEvent:
    """A card left ``source`` ("hand", "stock" or "discard") for a build pile."""
    return GameEvent(
        EventType.PLAYED_TO_BUILD,
        {"player_id": player_id, "source": source, "card_id": card_id, "build_id": build_id},
    )


def build_completed(build_id: str) -> GameEvent:
    return GameEvent(EventType.BUILD_COMPLETED, {"build_id": build_id})


def build_cleared(build_id: str) -> GameEvent:
    return GameEvent(EventType.BUILD_CLEARED, {"build_id": build_id})


def discarded(player_id: str, card_id: str, pile_index: int) -> GameEvent:
    return GameEvent(
        EventType.DISCARDED,
        {"player_id": player_id, "card_id": card_id, "pile_index": pile_index},
    )


def turn_ended(turn: int, next_player_id: str) -> GameEvent:
    """``turn`` is the number of the turn that now begins."""
    return GameEvent(EventType.TURN_ENDED, {"turn": turn, "next_player_id": next_player_id})


def invalid_move(reason: str) -> GameEvent:
    return GameEvent(EventType.INVALID_MOVE, {"reason": reason})


def game_over(winner: str | None, reason: str | None) -> GameEvent:
    return GameEvent(EventType.GAME_OVER, {"winner": winner, "reason": reason})
