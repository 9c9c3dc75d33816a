"""Move types for Montoncito."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class MoveType(str, Enum):
    """Type of move. Values are the wire tags."""

    START_GAME = "START_GAME"
    DRAW_TO_HAND = "DRAW_TO_HAND"
    PLAY_HAND_TO_BUILD = "PLAY_HAND_TO_BUILD"
    PLAY_STOCK_TO_BUILD = "PLAY_STOCK_TO_BUILD"
    PLAY_DISCARD_TO_BUILD = "PLAY_DISCARD_TO_BUILD"
    DISCARD_FROM_HAND = "DISCARD_FROM_HAND"


class MoveParseError(ValueError):
    """Raised when a move mapping cannot be turned into a Move."""


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.move_type.value}


@dataclass(frozen=True, slots=True)
class StartGame(Move):
    """Deal stocks, open the build piles and begin the first turn."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.START_GAME

    def __str__(self) -> str:
        return "Start game"


@dataclass(frozen=True, slots=True)
class DrawToHand(Move):
    """Refill the hand from the draw pile up to the hand size."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW_TO_HAND

    def __str__(self) -> str:
        return "Draw to hand"


@dataclass(frozen=True, slots=True)
class PlayHandToBuild(Move):
    """Play a hand card onto a build pile."""

    card_id: str
    build_id: str

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_HAND_TO_BUILD

    def __str__(self) -> str:
        return f"Play {self.card_id} from hand to {self.build_id}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.move_type.value, "cardId": self.card_id, "buildId": self.build_id}


@dataclass(frozen=True, slots=True)
class PlayStockToBuild(Move):
    """Play the top stock card onto a build pile."""

    build_id: str

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_STOCK_TO_BUILD

    def __str__(self) -> str:
        return f"Play stock to {self.build_id}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.move_type.value, "buildId": self.build_id}


@dataclass(frozen=True, slots=True)
class PlayDiscardToBuild(Move):
    """Play the top of one of the player's discard piles onto a build pile."""

    pile_index: int
    build_id: str

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_DISCARD_TO_BUILD

    def __str__(self) -> str:
        return f"Play discard {self.pile_index + 1} to {self.build_id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.move_type.value,
            "pileIndex": self.pile_index,
            "buildId": self.build_id,
        }


@dataclass(frozen=True, slots=True)
class DiscardFromHand(Move):
    """Discard a hand card to a personal discard pile. Ends the turn."""

    card_id: str
    pile_index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD_FROM_HAND

    def __str__(self) -> str:
        return f"Discard {self.card_id} to pile {self.pile_index + 1}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.move_type.value,
            "cardId": self.card_id,
            "pileIndex": self.pile_index,
        }


def move_from_dict(data: Mapping[str, Any]) -> Move:
    """Build a Move from its wire form, e.g. ``{"kind": "PLAY_STOCK_TO_BUILD", "buildId": "B1"}``.

    Raises:
        MoveParseError: Unknown kind or missing/mistyped fields.
    """
    try:
        kind = MoveType(data["kind"])
    except (KeyError, ValueError) as e:
        raise MoveParseError(f"Unknown move kind: {data.get('kind')!r}") from e

    try:
        match kind:
            case MoveType.START_GAME:
                return StartGame()
            case MoveType.DRAW_TO_HAND:
                return DrawToHand()
            case MoveType.PLAY_HAND_TO_BUILD:
                return PlayHandToBuild(card_id=str(data["cardId"]), build_id=str(data["buildId"]))
            case MoveType.PLAY_STOCK_TO_BUILD:
                return PlayStockToBuild(build_id=str(data["buildId"]))
            case MoveType.PLAY_DISCARD_TO_BUILD:
                return PlayDiscardToBuild(
                    pile_index=int(data["pileIndex"]), build_id=str(data["buildId"])
                )
            case MoveType.DISCARD_FROM_HAND:
                return DiscardFromHand(card_id=str(data["cardId"]), pile_index=int(data["pileIndex"]))
    except (KeyError, TypeError, ValueError) as e:
        raise MoveParseError(f"Malformed {kind.value} move: {e}") from e

    raise MoveParseError(f"Unknown move kind: {kind.value}")
