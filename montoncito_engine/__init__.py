"""Montoncito card game engine."""

from montoncito_engine.cards import Card, Joker, Rank, StandardCard, Suit, create_deck
from montoncito_engine.engine import ApplyResult, apply_move
from montoncito_engine.events import EventType, GameEvent
from montoncito_engine.guards import InvariantError
from montoncito_engine.move_generator import generate_legal_moves
from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    Move,
    MoveType,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
    StartGame,
    move_from_dict,
)
from montoncito_engine.rng import make_rng, shuffle, shuffle_deck
from montoncito_engine.rules import RulesConfig, resolve_rules
from montoncito_engine.serialization import (
    MalformedSnapshotError,
    SnapshotError,
    UnsupportedSnapshotVersionError,
    decode,
    deserialize,
    encode,
    serialize,
)
from montoncito_engine.state import (
    BuildPile,
    GamePhase,
    GameState,
    PlayerState,
    Turn,
    create_initial_state,
)
from montoncito_engine.validator import validate_move
from montoncito_engine.wild import is_wild
from montoncito_engine.win import WinReason, check_game_over

__all__ = [
    "Card",
    "StandardCard",
    "Joker",
    "Rank",
    "Suit",
    "create_deck",
    "make_rng",
    "shuffle",
    "shuffle_deck",
    "RulesConfig",
    "resolve_rules",
    "GameState",
    "PlayerState",
    "BuildPile",
    "Turn",
    "GamePhase",
    "create_initial_state",
    "Move",
    "MoveType",
    "StartGame",
    "DrawToHand",
    "PlayHandToBuild",
    "PlayStockToBuild",
    "PlayDiscardToBuild",
    "DiscardFromHand",
    "move_from_dict",
    "EventType",
    "GameEvent",
    "is_wild",
    "validate_move",
    "generate_legal_moves",
    "check_game_over",
    "WinReason",
    "apply_move",
    "ApplyResult",
    "InvariantError",
    "encode",
    "decode",
    "serialize",
    "deserialize",
    "SnapshotError",
    "UnsupportedSnapshotVersionError",
    "MalformedSnapshotError",
]
