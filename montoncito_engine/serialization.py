"""Versioned snapshots of GameState.

A snapshot is ``{"schemaVersion": 1, "payload": {...}}`` with camelCase keys
so it can travel as JSON. Only the current schema version decodes; there is
no migration.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from montoncito_engine.cards import Card, Joker, Rank, StandardCard, Suit
from montoncito_engine.rules import RulesConfig
from montoncito_engine.state import (
    SCHEMA_VERSION,
    BuildPile,
    Center,
    Deck,
    GamePhase,
    GameState,
    PlayerState,
    Turn,
)


class SnapshotError(ValueError):
    """Base class for snapshot decoding failures."""


class UnsupportedSnapshotVersionError(SnapshotError):
    """The envelope carries a schema version this engine does not read."""


class MalformedSnapshotError(SnapshotError):
    """The envelope or its payload cannot be decoded."""


class SnapshotEnvelope(BaseModel):
    """Outer shape of a snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(..., alias="schemaVersion", strict=True)
    payload: dict[str, Any]


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def card_to_dict(card: Card) -> dict[str, Any]:
    if isinstance(card, Joker):
        d: dict[str, Any] = {"kind": "joker", "id": card.id}
    else:
        d = {"kind": "standard", "id": card.id, "rank": int(card.rank), "suit": card.suit.label}
    if card.base_wild:
        d["baseWild"] = True
    return d


def _cards(cards) -> list[dict[str, Any]]:
    return [card_to_dict(c) for c in cards]


def rules_to_dict(rules: RulesConfig) -> dict[str, Any]:
    return {
        "handSize": rules.hand_size,
        "stockSize": rules.stock_size,
        "buildPiles": rules.build_piles,
        "maxBuildRank": rules.max_build_rank,
        "discardPiles": rules.discard_piles,
        "useJokers": rules.use_jokers,
        "jokersAreWild": rules.jokers_are_wild,
        "kingsAreWild": rules.kings_are_wild,
        "additionalWildRanks": list(rules.additional_wild_ranks),
        "enableCardWildFlag": rules.enable_card_wild_flag,
        "autoClearCompleteBuild": rules.auto_clear_complete_build,
    }


def player_to_dict(player: PlayerState) -> dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "hand": _cards(player.hand),
        "discards": [_cards(pile) for pile in player.discards],
        "stock": _cards(player.stock),
    }


def state_to_dict(state: GameState) -> dict[str, Any]:
    """GameState as a JSON-compatible dict."""
    return {
        "version": state.version,
        "id": state.id,
        "phase": state.phase.value,
        "turn": {
            "number": state.turn.number,
            "activePlayer": state.turn.active_player,
            "hasDiscarded": state.turn.has_discarded,
        },
        "players": list(state.players),
        "byId": {pid: player_to_dict(p) for pid, p in state.by_id.items()},
        "deck": {
            "drawPile": _cards(state.deck.draw_pile),
            "discard": _cards(state.deck.discard),
        },
        "center": {
            "buildPiles": [
                {"id": p.id, "cards": _cards(p.cards), "nextRank": p.next_rank}
                for p in state.center.build_piles
            ]
        },
        "winner": state.winner,
        "rngSeed": state.rng_seed,
        "rules": rules_to_dict(state.rules),
        "data": dict(state.data),
    }


def encode(state: GameState) -> dict[str, Any]:
    """Wrap a state in a versioned envelope."""
    return {"schemaVersion": SCHEMA_VERSION, "payload": state_to_dict(state)}


def serialize(state: GameState) -> str:
    return json.dumps(encode(state))


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------


def card_from_dict(d: Mapping[str, Any]) -> Card:
    base_wild = bool(d.get("baseWild", False))
    if d["kind"] == "joker":
        return Joker(id=str(d["id"]), base_wild=base_wild)
    if d["kind"] == "standard":
        return StandardCard(
            id=str(d["id"]),
            rank=Rank(d["rank"]),
            suit=Suit.from_label(d["suit"]),
            base_wild=base_wild,
        )
    raise ValueError(f"Unknown card kind: {d['kind']!r}")


def _cards_from(items) -> tuple[Card, ...]:
    return tuple(card_from_dict(c) for c in items)


def rules_from_dict(d: Mapping[str, Any]) -> RulesConfig:
    return RulesConfig(
        hand_size=int(d["handSize"]),
        stock_size=int(d["stockSize"]),
        build_piles=int(d["buildPiles"]),
        max_build_rank=int(d["maxBuildRank"]),
        discard_piles=int(d["discardPiles"]),
        use_jokers=bool(d["useJokers"]),
        jokers_are_wild=bool(d["jokersAreWild"]),
        kings_are_wild=bool(d["kingsAreWild"]),
        additional_wild_ranks=tuple(int(r) for r in d["additionalWildRanks"]),
        enable_card_wild_flag=bool(d["enableCardWildFlag"]),
        auto_clear_complete_build=bool(d["autoClearCompleteBuild"]),
    )


def player_from_dict(d: Mapping[str, Any]) -> PlayerState:
    return PlayerState(
        id=str(d["id"]),
        name=d.get("name"),
        hand=_cards_from(d["hand"]),
        discards=tuple(_cards_from(pile) for pile in d["discards"]),
        stock=_cards_from(d["stock"]),
    )


def state_from_dict(d: Mapping[str, Any]) -> GameState:
    """Rebuild a GameState from ``state_to_dict`` output."""
    turn = d["turn"]
    return GameState(
        version=int(d["version"]),
        id=str(d["id"]),
        phase=GamePhase(d["phase"]),
        turn=Turn(
            number=int(turn["number"]),
            active_player=str(turn["activePlayer"]),
            has_discarded=bool(turn["hasDiscarded"]),
        ),
        players=tuple(str(pid) for pid in d["players"]),
        by_id={str(pid): player_from_dict(p) for pid, p in d["byId"].items()},
        deck=Deck(
            draw_pile=_cards_from(d["deck"]["drawPile"]),
            discard=_cards_from(d["deck"].get("discard") or ()),
        ),
        center=Center(
            build_piles=tuple(
                BuildPile(
                    id=str(p["id"]),
                    cards=_cards_from(p["cards"]),
                    next_rank=None if p["nextRank"] is None else int(p["nextRank"]),
                )
                for p in d["center"]["buildPiles"]
            )
        ),
        winner=d.get("winner"),
        rng_seed=int(d["rngSeed"]),
        rules=rules_from_dict(d["rules"]),
        data=dict(d.get("data") or {}),
    )


def decode(data: Mapping[str, Any]) -> GameState:
    """Rebuild a state from an envelope produced by ``encode``.

    Raises:
        UnsupportedSnapshotVersionError: The schema version is not the current one.
        MalformedSnapshotError: The envelope or payload has the wrong shape.
    """
    version = data.get("schemaVersion") if isinstance(data, Mapping) else None
    if version is not None and (isinstance(version, bool) or version != SCHEMA_VERSION):
        raise UnsupportedSnapshotVersionError(f"Unsupported snapshot version: {version!r}")

    try:
        envelope = SnapshotEnvelope.model_validate(data)
    except ValidationError as e:
        raise MalformedSnapshotError(f"Invalid snapshot envelope: {e}") from e

    try:
        return state_from_dict(envelope.payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedSnapshotError(f"Invalid snapshot payload: {e!r}") from e


def deserialize(text: str) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedSnapshotError("Snapshot must be a JSON object")
    return decode(data)
