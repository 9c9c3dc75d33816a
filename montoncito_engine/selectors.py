"""Read-only helpers over GameState."""

from __future__ import annotations

from typing import TYPE_CHECKING

from montoncito_engine.guards import invariant, must

if TYPE_CHECKING:
    from montoncito_engine.state import BuildPile, GameState, PlayerState


def get_player(state: GameState, player_id: str) -> PlayerState:
    return must(state.by_id.get(player_id), f"Player {player_id} not found")


def get_active_player(state: GameState) -> PlayerState:
    """State of the player whose turn it is."""
    return must(state.by_id.get(state.turn.active_player), "Active player not found")


def first_player_id(state: GameState) -> str:
    return must(state.players[0] if state.players else None, "No players in game")


def next_player_id(state: GameState) -> str:
    """Player after the active one, wrapping around the turn order."""
    invariant(state.players, "No players in game")
    invariant(state.turn.active_player in state.players, "Active player not in turn order")
    idx = state.players.index(state.turn.active_player)
    return state.players[(idx + 1) % len(state.players)]


def find_build_pile(state: GameState, build_id: str) -> BuildPile | None:
    return next((p for p in state.center.build_piles if p.id == build_id), None)


def get_build_pile(state: GameState, build_id: str) -> BuildPile:
    return must(find_build_pile(state, build_id), f"Build pile {build_id} not found")


def compute_next_rank_after_place(
    current_required: int | None, placed_rank: int | None, max_rank: int
) -> int | None:
    """Requirement of a pile after a card lands on it.

    ``placed_rank`` is the rank the card contributes; ``None`` (a wild card)
    contributes the rank that was required. Returns ``None`` when the pile
    just reached ``max_rank``.
    """
    if current_required is None:
        return None
    contributed = current_required if placed_rank is None else placed_rank
    if contributed >= max_rank:
        return None
    return contributed + 1
