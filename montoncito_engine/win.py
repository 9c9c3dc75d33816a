"""Game termination rules.

Evaluated after every accepted move, in priority order:

1. Empty stock: the first player in turn order whose stock is empty wins,
   whoever's turn it is.
2. Deadlock: the draw pile is empty and no player can place any card (hand,
   stock top or any discard top) on any build pile. The player with the
   fewest stock cards wins; ties go to the earlier player in turn order.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from montoncito_engine.wild import satisfies_requirement

if TYPE_CHECKING:
    from montoncito_engine.cards import Card
    from montoncito_engine.state import GameState, PlayerState


class WinReason(str, Enum):
    """How the game was won."""

    EMPTY_STOCK = "empty_stock"
    DEADLOCK = "deadlock"


def placement_candidates(player: PlayerState) -> list[Card]:
    """Cards a player could currently put on a build pile: hand, stock top, discard tops."""
    candidates = list(player.hand)
    if player.stock_top is not None:
        candidates.append(player.stock_top)
    candidates.extend(pile[-1] for pile in player.discards if pile)
    return candidates


def player_has_any_placement(state: GameState, player_id: str) -> bool:
    """Whether the player can place any card on any open build pile. Drawing is ignored."""
    player = state.by_id.get(player_id)
    if player is None:
        return False

    candidates = placement_candidates(player)
    for pile in state.center.build_piles:
        if pile.next_rank is None:
            continue
        for card in candidates:
            if satisfies_requirement(card, pile.next_rank, state.rules):
                return True
    return False


def winner_by_fewest_stock(state: GameState) -> str | None:
    """Player with the fewest stock cards; the earliest in turn order on ties."""
    best: tuple[int, int, str] | None = None
    for order, pid in enumerate(state.players):
        player = state.by_id.get(pid)
        if player is None:
            continue
        key = (len(player.stock), order, pid)
        if best is None or key < best:
            best = key
    return best[2] if best else None


def check_game_over(state: GameState) -> tuple[str | None, WinReason | None]:
    """Check whether the game has ended.

    Returns:
        Tuple of (winner, reason) or (None, None) if the game continues.
    """
    for pid in state.players:
        player = state.by_id.get(pid)
        if player is not None and not player.stock:
            return pid, WinReason.EMPTY_STOCK

    if not state.deck.draw_pile:
        if not any(player_has_any_placement(state, pid) for pid in state.players):
            winner = winner_by_fewest_stock(state)
            if winner is not None:
                return winner, WinReason.DEADLOCK

    return None, None
