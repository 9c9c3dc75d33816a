"""Legal move generation for Montoncito."""

from __future__ import annotations

from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    Move,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
    StartGame,
)
from montoncito_engine.selectors import get_active_player, get_player
from montoncito_engine.state import GamePhase, GameState
from montoncito_engine.wild import satisfies_requirement


def generate_legal_moves(state: GameState) -> list[Move]:
    """Generate all legal moves for the current game state.

    Args:
        state: Current game state.

    Returns:
        Every move ``validate_move`` would accept, in a stable order.
    """
    match state.phase:
        case GamePhase.LOBBY:
            return [StartGame()] if len(state.players) >= 2 else []
        case GamePhase.TURN:
            return _generate_turn_moves(state)
        case GamePhase.GAME_OVER:
            return []

    return []


def _generate_turn_moves(state: GameState) -> list[Move]:
    """Generate moves for the active player."""
    moves: list[Move] = []
    player = get_active_player(state)

    if len(player.hand) < state.rules.hand_size:
        moves.append(DrawToHand())

    moves.extend(placement_moves(state, player.id))

    for card in player.hand:
        for pile_index in range(state.rules.discard_piles):
            moves.append(DiscardFromHand(card_id=card.id, pile_index=pile_index))

    return moves


def placement_moves(state: GameState, player_id: str) -> list[Move]:
    """Play-to-build moves available to a player, whether or not it is their turn."""
    moves: list[Move] = []
    player = get_player(state, player_id)
    open_piles = [p for p in state.center.build_piles if p.next_rank is not None]

    for card in player.hand:
        for pile in open_piles:
            if satisfies_requirement(card, pile.next_rank, state.rules):
                moves.append(PlayHandToBuild(card_id=card.id, build_id=pile.id))

    stock_top = player.stock_top
    if stock_top is not None:
        for pile in open_piles:
            if satisfies_requirement(stock_top, pile.next_rank, state.rules):
                moves.append(PlayStockToBuild(build_id=pile.id))

    for pile_index, discard in enumerate(player.discards):
        if not discard:
            continue
        for pile in open_piles:
            if satisfies_requirement(discard[-1], pile.next_rank, state.rules):
                moves.append(PlayDiscardToBuild(pile_index=pile_index, build_id=pile.id))

    return moves
