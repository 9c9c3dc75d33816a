"""Move legality checks.

``validate_move`` never mutates state and never raises for an illegal move:
it returns a short, stable reason string, or ``None`` when the move is legal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    Move,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
    StartGame,
)
from montoncito_engine.selectors import find_build_pile, get_active_player
from montoncito_engine.state import GamePhase, GameState
from montoncito_engine.wild import satisfies_requirement

if TYPE_CHECKING:
    from montoncito_engine.cards import Card

GAME_ALREADY_STARTED = "Game already started"
NEED_TWO_PLAYERS = "Need at least two players"
NOT_YOUR_TURN = "Not your turn"
HAND_FULL = "Hand already full"
CARD_NOT_IN_HAND = "Card not in hand"
UNKNOWN_BUILD_PILE = "Unknown build pile"
CARD_MISMATCH = "Card does not match build requirement"
NO_STOCK_CARD = "No stock card to play"
STOCK_MISMATCH = "Stock card does not match build requirement"
INVALID_DISCARD_INDEX = "Invalid discard pile index"
DISCARD_EMPTY = "Discard pile is empty"
DISCARD_MISMATCH = "Discard card does not match build requirement"
UNKNOWN_MOVE = "Unknown move"


def validate_move(state: GameState, move: Move) -> str | None:
    """Check a proposed move for the active player.

    Args:
        state: Current game state.
        move: Proposed move.

    Returns:
        Rejection reason, or None if the move is legal.
    """
    match move:
        case StartGame():
            if state.phase != GamePhase.LOBBY:
                return GAME_ALREADY_STARTED
            if len(state.players) < 2:
                return NEED_TWO_PLAYERS
            return None
        case DrawToHand():
            return _validate_draw(state)
        case PlayHandToBuild():
            return _validate_play_hand(state, move)
        case PlayStockToBuild():
            return _validate_play_stock(state, move)
        case PlayDiscardToBuild():
            return _validate_play_discard(state, move)
        case DiscardFromHand():
            return _validate_discard(state, move)
        case _:
            return UNKNOWN_MOVE


def _validate_draw(state: GameState) -> str | None:
    if state.phase != GamePhase.TURN:
        return NOT_YOUR_TURN
    if len(get_active_player(state).hand) >= state.rules.hand_size:
        return HAND_FULL
    return None


def _check_target(state: GameState, card: Card, build_id: str, mismatch: str) -> str | None:
    pile = find_build_pile(state, build_id)
    if pile is None:
        return UNKNOWN_BUILD_PILE
    if not satisfies_requirement(card, pile.next_rank, state.rules):
        return mismatch
    return None


def _validate_play_hand(state: GameState, move: PlayHandToBuild) -> str | None:
    if state.phase != GamePhase.TURN:
        return NOT_YOUR_TURN
    card = get_active_player(state).find_in_hand(move.card_id)
    if card is None:
        return CARD_NOT_IN_HAND
    return _check_target(state, card, move.build_id, CARD_MISMATCH)


def _validate_play_stock(state: GameState, move: PlayStockToBuild) -> str | None:
    if state.phase != GamePhase.TURN:
        return NOT_YOUR_TURN
    top = get_active_player(state).stock_top
    if top is None:
        return NO_STOCK_CARD
    return _check_target(state, top, move.build_id, STOCK_MISMATCH)


def _discard_index_ok(state: GameState, pile_index: int) -> bool:
    return 0 <= pile_index < state.rules.discard_piles


def _validate_play_discard(state: GameState, move: PlayDiscardToBuild) -> str | None:
    if state.phase != GamePhase.TURN:
        return NOT_YOUR_TURN
    if not _discard_index_ok(state, move.pile_index):
        return INVALID_DISCARD_INDEX
    top = get_active_player(state).discard_top(move.pile_index)
    if top is None:
        return DISCARD_EMPTY
    return _check_target(state, top, move.build_id, DISCARD_MISMATCH)


def _validate_discard(state: GameState, move: DiscardFromHand) -> str | None:
    if state.phase != GamePhase.TURN:
        return NOT_YOUR_TURN
    if not _discard_index_ok(state, move.pile_index):
        return INVALID_DISCARD_INDEX
    if get_active_player(state).find_in_hand(move.card_id) is None:
        return CARD_NOT_IN_HAND
    # Discarding is never blocked by build pile state.
    return None
