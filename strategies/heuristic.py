"""Heuristic strategy that races to empty its stock.

Priorities:
1. Play the stock top whenever it fits.
2. Play a discard top that fits.
3. Play a non-wild hand card that fits.
4. Draw if the hand is short and the draw pile has cards.
5. Play a wild hand card.
6. Discard the highest non-wild card, onto the shortest discard pile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
)
from montoncito_engine.selectors import get_active_player
from montoncito_engine.wild import is_wild
from strategies.base import Strategy

if TYPE_CHECKING:
    from montoncito_engine.moves import Move
    from montoncito_engine.state import GameState


class HeuristicStrategy(Strategy):
    """Greedy stock-first player."""

    @property
    def name(self) -> str:
        return "Heuristic"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move based on the fixed priority list."""
        if not legal_moves:
            raise ValueError("No legal moves available")

        player = get_active_player(state)
        hand = {c.id: c for c in player.hand}

        def wild_in_hand(move: PlayHandToBuild) -> bool:
            return is_wild(hand[move.card_id], state.rules)

        for move in legal_moves:
            if isinstance(move, PlayStockToBuild):
                return move
        for move in legal_moves:
            if isinstance(move, PlayDiscardToBuild):
                return move
        for move in legal_moves:
            if isinstance(move, PlayHandToBuild) and not wild_in_hand(move):
                return move
        for move in legal_moves:
            if isinstance(move, DrawToHand) and state.deck.draw_pile:
                return move
        for move in legal_moves:
            if isinstance(move, PlayHandToBuild):
                return move

        discards = [m for m in legal_moves if isinstance(m, DiscardFromHand)]
        if discards:
            return max(discards, key=lambda m: self._discard_score(state, hand, m))
        return legal_moves[0]

    @staticmethod
    def _discard_score(state: GameState, hand: dict, move: DiscardFromHand) -> tuple:
        card = hand[move.card_id]
        rank = 0 if card.kind == "joker" else int(card.rank)
        pile_size = len(get_active_player(state).discards[move.pile_index])
        return (not is_wild(card, state.rules), rank, -pile_size, -move.pile_index)
