"""Random strategy for baseline testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from montoncito_engine.rng import Mulberry32
from strategies.base import Strategy

if TYPE_CHECKING:
    from montoncito_engine.moves import Move
    from montoncito_engine.state import GameState


class RandomStrategy(Strategy):
    """Strategy that selects moves uniformly at random.

    Uses the engine's seeded generator so a watched game replays exactly.
    """

    def __init__(self, seed: int = 0):
        self._seed = seed
        self._rng = Mulberry32(seed)

    @property
    def name(self) -> str:
        return "Random"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a random legal move."""
        if not legal_moves:
            raise ValueError("No legal moves available")
        return legal_moves[self._rng.next_index(len(legal_moves))]

    def reset_seed(self, seed: int) -> None:
        """Reset the random number generator with a new seed."""
        self._seed = seed
        self._rng = Mulberry32(seed)
