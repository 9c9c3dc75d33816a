"""Interface every Montoncito bot implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from montoncito_engine.moves import Move
    from montoncito_engine.state import GameState


class Strategy(ABC):
    """Picks the move an automated seat plays on its turn."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short bot name, e.g. "Random"."""
        ...

    @abstractmethod
    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Choose one of ``legal_moves`` for the active player.

        ``legal_moves`` is the output of ``generate_legal_moves``: draws,
        plays onto build piles and discards, never empty when called by the CLI.
        Draws and plays keep the turn; only a discard passes it on.
        """
        ...
