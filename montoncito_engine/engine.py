"""Engine facade: the single entry point that turns (state, move) into (state, events).

Callers own concurrency: moves for one game must be applied one at a time.
States are immutable, so any number of readers may share one safely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from montoncito_engine import events as ev
from montoncito_engine.events import EventType, GameEvent
from montoncito_engine.executor import execute_move
from montoncito_engine.moves import Move
from montoncito_engine.state import GameState
from montoncito_engine.validator import validate_move
from montoncito_engine.win import check_game_over

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Outcome of ``apply_move``.

    Attributes:
        state: State after the move (the input state itself when rejected).
        events: Events in emission order; a rejection is a single InvalidMove.
    """

    state: GameState
    events: tuple[GameEvent, ...]

    @property
    def accepted(self) -> bool:
        return not (self.events and self.events[0].type == EventType.INVALID_MOVE)

    @property
    def rejection_reason(self) -> str | None:
        if self.accepted:
            return None
        return self.events[0].payload.get("reason")


def apply_move(state: GameState, move: Move) -> ApplyResult:
    """Validate, apply, then check for game over.

    Illegal moves never raise: they come back as one ``InvalidMove`` event with
    the original state untouched. Errors raised from here mean the state itself
    is malformed.
    """
    reason = validate_move(state, move)
    if reason is not None:
        logger.debug(f"Rejected {move!r} in game {state.id}: {reason}")
        return ApplyResult(state=state, events=(ev.invalid_move(reason),))

    new_state, events = execute_move(state, move)
    logger.debug(f"Applied {move!r} in game {state.id}: {[e.type.value for e in events]}")

    winner, win_reason = check_game_over(new_state)
    if winner is not None:
        new_state = new_state.with_winner(winner)
        events = events + [ev.game_over(winner, win_reason.value)]
        logger.info(f"Game {state.id} over: winner={winner} reason={win_reason.value}")

    return ApplyResult(state=new_state, events=tuple(events))
