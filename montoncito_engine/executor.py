"""Move application for Montoncito.

Each ``_execute_*`` function assumes its move already passed
``validate_move``. Lookups that validation guarantees go through ``must``
and raise ``InvariantError`` if the state is malformed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from montoncito_engine import events as ev
from montoncito_engine.guards import invariant, must
from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    Move,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
    StartGame,
)
from montoncito_engine.selectors import (
    compute_next_rank_after_place,
    first_player_id,
    get_active_player,
    get_build_pile,
    get_player,
    next_player_id,
)
from montoncito_engine.state import GamePhase, GameState, Turn, empty_build_piles
from montoncito_engine.validator import UNKNOWN_MOVE
from montoncito_engine.wild import is_wild

if TYPE_CHECKING:
    from montoncito_engine.cards import Card
    from montoncito_engine.events import GameEvent

SOURCE_HAND = "hand"
SOURCE_STOCK = "stock"
SOURCE_DISCARD = "discard"


def execute_move(state: GameState, move: Move) -> tuple[GameState, list[GameEvent]]:
    """Apply a validated move.

    Args:
        state: Current game state.
        move: Move that ``validate_move`` accepted.

    Returns:
        Tuple of (new state, events in emission order).
    """
    match move:
        case StartGame():
            return _execute_start_game(state)
        case DrawToHand():
            return _execute_draw(state)
        case PlayHandToBuild():
            return _execute_play_hand(state, move)
        case PlayStockToBuild():
            return _execute_play_stock(state, move)
        case PlayDiscardToBuild():
            return _execute_play_discard(state, move)
        case DiscardFromHand():
            return _execute_discard(state, move)
        case _:
            return state, [ev.invalid_move(UNKNOWN_MOVE)]


def _deal_stock_round_robin(state: GameState) -> GameState:
    """Deal ``stock_size`` rounds, one card per player per round, from the front."""
    draw_pile = list(state.deck.draw_pile)
    stocks = {pid: list(get_player(state, pid).stock) for pid in state.players}

    for _ in range(state.rules.stock_size):
        for pid in state.players:
            if not draw_pile:
                break
            stocks[pid].append(draw_pile.pop(0))

    for pid in state.players:
        state = state.with_player(get_player(state, pid).with_stock(tuple(stocks[pid])))
    return state.with_draw_pile(tuple(draw_pile))


def _draw_up_to_hand_size(state: GameState, player_id: str) -> tuple[GameState, int]:
    """Move cards from the front of the draw pile into a hand until it is full."""
    player = get_player(state, player_id)
    missing = max(0, state.rules.hand_size - len(player.hand))
    drawn = state.deck.draw_pile[:missing]
    if not drawn:
        return state, 0

    state = state.with_player(player.with_hand(player.hand + drawn))
    return state.with_draw_pile(state.deck.draw_pile[len(drawn):]), len(drawn)


def _execute_start_game(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Open build piles, deal stocks and start the first player's turn."""
    if not state.center.build_piles:
        state = state.with_build_piles(empty_build_piles(state.rules.build_piles))

    state = _deal_stock_round_robin(state)
    state = state.with_phase(GamePhase.TURN).with_turn(
        Turn(number=1, active_player=first_player_id(state), has_discarded=False)
    )

    state, drew = _draw_up_to_hand_size(state, state.turn.active_player)

    events = [ev.game_started()]
    if drew > 0:
        events.append(ev.drew_to_hand(state.turn.active_player, drew))
    return state, events


def _execute_draw(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Refill the active player's hand. Drawing zero cards is still reported."""
    player_id = state.turn.active_player
    state, drew = _draw_up_to_hand_size(state, player_id)
    return state, [ev.drew_to_hand(player_id, drew)]


def _place_on_build(
    state: GameState, player_id: str, source: str, card: Card, build_id: str
) -> tuple[GameState, list[GameEvent]]:
    """Put ``card`` on top of a build pile and advance the pile's requirement.

    A wild card contributes the rank the pile required. When the pile passes
    the maximum rank it is completed, and cleared at once if the rules say so.
    """
    pile = get_build_pile(state, build_id)
    placed_rank = None if card.kind == "joker" or is_wild(card, state.rules) else int(card.rank)
    next_rank = compute_next_rank_after_place(
        pile.next_rank, placed_rank, state.rules.max_build_rank
    )
    pile = replace(pile, cards=(card,) + pile.cards, next_rank=next_rank)

    events = [ev.played_to_build(player_id, source, card.id, build_id)]
    if next_rank is None:
        events.append(ev.build_completed(build_id))
        if state.rules.auto_clear_complete_build:
            pile = replace(pile, cards=(), next_rank=1)
            events.append(ev.build_cleared(build_id))

    return state.with_build_pile(pile), events


def _execute_play_hand(
    state: GameState, move: PlayHandToBuild
) -> tuple[GameState, list[GameEvent]]:
    """Execute playing a hand card onto a build pile."""
    player = get_active_player(state)
    card = must(player.find_in_hand(move.card_id), f"Card {move.card_id} not in hand")

    idx = next(i for i, c in enumerate(player.hand) if c.id == move.card_id)
    new_hand = player.hand[:idx] + player.hand[idx + 1:]
    state = state.with_player(player.with_hand(new_hand))

    return _place_on_build(state, player.id, SOURCE_HAND, card, move.build_id)


def _execute_play_stock(
    state: GameState, move: PlayStockToBuild
) -> tuple[GameState, list[GameEvent]]:
    """Execute playing the top stock card onto a build pile."""
    player = get_active_player(state)
    card = must(player.stock_top, "Stock is empty")
    state = state.with_player(player.with_stock(player.stock[:-1]))

    return _place_on_build(state, player.id, SOURCE_STOCK, card, move.build_id)


def _execute_play_discard(
    state: GameState, move: PlayDiscardToBuild
) -> tuple[GameState, list[GameEvent]]:
    """Execute playing the top of a personal discard pile onto a build pile."""
    player = get_active_player(state)
    card = must(player.discard_top(move.pile_index), "Discard pile is empty")

    discards = list(player.discards)
    discards[move.pile_index] = discards[move.pile_index][:-1]
    state = state.with_player(player.with_discards(tuple(discards)))

    return _place_on_build(state, player.id, SOURCE_DISCARD, card, move.build_id)


def _execute_discard(
    state: GameState, move: DiscardFromHand
) -> tuple[GameState, list[GameEvent]]:
    """Discard a hand card and pass the turn to the next player."""
    player = get_active_player(state)
    card = must(player.find_in_hand(move.card_id), f"Card {move.card_id} not in hand")
    invariant(0 <= move.pile_index < len(player.discards), "Discard pile missing")

    idx = next(i for i, c in enumerate(player.hand) if c.id == move.card_id)
    new_hand = player.hand[:idx] + player.hand[idx + 1:]
    discards = list(player.discards)
    discards[move.pile_index] = discards[move.pile_index] + (card,)
    state = state.with_player(player.with_hand(new_hand).with_discards(tuple(discards)))

    next_id = next_player_id(state)
    state = state.with_turn(
        Turn(number=state.turn.number + 1, active_player=next_id, has_discarded=False)
    )

    return state, [
        ev.discarded(player.id, card.id, move.pile_index),
        ev.turn_ended(state.turn.number, next_id),
    ]
