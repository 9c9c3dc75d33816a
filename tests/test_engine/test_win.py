"""Tests for game termination rules."""

from montoncito_engine.cards import Rank, StandardCard, Suit
from montoncito_engine.rules import resolve_rules
from montoncito_engine.state import (
    BuildPile,
    Center,
    Deck,
    GamePhase,
    GameState,
    PlayerState,
    Turn,
)
from montoncito_engine.win import (
    WinReason,
    check_game_over,
    placement_candidates,
    player_has_any_placement,
    winner_by_fewest_stock,
)


def std(card_id, rank):
    return StandardCard(card_id, Rank(rank), Suit.HEARTS)


def stocked(pid, size, hand=(), discards=((), (), ())):
    stock = tuple(std(f"{pid}-s{i}", 9) for i in range(size))
    return PlayerState(id=pid, stock=stock, hand=tuple(hand), discards=discards)


def make_state(players, piles=None, draw_pile=()):
    piles = piles or (BuildPile(id="B1", next_rank=5),)
    return GameState(
        id="w",
        phase=GamePhase.TURN,
        turn=Turn(number=3, active_player=players[0].id),
        players=tuple(p.id for p in players),
        by_id={p.id: p for p in players},
        deck=Deck(draw_pile=tuple(draw_pile)),
        center=Center(build_piles=tuple(piles)),
        rules=resolve_rules(),
    )


class TestEmptyStock:
    def test_empty_stock_wins(self):
        state = make_state([stocked("a", 2), stocked("b", 0)], draw_pile=[std("d", 1)])
        assert check_game_over(state) == ("b", WinReason.EMPTY_STOCK)

    def test_first_in_turn_order_wins(self):
        state = make_state([stocked("a", 3), stocked("b", 0), stocked("c", 0)])
        assert check_game_over(state) == ("b", WinReason.EMPTY_STOCK)

    def test_empty_stock_beats_deadlock(self):
        state = make_state([stocked("a", 1), stocked("b", 0)])
        assert check_game_over(state) == ("b", WinReason.EMPTY_STOCK)


class TestDeadlock:
    def test_no_placement_and_no_draw(self):
        state = make_state([stocked("a", 3), stocked("b", 2)])
        assert check_game_over(state) == ("b", WinReason.DEADLOCK)

    def test_tie_goes_to_earlier_player(self):
        state = make_state([stocked("a", 2), stocked("b", 2), stocked("c", 1), stocked("d", 1)])
        assert check_game_over(state) == ("c", WinReason.DEADLOCK)

    def test_draw_pile_keeps_game_alive(self):
        state = make_state([stocked("a", 3), stocked("b", 2)], draw_pile=[std("d", 2)])
        assert check_game_over(state) == (None, None)

    def test_any_placement_keeps_game_alive(self):
        players = [stocked("a", 3), stocked("b", 2, hand=[std("five", 5)])]
        state = make_state(players)
        assert check_game_over(state) == (None, None)

    def test_discard_top_counts(self):
        discards = ((std("five", 5), std("two", 2)), (std("other", 5),), ())
        state = make_state([stocked("a", 3, discards=discards), stocked("b", 2)])
        assert player_has_any_placement(state, "a")

    def test_buried_discard_does_not_count(self):
        discards = ((std("five", 5), std("two", 2)), (), ())
        state = make_state([stocked("a", 3, discards=discards), stocked("b", 2)])
        assert not player_has_any_placement(state, "a")

    def test_completed_piles_ignored(self):
        piles = (BuildPile(id="B1", next_rank=None),)
        king = std("king", 13)
        state = make_state([stocked("a", 3, hand=[king]), stocked("b", 2)], piles=piles)
        assert not player_has_any_placement(state, "a")
        assert check_game_over(state) == ("b", WinReason.DEADLOCK)


class TestHelpers:
    def test_placement_candidates(self):
        discards = ((std("d0", 1), std("d1", 2)), (), (std("d2", 3),))
        player = stocked("a", 2, hand=[std("h", 4)], discards=discards)
        ids = [c.id for c in placement_candidates(player)]
        assert ids == ["h", "a-s1", "d1", "d2"]

    def test_fewest_stock(self):
        state = make_state([stocked("a", 4), stocked("b", 1), stocked("c", 1)])
        assert winner_by_fewest_stock(state) == "b"

    def test_unknown_player_has_no_placement(self):
        state = make_state([stocked("a", 1)])
        assert not player_has_any_placement(state, "ghost")
