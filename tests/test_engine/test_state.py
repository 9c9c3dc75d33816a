"""Tests for game state models, initialization and selectors."""

from dataclasses import replace

import pytest

from montoncito_engine.cards import Rank, StandardCard, Suit, create_deck
from montoncito_engine.engine import apply_move
from montoncito_engine.guards import InvariantError
from montoncito_engine.moves import StartGame
from montoncito_engine.rules import RulesConfig
from montoncito_engine.selectors import (
    compute_next_rank_after_place,
    find_build_pile,
    get_active_player,
    get_build_pile,
    next_player_id,
)
from montoncito_engine.state import (
    DEFAULT_SEED,
    SCHEMA_VERSION,
    BuildPile,
    GamePhase,
    PlayerState,
    Turn,
    create_initial_state,
)


def std(card_id, rank):
    return StandardCard(card_id, Rank(rank), Suit.CLUBS)


class TestCreateInitialState:
    def test_lobby_state(self):
        deck = create_deck()
        state = create_initial_state([{"id": "a", "name": "Ana"}, {"id": "b"}], deck)

        assert state.phase == GamePhase.LOBBY
        assert state.players == ("a", "b")
        assert state.turn == Turn(number=0, active_player="a", has_discarded=False)
        assert state.by_id["a"].name == "Ana"
        assert state.by_id["b"].name is None
        assert state.winner is None
        assert state.version == SCHEMA_VERSION
        assert state.rng_seed == DEFAULT_SEED

    def test_zones_start_empty(self):
        state = create_initial_state(["a", "b"], create_deck())
        for pid in state.players:
            player = state.by_id[pid]
            assert player.hand == ()
            assert player.stock == ()
            assert player.discards == ((), (), ())

    def test_build_piles_created(self):
        state = create_initial_state(["a", "b"], create_deck(), {"build_piles": 2})
        assert [p.id for p in state.build_piles] == ["B1", "B2"]
        assert all(p.next_rank == 1 and p.cards == () for p in state.build_piles)

    def test_deck_order_preserved(self):
        deck = create_deck()
        state = create_initial_state(["a", "b"], deck)
        assert state.deck.draw_pile == tuple(deck)

    def test_player_entry_forms(self):
        state = create_initial_state([("a", "Ana"), "b"], [])
        assert state.players == ("a", "b")
        assert state.by_id["a"].name == "Ana"

    def test_discard_count_follows_rules(self):
        state = create_initial_state(["a"], [], {"discard_piles": 5})
        assert len(state.by_id["a"].discards) == 5

    def test_rules_resolved(self):
        state = create_initial_state(["a", "b"], [], {"hand_size": 2})
        assert state.rules == RulesConfig(hand_size=2)

    def test_seed_and_id(self):
        state = create_initial_state(["a", "b"], [], seed=7, game_id="g-1")
        assert state.rng_seed == 7
        assert state.id == "g-1"

    def test_no_players(self):
        with pytest.raises(ValueError):
            create_initial_state([], create_deck())

    def test_duplicate_players(self):
        with pytest.raises(ValueError):
            create_initial_state(["a", "a"], create_deck())


class TestImmutability:
    def test_with_player_leaves_original(self):
        state = create_initial_state(["a", "b"], [])
        updated = state.with_player(state.by_id["a"].with_hand((std("x", 1),)))

        assert state.by_id["a"].hand == ()
        assert updated.by_id["a"].hand[0].id == "x"

    def test_with_build_pile_replaces_by_id(self):
        state = create_initial_state(["a", "b"], [])
        updated = state.with_build_pile(BuildPile(id="B2", next_rank=5))

        assert find_build_pile(updated, "B2").next_rank == 5
        assert find_build_pile(state, "B2").next_rank == 1
        assert find_build_pile(updated, "B1").next_rank == 1

    def test_with_winner_ends_game(self):
        state = create_initial_state(["a", "b"], [])
        done = state.with_winner("b")
        assert done.is_game_over
        assert done.winner == "b"
        assert not state.is_game_over

    def test_mappings_are_read_only(self):
        state = create_initial_state(["a", "b"], create_deck())
        with pytest.raises(TypeError):
            state.data["note"] = "x"
        with pytest.raises(TypeError):
            state.by_id["a"] = state.by_id["a"].with_stock(())

    def test_next_state_shares_no_mappings(self):
        before = create_initial_state(["a", "b"], create_deck())
        after = apply_move(before, StartGame()).state

        assert after.data is not before.data
        assert after.by_id is not before.by_id
        with pytest.raises(TypeError):
            after.data["note"] = "x"
        assert dict(before.data) == {}
        assert before.by_id["a"].stock == ()

    def test_equal_states_hash_equal(self):
        state = apply_move(create_initial_state(["a", "b"], create_deck()), StartGame()).state
        copy = replace(state, data={"scores": [1]})
        assert hash(state) == hash(replace(state))
        assert hash(copy) == hash(state)
        assert len({state, replace(state)}) == 1

    def test_caller_dict_is_copied(self):
        data = {"table": 1}
        state = replace(create_initial_state(["a", "b"], []), data=data)
        data["table"] = 2
        assert state.data["table"] == 1


class TestPlayerState:
    def test_stock_top_is_last(self):
        player = PlayerState(id="a", stock=(std("s1", 1), std("s2", 2)))
        assert player.stock_top.id == "s2"
        assert PlayerState(id="b").stock_top is None

    def test_discard_top(self):
        player = PlayerState(id="a", discards=((std("d1", 4), std("d2", 6)), ()))
        assert player.discard_top(0).id == "d2"
        assert player.discard_top(1) is None

    def test_discard_top_missing_pile(self):
        player = PlayerState(id="a", discards=((),))
        with pytest.raises(InvariantError):
            player.discard_top(3)

    def test_find_in_hand(self):
        player = PlayerState(id="a", hand=(std("h1", 1),))
        assert player.find_in_hand("h1").id == "h1"
        assert player.find_in_hand("nope") is None


class TestBuildPile:
    def test_top_is_first(self):
        pile = BuildPile(id="B1", cards=(std("c2", 2), std("c1", 1)), next_rank=3)
        assert pile.top.id == "c2"
        assert BuildPile(id="B2").top is None

    def test_complete(self):
        assert BuildPile(id="B1", next_rank=None).is_complete
        assert not BuildPile(id="B1").is_complete


class TestSelectors:
    def test_next_player_wraps(self):
        state = create_initial_state(["a", "b", "c"], [])
        assert next_player_id(state) == "b"
        last = state.with_turn(Turn(number=3, active_player="c"))
        assert next_player_id(last) == "a"

    def test_active_player(self):
        state = create_initial_state(["a", "b"], [])
        assert get_active_player(state).id == "a"

    def test_missing_active_player(self):
        state = create_initial_state(["a", "b"], [])
        broken = state.with_turn(Turn(number=1, active_player="ghost"))
        with pytest.raises(InvariantError):
            get_active_player(broken)

    def test_get_build_pile_missing(self):
        state = create_initial_state(["a", "b"], [])
        assert find_build_pile(state, "B9") is None
        with pytest.raises(InvariantError):
            get_build_pile(state, "B9")


class TestNextRankAfterPlace:
    def test_ordinary_card(self):
        assert compute_next_rank_after_place(3, 3, 13) == 4

    def test_wild_contributes_requirement(self):
        assert compute_next_rank_after_place(3, None, 13) == 4

    def test_reaching_max_completes(self):
        assert compute_next_rank_after_place(13, 13, 13) is None
        assert compute_next_rank_after_place(13, None, 13) is None
        assert compute_next_rank_after_place(10, None, 10) is None

    def test_completed_stays_completed(self):
        assert compute_next_rank_after_place(None, 5, 13) is None
