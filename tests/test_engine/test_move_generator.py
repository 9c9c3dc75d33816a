"""Tests for legal move generation."""

from montoncito_engine.cards import Rank, StandardCard, Suit, create_deck
from montoncito_engine.move_generator import generate_legal_moves, placement_moves
from montoncito_engine.moves import (
    DiscardFromHand,
    DrawToHand,
    PlayDiscardToBuild,
    PlayHandToBuild,
    PlayStockToBuild,
    StartGame,
)
from montoncito_engine.rules import resolve_rules
from montoncito_engine.state import (
    BuildPile,
    Center,
    Deck,
    GamePhase,
    GameState,
    PlayerState,
    Turn,
    create_initial_state,
)
from montoncito_engine.validator import validate_move


def std(card_id, rank):
    return StandardCard(card_id, Rank(rank), Suit.HEARTS)


def turn_state(hand=(), stock=(), discards=((), ()), piles=None):
    rules = resolve_rules({"discard_piles": 2, "hand_size": 3})
    piles = piles or (BuildPile(id="B1"), BuildPile(id="B2", next_rank=2))
    p1 = PlayerState(id="p1", hand=tuple(hand), stock=tuple(stock), discards=discards)
    p2 = PlayerState(id="p2", stock=(std("p2s", 9),), discards=((), ()))
    return GameState(
        id="g",
        phase=GamePhase.TURN,
        turn=Turn(number=1, active_player="p1"),
        players=("p1", "p2"),
        by_id={"p1": p1, "p2": p2},
        deck=Deck(draw_pile=(std("d", 4),)),
        center=Center(build_piles=tuple(piles)),
        rules=rules,
    )


class TestLobby:
    def test_start_game_offered(self):
        state = create_initial_state(["a", "b"], create_deck())
        assert generate_legal_moves(state) == [StartGame()]

    def test_single_player_lobby(self):
        state = create_initial_state(["a"], create_deck())
        assert generate_legal_moves(state) == []


class TestTurnMoves:
    def test_draw_offered_with_short_hand(self):
        moves = generate_legal_moves(turn_state(hand=[std("h", 7)]))
        assert moves[0] == DrawToHand()

    def test_no_draw_with_full_hand(self):
        hand = [std("h1", 7), std("h2", 8), std("h3", 9)]
        moves = generate_legal_moves(turn_state(hand=hand))
        assert DrawToHand() not in moves

    def test_discards_for_every_card_and_pile(self):
        hand = [std("h1", 7), std("h2", 8)]
        moves = generate_legal_moves(turn_state(hand=hand))
        discards = [m for m in moves if isinstance(m, DiscardFromHand)]
        assert discards == [
            DiscardFromHand(card_id="h1", pile_index=0),
            DiscardFromHand(card_id="h1", pile_index=1),
            DiscardFromHand(card_id="h2", pile_index=0),
            DiscardFromHand(card_id="h2", pile_index=1),
        ]

    def test_placements(self):
        state = turn_state(
            hand=[std("ace", 1), std("king", 13)],
            stock=[std("s", 2)],
            discards=((std("d", 1),), ()),
        )
        moves = placement_moves(state, "p1")
        assert moves == [
            PlayHandToBuild(card_id="ace", build_id="B1"),
            PlayHandToBuild(card_id="king", build_id="B1"),
            PlayHandToBuild(card_id="king", build_id="B2"),
            PlayStockToBuild(build_id="B2"),
            PlayDiscardToBuild(pile_index=0, build_id="B1"),
        ]

    def test_completed_piles_skipped(self):
        piles = (BuildPile(id="B1", next_rank=None),)
        state = turn_state(hand=[std("king", 13)], piles=piles)
        assert placement_moves(state, "p1") == []

    def test_every_move_validates(self):
        state = turn_state(
            hand=[std("ace", 1), std("two", 2)],
            stock=[std("s", 1)],
            discards=((std("d", 2),), ()),
        )
        moves = generate_legal_moves(state)
        assert moves
        for move in moves:
            assert validate_move(state, move) is None


class TestGameOver:
    def test_no_moves(self):
        state = turn_state(hand=[std("ace", 1)]).with_winner("p2")
        assert generate_legal_moves(state) == []
