"""Tests for the command-line interface."""

from montoncito_engine.cli import format_moves, format_state, main, new_game, run_game
from montoncito_engine.moves import DrawToHand, StartGame
from montoncito_engine.serialization import deserialize
from montoncito_engine.state import GamePhase


class TestNewGame:
    def test_two_decks_by_default(self):
        state = new_game(["Ana", "Bo"], seed=1, rules={})
        assert len(state.deck.draw_pile) == 104
        assert len({c.id for c in state.deck.draw_pile}) == 104
        assert state.players == ("P1", "P2")
        assert state.by_id["P1"].name == "Ana"

    def test_seed_controls_order(self):
        a = new_game(["x", "y"], seed=5, rules={})
        b = new_game(["x", "y"], seed=5, rules={})
        c = new_game(["x", "y"], seed=6, rules={})
        assert a.deck == b.deck
        assert a.deck != c.deck

    def test_jokers_added(self):
        state = new_game(["x", "y"], seed=1, rules={"use_jokers": True}, decks=1)
        assert len(state.deck.draw_pile) == 54


class TestFormatting:
    def test_format_state(self):
        state = new_game(["Ana", "Bo"], seed=1, rules={})
        text = format_state(state)
        assert "Phase: lobby" in text
        assert "Ana (P1)" in text
        assert "B1[--, needs 1]" in text

    def test_format_moves(self):
        text = format_moves([StartGame(), DrawToHand()])
        assert "1. Start game" in text
        assert "2. Draw to hand" in text


class TestRunGame:
    def test_stops_at_move_cap(self):
        state = new_game(["x", "y"], seed=3, rules={})
        final = run_game(state, lambda s, moves: moves[0], max_moves=5)
        assert final.phase == GamePhase.TURN

    def test_stops_when_chooser_quits(self):
        state = new_game(["x", "y"], seed=3, rules={})
        final = run_game(state, lambda s, moves: None)
        assert final is state

    def test_on_step_called(self):
        seen = []
        state = new_game(["x", "y"], seed=3, rules={})
        run_game(state, lambda s, moves: moves[0], on_step=lambda s, m: seen.append(m), max_moves=3)
        assert len(seen) == 3
        assert seen[0] == StartGame()


class TestMain:
    def test_watch_writes_snapshot(self, tmp_path, capsys):
        path = tmp_path / "game.json"
        code = main(["watch", "--max-moves", "40", "--seed", "8", "--save", str(path)])

        assert code == 0
        state = deserialize(path.read_text())
        assert state.players == ("P1", "P2")
        assert "Snapshot written" in capsys.readouterr().out

    def test_invalid_rules(self, capsys):
        code = main(["watch", "--hand-size", "-1"])
        assert code == 2
        assert "error:" in capsys.readouterr().err

    def test_play_quit(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt="": "q")
        code = main(["play", "Ana", "Bo", "--seed", "4"])
        assert code == 0
        assert "Goodbye!" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
