"""Command-line interface for Montoncito."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from montoncito_engine.cards import create_deck
from montoncito_engine.engine import apply_move
from montoncito_engine.move_generator import generate_legal_moves
from montoncito_engine.moves import StartGame
from montoncito_engine.rng import shuffle_deck
from montoncito_engine.serialization import serialize
from montoncito_engine.state import GamePhase, create_initial_state

if TYPE_CHECKING:
    from montoncito_engine.moves import Move
    from montoncito_engine.state import GameState

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "MONTONCITO_LOG_LEVEL"


def _cards_str(cards) -> str:
    return ", ".join(str(c) for c in cards) or "(empty)"


def format_state(state: GameState, show_all_hands: bool = False) -> str:
    """Format game state for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(f"Turn {state.turn.number} | Phase: {state.phase.value}")
    lines.append("=" * 60)

    piles = []
    for pile in state.center.build_piles:
        need = "done" if pile.next_rank is None else f"needs {pile.next_rank}"
        top = str(pile.top) if pile.top else "--"
        piles.append(f"{pile.id}[{top}, {need}]")
    lines.append("Build: " + "  ".join(piles))

    for pid in state.players:
        player = state.by_id[pid]
        active = pid == state.turn.active_player and state.phase == GamePhase.TURN
        prefix = "→ " if active else "  "
        label = f"{player.name} ({pid})" if player.name else pid

        lines.append(f"\n{prefix}{label}")
        lines.append("-" * 40)
        top = str(player.stock_top) if player.stock_top else "--"
        lines.append(f"  Stock: {len(player.stock)} cards, top {top}")

        if active or show_all_hands:
            lines.append(f"  Hand: {_cards_str(player.hand)}")
        else:
            lines.append(f"  Hand: [{len(player.hand)} cards]")

        tops = " | ".join(str(d[-1]) if d else "--" for d in player.discards)
        lines.append(f"  Discards: {tops}")

    lines.append(f"\nDraw pile: {len(state.deck.draw_pile)} cards")

    if state.is_game_over:
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - {state.winner} wins!")
        lines.append("=" * 60)

    return "\n".join(lines)


def format_moves(moves: list[Move]) -> str:
    """Format available moves for display."""
    lines = ["Available moves:"]
    for i, move in enumerate(moves):
        lines.append(f"  {i + 1}. {move}")
    return "\n".join(lines)


def _rules_from_args(args: argparse.Namespace) -> dict[str, Any]:
    rules: dict[str, Any] = {}
    for name in ("hand_size", "stock_size", "build_piles", "discard_piles", "max_build_rank"):
        value = getattr(args, name, None)
        if value is not None:
            rules[name] = value
    if getattr(args, "jokers", False):
        rules["use_jokers"] = True
    if getattr(args, "no_wild_kings", False):
        rules["kings_are_wild"] = False
    if getattr(args, "wild_ranks", None):
        rules["additional_wild_ranks"] = tuple(args.wild_ranks)
    if getattr(args, "no_auto_clear", False):
        rules["auto_clear_complete_build"] = False
    return rules


def new_game(
    player_names: list[str], seed: int, rules: dict[str, Any], decks: int = 2
) -> GameState:
    """Shuffle ``decks`` standard decks with ``seed`` and create a lobby state."""
    use_jokers = bool(rules.get("use_jokers"))
    cards = [
        replace(card, id=f"{card.id}-d{n + 1}")
        for n in range(decks)
        for card in create_deck(include_jokers=use_jokers)
    ]
    deck = shuffle_deck(cards, seed)
    players = [{"id": f"P{i + 1}", "name": name} for i, name in enumerate(player_names)]
    return create_initial_state(players, deck, rules, seed=seed)


def run_game(
    state: GameState,
    choose: Callable[[GameState, list[Move]], Move | None],
    on_step: Callable[[GameState, Move], None] | None = None,
    max_moves: int | None = None,
) -> GameState:
    """Drive a game from lobby until it ends, stalls, or ``choose`` returns None."""
    moves_made = 0
    while not state.is_game_over:
        if max_moves is not None and moves_made >= max_moves:
            logger.info(f"Stopped after {moves_made} moves")
            break

        legal_moves = generate_legal_moves(state)
        if not legal_moves:
            logger.warning(f"{state.turn.active_player} has no legal move; game stalled")
            break

        move = choose(state, legal_moves)
        if move is None:
            break

        result = apply_move(state, move)
        if not result.accepted:
            logger.warning(f"Move {move} rejected: {result.rejection_reason}")
            break
        state = result.state
        moves_made += 1
        if on_step is not None:
            on_step(state, move)

    return state


def _save(state: GameState, path: str | None) -> None:
    if path:
        Path(path).write_text(serialize(state))
        print(f"Snapshot written to {path}")


def play_interactive(state: GameState, save: str | None = None) -> None:
    """Hot-seat game: every player picks moves at the same terminal."""
    print("\nWelcome to Montoncito!")
    print("Type the number of a move to play. Type 'q' to quit.\n")

    def choose(s: GameState, legal_moves: list[Move]) -> Move | None:
        if s.phase == GamePhase.LOBBY:
            return StartGame()
        print(format_state(s))
        print(f"\n{format_moves(legal_moves)}")
        while True:
            try:
                choice = input(f"\n{s.turn.active_player}, your move: ").strip()
                if choice.lower() == "q":
                    print("Goodbye!")
                    return None

                move_idx = int(choice) - 1
                if 0 <= move_idx < len(legal_moves):
                    return legal_moves[move_idx]
                print(f"Please enter a number 1-{len(legal_moves)}")
            except ValueError:
                print("Please enter a valid number or 'q' to quit")

    state = run_game(state, choose)
    print(format_state(state, show_all_hands=True))
    _save(state, save)


def watch_game(
    state: GameState,
    seed: int,
    delay: float = 0.0,
    max_moves: int | None = None,
    save: str | None = None,
) -> GameState:
    """Watch bots play each other; even seats are heuristic, odd seats random."""
    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    seats = {
        pid: HeuristicStrategy() if i % 2 == 0 else RandomStrategy(seed=seed + i)
        for i, pid in enumerate(state.players)
    }

    def choose(s: GameState, legal_moves: list[Move]) -> Move:
        if s.phase == GamePhase.LOBBY:
            return legal_moves[0]
        return seats[s.turn.active_player].select_move(s, legal_moves)

    def on_step(s: GameState, move: Move) -> None:
        print(f"{move}")
        if delay > 0:
            time.sleep(delay)

    try:
        state = run_game(state, choose, on_step=on_step, max_moves=max_moves)
    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, show_all_hands=True))
    _save(state, save)
    return state


def _add_game_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=123456789, help="Shuffle seed")
    parser.add_argument("--decks", type=int, default=2, help="Standard decks to shuffle together")
    parser.add_argument("--hand-size", type=int)
    parser.add_argument("--stock-size", type=int)
    parser.add_argument("--build-piles", type=int)
    parser.add_argument("--discard-piles", type=int)
    parser.add_argument("--max-build-rank", type=int)
    parser.add_argument("--jokers", action="store_true", help="Add wild jokers")
    parser.add_argument("--no-wild-kings", action="store_true")
    parser.add_argument("--wild-ranks", type=int, nargs="*", help="Extra wild ranks")
    parser.add_argument("--no-auto-clear", action="store_true")
    parser.add_argument("--save", help="Write the final snapshot to this path")


def _configure_logging(level: str | None) -> None:
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        from dotenv import load_dotenv

        load_dotenv(env_file)

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Montoncito card game engine")
    parser.add_argument("--log-level", help=f"Logging level (default from {LOG_LEVEL_ENV})")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Hot-seat game at this terminal")
    play_parser.add_argument("players", nargs="+", help="Player names in turn order")
    _add_game_arguments(play_parser)

    watch_parser = subparsers.add_parser("watch", help="Watch bots play")
    watch_parser.add_argument("--players", type=int, default=2, help="Number of bots")
    watch_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves (seconds)"
    )
    watch_parser.add_argument("--max-moves", type=int, default=5000)
    _add_game_arguments(watch_parser)

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        if args.command == "play":
            state = new_game(args.players, args.seed, _rules_from_args(args), args.decks)
            play_interactive(state, save=args.save)
        elif args.command == "watch":
            names = [f"Bot {i + 1}" for i in range(args.players)]
            state = new_game(names, args.seed, _rules_from_args(args), args.decks)
            watch_game(state, args.seed, args.delay, args.max_moves, args.save)
        else:
            parser.print_help()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
