"""Immutable game state models for Montoncito."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from montoncito_engine.guards import invariant
from montoncito_engine.rules import RulesConfig, resolve_rules

if TYPE_CHECKING:
    from montoncito_engine.cards import Card

SCHEMA_VERSION = 1
DEFAULT_SEED = 123456789
DEFAULT_GAME_ID = "match"


class GamePhase(str, Enum):
    """Coarse lifecycle stage. Moves only forward: lobby -> turn -> gameover."""

    LOBBY = "lobby"
    TURN = "turn"
    GAME_OVER = "gameover"


@dataclass(frozen=True, slots=True)
class Turn:
    """Whose turn it is.

    ``has_discarded`` is carried for clients; ending a turn is driven by the
    discard move itself.
    """

    number: int
    active_player: str
    has_discarded: bool = False


@dataclass(frozen=True, slots=True)
class BuildPile:
    """A shared center pile built upward from Ace.

    Attributes:
        id: Pile id ("B1", "B2", ...).
        cards: Cards on the pile, index 0 is the top.
        next_rank: Rank a non-wild card must show to go on next; ``None`` once
            the pile reached the maximum rank and was not cleared.
    """

    id: str
    cards: tuple[Card, ...] = ()
    next_rank: int | None = 1

    @property
    def top(self) -> Card | None:
        return self.cards[0] if self.cards else None

    @property
    def is_complete(self) -> bool:
        return self.next_rank is None


@dataclass(frozen=True, slots=True)
class PlayerState:
    """State of a single player.

    Attributes:
        id: Player id, unique within the game.
        name: Optional display name.
        hand: Unordered cards in hand.
        discards: One stack per discard pile; the top of each is its last card.
        stock: Goal pile; the top is the last card.
    """

    id: str
    hand: tuple[Card, ...] = ()
    discards: tuple[tuple[Card, ...], ...] = ()
    stock: tuple[Card, ...] = ()
    name: str | None = None

    @property
    def stock_top(self) -> Card | None:
        return self.stock[-1] if self.stock else None

    def discard_top(self, pile_index: int) -> Card | None:
        invariant(0 <= pile_index < len(self.discards), "Discard pile missing")
        pile = self.discards[pile_index]
        return pile[-1] if pile else None

    def find_in_hand(self, card_id: str) -> Card | None:
        return next((c for c in self.hand if c.id == card_id), None)

    def with_hand(self, hand: tuple[Card, ...]) -> PlayerState:
        """Return new state with updated hand."""
        return replace(self, hand=hand)

    def with_stock(self, stock: tuple[Card, ...]) -> PlayerState:
        """Return new state with updated stock."""
        return replace(self, stock=stock)

    def with_discards(self, discards: tuple[tuple[Card, ...], ...]) -> PlayerState:
        """Return new state with updated discard stacks."""
        return replace(self, discards=discards)


@dataclass(frozen=True, slots=True)
class Deck:
    """Shared face-down draw pile (front is drawn first) and an unused burn pile."""

    draw_pile: tuple[Card, ...] = ()
    discard: tuple[Card, ...] = ()


@dataclass(frozen=True, slots=True)
class Center:
    build_piles: tuple[BuildPile, ...] = ()


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Every transition produces a new value. ``by_id`` and ``data`` are copied
    into read-only mappings on construction, so no two states share them.

    Attributes:
        id: Match id.
        phase: Current lifecycle phase.
        turn: Turn counter and active player.
        players: Turn order, fixed for the whole game.
        by_id: Player id -> PlayerState.
        deck: Shared draw pile.
        center: Shared build piles.
        rules: Rules frozen at creation.
        rng_seed: Seed the caller used to order the deck.
        winner: Winning player id once the game is over.
        data: Free-form extension data owned by callers.
        version: Snapshot schema version.
    """

    id: str
    phase: GamePhase
    turn: Turn
    players: tuple[str, ...]
    by_id: Mapping[str, PlayerState]
    deck: Deck
    center: Center
    rules: RulesConfig
    rng_seed: int = DEFAULT_SEED
    winner: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    version: int = SCHEMA_VERSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_id", MappingProxyType(dict(self.by_id)))
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def __hash__(self) -> int:
        # data is caller-owned and may hold unhashable values
        return hash((
            self.id,
            self.phase,
            self.turn,
            self.players,
            tuple(sorted(self.by_id.items())),
            self.deck,
            self.center,
            self.rules,
            self.rng_seed,
            self.winner,
            self.version,
        ))

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def build_piles(self) -> tuple[BuildPile, ...]:
        return self.center.build_piles

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with one player's record replaced."""
        by_id = dict(self.by_id)
        by_id[player.id] = player
        return replace(self, by_id=by_id)

    def with_draw_pile(self, draw_pile: tuple[Card, ...]) -> GameState:
        """Return new state with updated draw pile."""
        return replace(self, deck=replace(self.deck, draw_pile=draw_pile))

    def with_build_piles(self, build_piles: tuple[BuildPile, ...]) -> GameState:
        """Return new state with updated build piles."""
        return replace(self, center=Center(build_piles=build_piles))

    def with_build_pile(self, pile: BuildPile) -> GameState:
        """Return new state with the pile of the same id replaced."""
        return self.with_build_piles(
            tuple(pile if p.id == pile.id else p for p in self.center.build_piles)
        )

    def with_turn(self, turn: Turn) -> GameState:
        return replace(self, turn=turn)

    def with_phase(self, phase: GamePhase) -> GameState:
        return replace(self, phase=phase)

    def with_winner(self, winner: str) -> GameState:
        """Return terminal state won by ``winner``."""
        return replace(self, phase=GamePhase.GAME_OVER, winner=winner)


def empty_build_piles(count: int) -> tuple[BuildPile, ...]:
    """Fresh piles B1..Bn, each waiting for an Ace."""
    return tuple(BuildPile(id=f"B{i + 1}") for i in range(count))


def _player_entries(players: Iterable[Any]) -> list[tuple[str, str | None]]:
    entries = []
    for p in players:
        if isinstance(p, Mapping):
            entries.append((str(p["id"]), p.get("name")))
        elif isinstance(p, str):
            entries.append((p, None))
        else:
            pid, name = p
            entries.append((str(pid), name))
    return entries


def create_initial_state(
    players: Iterable[Any],
    deck: Sequence[Card],
    rules: RulesConfig | Mapping[str, Any] | None = None,
    *,
    seed: int = DEFAULT_SEED,
    game_id: str = DEFAULT_GAME_ID,
) -> GameState:
    """Create a lobby-phase game.

    Args:
        players: Turn order as ``{"id", "name"?}`` mappings, ``(id, name)``
            pairs or bare ids.
        deck: Draw pile already in final draw order (front is drawn first).
        rules: A RulesConfig or partial overrides; missing rules take defaults.
        seed: Seed the caller used when shuffling, kept for replays.
        game_id: Match id.

    Returns:
        Lobby state with empty zones, empty build piles and frozen rules.
    """
    resolved = resolve_rules(rules)
    entries = _player_entries(players)
    if not entries:
        raise ValueError("At least one player is required")
    ids = [pid for pid, _ in entries]
    if len(set(ids)) != len(ids):
        raise ValueError("Player ids must be unique")

    empty_discards = tuple(() for _ in range(resolved.discard_piles))
    by_id = {
        pid: PlayerState(id=pid, name=name, discards=empty_discards)
        for pid, name in entries
    }

    return GameState(
        id=game_id,
        phase=GamePhase.LOBBY,
        turn=Turn(number=0, active_player=ids[0]),
        players=tuple(ids),
        by_id=by_id,
        deck=Deck(draw_pile=tuple(deck)),
        center=Center(build_piles=empty_build_piles(resolved.build_piles)),
        rules=resolved,
        rng_seed=seed,
    )
