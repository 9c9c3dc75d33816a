"""Card, Suit, and Rank models for Montoncito."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal, Union


class Suit(IntEnum):
    """Card suits. Suits carry no rule meaning; they are kept for display."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }[self]

    @property
    def label(self) -> str:
        """Title-cased name used in snapshots and card ids ("Hearts")."""
        return self.name.title()

    @classmethod
    def from_label(cls, label: str) -> Suit:
        return cls[label.upper()]


class Rank(IntEnum):
    """Card ranks (Ace=1 through King=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value == 1:
            return "A"
        elif self.value <= 10:
            return str(self.value)
        else:
            return self.name[0]


MIN_RANK = int(Rank.ACE)
MAX_RANK = int(Rank.KING)


@dataclass(frozen=True, slots=True)
class StandardCard:
    """A ranked card. Identity is the ``id``; rank and suit never change.

    Attributes:
        id: Unique card id within a game.
        rank: Ace through King.
        suit: Display-only suit.
        base_wild: Per-card wild flag, honored only when the rules enable it.
    """

    id: str
    rank: Rank
    suit: Suit
    base_wild: bool = False

    @property
    def kind(self) -> Literal["standard"]:
        return "standard"

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"


@dataclass(frozen=True, slots=True)
class Joker:
    """A joker. Whether it is wild depends on the rules."""

    id: str
    base_wild: bool = False

    @property
    def kind(self) -> Literal["joker"]:
        return "joker"

    def __str__(self) -> str:
        return "JK"


Card = Union[StandardCard, Joker]


def create_deck(
    *, ranks_up_to: int = MAX_RANK, include_jokers: bool = False, joker_count: int = 2
) -> list[Card]:
    """Create a standard deck in a fixed, unshuffled order.

    Args:
        ranks_up_to: Highest rank to include (Ace through this rank, per suit).
        include_jokers: Append jokers after the ranked cards.
        joker_count: Number of jokers when ``include_jokers`` is set.

    Returns:
        New list of cards with stable ids ("card-7-Hearts", "joker-1").
    """
    if not MIN_RANK <= ranks_up_to <= MAX_RANK:
        raise ValueError(f"ranks_up_to must be between {MIN_RANK} and {MAX_RANK}")

    deck: list[Card] = [
        StandardCard(id=f"card-{rank.value}-{suit.label}", rank=rank, suit=suit)
        for rank in Rank
        if rank.value <= ranks_up_to
        for suit in Suit
    ]
    if include_jokers:
        deck.extend(Joker(id=f"joker-{i + 1}") for i in range(joker_count))
    return deck
