"""Per-game rule configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from montoncito_engine.cards import MAX_RANK, MIN_RANK


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Rules frozen for the whole match.

    Attributes:
        hand_size: Cards a player draws up to.
        stock_size: Cards dealt to each stock at game start.
        build_piles: Number of shared build piles.
        max_build_rank: Rank that completes a build pile.
        discard_piles: Personal discard stacks per player.
        use_jokers: Jokers take part in play.
        jokers_are_wild: Jokers in play are wild.
        kings_are_wild: Cards at ``max_build_rank`` are wild.
        additional_wild_ranks: Further ranks that are wild.
        enable_card_wild_flag: Honor per-card ``base_wild`` flags.
        auto_clear_complete_build: Empty a build pile as soon as it completes.
    """

    hand_size: int = 5
    stock_size: int = 20
    build_piles: int = 4
    max_build_rank: int = MAX_RANK
    discard_piles: int = 3
    use_jokers: bool = False
    jokers_are_wild: bool = True
    kings_are_wild: bool = True
    additional_wild_ranks: tuple[int, ...] = ()
    enable_card_wild_flag: bool = True
    auto_clear_complete_build: bool = True


RULE_FIELDS = frozenset(f.name for f in fields(RulesConfig))


def _clamp_rank(value: int) -> int:
    return max(MIN_RANK, min(MAX_RANK, int(value)))


def resolve_rules(overrides: RulesConfig | Mapping[str, Any] | None = None) -> RulesConfig:
    """Fill unspecified rules with defaults and normalize the rest.

    Ranks (``max_build_rank`` and each additional wild rank) are clamped into
    Ace..King. Unknown keys and impossible sizes raise ``ValueError``.
    """
    if isinstance(overrides, RulesConfig):
        values: dict[str, Any] = {f: getattr(overrides, f) for f in RULE_FIELDS}
    else:
        values = dict(overrides or {})

    unknown = set(values) - RULE_FIELDS
    if unknown:
        raise ValueError(f"Unknown rule option(s): {', '.join(sorted(unknown))}")

    if "max_build_rank" in values:
        values["max_build_rank"] = _clamp_rank(values["max_build_rank"])
    if "additional_wild_ranks" in values:
        values["additional_wild_ranks"] = tuple(
            _clamp_rank(r) for r in values["additional_wild_ranks"]
        )

    rules = RulesConfig(**values)

    for name in ("hand_size", "stock_size"):
        if getattr(rules, name) < 0:
            raise ValueError(f"{name} must not be negative")
    for name in ("build_piles", "discard_piles"):
        if getattr(rules, name) < 1:
            raise ValueError(f"{name} must be at least 1")

    return rules
