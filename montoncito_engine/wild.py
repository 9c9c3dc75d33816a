"""Wildness policy: which cards may stand in for any required rank."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from montoncito_engine.cards import Card
    from montoncito_engine.rules import RulesConfig


def is_wild(card: Card, rules: RulesConfig) -> bool:
    """Whether ``card`` counts as wild under ``rules``.

    Precedence:
    1. A per-card wild flag, when the rules honor such flags.
    2. Jokers are wild when jokers are in play and not marked non-wild.
    3. A standard card at the maximum build rank, when kings are wild.
    4. A standard card whose rank is listed in the additional wild ranks.
    """
    if rules.enable_card_wild_flag and card.base_wild:
        return True

    if card.kind == "joker":
        return rules.use_jokers and rules.jokers_are_wild

    if rules.kings_are_wild and card.rank == rules.max_build_rank:
        return True
    if card.rank in rules.additional_wild_ranks:
        return True

    return False


def satisfies_requirement(card: Card, required: int | None, rules: RulesConfig) -> bool:
    """Whether ``card`` may go onto a build pile that needs ``required``.

    A completed pile (``required is None``) accepts nothing.
    """
    if required is None:
        return False
    if is_wild(card, rules):
        return True
    return card.kind == "standard" and card.rank == required
