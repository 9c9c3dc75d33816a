"""Assertions for states the validator should already have ruled out."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class InvariantError(RuntimeError):
    """Raised when the engine finds a state its own invariants forbid.

    This is a bug signal, never a rule violation: illegal moves are reported
    as ``InvalidMove`` events instead.
    """


def must(value: T | None, msg: str = "Unexpected missing value") -> T:
    """Return ``value`` or raise if it is ``None``."""
    if value is None:
        raise InvariantError(msg)
    return value


def invariant(cond: object, msg: str = "Invariant failed") -> None:
    if not cond:
        raise InvariantError(msg)
