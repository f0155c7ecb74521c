# src/contractcheck/core/relationships.py
"""Relationship checks of arity one, two and three.

Each factory binds the external operands at construction and returns a
Check whose test applies the predicate to (item, *operands). Operands are
validated eagerly: a None operand is a usage error, raised before any
object is examined, never a check failure.

Predicates return a CheckOutcome and build mismatch text only on the
failing path.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from contractcheck.contracts.results import CheckOutcome
from contractcheck.core.checks import Check, require_callable, require_not_none, require_text
from contractcheck.core.safe import safe_call, safe_repr

T = TypeVar("T")
U = TypeVar("U")

SelfPredicate = Callable[[T, T], CheckOutcome]
PairPredicate = Callable[[T, U], CheckOutcome]
TriplePredicate = Callable[[T, U, U], CheckOutcome]


def self_relationship(description: str, predicate: SelfPredicate[T]) -> Check[T]:
    """Relationship of an object with itself, e.g. reflexive equality."""
    require_text("description", description)
    require_callable("predicate", predicate)

    def test(item: T) -> CheckOutcome:
        return predicate(item, item)

    return Check(description, test)


def pairwise(description: str, other: U, predicate: PairPredicate[T, U]) -> Check[T]:
    """Relationship of an object with one bound operand."""
    require_text("description", description)
    require_not_none("other", other)
    require_callable("predicate", predicate)

    def test(item: T) -> CheckOutcome:
        return predicate(item, other)

    return Check(description, test)


def triple(description: str, other1: U, other2: U, predicate: TriplePredicate[T, U]) -> Check[T]:
    """Relationship of an object with two bound operands, e.g. transitivity."""
    require_text("description", description)
    require_not_none("other1", other1)
    require_not_none("other2", other2)
    require_callable("predicate", predicate)

    def test(item: T) -> CheckOutcome:
        return predicate(item, other1, other2)

    return Check(description, test)


def has_relationship(description: str, other: U, predicate: Callable[[T, U], Any]) -> Check[T]:
    """Pairwise check from a plain boolean predicate.

    Example:
        assert_that(order, has_relationship("placed before", shipment, lambda o, s: o.placed < s.sent))
    """
    require_callable("predicate", predicate)

    def related(item: T, bound: U) -> CheckOutcome:
        probe = safe_call("predicate", lambda: bool(predicate(item, bound)))
        if probe.failure is not None:
            return probe.failure
        if not probe.value:
            return CheckOutcome.failed(f"not satisfied by {safe_repr(item)} and {safe_repr(bound)}")
        return CheckOutcome.ok()

    return pairwise(description, other, related)
