# src/contractcheck/verifiers/ordering.py
"""Ordering contract: total-order axioms for a three-way comparator.

A comparator is any callable compare(a, b) whose result's sign orders a
relative to b (negative: a first, zero: tied, positive: b first). Only
the sign is meaningful. The default, natural_compare(), derives it from
the < and > operators.

Single-object invariants:
- compare(x, None) raises the designated invalid-comparison signal
  (TypeError by default, which is what Python raises for x < None)
- compare(x, x) does not raise

Pairwise invariants:
- antisymmetry: sign(compare(a, b)) == -sign(compare(b, a))
- opt-in: compare(a, b) == 0 exactly when a == b

Triple invariant:
- transitivity: compare(a, b) > 0 and compare(b, c) > 0 imply compare(a, c) > 0
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from contractcheck.contracts.errors import ContractUsageError
from contractcheck.contracts.results import CheckOutcome
from contractcheck.core.checks import (
    Check,
    all_of,
    assert_that,
    described_as,
    method_does_not_throw,
    method_throws,
    require_callable,
    require_not_none,
)
from contractcheck.core.config import active_settings
from contractcheck.core.relationships import pairwise, triple
from contractcheck.core.safe import safe_compare, safe_equals, safe_repr
from contractcheck.engine.executor import assert_checks

Comparator = Callable[[Any, Any], Any]


def natural_compare(a: Any, b: Any) -> int:
    """Three-way comparison from the rich comparison operators."""
    return (a > b) - (a < b)


def _validate(compare: Comparator) -> None:
    require_callable("compare", compare)


def _compare_to_none_raises(compare: Comparator, invalid_comparison: type[Exception]) -> Check[Any]:
    if not (isinstance(invalid_comparison, type) and issubclass(invalid_comparison, Exception)):
        raise ContractUsageError("invalid_comparison must be an Exception subclass")
    return method_throws("compare(item, None)", invalid_comparison, lambda item: compare(item, None))


def _compare_to_self_does_not_raise(compare: Comparator) -> Check[Any]:
    return method_does_not_throw("compare(item, item)", lambda item: compare(item, item))


def _antisymmetric(compare: Comparator) -> Callable[[Any, Any], CheckOutcome]:
    def predicate(item: Any, other: Any) -> CheckOutcome:
        forward = safe_compare(compare, item, other, name="compare(a, b)")
        if forward.failure is not None:
            return forward.failure
        backward = safe_compare(compare, other, item, name="compare(b, a)")
        if backward.failure is not None:
            return backward.failure
        if forward.value != -backward.value:  # type: ignore[operator]
            return CheckOutcome.failed(
                f"not satisfied, sign(compare(a, b)) is {forward.value} but sign(compare(b, a)) is {backward.value}"
            )
        return CheckOutcome.ok()

    return predicate


def _consistent_with_equals(compare: Comparator) -> Callable[[Any, Any], CheckOutcome]:
    def predicate(item: Any, other: Any) -> CheckOutcome:
        ordered = safe_compare(compare, item, other)
        if ordered.failure is not None:
            return ordered.failure
        equal = safe_equals(item, other)
        if equal.failure is not None:
            return equal.failure
        if (ordered.value == 0) != equal.value:
            return CheckOutcome.failed(f"not satisfied, sign(compare(a, b)) is {ordered.value} but a == b is {equal.value}")
        return CheckOutcome.ok()

    return predicate


def _transitive(compare: Comparator) -> Callable[[Any, Any, Any], CheckOutcome]:
    def predicate(item1: Any, item2: Any, item3: Any) -> CheckOutcome:
        c12 = safe_compare(compare, item1, item2, name="compare(a, b)")
        c23 = safe_compare(compare, item2, item3, name="compare(b, c)")
        c13 = safe_compare(compare, item1, item3, name="compare(a, c)")
        # Every comparison is attempted; any fault fails the whole check.
        for probe in (c12, c23, c13):
            if probe.failure is not None:
                return probe.failure
        if c12.value > 0 and c23.value > 0 and not c13.value > 0:  # type: ignore[operator]
            return CheckOutcome.failed(
                f"not satisfied, a > b and b > c but sign(compare(a, c)) is {c13.value}"
            )
        return CheckOutcome.ok()

    return predicate


def _ordering_checks(compare: Comparator, invalid_comparison: type[Exception]) -> list[Check[Any]]:
    return [
        _compare_to_none_raises(compare, invalid_comparison),
        _compare_to_self_does_not_raise(compare),
    ]


def _pair_checks(other: Any, compare: Comparator, consistent_with_equals: bool | None) -> list[Check[Any]]:
    if consistent_with_equals is None:
        consistent_with_equals = active_settings().ordering.consistent_with_equals
    checks = [pairwise("compare is antisymmetric", other, _antisymmetric(compare))]
    if consistent_with_equals:
        checks.append(natural_ordering_is_consistent_with_equals_with(other, compare=compare))
    return checks


def satisfies_ordering_invariants(
    *,
    compare: Comparator = natural_compare,
    invalid_comparison: type[Exception] = TypeError,
) -> Check[Any]:
    """Check for the single-object ordering invariants."""
    _validate(compare)
    return described_as("satisfies ordering invariants", all_of(*_ordering_checks(compare, invalid_comparison)))


def satisfies_ordering_invariants_with(
    other: Any,
    *,
    compare: Comparator = natural_compare,
    consistent_with_equals: bool | None = None,
) -> Check[Any]:
    """Check for the pairwise ordering invariants with a bound operand.

    Args:
        other: The second operand
        compare: Three-way comparator
        consistent_with_equals: Also require compare == 0 exactly when ==.
            None defers to ordering.consistent_with_equals in settings.
    """
    require_not_none("other", other)
    _validate(compare)
    return described_as(
        f"satisfies pairwise ordering invariants with {safe_repr(other)}",
        all_of(*_pair_checks(other, compare, consistent_with_equals)),
    )


def satisfies_ordering_transitivity_with(other1: Any, other2: Any, *, compare: Comparator = natural_compare) -> Check[Any]:
    """Check that compare is transitive over (item, other1, other2)."""
    _validate(compare)
    return triple("compare is transitive", other1, other2, _transitive(compare))


def natural_ordering_is_consistent_with_equals_with(other: Any, *, compare: Comparator = natural_compare) -> Check[Any]:
    """Check that compare(item, other) == 0 exactly when item == other."""
    _validate(compare)
    return pairwise("natural ordering is consistent with equality", other, _consistent_with_equals(compare))


def assert_ordering_invariants(
    obj: Any,
    *,
    compare: Comparator = natural_compare,
    invalid_comparison: type[Exception] = TypeError,
) -> None:
    """Assert the single-object ordering invariants, aggregating failures."""
    require_not_none("obj", obj)
    _validate(compare)
    assert_checks(obj, _ordering_checks(compare, invalid_comparison), heading=f"Ordering invariants [{safe_repr(obj)}]")


def assert_ordering_invariants_with(
    obj1: Any,
    obj2: Any,
    *,
    compare: Comparator = natural_compare,
    consistent_with_equals: bool | None = None,
) -> None:
    """Assert the pairwise ordering invariants, aggregating failures."""
    require_not_none("obj1", obj1)
    require_not_none("obj2", obj2)
    _validate(compare)
    assert_checks(
        obj1,
        _pair_checks(obj2, compare, consistent_with_equals),
        heading=f"Ordering invariants [{safe_repr(obj1)}, {safe_repr(obj2)}]",
    )


def assert_ordering_transitive(obj1: Any, obj2: Any, obj3: Any, *, compare: Comparator = natural_compare) -> None:
    """Assert that compare is transitive over the three objects."""
    require_not_none("obj1", obj1)
    assert_that(
        obj1,
        satisfies_ordering_transitivity_with(obj2, obj3, compare=compare),
        reason=f"Ordering invariants [{safe_repr(obj1)}, {safe_repr(obj2)}, {safe_repr(obj3)}]",
    )


def assert_ordering_consistent_with_equals(obj1: Any, obj2: Any, *, compare: Comparator = natural_compare) -> None:
    """Assert that compare(obj1, obj2) == 0 exactly when obj1 == obj2."""
    require_not_none("obj1", obj1)
    assert_that(
        obj1,
        natural_ordering_is_consistent_with_equals_with(obj2, compare=compare),
        reason=f"Natural ordering [{safe_repr(obj1)}, {safe_repr(obj2)}]",
    )
