# src/contractcheck/verifiers/equivalence.py
"""Equivalence semantics: what equality is supposed to mean for a type.

Entity semantics:
    Equality is decided solely by an identifier. Both identifiers must be
    present (not None), and a == b exactly when id_of(a) == id_of(b).
    Two objects with the same identifier are equal however much their
    other attributes differ.

Value semantics:
    Equality implies equality of every value attribute:
    a == b implies value_of(a) == value_of(b). The converse is not
    required. Failure messages name the attribute, so several value
    checks on the same pair stay distinguishable once aggregated.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import Any, TypeVar

from contractcheck.contracts.errors import ContractUsageError
from contractcheck.contracts.results import CheckOutcome, Probe
from contractcheck.core.checks import Check, assert_that, require_callable, require_not_none, require_text
from contractcheck.core.relationships import pairwise
from contractcheck.core.safe import safe_call, safe_equals, safe_repr
from contractcheck.engine.executor import assert_all

T = TypeVar("T")
U = TypeVar("U")


def _identifier(id_of: Callable[[T], U], item: T) -> Probe[U]:
    probe = safe_call("identifier accessor", id_of, item)
    if probe.ok and probe.value is None:
        return Probe(failure=CheckOutcome.failed(f"failed because the identifier of {safe_repr(item)} was None"))
    return probe


def _entity_semantics(id_of: Callable[[T], U]) -> Callable[[T, T], CheckOutcome]:
    def predicate(item: T, other: T) -> CheckOutcome:
        id1 = _identifier(id_of, item)
        id2 = _identifier(id_of, other)
        problems = [probe.failure for probe in (id1, id2) if probe.failure is not None]
        if problems:
            cause = next((problem.cause for problem in problems if problem.cause is not None), None)
            return CheckOutcome.failed("; ".join(problem.mismatch or "" for problem in problems), cause=cause)
        equal = safe_equals(item, other)
        if equal.failure is not None:
            return equal.failure
        equal_ids = safe_equals(id1.value, id2.value)
        if equal_ids.failure is not None:
            return CheckOutcome.failed(f"{equal_ids.failure.mismatch} for identifiers", cause=equal_ids.failure.cause)
        if equal.value != equal_ids.value:
            relation = "equal" if equal_ids.value else "not equal"
            return CheckOutcome.failed(
                f"not satisfied, a == b is {equal.value} but identifiers "
                f"{safe_repr(id1.value)} and {safe_repr(id2.value)} are {relation}"
            )
        return CheckOutcome.ok()

    return predicate


def _value_semantics(attribute_name: str, value_of: Callable[[T], U]) -> Callable[[T, T], CheckOutcome]:
    accessor = f"accessor for attribute {attribute_name}"

    def predicate(item: T, other: T) -> CheckOutcome:
        value1 = safe_call(accessor, value_of, item)
        if value1.failure is not None:
            return value1.failure
        value2 = safe_call(accessor, value_of, other)
        if value2.failure is not None:
            return value2.failure
        equal = safe_equals(item, other)
        if equal.failure is not None:
            return equal.failure
        if not equal.value:
            return CheckOutcome.ok()
        equal_values = safe_equals(value1.value, value2.value)
        if equal_values.failure is not None:
            return CheckOutcome.failed(
                f"{equal_values.failure.mismatch} for the values of attribute {attribute_name}",
                cause=equal_values.failure.cause,
            )
        if not equal_values.value:
            return CheckOutcome.failed(
                f"not satisfied, the objects are equal but attribute {attribute_name} values "
                f"{safe_repr(value1.value)} and {safe_repr(value2.value)} are not"
            )
        return CheckOutcome.ok()

    return predicate


def has_entity_semantics_with(other: T, id_of: Callable[[T], Any]) -> Check[T]:
    """Check that equality with other is decided by the identifier alone."""
    require_callable("id_of", id_of)
    return pairwise("has entity semantics", other, _entity_semantics(id_of))


def has_value_semantics_with(other: T, attribute_name: str, value_of: Callable[[T], Any]) -> Check[T]:
    """Check that equality with other implies equal values of an attribute."""
    require_text("attribute_name", attribute_name)
    require_callable("value_of", value_of)
    return pairwise(f"has value semantics with attribute {attribute_name}", other, _value_semantics(attribute_name, value_of))


def assert_entity_semantics(obj1: T, obj2: T, id_of: Callable[[T], Any]) -> None:
    """Assert entity semantics for a pair of objects."""
    require_not_none("obj1", obj1)
    assert_that(obj1, has_entity_semantics_with(obj2, id_of), reason=f"Entity semantics for [{safe_repr(obj1)}, {safe_repr(obj2)}]")


def assert_value_semantics(obj1: T, obj2: T, attribute_name: str, value_of: Callable[[T], Any]) -> None:
    """Assert value semantics for one attribute of a pair of objects."""
    require_not_none("obj1", obj1)
    assert_that(
        obj1,
        has_value_semantics_with(obj2, attribute_name, value_of),
        reason=f"Value semantics with attribute [{attribute_name}] for [{safe_repr(obj1)}, {safe_repr(obj2)}]",
    )


def assert_all_value_semantics(obj1: T, obj2: T, attributes: Mapping[str, Callable[[T], Any]]) -> None:
    """Assert value semantics for several attributes, aggregating failures.

    Example:
        assert_all_value_semantics(money1, money2, {"amount": lambda m: m.amount, "currency": lambda m: m.currency})
    """
    require_not_none("obj1", obj1)
    require_not_none("obj2", obj2)
    if not isinstance(attributes, Mapping) or not attributes:
        raise ContractUsageError("attributes must be a non-empty mapping of attribute name to accessor")
    # Build every check first so a bad accessor is a usage error, not an aggregated failure.
    checks = [(name, has_value_semantics_with(obj2, name, value_of)) for name, value_of in attributes.items()]
    assert_all(
        [partial(assert_that, obj1, check, f"Value semantics with attribute [{name}]") for name, check in checks],
        heading=f"Value semantics for [{safe_repr(obj1)}, {safe_repr(obj2)}]",
    )
