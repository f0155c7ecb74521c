# src/contractcheck/core/checks.py
"""Composable checks and the assert entry point.

A Check is a tagged value: a description of the invariant plus a test
function returning a CheckOutcome. Checks compose with all_of() and
described_as(), can be used as plain boolean predicates (check(item)),
and are turned into raised InvariantViolations by assert_that().

Architecture:
    satisfies / feature / method_throws / ...   (this module)
    self_relationship / pairwise / triple        (core.relationships)
                     ↓
                  Check.evaluate(item) → CheckOutcome
                     ↓
    assert_that(item, check)  → raises InvariantViolation on mismatch
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from contractcheck.contracts.errors import UNRECOVERABLE_ERRORS, ContractUsageError, InvariantViolation
from contractcheck.contracts.results import CheckOutcome
from contractcheck.core.safe import describe_exception, is_unrecoverable, safe_call, safe_repr

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


def require_not_none(name: str, value: Any) -> None:
    """Usage check for a required operand."""
    if value is None:
        raise ContractUsageError(f"{name} must not be None")


def require_callable(name: str, value: Any) -> None:
    """Usage check for a required callback."""
    if not callable(value):
        raise ContractUsageError(f"{name} must be callable, got {type(value).__name__}")


def require_text(name: str, value: Any) -> None:
    """Usage check for a required, non-empty description."""
    if not isinstance(value, str) or not value:
        raise ContractUsageError(f"{name} must be a non-empty string")


@dataclass(frozen=True)
class Check(Generic[T]):
    """An invariant that an object may or may not satisfy.

    Fields:
        description: What the invariant requires, e.g. "equality is symmetric"
        test: Evaluates the invariant; builds mismatch text only on failure
    """

    description: str
    test: Callable[[T], CheckOutcome]

    def evaluate(self, item: T) -> CheckOutcome:
        """Evaluate the invariant, isolating faults in the test itself."""
        try:
            return self.test(item)
        except ContractUsageError:
            raise
        except Exception as e:
            if is_unrecoverable(e):
                raise
            return CheckOutcome.failed(f"failed because checking raised {describe_exception(e)}", cause=e)

    def matches(self, item: T) -> bool:
        return self.evaluate(item).passed

    def __call__(self, item: T) -> bool:
        return self.matches(item)


def all_of(*checks: Check[T], description: str | None = None) -> Check[T]:
    """Combine checks with AND semantics.

    Every component is evaluated, so the mismatch lists every violated
    component rather than only the first.
    """
    if not checks:
        raise ContractUsageError("all_of() requires at least one check")
    for check in checks:
        if not isinstance(check, Check):
            raise ContractUsageError(f"all_of() arguments must be Check instances, got {type(check).__name__}")

    def test(item: T) -> CheckOutcome:
        failures = [(check, check.evaluate(item)) for check in checks]
        failures = [(check, outcome) for check, outcome in failures if not outcome.passed]
        if not failures:
            return CheckOutcome.ok()
        mismatch = "; ".join(f"{check.description}: {outcome.mismatch}" for check, outcome in failures)
        cause = next((outcome.cause for _, outcome in failures if outcome.cause is not None), None)
        return CheckOutcome.failed(mismatch, cause=cause)

    if description is None:
        description = " and ".join(f"({check.description})" for check in checks)
    return Check(description, test)


def described_as(description: str, check: Check[T]) -> Check[T]:
    """Same verdict as check, with a different description."""
    require_text("description", description)
    if not isinstance(check, Check):
        raise ContractUsageError("described_as() requires a Check")
    return Check(description, check.evaluate)


def assert_that(item: T, check: Check[T], reason: str = "") -> None:
    """Raise InvariantViolation if item does not satisfy check.

    The message reads::

        <reason>
        Expected: <check description>
             but: <mismatch>

    An accessor exception that caused the mismatch is chained as __cause__.
    """
    if not isinstance(check, Check):
        raise ContractUsageError("assert_that() requires a Check")
    outcome = check.evaluate(item)
    if outcome.passed:
        return
    lines = [reason] if reason else []
    lines.append(f"Expected: {check.description}")
    lines.append(f"     but: {outcome.mismatch}")
    raise InvariantViolation("\n".join(lines)) from outcome.cause


def satisfies(description: str, predicate: Callable[[T], Any]) -> Check[T]:
    """Check from a unary boolean predicate."""
    require_text("description", description)
    require_callable("predicate", predicate)

    def test(item: T) -> CheckOutcome:
        probe = safe_call("predicate", lambda: bool(predicate(item)))
        if probe.failure is not None:
            return probe.failure
        if not probe.value:
            return CheckOutcome.failed(f"was {safe_repr(item)}")
        return CheckOutcome.ok()

    return Check(description, test)


def feature(name: str, get: Callable[[T], U], check: Check[U]) -> Check[T]:
    """Apply check to a feature extracted from the object under test."""
    require_text("name", name)
    require_callable("get", get)
    if not isinstance(check, Check):
        raise ContractUsageError("feature() requires a Check")

    def test(item: T) -> CheckOutcome:
        probe = safe_call(name, get, item)
        if probe.failure is not None:
            return probe.failure
        outcome = check.evaluate(probe.value)  # type: ignore[arg-type]
        if outcome.passed:
            return outcome
        return CheckOutcome.failed(f"{name} {outcome.mismatch}", cause=outcome.cause)

    return Check(f"{name} {check.description}", test)


def features_have_relationship(
    description: str,
    get1: Callable[[T], U],
    get2: Callable[[T], V],
    predicate: Callable[[U, V], Any],
) -> Check[T]:
    """Check that two features of one object are related by predicate."""
    require_text("description", description)
    require_callable("get1", get1)
    require_callable("get2", get2)
    require_callable("predicate", predicate)

    def test(item: T) -> CheckOutcome:
        first = safe_call("accessor get1", get1, item)
        if first.failure is not None:
            return first.failure
        second = safe_call("accessor get2", get2, item)
        if second.failure is not None:
            return second.failure
        related = safe_call("predicate", lambda: bool(predicate(first.value, second.value)))  # type: ignore[arg-type]
        if related.failure is not None:
            return related.failure
        if not related.value:
            return CheckOutcome.failed(
                f"not satisfied, with attribute values {safe_repr(first.value)} and {safe_repr(second.value)}"
            )
        return CheckOutcome.ok()

    return Check(description, test)


def method_does_not_throw(method_name: str, method: Callable[[T], Any]) -> Check[T]:
    """Check that calling method on the object does not raise."""
    require_text("method_name", method_name)
    require_callable("method", method)

    def test(item: T) -> CheckOutcome:
        probe = safe_call(method_name, method, item)
        if probe.failure is not None:
            return probe.failure
        return CheckOutcome.ok()

    return Check(f"method {method_name} does not raise", test)


def method_throws(method_name: str, exception_type: type[BaseException], method: Callable[[T], Any]) -> Check[T]:
    """Check that calling method on the object raises exception_type."""
    require_text("method_name", method_name)
    require_callable("method", method)
    if not (isinstance(exception_type, type) and issubclass(exception_type, BaseException)):
        raise ContractUsageError("exception_type must be an exception class")
    if issubclass(exception_type, UNRECOVERABLE_ERRORS):
        raise ContractUsageError(f"{exception_type.__name__} is an unrecoverable signal and cannot be expected")

    def test(item: T) -> CheckOutcome:
        try:
            method(item)
        except UNRECOVERABLE_ERRORS:
            # Even when exception_type is a base class of the signal.
            raise
        except exception_type:
            return CheckOutcome.ok()
        except Exception as e:
            return CheckOutcome.failed(f"failed because it instead raised {describe_exception(e)}", cause=e)
        return CheckOutcome.failed("failed because it did not raise")

    return Check(f"method {method_name} raises {exception_type.__name__}", test)
