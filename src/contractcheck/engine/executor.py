# src/contractcheck/engine/executor.py
"""Aggregating executor for independent check operations.

Runs every operation of a sequence, never stopping at the first failure,
and reports all collected failures as one MultipleFailuresError. This is
what lets a single assert_* call report, say, both a broken __eq__ and a
broken __hash__ instead of hiding the second behind the first.

Exception policy:
    - Exception (including InvariantViolation/AssertionError): collected
    - Unrecoverable signals (MemoryError, SystemExit): abort, propagate unwrapped
    - KeyboardInterrupt and other BaseExceptions: never caught
    - ContractUsageError raised while enumerating operations: propagates
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, TypeVar

from contractcheck.contracts.errors import ContractUsageError, MultipleFailuresError
from contractcheck.core.checks import Check, assert_that
from contractcheck.core.logging import get_logger
from contractcheck.core.safe import is_unrecoverable

logger = get_logger(__name__)

T = TypeVar("T")

Operation = Callable[[], Any]


def _operations(operations: tuple[Any, ...]) -> Iterable[Any]:
    # assert_all(op1, op2) and assert_all([op1, op2]) are both accepted.
    if len(operations) == 1 and not callable(operations[0]) and isinstance(operations[0], Iterable):
        return operations[0]  # type: ignore[no-any-return]
    return operations


def collect_failures(operations: Iterable[Operation]) -> list[Exception]:
    """Run every operation and return what they raised, in order."""
    failures: list[Exception] = []
    attempted = 0
    for operation in operations:
        if isinstance(operation, Check):
            raise ContractUsageError("a Check is not an operation; use assert_checks(item, checks) to assert checks")
        if not callable(operation):
            raise ContractUsageError(f"operations must be callable, got {type(operation).__name__}")
        attempted += 1
        try:
            operation()
        except Exception as e:
            if is_unrecoverable(e):
                logger.debug("checks.aborted", attempted=attempted, error_type=type(e).__name__)
                raise
            failures.append(e)
    logger.debug("checks.executed", attempted=attempted, failed=len(failures))
    return failures


def assert_all(*operations: Operation | Iterable[Operation], heading: str | None = None) -> None:
    """Run every operation; raise one aggregated failure if any raised.

    Args:
        *operations: Zero-argument callables, or a single iterable of them
        heading: Describes what is being verified, used in the message

    Raises:
        MultipleFailuresError: If at least one operation raised. Its
            failures hold every collected exception, the first being primary.
        MemoryError, SystemExit: Propagated unwrapped from an operation

    Example:
        assert_all(
            lambda: assert_object_invariants(order),
            lambda: assert_entity_semantics(order, copy, lambda o: o.order_id),
            heading="Order contract",
        )
    """
    failures = collect_failures(_operations(operations))
    if failures:
        logger.debug("checks.aggregated", heading=heading, failed=len(failures))
        raise MultipleFailuresError(heading, failures)


def assert_checks(item: T, checks: Iterable[Check[T]], heading: str | None = None) -> None:
    """Assert each check against item, aggregating every violation.

    Each violated check becomes one InvariantViolation inside the raised
    MultipleFailuresError, so checks on the same object stay independent.
    """
    assert_all((partial(assert_that, item, check) for check in checks), heading=heading)
