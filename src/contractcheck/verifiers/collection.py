# src/contractcheck/verifiers/collection.py
"""Verify every element of a collection, aggregating failures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, TypeVar

from contractcheck.core.checks import require_callable, require_not_none
from contractcheck.engine.executor import assert_all

T = TypeVar("T")


def assert_for_all_elements(
    collection: Iterable[T],
    verifier: Callable[[T], Any],
    heading: str | None = None,
) -> None:
    """Apply verifier to each element; report every failing element at once.

    Args:
        collection: Elements to verify
        verifier: Raises (typically InvariantViolation) for a bad element,
            e.g. assert_object_invariants
        heading: Describes the collection in the aggregated message

    Example:
        assert_for_all_elements(orders, assert_object_invariants, heading="orders")
    """
    require_not_none("collection", collection)
    require_callable("verifier", verifier)
    assert_all([partial(verifier, element) for element in collection], heading=heading)
