# src/contractcheck/verifiers/identity.py
"""Identity contract: __str__, __repr__, __hash__ and __eq__.

Single-object invariants:
- str() and repr() do not raise
- hash() does not raise
- an object is always equal to itself
- an object is never equal to None

Pairwise invariants:
- equality is symmetric: (a == b) == (b == a)
- hash is consistent with equality: a == b implies hash(a) == hash(b)
  (the converse is not required)

Types that declare __hash__ = None opt out of hashing on purpose and are
exempt from the hash invariants unless identity.require_hashable is set.
"""

from __future__ import annotations

from typing import Any

from contractcheck.contracts.results import CheckOutcome
from contractcheck.core.checks import Check, all_of, described_as, method_does_not_throw, require_not_none
from contractcheck.core.config import active_settings
from contractcheck.core.relationships import pairwise, self_relationship
from contractcheck.core.safe import is_declared_unhashable, safe_equals, safe_hash, safe_repr
from contractcheck.engine.executor import assert_checks


def _hash_exempt(obj: object) -> bool:
    return is_declared_unhashable(obj) and not active_settings().identity.require_hashable


def _hash_does_not_raise(item: object) -> CheckOutcome:
    if _hash_exempt(item):
        return CheckOutcome.ok()
    probe = safe_hash(item)
    return probe.failure if probe.failure is not None else CheckOutcome.ok()


def _equals_self(item: object, same: object) -> CheckOutcome:
    probe = safe_equals(item, same)
    if probe.failure is not None:
        return probe.failure
    if not probe.value:
        return CheckOutcome.failed("not satisfied, the object was not equal to itself")
    return CheckOutcome.ok()


def _never_equals_none(item: object) -> CheckOutcome:
    probe = safe_equals(item, None)
    if probe.failure is not None:
        return probe.failure
    if probe.value:
        return CheckOutcome.failed("not satisfied, the object was equal to None")
    return CheckOutcome.ok()


def _equality_is_symmetric(item: object, other: object) -> CheckOutcome:
    forward = safe_equals(item, other)
    if forward.failure is not None:
        return forward.failure
    backward = safe_equals(other, item)
    if backward.failure is not None:
        return backward.failure
    if forward.value != backward.value:
        return CheckOutcome.failed(f"not satisfied, a == b is {forward.value} but b == a is {backward.value}")
    return CheckOutcome.ok()


def _hash_is_consistent_with_equals(item: object, other: object) -> CheckOutcome:
    equal = safe_equals(item, other)
    if equal.failure is not None:
        return equal.failure
    if _hash_exempt(item) or _hash_exempt(other):
        return CheckOutcome.ok()
    hash1 = safe_hash(item)
    if hash1.failure is not None:
        return hash1.failure
    hash2 = safe_hash(other)
    if hash2.failure is not None:
        return hash2.failure
    if equal.value and hash1.value != hash2.value:
        return CheckOutcome.failed(f"not satisfied, the objects are equal but their hashes are {hash1.value} and {hash2.value}")
    return CheckOutcome.ok()


def _object_checks() -> list[Check[Any]]:
    return [
        method_does_not_throw("__str__", str),
        method_does_not_throw("__repr__", repr),
        Check("hash() does not raise", _hash_does_not_raise),
        self_relationship("an object is always equal to itself", _equals_self),
        Check("an object is never equal to None", _never_equals_none),
    ]


def _pair_checks(other: object) -> list[Check[Any]]:
    return [
        pairwise("equality is symmetric", other, _equality_is_symmetric),
        pairwise("hash is consistent with equality", other, _hash_is_consistent_with_equals),
    ]


def satisfies_object_invariants() -> Check[Any]:
    """Check for the single-object identity invariants."""
    return described_as("satisfies object invariants", all_of(*_object_checks()))


def satisfies_object_invariants_with(other: object) -> Check[Any]:
    """Check for the pairwise identity invariants with a bound operand."""
    require_not_none("other", other)
    return described_as(f"satisfies pairwise object invariants with {safe_repr(other)}", all_of(*_pair_checks(other)))


def assert_object_invariants(obj: object) -> None:
    """Assert the single-object identity invariants, aggregating failures.

    Raises:
        MultipleFailuresError: One InvariantViolation per violated invariant
        ContractUsageError: If obj is None
    """
    require_not_none("obj", obj)
    assert_checks(obj, _object_checks(), heading=f"Object invariants [{safe_repr(obj)}]")


def assert_object_invariants_with(obj1: object, obj2: object) -> None:
    """Assert the pairwise identity invariants, aggregating failures."""
    require_not_none("obj1", obj1)
    require_not_none("obj2", obj2)
    assert_checks(obj1, _pair_checks(obj2), heading=f"Object invariants [{safe_repr(obj1)}, {safe_repr(obj2)}]")
