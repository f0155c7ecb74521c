# src/contractcheck/core/safe.py
"""Guarded invocation of untrusted operations.

Everything the checkers call on an object under test - __eq__, __hash__,
__str__, __repr__, comparison operators, caller-supplied accessors - may
be faulty. The functions here invoke such an operation exactly once and
turn an exception into a failed CheckOutcome, so a broken object can
never crash the checker.

Unrecoverable signals (MemoryError, SystemExit) always propagate.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from contractcheck.contracts.errors import UNRECOVERABLE_ERRORS
from contractcheck.contracts.results import CheckOutcome, Probe
from contractcheck.core.config import active_settings

R = TypeVar("R")


def is_unrecoverable(exc: BaseException) -> bool:
    """True if exc signals that the test process itself is compromised."""
    return isinstance(exc, UNRECOVERABLE_ERRORS)


def identity_string(obj: object) -> str:
    """Representation that never calls code of the object's own class.

    This is what repr() gives for a class that does not override __repr__,
    e.g. ``<shop.Order object at 0x7f3a...>``.
    """
    if obj is None:
        return "None"
    return object.__repr__(obj)


def safe_repr(obj: object) -> str:
    """Describe obj for a failure message, even if its __repr__ is broken.

    Falls back to identity_string() when repr() raises, and truncates long
    output to diagnostics.max_repr_length.
    """
    if obj is None:
        return "None"
    try:
        text = repr(obj)
    except Exception as e:
        if is_unrecoverable(e):
            raise
        return identity_string(obj)
    if not isinstance(text, str):
        return identity_string(obj)
    limit = active_settings().diagnostics.max_repr_length
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def describe_exception(exc: BaseException) -> str:
    """Render an exception as ``TypeName('message')`` without trusting it."""
    try:
        return repr(exc)
    except Exception as e:
        if is_unrecoverable(e):
            raise
        return f"<{type(exc).__qualname__}>"


def safe_call(name: str, operation: Callable[..., R], *args: Any) -> Probe[R]:
    """Invoke operation(*args) exactly once.

    Args:
        name: How to name the operation in a failure, e.g. "hash()"
        operation: The untrusted callable
        *args: Arguments for the call

    Returns:
        Probe with the returned value, or with a failed outcome capturing
        the exception when the operation raised.
    """
    try:
        return Probe(value=operation(*args))
    except Exception as e:
        if is_unrecoverable(e):
            raise
        return Probe(
            failure=CheckOutcome.failed(
                f"{name} must not raise for well-formed input, but raised {describe_exception(e)}",
                cause=e,
            )
        )


def _equals(a: object, b: object) -> bool:
    return bool(a == b)


def safe_equals(a: object, b: object) -> Probe[bool]:
    """a == b, coerced to bool.

    A None left operand is handled without calling anything; b may be None
    so that "never equal to None" can be probed through a's own __eq__.

    A result whose truth value raises (e.g. array-like elementwise
    comparison results) counts as __eq__ misbehaving.
    """
    if a is None and b is None:
        return Probe(value=True)
    if a is None:
        return Probe(value=False)
    return safe_call("__eq__", _equals, a, b)


def _hash(obj: object) -> int:
    return hash(obj)


def safe_hash(obj: object) -> Probe[int]:
    return safe_call("__hash__", _hash, obj)


def sign(value: Any) -> int:
    """Sign of a comparison result; only the sign is meaningful.

    Raises:
        ValueError: If value is unordered relative to 0, e.g. NaN
    """
    if value > 0:
        return 1
    if value < 0:
        return -1
    if value == 0:
        return 0
    raise ValueError(f"comparison result {value!r} is not ordered relative to 0")


def safe_compare(compare: Callable[[Any, Any], Any], a: object, b: object, name: str = "compare") -> Probe[int]:
    """Sign of compare(a, b).

    The sign is computed inside the probe, so a comparator returning
    something that cannot be compared with 0 is reported as a fault.
    """

    def _signed() -> int:
        return sign(compare(a, b))

    return safe_call(name, _signed)


def is_declared_unhashable(obj: object) -> bool:
    """True if obj's type deliberately opts out of hashing (__hash__ = None)."""
    return getattr(type(obj), "__hash__", None) is None
