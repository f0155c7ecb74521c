# src/contractcheck/contracts/results.py
"""Check and worker outcomes.

These types answer: "What did a check (or a worker thread) observe?"

IMPORTANT:
- Inner checks RETURN outcomes; only the outward-facing assert entry
  points and the harness raise.
- CheckOutcome.mismatch is built only on the failing path, so a check
  never calls an accessor a second time just to describe a failure.
- WorkerOutcome is written exactly once by its worker thread and read
  exactly once by the collecting thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """Verdict of evaluating one check against one object.

    Use the factory methods to create instances.

    Fields:
        passed: True if the invariant held
        mismatch: Human-readable explanation (failures only)
        cause: Exception raised by an accessor, if that caused the failure
    """

    passed: bool
    mismatch: str | None = None
    cause: BaseException | None = None

    def __post_init__(self) -> None:
        if self.passed and (self.mismatch is not None or self.cause is not None):
            raise ValueError("A passing CheckOutcome must not carry a mismatch or cause")
        if not self.passed and not self.mismatch:
            raise ValueError("A failing CheckOutcome MUST explain the mismatch")

    @classmethod
    def ok(cls) -> CheckOutcome:
        return _PASSED

    @classmethod
    def failed(cls, mismatch: str, cause: BaseException | None = None) -> CheckOutcome:
        return cls(passed=False, mismatch=mismatch, cause=cause)

    def __bool__(self) -> bool:
        return self.passed


_PASSED = CheckOutcome(passed=True)


@dataclass(frozen=True)
class Probe(Generic[R]):
    """Result of one guarded invocation of an untrusted operation.

    Exactly one of value/failure is meaningful: a probe that raised has a
    failure outcome; a probe that returned has failure=None (its value may
    legitimately be None).
    """

    value: R | None = None
    failure: CheckOutcome | None = None

    @property
    def ok(self) -> bool:
        """True if the operation returned normally."""
        return self.failure is None


@dataclass(slots=True)
class WorkerOutcome:
    """Outcome holder for one harness worker thread.

    Not frozen: the worker records its result after construction. The
    owning WorkerFuture publishes the write through a threading.Event,
    so readers never observe a half-written outcome.

    Fields:
        index: Submission order of the worker (0-based)
        exception: What the worker's operation raised, or None on success
        traceback: Formatted traceback of the exception, for diagnostics
    """

    index: int
    exception: BaseException | None = None
    traceback: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.exception is None
