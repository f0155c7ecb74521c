# src/contractcheck/contracts/errors.py
"""Exception taxonomy for contract verification.

Four kinds of failure cross the package boundary:

- Usage errors (ContractUsageError): the caller passed invalid arguments.
  Raised immediately, before the object under test is examined.
- Invariant violations (InvariantViolation): the object under test broke
  its contract. These are AssertionErrors so test runners report them as
  test failures rather than errors.
- Aggregated failures (MultipleFailuresError): several independent
  invariant violations bundled into one exception.
- Unrecoverable signals (UNRECOVERABLE_ERRORS): the test process itself is
  compromised. Never caught, converted or aggregated anywhere in the package.
"""

from __future__ import annotations

from collections.abc import Sequence

# MemoryError is an Exception subclass, so every `except Exception` in the
# package must re-raise it explicitly. SystemExit is a BaseException and
# only reaches handlers that catch BaseException (the harness workers).
UNRECOVERABLE_ERRORS: tuple[type[BaseException], ...] = (MemoryError, SystemExit)


class ContractUsageError(ValueError):
    """Raised when a checker is called with invalid arguments.

    Examples: a None operand bound to a relationship check, an empty
    attribute name, a non-positive worker count.
    """


class InvariantViolation(AssertionError):
    """Raised when an object under test breaks a contract invariant."""


class MultipleFailuresError(InvariantViolation):
    """One or more independent failures bundled under a single heading.

    The first failure is the primary one and is chained as __cause__ so
    tracebacks show it; every failure (the first included) is available
    from the failures attribute in the order it was collected.

    Attributes:
        heading: Optional description of what was being verified
        failures: Every collected failure, in collection order
    """

    def __init__(self, heading: str | None, failures: Sequence[BaseException]) -> None:
        if not failures:
            raise ContractUsageError("MultipleFailuresError requires at least one failure")
        self.heading = heading
        self.failures: tuple[BaseException, ...] = tuple(failures)
        super().__init__(self._build_message())
        self.__cause__ = self.failures[0]

    @property
    def primary(self) -> BaseException:
        """The first collected failure."""
        return self.failures[0]

    @property
    def secondary(self) -> tuple[BaseException, ...]:
        """Failures after the first, attached as context."""
        return self.failures[1:]

    def _build_message(self) -> str:
        count = len(self.failures)
        noun = "failure" if count == 1 else "failures"
        heading = self.heading if self.heading else "Multiple Failures"
        lines = [f"{heading} ({count} {noun})"]
        for failure in self.failures:
            text = _indented_message(failure)
            lines.append(f"\t{type(failure).__name__}: {text}" if text else f"\t{type(failure).__name__}")
        return "\n".join(lines)


class CollectionInterruptedError(InvariantViolation):
    """Raised when the thread collecting harness results is interrupted.

    Test threads should never be interrupted, so an interrupt while
    waiting for a worker is reported as a test failure.
    """


class WorkerFailedError(RuntimeError):
    """Wraps a non-Exception BaseException captured by a harness worker.

    Exceptions and unrecoverable signals are re-raised unchanged; anything
    else a worker raised (KeyboardInterrupt, GeneratorExit, custom
    BaseException subclasses) is re-raised wrapped in this error.
    """


def _indented_message(failure: BaseException) -> str:
    # A failure's own __str__ may be broken; the aggregate must still render.
    try:
        text = str(failure)
    except Exception as e:
        if isinstance(e, UNRECOVERABLE_ERRORS):
            raise
        return "<str() raised>"
    return text.replace("\n", "\n\t\t")
