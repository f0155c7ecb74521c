# src/contractcheck/engine/harness.py
"""Concurrency harness for exercising checks under thread contention.

Starts one dedicated thread per worker, holds them all at a shared start
gate, releases them together so they run as simultaneously as the
scheduler allows, then collects every outcome.

Architecture:
    run_concurrently(operation, workers=N)
        ↓
    StartGate(count=1) ← N × run_in_other_thread(gate, operation)
        ↓                         (each worker: BLOCKED on gate.wait())
    gate.count_down()  → all workers RUNNING
        ↓
    get_all(futures)   → waits on each WorkerFuture in SUBMISSION order
        ↓
    0 failures: return | 1 failure: re-raise it | N: MultipleFailuresError

Exception Propagation:
    Workers capture every BaseException their operation raises into their
    WorkerOutcome, so nothing dies silently in a thread. The collector
    re-raises Exceptions and unrecoverable signals unchanged, and wraps any
    other BaseException in WorkerFailedError.

Thread Safety:
    - Each WorkerOutcome has exactly one writer (its worker) and one reader
      (the collector); the write is published by WorkerFuture's Event.
    - StartGate is the only state shared between workers.
    - No timeouts or cancellation: bounding duration is the operation's job.
"""

from __future__ import annotations

import contextvars
import threading
import traceback
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from contractcheck.contracts.enums import WorkerState
from contractcheck.contracts.errors import (
    CollectionInterruptedError,
    ContractUsageError,
    MultipleFailuresError,
    WorkerFailedError,
)
from contractcheck.contracts.results import WorkerOutcome
from contractcheck.core.checks import require_callable
from contractcheck.core.logging import get_logger
from contractcheck.core.safe import describe_exception, is_unrecoverable

logger = get_logger(__name__)


class StartGate:
    """Count-down gate that releases every waiting worker at once.

    Usage:
        gate = StartGate()
        futures = [run_in_other_thread(gate, op) for _ in range(8)]
        gate.count_down()  # all 8 workers become runnable together
    """

    def __init__(self, count: int = 1) -> None:
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            raise ContractUsageError(f"StartGate count must be a positive integer, got {count!r}")
        self._count = count
        self._condition = threading.Condition()

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    @property
    def is_open(self) -> bool:
        return self.count == 0

    def count_down(self) -> None:
        """Decrement the count; reaching zero releases all waiters."""
        with self._condition:
            if self._count == 0:
                return
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def wait(self) -> None:
        """Block until the count reaches zero."""
        with self._condition:
            self._condition.wait_for(lambda: self._count == 0)


class WorkerFuture:
    """Access to the outcome of one harness worker.

    Created by run_in_other_thread(). The caller blocks on wait() (or,
    more usefully, get()/get_all()) until the worker completes.
    """

    def __init__(self, index: int) -> None:
        self._outcome = WorkerOutcome(index=index)
        self._done = threading.Event()
        self._state = WorkerState.CREATED

    @property
    def index(self) -> int:
        return self._outcome.index

    @property
    def state(self) -> WorkerState:
        return self._state

    def done(self) -> bool:
        return self._done.is_set()

    def wait(self) -> WorkerOutcome:
        """Block until the worker completes, then return its outcome."""
        self._done.wait()
        return self._outcome

    def _run(self, gate: StartGate, operation: Callable[[], Any]) -> None:
        # Runs in the worker thread; the only writer of _outcome and _state.
        self._state = WorkerState.BLOCKED
        try:
            gate.wait()
            self._state = WorkerState.RUNNING
            operation()
        except BaseException as e:
            self._outcome.exception = e
            self._outcome.traceback = traceback.format_exc()
            self._state = WorkerState.FAILED
            logger.debug("harness.worker_failed", worker=self.index, error_type=type(e).__name__)
        else:
            self._state = WorkerState.SUCCEEDED
        finally:
            self._done.set()


def run_in_other_thread(gate: StartGate, operation: Callable[[], Any], *, index: int = 0) -> WorkerFuture:
    """Start a thread that runs operation once the gate opens.

    The thread runs in a copy of the caller's contextvars context, so
    settings installed with use_settings() and structlog context apply.

    Args:
        gate: Start gate controlling when the operation begins
        operation: Zero-argument callable to run in the thread
        index: Submission position, used in the thread name and diagnostics

    Returns:
        WorkerFuture for the worker's outcome
    """
    if not isinstance(gate, StartGate):
        raise ContractUsageError("gate must be a StartGate")
    require_callable("operation", operation)
    future = WorkerFuture(index)
    context = contextvars.copy_context()
    thread = threading.Thread(
        target=context.run,
        args=(future._run, gate, operation),
        name=f"contractcheck-worker-{index}",
        daemon=False,
    )
    thread.start()
    return future


def get(future: WorkerFuture) -> None:
    """Wait for one worker and re-raise whatever its operation raised.

    Raises:
        Exception: Re-raised unchanged, including InvariantViolation and
            AssertionError from the worker's checks
        MemoryError, SystemExit: Re-raised unchanged
        WorkerFailedError: Wrapping any other captured BaseException
        CollectionInterruptedError: If the calling thread is interrupted
            while waiting; test threads should not be interrupted
    """
    if not isinstance(future, WorkerFuture):
        raise ContractUsageError("future must be a WorkerFuture")
    try:
        outcome = future.wait()
    except KeyboardInterrupt as e:
        raise CollectionInterruptedError("Test threads should not be interrupted") from e
    exception = outcome.exception
    if exception is None:
        return
    if isinstance(exception, Exception) or is_unrecoverable(exception):
        raise exception
    raise WorkerFailedError(f"Worker {outcome.index} raised {describe_exception(exception)}") from exception


def get_all(futures: Iterable[WorkerFuture], heading: str | None = None) -> None:
    """Wait for every worker, in submission order, and merge failures.

    Collection never stops at the first failed worker. A single failure
    is re-raised as get() would; several are merged into one
    MultipleFailuresError whose primary is the earliest-submitted failure.
    Unrecoverable signals and collection interrupts propagate at once.
    """
    failures: list[Exception] = []
    collected = 0
    for future in futures:
        try:
            get(future)
        except CollectionInterruptedError:
            raise
        except Exception as e:
            if is_unrecoverable(e):
                raise
            failures.append(e)
        collected += 1
    logger.debug("harness.collected", workers=collected, failed=len(failures))
    if len(failures) == 1:
        raise failures[0]
    if failures:
        raise MultipleFailuresError(heading, failures)


def run_all_concurrently(operations: Sequence[Callable[[], Any]], heading: str | None = None) -> None:
    """Run each operation in its own thread, released together.

    Raises whatever get_all() raises for the collected outcomes.
    """
    if not operations:
        raise ContractUsageError("run_all_concurrently() requires at least one operation")
    for operation in operations:
        require_callable("operation", operation)
    gate = StartGate()
    futures: list[WorkerFuture] = []
    try:
        for i, operation in enumerate(operations):
            futures.append(run_in_other_thread(gate, operation, index=i))
    finally:
        # Workers already started must not block on the gate forever.
        logger.debug("harness.released", workers=len(futures))
        gate.count_down()
    get_all(futures, heading=heading)


def run_concurrently(operation: Callable[[], Any], workers: int, heading: str | None = None) -> None:
    """Run the same operation in `workers` threads, released together.

    Example:
        counter = AtomicCounter()
        run_concurrently(lambda: assert_object_invariants(counter.increment()), workers=8)
    """
    if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
        raise ContractUsageError(f"workers must be a positive integer, got {workers!r}")
    require_callable("operation", operation)
    run_all_concurrently([operation] * workers, heading=heading)
