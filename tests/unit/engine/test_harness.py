# tests/unit/engine/test_harness.py
"""Tests for the concurrency harness."""

from __future__ import annotations

import threading
from collections.abc import Callable
from unittest.mock import patch

import pytest

from contractcheck.contracts.enums import WorkerState
from contractcheck.contracts.errors import (
    CollectionInterruptedError,
    ContractUsageError,
    InvariantViolation,
    MultipleFailuresError,
    WorkerFailedError,
)
from contractcheck.core.config import ContractCheckSettings, active_settings, use_settings
from contractcheck.engine.harness import (
    StartGate,
    WorkerFuture,
    get,
    get_all,
    run_all_concurrently,
    run_concurrently,
    run_in_other_thread,
)
from contractcheck.verifiers.identity import assert_object_invariants
from tests.fixtures.sample_types import Money

pytestmark = pytest.mark.concurrency


class _CustomSignal(BaseException):
    """A BaseException that is neither an Exception nor unrecoverable."""


def _raiser(exc: BaseException) -> Callable[[], None]:
    def operation() -> None:
        raise exc

    return operation


def _noop() -> None:
    pass


class TestStartGate:
    def test_starts_closed(self) -> None:
        gate = StartGate()

        assert gate.count == 1
        assert not gate.is_open

    def test_count_down_opens(self) -> None:
        gate = StartGate(count=2)

        gate.count_down()
        assert not gate.is_open
        gate.count_down()

        assert gate.is_open

    def test_count_down_past_zero_is_noop(self) -> None:
        gate = StartGate()
        gate.count_down()
        gate.count_down()

        assert gate.count == 0

    def test_wait_returns_once_open(self) -> None:
        gate = StartGate()
        gate.count_down()

        gate.wait()

    @pytest.mark.parametrize("count", [0, -1, True, 1.5])
    def test_rejects_invalid_count(self, count: object) -> None:
        with pytest.raises(ContractUsageError):
            StartGate(count=count)  # type: ignore[arg-type]

    def test_releases_waiting_threads(self) -> None:
        gate = StartGate()
        released = threading.Event()

        def waiter() -> None:
            gate.wait()
            released.set()

        thread = threading.Thread(target=waiter)
        thread.start()
        assert not released.wait(timeout=0.05)

        gate.count_down()
        thread.join(timeout=5)

        assert released.is_set()


class TestRunInOtherThread:
    def test_worker_waits_for_gate(self) -> None:
        gate = StartGate()
        started = threading.Event()

        future = run_in_other_thread(gate, started.set)

        assert not started.wait(timeout=0.05)
        assert not future.done()
        gate.count_down()
        future.wait()
        assert started.is_set()
        assert future.state is WorkerState.SUCCEEDED

    def test_failed_state_and_traceback(self) -> None:
        gate = StartGate()
        gate.count_down()

        future = run_in_other_thread(gate, _raiser(RuntimeError("boom")), index=4)
        outcome = future.wait()

        assert future.state is WorkerState.FAILED
        assert future.index == 4
        assert outcome.index == 4
        assert isinstance(outcome.exception, RuntimeError)
        assert outcome.traceback is not None
        assert "RuntimeError: boom" in outcome.traceback

    def test_thread_name(self) -> None:
        gate = StartGate()
        gate.count_down()
        names: list[str] = []

        run_in_other_thread(gate, lambda: names.append(threading.current_thread().name), index=2).wait()

        assert names == ["contractcheck-worker-2"]

    def test_settings_propagate_into_worker(self) -> None:
        gate = StartGate()
        gate.count_down()
        configured = ContractCheckSettings(ordering={"consistent_with_equals": True})
        seen: list[ContractCheckSettings] = []

        with use_settings(configured):
            future = run_in_other_thread(gate, lambda: seen.append(active_settings()))
        future.wait()

        assert seen == [configured]
        assert seen[0] is configured

    def test_rejects_non_gate(self) -> None:
        with pytest.raises(ContractUsageError):
            run_in_other_thread(object(), _noop)  # type: ignore[arg-type]

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(ContractUsageError):
            run_in_other_thread(StartGate(), "not callable")  # type: ignore[arg-type]


class TestGet:
    def _finished(self, operation: Callable[[], None]) -> WorkerFuture:
        gate = StartGate()
        gate.count_down()
        future = run_in_other_thread(gate, operation)
        future.wait()
        return future

    def test_success_returns_none(self) -> None:
        assert get(self._finished(_noop)) is None

    def test_exception_reraised_unchanged(self) -> None:
        failure = InvariantViolation("broken")

        with pytest.raises(InvariantViolation) as exc_info:
            get(self._finished(_raiser(failure)))

        assert exc_info.value is failure

    def test_system_exit_reraised_unchanged(self) -> None:
        with pytest.raises(SystemExit):
            get(self._finished(_raiser(SystemExit(3))))

    def test_memory_error_reraised_unchanged(self) -> None:
        with pytest.raises(MemoryError):
            get(self._finished(_raiser(MemoryError())))

    @pytest.mark.parametrize("signal", [KeyboardInterrupt(), _CustomSignal()])
    def test_other_base_exceptions_are_wrapped(self, signal: BaseException) -> None:
        with pytest.raises(WorkerFailedError) as exc_info:
            get(self._finished(_raiser(signal)))

        assert exc_info.value.__cause__ is signal

    def test_interrupted_collection(self) -> None:
        future = self._finished(_noop)

        with patch.object(WorkerFuture, "wait", side_effect=KeyboardInterrupt), pytest.raises(CollectionInterruptedError) as exc_info:
            get(future)

        assert isinstance(exc_info.value.__cause__, KeyboardInterrupt)

    def test_rejects_non_future(self) -> None:
        with pytest.raises(ContractUsageError):
            get(object())  # type: ignore[arg-type]


class TestGetAll:
    def _start(self, operations: list[Callable[[], None]]) -> list[WorkerFuture]:
        gate = StartGate()
        futures = [run_in_other_thread(gate, operation, index=i) for i, operation in enumerate(operations)]
        gate.count_down()
        return futures

    def test_no_futures(self) -> None:
        get_all([])

    def test_single_failure_reraised_unchanged(self) -> None:
        failure = InvariantViolation("only")

        with pytest.raises(InvariantViolation) as exc_info:
            get_all(self._start([_noop, _raiser(failure), _noop]))

        assert exc_info.value is failure

    def test_failures_merged_in_submission_order(self) -> None:
        failures = [InvariantViolation(f"worker {i}") for i in range(5)]

        with pytest.raises(MultipleFailuresError) as exc_info:
            get_all(self._start([_raiser(failure) for failure in failures]), heading="counter")

        assert list(exc_info.value.failures) == failures
        assert exc_info.value.primary is failures[0]
        assert exc_info.value.heading == "counter"

    def test_collects_every_worker_despite_failures(self) -> None:
        completed: list[int] = []
        lock = threading.Lock()

        def record(n: int) -> Callable[[], None]:
            def run() -> None:
                with lock:
                    completed.append(n)
                if n % 2 == 0:
                    raise InvariantViolation(str(n))

            return run

        futures = self._start([record(n) for n in range(6)])

        with pytest.raises(MultipleFailuresError) as exc_info:
            get_all(futures)

        assert len(exc_info.value.failures) == 3
        assert sorted(completed) == list(range(6))
        assert all(future.done() for future in futures)

    def test_unrecoverable_propagates_immediately(self) -> None:
        with pytest.raises(MemoryError):
            get_all(self._start([_raiser(InvariantViolation("x")), _raiser(MemoryError())]))

    def test_wrapped_worker_failure_is_aggregated(self) -> None:
        with pytest.raises(MultipleFailuresError) as exc_info:
            get_all(self._start([_raiser(KeyboardInterrupt()), _raiser(InvariantViolation("x"))]))

        assert isinstance(exc_info.value.failures[0], WorkerFailedError)


class TestRunConcurrently:
    def test_trivially_true(self) -> None:
        run_concurrently(_noop, workers=4)

    def test_every_worker_runs(self) -> None:
        counter = [0]
        lock = threading.Lock()

        def increment() -> None:
            with lock:
                counter[0] += 1

        run_concurrently(increment, workers=8)

        assert counter[0] == 8

    def test_checks_under_contention(self) -> None:
        run_concurrently(lambda: assert_object_invariants(Money(1)), workers=4)

    def test_single_failing_worker_propagates_unchanged(self) -> None:
        failure = InvariantViolation("only worker 0")
        claimed = threading.Lock()

        def fail_once() -> None:
            if claimed.acquire(blocking=False):
                raise failure

        with pytest.raises(InvariantViolation) as exc_info:
            run_concurrently(fail_once, workers=4)

        assert exc_info.value is failure

    def test_all_workers_failing(self) -> None:
        with pytest.raises(MultipleFailuresError) as exc_info:
            run_concurrently(_raiser(InvariantViolation("x")), workers=3, heading="shared failure")

        assert len(exc_info.value.failures) == 3

    @pytest.mark.parametrize("workers", [0, -2, True, 2.0])
    def test_rejects_invalid_worker_count(self, workers: object) -> None:
        with pytest.raises(ContractUsageError):
            run_concurrently(_noop, workers=workers)  # type: ignore[arg-type]


class TestRunAllConcurrently:
    def test_distinct_operations(self) -> None:
        seen: list[str] = []
        lock = threading.Lock()

        def tag(name: str) -> Callable[[], None]:
            def run() -> None:
                with lock:
                    seen.append(name)

            return run

        run_all_concurrently([tag("reader"), tag("writer")])

        assert sorted(seen) == ["reader", "writer"]

    def test_requires_operations(self) -> None:
        with pytest.raises(ContractUsageError):
            run_all_concurrently([])

    def test_operations_validated_before_any_thread_starts(self) -> None:
        started: list[int] = []

        with pytest.raises(ContractUsageError):
            run_all_concurrently([lambda: started.append(1), "not callable"])  # type: ignore[list-item]

        assert started == []

    def test_failed_thread_start_still_releases_started_workers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        real_start = threading.Thread.start
        starts: list[str] = []

        def start_then_fail(thread: threading.Thread) -> None:
            starts.append(thread.name)
            if len(starts) == 2:
                raise RuntimeError("can't start new thread")
            real_start(thread)

        monkeypatch.setattr(threading.Thread, "start", start_then_fail)
        ran = threading.Event()

        with pytest.raises(RuntimeError, match="can't start new thread"):
            run_all_concurrently([ran.set, _noop])
        monkeypatch.undo()

        assert ran.wait(timeout=5)
        assert starts == ["contractcheck-worker-0", "contractcheck-worker-1"]
