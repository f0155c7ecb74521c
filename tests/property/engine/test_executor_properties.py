# tests/property/engine/test_executor_properties.py
"""Property-based tests for failure aggregation.

For any mix of passing and failing operations, every operation is
attempted and exactly the failing ones are reported, in order.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest
from hypothesis import given
from hypothesis import strategies as st

from contractcheck.contracts.errors import InvariantViolation, MultipleFailuresError
from contractcheck.engine.executor import assert_all
from contractcheck.engine.harness import run_all_concurrently
from tests.property.settings import STANDARD_SETTINGS, THREADED_SETTINGS


def _operation(index: int, fails: bool, attempted: list[int], lock: threading.Lock) -> Callable[[], None]:
    def run() -> None:
        with lock:
            attempted.append(index)
        if fails:
            raise InvariantViolation(f"operation {index}")

    return run


class TestAssertAllProperties:
    @given(outcomes=st.lists(st.booleans(), max_size=30))
    @STANDARD_SETTINGS
    def test_reports_exactly_the_failures(self, outcomes: list[bool]) -> None:
        attempted: list[int] = []
        lock = threading.Lock()
        operations = [_operation(i, fails, attempted, lock) for i, fails in enumerate(outcomes)]
        expected = [f"operation {i}" for i, fails in enumerate(outcomes) if fails]

        if expected:
            with pytest.raises(MultipleFailuresError) as exc_info:
                assert_all(operations)
            assert [str(failure) for failure in exc_info.value.failures] == expected
        else:
            assert_all(operations)

        assert attempted == list(range(len(outcomes)))


@pytest.mark.concurrency
class TestHarnessProperties:
    @given(outcomes=st.lists(st.booleans(), min_size=1, max_size=8))
    @THREADED_SETTINGS
    def test_collects_every_worker_in_submission_order(self, outcomes: list[bool]) -> None:
        attempted: list[int] = []
        lock = threading.Lock()
        operations = [_operation(i, fails, attempted, lock) for i, fails in enumerate(outcomes)]
        expected = [f"operation {i}" for i, fails in enumerate(outcomes) if fails]

        if len(expected) > 1:
            with pytest.raises(MultipleFailuresError) as exc_info:
                run_all_concurrently(operations)
            assert [str(failure) for failure in exc_info.value.failures] == expected
        elif expected:
            with pytest.raises(InvariantViolation) as single:
                run_all_concurrently(operations)
            assert str(single.value) == expected[0]
        else:
            run_all_concurrently(operations)

        assert sorted(attempted) == list(range(len(outcomes)))
