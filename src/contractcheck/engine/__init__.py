"""Execution engine: aggregating executor and concurrency harness."""

from contractcheck.engine.executor import assert_all, assert_checks, collect_failures
from contractcheck.engine.harness import (
    StartGate,
    WorkerFuture,
    get,
    get_all,
    run_all_concurrently,
    run_concurrently,
    run_in_other_thread,
)

__all__ = [
    "StartGate",
    "WorkerFuture",
    "assert_all",
    "assert_checks",
    "collect_failures",
    "get",
    "get_all",
    "run_all_concurrently",
    "run_concurrently",
    "run_in_other_thread",
]
