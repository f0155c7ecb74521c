"""Status codes used across subsystem boundaries."""

from enum import StrEnum


class WorkerState(StrEnum):
    """Lifecycle of a concurrency harness worker thread.

    CREATED → BLOCKED (waiting on the start gate) → RUNNING → SUCCEEDED | FAILED
    """

    CREATED = "created"
    BLOCKED = "blocked"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkerState.SUCCEEDED, WorkerState.FAILED)
