"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to
core/verifiers/engine. Settings classes are NOT re-exported here -
import them from contractcheck.core.config.

Import patterns:
    from contractcheck.contracts import CheckOutcome, InvariantViolation
"""

from contractcheck.contracts.enums import WorkerState
from contractcheck.contracts.errors import (
    UNRECOVERABLE_ERRORS,
    CollectionInterruptedError,
    ContractUsageError,
    InvariantViolation,
    MultipleFailuresError,
    WorkerFailedError,
)
from contractcheck.contracts.results import CheckOutcome, Probe, WorkerOutcome

__all__ = [
    "UNRECOVERABLE_ERRORS",
    "CheckOutcome",
    "CollectionInterruptedError",
    "ContractUsageError",
    "InvariantViolation",
    "MultipleFailuresError",
    "Probe",
    "WorkerFailedError",
    "WorkerOutcome",
    "WorkerState",
]
