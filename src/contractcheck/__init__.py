"""
contractcheck: contract verification for Python objects.

Composable checks that an object honours the invariants promised by
__eq__, __hash__ and its ordering operators, plus entity and value
semantics, and a harness for running such checks under thread
contention. A misbehaving object produces a readable failure rather
than a crash; independent failures are reported together.

Import patterns:
    from contractcheck import assert_object_invariants, assert_ordering_invariants_with
    from contractcheck import assert_that, all_of, satisfies_object_invariants
    from contractcheck import run_concurrently
    from contractcheck import configure_logging, load_settings
"""

from contractcheck.contracts import (
    CheckOutcome,
    CollectionInterruptedError,
    ContractUsageError,
    InvariantViolation,
    MultipleFailuresError,
    WorkerFailedError,
    WorkerState,
)
from contractcheck.core import (
    Check,
    all_of,
    assert_that,
    described_as,
    feature,
    features_have_relationship,
    has_relationship,
    method_does_not_throw,
    method_throws,
    pairwise,
    safe_repr,
    satisfies,
    self_relationship,
    triple,
)
from contractcheck.core.config import ContractCheckSettings, LoggingSettings, active_settings, load_settings, use_settings
from contractcheck.core.logging import configure_logging
from contractcheck.engine import (
    StartGate,
    WorkerFuture,
    assert_all,
    get,
    get_all,
    run_all_concurrently,
    run_concurrently,
    run_in_other_thread,
)
from contractcheck.verifiers import (
    assert_all_value_semantics,
    assert_entity_semantics,
    assert_for_all_elements,
    assert_object_invariants,
    assert_object_invariants_with,
    assert_ordering_consistent_with_equals,
    assert_ordering_invariants,
    assert_ordering_invariants_with,
    assert_ordering_transitive,
    assert_value_semantics,
    has_entity_semantics_with,
    has_value_semantics_with,
    natural_compare,
    natural_ordering_is_consistent_with_equals_with,
    satisfies_object_invariants,
    satisfies_object_invariants_with,
    satisfies_ordering_invariants,
    satisfies_ordering_invariants_with,
    satisfies_ordering_transitivity_with,
)

__version__ = "0.1.0"

__all__ = [
    "Check",
    "CheckOutcome",
    "CollectionInterruptedError",
    "ContractCheckSettings",
    "ContractUsageError",
    "InvariantViolation",
    "LoggingSettings",
    "MultipleFailuresError",
    "StartGate",
    "WorkerFailedError",
    "WorkerFuture",
    "WorkerState",
    "active_settings",
    "all_of",
    "assert_all",
    "assert_all_value_semantics",
    "assert_entity_semantics",
    "assert_for_all_elements",
    "assert_object_invariants",
    "assert_object_invariants_with",
    "assert_ordering_consistent_with_equals",
    "assert_ordering_invariants",
    "assert_ordering_invariants_with",
    "assert_ordering_transitive",
    "assert_that",
    "assert_value_semantics",
    "configure_logging",
    "described_as",
    "feature",
    "features_have_relationship",
    "get",
    "get_all",
    "has_entity_semantics_with",
    "has_relationship",
    "has_value_semantics_with",
    "load_settings",
    "method_does_not_throw",
    "method_throws",
    "natural_compare",
    "natural_ordering_is_consistent_with_equals_with",
    "pairwise",
    "run_all_concurrently",
    "run_concurrently",
    "run_in_other_thread",
    "safe_repr",
    "satisfies",
    "satisfies_object_invariants",
    "satisfies_object_invariants_with",
    "satisfies_ordering_invariants",
    "satisfies_ordering_invariants_with",
    "satisfies_ordering_transitivity_with",
    "self_relationship",
    "triple",
    "use_settings",
]
