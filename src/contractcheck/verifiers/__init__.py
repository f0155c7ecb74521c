"""Contract checkers: identity, ordering, equivalence semantics, collections.

Every checker is offered in two equivalent forms:
- a Check factory (satisfies_* / has_*), composable with all_of() etc.
- an assert_* function raising InvariantViolation on failure
"""

from contractcheck.verifiers.collection import assert_for_all_elements
from contractcheck.verifiers.equivalence import (
    assert_all_value_semantics,
    assert_entity_semantics,
    assert_value_semantics,
    has_entity_semantics_with,
    has_value_semantics_with,
)
from contractcheck.verifiers.identity import (
    assert_object_invariants,
    assert_object_invariants_with,
    satisfies_object_invariants,
    satisfies_object_invariants_with,
)
from contractcheck.verifiers.ordering import (
    assert_ordering_consistent_with_equals,
    assert_ordering_invariants,
    assert_ordering_invariants_with,
    assert_ordering_transitive,
    natural_compare,
    natural_ordering_is_consistent_with_equals_with,
    satisfies_ordering_invariants,
    satisfies_ordering_invariants_with,
    satisfies_ordering_transitivity_with,
)

__all__ = [
    "assert_all_value_semantics",
    "assert_entity_semantics",
    "assert_for_all_elements",
    "assert_object_invariants",
    "assert_object_invariants_with",
    "assert_ordering_consistent_with_equals",
    "assert_ordering_invariants",
    "assert_ordering_invariants_with",
    "assert_ordering_transitive",
    "assert_value_semantics",
    "has_entity_semantics_with",
    "has_value_semantics_with",
    "natural_compare",
    "natural_ordering_is_consistent_with_equals_with",
    "satisfies_object_invariants",
    "satisfies_object_invariants_with",
    "satisfies_ordering_invariants",
    "satisfies_ordering_invariants_with",
    "satisfies_ordering_transitivity_with",
]
