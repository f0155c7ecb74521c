"""Core infrastructure: guarded access, checks, configuration, logging."""

from contractcheck.core.checks import (
    Check,
    all_of,
    assert_that,
    described_as,
    feature,
    features_have_relationship,
    method_does_not_throw,
    method_throws,
    satisfies,
)
from contractcheck.core.logging import configure_logging, get_logger
from contractcheck.core.relationships import has_relationship, pairwise, self_relationship, triple
from contractcheck.core.safe import identity_string, is_unrecoverable, safe_call, safe_repr

__all__ = [
    "Check",
    "all_of",
    "assert_that",
    "configure_logging",
    "described_as",
    "feature",
    "features_have_relationship",
    "get_logger",
    "has_relationship",
    "identity_string",
    "is_unrecoverable",
    "method_does_not_throw",
    "method_throws",
    "pairwise",
    "safe_call",
    "safe_repr",
    "satisfies",
    "self_relationship",
    "triple",
]
