# tests/unit/core/test_relationships.py
"""Tests for self, pairwise and triple relationship checks."""

from __future__ import annotations

import pytest

from contractcheck.contracts.errors import ContractUsageError
from contractcheck.contracts.results import CheckOutcome
from contractcheck.core.relationships import has_relationship, pairwise, self_relationship, triple


def _same(a: object, b: object) -> CheckOutcome:
    return CheckOutcome.ok() if a is b else CheckOutcome.failed("different objects")


def _between(item: int, low: int, high: int) -> CheckOutcome:
    if low <= item <= high:
        return CheckOutcome.ok()
    return CheckOutcome.failed(f"{item} outside [{low}, {high}]")


class TestSelfRelationship:
    def test_item_is_passed_twice(self) -> None:
        seen: list[tuple[object, object]] = []

        def record(a: object, b: object) -> CheckOutcome:
            seen.append((a, b))
            return CheckOutcome.ok()

        item = object()
        self_relationship("records", record).evaluate(item)

        assert seen == [(item, item)]

    def test_predicate_outcome_is_returned(self) -> None:
        assert self_relationship("is itself", _same)(object())

    def test_requires_description(self) -> None:
        with pytest.raises(ContractUsageError):
            self_relationship("", _same)


class TestPairwise:
    def test_binds_operand(self) -> None:
        other = object()

        check = pairwise("is the same object", other, _same)

        assert check(other)
        assert check.evaluate(object()).mismatch == "different objects"

    def test_none_operand_is_usage_error(self) -> None:
        with pytest.raises(ContractUsageError, match="other must not be None"):
            pairwise("is the same object", None, _same)

    def test_requires_callable_predicate(self) -> None:
        with pytest.raises(ContractUsageError):
            pairwise("d", 1, None)  # type: ignore[arg-type]


class TestTriple:
    def test_binds_both_operands(self) -> None:
        check = triple("is between", 1, 10, _between)

        assert check(5)
        assert check.evaluate(11).mismatch == "11 outside [1, 10]"

    @pytest.mark.parametrize(("other1", "other2"), [(None, 1), (1, None)])
    def test_none_operand_is_usage_error(self, other1: object, other2: object) -> None:
        with pytest.raises(ContractUsageError):
            triple("is between", other1, other2, _between)


class TestHasRelationship:
    def test_boolean_predicate(self) -> None:
        check = has_relationship("is less than", 10, lambda a, b: a < b)

        assert check(3)
        assert check.evaluate(30).mismatch == "not satisfied by 30 and 10"

    def test_raising_predicate_is_a_failure(self) -> None:
        check = has_relationship("is less than", 10, lambda a, b: a < b)

        outcome = check.evaluate("text")

        assert not outcome.passed
        assert isinstance(outcome.cause, TypeError)
