"""Tests for trigger condition evaluation."""

import pytest

from notifier.application.notifications import ConditionError, conditions_match


def test_empty_conditions_always_match() -> None:
    assert conditions_match(None, {}) is True
    assert conditions_match({}, {"status": "open"}) is True


def test_equality_conditions() -> None:
    assert conditions_match({"status": "overdue"}, {"status": "overdue"}) is True
    assert conditions_match({"status": "overdue"}, {"status": "open"}) is False
    assert conditions_match({"status": "overdue"}, {}) is False


@pytest.mark.parametrize(
    ("condition", "payload", "expected"),
    [
        ({"amount": {"$gt": 1000}}, {"amount": 1500}, True),
        ({"amount": {"$gt": 1000}}, {"amount": 1000}, False),
        ({"amount": {"$gte": 1000, "$lt": 2000}}, {"amount": 1000}, True),
        ({"amount": {"$lte": 10}}, {}, False),
        ({"priority": {"$in": ["high", "urgent"]}}, {"priority": "urgent"}, True),
        ({"priority": {"$ne": "low"}}, {"priority": "low"}, False),
        ({"priority": {"$ne": "low"}}, {}, True),
        ({"assignee": {"$exists": True}}, {"assignee": None}, True),
        ({"assignee": {"$exists": False}}, {}, True),
        ({"client.tier": "gold"}, {"client": {"tier": "gold"}}, True),
    ],
)
def test_operator_conditions(condition, payload, expected) -> None:
    assert conditions_match(condition, payload) is expected


def test_unknown_operator_is_rejected() -> None:
    with pytest.raises(ConditionError):
        conditions_match({"amount": {"$regex": "1.*"}}, {"amount": 1})


def test_incomparable_values_raise_condition_error() -> None:
    with pytest.raises(ConditionError):
        conditions_match({"amount": {"$gt": 10}}, {"amount": "ten"})
