"""Evaluation of trigger conditions against an event payload.

Conditions map a payload key (dotted paths reach nested objects) to either
an expected value or an operator object::

    {"status": "overdue", "amount": {"$gt": 1000}, "priority": {"$in": ["high", "urgent"]}}

All entries must hold for the trigger to fire.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

_ABSENT = object()

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "$gt": lambda actual, expected: actual is not _ABSENT and actual is not None and actual > expected,
    "$gte": lambda actual, expected: actual is not _ABSENT and actual is not None and actual >= expected,
    "$lt": lambda actual, expected: actual is not _ABSENT and actual is not None and actual < expected,
    "$lte": lambda actual, expected: actual is not _ABSENT and actual is not None and actual <= expected,
    "$in": lambda actual, expected: actual is not _ABSENT and actual in expected,
    "$ne": lambda actual, expected: actual is _ABSENT or actual != expected,
    "$exists": lambda actual, expected: (actual is not _ABSENT) == bool(expected),
}


class ConditionError(ValueError):
    """Raised when a condition expression is malformed."""


def conditions_match(conditions: Mapping[str, Any] | None, payload: Mapping[str, Any]) -> bool:
    if not conditions:
        return True
    if not isinstance(conditions, Mapping):
        raise ConditionError("Trigger conditions must be an object")

    for key, condition in conditions.items():
        actual = _resolve(payload, key)
        if isinstance(condition, Mapping) and any(str(op).startswith("$") for op in condition):
            for operator, expected in condition.items():
                check = _OPERATORS.get(operator)
                if check is None:
                    raise ConditionError(f"Unsupported condition operator {operator!r}")
                if operator == "$in" and not isinstance(expected, (list, tuple, set)):
                    raise ConditionError("$in expects a list of values")
                try:
                    if not check(actual, expected):
                        return False
                except TypeError as exc:
                    raise ConditionError(f"Cannot compare {key!r}: {exc}") from exc
        elif actual is _ABSENT or actual != condition:
            return False
    return True


def _resolve(payload: Mapping[str, Any], key: str) -> Any:
    if key in payload:
        return payload[key]
    current: Any = payload
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _ABSENT
        current = current[part]
    return current


__all__ = ["ConditionError", "conditions_match"]
