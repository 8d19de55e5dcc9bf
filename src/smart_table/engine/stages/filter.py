"""Filter stage factory.

Criteria map a field path to an ordered list of clauses. Every clause of a
path must hold, and every path must hold, for a record to be kept.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from smart_table.contracts.enums import FilterOperator, FilterType
from smart_table.contracts.errors import UnknownOperatorError
from smart_table.contracts.state import FilterClause
from smart_table.core.functional import compose, every, negate
from smart_table.core.pointer import pointer

Predicate = Callable[[Any], bool]
Stage = Callable[[list[Any]], list[Any]]


def _to_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_datetime(value: Any) -> datetime | float:
    """Coerce to a naive UTC datetime, or NaN when ``value`` is not a moment.

    NaN compares false against everything, so missing or malformed dates
    fail relational clauses instead of raising.
    """
    try:
        if isinstance(value, datetime):
            moment = value
        elif isinstance(value, date):
            moment = datetime(value.year, value.month, value.day)
        elif isinstance(value, int | float) and not isinstance(value, bool):
            # epoch milliseconds
            moment = datetime.fromtimestamp(value / 1000, tz=UTC)
        else:
            moment = datetime.fromisoformat(str(value))
    except (TypeError, ValueError, OverflowError, OSError):
        return math.nan
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def _to_lower_string(value: Any) -> str:
    return str(value).lower()


def _identity(value: Any) -> Any:
    return value


def type_expression(type_: str | None) -> Callable[[Any], Any]:
    """Coercion applied to both the clause value and the field value."""
    match type_:
        case FilterType.BOOLEAN:
            return bool
        case FilterType.NUMBER:
            return _to_number
        case FilterType.DATE:
            return _to_datetime
        case FilterType.STRING:
            return _to_lower_string
        case _:
            return _identity


def _same_value(value: Any) -> Predicate:
    # Stricter than ==: NaN is itself, True is not 1
    def test(item: Any) -> bool:
        if isinstance(value, float) and isinstance(item, float) and math.isnan(value) and math.isnan(item):
            return True
        if isinstance(item, bool) != isinstance(value, bool):
            return False
        return bool(item == value)

    return test


def _false_on_type_error(test: Predicate) -> Predicate:
    # Missing fields and mixed types are ordinary data: they just don't match
    def guarded(item: Any) -> bool:
        try:
            return bool(test(item))
        except TypeError:
            return False

    return guarded


def _lower_than(value: Any) -> Predicate:
    return _false_on_type_error(lambda item: item < value)


def _greater_than(value: Any) -> Predicate:
    return _false_on_type_error(lambda item: item > value)


def _equals(value: Any) -> Predicate:
    return lambda item: item == value


def _includes(value: Any) -> Predicate:
    return _false_on_type_error(lambda item: value in item)


def _any_of(value: Any) -> Predicate:
    return _false_on_type_error(lambda item: item in value)


OPERATORS: dict[FilterOperator, Callable[[Any], Predicate]] = {
    FilterOperator.INCLUDES: _includes,
    FilterOperator.IS: _same_value,
    FilterOperator.IS_NOT: compose(_same_value, negate),
    FilterOperator.LOWER_THAN: _lower_than,
    FilterOperator.GREATER_THAN_OR_EQUAL: compose(_lower_than, negate),
    FilterOperator.GREATER_THAN: _greater_than,
    FilterOperator.LOWER_THAN_OR_EQUAL: compose(_greater_than, negate),
    FilterOperator.EQUALS: _equals,
    FilterOperator.NOT_EQUALS: compose(_equals, negate),
    FilterOperator.ANY_OF: _any_of,
}


def predicate(clause: Mapping[str, Any]) -> Predicate:
    """Build the predicate for one clause.

    Raises:
        UnknownOperatorError: If the clause operator is not a FilterOperator
    """
    value = clause.get("value", "")
    operator = clause.get("operator", FilterOperator.INCLUDES)
    try:
        operate = OPERATORS[FilterOperator(operator)]
    except ValueError:
        raise UnknownOperatorError(operator) from None

    type_it = type_expression(clause.get("type"))
    if operator == FilterOperator.ANY_OF and isinstance(value, list | tuple | set | frozenset):
        coerced = [type_it(member) for member in value]
    else:
        coerced = type_it(value)
    return compose(type_it, operate(coerced))


def normalize_clauses(criteria: Mapping[str, Any]) -> dict[str, list[FilterClause]]:
    """Keep only paths holding a clause list, and only clauses with a non-empty value.

    An empty string value means "no filter on this input", which lets widgets
    send every keystroke including the one that clears the field. Paths whose
    clauses are not a list are malformed and dropped without raising.
    """
    output: dict[str, list[FilterClause]] = {}
    for path, clauses in criteria.items():
        if not isinstance(clauses, list | tuple):
            continue
        valid = [c for c in clauses if isinstance(c, Mapping) and c.get("value", "") != ""]
        if valid:
            output[path] = valid
    return output


def filter_factory(criteria: Mapping[str, Any] | None = None) -> Stage:
    """Turn ``filter`` criteria into a stage keeping the matching records."""
    normalized = normalize_clauses(criteria or {})
    checks = [
        compose(pointer(path).get, every(predicate(clause) for clause in clauses))
        for path, clauses in normalized.items()
    ]
    keep = every(checks)
    return lambda array: [item for item in array if keep(item)]
