"""Input validation for expense add/edit actions"""

from decimal import Decimal, InvalidOperation
from typing import Any, Tuple
from expense_tracker.domain.exceptions import InvalidInputError


def _clean_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field_name} is required")
    return value.strip()


def parse_cost(value: Any) -> Decimal:
    """
    Parse a cost into a positive finite Decimal.

    Accepts Decimal, int, float or a numeric string (surrounding whitespace
    ignored). Booleans, None, NaN/Infinity, zero and negatives are rejected.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError("cost is required")

    if isinstance(value, Decimal):
        cost = value
    elif isinstance(value, (int, float)):
        # str() keeps 50.75 as Decimal("50.75") instead of its binary expansion
        cost = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            raise InvalidInputError("cost is required")
        try:
            cost = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidInputError(f"cost must be a number, got {value!r}") from e
    else:
        raise InvalidInputError(f"cost must be a number, got {type(value).__name__}")

    if not cost.is_finite():
        raise InvalidInputError("cost must be a finite number")
    if cost <= 0:
        raise InvalidInputError("cost must be greater than zero")

    return cost


def validate_expense_input(person: Any, item: Any, cost: Any) -> Tuple[str, str, Decimal]:
    """Return (person, item, cost) trimmed and parsed, or raise InvalidInputError"""
    return _clean_text(person, "person"), _clean_text(item, "item"), parse_cost(cost)
