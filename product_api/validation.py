# product_api/validation.py

"""
Declarative request validation.

A validation chain is an ordered list of Rule tuples. Each rule names where
the value lives ("params" for path parameters, "body" for the JSON body),
the field, a predicate over the raw value and the message reported when the
predicate fails. Missing values reach the predicate as None.

validate_request() turns chains into a FastAPI dependency that is installed
ahead of the handler: if any rule fails the request is answered with 400 and
the handler (and the database session) is never touched.
"""

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, NamedTuple

from fastapi import Request

from .errors import InputValidationError

logger = logging.getLogger(__name__)

MAX_ID = 2**31 - 1

# Bounds of the NUMERIC(10, 2) price column
MIN_PRICE = 0.01
MAX_PRICE = 99999999.99


class Rule(NamedTuple):
    location: str
    field: str
    check: Callable[[Any], bool]
    message: str


# --- Predicates ---


def is_positive_int(value: Any) -> bool:
    """Positive integers that fit an INTEGER primary key column."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()) or len(value) > len(str(MAX_ID)):
            return False
        value = int(value)
    return isinstance(value, int) and 0 < value <= MAX_ID


def not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def is_text(value: Any) -> bool:
    return isinstance(value, str)


def max_length(limit: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return not isinstance(value, str) or len(value) <= limit

    return check


def is_numeric(value: Any) -> bool:
    """Numbers and numeric strings ("12.5"), excluding booleans, NaN and infinities."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        try:
            return math.isfinite(float(value))
        except OverflowError:
            return False
    if isinstance(value, str):
        if value != value.strip() or "_" in value:
            return False
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def greater_than_zero(value: Any) -> bool:
    return is_numeric(value) and float(value) > 0


def within_price_range(value: Any) -> bool:
    """Prices as stored by a NUMERIC(10, 2) column. Non-positive values are left to greater_than_zero."""
    if not greater_than_zero(value):
        return True
    return MIN_PRICE <= round(float(value), 2) <= MAX_PRICE


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if type(value) is int:
        return value in (0, 1)
    if isinstance(value, str):
        return value.lower() in ("true", "false", "0", "1")
    return False


# --- Chains ---

ID_RULES = [
    Rule("params", "product_id", is_positive_int, "Invalid ID"),
]

NAME_RULES = [
    Rule("body", "name", is_text, "Product name must be text"),
    Rule("body", "name", not_empty, "Product name must not be empty"),
    Rule("body", "name", max_length(255), "Product name must be at most 255 characters"),
]

PRICE_RULES = [
    Rule("body", "price", is_numeric, "Product price must be numeric"),
    Rule("body", "price", not_empty, "Product price must not be empty"),
    Rule("body", "price", greater_than_zero, "Invalid price"),
    Rule(
        "body",
        "price",
        within_price_range,
        f"Product price must be between {MIN_PRICE} and {MAX_PRICE}",
    ),
]

AVAILABILITY_RULES = [
    Rule("body", "availability", is_boolean, "Invalid value for availability"),
]


def run_rules(rules: Iterable[Rule], sources: Dict[str, Dict[str, Any]]) -> List[Dict[str, str]]:
    """Evaluate every rule in order and return the failures, in the same order."""
    errors = []
    for rule in rules:
        value = sources.get(rule.location, {}).get(rule.field)
        if not rule.check(value):
            errors.append({"location": rule.location, "field": rule.field, "msg": rule.message})
    return errors


async def _read_json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def validate_request(*chains: List[Rule]):
    """Build a dependency that enforces the given chains before the handler runs."""
    rules = [rule for chain in chains for rule in chain]
    needs_body = any(rule.location == "body" for rule in rules)

    async def dependency(request: Request) -> None:
        sources = {"params": dict(request.path_params), "body": {}}
        if needs_body:
            sources["body"] = await _read_json_body(request)
        errors = run_rules(rules, sources)
        if errors:
            logger.warning(
                f"Product API: Rejected {request.method} {request.url.path}: "
                f"{[error['msg'] for error in errors]}"
            )
            raise InputValidationError(errors)

    return dependency
