"""
Field matching for six-field cron expressions.

Each field is interpreted lazily, at match time, by inspecting its syntax in a
fixed order: wildcard, list, range, step, literal. Only the first variant that
applies is attempted. Tokens that are not base-10 integers never match.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Tuple

FIELD_NAMES: Tuple[str, ...] = ("second", "minute", "hour", "day", "month", "weekday")

_INTEGER = re.compile(r"[+-]?[0-9]+")


class FieldKind(str, Enum):
    WILDCARD = "wildcard"
    LIST = "list"
    RANGE = "range"
    STEP = "step"
    LITERAL = "literal"


def field_kind(field: str) -> FieldKind:
    """
    Classify a field by syntax inspection, in matching priority order.
    """
    if field == "*":
        return FieldKind.WILDCARD
    if "," in field:
        return FieldKind.LIST
    if "-" in field:
        return FieldKind.RANGE
    if "/" in field:
        return FieldKind.STEP
    return FieldKind.LITERAL


def parse_int(token: str) -> Optional[int]:
    """Parse an ASCII base-10 integer, returning None for anything else."""
    if _INTEGER.fullmatch(token) is None:
        return None
    return int(token)


def match_field(field: str, value: int) -> bool:
    """
    Decide whether a single field matches a concrete time component.

    Args:
        field (str): The raw field sub-expression, e.g. "*", "1,2", "9-17", "*/5", "30".
        value (int): The time component to test.

    Returns:
        bool: True if the field matches the value.
    """
    kind = field_kind(field)

    if kind is FieldKind.WILDCARD:
        return True

    if kind is FieldKind.LIST:
        return any(parse_int(item) == value for item in field.split(","))

    if kind is FieldKind.RANGE:
        parts = field.split("-")
        start, end = parse_int(parts[0]), parse_int(parts[1])
        if start is None or end is None:
            return False
        return start <= value <= end

    if kind is FieldKind.STEP:
        # The base before "/" is ignored: "10/5" matches like "*/5".
        step = parse_int(field.split("/")[1])
        if not step:
            return False
        return value % step == 0

    return parse_int(field) == value


def is_valid_field(field: str) -> bool:
    """
    Check whether the matcher can interpret a field at all. Used by strict parsing.
    """
    kind = field_kind(field)

    if kind is FieldKind.WILDCARD:
        return True
    if kind is FieldKind.LIST:
        return all(parse_int(item) is not None for item in field.split(","))
    if kind is FieldKind.RANGE:
        parts = field.split("-")
        return len(parts) == 2 and all(parse_int(part) is not None for part in parts)
    if kind is FieldKind.STEP:
        parts = field.split("/")
        if len(parts) != 2:
            return False
        base, step = parts
        if base != "*" and parse_int(base) is None:
            return False
        step_value = parse_int(step)
        return step_value is not None and step_value > 0
    return parse_int(field) is not None


def time_components(when: datetime) -> Tuple[int, int, int, int, int, int]:
    """
    Break a datetime into (second, minute, hour, day of month, month 1-12, weekday 0=Sunday).
    """
    return (
        when.second,
        when.minute,
        when.hour,
        when.day,
        when.month,
        when.isoweekday() % 7,
    )


def should_run(fields: Sequence[str], when: datetime) -> bool:
    """
    A time instant is due iff all six fields match their time component.
    """
    return all(
        match_field(field, value)
        for field, value in zip(fields, time_components(when))
    )
