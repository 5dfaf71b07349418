# auto_fix.py

import re
from typing import Callable, Dict, List, Tuple

from messages import (
    REASON_DATE_FORMAT, REASON_PHONE_FORMAT, REASON_PORT_CODE, REASON_TRIMMED, REASON_UPPERCASE_NO_SPACES
)
from schemas import AutoFixResult, SIRecord
from validation_rules import STRING_FIELDS, wire_name

# Checked in this order; the first full match wins.
DATE_PATTERNS = [
    ("month_first", re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")),
    ("year_first", re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})")),
    ("day_first", re.compile(r"([0-9]{1,2})-([0-9]{1,2})-([0-9]{4})")),
]

_WHITESPACE = re.compile(r"\s")
_NON_PHONE_CHARS = re.compile(r"[^0-9\s+()\-]")


def fix_container_number(value: str) -> str:
    return _WHITESPACE.sub("", value).upper()


def fix_booking_number(value: str) -> str:
    return _WHITESPACE.sub("", value).upper()


def fix_port_code(value: str) -> str:
    return _WHITESPACE.sub("", value).upper()[:5]


def fix_date_format(value: str) -> str:
    """Rewrites M/D/YYYY, YYYY-M-D and D-M-YYYY as YYYY-MM-DD; anything else is returned as is."""
    for layout, pattern in DATE_PATTERNS:
        match = pattern.fullmatch(value)
        if not match:
            continue
        if layout == "month_first":
            month, day, year = match.groups()
        elif layout == "year_first":
            year, month, day = match.groups()
        else:
            day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    return value


def fix_phone_number(value: str) -> str:
    return _NON_PHONE_CHARS.sub("", value).strip()


def _apply(
    values: Dict, fixes: List[AutoFixResult], field: str,
    transform: Callable[[str], str], reason: str, skip_empty: bool = True
):
    original = values.get(field)
    if not isinstance(original, str) or (skip_empty and not original):
        return
    fixed = transform(original)
    if fixed != original:
        fixes.append(AutoFixResult(
            field=wire_name(field), original_value=original, fixed_value=fixed, reason=reason
        ))
        values[field] = fixed


def fix(record: SIRecord) -> Tuple[SIRecord, List[AutoFixResult]]:
    """
    Normalizes common extraction noise and reports every change.

    Returns a new record; the input is left untouched. A field can collect
    more than one fix when several stages change it, each recorded against
    the value that entered that stage.
    """
    values = record.model_dump()
    fixes: List[AutoFixResult] = []

    _apply(values, fixes, "container_number", fix_container_number, REASON_UPPERCASE_NO_SPACES)
    _apply(values, fixes, "booking_number", fix_booking_number, REASON_UPPERCASE_NO_SPACES)

    for field in ("port_of_loading", "port_of_discharge"):
        _apply(values, fixes, field, fix_port_code, REASON_PORT_CODE)

    for field in ("cargo_ready_date", "requested_ship_date"):
        _apply(values, fixes, field, fix_date_format, REASON_DATE_FORMAT)

    for field in STRING_FIELDS:
        _apply(values, fixes, field, str.strip, REASON_TRIMMED, skip_empty=False)

    for field in ("shipper_contact", "consignee_contact"):
        _apply(values, fixes, field, fix_phone_number, REASON_PHONE_FORMAT)

    return record.model_copy(update=values), fixes
