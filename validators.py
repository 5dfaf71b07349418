# validators.py

from datetime import date, datetime
from typing import Dict, List, Optional, Union

import messages
from schemas import SIRecord, Severity, ValidationIssue
from validation_rules import (
    REQUIRED_FIELDS, VALIDATION_RULES, FieldRule, format_field_name, is_empty, matches, wire_name
)


class _IssueCollector:
    """Accumulates issues in evaluation order."""

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def add(self, field: str, severity: Severity, message: str, code: str, suggestion: Optional[str] = None):
        self.issues.append(ValidationIssue(
            field=wire_name(field), severity=severity, message=message, code=code, suggestion=suggestion
        ))


def _display(field: str) -> str:
    return format_field_name(wire_name(field))


def _bound(value: float) -> str:
    return f"{value:g}"


def _example(rule: FieldRule, index: int = 0) -> str:
    return messages.EXAMPLE_SUGGESTION_TEMPLATE.format(example=rule.examples[index], hint=rule.format)


def parse_date(value: str, rule: FieldRule) -> Optional[date]:
    """Strict YYYY-MM-DD; returns None for anything else, impossible calendar dates included."""
    if not matches(rule, value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _validate_required(record: SIRecord, out: _IssueCollector):
    for field in REQUIRED_FIELDS:
        if is_empty(getattr(record, field)):
            out.add(field, "error", messages.REQUIRED_TEMPLATE.format(field=_display(field)), "REQUIRED_FIELD")


def _validate_container_number(value: Optional[str], rules: Dict[str, FieldRule], out: _IssueCollector):
    if not value:
        return
    rule = rules["containerNumber"]
    if not matches(rule, value):
        out.add("container_number", "error", messages.INVALID_CONTAINER, "INVALID_FORMAT", _example(rule))


def _validate_booking_number(value: Optional[str], rules: Dict[str, FieldRule], out: _IssueCollector):
    if not value:
        return
    rule = rules["bookingNumber"]
    if len(value) < rule.min_length or len(value) > rule.max_length:
        out.add(
            "booking_number", "error",
            messages.LENGTH_BETWEEN_TEMPLATE.format(
                field=_display("booking_number"), min_length=rule.min_length, max_length=rule.max_length
            ),
            "INVALID_LENGTH",
        )
    if not matches(rule, value):
        out.add("booking_number", "error", messages.INVALID_BOOKING_CHARACTERS, "INVALID_FORMAT")


def _validate_port_codes(loading: Optional[str], discharge: Optional[str], rules: Dict[str, FieldRule], out: _IssueCollector):
    rule = rules["port"]
    if loading and not matches(rule, loading):
        out.add("port_of_loading", "error", messages.INVALID_PORT, "INVALID_FORMAT", _example(rule, 0))
    if discharge and not matches(rule, discharge):
        out.add("port_of_discharge", "error", messages.INVALID_PORT, "INVALID_FORMAT", _example(rule, 1))
    if loading and discharge and loading == discharge:
        out.add("port_of_discharge", "warning", messages.SAME_PORTS, "SAME_PORTS", messages.SUGGEST_VERIFY)


def _validate_dates(
    cargo_ready: Optional[str], ship_date: Optional[str], today: date,
    rules: Dict[str, FieldRule], out: _IssueCollector
):
    rule = rules["date"]
    parsed = {}
    for field, value in (("cargo_ready_date", cargo_ready), ("requested_ship_date", ship_date)):
        if not value:
            continue
        parsed[field] = parse_date(value, rule)
        if parsed[field] is None:
            out.add(field, "error", messages.INVALID_DATE, "INVALID_DATE", messages.SUGGEST_DATE_FORMAT)
        elif not parsed[field] > today:
            out.add(field, "warning", messages.PAST_DATE, "PAST_DATE", messages.SUGGEST_VERIFY_DATE)

    ready, ship = parsed.get("cargo_ready_date"), parsed.get("requested_ship_date")
    if ready and ship and ship < ready:
        out.add("requested_ship_date", "error", messages.INVALID_DATE_ORDER, "INVALID_DATE_ORDER")


def _is_valid_contact(value: str, rules: Dict[str, FieldRule]) -> bool:
    return matches(rules["phone"], value) or matches(rules["email"], value)


def _validate_contacts(shipper: Optional[str], consignee: Optional[str], rules: Dict[str, FieldRule], out: _IssueCollector):
    for field, value in (("shipper_contact", shipper), ("consignee_contact", consignee)):
        if value and not _is_valid_contact(value, rules):
            out.add(field, "warning", messages.INVALID_CONTACT, "INVALID_CONTACT", messages.SUGGEST_CONTACT)


def _validate_range(field: str, value: Optional[float], rule: FieldRule, out: _IssueCollector):
    # OUT_OF_RANGE covers both bounds; severity tells them apart.
    if value is None:
        return
    if value < rule.min_value:
        out.add(
            field, "error",
            messages.MIN_VALUE_TEMPLATE.format(field=_display(field), value=_bound(rule.min_value)),
            "OUT_OF_RANGE",
        )
    if value > rule.max_value:
        out.add(
            field, "warning",
            messages.UNUSUALLY_HIGH_TEMPLATE.format(field=_display(field)),
            "OUT_OF_RANGE",
            messages.SUGGEST_VERIFY_VALUE.format(field=field),
        )


def _validate_length(field: str, value: Optional[str], rule: FieldRule, out: _IssueCollector):
    if not value:
        return
    if len(value) < rule.min_length:
        out.add(
            field, "error",
            messages.MIN_LENGTH_TEMPLATE.format(field=_display(field), length=rule.min_length),
            "TOO_SHORT",
        )
    if len(value) > rule.max_length:
        out.add(
            field, "error",
            messages.MAX_LENGTH_TEMPLATE.format(field=_display(field), length=rule.max_length),
            "TOO_LONG",
        )


def validate(
    record: SIRecord, now: Union[datetime, date], rules: Dict[str, FieldRule] = VALIDATION_RULES
) -> List[ValidationIssue]:
    """
    Runs every rule group against an already auto-fixed record.

    No group short-circuits another, so one field can carry several issues.
    `now` decides which dates count as past; a date equal to today's date
    is past.
    """
    today = now.date() if isinstance(now, datetime) else now
    out = _IssueCollector()

    _validate_required(record, out)
    _validate_container_number(record.container_number, rules, out)
    _validate_booking_number(record.booking_number, rules, out)
    _validate_port_codes(record.port_of_loading, record.port_of_discharge, rules, out)
    _validate_dates(record.cargo_ready_date, record.requested_ship_date, today, rules, out)
    _validate_contacts(record.shipper_contact, record.consignee_contact, rules, out)
    _validate_range("weight", record.weight, rules["weight"], out)
    _validate_range("volume", record.volume, rules["volume"], out)
    for field in ("shipper_name", "consignee_name"):
        _validate_length(field, getattr(record, field), rules["name"], out)
    for field in ("shipper_address", "consignee_address"):
        _validate_length(field, getattr(record, field), rules["address"], out)
    _validate_length("cargo_description", record.cargo_description, rules["description"], out)

    return out.issues
