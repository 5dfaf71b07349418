# validation_rules.py

import re
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FieldRule(BaseModel):
    """Constraint descriptor for one field category."""
    model_config = ConfigDict(frozen=True)

    pattern: Optional[re.Pattern] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    format: Optional[str] = None
    examples: Tuple[str, ...] = ()


# Patterns are matched with fullmatch, so they carry no anchors.
VALIDATION_RULES: Dict[str, FieldRule] = {
    # Contacts
    "phone": FieldRule(pattern=re.compile(r"[0-9\s\-+()]+"), min_length=10, max_length=20),
    "email": FieldRule(pattern=re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")),

    # ISO 6346 container number
    "containerNumber": FieldRule(
        pattern=re.compile(r"[A-Z]{4}[0-9]{7}"),
        format="4 letters + 7 digits",
        examples=("ABCD1234567",),
    ),
    "bookingNumber": FieldRule(pattern=re.compile(r"[A-Z0-9]+"), min_length=6, max_length=20),

    "date": FieldRule(pattern=re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"), format="YYYY-MM-DD"),

    # Weight and volume: the maximum is advisory only
    "weight": FieldRule(min_value=0, max_value=100000),
    "volume": FieldRule(min_value=0, max_value=10000),

    # Free text
    "name": FieldRule(pattern=re.compile(r"[a-zA-Z\s\-.']+"), min_length=2, max_length=100),
    "address": FieldRule(min_length=10, max_length=500),
    "description": FieldRule(min_length=5, max_length=1000),

    # UN/LOCODE
    "port": FieldRule(pattern=re.compile(r"[A-Z]{5}"), format="5-letter code", examples=("USNYC", "CNSHA")),
}

REQUIRED_FIELDS: List[str] = [
    "shipper_name", "shipper_address", "shipper_contact",
    "consignee_name", "consignee_address", "consignee_contact",
    "cargo_description", "container_number", "booking_number",
    "port_of_loading", "port_of_discharge",
    "cargo_ready_date", "requested_ship_date",
    "weight", "volume",
]

BUSINESS_FIELDS: List[str] = [
    "shipper_name", "shipper_address", "shipper_contact",
    "consignee_name", "consignee_address", "consignee_contact",
    "cargo_description", "container_number", "booking_number",
    "port_of_loading", "port_of_discharge", "vessel_name", "voyage_number",
    "cargo_ready_date", "requested_ship_date",
    "weight", "volume",
]

STRING_FIELDS: List[str] = [
    "shipper_name", "shipper_address", "shipper_contact",
    "consignee_name", "consignee_address", "consignee_contact",
    "cargo_description", "container_number", "booking_number",
    "port_of_loading", "port_of_discharge", "vessel_name", "voyage_number",
]


def wire_name(attribute: str) -> str:
    """'shipper_name' -> 'shipperName', the identifier issues and fixes are keyed by."""
    return to_camel(attribute)


def format_field_name(field: str) -> str:
    """'shipperName' -> 'Shipper Name'."""
    spaced = re.sub(r"([A-Z])", r" \1", field)
    return (spaced[:1].upper() + spaced[1:]).strip()


def is_empty(value) -> bool:
    return value is None or value == ""


def matches(rule: FieldRule, value: str) -> bool:
    return rule.pattern is not None and rule.pattern.fullmatch(value) is not None
