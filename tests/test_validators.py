from datetime import date

import pytest

from schemas import SIRecord
from validation_rules import VALIDATION_RULES, FieldRule, format_field_name
from validators import parse_date, validate


def _codes(issues, field=None, severity=None):
    return [
        i.code for i in issues
        if (field is None or i.field == field) and (severity is None or i.severity == severity)
    ]


class TestRequiredFields:

    def test_complete_record_has_no_issues(self, make_record, now):
        assert validate(make_record(), now) == []

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_shipper_name(self, make_record, now, value):
        issues = validate(make_record(shipperName=value), now)

        assert len(issues) == 1
        assert issues[0].field == "shipperName"
        assert issues[0].severity == "error"
        assert issues[0].code == "REQUIRED_FIELD"
        assert issues[0].message == "Shipper Name is required"

    def test_optional_fields_may_be_absent(self, make_record, now):
        assert validate(make_record(vesselName=None, voyageNumber=""), now) == []

    def test_zero_weight_counts_as_present(self, make_record, now):
        assert validate(make_record(weight=0), now) == []

    def test_every_required_field_reported_in_order(self, now):
        issues = validate(SIRecord(), now)

        assert _codes(issues) == ["REQUIRED_FIELD"] * 15
        assert [i.field for i in issues][:3] == ["shipperName", "shipperAddress", "shipperContact"]
        assert issues[-1].field == "volume"


class TestFormats:

    def test_invalid_container_number(self, make_record, now):
        issues = validate(make_record(containerNumber="ABC123"), now)

        assert _codes(issues, "containerNumber") == ["INVALID_FORMAT"]
        assert issues[0].suggestion == "Example: ABCD1234567 (4 letters + 7 digits)"

    def test_lowercase_container_number_rejected(self, make_record, now):
        assert _codes(validate(make_record(containerNumber="abcd1234567"), now)) == ["INVALID_FORMAT"]

    def test_booking_number_too_short(self, make_record, now):
        issues = validate(make_record(bookingNumber="BK123"), now)

        assert _codes(issues, "bookingNumber") == ["INVALID_LENGTH"]
        assert issues[0].message == "Booking Number must be between 6 and 20 characters"

    def test_booking_number_with_special_characters(self, make_record, now):
        assert _codes(validate(make_record(bookingNumber="BK-2025-001"), now)) == ["INVALID_FORMAT"]

    def test_booking_number_can_fail_length_and_format(self, make_record, now):
        assert _codes(validate(make_record(bookingNumber="B-1"), now)) == ["INVALID_LENGTH", "INVALID_FORMAT"]

    def test_invalid_port_codes(self, make_record, now):
        issues = validate(make_record(portOfLoading="US1YC", portOfDischarge="CNSH"), now)

        assert [(i.field, i.code) for i in issues] == [
            ("portOfLoading", "INVALID_FORMAT"),
            ("portOfDischarge", "INVALID_FORMAT"),
        ]
        assert issues[1].suggestion == "Example: CNSHA (5-letter code)"

    def test_same_ports_warn_on_discharge(self, make_record, now):
        issues = validate(make_record(portOfLoading="USNYC", portOfDischarge="USNYC"), now)

        assert len(issues) == 1
        assert issues[0].field == "portOfDischarge"
        assert issues[0].severity == "warning"
        assert issues[0].code == "SAME_PORTS"


class TestDates:

    @pytest.mark.parametrize("value", ["25.12.2099", "2099-2-3", "2099-02-30", "12/25/2099"])
    def test_unparseable_dates(self, make_record, now, value):
        issues = validate(make_record(cargoReadyDate=value), now)

        assert _codes(issues, "cargoReadyDate", "error") == ["INVALID_DATE"]
        assert issues[0].suggestion == "Use format: YYYY-MM-DD"

    def test_past_dates_warn(self, make_record, now):
        issues = validate(make_record(cargoReadyDate="2025-11-20", requestedShipDate="2025-11-25"), now)

        assert [(i.field, i.severity, i.code) for i in issues] == [
            ("cargoReadyDate", "warning", "PAST_DATE"),
            ("requestedShipDate", "warning", "PAST_DATE"),
        ]

    def test_today_is_not_in_the_future(self, make_record, now):
        issues = validate(make_record(cargoReadyDate="2025-12-01"), now)
        assert _codes(issues, "cargoReadyDate") == ["PAST_DATE"]

    def test_tomorrow_is_in_the_future(self, make_record, now):
        assert validate(make_record(cargoReadyDate="2025-12-02", requestedShipDate="2025-12-02"), now) == []

    def test_ship_date_before_cargo_ready(self, make_record, now):
        issues = validate(make_record(cargoReadyDate="2025-12-25", requestedShipDate="2025-12-20"), now)

        errors = [i for i in issues if i.severity == "error"]
        assert len(errors) == 1
        assert errors[0].code == "INVALID_DATE_ORDER"
        assert errors[0].field == "requestedShipDate"

    def test_equal_dates_allowed(self, make_record, now):
        assert validate(make_record(cargoReadyDate="2099-12-25", requestedShipDate="2099-12-25"), now) == []

    def test_evaluation_time_is_injected(self, make_record):
        record = make_record(cargoReadyDate="2030-01-10", requestedShipDate="2030-01-20")

        assert validate(record, date(2030, 1, 1)) == []
        assert _codes(validate(record, date(2030, 1, 15))) == ["PAST_DATE"]

    def test_parse_date_is_strict(self):
        rule = VALIDATION_RULES["date"]
        assert parse_date("2025-12-25", rule) == date(2025, 12, 25)
        assert parse_date("2025-1-5", rule) is None
        assert parse_date("2025-13-01", rule) is None


class TestContacts:

    @pytest.mark.parametrize("contact", ["+1-555-123-4567", "(021) 555 0199", "ops@example.com"])
    def test_valid_contacts(self, make_record, now, contact):
        assert validate(make_record(shipperContact=contact), now) == []

    def test_unrecognized_contact_is_only_a_warning(self, make_record, now):
        issues = validate(make_record(shipperContact="ask for Bob", consigneeContact="n/a"), now)

        assert [(i.field, i.severity, i.code) for i in issues] == [
            ("shipperContact", "warning", "INVALID_CONTACT"),
            ("consigneeContact", "warning", "INVALID_CONTACT"),
        ]


class TestRanges:

    def test_negative_weight_is_an_error(self, make_record, now):
        issues = validate(make_record(weight=-100), now)

        assert [(i.field, i.severity, i.code) for i in issues] == [("weight", "error", "OUT_OF_RANGE")]
        assert issues[0].message == "Weight must be at least 0"

    def test_high_weight_is_a_warning(self, make_record, now):
        issues = validate(make_record(weight=150000), now)

        assert [(i.field, i.severity, i.code) for i in issues] == [("weight", "warning", "OUT_OF_RANGE")]
        assert issues[0].suggestion == "Verify the weight value"

    def test_normal_weight_has_no_issue(self, make_record, now):
        assert validate(make_record(weight=15000), now) == []

    def test_volume_bounds(self, make_record, now):
        assert _codes(validate(make_record(volume=-1), now), "volume", "error") == ["OUT_OF_RANGE"]
        assert _codes(validate(make_record(volume=12000), now), "volume", "warning") == ["OUT_OF_RANGE"]
        assert validate(make_record(volume=10000), now) == []


class TestLengths:

    def test_name_too_short(self, make_record, now):
        issues = validate(make_record(consigneeName="A"), now)

        assert _codes(issues, "consigneeName") == ["TOO_SHORT"]
        assert issues[0].message == "Consignee Name must be at least 2 characters"

    def test_name_too_long(self, make_record, now):
        assert _codes(validate(make_record(shipperName="A" * 101), now)) == ["TOO_LONG"]

    def test_address_too_short(self, make_record, now):
        assert _codes(validate(make_record(shipperAddress="123 Main"), now), "shipperAddress") == ["TOO_SHORT"]

    def test_address_too_long(self, make_record, now):
        assert _codes(validate(make_record(consigneeAddress="x" * 501), now)) == ["TOO_LONG"]

    def test_description_bounds(self, make_record, now):
        assert _codes(validate(make_record(cargoDescription="Box"), now)) == ["TOO_SHORT"]
        assert _codes(validate(make_record(cargoDescription="y" * 1001), now)) == ["TOO_LONG"]


class TestOrderingAndRules:

    def test_issues_follow_rule_group_order(self, make_record, now):
        issues = validate(make_record(
            cargoDescription="Box",
            shipperName="A",
            weight=-5,
            consigneeContact="n/a",
            requestedShipDate="bad",
            portOfLoading="X",
            bookingNumber="B!",
            containerNumber="C1",
            shipperAddress="",
        ), now)

        assert [(i.field, i.code) for i in issues] == [
            ("shipperAddress", "REQUIRED_FIELD"),
            ("containerNumber", "INVALID_FORMAT"),
            ("bookingNumber", "INVALID_LENGTH"),
            ("bookingNumber", "INVALID_FORMAT"),
            ("portOfLoading", "INVALID_FORMAT"),
            ("requestedShipDate", "INVALID_DATE"),
            ("consigneeContact", "INVALID_CONTACT"),
            ("weight", "OUT_OF_RANGE"),
            ("shipperName", "TOO_SHORT"),
            ("cargoDescription", "TOO_SHORT"),
        ]

    def test_rules_are_injected(self, make_record, now):
        rules = {**VALIDATION_RULES, "weight": FieldRule(min_value=0, max_value=1000)}

        issues = validate(make_record(weight=15000), now, rules)

        assert _codes(issues, "weight", "warning") == ["OUT_OF_RANGE"]

    @pytest.mark.parametrize("field, display", [
        ("shipperName", "Shipper Name"),
        ("portOfDischarge", "Port Of Discharge"),
        ("weight", "Weight"),
    ])
    def test_format_field_name(self, field, display):
        assert format_field_name(field) == display
