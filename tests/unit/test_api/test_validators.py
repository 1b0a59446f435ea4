"""
Unit tests for option validation and the UUID predicate.
"""

import pytest

from hospitable.api.validators import (
    valid_property_ids,
    valid_uuid,
    validate_date_query,
    validate_include,
    validate_iso_date,
    validate_property_list,
    validate_uuid,
)
from hospitable.core.error_handler import ValidationError


class TestUUIDPredicate:
    """Test suite for the canonical UUID check"""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "550e8400-e29b-41d4-a716-446655440000",
        "6BA7B810-9DAD-11D1-80B4-00C04FD430C8",
        "f47ac10b-58cc-4372-a567-0e02b2c3d479",
    ])
    def test_valid_uuids(self, value):
        """Test canonical UUIDs of versions 1-5 are accepted in any case"""
        assert valid_uuid(value) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "550e8400-e29b-41d4-a716-44665544000g",   # non-hex
        "550e8400-e29b-41d4-a716",                # too short
        "550e8400e29b41d4a716446655440000",       # no hyphens
        "550e8400-e29b-61d4-a716-446655440000",   # version 6
        "550e8400-e29b-41d4-c716-446655440000",   # variant nibble c
        "550e8400-e29b-41d4-a716-4466554400000",  # too long
        "",
        None,
        42,
    ])
    def test_invalid_uuids(self, value):
        """Test malformed identifiers are rejected"""
        assert valid_uuid(value) is False

    @pytest.mark.unit
    def test_validate_uuid_raises_kind(self):
        """Test validate_uuid raises invalid_uuid"""
        with pytest.raises(ValidationError) as exc_info:
            validate_uuid("nope")

        assert exc_info.value.kind == "invalid_uuid"

    @pytest.mark.unit
    def test_valid_property_ids(self):
        assert valid_property_ids(["550e8400-e29b-41d4-a716-446655440000"]) is True
        assert valid_property_ids(["550e8400-e29b-41d4-a716-446655440000", "bad"]) is False


class TestIncludeValidation:
    """Test suite for include list validation"""

    ALLOWED = ("user", "listings", "details", "bookings")

    @pytest.mark.unit
    def test_none_passes(self):
        assert validate_include(None, self.ALLOWED) is None

    @pytest.mark.unit
    def test_valid_include_returned_unchanged(self):
        assert validate_include("user,details", self.ALLOWED) == "user,details"

    @pytest.mark.unit
    def test_invalid_tokens_reported_with_allowed_set(self):
        """Test offending tokens and the allowed set are both reported"""
        with pytest.raises(ValidationError) as exc_info:
            validate_include("user,guest,foo", self.ALLOWED)

        error = exc_info.value
        assert error.kind == "invalid_includes"
        assert error.invalid == ["guest", "foo"]
        assert error.allowed == list(self.ALLOWED)

    @pytest.mark.unit
    def test_non_string_include(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_include(["user"], self.ALLOWED)

        assert exc_info.value.kind == "invalid_include_format"


class TestReservationOptionValidation:
    """Test suite for reservation-specific option checks"""

    @pytest.mark.unit
    @pytest.mark.parametrize("properties", [None, [], "550e8400-e29b-41d4-a716-446655440000"])
    def test_missing_properties(self, properties):
        with pytest.raises(ValidationError) as exc_info:
            validate_property_list(properties)

        assert exc_info.value.kind == "missing_properties"

    @pytest.mark.unit
    def test_invalid_property_ids(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_property_list(["550e8400-e29b-41d4-a716-446655440000", "bad-id"])

        assert exc_info.value.kind == "invalid_property_ids"
        assert exc_info.value.invalid == ["bad-id"]

    @pytest.mark.unit
    def test_date_query(self):
        assert validate_date_query(None) is None
        assert validate_date_query("checkin") == "checkin"
        assert validate_date_query("checkout") == "checkout"

        with pytest.raises(ValidationError) as exc_info:
            validate_date_query("arrival")
        assert exc_info.value.kind == "invalid_date_query"

    @pytest.mark.unit
    def test_iso_date_accepts_calendar_dates(self):
        assert validate_iso_date("2024-02-29", "start_date") == "2024-02-29"
        assert validate_iso_date(None, "start_date") is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["2024-13-01", "2023-02-29", "15/03/2024", "2024-3-1", "2024-03-15T10:00:00"])
    def test_iso_date_format_errors(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_iso_date(value, "end_date")

        assert exc_info.value.kind == "invalid_date_format"
        assert exc_info.value.field == "end_date"

    @pytest.mark.unit
    def test_iso_date_type_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_iso_date(20240315, "start_date")

        assert exc_info.value.kind == "invalid_date_type"
