"""
Unit tests for grouping properties and reservations.
"""

import pytest

from hospitable.analytics.grouping import UNKNOWN, group_properties, group_reservations
from tests.fixtures.sample_data import (
    AIRBNB_RESERVATION,
    BARE_PROPERTY,
    BERLIN_PROPERTY,
    BOOKING_RESERVATION,
    DIRECT_RESERVATION,
    MUNICH_PROPERTY,
    NEW_YORK_PROPERTY,
    PROPERTY_IDS,
    SAMPLE_PROPERTIES,
    SAMPLE_RESERVATIONS,
    SPARSE_RESERVATION,
)

ALL_PROPERTIES = SAMPLE_PROPERTIES + [BARE_PROPERTY]


class TestGroupProperties:
    """Test suite for property grouping"""

    @pytest.mark.unit
    def test_group_by_city(self):
        groups = group_properties(ALL_PROPERTIES, "city")

        assert groups == {
            "Berlin": [BERLIN_PROPERTY],
            "Munich": [MUNICH_PROPERTY],
            "New York": [NEW_YORK_PROPERTY],
            UNKNOWN: [BARE_PROPERTY],
        }

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["city", "country", "property_type", "listed", "nonexistent"])
    def test_flattening_groups_is_a_permutation(self, field):
        """Test no entity is lost or duplicated by grouping"""
        groups = group_properties({"data": ALL_PROPERTIES}, field)
        flattened = [prop for members in groups.values() for prop in members]

        assert sorted(p["id"] for p in flattened) == sorted(p["id"] for p in ALL_PROPERTIES)

    @pytest.mark.unit
    def test_top_level_values_are_stringified_in_first_seen_order(self):
        groups = group_properties(ALL_PROPERTIES, "listed")

        assert list(groups) == ["True", "False", UNKNOWN]
        assert groups["True"] == [BERLIN_PROPERTY, MUNICH_PROPERTY]

    @pytest.mark.unit
    def test_country(self):
        assert list(group_properties(SAMPLE_PROPERTIES, "country")) == ["DE", "US"]


class TestGroupReservations:
    """Test suite for reservation grouping"""

    @pytest.mark.unit
    def test_platform(self):
        groups = group_reservations(SAMPLE_RESERVATIONS, "platform")

        assert groups == {
            "airbnb": [AIRBNB_RESERVATION, SPARSE_RESERVATION],
            "booking": [BOOKING_RESERVATION],
            "direct": [DIRECT_RESERVATION],
        }

    @pytest.mark.unit
    def test_month_and_year(self):
        months = group_reservations(SAMPLE_RESERVATIONS, "month")
        years = group_reservations(SAMPLE_RESERVATIONS, "year")

        assert months == {
            "2024-03": [AIRBNB_RESERVATION, BOOKING_RESERVATION],
            "2024-04": [DIRECT_RESERVATION],
            UNKNOWN: [SPARSE_RESERVATION],
        }
        assert list(years) == ["2024", UNKNOWN]

    @pytest.mark.unit
    def test_property_id(self):
        groups = group_reservations(SAMPLE_RESERVATIONS, "property_id")

        assert groups[PROPERTY_IDS["berlin"]] == [AIRBNB_RESERVATION]
        assert groups[UNKNOWN] == [SPARSE_RESERVATION]

    @pytest.mark.unit
    def test_status(self):
        groups = group_reservations(SAMPLE_RESERVATIONS, "status")

        assert groups == {
            "accepted": [AIRBNB_RESERVATION, BOOKING_RESERVATION],
            "cancelled": [DIRECT_RESERVATION],
            UNKNOWN: [SPARSE_RESERVATION],
        }

    @pytest.mark.unit
    def test_other_fields_read_top_level(self):
        groups = group_reservations(SAMPLE_RESERVATIONS, "stay_type")

        assert list(groups) == ["guest_stay", "owner_stay", UNKNOWN]
