"""
Unit tests for client-side property and reservation filtering.
"""

import copy
from datetime import date

import pytest

from hospitable.analytics.filters import filter_properties, filter_reservations
from tests.fixtures.sample_data import (
    AIRBNB_RESERVATION,
    BARE_PROPERTY,
    BERLIN_PROPERTY,
    BOOKING_RESERVATION,
    DIRECT_RESERVATION,
    MUNICH_PROPERTY,
    NEW_YORK_PROPERTY,
    SAMPLE_PROPERTIES,
    SAMPLE_RESERVATIONS,
    SPARSE_RESERVATION,
)

ALL_PROPERTIES = SAMPLE_PROPERTIES + [BARE_PROPERTY]


def ids(entities):
    return [entity["id"] for entity in entities]


class TestFilterProperties:
    """Test suite for property predicates"""

    @pytest.mark.unit
    def test_has_amenities_requires_all(self):
        """Test a property with only some required amenities is excluded"""
        result = filter_properties(ALL_PROPERTIES, {"has_amenities": ["pool", "gym", "concierge"]})

        assert result == [BERLIN_PROPERTY, NEW_YORK_PROPERTY]
        assert MUNICH_PROPERTY not in result

    @pytest.mark.unit
    def test_unknown_key_passes_everything(self):
        assert filter_properties(ALL_PROPERTIES, {"totally_unknown_key": 42}) == ALL_PROPERTIES

    @pytest.mark.unit
    def test_empty_criteria(self):
        assert filter_properties({"data": ALL_PROPERTIES}, {}) == ALL_PROPERTIES

    @pytest.mark.unit
    def test_equality_predicates(self):
        assert filter_properties(ALL_PROPERTIES, {"listed": True}) == [BERLIN_PROPERTY, MUNICH_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"property_type": "house"}) == [NEW_YORK_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"room_type": "entire_home", "currency": "EUR"}) == [BERLIN_PROPERTY]

    @pytest.mark.unit
    def test_missing_field_never_matches(self):
        """Test absent fields fail equality even against False"""
        assert filter_properties(ALL_PROPERTIES, {"calendar_restricted": False}) == [BERLIN_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"events_allowed": False}) == [BERLIN_PROPERTY]

    @pytest.mark.unit
    def test_location_is_case_insensitive(self):
        assert filter_properties(ALL_PROPERTIES, {"city": "BERLIN"}) == [BERLIN_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"country": "de"}) == [BERLIN_PROPERTY, MUNICH_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"state": "ny"}) == [NEW_YORK_PROPERTY]

    @pytest.mark.unit
    def test_capacity_thresholds_default_missing_to_zero(self):
        assert filter_properties(ALL_PROPERTIES, {"min_capacity": 6}) == [BERLIN_PROPERTY, NEW_YORK_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"max_capacity": 2}) == [MUNICH_PROPERTY, BARE_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"min_bedrooms": 3, "min_bathrooms": 3}) == [NEW_YORK_PROPERTY]

    @pytest.mark.unit
    def test_house_rules(self):
        assert filter_properties(ALL_PROPERTIES, {"pets_allowed": True}) == [BERLIN_PROPERTY, NEW_YORK_PROPERTY]
        assert filter_properties(ALL_PROPERTIES, {"smoking_allowed": False}) == [BERLIN_PROPERTY, MUNICH_PROPERTY]

    @pytest.mark.unit
    def test_within_radius(self):
        area = {"lat": 52.52, "lon": 13.405, "radius": 600, "unit": "km"}

        result = filter_properties(ALL_PROPERTIES, {"within_radius": area})

        assert result == [BERLIN_PROPERTY, MUNICH_PROPERTY]

    @pytest.mark.unit
    def test_combined_criteria_are_anded(self):
        criteria = {"country": "DE", "has_amenities": ["pool"], "min_capacity": 4, "unknown": "x"}

        assert filter_properties(ALL_PROPERTIES, criteria) == [BERLIN_PROPERTY]

    @pytest.mark.unit
    def test_input_not_mutated(self):
        before = copy.deepcopy(ALL_PROPERTIES)

        filter_properties(ALL_PROPERTIES, {"city": "Berlin", "min_capacity": 1})

        assert ALL_PROPERTIES == before


class TestFilterReservations:
    """Test suite for reservation predicates"""

    @pytest.mark.unit
    def test_platform_and_stay_type(self):
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"platform": "airbnb"})) == ["res-1", "res-4"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"stay_type": "owner_stay"})) == ["res-3"]

    @pytest.mark.unit
    def test_status_from_map_or_string(self):
        result = filter_reservations(SAMPLE_RESERVATIONS, {"status": "accepted"})

        assert result == [AIRBNB_RESERVATION, BOOKING_RESERVATION]

    @pytest.mark.unit
    def test_currency_requires_revenue(self):
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"currency": "USD"})) == ["res-1", "res-2"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"currency": "EUR"})) == ["res-3"]

    @pytest.mark.unit
    def test_currency_defaults_to_usd(self):
        reservation = {"id": "r", "financials": {"host": {"revenue": {"amount": 50}}}}

        assert filter_reservations([reservation], {"currency": "USD"}) == [reservation]

    @pytest.mark.unit
    def test_has_guest_info(self):
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"has_guest_info": True})) == ["res-1", "res-3"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"has_guest_info": False})) == ["res-2", "res-4"]

    @pytest.mark.unit
    def test_date_bounds_are_inclusive(self):
        """Test bounds accept date objects or ISO strings and include the boundary day"""
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"arriving_after": date(2024, 3, 20)})) == ["res-2", "res-3"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"arriving_before": "2024-03-15"})) == ["res-1"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"departing_after": "2024-04-09"})) == ["res-3"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"departing_before": date(2024, 3, 23)})) == ["res-1", "res-2"]

    @pytest.mark.unit
    def test_unparsable_dates_fail(self):
        assert SPARSE_RESERVATION not in filter_reservations(SAMPLE_RESERVATIONS, {"arriving_after": "2000-01-01"})
        assert filter_reservations(SAMPLE_RESERVATIONS, {"arriving_after": "garbage"}) == []

    @pytest.mark.unit
    def test_nights_thresholds(self):
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"min_nights": 3})) == ["res-2", "res-3"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"max_nights": 2})) == ["res-1", "res-4"]

    @pytest.mark.unit
    def test_revenue_thresholds_treat_missing_as_zero(self):
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"min_revenue": 150})) == ["res-2", "res-3"]
        assert ids(filter_reservations(SAMPLE_RESERVATIONS, {"max_revenue": 100})) == ["res-1", "res-4"]

    @pytest.mark.unit
    def test_unknown_key_passes(self):
        assert filter_reservations(SAMPLE_RESERVATIONS, {"totally_unknown_key": 42}) == SAMPLE_RESERVATIONS

    @pytest.mark.unit
    def test_combined(self):
        criteria = {"platform": "booking", "currency": "USD", "min_nights": 3}

        assert filter_reservations({"data": SAMPLE_RESERVATIONS}, criteria) == [BOOKING_RESERVATION]
        assert DIRECT_RESERVATION not in filter_reservations(SAMPLE_RESERVATIONS, criteria)
