"""
Client-side filtering of properties and reservations

Criteria are a mapping of predicate name to expected value. An entity is
kept only when it satisfies every recognised predicate; unrecognised names
are ignored so newer criteria never exclude everything.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .accessors import Entities, as_number, get_nested, parse_date, unwrap
from .geo import NoCoordinatesError, distance_from

logger = logging.getLogger(__name__)

Predicate = Callable[[Mapping[str, Any], Any], bool]

_MISSING = object()


def _field_equals(*path: str) -> Predicate:
    """Equality on a (nested) field; a missing field never matches"""
    def predicate(entity, expected):
        value = get_nested(entity, path, _MISSING)
        return value is not _MISSING and value == expected
    return predicate


def _field_equals_ignore_case(*path: str) -> Predicate:
    def predicate(entity, expected):
        value = get_nested(entity, path)
        if not isinstance(value, str) or not isinstance(expected, str):
            return False
        return value.lower() == expected.lower()
    return predicate


def _at_least(*path: str) -> Predicate:
    """Threshold on a numeric field, missing counting as 0"""
    def predicate(entity, minimum):
        return as_number(get_nested(entity, path)) >= minimum
    return predicate


def _at_most(*path: str) -> Predicate:
    def predicate(entity, maximum):
        return as_number(get_nested(entity, path)) <= maximum
    return predicate


def _has_amenities(entity, required):
    amenities = get_nested(entity, ('amenities',), [])
    if not isinstance(amenities, (list, tuple, set)):
        return False
    return all(amenity in amenities for amenity in required)


def _within_radius(entity, area):
    try:
        distance = distance_from(entity, area['lat'], area['lon'], area.get('unit', 'km'))
    except NoCoordinatesError:
        return False
    return distance <= area['radius']


PROPERTY_FILTERS: Dict[str, Predicate] = {
    'listed': _field_equals('listed'),
    'property_type': _field_equals('property_type'),
    'room_type': _field_equals('room_type'),
    'currency': _field_equals('currency'),
    'calendar_restricted': _field_equals('calendar_restricted'),
    'city': _field_equals_ignore_case('address', 'city'),
    'state': _field_equals_ignore_case('address', 'state'),
    'country': _field_equals_ignore_case('address', 'country'),
    'within_radius': _within_radius,
    'min_capacity': _at_least('capacity', 'max'),
    'max_capacity': _at_most('capacity', 'max'),
    'min_bedrooms': _at_least('capacity', 'bedrooms'),
    'min_bathrooms': _at_least('capacity', 'bathrooms'),
    'has_amenities': _has_amenities,
    'pets_allowed': _field_equals('house_rules', 'pets_allowed'),
    'smoking_allowed': _field_equals('house_rules', 'smoking_allowed'),
    'events_allowed': _field_equals('house_rules', 'events_allowed'),
}


# Reservations

def reservation_status(reservation: Mapping[str, Any]) -> Optional[str]:
    """Status from ``reservation_status.status`` or a plain string field"""
    status = reservation.get('reservation_status')
    if isinstance(status, Mapping):
        status = status.get('status')
    return status if isinstance(status, str) else None


def reservation_revenue(reservation: Mapping[str, Any]) -> Optional[Tuple[str, float]]:
    """(currency, host revenue amount), or None when there is no revenue amount"""
    amount = get_nested(reservation, ('financials', 'host', 'revenue', 'amount'))
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return None
    currency = get_nested(reservation, ('financials', 'currency'), 'USD')
    return currency, amount


def _status(reservation, expected):
    return reservation_status(reservation) == expected


def _currency(reservation, expected):
    revenue = reservation_revenue(reservation)
    return revenue is not None and revenue[0] == expected


def _has_guest_info(reservation, expected):
    guest = reservation.get('guest')
    if isinstance(guest, (Mapping, list, str)):
        has_guest = len(guest) > 0
    else:
        has_guest = guest is not None
    return has_guest == expected


def _revenue_amount(reservation) -> float:
    revenue = reservation_revenue(reservation)
    return revenue[1] if revenue is not None else 0


def _date_bound(field: str, after: bool) -> Predicate:
    """Inclusive comparison of a date field against a date or ISO string bound"""
    def predicate(reservation, bound):
        value = parse_date(reservation.get(field))
        bound = parse_date(bound)
        if value is None or bound is None:
            return False
        return value >= bound if after else value <= bound
    return predicate


RESERVATION_FILTERS: Dict[str, Predicate] = {
    'platform': _field_equals('platform'),
    'stay_type': _field_equals('stay_type'),
    'status': _status,
    'currency': _currency,
    'has_guest_info': _has_guest_info,
    'arriving_after': _date_bound('arrival_date', after=True),
    'arriving_before': _date_bound('arrival_date', after=False),
    'departing_after': _date_bound('departure_date', after=True),
    'departing_before': _date_bound('departure_date', after=False),
    'min_nights': _at_least('nights'),
    'max_nights': _at_most('nights'),
    'min_revenue': lambda reservation, minimum: _revenue_amount(reservation) >= minimum,
    'max_revenue': lambda reservation, maximum: _revenue_amount(reservation) <= maximum,
}


def _apply(entities: Entities, criteria: Mapping[str, Any], table: Dict[str, Predicate]) -> List[Mapping[str, Any]]:
    entities = unwrap(entities)

    unknown = [key for key in criteria if key not in table]
    if unknown:
        logger.debug(f"Ignoring unrecognised filter keys: {unknown}")

    predicates = [(table[key], expected) for key, expected in criteria.items() if key in table]

    return [
        entity for entity in entities
        if all(predicate(entity, expected) for predicate, expected in predicates)
    ]


def filter_properties(properties: Entities, criteria: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    """
    Properties satisfying every criterion

    Supported keys: listed, property_type, room_type, currency,
    calendar_restricted, city, state, country, within_radius
    ({lat, lon, radius, unit}), min_capacity, max_capacity, min_bedrooms,
    min_bathrooms, has_amenities, pets_allowed, smoking_allowed,
    events_allowed.
    """
    return _apply(properties, criteria, PROPERTY_FILTERS)


def filter_reservations(reservations: Entities, criteria: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    """
    Reservations satisfying every criterion

    Supported keys: platform, stay_type, status, currency, has_guest_info,
    arriving_after, arriving_before, departing_after, departing_before,
    min_nights, max_nights, min_revenue, max_revenue.
    """
    return _apply(reservations, criteria, RESERVATION_FILTERS)
