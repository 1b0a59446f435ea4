"""Group entities by a field value"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from .accessors import Entities, get_nested, parse_date, unwrap
from .filters import reservation_status

UNKNOWN = "Unknown"

KeyFunction = Callable[[Mapping[str, Any]], Optional[Any]]


def _top_level(field: str) -> KeyFunction:
    return lambda entity: entity.get(field)


def _arrival_month(reservation):
    arrival = parse_date(reservation.get('arrival_date'))
    return arrival.strftime('%Y-%m') if arrival else None


def _arrival_year(reservation):
    arrival = parse_date(reservation.get('arrival_date'))
    return arrival.year if arrival else None


def _first_property_id(reservation):
    properties = reservation.get('properties')
    if isinstance(properties, list) and properties and isinstance(properties[0], Mapping):
        return properties[0].get('id')
    return None


PROPERTY_GROUP_KEYS: Dict[str, KeyFunction] = {
    'city': lambda entity: get_nested(entity, ('address', 'city')),
    'state': lambda entity: get_nested(entity, ('address', 'state')),
    'country': lambda entity: get_nested(entity, ('address', 'country')),
}

RESERVATION_GROUP_KEYS: Dict[str, KeyFunction] = {
    'platform': _top_level('platform'),
    'month': _arrival_month,
    'year': _arrival_year,
    'property_id': _first_property_id,
    'status': reservation_status,
}


def _group(entities: Entities, key_function: KeyFunction) -> Dict[str, List[Mapping[str, Any]]]:
    groups: Dict[str, List[Mapping[str, Any]]] = {}
    for entity in unwrap(entities):
        value = key_function(entity)
        key = UNKNOWN if value is None else str(value)
        groups.setdefault(key, []).append(entity)
    return groups


def group_properties(properties: Entities, field: str) -> Dict[str, List[Mapping[str, Any]]]:
    """
    Partition properties by ``field``

    ``city``, ``state`` and ``country`` read from the address; any other
    field is read top-level. Properties missing the field go under "Unknown".
    """
    return _group(properties, PROPERTY_GROUP_KEYS.get(field) or _top_level(field))


def group_reservations(reservations: Entities, field: str) -> Dict[str, List[Mapping[str, Any]]]:
    """
    Partition reservations by ``field``

    Special fields: ``platform``, ``month`` (YYYY-MM of arrival), ``year``,
    ``property_id`` (first embedded property) and ``status``.
    """
    return _group(reservations, RESERVATION_GROUP_KEYS.get(field) or _top_level(field))
