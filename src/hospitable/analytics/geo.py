"""
Geographic distance over property addresses

Great-circle distances use the Haversine formula on a spherical Earth.
"""

import math
from typing import Any, List, Mapping, Tuple

from ..core.error_handler import ErrorSeverity, HospitableError
from .accessors import Entities, get_nested, unwrap

EARTH_RADIUS = {
    'km': 6371.0,
    'miles': 3959.0
}


class NoCoordinatesError(HospitableError):
    """Entity has no usable latitude/longitude"""

    kind = "no_coordinates"

    def __init__(self, message: str = "Entity has no usable coordinates"):
        super().__init__(message, severity=ErrorSeverity.LOW)


def _earth_radius(unit: str) -> float:
    try:
        return EARTH_RADIUS[unit]
    except KeyError:
        raise ValueError(f"Unknown distance unit {unit!r}; expected one of {list(EARTH_RADIUS)}") from None


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float, unit: str = 'km') -> float:
    """Distance between two points, rounded to one decimal place"""
    radius = _earth_radius(unit)

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # floating-point error can push a just past 1.0 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return round(radius * c, 1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_coordinates(entity: Mapping[str, Any]) -> Tuple[float, float]:
    """
    Raises:
        NoCoordinatesError: address.coordinates is absent or non-numeric
    """
    latitude = get_nested(entity, ('address', 'coordinates', 'latitude'))
    longitude = get_nested(entity, ('address', 'coordinates', 'longitude'))

    if not (_is_number(latitude) and _is_number(longitude)):
        raise NoCoordinatesError()

    return latitude, longitude


def distance_between(a: Mapping[str, Any], b: Mapping[str, Any], unit: str = 'km') -> float:
    lat1, lon1 = extract_coordinates(a)
    lat2, lon2 = extract_coordinates(b)
    return haversine_distance(lat1, lon1, lat2, lon2, unit)


def distance_from(entity: Mapping[str, Any], lat: float, lon: float, unit: str = 'km') -> float:
    entity_lat, entity_lon = extract_coordinates(entity)
    return haversine_distance(lat, lon, entity_lat, entity_lon, unit)


def find_nearby(entities: Entities, lat: float, lon: float, radius: float, unit: str = 'km') -> List[Mapping[str, Any]]:
    """
    Entities within ``radius`` of (lat, lon)

    Entities without coordinates are left out of the result.
    """
    _earth_radius(unit)

    nearby = []
    for entity in unwrap(entities):
        try:
            distance = distance_from(entity, lat, lon, unit)
        except NoCoordinatesError:
            continue
        if distance <= radius:
            nearby.append(entity)

    return nearby
