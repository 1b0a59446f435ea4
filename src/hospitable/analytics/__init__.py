"""
Client-side analytics over fetched properties and reservations

Pure functions: inputs are never mutated and every result is a new
collection.
"""

from .accessors import get_nested, parse_date, unwrap
from .filters import filter_properties, filter_reservations, PROPERTY_FILTERS, RESERVATION_FILTERS
from .geo import NoCoordinatesError, distance_between, extract_coordinates, find_nearby, haversine_distance
from .grouping import UNKNOWN, group_properties, group_reservations
from .summaries import (
    financial_summary,
    list_amenities,
    list_currencies,
    list_platforms,
    list_property_types,
    list_statuses,
    next_weeks_range,
    total_nights,
    total_revenue,
)

__all__ = [
    'get_nested',
    'parse_date',
    'unwrap',
    'filter_properties',
    'filter_reservations',
    'PROPERTY_FILTERS',
    'RESERVATION_FILTERS',
    'NoCoordinatesError',
    'distance_between',
    'extract_coordinates',
    'find_nearby',
    'haversine_distance',
    'UNKNOWN',
    'group_properties',
    'group_reservations',
    'financial_summary',
    'list_amenities',
    'list_currencies',
    'list_platforms',
    'list_property_types',
    'list_statuses',
    'next_weeks_range',
    'total_nights',
    'total_revenue',
]
