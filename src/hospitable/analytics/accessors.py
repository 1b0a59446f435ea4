"""
Tolerant accessors over decoded API entities

Entities are plain dicts straight from the JSON decoder. A missing or
malformed field yields a default, never an exception.
"""

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from dateutil import parser as date_parser

Entities = Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]

SCALAR_TYPES = (str, int, float, bool)


def unwrap(entities: Entities) -> List[Mapping[str, Any]]:
    """Accept either a bare entity list or a response envelope with ``data``"""
    if isinstance(entities, Mapping):
        entities = entities.get('data') or []
    return [entity for entity in entities if isinstance(entity, Mapping)]


def get_nested(entity: Any, path: Iterable[str], default: Any = None) -> Any:
    """Walk ``path`` through nested dicts, returning ``default`` on any miss"""
    current = entity
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return default if current is None else current


def as_number(value: Any, default: float = 0) -> float:
    """Numeric value, with bools and non-numbers mapped to ``default``"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def parse_date(value: Any) -> Optional[date]:
    """
    Calendar date from a date, datetime or ISO-8601 string

    Returns:
        The date, or None when the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None

    try:
        return date_parser.isoparse(value).date()
    except (ValueError, OverflowError):
        return None


def unique_sorted(values: Iterable[Any]) -> List[Any]:
    """
    Drop None and non-scalar values, deduplicate and sort ascending

    Mixed scalar types sort by type name, then by string form.
    """
    unique = {value for value in values if isinstance(value, SCALAR_TYPES)}
    try:
        return sorted(unique)
    except TypeError:
        return sorted(unique, key=lambda value: (type(value).__name__, str(value)))
