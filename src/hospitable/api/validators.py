"""
Option validation for the Hospitable API Client

Validation runs before any request is built. Each check raises a
``ValidationError`` whose ``kind`` names the violated rule.
"""

import re
from datetime import date
from typing import Any, Iterable, List, Optional, Sequence

from ..core.error_handler import ValidationError

# Canonical textual UUID, versions 1-5, RFC 4122 variant
UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

VALID_DATE_QUERIES = ('checkin', 'checkout')


def valid_uuid(value: Any) -> bool:
    """True iff ``value`` is a string in canonical UUID form"""
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def validate_uuid(value: Any) -> str:
    if not valid_uuid(value):
        raise ValidationError(f"Invalid UUID: {value!r}", kind="invalid_uuid", invalid=[value])
    return value


def valid_property_ids(property_ids: Iterable[Any]) -> bool:
    return all(valid_uuid(property_id) for property_id in property_ids)


def validate_include(include: Any, allowed: Sequence[str]) -> Optional[str]:
    """
    Check a comma-separated include list against the allowed set

    Returns:
        The include string unchanged, or None when not given
    """
    if include is None:
        return None

    if not isinstance(include, str):
        raise ValidationError("Include must be a string", kind="invalid_include_format", field="include")

    requested = [part for part in include.split(',') if part]
    invalid = [part for part in requested if part not in allowed]
    if invalid:
        raise ValidationError(
            f"Invalid include options {invalid}; allowed: {list(allowed)}",
            kind="invalid_includes",
            field="include",
            invalid=invalid,
            allowed=list(allowed)
        )

    return include


def validate_property_list(properties: Any) -> List[str]:
    if not isinstance(properties, (list, tuple)) or len(properties) == 0:
        raise ValidationError(
            "properties parameter is required and must be a non-empty list",
            kind="missing_properties",
            field="properties"
        )

    if not valid_property_ids(properties):
        invalid = [property_id for property_id in properties if not valid_uuid(property_id)]
        raise ValidationError(
            "All property IDs must be valid UUIDs",
            kind="invalid_property_ids",
            field="properties",
            invalid=invalid
        )

    return list(properties)


def validate_date_query(date_query: Any) -> Optional[str]:
    if date_query is None or date_query in VALID_DATE_QUERIES:
        return date_query

    raise ValidationError(
        f"Invalid date_query {date_query!r}",
        kind="invalid_date_query",
        field="date_query",
        invalid=[date_query],
        allowed=list(VALID_DATE_QUERIES)
    )


def validate_iso_date(value: Any, field: str) -> Optional[str]:
    """Accept None or a YYYY-MM-DD string naming a real calendar date"""
    if value is None:
        return None

    if not isinstance(value, str):
        raise ValidationError(
            f"{field} must be a string in YYYY-MM-DD format",
            kind="invalid_date_type",
            field=field
        )

    try:
        if not ISO_DATE_PATTERN.match(value):
            raise ValueError(value)
        date.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            f"{field} must be in YYYY-MM-DD format",
            kind="invalid_date_format",
            field=field,
            invalid=[value]
        ) from None

    return value
