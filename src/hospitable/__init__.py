"""Hospitable - Python client for the Hospitable Public API

Bearer-token authentication, property and reservation retrieval with
page draining, and client-side analytics over the fetched data.
"""

__version__ = "0.1.0"
__description__ = "Client for the Hospitable property-management API"

from .analytics import (
    NoCoordinatesError,
    distance_between,
    filter_properties,
    filter_reservations,
    financial_summary,
    find_nearby,
    group_properties,
    group_reservations,
    list_amenities,
    list_currencies,
    list_platforms,
    list_property_types,
    list_statuses,
    next_weeks_range,
    total_nights,
    total_revenue,
)
from .api.response_handler import (
    APIError,
    ClientError,
    ForbiddenError,
    JSONDecodeError,
    JSONEncodeError,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .api.validators import valid_property_ids, valid_uuid
from .core.application import HospitableClient
from .core.error_handler import AuthenticationError, ConfigurationError, HospitableError, ValidationError
from .facade import (
    authenticated,
    clear_auth,
    configure,
    delete,
    get,
    get_all_properties,
    get_all_reservations,
    get_credentials,
    get_properties,
    get_property,
    get_reservations,
    get_token,
    patch,
    post,
    put,
    set_token,
    shutdown,
    validate_token,
)

__all__ = [
    "HospitableClient",
    # facade
    "authenticated",
    "clear_auth",
    "configure",
    "delete",
    "get",
    "get_all_properties",
    "get_all_reservations",
    "get_credentials",
    "get_properties",
    "get_property",
    "get_reservations",
    "get_token",
    "patch",
    "post",
    "put",
    "set_token",
    "shutdown",
    "validate_token",
    "valid_uuid",
    "valid_property_ids",
    # analytics
    "distance_between",
    "filter_properties",
    "filter_reservations",
    "financial_summary",
    "find_nearby",
    "group_properties",
    "group_reservations",
    "list_amenities",
    "list_currencies",
    "list_platforms",
    "list_property_types",
    "list_statuses",
    "next_weeks_range",
    "total_nights",
    "total_revenue",
    # errors
    "HospitableError",
    "AuthenticationError",
    "ConfigurationError",
    "ValidationError",
    "NoCoordinatesError",
    "APIError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ClientError",
    "ServerError",
    "UnexpectedStatusError",
    "TransportError",
    "JSONDecodeError",
    "JSONEncodeError",
]
