"""
Hospitable API Client Package

HTTP client for the Hospitable Public API. Provides bearer authentication,
option validation, status classification and audit logging.
"""

from .client import HTTPClient
from .authentication import AuthenticationManager, TokenValidator
from .credentials import AuthState, Credentials
from .request_builder import RequestBuilder
from .response_handler import ResponseHandler
from .validators import valid_uuid, valid_property_ids
from .endpoints.base_endpoint import BaseEndpoint
from .endpoints.property_endpoints import PropertyEndpoints
from .endpoints.reservation_endpoints import ReservationEndpoints

__all__ = [
    'HTTPClient',
    'AuthenticationManager',
    'TokenValidator',
    'AuthState',
    'Credentials',
    'RequestBuilder',
    'ResponseHandler',
    'valid_uuid',
    'valid_property_ids',
    'BaseEndpoint',
    'PropertyEndpoints',
    'ReservationEndpoints'
]
