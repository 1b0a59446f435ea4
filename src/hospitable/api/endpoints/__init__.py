"""Resource clients for the Hospitable API"""

from .base_endpoint import BaseEndpoint, PageAccumulator
from .property_endpoints import PropertyEndpoints
from .reservation_endpoints import ReservationEndpoints

__all__ = [
    'BaseEndpoint',
    'PageAccumulator',
    'PropertyEndpoints',
    'ReservationEndpoints',
]
