"""
Property Endpoints for the Hospitable API

Listing, lookup and full retrieval of properties.
"""

from typing import Any, Dict, Optional

from ..validators import validate_uuid
from .base_endpoint import BaseEndpoint


class PropertyEndpoints(BaseEndpoint):
    """
    Property management endpoints.

    Handles:
    - Paginated property listing
    - Single property lookup by UUID
    - Draining all property pages
    """

    VALID_INCLUDES = ('user', 'listings', 'details', 'bookings')
    ENTITY_NAME = 'properties'

    def _get_base_path(self) -> str:
        return '/properties'

    def get_properties(
        self,
        include: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Get one page of properties

        Args:
            include: Comma-separated related resources
            page: Page number (1-based)
            per_page: Items per page

        Returns:
            Page envelope ``{data, meta, links, included?}``
        """
        params = self._clean_params({
            'include': self._validate_include(include),
            'page': page,
            'per_page': per_page
        })

        try:
            response = self.client.get(self.base_path, params=params)
        except Exception as e:
            self._handle_request_error(e, 'get_properties', params=params)

        self._log_operation('get_properties', page=page, count=len(response.get('data') or []))
        return response

    def get_property(self, uuid: str, include: Optional[str] = None) -> Dict[str, Any]:
        """
        Get a single property by UUID

        Raises:
            ValidationError: ``invalid_uuid`` before any request is made
        """
        validate_uuid(uuid)
        params = self._clean_params({'include': self._validate_include(include)})

        try:
            response = self.client.get(self._build_endpoint(uuid), params=params)
        except Exception as e:
            self._handle_request_error(e, 'get_property', uuid=uuid)

        self._log_operation('get_property', uuid=uuid)
        return response

    def get_all_properties(
        self,
        include: Optional[str] = None,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Get every page of properties, up to ``max_pages``

        Returns:
            ``{data, included, meta: {total_pages, total_properties, fetched_pages[, error]}}``
        """
        include = self._validate_include(include)

        def fetch_page(page: int, size: int) -> Dict[str, Any]:
            return self.get_properties(include=include, page=page, per_page=size)

        return self._fetch_all_pages(fetch_page, per_page=per_page, max_pages=max_pages)
