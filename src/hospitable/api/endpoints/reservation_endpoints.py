"""
Reservation Endpoints for the Hospitable API

Reservation queries are scoped to a set of properties and may be narrowed
by check-in or check-out date ranges.
"""

from typing import Any, Dict, List, Optional

from ..validators import validate_date_query, validate_iso_date, validate_property_list
from .base_endpoint import BaseEndpoint


class ReservationEndpoints(BaseEndpoint):
    """
    Reservation endpoints.

    Handles:
    - Paginated reservation listing for a set of properties
    - Date range queries on check-in or check-out
    - Draining all reservation pages
    """

    VALID_INCLUDES = ('financials', 'financialsV2', 'guest', 'properties', 'listings')
    ENTITY_NAME = 'reservations'

    def _get_base_path(self) -> str:
        return '/reservations'

    def _build_query(
        self,
        properties: Any,
        include: Any = None,
        date_query: Any = None,
        start_date: Any = None,
        end_date: Any = None,
        **extra
    ) -> Dict[str, Any]:
        """
        Validate options in order and flatten them into query parameters

        The first violation raises; later options are not inspected.
        """
        property_ids = validate_property_list(properties)
        include = self._validate_include(include)
        date_query = validate_date_query(date_query)
        start_date = validate_iso_date(start_date, 'start_date')
        end_date = validate_iso_date(end_date, 'end_date')

        params = self._clean_params({
            'include': include,
            'date_query': date_query,
            'start_date': start_date,
            'end_date': end_date,
            **extra
        })

        for index, property_id in enumerate(property_ids):
            params[f'properties[{index}]'] = property_id

        return params

    def get_reservations(
        self,
        properties: List[str],
        include: Optional[str] = None,
        date_query: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        conversation_id: Optional[str] = None,
        last_message_at: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        platform_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get one page of reservations for the given properties

        Args:
            properties: Property UUIDs (required, non-empty)
            include: Comma-separated related resources
            date_query: 'checkin' or 'checkout'
            start_date: Range start, YYYY-MM-DD
            end_date: Range end, YYYY-MM-DD
            conversation_id: Filter by conversation
            last_message_at: Filter by last message timestamp
            page: Page number (1-based)
            per_page: Items per page
            platform_id: Filter by platform reservation id

        Returns:
            Page envelope ``{data, meta, links, included?}``

        Raises:
            ValidationError: before any request when an option is invalid
        """
        params = self._build_query(
            properties,
            include=include,
            date_query=date_query,
            start_date=start_date,
            end_date=end_date,
            conversation_id=conversation_id,
            last_message_at=last_message_at,
            page=page,
            per_page=per_page,
            platform_id=platform_id
        )

        try:
            response = self.client.get(self.base_path, params=params)
        except Exception as e:
            self._handle_request_error(e, 'get_reservations', page=page, property_count=len(properties))

        self._log_operation('get_reservations', page=page, count=len(response.get('data') or []))
        return response

    def get_all_reservations(
        self,
        properties: List[str],
        include: Optional[str] = None,
        date_query: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        **filters
    ) -> Dict[str, Any]:
        """
        Get every page of reservations, up to ``max_pages``

        Extra keyword filters (``conversation_id``, ``last_message_at``,
        ``platform_id``) are forwarded to every page request.

        Returns:
            ``{data, included, meta: {total_pages, total_reservations, fetched_pages[, error]}}``
        """
        # Validate once up front so a bad option never reaches the loop
        self._build_query(properties, include, date_query, start_date, end_date)

        def fetch_page(page: int, size: int) -> Dict[str, Any]:
            return self.get_reservations(
                properties,
                include=include,
                date_query=date_query,
                start_date=start_date,
                end_date=end_date,
                page=page,
                per_page=size,
                **filters
            )

        return self._fetch_all_pages(fetch_page, per_page=per_page, max_pages=max_pages)
