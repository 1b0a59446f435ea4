"""
Base Endpoint Class for the Hospitable API

Abstract base class providing common functionality for all resource
clients: path building, include validation, logging and page draining.
"""

import logging
import math
from datetime import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ...core.error_handler import HospitableError
from ..client import HTTPClient
from ..response_handler import APIError
from ..validators import validate_include


@dataclass
class PageAccumulator:
    """Running state of a page-draining loop"""
    data: List[Any] = field(default_factory=list)
    included: List[Any] = field(default_factory=list)
    page: int = 0
    total: int = 0
    error: Optional[str] = None

    def add_page(self, response: Dict[str, Any]):
        self.data.extend(response.get('data') or [])
        self.included.extend(response.get('included') or [])
        meta = response.get('meta') or {}
        self.total = meta.get('total', 0) or 0
        self.page += 1


class BaseEndpoint(ABC):
    """
    Abstract base class for Hospitable API resource clients.

    Provides common functionality including:
    - HTTP client integration
    - Include list validation
    - Query parameter cleanup
    - Page draining with a safety page ceiling
    """

    # Related resources the endpoint accepts in ``include``
    VALID_INCLUDES: Sequence[str] = ()

    # Name used for the ``total_<entity>`` key of aggregated responses
    ENTITY_NAME = "items"

    def __init__(self, client: HTTPClient, max_per_page: int = 100, max_pages: int = 50):
        """
        Initialize endpoint with HTTP client

        Args:
            client: Configured HTTPClient instance
            max_per_page: Page size ceiling declared by the API
            max_pages: Default safety ceiling for page draining
        """
        self.client = client
        self.max_per_page = max_per_page
        self.default_max_pages = max_pages
        self.logger = logging.getLogger(self.__class__.__module__)
        self.base_path = self._get_base_path()

    @abstractmethod
    def _get_base_path(self) -> str:
        """Return the base API path for this endpoint (e.g., '/properties')"""

    def _build_endpoint(self, path: str = '') -> str:
        endpoint = self.base_path

        if path:
            endpoint = endpoint.rstrip('/') + '/' + path.lstrip('/')

        return endpoint

    def _validate_include(self, include: Any) -> Optional[str]:
        return validate_include(include, self.VALID_INCLUDES)

    @staticmethod
    def _clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
        """Remove None values"""
        return {k: v for k, v in params.items() if v is not None}

    def _handle_request_error(self, error: Exception, operation: str, **context) -> None:
        """
        Log a failed request with its context and re-raise it

        Args:
            error: The exception that occurred
            operation: Description of the operation that failed
            **context: Additional context for logging
        """
        error_context = {
            'operation': operation,
            'endpoint_class': self.__class__.__name__,
            'timestamp': datetime.now().isoformat(),
            **context
        }

        if isinstance(error, APIError):
            self.logger.error(
                f"API error during {operation}: {error} (status: {error.status_code})",
                extra={'error_context': error_context}
            )
        elif isinstance(error, HospitableError):
            self.logger.error(
                f"Request failed during {operation}: [{error.kind}] {error}",
                extra={'error_context': error_context}
            )
        else:
            self.logger.error(
                f"Unexpected error during {operation}: {error}",
                extra={'error_context': error_context},
                exc_info=True
            )

        raise error

    def _log_operation(self, operation: str, **context):
        self.logger.debug(f"Completed {operation} {context}")

    # Pagination

    def _fetch_all_pages(
        self,
        fetch_page: Callable[[int, int], Dict[str, Any]],
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Drain pages 1..N of a list endpoint into one aggregated response

        The first page is fetched unguarded, so its failure propagates. A
        failure on any later page stops the loop and is recorded as
        ``meta.error`` alongside the data gathered so far.

        Args:
            fetch_page: Callable taking (page, per_page) and returning the page envelope
            per_page: Requested page size, clamped to the API ceiling
            max_pages: Safety ceiling on the number of pages fetched

        Returns:
            ``{data, included, meta: {total_pages, total_<entity>, fetched_pages[, error]}}``
        """
        per_page = min(per_page or self.max_per_page, self.max_per_page)
        max_pages = max_pages or self.default_max_pages

        acc = PageAccumulator()
        acc.add_page(fetch_page(1, per_page))
        total_pages = math.ceil(acc.total / per_page)

        while acc.page < total_pages and acc.page < max_pages:
            next_page = acc.page + 1
            try:
                response = fetch_page(next_page, per_page)
            except HospitableError as e:
                acc.error = f"Failed to fetch page {next_page}: [{e.kind}] {e}"
                self.logger.warning(acc.error)
                break

            acc.add_page(response)
            total_pages = math.ceil(acc.total / per_page)

        if acc.error is None and acc.page < total_pages:
            self.logger.warning(
                f"Stopped after {acc.page} of {total_pages} pages (max_pages={max_pages})"
            )

        meta = {
            'total_pages': total_pages,
            f'total_{self.ENTITY_NAME}': acc.total,
            'fetched_pages': acc.page
        }
        if acc.error is not None:
            meta['error'] = acc.error

        self.logger.info(f"Retrieved {len(acc.data)} {self.ENTITY_NAME} across {acc.page} pages")

        return {
            'data': acc.data,
            'included': acc.included,
            'meta': meta
        }
