"""
Core HTTP Client for the Hospitable API

Session-backed transport: one request per call, no retries. Every failure
is raised as a classified error from the shared taxonomy.
"""

import time
import logging
import threading
from typing import Any, Dict, Mapping, Optional

import requests

from ..core.config_manager import APIConfig
from ..core.error_handler import AuthenticationError
from .authentication import AuthenticationManager
from .request_builder import RequestBuilder
from .response_handler import ResponseHandler, TransportError


class PerformanceMetrics:
    """Performance metrics tracking for API calls"""

    def __init__(self):
        self.request_count = 0
        self.success_count = 0
        self.error_count = 0
        self.total_response_time = 0.0
        self.last_request_time = None
        self._lock = threading.Lock()

    def record_request(self, response_time: float, success: bool):
        """Record metrics for a completed request"""
        with self._lock:
            self.request_count += 1
            self.total_response_time += response_time
            self.last_request_time = time.time()

            if success:
                self.success_count += 1
            else:
                self.error_count += 1

    def get_metrics(self) -> Dict[str, Any]:
        """Get current performance metrics"""
        with self._lock:
            if self.request_count == 0:
                return {
                    'request_count': 0,
                    'success_count': 0,
                    'error_count': 0,
                    'success_rate': 0.0,
                    'average_response_time': 0.0,
                    'last_request_time': None
                }

            return {
                'request_count': self.request_count,
                'success_count': self.success_count,
                'error_count': self.error_count,
                'success_rate': self.success_count / self.request_count,
                'average_response_time': self.total_response_time / self.request_count,
                'last_request_time': self.last_request_time
            }

    def reset(self):
        with self._lock:
            self.request_count = 0
            self.success_count = 0
            self.error_count = 0
            self.total_response_time = 0.0
            self.last_request_time = None


class HTTPClient:
    """
    HTTP client for the Hospitable Public API.

    Features:
    - Bearer authentication from the shared credential store
    - Connect/receive timeouts and a bounded redirect chain
    - Status classification into typed errors
    - Request metrics
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        auth_manager: Optional[AuthenticationManager] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP client

        Args:
            config: API configuration (base URL, timeouts, redirect limit)
            auth_manager: Credential store supplying the bearer token
            session: Optional pre-built requests session
        """
        self.config = config or APIConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.timeout = (self.config.timeout / 1000, self.config.recv_timeout / 1000)

        self.session = session or requests.Session()
        self.auth_manager = auth_manager or AuthenticationManager()
        self.request_builder = RequestBuilder(self.base_url, self.config.user_agent)
        self.response_handler = ResponseHandler()
        self.metrics = PerformanceMetrics()

        self.logger = logging.getLogger(__name__)

        self._configure_session()

    def _configure_session(self):
        self.session.max_redirects = self.config.max_redirects

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Make an authenticated HTTP request

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: API path relative to the base URL
            params: URL query parameters
            body: JSON body mapping

        Returns:
            Decoded JSON body (an empty body decodes to {})

        Raises:
            JSONEncodeError, AuthenticationError (no_credentials), TransportError,
            APIError subclasses, JSONDecodeError
        """
        method = method.upper()
        encoded_body = self.request_builder.encode_body(body)

        try:
            credentials = self.auth_manager.get_credentials()
        except AuthenticationError:
            self.logger.error("No authentication credentials available")
            raise

        url = self.request_builder.build_url(path, params)
        headers = self.request_builder.build_headers(credentials)

        start_time = time.time()
        success = False

        try:
            self.logger.debug(f"Making {method} request to {url}")

            try:
                response = self.session.request(
                    method,
                    url,
                    data=encoded_body,
                    headers=headers,
                    timeout=self.timeout,
                    allow_redirects=True
                )
            except requests.RequestException as e:
                self.logger.error(f"HTTP request failed: {e}")
                raise TransportError(f"HTTP request failed: {e}", reason=e) from e

            self.logger.debug(f"Received response with status {response.status_code}")
            result = self.response_handler.handle_response(
                response, request_info={'method': method, 'url': url}
            )

            success = True
            return result

        finally:
            self.metrics.record_request(time.time() - start_time, success)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Make GET request"""
        return self.request('GET', path, params=params)

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Make POST request"""
        return self.request('POST', path, body=body if body is not None else {})

    def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Make PUT request"""
        return self.request('PUT', path, body=body if body is not None else {})

    def patch(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Make PATCH request"""
        return self.request('PATCH', path, body=body if body is not None else {})

    def delete(self, path: str) -> Any:
        """Make DELETE request"""
        return self.request('DELETE', path)

    def get_metrics(self) -> Dict[str, Any]:
        return self.metrics.get_metrics()

    def reset_metrics(self):
        self.metrics.reset()

    def close(self):
        """Close the HTTP session"""
        if self.session:
            self.session.close()
            self.logger.info("HTTP client session closed")
