"""
Request Builder for the Hospitable API Client

Constructs absolute URLs, authorization headers and JSON bodies. All
failures here happen before any network traffic.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from .credentials import Credentials
from .response_handler import JSONEncodeError


class RequestBuilder:
    """Builds requests against a fixed API root"""

    def __init__(self, base_url: str, user_agent: Optional[str] = None):
        self.base_url = base_url.rstrip('/')
        self.user_agent = user_agent
        self.logger = logging.getLogger(__name__)

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join the base URL and path, appending URL-encoded query parameters"""
        url = f"{self.base_url}/{path.lstrip('/')}"

        query = {k: v for k, v in (params or {}).items() if v is not None}
        if query:
            url = f"{url}?{urlencode(query)}"

        return url

    def build_headers(self, credentials: Credentials) -> Dict[str, str]:
        headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'Authorization': f"{credentials.token_type} {credentials.token}"
        }
        if self.user_agent:
            headers['User-Agent'] = self.user_agent
        return headers

    def encode_body(self, body: Optional[Mapping[str, Any]]) -> Optional[str]:
        """Serialize a mapping body to JSON

        Raises:
            JSONEncodeError: body is not a mapping or holds unserializable values
        """
        if body is None:
            return None

        if not isinstance(body, Mapping):
            raise JSONEncodeError(f"Request body must be a mapping, got {type(body).__name__}")

        try:
            return json.dumps(body)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Failed to encode request body: {e}")
            raise JSONEncodeError(f"Failed to encode request body: {e}", reason=e) from e
