"""
Response Handler for the Hospitable API Client

Classifies HTTP responses by status code, decodes JSON bodies and records
an audit line per response.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from ..core.error_handler import ErrorSeverity, HospitableError


class APIError(HospitableError):
    """Base class for classified HTTP failures"""

    kind = "api_error"

    def __init__(self, message: str, status_code: Optional[int] = None,
                 payload: Optional[Any] = None,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        super().__init__(message, severity=severity, details={'status_code': status_code, 'payload': payload})
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(APIError):
    """HTTP 401"""
    kind = "unauthorized"


class ForbiddenError(APIError):
    """HTTP 403"""
    kind = "forbidden"


class NotFoundError(APIError):
    """HTTP 404"""
    kind = "not_found"


class ClientError(APIError):
    """Any other 4xx status"""
    kind = "client_error"


class ServerError(APIError):
    """Any 5xx status"""
    kind = "server_error"


class UnexpectedStatusError(APIError):
    """Status outside the 2xx, 4xx and 5xx ranges"""
    kind = "unexpected_status"


class TransportError(HospitableError):
    """Raised when the request never produced a response (DNS, refused, timeout)"""

    kind = "http_error"

    def __init__(self, message: str, reason: Optional[BaseException] = None):
        super().__init__(message, severity=ErrorSeverity.HIGH, details={'reason': repr(reason)})
        self.reason = reason


class JSONDecodeError(HospitableError):
    """Raised when a successful response body is not valid JSON"""

    kind = "json_decode_error"

    def __init__(self, message: str, reason: Optional[BaseException] = None):
        super().__init__(message, details={'reason': str(reason)})
        self.reason = reason


class JSONEncodeError(HospitableError):
    """Raised when a request body cannot be serialized; no request is sent"""

    kind = "json_encode_error"

    def __init__(self, message: str, reason: Optional[BaseException] = None):
        super().__init__(message, severity=ErrorSeverity.LOW, details={'reason': str(reason)})
        self.reason = reason


@dataclass
class ResponseMetadata:
    """Metadata about the response for audit and debugging"""
    status_code: int
    response_time_ms: float
    content_length: int
    content_type: str
    timestamp: datetime
    request_id: Optional[str] = None


class StatusCodeHandler:
    """Maps HTTP status codes onto the error taxonomy"""

    # Exact status mappings; ranges are handled in classify()
    ERROR_MAPPINGS = {
        401: (UnauthorizedError, "Authentication failed"),
        403: (ForbiddenError, "Access forbidden"),
        404: (NotFoundError, "Resource not found"),
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def check(self, response: requests.Response) -> None:
        """
        Raise the classified error for a non-2xx response

        Raises:
            APIError subclass matching the status code
        """
        status_code = response.status_code

        if 200 <= status_code < 300:
            return

        error_class, fallback_message = self.classify(status_code)
        payload = self._extract_error_payload(response, fallback_message)

        if error_class is ServerError:
            self.logger.error(f"Server error ({status_code})")
        else:
            self.logger.warning(f"{fallback_message} ({status_code})")

        message = fallback_message
        if isinstance(payload, dict) and payload.get('message'):
            message = str(payload['message'])

        raise error_class(message, status_code=status_code, payload=payload)

    def classify(self, status_code: int):
        """Return the (error class, fallback message) pair for a failing status"""
        if status_code in self.ERROR_MAPPINGS:
            return self.ERROR_MAPPINGS[status_code]
        if 400 <= status_code < 500:
            return ClientError, "Client error"
        if 500 <= status_code < 600:
            return ServerError, "Server error"
        return UnexpectedStatusError, "Unexpected response"

    @staticmethod
    def _extract_error_payload(response: requests.Response, fallback_message: str) -> Any:
        """Decode the error body, or synthesize a minimal payload"""
        try:
            return json.loads(response.content)
        except (ValueError, TypeError):
            return {'message': fallback_message}


class ResponseParser:
    """Decodes successful response bodies"""

    @staticmethod
    def parse_json_response(response: requests.Response) -> Any:
        """Parse JSON body; an empty body decodes to an empty mapping"""
        content = response.content or b''
        if not content.strip():
            return {}

        try:
            return json.loads(content)
        except ValueError as e:
            raise JSONDecodeError(f"Invalid JSON response: {e}", reason=e) from e


class AuditLogger:
    """Logs one line per API response"""

    def __init__(self, logger_name: str = None):
        self.logger = logging.getLogger(logger_name or __name__)

    def log_response(self, metadata: ResponseMetadata, request_info: Dict[str, Any] = None):
        log_data = {
            'timestamp': metadata.timestamp.isoformat(),
            'status_code': metadata.status_code,
            'response_time_ms': round(metadata.response_time_ms, 2),
            'request_id': metadata.request_id,
            'content_length': metadata.content_length
        }

        if request_info:
            log_data.update({
                'method': request_info.get('method'),
                'url': request_info.get('url')
            })

        self.logger.debug(f"API Response: {json.dumps(log_data)}")


class ResponseHandler:
    """
    Response handler for Hospitable API responses.

    Features:
    - Status code classification into typed errors
    - JSON decoding with empty-body tolerance
    - Metadata extraction and audit logging
    """

    def __init__(self):
        self.status_handler = StatusCodeHandler()
        self.parser = ResponseParser()
        self.audit_logger = AuditLogger()
        self.logger = logging.getLogger(__name__)

    def handle_response(
        self,
        response: requests.Response,
        request_info: Dict[str, Any] = None
    ) -> Any:
        """
        Process HTTP response

        Args:
            response: requests.Response object
            request_info: Information about the original request for logging

        Returns:
            Decoded JSON body

        Raises:
            APIError subclasses for non-2xx statuses, JSONDecodeError for bad bodies
        """
        metadata = self._extract_metadata(response)
        self.audit_logger.log_response(metadata, request_info)

        self.status_handler.check(response)

        return self.parser.parse_json_response(response)

    def _extract_metadata(self, response: requests.Response) -> ResponseMetadata:
        response_time_ms = 0.0
        elapsed = getattr(response, 'elapsed', None)
        if elapsed is not None:
            response_time_ms = elapsed.total_seconds() * 1000

        headers = getattr(response, 'headers', None) or {}

        return ResponseMetadata(
            status_code=response.status_code,
            response_time_ms=response_time_ms,
            content_length=len(response.content or b''),
            content_type=headers.get('content-type', ''),
            timestamp=datetime.now(),
            request_id=headers.get('x-request-id')
        )
