"""
Authentication Management for the Hospitable API Client

Process-wide credential store for the bearer token. All reads and writes of
the authentication state go through one lock; a background thread
re-validates the token against the API on a fixed interval.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

import requests

from ..core.config_manager import APIConfig, AuthConfig
from ..core.error_handler import AuthenticationError, ErrorHandler, HospitableError
from .credentials import AuthState, Credentials
from .request_builder import RequestBuilder
from .response_handler import StatusCodeHandler, TransportError


class TokenValidator:
    """Checks a token with one lightweight GET against the API"""

    def __init__(self, api_config: Optional[APIConfig] = None, session: Optional[requests.Session] = None):
        self.api_config = api_config or APIConfig()
        self.session = session or requests.Session()
        self.request_builder = RequestBuilder(self.api_config.base_url, self.api_config.user_agent)
        self.status_handler = StatusCodeHandler()
        self.logger = logging.getLogger(__name__)

    def __call__(self, credentials: Credentials) -> None:
        """
        Validate credentials

        Raises:
            AuthenticationError: ``invalid_token`` on 401, ``forbidden`` on 403
            TransportError: the request could not be completed
            APIError: any other non-2xx status
        """
        url = self.request_builder.build_url(self.api_config.validation_path)
        headers = self.request_builder.build_headers(credentials)
        timeout = (self.api_config.timeout / 1000, self.api_config.recv_timeout / 1000)

        try:
            response = self.session.get(url, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"Token validation request failed: {e}", reason=e) from e

        if response.status_code == 401:
            raise AuthenticationError("Token was rejected by the API", kind="invalid_token")
        if response.status_code == 403:
            raise AuthenticationError("Token is not allowed to access the API", kind="forbidden")

        self.status_handler.check(response)


class AuthenticationManager:
    """
    Single source of truth for the bearer token and authentication status.

    State machine: ``set_token`` authenticates and resets the failure counter,
    ``clear_auth`` returns to the empty state, and validation failures leave
    the client authenticated until ``max_validation_attempts`` consecutive
    failures, after which it is marked unauthenticated.
    """

    def __init__(
        self,
        config: Optional[AuthConfig] = None,
        validator: Optional[Callable[[Credentials], None]] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.config = config or AuthConfig()
        self.validator = validator or TokenValidator()
        self.error_handler = error_handler or ErrorHandler(__name__)
        self.max_validation_attempts = self.config.max_validation_attempts
        self.validation_interval = self.config.validation_interval_seconds
        self.logger = logging.getLogger(__name__)

        self._state = AuthState()
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._validation_thread: Optional[threading.Thread] = None

    # Token lifecycle

    def set_token(self, token: str) -> None:
        """Store a bearer token and mark the client authenticated"""
        if not isinstance(token, str) or not token:
            raise ValueError("Token must be a non-empty string")

        with self._lock:
            self.logger.info("Setting authentication token")
            self._state = replace(
                self._state,
                credentials=Credentials(token=token),
                authenticated=True,
                validation_attempts=0
            )

    def load_token_from_config(self) -> bool:
        """Load the configured access token, if any, as if set_token had been called

        Returns:
            True when a token was loaded
        """
        if not self.config.load_token_from_env:
            return False

        secret = self.config.access_token
        token = secret.get_secret_value() if secret is not None else ""
        if not token:
            self.logger.info("No HOSPITABLE_ACCESS_TOKEN found in environment")
            return False

        self.logger.info("Loading authentication token from environment")
        self.set_token(token)
        return True

    def get_token(self) -> str:
        """
        Raises:
            AuthenticationError: ``no_token`` when no token is set
        """
        with self._lock:
            credentials = self._state.credentials
        if credentials is None:
            raise AuthenticationError("No authentication token set", kind="no_token")
        return credentials.token

    def get_credentials(self) -> Credentials:
        """
        Raises:
            AuthenticationError: ``no_credentials`` when no token is set
        """
        with self._lock:
            credentials = self._state.credentials
        if credentials is None:
            raise AuthenticationError("No authentication credentials available", kind="no_credentials")
        return credentials

    def is_authenticated(self) -> bool:
        """Reflects the stored flag; no request is made"""
        with self._lock:
            return self._state.authenticated

    def get_state(self) -> AuthState:
        """Snapshot copy of the current state, for debugging"""
        with self._lock:
            return replace(self._state)

    def clear_auth(self) -> None:
        with self._lock:
            self.logger.info("Clearing authentication state")
            self._state = AuthState()

    # Validation

    def validate_token(self) -> None:
        """
        Validate the current token against the API

        Raises:
            AuthenticationError: ``no_token``, ``invalid_token`` or ``forbidden``
            TransportError / APIError: propagated from the validation request
        """
        with self._lock:
            credentials = self._state.credentials

        if credentials is None:
            self._record_failure(None)
            raise AuthenticationError("No authentication token set", kind="no_token")

        try:
            self.validator(credentials)
        except HospitableError:
            self._record_failure(credentials)
            raise

        self._record_success(credentials)

    def _record_success(self, credentials: Credentials):
        with self._lock:
            # The token may have been replaced or cleared while the request was in flight
            if self._state.credentials is not credentials:
                return
            self._state = replace(
                self._state,
                authenticated=True,
                last_validated=datetime.now(timezone.utc),
                validation_attempts=0
            )

    def _record_failure(self, credentials: Optional[Credentials]):
        with self._lock:
            if self._state.credentials is not credentials:
                return

            attempts = self._state.validation_attempts + 1
            if attempts >= self.max_validation_attempts:
                self.logger.error(f"Token validation failed {attempts} times, marking as unauthenticated")
                self._state = replace(self._state, authenticated=False, validation_attempts=attempts)
            else:
                self._state = replace(self._state, validation_attempts=attempts)

    # Background validation

    def start_periodic_validation(self) -> None:
        """Start the daemon thread that re-validates the token every interval"""
        with self._lock:
            if self._validation_thread and self._validation_thread.is_alive():
                return

            self._stop_event.clear()
            self._validation_thread = threading.Thread(
                target=self._validation_loop,
                name="hospitable-token-validator",
                daemon=True
            )
            self._validation_thread.start()
            self.logger.info(f"Periodic token validation every {self.validation_interval}s")

    def stop_periodic_validation(self, timeout: Optional[float] = 5.0) -> None:
        with self._lock:
            self._stop_event.set()
            thread, self._validation_thread = self._validation_thread, None

        # joined outside the lock; the loop takes it on every cycle
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout)

    def _validation_loop(self):
        while not self._stop_event.wait(self.validation_interval):
            self.run_periodic_validation()

    def run_periodic_validation(self) -> None:
        """One unattended validation cycle; failures are logged, never raised"""
        try:
            with self._lock:
                has_credentials = self._state.credentials is not None
            if not has_credentials:
                return

            try:
                self.validate_token()
            except HospitableError as e:
                self.logger.warning(f"Periodic token validation failed: [{e.kind}] {e}")

        except Exception as e:
            # Unexpected crash inside the cycle: restart from a clean state
            self.error_handler.handle_error(e, "Token validator crashed, resetting authentication state")
            with self._lock:
                self._state = AuthState()
