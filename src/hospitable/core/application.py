"""Hospitable Client Core

Wires configuration, logging, the credential store, the HTTP transport and
the resource clients into one object.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import requests

from .config_manager import ClientConfig, ConfigManager
from .error_handler import ErrorHandler
from .logging_manager import LoggingManager
from ..api.authentication import AuthenticationManager, TokenValidator
from ..api.client import HTTPClient
from ..api.credentials import AuthState, Credentials
from ..api.endpoints.property_endpoints import PropertyEndpoints
from ..api.endpoints.reservation_endpoints import ReservationEndpoints


class HospitableClient:
    """Main entry point for talking to the Hospitable API."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        config_path: Optional[Path] = None,
        session: Optional[requests.Session] = None,
        start_validation: Optional[bool] = None
    ):
        """Initialize the client.

        Args:
            config: Ready configuration; loaded through ConfigManager when omitted
            config_path: Optional directory holding YAML configuration files
            session: Optional requests session shared by transport and validator
            start_validation: Override ``auth.periodic_validation`` from config
        """
        self.error_handler = ErrorHandler()
        self.config_manager = ConfigManager(config_path)
        self.config = config or self.config_manager.load_config()

        self.logging_manager = LoggingManager()
        self.logging_manager.configure(self.config.logging)
        self.logger = LoggingManager.get_logger(__name__)

        self.session = session or requests.Session()
        self.auth = AuthenticationManager(
            self.config.auth,
            validator=TokenValidator(self.config.api, session=self.session),
            error_handler=self.error_handler
        )
        self.http = HTTPClient(self.config.api, auth_manager=self.auth, session=self.session)

        pagination = self.config.pagination
        self.properties = PropertyEndpoints(
            self.http,
            max_per_page=pagination.max_per_page,
            max_pages=pagination.properties_max_pages
        )
        self.reservations = ReservationEndpoints(
            self.http,
            max_per_page=pagination.max_per_page,
            max_pages=pagination.reservations_max_pages
        )

        self.auth.load_token_from_config()

        if start_validation is None:
            start_validation = self.config.auth.periodic_validation
        if start_validation:
            self.auth.start_periodic_validation()

        self.logger.info(f"Hospitable client ready ({self.config.api.base_url})")

    # Credentials

    def set_token(self, token: str) -> None:
        self.auth.set_token(token)

    def get_token(self) -> str:
        return self.auth.get_token()

    def get_credentials(self) -> Credentials:
        return self.auth.get_credentials()

    def authenticated(self) -> bool:
        return self.auth.is_authenticated()

    def validate_token(self) -> None:
        self.auth.validate_token()

    def clear_auth(self) -> None:
        self.auth.clear_auth()

    def get_auth_state(self) -> AuthState:
        return self.auth.get_state()

    # Raw requests

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get(path, params)

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.post(path, body)

    def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.put(path, body)

    def patch(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.patch(path, body)

    def delete(self, path: str) -> Any:
        return self.http.delete(path)

    # Resources

    def get_properties(self, **options) -> Dict[str, Any]:
        return self.properties.get_properties(**options)

    def get_property(self, uuid: str, include: Optional[str] = None) -> Dict[str, Any]:
        return self.properties.get_property(uuid, include=include)

    def get_all_properties(self, **options) -> Dict[str, Any]:
        return self.properties.get_all_properties(**options)

    def get_reservations(self, properties: List[str], **options) -> Dict[str, Any]:
        return self.reservations.get_reservations(properties, **options)

    def get_all_reservations(self, properties: List[str], **options) -> Dict[str, Any]:
        return self.reservations.get_all_reservations(properties, **options)

    # Lifecycle

    def shutdown(self):
        """Stop background validation and close the HTTP session."""
        self.logger.info("Shutting down Hospitable client")
        self.auth.stop_periodic_validation()
        self.http.close()

    def __enter__(self) -> 'HospitableClient':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
