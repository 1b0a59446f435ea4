"""
Pytest configuration and shared fixtures for Hospitable client testing.

HTTP is never exercised live: transports get a mocked ``requests.Session``
whose ``request`` returns real ``requests.Response`` objects built here.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional
from unittest.mock import Mock

import pytest
import requests

from hospitable.api.authentication import AuthenticationManager
from hospitable.api.client import HTTPClient
from hospitable.api.endpoints.property_endpoints import PropertyEndpoints
from hospitable.api.endpoints.reservation_endpoints import ReservationEndpoints
from hospitable.core.config_manager import APIConfig, AuthConfig, ClientConfig, LoggingConfig

TEST_TOKEN = "test-token-abc123"
TEST_BASE_URL = "https://api.test.local/v2"


@dataclass
class TestConfig:
    """Test configuration settings"""
    base_url: str = TEST_BASE_URL
    token: str = TEST_TOKEN
    timeout_ms: int = 5000


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    content: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    url: str = TEST_BASE_URL
) -> requests.Response:
    """Build a real requests.Response with the given status and body"""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if content is None:
        content = json.dumps(json_body).encode() if json_body is not None else b""
    response._content = content
    response.headers.update(headers or {'Content-Type': 'application/json'})
    response.encoding = 'utf-8'
    return response


@pytest.fixture(scope="session")
def test_config():
    """Global test configuration"""
    return TestConfig()


# Configuration Fixtures
@pytest.fixture
def api_config(test_config):
    return APIConfig(
        base_url=test_config.base_url,
        timeout=test_config.timeout_ms,
        recv_timeout=test_config.timeout_ms
    )


@pytest.fixture
def auth_config():
    """Auth config that never reads the environment or starts threads"""
    return AuthConfig(load_token_from_env=False, periodic_validation=False)


@pytest.fixture
def client_config(api_config, auth_config):
    return ClientConfig(
        environment="testing",
        api=api_config,
        auth=auth_config,
        logging=LoggingConfig(level="DEBUG", log_to_console=False)
    )


# Transport Fixtures
@pytest.fixture
def mock_session():
    """Mocked requests session; set ``request.return_value`` or ``side_effect``"""
    session = Mock(spec=requests.Session)
    session.request.return_value = make_response(200, {"data": []})
    session.get.return_value = make_response(200, {"data": []})
    return session


@pytest.fixture
def mock_validator():
    return Mock(return_value=None)


@pytest.fixture
def auth_manager(auth_config, mock_validator, test_config):
    manager = AuthenticationManager(auth_config, validator=mock_validator)
    manager.set_token(test_config.token)
    return manager


@pytest.fixture
def http_client(api_config, auth_manager, mock_session):
    return HTTPClient(api_config, auth_manager=auth_manager, session=mock_session)


@pytest.fixture
def property_endpoints(http_client):
    return PropertyEndpoints(http_client, max_per_page=100, max_pages=50)


@pytest.fixture
def reservation_endpoints(http_client):
    return ReservationEndpoints(http_client, max_per_page=100, max_pages=20)


@pytest.fixture
def sent_request(mock_session):
    """Accessor for the (method, url, kwargs) of the last session.request call"""
    def last_call():
        args, kwargs = mock_session.request.call_args
        return args[0], args[1], kwargs
    return last_call
