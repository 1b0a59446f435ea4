"""
Module-level convenience API

Every function delegates to one lazily created, process-wide
``HospitableClient``. Use ``configure`` to replace it and ``shutdown`` to
release it.
"""

import threading
from typing import Any, Dict, List, Mapping, Optional

from .api.credentials import Credentials
from .core.application import HospitableClient

_default_client: Optional[HospitableClient] = None
_client_lock = threading.Lock()


def default_client() -> HospitableClient:
    global _default_client
    with _client_lock:
        if _default_client is None:
            _default_client = HospitableClient()
        return _default_client


def configure(**kwargs) -> HospitableClient:
    """Replace the default client, shutting down the previous one

    Keyword arguments are passed to ``HospitableClient``.
    """
    global _default_client
    client = HospitableClient(**kwargs)
    with _client_lock:
        previous, _default_client = _default_client, client
    if previous is not None:
        previous.shutdown()
    return client


def shutdown() -> None:
    """Stop background validation and close the default client's session"""
    global _default_client
    with _client_lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.shutdown()


# Credentials

def set_token(token: str) -> None:
    default_client().set_token(token)


def get_token() -> str:
    return default_client().get_token()


def get_credentials() -> Credentials:
    return default_client().get_credentials()


def authenticated() -> bool:
    return default_client().authenticated()


def validate_token() -> None:
    default_client().validate_token()


def clear_auth() -> None:
    default_client().clear_auth()


# Raw requests

def get(path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
    return default_client().get(path, params)


def post(path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
    return default_client().post(path, body)


def put(path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
    return default_client().put(path, body)


def patch(path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
    return default_client().patch(path, body)


def delete(path: str) -> Any:
    return default_client().delete(path)


# Resources

def get_properties(**options) -> Dict[str, Any]:
    return default_client().get_properties(**options)


def get_property(uuid: str, include: Optional[str] = None) -> Dict[str, Any]:
    return default_client().get_property(uuid, include=include)


def get_all_properties(**options) -> Dict[str, Any]:
    return default_client().get_all_properties(**options)


def get_reservations(properties: List[str], **options) -> Dict[str, Any]:
    return default_client().get_reservations(properties, **options)


def get_all_reservations(properties: List[str], **options) -> Dict[str, Any]:
    return default_client().get_all_reservations(properties, **options)
