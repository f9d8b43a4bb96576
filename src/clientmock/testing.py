"""
clientmock Testing API

Module-level functions bound to a default registry on the process-wide
client configuration. Prefer an explicit ``MockRegistry`` (or the
``client_mock`` pytest fixture) when tests need isolation.

Example:
    from clientmock.testing import install, uninstall, mock_request, unused_mocks, m

    install()
    mock_request(method='get', url='https://api.example.com/users',
                 headers={'Authorization': m.string_containing('Bearer')},
                 response={'status': 200, 'body': []})
    ...
    assert unused_mocks() == 0
    uninstall()
"""

from typing import Any, Dict, Optional

from .client.client import Client
from .client.request import Request
from .client.response import Response
from .mock.entry import MockAssert, ResponseSpec
from .mock.matchers import m
from .mock.registry import MockRegistry
from .mock.resource import MockResource

default_registry = MockRegistry()


def mock_client(client: Client) -> MockResource:
    """High-level abstraction working directly on a client's resources."""
    return default_registry.mock_client(client)


def mock_request(
    method: Any = 'get',
    url: Any = None,
    body: Any = None,
    headers: Optional[Dict[str, Any]] = None,
    response: Optional[ResponseSpec] = None
) -> MockAssert:
    """Low-level abstraction, useful for automations."""
    return default_registry.mock_request(method=method, url=url, body=body, headers=headers, response=response)


def install():
    default_registry.install()


def uninstall():
    default_registry.uninstall()


def clear():
    default_registry.clear()


def unused_mocks() -> int:
    return default_registry.unused_mocks()


def lookup_response(request: Request) -> Response:
    return default_registry.lookup_response(request)


async def lookup_response_async(request: Request) -> Response:
    return await default_registry.lookup_response_async(request)


__all__ = [
    'default_registry',
    'mock_client',
    'mock_request',
    'install',
    'uninstall',
    'clear',
    'unused_mocks',
    'lookup_response',
    'lookup_response_async',
    'm',
]
