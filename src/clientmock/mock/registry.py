"""
clientmock Mock Registry

Context object owning a match store, its resolver and the gateway
substitution. Tests create one (or use the default from
``clientmock.testing``), install it, register mocks and assert on usage.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ..client.client import Client
from ..client.configs import Configs, configs as default_configs
from ..client.gateway.base import Gateway
from ..client.request import Request
from ..client.response import Response
from .entry import MockAssert, MockRequest, ResponseSpec
from .errors import MockError, PREFIX
from .gateway import MockGateway
from .resolver import Resolver
from .resource import MockResource
from .store import MatchStore

logger = logging.getLogger("clientmock.mock")


class MockRegistry:
    """
    Registry of mocks for one test scope.

    Example:
        registry = MockRegistry()
        with registry.installed():
            registry.mock_request(
                method='get',
                url='https://api.example.com/users',
                response={'status': 200, 'body': [{'id': 1}]}
            )
            response = client.call('User', 'all')
            assert registry.unused_mocks() == 0
    """

    def __init__(self, configs: Optional[Configs] = None):
        """
        Initialize registry.

        Args:
            configs: Client configuration whose gateway slot is substituted
                     (defaults to the process-wide one)
        """
        self.configs = configs or default_configs
        self.store = MatchStore()
        self.resolver = Resolver(self.store, self.configs)
        self._original_gateway: Optional[Gateway] = None
        self._installed = False

    # Registration

    def mock_client(self, client: Client) -> MockResource:
        """
        High-level registration bound to a client's resource table.

        Returns:
            MockResource builder, also usable for assertions
        """
        entry = MockResource(self.store.next_id(), client)
        self.store.register(entry)
        return entry

    def mock_request(
        self,
        method: Any = 'get',
        url: Any = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        response: Optional[ResponseSpec] = None
    ) -> MockAssert:
        """
        Low-level registration from raw request parts.

        Args:
            method: HTTP method (case-insensitive)
            url: Literal url or matcher
            body: Literal body, matcher, or None for unconstrained
            headers: Header name -> literal or matcher
            response: ``{status, headers, body}`` or a callable producing it

        Returns:
            MockAssert handle
        """
        entry = MockRequest(
            self.store.next_id(),
            method=method,
            url=url,
            body=body,
            headers=headers,
            response=response
        )
        self.store.register(entry)
        return entry.assert_object()

    # Lifecycle

    @property
    def is_installed(self) -> bool:
        return self._installed

    def install(self):
        """
        Replace the configured gateway with the mock gateway.

        Raises:
            MockError: If this registry is already installed
        """
        if self.is_installed:
            raise MockError(f"{PREFIX} Mock gateway is already installed, call uninstall() first")

        self._original_gateway = self.configs.gateway
        self.configs.gateway = MockGateway(self.resolver)
        self._installed = True
        logger.info(f"Installed mock gateway (replacing {type(self._original_gateway).__name__})")

    def uninstall(self):
        """Clear all mocks and restore the original gateway. No-op if not installed."""
        self.clear()
        if self._installed:
            self.configs.gateway = self._original_gateway
            self._original_gateway = None
            self._installed = False
            logger.info("Uninstalled mock gateway")

    @contextmanager
    def installed(self) -> Iterator['MockRegistry']:
        """Install for the duration of a ``with`` block, restoring on any exit."""
        self.install()
        try:
            yield self
        finally:
            self.uninstall()

    def clear(self):
        """Remove every registered mock."""
        self.store.clear()

    def unused_mocks(self) -> int:
        """Number of registered mocks that were never called."""
        return self.store.unused_count()

    # Lookup

    def lookup_response(self, request: Request) -> Response:
        return self.resolver.lookup_response(request)

    async def lookup_response_async(self, request: Request) -> Response:
        return await self.resolver.lookup_response_async(request)
