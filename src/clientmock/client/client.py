"""
clientmock Client

Small declarative HTTP client: a table of resources and methods that
builds requests, runs them through middleware and hands them to the
configured gateway.
"""

import logging
import re
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlencode

from .configs import Configs, configs as default_configs
from .middleware import Middleware, prepare_request, prepare_request_sync
from .request import Request
from .response import Response

logger = logging.getLogger("clientmock.client")

PATH_PARAM = re.compile(r'\{(\w+)\}')


class Client:
    """
    Declarative HTTP client.

    Resources map method names to a definition with ``method`` and ``path``.
    Path placeholders (``{id}``) are filled from params, remaining params go
    to the query string.

    Example:
        client = Client(
            host='https://api.example.com',
            resources={
                'User': {
                    'all': {'path': '/users'},
                    'byId': {'path': '/users/{id}'},
                    'create': {'method': 'post', 'path': '/users'},
                }
            },
            middleware=[AuthMiddleware('token')]
        )
        response = await client.request('User', 'byId', params={'id': 1})
    """

    def __init__(
        self,
        host: str,
        resources: Dict[str, Dict[str, Dict[str, Any]]],
        middleware: Iterable[Middleware] = (),
        configs: Optional[Configs] = None
    ):
        """
        Initialize client.

        Args:
            host: Base URL prepended to every path
            resources: Resource name -> method name -> definition
            middleware: Pre-send hooks, run in order
            configs: Transport configuration (defaults to the process-wide one)
        """
        self.host = host.rstrip('/')
        self.resources = resources
        self.middleware = list(middleware)
        self.configs = configs or default_configs

    def definition(self, resource: str, method: str) -> Dict[str, Any]:
        """
        Look up a method definition.

        Raises:
            ValueError: If the resource or method is unknown
        """
        if resource not in self.resources:
            raise ValueError(f"Unknown resource '{resource}', available: {list(self.resources)}")

        methods = self.resources[resource]
        if method not in methods:
            raise ValueError(f"Unknown method '{resource}.{method}', available: {list(methods)}")

        return methods[method]

    def build_request(
        self,
        resource: str,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None
    ) -> Request:
        """Build the request for a resource method without running middleware."""
        definition = self.definition(resource, method)
        params = dict(params or {})

        def fill(match):
            name = match.group(1)
            if name not in params:
                raise ValueError(f"Missing path param '{name}' for {resource}.{method}")
            return str(params.pop(name))

        path = PATH_PARAM.sub(fill, definition['path'])
        url = f"{self.host}{path}"
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"

        merged_headers = dict(definition.get('headers') or {})
        merged_headers.update(headers or {})

        return Request(
            method=definition.get('method', 'get'),
            url=url,
            body=body,
            headers=merged_headers
        )

    async def request(
        self,
        resource: str,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None
    ) -> Response:
        """Send a request through middleware and the async gateway path."""
        request = self.build_request(resource, method, params, body, headers)
        request = await prepare_request(self.middleware, request)
        logger.debug(f"{resource}.{method} -> {request.method().upper()} {request.url()}")
        return await self.configs.gateway.call_async(request)

    def call(
        self,
        resource: str,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None
    ) -> Response:
        """Send a request through middleware and the blocking gateway path."""
        request = self.build_request(resource, method, params, body, headers)
        request = prepare_request_sync(self.middleware, request)
        logger.debug(f"{resource}.{method} -> {request.method().upper()} {request.url()}")
        return self.configs.gateway.call(request)
