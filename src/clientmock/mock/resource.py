"""
clientmock Mock Resource

Client-bound mock entry. The request pattern is derived from the client's
own resource table, and the client's middleware can be replayed so the
pattern carries whatever the pre-send hooks inject (auth headers, tokens).
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from ..client.client import Client
from ..client.middleware import prepare_request
from ..client.request import Request
from .entry import MockRequest

logger = logging.getLogger("clientmock.mock")


class MockResource:
    """
    Mock entry built from a client's resource definition.

    Example:
        mock = registry.mock_client(client)
        (mock.resource('User')
             .method('byId')
             .with_(params={'id': 1})
             .status(200)
             .response({'id': 1, 'name': 'Jane'}))

        await client.request('User', 'byId', params={'id': 1})
        assert mock.calls_count() == 1
    """

    def __init__(self, id: int, client: Client):
        """
        Initialize mock resource.

        Args:
            id: Registration id, assigned by the store
            client: Client whose resource table and middleware are used
        """
        self.id = id
        self.client = client
        self.pending_middleware_execution = True

        self._resource: Optional[str] = None
        self._method: Optional[str] = None
        self._params: Dict[str, Any] = {}
        self._body: Any = None
        self._headers: Dict[str, Any] = {}

        self._status = 200
        self._response_headers: Dict[str, Any] = {}
        self._response_body: Any = None
        self._response_handler: Optional[Callable[[Request], Any]] = None

        self._calls: List[Request] = []
        self._final_request: Optional[Request] = None
        self._mock_request: Optional[MockRequest] = None
        self._replay: Optional[asyncio.Future] = None

    # Builder

    def resource(self, name: str) -> 'MockResource':
        self._resource = name
        return self._invalidate()

    def method(self, name: str) -> 'MockResource':
        self._method = name
        return self._invalidate()

    def with_(
        self,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None
    ) -> 'MockResource':
        """Constrain the request: path/query params, body, and headers (may be matchers)."""
        self._params = dict(params or {})
        self._body = body
        self._headers = dict(headers or {})
        return self._invalidate()

    def status(self, status: int) -> 'MockResource':
        self._status = status
        return self._invalidate()

    def headers(self, headers: Dict[str, Any]) -> 'MockResource':
        self._response_headers = dict(headers)
        return self._invalidate()

    def response(self, body: Any) -> 'MockResource':
        """Set the response body, or a callable ``request -> body`` evaluated at match time."""
        if callable(body):
            self._response_handler = body
            self._response_body = None
        else:
            self._response_handler = None
            self._response_body = body
        return self._invalidate()

    def _invalidate(self) -> 'MockResource':
        self._mock_request = None
        return self

    # Middleware replay

    async def execute_middleware_stack(self) -> None:
        """
        Run the client's pre-send hooks for this mock once.

        The transformed request becomes the pattern matched against. After
        the first run this returns immediately.
        """
        if not self.pending_middleware_execution:
            return

        if self._replay is None:
            self._replay = asyncio.ensure_future(self._run_middleware())
        await self._replay

    async def _run_middleware(self) -> None:
        try:
            final_request = await prepare_request(self.client.middleware, self._build_request())
        except BaseException:
            self._replay = None
            raise

        self._final_request = final_request
        self.pending_middleware_execution = False
        self._mock_request = None
        logger.debug(f"Replayed middleware for mock {self.id}: {final_request!r}")

    # Entry contract

    def _build_request(self) -> Request:
        if self._resource is None or self._method is None:
            raise ValueError(f"Mock {self.id} needs a resource and a method")

        return self.client.build_request(
            self._resource,
            self._method,
            params=self._params,
            body=self._body,
            headers=self._headers
        )

    def _response_spec(self, request: Request) -> Dict[str, Any]:
        body = self._response_handler(request) if self._response_handler else self._response_body
        return {
            'status': self._status,
            'headers': dict(self._response_headers),
            'body': body
        }

    def to_mock_request(self) -> MockRequest:
        """
        Concrete mock for the current builder state.

        Uses the replayed request when middleware already ran, the plain
        built request otherwise. Calls carry over when the mock is rebuilt.
        """
        if self._mock_request is None:
            request = self._final_request or self._build_request()
            self._mock_request = MockRequest(
                self.id,
                method=request.method(),
                url=request.url(),
                body=request.body(),
                headers=request.headers(),
                response=self._response_spec
            )
            self._mock_request.calls = self._calls
        return self._mock_request

    # Assertions

    def calls(self) -> List[Request]:
        return list(self._calls)

    def most_recent_call(self) -> Optional[Request]:
        return self._calls[-1] if self._calls else None

    def calls_count(self) -> int:
        return len(self._calls)

    def __repr__(self) -> str:
        return f"MockResource(id={self.id}, {self._resource}.{self._method})"
