"""
clientmock Mock Entry

A registered expectation pairing a request pattern with a response producer.

Matching rules:
- method: case-insensitive
- url: literal urls compare with query params sorted
- body: absent means unconstrained; literals compare JSON-aware
- headers: subset constraint, names are case-insensitive
"""

from typing import Any, Callable, Dict, List, Optional, Union

from ..client.request import Request
from ..client.response import Response
from ..client.utils import lower_keys, normalize_body, sort_url_query
from .matchers import Literal, Matcher, as_matcher

ResponseSpec = Union[Dict[str, Any], Callable[[Request], Dict[str, Any]]]


def _method_equals(expected: Any, actual: Any) -> bool:
    return str(expected).lower() == str(actual).lower()


def _url_equals(expected: Any, actual: Any) -> bool:
    return sort_url_query(str(expected)) == sort_url_query(str(actual))


def _body_equals(expected: Any, actual: Any) -> bool:
    return normalize_body(expected) == normalize_body(actual)


def _header_equals(expected: Any, actual: Any) -> bool:
    if actual is None:
        return False
    return expected == actual or str(expected) == str(actual)


class MockRequest:
    """
    Low-level mock entry.

    Matching never mutates the pattern fields; it only appends to ``calls``.

    Example:
        mock = MockRequest(1, method='get', url='https://api.example.com/users',
                           response={'status': 200, 'body': [{'id': 1}]})
        if mock.is_exact_match(request):
            response = mock.call(request)
    """

    pending_middleware_execution = False

    def __init__(
        self,
        id: int,
        method: Any = 'get',
        url: Any = None,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        response: Optional[ResponseSpec] = None
    ):
        """
        Initialize mock entry.

        Args:
            id: Registration id, assigned by the store
            method: HTTP method (case-insensitive) or matcher
            url: Literal url or matcher
            body: Literal body, matcher, or None for unconstrained
            headers: Header name -> literal or matcher
            response: ``{status, headers, body}`` or a callable producing it
        """
        if url is None:
            raise ValueError("Mock url is required")

        self.id = id
        self.method = as_matcher(method.lower() if isinstance(method, str) else method)
        self.url = as_matcher(url)
        self.body = None if body is None else as_matcher(body)
        self.headers: Dict[str, Matcher] = {
            name: as_matcher(value) for name, value in lower_keys(headers).items()
        }
        self.response = response if response is not None else {}
        self.calls: List[Request] = []

    def is_exact_match(self, request: Request) -> bool:
        return (
            self.is_partial_match(request)
            and self._body_match(request)
            and self._headers_match(request)
        )

    def is_partial_match(self, request: Request) -> bool:
        """Method and url match, body and headers ignored."""
        return (
            self.method.matches(request.method(), _method_equals)
            and self.url.matches(request.url(), _url_equals)
        )

    def _body_match(self, request: Request) -> bool:
        if self.body is None:
            return True
        return self.body.matches(request.body(), _body_equals)

    def _headers_match(self, request: Request) -> bool:
        request_headers = request.headers()
        return all(
            matcher.matches(request_headers.get(name), _header_equals)
            for name, matcher in self.headers.items()
        )

    def call(self, request: Request) -> Response:
        """
        Record ``request`` and produce the mocked response.

        Callable responses are evaluated here, with the matched request.
        """
        self.calls.append(request)

        spec = self.response(request) if callable(self.response) else self.response
        return Response.from_dict(request, spec)

    def describe(self) -> Dict[str, Any]:
        """Pattern fields as plain values for diagnostics."""
        return {
            'method': self.method.describe(),
            'url': self.url.describe(),
            'body': self.body.describe() if self.body is not None else None,
            'headers': {name: matcher.describe() for name, matcher in self.headers.items()}
        }

    def to_mock_request(self) -> 'MockRequest':
        return self

    def assert_object(self) -> 'MockAssert':
        return MockAssert(self)

    def __repr__(self) -> str:
        method = self.method.describe()
        method = method.upper() if isinstance(self.method, Literal) else method
        return f"MockRequest(id={self.id}, {method} {self.url.describe()})"


class MockAssert:
    """Assertion handle returned from registration."""

    def __init__(self, mock: MockRequest):
        self._mock = mock

    @property
    def id(self) -> int:
        return self._mock.id

    def calls(self) -> List[Request]:
        return list(self._mock.calls)

    def most_recent_call(self) -> Optional[Request]:
        return self._mock.calls[-1] if self._mock.calls else None

    def calls_count(self) -> int:
        return len(self._mock.calls)
