"""
clientmock Request

Immutable request value passed through middleware and gateways.
"""

from typing import Any, Dict, Optional

from .utils import lower_keys


class Request:
    """
    HTTP request as seen by middleware and gateways.

    Accessors are methods so middleware can rely on one shape regardless of
    where the request came from. ``enhance`` never mutates, it returns a new
    request with the overrides merged in.

    Example:
        request = Request('get', 'https://api.example.com/users')
        signed = request.enhance(headers={'Authorization': 'Bearer abc'})
    """

    def __init__(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize request.

        Args:
            method: HTTP method, stored lowercase
            url: Full request URL
            body: Request body (mapping, string, bytes or None)
            headers: Request headers, names are lowercased
        """
        self._method = method.lower()
        self._url = url
        self._body = body
        self._headers = lower_keys(headers)

    def method(self) -> str:
        return self._method

    def url(self) -> str:
        return self._url

    def body(self) -> Any:
        return self._body

    def headers(self) -> Dict[str, Any]:
        return dict(self._headers)

    def header(self, name: str) -> Optional[Any]:
        """Return a single header value, None when absent."""
        return self._headers.get(name.lower())

    def enhance(
        self,
        headers: Optional[Dict[str, Any]] = None,
        body: Any = None,
        url: Optional[str] = None
    ) -> 'Request':
        """
        Return a copy of this request with overrides applied.

        Args:
            headers: Headers merged over the current ones
            body: Replacement body (None keeps the current body)
            url: Replacement URL (None keeps the current URL)

        Returns:
            New Request instance
        """
        merged = dict(self._headers)
        merged.update(lower_keys(headers))
        return Request(
            method=self._method,
            url=url if url is not None else self._url,
            body=body if body is not None else self._body,
            headers=merged
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'method': self._method,
            'url': self._url,
            'body': self._body,
            'headers': dict(self._headers)
        }

    def __repr__(self) -> str:
        return f"Request({self._method.upper()} {self._url})"
