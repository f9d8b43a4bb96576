"""
clientmock HTTP Gateways

Real transports: ``requests`` for the blocking path, ``httpx`` for the
async path.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..request import Request
from ..response import Response
from .base import Gateway

logger = logging.getLogger("clientmock.gateway")


def _encode_body(body: Any, headers: Dict[str, Any]) -> Tuple[Optional[bytes], Dict[str, Any]]:
    """Serialize a body for the wire, adding a JSON content type for mappings."""
    if body is None:
        return None, headers

    if isinstance(body, (dict, list)):
        headers = dict(headers)
        headers.setdefault('content-type', 'application/json')
        return json.dumps(body).encode('utf-8'), headers

    if isinstance(body, str):
        return body.encode('utf-8'), headers

    return body, headers


class RequestsGateway(Gateway):
    """
    Blocking gateway backed by a ``requests.Session`` with retries.

    Example:
        gateway = RequestsGateway(timeout=10, max_retries=2)
        response = gateway.call(Request('get', 'https://api.example.com/users'))
    """

    def __init__(
        self,
        timeout: int = 30,
        verify_ssl: bool = True,
        max_retries: int = 3
    ):
        """
        Initialize gateway.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            max_retries: Maximum number of retry attempts per request
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.max_retries = max_retries
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """HTTP session, created on first use."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> requests.Session:
        """Create HTTP session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def call(self, request: Request) -> Response:
        data, headers = _encode_body(request.body(), request.headers())
        logger.debug(f"Sending {request.method().upper()} {request.url()}")

        resp = self.session.request(
            method=request.method().upper(),
            url=request.url(),
            headers=headers,
            data=data,
            timeout=self.timeout,
            verify=self.verify_ssl,
            allow_redirects=True
        )

        return Response(
            request=request,
            status=resp.status_code,
            body=resp.text,
            headers=dict(resp.headers)
        )


class HttpxGateway(Gateway):
    """Gateway using ``httpx`` for both paths, natively async on ``call_async``."""

    def __init__(self, timeout: float = 30.0, verify_ssl: bool = True):
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def call(self, request: Request) -> Response:
        data, headers = _encode_body(request.body(), request.headers())
        with httpx.Client(timeout=self.timeout, verify=self.verify_ssl) as client:
            resp = client.request(
                method=request.method().upper(),
                url=request.url(),
                headers=headers,
                content=data
            )
        return self._to_response(request, resp)

    async def call_async(self, request: Request) -> Response:
        data, headers = _encode_body(request.body(), request.headers())
        async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify_ssl) as client:
            resp = await client.request(
                method=request.method().upper(),
                url=request.url(),
                headers=headers,
                content=data
            )
        return self._to_response(request, resp)

    @staticmethod
    def _to_response(request: Request, resp: httpx.Response) -> Response:
        return Response(
            request=request,
            status=resp.status_code,
            body=resp.text,
            headers=dict(resp.headers)
        )
