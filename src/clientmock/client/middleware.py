"""
clientmock Middleware

Pre-send hooks that inspect and rewrite a request before the gateway sees it.
"""

import inspect
from typing import Iterable

from .request import Request


class Middleware:
    """
    Base class for request middleware.

    ``prepare_request`` receives the request and returns the request to
    send, either directly or as an awaitable. Use ``request.enhance`` to
    attach computed values, never mutate the incoming request.

    Example:
        class AuthMiddleware(Middleware):
            def __init__(self, token):
                self.token = token

            def prepare_request(self, request):
                return request.enhance(headers={'Authorization': f'Bearer {self.token}'})
    """

    def prepare_request(self, request: Request):
        return request


async def prepare_request(middleware: Iterable[Middleware], request: Request) -> Request:
    """
    Run every middleware's ``prepare_request`` hook in order.

    Hooks may be plain functions or coroutines.

    Args:
        middleware: Middleware instances in pipeline order
        request: Request built by the client

    Returns:
        The transformed request
    """
    for mw in middleware:
        result = mw.prepare_request(request)
        if inspect.isawaitable(result):
            result = await result
        request = result
    return request


def prepare_request_sync(middleware: Iterable[Middleware], request: Request) -> Request:
    """
    Synchronous variant of ``prepare_request``.

    Raises:
        TypeError: If a hook returns an awaitable
    """
    for mw in middleware:
        result = mw.prepare_request(request)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError(
                f"{type(mw).__name__}.prepare_request is async, use the async client path"
            )
        request = result
    return request
