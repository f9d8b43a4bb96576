"""
clientmock Mock Gateway

Mock-aware stand-in for the real transport. Never touches the network.
"""

from ..client.gateway.base import Gateway
from ..client.request import Request
from ..client.response import Response
from .resolver import Resolver


class MockGateway(Gateway):
    """Gateway answering from a resolver instead of the network."""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    def call(self, request: Request) -> Response:
        return self.resolver.lookup_response(request)

    async def call_async(self, request: Request) -> Response:
        return await self.resolver.lookup_response_async(request)
