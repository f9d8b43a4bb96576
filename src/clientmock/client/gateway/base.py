"""
clientmock Gateway Base

Contract for the pluggable transport that performs request I/O.
"""

import asyncio

from ..request import Request
from ..response import Response


class Gateway:
    """
    Transport used by the client to send requests.

    Subclasses implement ``call``. The default ``call_async`` runs ``call``
    in a worker thread so blocking transports stay usable from async code.
    """

    def call(self, request: Request) -> Response:
        raise NotImplementedError

    async def call_async(self, request: Request) -> Response:
        return await asyncio.to_thread(self.call, request)
