"""
clientmock Client Configuration

Process-wide transport settings shared by every client.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .gateway import Gateway, RequestsGateway


@dataclass
class Configs:
    """
    Process-wide client configuration.

    ``gateway`` is the slot the mock engine swaps during tests. ``gather``
    waits for all of N awaitables, the same contract as ``asyncio.gather``.
    """

    gateway: Gateway = field(default_factory=RequestsGateway)
    gather: Callable[..., Awaitable[Any]] = asyncio.gather


configs = Configs()
