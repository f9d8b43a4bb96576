"""
clientmock Gateways

Pluggable transports used by the client.
"""

from .base import Gateway
from .http import RequestsGateway, HttpxGateway

__all__ = [
    'Gateway',
    'RequestsGateway',
    'HttpxGateway',
]
