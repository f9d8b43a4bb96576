"""
clientmock Client Module

The HTTP client abstraction the mock engine plugs into.

This module provides:
- Request / Response values
- Middleware pre-send hooks
- Declarative resource client
- Process-wide gateway configuration
"""

from .client import Client
from .configs import Configs, configs
from .gateway import Gateway, RequestsGateway, HttpxGateway
from .middleware import Middleware, prepare_request, prepare_request_sync
from .request import Request
from .response import Response
from .utils import to_query_string

__all__ = [
    'Client',
    'Configs',
    'configs',
    'Gateway',
    'RequestsGateway',
    'HttpxGateway',
    'Middleware',
    'prepare_request',
    'prepare_request_sync',
    'Request',
    'Response',
    'to_query_string',
]
