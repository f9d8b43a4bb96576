"""
clientmock

Mock request registry and matching engine for code built on the clientmock
HTTP client.

This package provides:
- A declarative HTTP client with middleware and pluggable gateways
- Mock registration (client-bound and low-level)
- Exact/partial request matching with matcher combinators
- Call history and unused mock reporting
- Middleware replay so mocks see the same headers as real traffic
"""

from .client import Client, Configs, Middleware, Request, Response, configs
from .mock import (
    ConstructionError,
    MockConfig,
    MockError,
    MockRegistry,
    NoExactMatchButPartial,
    NoMatch,
    load_mocks,
    m,
)

__all__ = [
    'Client',
    'Configs',
    'Middleware',
    'Request',
    'Response',
    'configs',
    'ConstructionError',
    'MockConfig',
    'MockError',
    'MockRegistry',
    'NoExactMatchButPartial',
    'NoMatch',
    'load_mocks',
    'm',
]

__version__ = '1.0.0'
