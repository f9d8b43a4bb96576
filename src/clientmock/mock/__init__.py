"""
clientmock Mock Module

Mock request registry and matching engine.

This module provides:
- Matcher combinators (m.string_matching, m.string_containing, m.uuid4, m.anything)
- Low-level and client-bound mock entries
- Ordered match store and resolver
- Gateway substitution and middleware replay
- YAML mock fixtures
"""

from .config import MockConfig, configure_logging
from .entry import MockAssert, MockRequest
from .errors import ConstructionError, MockError, NoExactMatchButPartial, NoMatch
from .gateway import MockGateway
from .loader import MockLoader, load_mocks
from .matchers import Literal, Matcher, Predicate, anything, m, string_containing, string_matching, uuid4
from .registry import MockRegistry
from .resolver import ExactMatch, NoMatchFound, PartialMatch, Resolver
from .resource import MockResource
from .store import MatchStore

__all__ = [
    # Config
    'MockConfig',
    'configure_logging',

    # Entries
    'MockAssert',
    'MockRequest',
    'MockResource',

    # Errors
    'ConstructionError',
    'MockError',
    'NoExactMatchButPartial',
    'NoMatch',

    # Engine
    'MatchStore',
    'Resolver',
    'ExactMatch',
    'PartialMatch',
    'NoMatchFound',
    'MockGateway',
    'MockRegistry',

    # Matchers
    'Literal',
    'Matcher',
    'Predicate',
    'm',
    'anything',
    'string_containing',
    'string_matching',
    'uuid4',

    # Fixtures
    'MockLoader',
    'load_mocks',
]
