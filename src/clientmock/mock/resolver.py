"""
clientmock Resolver

Matches incoming requests against the match store.

Algorithm:
1. Exact candidates: method, url, body and every specified header match
2. Any exact candidate -> the last registered one answers and records the call
3. Otherwise partial candidates (method and url only) -> diagnostic failure
4. Otherwise -> no match failure

``resolve`` returns a tagged outcome; ``lookup_response`` turns the failing
outcomes into exceptions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..client.configs import Configs, configs as default_configs
from ..client.request import Request
from ..client.response import Response
from ..client.utils import to_query_string
from .entry import MockRequest
from .errors import NoExactMatchButPartial, NoMatch, PREFIX
from .store import MatchStore

logger = logging.getLogger("clientmock.mock")


@dataclass
class ExactMatch:
    """Request matched ``mock`` exactly and produced ``response``."""

    mock: MockRequest
    response: Response

    def to_dict(self) -> Dict[str, Any]:
        return {'outcome': 'exact', 'mock_id': self.mock.id, 'status': self.response.status}


@dataclass
class PartialMatch:
    """Request matched method and url of ``mock`` but not its body or headers."""

    mock: MockRequest

    def to_dict(self) -> Dict[str, Any]:
        return {'outcome': 'partial', 'mock_id': self.mock.id}


@dataclass
class NoMatchFound:
    """Request matched nothing."""

    def to_dict(self) -> Dict[str, Any]:
        return {'outcome': 'none', 'mock_id': None}


MatchOutcome = Union[ExactMatch, PartialMatch, NoMatchFound]


def request_to_log(request: Request) -> str:
    return (
        f'"{request.method().upper()} {request.url()}" '
        f'(body: "{to_query_string(request.body())}"; '
        f'headers: "{to_query_string(request.headers())}")'
    )


def mock_to_log(mock: MockRequest) -> str:
    described = mock.describe()
    method = described['method']
    method = method.upper() if isinstance(method, str) else method
    return (
        f'"{method} {described["url"]}" '
        f'(body: "{to_query_string(described["body"])}"; '
        f'headers: "{to_query_string(described["headers"])}")'
    )


class Resolver:
    """
    Lookup against a match store.

    Example:
        resolver = Resolver(store)
        response = resolver.lookup_response(Request('get', 'https://api.example.com/users'))
    """

    def __init__(self, store: MatchStore, configs: Optional[Configs] = None):
        """
        Initialize resolver.

        Args:
            store: Registry of mock entries
            configs: Client configuration providing ``gather`` (defaults to the process-wide one)
        """
        self.store = store
        self.configs = configs or default_configs

    def resolve(self, request: Request) -> MatchOutcome:
        """
        Match ``request`` against the current store state.

        On an exact match the request is recorded on the winning mock.
        """
        mocks = self.store.to_mock_requests()

        exact = [mock for mock in mocks if mock.is_exact_match(request)]
        if exact:
            mock = exact[-1]
            return ExactMatch(mock=mock, response=mock.call(request))

        partial = [mock for mock in mocks if mock.is_partial_match(request)]
        if partial:
            return PartialMatch(mock=partial[-1])

        return NoMatchFound()

    def lookup_response(self, request: Request) -> Response:
        """
        Synchronous lookup.

        Raises:
            NoExactMatchButPartial: If only method and url matched some mock
            NoMatch: If no mock matched at all
        """
        outcome = self.resolve(request)

        if isinstance(outcome, ExactMatch):
            logger.debug(f"Mock {outcome.mock.id} matched {request_to_log(request)}")
            return outcome.response

        if isinstance(outcome, PartialMatch):
            message = (
                f"{PREFIX} No exact match found for {request_to_log(request)}, "
                f"partial match with {mock_to_log(outcome.mock)}, check your mock definition"
            )
            logger.warning(message)
            raise NoExactMatchButPartial(request, outcome.mock, message)

        message = f"{PREFIX} No match found for {request_to_log(request)}, check your mock definition"
        logger.warning(message)
        raise NoMatch(request, message)

    async def lookup_response_async(self, request: Request) -> Response:
        """
        Replay pending middleware for every client-bound mock, then look up.

        All replays are launched together and awaited before matching.
        """
        pending = self.store.pending_middleware()
        if pending:
            logger.debug(f"Replaying middleware for {len(pending)} mocks")
            await self.configs.gather(*(mock.execute_middleware_stack() for mock in pending))

        return self.lookup_response(request)
