"""
clientmock Mock Errors

Failures surfaced by the mock engine. All of them are fatal to the calling
test and are never retried or swallowed.
"""

from typing import Any

PREFIX = "[clientmock]"


class MockError(Exception):
    """Base class for mock engine errors."""


class ConstructionError(MockError, ValueError):
    """Invalid argument given to a matcher combinator or mock fixture."""


class NoExactMatchButPartial(MockError):
    """Request matched method and url of a mock but not its body or headers."""

    def __init__(self, request: Any, mock: Any, message: str):
        super().__init__(message)
        self.request = request
        self.mock = mock


class NoMatch(MockError):
    """Request matched no mock, not even partially."""

    def __init__(self, request: Any, message: str):
        super().__init__(message)
        self.request = request
