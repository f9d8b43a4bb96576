"""
clientmock Match Store

Ordered registry of mock entries. Insertion order is significant: later
registrations take precedence over earlier ones with the same signature.
"""

import itertools
import logging
from typing import List, Union

from .entry import MockRequest
from .resource import MockResource

logger = logging.getLogger("clientmock.mock")

MockEntry = Union[MockRequest, MockResource]


class MatchStore:
    """
    Ordered sequence of mock entries with a monotonic id counter.

    The counter is never reset, so ids stay unique across ``clear()``.
    """

    def __init__(self):
        self._entries: List[MockEntry] = []
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def register(self, entry: MockEntry) -> MockEntry:
        """Append ``entry`` and return it."""
        self._entries.append(entry)
        logger.debug(f"Registered {entry!r}")
        return entry

    def clear(self):
        """Drop every entry. Ids are not reused afterwards."""
        if self._entries:
            logger.debug(f"Clearing {len(self._entries)} mocks")
        self._entries = []

    def entries(self) -> List[MockEntry]:
        return list(self._entries)

    def to_mock_requests(self) -> List[MockRequest]:
        """Concrete mock requests, in registration order."""
        return [entry.to_mock_request() for entry in self._entries]

    def pending_middleware(self) -> List[MockEntry]:
        """Entries whose middleware has not been replayed yet."""
        return [entry for entry in self._entries if entry.pending_middleware_execution]

    def unused_count(self) -> int:
        """Number of entries that have not matched any request yet."""
        return sum(1 for mock in self.to_mock_requests() if not mock.calls)

    def __len__(self) -> int:
        return len(self._entries)
