"""
clientmock Response

Response value produced by gateways, real or mocked.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .request import Request
from .utils import lower_keys


@dataclass
class Response:
    """Response paired with the request that produced it."""

    request: Request
    status: int = 200
    body: Any = None
    headers: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.headers = lower_keys(self.headers)

    @classmethod
    def from_dict(cls, request: Request, data: Optional[Dict[str, Any]]) -> 'Response':
        """
        Build a response from a ``{status, headers, body}`` mapping.

        Missing status defaults to 200, missing headers to an empty mapping.
        """
        data = data or {}
        status = data.get('status')
        return cls(
            request=request,
            status=200 if status is None else int(status),
            body=data.get('body'),
            headers=data.get('headers') or {}
        )

    @property
    def success(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Return the body parsed as JSON when it is text, as-is otherwise."""
        if isinstance(self.body, bytes):
            return json.loads(self.body.decode('utf-8'))
        if isinstance(self.body, str):
            return json.loads(self.body)
        return self.body

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'status': self.status,
            'headers': dict(self.headers),
            'body': self.body
        }
