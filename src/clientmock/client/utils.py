"""
clientmock Client Utilities

Helpers shared by the client and the mock engine for rendering request
parts and normalising URLs.
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlparse, urlunparse


def _flatten(value: Any, prefix: str) -> List[Tuple[str, str]]:
    """Flatten nested mappings and lists into ``a[b]=c`` style pairs."""
    if isinstance(value, dict):
        pairs = []
        for key, item in value.items():
            pairs.extend(_flatten(item, f"{prefix}[{key}]" if prefix else str(key)))
        return pairs

    if isinstance(value, (list, tuple)):
        pairs = []
        for item in value:
            pairs.extend(_flatten(item, f"{prefix}[]"))
        return pairs

    if value is None:
        return [(prefix, '')]

    return [(prefix, str(value))]


def to_query_string(data: Any) -> str:
    """
    Flatten a body or header structure into a query-string representation.

    Used for diagnostics only, the output never takes part in matching.

    Args:
        data: Mapping, list, string, bytes or None

    Returns:
        ``key=value&...`` string, the value itself for scalars, empty string for None

    Example:
        to_query_string({'user': {'id': 1}, 'tags': ['a', 'b']})
        # 'user%5Bid%5D=1&tags%5B%5D=a&tags%5B%5D=b'
    """
    if data is None:
        return ''

    if isinstance(data, bytes):
        return data.decode('utf-8', errors='replace')

    if isinstance(data, (list, tuple)):
        pairs = []
        for index, item in enumerate(data):
            pairs.extend(_flatten(item, str(index)))
    elif isinstance(data, dict):
        pairs = _flatten(data, '')
    else:
        return str(data)

    return '&'.join(
        f"{quote(key, safe='')}={quote(value, safe='')}"
        for key, value in pairs
    )


def sort_url_query(url: str) -> str:
    """Return ``url`` with its query parameters sorted by name then value."""
    parsed = urlparse(url)
    if not parsed.query:
        return url

    params = sorted(parse_qsl(parsed.query, keep_blank_values=True))
    return urlunparse(parsed._replace(query=urlencode(params)))


def normalize_body(body: Any) -> Any:
    """
    Bring a request body into a comparable shape.

    Bytes are decoded, strings holding JSON are parsed. Mappings and lists
    are returned untouched so they compare structurally.
    """
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')

    if isinstance(body, str):
        try:
            return json.loads(body)
        except (json.JSONDecodeError, ValueError):
            return body

    return body


def lower_keys(headers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Lowercase header names."""
    return {str(k).lower(): v for k, v in (headers or {}).items()}
