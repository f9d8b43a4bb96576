"""
clientmock Mock Loader

Registers low-level mocks from YAML fixture files.

Format:
    mocks:
      - method: get
        url: https://api.example.com/users
        headers:
          Authorization: {match: {stringContaining: Bearer}}
        response:
          status: 200
          body: [{id: 1}]

Matcher specs accepted as field values, wrapped in {match: ...}:
    stringContaining: <str>, stringMatching: <regex>, uuid4: true, anything: true
"""

import re
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .entry import MockAssert
from .errors import ConstructionError, PREFIX
from .matchers import anything, string_containing, string_matching, uuid4
from .registry import MockRegistry

MATCHER_SPECS = {
    'stringContaining': lambda arg: string_containing(arg),
    'stringMatching': lambda arg: string_matching(re.compile(arg) if isinstance(arg, str) else arg),
    'uuid4': lambda arg: uuid4(),
    'anything': lambda arg: anything(),
}


def parse_field(value: Any) -> Any:
    """
    Turn a ``{match: {<matcher>: <arg>}}`` spec into a matcher, leave literals as-is.

    Raises:
        ConstructionError: If the matcher spec is malformed or unknown
    """
    if not isinstance(value, dict) or set(value) != {'match'}:
        return value

    spec = value['match']
    if not isinstance(spec, dict) or len(spec) != 1:
        raise ConstructionError(f"{PREFIX} Matcher spec must have exactly one matcher, got {spec!r}")

    (name, arg), = spec.items()
    if name not in MATCHER_SPECS:
        raise ConstructionError(f"{PREFIX} Unknown matcher '{name}', expected one of {list(MATCHER_SPECS)}")

    try:
        return MATCHER_SPECS[name](arg)
    except re.error as e:
        raise ConstructionError(f"{PREFIX} Invalid regexp for stringMatching ({arg!r}): {e}") from e


class MockLoader:
    """
    Loader for YAML mock fixtures.

    Example:
        loader = MockLoader("fixtures/users.yaml")
        handles = loader.register(registry)
    """

    def __init__(self, file_path: str):
        """
        Initialize mock loader.

        Args:
            file_path: Path to YAML fixture file
        """
        self.file_path = Path(file_path)

    def load(self) -> List[Dict[str, Any]]:
        """
        Read mock definitions.

        Returns:
            List of mock definition dictionaries

        Raises:
            FileNotFoundError: If fixture file doesn't exist
            ValueError: If the YAML structure is unrecognized
        """
        if not self.file_path.exists():
            raise FileNotFoundError(f"Mock fixture file not found: {self.file_path}")

        with open(self.file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if isinstance(data, dict) and 'mocks' in data:
            data = data['mocks']

        if not isinstance(data, list):
            raise ValueError(
                f"Unexpected YAML format in {self.file_path}. "
                f"Expected a list of mocks or a mapping with a 'mocks' key"
            )

        for index, definition in enumerate(data):
            if not isinstance(definition, dict) or 'url' not in definition:
                raise ValueError(f"Mock #{index} in {self.file_path} must be a mapping with a 'url'")

        return data

    def register(self, registry: MockRegistry) -> List[MockAssert]:
        """Register every mock in the file, in file order."""
        handles = []
        for definition in self.load():
            headers = {
                name: parse_field(value)
                for name, value in (definition.get('headers') or {}).items()
            }
            handles.append(registry.mock_request(
                method=definition.get('method', 'get'),
                url=parse_field(definition['url']),
                body=parse_field(definition.get('body')),
                headers=headers,
                response=definition.get('response') or {}
            ))
        return handles


def load_mocks(file_path: str, registry: MockRegistry) -> List[MockAssert]:
    """Register the mocks from a YAML fixture file into ``registry``."""
    return MockLoader(file_path).register(registry)
