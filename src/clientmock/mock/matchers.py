"""
clientmock Matcher Combinators

Predicate builders used as mock field values, plus the two-variant field
type every mock field is normalised into:

- Literal: compared by equality (with per-field normalisation)
- Predicate: a function called with the candidate value

Combinators validate their argument when built, never at match time.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import ConstructionError, PREFIX

UUID4_PATTERN = re.compile(
    r'^[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$',
    re.IGNORECASE
)


class Matcher:
    """A mock field value."""

    def matches(self, candidate: Any, equals: Optional[Callable[[Any, Any], bool]] = None) -> bool:
        raise NotImplementedError

    def describe(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Matcher):
    """Field value compared by equality."""

    value: Any

    def matches(self, candidate: Any, equals: Optional[Callable[[Any, Any], bool]] = None) -> bool:
        if equals is not None:
            return equals(self.value, candidate)
        return self.value == candidate

    def describe(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Predicate(Matcher):
    """Field value tested by calling ``fn(candidate)``."""

    fn: Callable[[Any], bool]
    description: str = ''

    def matches(self, candidate: Any, equals: Optional[Callable[[Any, Any], bool]] = None) -> bool:
        return bool(self.fn(candidate))

    def describe(self) -> Any:
        return self.description or getattr(self.fn, '__name__', repr(self.fn))

    def __call__(self, candidate: Any) -> bool:
        return self.matches(candidate)


def as_matcher(value: Any) -> Matcher:
    """Wrap a raw field value: matchers pass through, callables become predicates."""
    if isinstance(value, Matcher):
        return value
    if callable(value):
        return Predicate(value)
    return Literal(value)


def string_includes(string: str, search: str, start: int = 0) -> bool:
    """
    Offset-bounded substring scan.

    Args:
        string: Candidate to search in
        search: Sample to look for
        start: First offset considered

    Returns:
        True if ``search`` occurs contiguously in ``string`` at or after ``start``
    """
    if start + len(search) > len(string):
        return False

    last_offset = len(string) - len(search)
    for offset in range(start, last_offset + 1):
        if string.startswith(search, offset):
            return True

    return False


def string_matching(pattern: 're.Pattern') -> Predicate:
    """
    Match strings against a compiled regular expression (``re.search``).

    Raises:
        ConstructionError: If ``pattern`` is not a compiled pattern
    """
    if not isinstance(pattern, re.Pattern):
        raise ConstructionError(f'{PREFIX} "string_matching" received an invalid regexp ({pattern!r})')

    return Predicate(
        lambda string: isinstance(string, str) and pattern.search(string) is not None,
        f"stringMatching({pattern.pattern!r})"
    )


def string_containing(sample: str) -> Predicate:
    """
    Match strings containing ``sample``.

    Raises:
        ConstructionError: If ``sample`` is not a string
    """
    if not isinstance(sample, str):
        raise ConstructionError(f'{PREFIX} "string_containing" received an invalid string ({sample!r})')

    return Predicate(
        lambda string: isinstance(string, str) and string_includes(string, sample),
        f"stringContaining({sample!r})"
    )


def uuid4() -> Predicate:
    """Match version 4 UUID strings, case-insensitive."""
    return Predicate(
        lambda string: isinstance(string, str) and UUID4_PATTERN.fullmatch(string) is not None,
        "uuid4()"
    )


def anything() -> Predicate:
    """Match any value, including a missing one."""
    return Predicate(lambda _: True, "anything()")


class _Matchers:
    """Namespace exposed as ``m``."""

    string_matching = staticmethod(string_matching)
    string_containing = staticmethod(string_containing)
    uuid4 = staticmethod(uuid4)
    anything = staticmethod(anything)

    stringMatching = string_matching
    stringContaining = string_containing


m = _Matchers()
