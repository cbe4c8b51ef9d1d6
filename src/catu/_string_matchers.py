"""Concrete matchers for the standard URI claim match types.

Each matcher is a frozen dataclass, compiled once from a declared match
value and then applied to an extracted URI component.

Regex uses ``google-re2`` for guaranteed linear-time matching. RE2 does not
support backreferences or lookahead/lookbehind because they require
backtracking, so patterns using them are rejected at compile time.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field

import re2

MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096


class MatcherError(Exception):
    """A match value could not be compiled into a matcher."""


class PatternTooLongError(MatcherError):
    """A match value exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


def _check_length(value: str, max_: int = MAX_PATTERN_LENGTH) -> None:
    if len(value) > max_:
        raise PatternTooLongError(len(value), max_)


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """Exact string equality match."""

    value: str

    def __post_init__(self) -> None:
        _check_length(self.value)

    def matches(self, value: str, /) -> bool:
        return value == self.value


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """String prefix match (startswith)."""

    prefix: str

    def __post_init__(self) -> None:
        _check_length(self.prefix)

    def matches(self, value: str, /) -> bool:
        return value.startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class SuffixMatcher:
    """String suffix match (endswith)."""

    suffix: str

    def __post_init__(self) -> None:
        _check_length(self.suffix)

    def matches(self, value: str, /) -> bool:
        return value.endswith(self.suffix)


@dataclass(frozen=True, slots=True)
class ContainsMatcher:
    """Substring search match."""

    substring: str

    def __post_init__(self) -> None:
        _check_length(self.substring)

    def matches(self, value: str, /) -> bool:
        return self.substring in value


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Regular expression match over the whole component value.

    The pattern is compiled at construction time via ``google-re2``. Unlike
    a search, the entire value must match: ``/api`` does not accept
    ``/api/users``.

    Raises:
        PatternTooLongError: If the pattern exceeds MAX_REGEX_PATTERN_LENGTH.
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _check_length(self.pattern, MAX_REGEX_PATTERN_LENGTH)
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, value: str, /) -> bool:
        return self._compiled.fullmatch(value) is not None


@dataclass(frozen=True, slots=True)
class HashMatcher:
    """Digest match: the component's hash equals a declared hex digest.

    ``algorithm`` is any name ``hashlib.new`` accepts ("sha256",
    "sha512_256"). The digest comparison is case-insensitive and
    constant-time.
    """

    algorithm: str
    digest: str
    _expected: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            expected = bytes.fromhex(self.digest)
        except ValueError as e:
            msg = f"invalid {self.algorithm} digest {self.digest!r}: {e}"
            raise MatcherError(msg) from e
        try:
            size = hashlib.new(self.algorithm).digest_size
        except ValueError as e:
            msg = f"unsupported hash algorithm {self.algorithm!r}"
            raise MatcherError(msg) from e
        if len(expected) != size:
            msg = (
                f"{self.algorithm} digest must be {size} bytes, "
                f"got {len(expected)}"
            )
            raise MatcherError(msg)
        object.__setattr__(self, "_expected", expected)

    def matches(self, value: str, /) -> bool:
        actual = hashlib.new(self.algorithm, value.encode("utf-8")).digest()
        return hmac.compare_digest(actual, self._expected)
