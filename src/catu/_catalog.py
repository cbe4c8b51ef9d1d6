"""Match catalog: the comparison capability behind a URI claim.

A catalog maps each match-type label to a matcher factory and a shape
validator. It is assembled with a builder and frozen on build, the same
way a type registry is:

    builder = CatalogBuilder()
    builder.match_type("exact-match", 0, ExactMatcher, is_string)
    catalog = builder.build()

    await catalog.compare("/index.html", 0, "/index.html")  # True

The standard catalog carries the URI claim match types of the Common
Access Token standard (CTA-5007).
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from catu._labels import MatchLabels
from catu._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    HashMatcher,
    MatcherError,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from catu._types import InputMatcher, MatchValue

type MatcherFactory = Callable[[MatchValue], InputMatcher]
type ShapeValidator = Callable[[MatchValue], bool]


class UnknownMatchTypeError(MatcherError):
    """A match-type label was not found in the catalog."""

    def __init__(self, label: int, available: list[int]) -> None:
        self.label = label
        self.available = sorted(available)
        super().__init__(
            f"unknown match type label: {label!r} "
            f"(registered: {', '.join(map(str, self.available)) or 'none'})"
        )


def is_string(value: MatchValue) -> bool:
    """Shape check for single-string match types."""
    return isinstance(value, str)


def is_string_sequence(value: MatchValue) -> bool:
    """Shape check for sequence match types: non-empty, strings only."""
    return (
        isinstance(value, Sequence)
        and not isinstance(value, str)
        and len(value) > 0
        and all(isinstance(v, str) for v in value)
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class CatalogBuilder:
    """Builder for constructing a MatchCatalog.

    Register match types with their name, label, matcher factory and
    shape validator, then call build() to produce an immutable catalog.
    """

    def __init__(self) -> None:
        self._names: dict[str, int] = {}
        self._factories: dict[int, MatcherFactory] = {}
        self._validators: dict[int, ShapeValidator] = {}

    def match_type(
        self,
        name: str,
        label: int,
        factory: MatcherFactory,
        validator: ShapeValidator,
    ) -> CatalogBuilder:
        """Register a match type under its name and label."""
        self._names[name] = label
        self._factories[label] = factory
        self._validators[label] = validator
        return self

    def build(self) -> MatchCatalog:
        """Freeze the catalog. No further registration is possible.

        Raises:
            ValueError: If two names were registered with the same label.
        """
        return MatchCatalog(
            labels=MatchLabels.of(self._names),
            _factories=MappingProxyType(dict(self._factories)),
            _validators=MappingProxyType(dict(self._validators)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MatchCatalog:
    """Immutable catalog of match types; implements MatchCapability."""

    labels: MatchLabels = field(default_factory=MatchLabels)
    _factories: MappingProxyType[int, MatcherFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _validators: MappingProxyType[int, ShapeValidator] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def validate(self, match_type: int, match_value: MatchValue, /) -> bool:
        validator = self._validators.get(match_type)
        return validator is not None and validator(match_value)

    def compile(self, match_type: int, match_value: MatchValue) -> InputMatcher:
        """Compile a declared match value into a matcher.

        Raises:
            UnknownMatchTypeError: match_type not registered
            MatcherError: match_value cannot be compiled
        """
        factory = self._factories.get(match_type)
        if factory is None:
            raise UnknownMatchTypeError(match_type, list(self._factories))
        if not isinstance(match_value, str):
            match_value = tuple(match_value)
        return _compile_cached(factory, match_value)

    async def compare(
        self, value: str, match_type: int, match_value: MatchValue, /
    ) -> bool:
        return self.compile(match_type, match_value).matches(value)

    def __contains__(self, match_type: object) -> bool:
        return match_type in self._factories


@functools.lru_cache(maxsize=1024)
def _compile_cached(
    factory: MatcherFactory, match_value: MatchValue
) -> InputMatcher:
    # Matchers are immutable, so one compiled instance serves every claim
    return factory(match_value)


# ═══════════════════════════════════════════════════════════════════════════════
# Standard match types
# ═══════════════════════════════════════════════════════════════════════════════


def _regex_factory(value: MatchValue) -> RegexMatcher:
    # Only the first element is the pattern
    return RegexMatcher(pattern=value[0])


def register_standard_match_types(builder: CatalogBuilder) -> CatalogBuilder:
    """Register the URI claim match types.

    Labels:
    - exact-match 0, prefix-match 1, suffix-match 2, contains-match 3
    - regex-match 4 (sequence value, first element is the pattern)
    - sha256-match -1, sha512-256-match -2 (hex digest value)
    """
    return (
        builder.match_type("exact-match", 0, ExactMatcher, is_string)
        .match_type("prefix-match", 1, PrefixMatcher, is_string)
        .match_type("suffix-match", 2, SuffixMatcher, is_string)
        .match_type("contains-match", 3, ContainsMatcher, is_string)
        .match_type("regex-match", 4, _regex_factory, is_string_sequence)
        .match_type(
            "sha256-match", -1, lambda v: HashMatcher("sha256", v), is_string
        )
        .match_type(
            "sha512-256-match",
            -2,
            lambda v: HashMatcher("sha512_256", v),
            is_string,
        )
    )


def standard_catalog() -> MatchCatalog:
    """Build a fresh catalog with the standard match types."""
    return register_standard_match_types(CatalogBuilder()).build()


STANDARD_CATALOG = standard_catalog()
STANDARD_MATCH_LABELS = STANDARD_CATALOG.labels
