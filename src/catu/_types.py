"""Core protocols and type aliases for catu.

The claim layer is decoupled from any particular set of match types:
- MatchValue is what a claim declares for a rule (string or string sequence)
- MatchCapability is the comparison port a catalog of match types implements
- InputMatcher is the per-rule matcher a catalog compiles a MatchValue into
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catu._labels import MatchLabels

type MatchValue = str | Sequence[str]

# Claim payload: URI part label -> {match-type label -> match value}.
# Insertion order is significant at both levels.
type ComponentRules = dict[int, MatchValue]
type ClaimPayload = dict[int, ComponentRules]


@runtime_checkable
class MatchCapability(Protocol):
    """Validate and compare match values for a catalog of match types.

    ``labels`` is the catalog's own name <-> label table; the claim layer
    consults it whenever it translates between name-keyed and labeled
    claims.
    """

    labels: MatchLabels

    def validate(self, match_type: int, match_value: MatchValue, /) -> bool:
        """Return whether ``match_value`` has the shape ``match_type`` needs."""
        ...

    async def compare(
        self, value: str, match_type: int, match_value: MatchValue, /
    ) -> bool:
        """Return whether the component ``value`` satisfies the rule.

        May raise if the comparison cannot be performed at all
        (an invalid pattern, for instance).
        """
        ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match a single extracted URI component value."""

    def matches(self, value: str, /) -> bool: ...
