"""UriClaim: the URI claim of a Common Access Token.

A claim maps URI parts to match rules:

    {UriPart label: {match-type label: match value, ...}, ...}

Evaluation semantics:
- URI parts are checked in insertion order, one at a time
- Only the first rule of each part is honored; later rules are ignored
- The first part that does not match stops evaluation (short-circuit AND)
- A claim with no parts matches every URI
- Malformed rules and comparator failures raise InvalidCatuError

Python dicts preserve insertion order, so "first" is well defined for
every construction route.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from catu._catalog import STANDARD_CATALOG, STANDARD_MATCH_LABELS
from catu._errors import InvalidCatuError
from catu._labels import UriPart
from catu._uri import canonical_match_query, parse_uri, uri_part_value

if TYPE_CHECKING:
    from urllib.parse import SplitResult

    from catu._labels import MatchLabels
    from catu._types import ClaimPayload, ComponentRules, MatchCapability, MatchValue

logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


class UriClaim:
    """A URI claim held in its labeled form.

    Build one with from_dict_tags(), from_dict(), from_unlabeled_map() or
    from_map(); evaluate it with ``await claim.match(uri)``.
    """

    __slots__ = ("_payload",)

    def __init__(self) -> None:
        self._payload: ClaimPayload = {}

    # ── Construction ───────────────────────────────────────────────────────

    @classmethod
    def from_dict_tags(
        cls,
        data: Mapping[Any, Mapping[Any, MatchValue]],
        labels: MatchLabels | None = None,
    ) -> UriClaim:
        """Create a claim from a dict keyed by labels at both levels.

        Labels may be ints or decimal strings, as they come out of JSON.
        """
        if labels is None:
            labels = STANDARD_MATCH_LABELS
        claim = cls()
        for part_key, rules in _claim_items(data):
            part = UriPart.from_label(_as_label(part_key, "URI part"))
            claim._payload[int(part)] = {
                _checked_match_label(_as_label(key, "match type"), labels): value
                for key, value in _items(rules, part)
            }
        return claim

    @classmethod
    def from_dict(
        cls,
        data: dict[str, dict[str, MatchValue]],
        labels: MatchLabels | None = None,
    ) -> UriClaim:
        """Create a claim from a dict keyed by names at both levels.

        >>> claim = UriClaim.from_dict({"path": {"prefix-match": "/content/"}})
        >>> claim.payload
        {3: {1: '/content/'}}
        """
        if not isinstance(data, dict):
            msg = f"Expected dict, got {type(data).__name__}"
            raise InvalidCatuError(msg)
        for part_name, rules in data.items():
            if not isinstance(rules, dict):
                msg = (
                    f"Rules for URI part {part_name!r} must be a dict, "
                    f"got {type(rules).__name__}"
                )
                raise InvalidCatuError(msg)
        return cls.from_unlabeled_map(data, labels)

    @classmethod
    def from_unlabeled_map(
        cls,
        data: Mapping[str, Mapping[str, MatchValue]],
        labels: MatchLabels | None = None,
    ) -> UriClaim:
        """Create a claim from any name-keyed mapping of mappings."""
        if labels is None:
            labels = STANDARD_MATCH_LABELS
        claim = cls()
        for part_name, rules in _claim_items(data):
            part = UriPart.from_name(part_name)
            claim._payload[int(part)] = {
                _match_label_for(name, labels): value
                for name, value in _items(rules, part)
            }
        return claim

    @classmethod
    def from_map(
        cls, payload: ClaimPayload, labels: MatchLabels | None = None
    ) -> UriClaim:
        """Adopt an already labeled payload as-is.

        The mapping is not copied: the claim and the caller share it.
        """
        if labels is None:
            labels = STANDARD_MATCH_LABELS
        for part_label, rules in _claim_items(payload):
            part = UriPart.from_label(part_label)
            for match_label, _value in _items(rules, part):
                _checked_match_label(match_label, labels)
        claim = cls()
        claim._payload = payload
        return claim

    # ── Accessors ──────────────────────────────────────────────────────────

    @property
    def payload(self) -> ClaimPayload:
        """The live labeled mapping. Mutating it mutates the claim."""
        return self._payload

    def to_dict(
        self, labels: MatchLabels | None = None
    ) -> dict[str, dict[str, MatchValue]]:
        """Project the claim to its name-keyed form."""
        if labels is None:
            labels = STANDARD_MATCH_LABELS
        result: dict[str, dict[str, MatchValue]] = {}
        for part_label, rules in self._payload.items():
            part = UriPart.from_label(part_label)
            result[part.wire_name] = {
                _match_name_for(label, labels): value
                for label, value in rules.items()
            }
        return result

    # ── Evaluation ─────────────────────────────────────────────────────────

    async def match(
        self,
        uri: str | SplitResult,
        capability: MatchCapability | None = None,
    ) -> bool:
        """Check ``uri`` against every rule of this claim.

        Returns False as soon as one URI part does not satisfy its rule.

        Raises:
            InvalidCatuError: A rule is malformed, or the comparison failed.
        """
        if capability is None:
            capability = STANDARD_CATALOG
        if not self._payload:
            return True
        parsed = parse_uri(uri)
        for part_label, rules in self._payload.items():
            part = UriPart.from_label(part_label)
            match_type, match_value = _first_rule(part, rules)
            type_name = _match_name_for(match_type, capability.labels)
            if not capability.validate(match_type, match_value):
                msg = f"Invalid match value type for {type_name}"
                raise InvalidCatuError(msg)

            value = uri_part_value(parsed, part)
            if part is UriPart.QUERY and isinstance(match_value, str):
                match_value = canonical_match_query(match_value)

            matched = await _compare(
                capability, part, value, match_type, match_value
            )
            if not matched:
                logger.debug(
                    "uri_claim_mismatch",
                    uri_part=part.wire_name,
                    match_type=type_name,
                )
                return False
        return True

    # ── Dunder ─────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UriClaim):
            return NotImplemented
        return self._payload == other._payload

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"UriClaim({self._payload!r})"


async def _compare(
    capability: MatchCapability,
    part: UriPart,
    value: str,
    match_type: int,
    match_value: MatchValue,
) -> bool:
    try:
        return await capability.compare(value, match_type, match_value)
    except Exception as e:
        logger.debug(
            "uri_claim_compare_failed",
            uri_part=part.wire_name,
            match_type=match_type,
            error=str(e),
        )
        msg = f"Match failed for {part.wire_name}"
        raise InvalidCatuError(msg, str(e)) from e


def _first_rule(part: UriPart, rules: ComponentRules) -> tuple[int, MatchValue]:
    """Return the first (match type, match value) pair of a URI part."""
    for match_type, match_value in rules.items():
        return match_type, match_value
    msg = f"No match rule declared for {part.wire_name}"
    raise InvalidCatuError(msg)


def _claim_items(data: Any) -> Any:
    if not isinstance(data, Mapping):
        msg = f"Claim must be a mapping, got {type(data).__name__}"
        raise InvalidCatuError(msg)
    return data.items()


def _items(rules: Any, part: UriPart) -> Any:
    if not isinstance(rules, Mapping):
        msg = (
            f"Rules for URI part {part.wire_name!r} must be a mapping, "
            f"got {type(rules).__name__}"
        )
        raise InvalidCatuError(msg)
    return rules.items()


def _as_label(key: Any, kind: str) -> int:
    if isinstance(key, bool):
        msg = f"Invalid {kind} label: {key!r}"
        raise InvalidCatuError(msg)
    if isinstance(key, int):
        return key
    try:
        return int(key)
    except (TypeError, ValueError):
        msg = f"Invalid {kind} label: {key!r}"
        raise InvalidCatuError(msg) from None


def _checked_match_label(label: int, labels: MatchLabels) -> int:
    if labels.name_for(label) is None:
        msg = f"Unknown match type label: {label!r}"
        raise InvalidCatuError(msg)
    return label


def _match_label_for(name: str, labels: MatchLabels) -> int:
    label = labels.label_for(name)
    if label is None:
        msg = f"Unknown match type: {name!r}"
        raise InvalidCatuError(msg)
    return label


def _match_name_for(label: int, labels: MatchLabels) -> str:
    name = labels.name_for(label)
    if name is None:
        msg = f"Unknown match type label: {label!r}"
        raise InvalidCatuError(msg)
    return name
