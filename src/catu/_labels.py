"""Label tables: name <-> numeric label for URI parts and match types.

URI part labels are a wire contract and live here as a closed enum.
Match-type labels belong to whoever supplies the match catalog, so this
module only provides the table type; the standard table is built in
catu._catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from catu._errors import InvalidCatuError

if TYPE_CHECKING:
    from collections.abc import Mapping


class UriPart(IntEnum):
    """URI components a claim can constrain, keyed by their wire label."""

    SCHEME = 0
    HOST = 1
    PORT = 2
    PATH = 3
    QUERY = 4
    PARENT_PATH = 5
    FILENAME = 6
    STEM = 7
    EXTENSION = 8

    @property
    def wire_name(self) -> str:
        """Name used in name-keyed claims ("parent-path", "stem", ...)."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_name(cls, name: str) -> UriPart:
        part = _PARTS_BY_NAME.get(name) if isinstance(name, str) else None
        if part is None:
            msg = f"Unknown URI part: {name!r}"
            raise InvalidCatuError(msg)
        return part

    @classmethod
    def from_label(cls, label: int) -> UriPart:
        # bool is an int subclass but never a valid label
        if isinstance(label, bool) or not isinstance(label, int):
            msg = f"Unknown URI part label: {label!r}"
            raise InvalidCatuError(msg)
        try:
            return cls(label)
        except ValueError:
            msg = f"Unknown URI part label: {label!r}"
            raise InvalidCatuError(msg) from None


_PARTS_BY_NAME: Mapping[str, UriPart] = MappingProxyType(
    {part.wire_name: part for part in UriPart}
)


@dataclass(frozen=True, slots=True)
class MatchLabels:
    """Immutable bijection between match-type names and numeric labels.

    Lookups return None on a miss; callers decide how to fail.

    >>> labels = MatchLabels.of({"exact-match": 0, "prefix-match": 1})
    >>> labels.label_for("prefix-match")
    1
    >>> labels.name_for(0)
    'exact-match'
    """

    _by_name: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _by_label: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def of(cls, names_to_labels: Mapping[str, int]) -> MatchLabels:
        """Build a table from a name -> label mapping.

        Raises:
            ValueError: If two names share a label.
        """
        by_label: dict[int, str] = {}
        for name, label in names_to_labels.items():
            if label in by_label:
                msg = (
                    f"match label {label} assigned to both "
                    f"{by_label[label]!r} and {name!r}"
                )
                raise ValueError(msg)
            by_label[label] = name
        return cls(
            _by_name=MappingProxyType(dict(names_to_labels)),
            _by_label=MappingProxyType(by_label),
        )

    def label_for(self, name: str) -> int | None:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def name_for(self, label: int) -> str | None:
        if isinstance(label, bool) or not isinstance(label, int):
            return None
        return self._by_label.get(label)

    def names(self) -> list[str]:
        """Return all match-type names ordered by label."""
        return [self._by_label[label] for label in sorted(self._by_label)]

    def __len__(self) -> int:
        return len(self._by_name)
