"""Claim documents: YAML/JSON files describing a URI claim.

A document is either name-keyed:

    path:
      prefix-match: /content/
    extension:
      exact-match: .m3u8

or label-keyed, as decoded from a token payload:

    3: {1: /content/}
    8: {0: .m3u8}

JSON is accepted as a YAML subset, so ``{"3": {"1": "/content/"}}`` works
too.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from catu._claim import UriClaim
from catu._errors import InvalidCatuError

if TYPE_CHECKING:
    from catu._labels import MatchLabels


def parse_claim_document(
    data: Any, labels: MatchLabels | None = None
) -> UriClaim:
    """Build a claim from a decoded document.

    Raises:
        InvalidCatuError: If the document is not a mapping or names unknown
            URI parts or match types.
    """
    if not isinstance(data, dict):
        msg = f"Claim document must be a mapping, got {type(data).__name__}"
        raise InvalidCatuError(msg)
    if data and all(_is_label(key) for key in data):
        return UriClaim.from_dict_tags(data, labels)
    return UriClaim.from_dict(data, labels)


def load_claim(path: str | Path, labels: MatchLabels | None = None) -> UriClaim:
    """Read a claim document from ``path``.

    Raises:
        InvalidCatuError: If the file is not valid YAML or not a valid claim.
        OSError: If the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"Invalid claim document {str(path)!r}"
        raise InvalidCatuError(msg, str(e)) from e
    return parse_claim_document(data, labels)


def _is_label(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and key.lstrip("-").isdigit()
