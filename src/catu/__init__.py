"""catu: URI claim matching for Common Access Tokens.

All public types are exported from this module for flat imports:

    from catu import UriClaim, UriPart, InvalidCatuError
"""

__version__ = "0.1.0"

# Match catalog
from catu._catalog import (
    STANDARD_CATALOG,
    STANDARD_MATCH_LABELS,
    CatalogBuilder,
    MatchCatalog,
    UnknownMatchTypeError,
    is_string,
    is_string_sequence,
    register_standard_match_types,
    standard_catalog,
)

# Claim
from catu._claim import UriClaim
from catu._config import load_claim, parse_claim_document
from catu._errors import InvalidCatuError

# Label tables
from catu._labels import MatchLabels, UriPart

# Concrete matchers
from catu._string_matchers import (
    MAX_PATTERN_LENGTH,
    MAX_REGEX_PATTERN_LENGTH,
    ContainsMatcher,
    ExactMatcher,
    HashMatcher,
    MatcherError,
    PatternTooLongError,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)
from catu._types import InputMatcher, MatchCapability, MatchValue

# URI components
from catu._uri import (
    TOKEN_QUERY_PARAM,
    canonical_match_query,
    canonical_query,
    parse_uri,
    uri_part_value,
)

__all__ = [
    # Protocols
    "InputMatcher",
    "MatchCapability",
    "MatchValue",
    # Claim
    "UriClaim",
    "InvalidCatuError",
    "parse_claim_document",
    "load_claim",
    # Label tables
    "UriPart",
    "MatchLabels",
    # URI components
    "TOKEN_QUERY_PARAM",
    "parse_uri",
    "uri_part_value",
    "canonical_query",
    "canonical_match_query",
    # Match catalog
    "CatalogBuilder",
    "MatchCatalog",
    "UnknownMatchTypeError",
    "register_standard_match_types",
    "standard_catalog",
    "is_string",
    "is_string_sequence",
    "STANDARD_CATALOG",
    "STANDARD_MATCH_LABELS",
    # Concrete matchers
    "ExactMatcher",
    "PrefixMatcher",
    "SuffixMatcher",
    "ContainsMatcher",
    "RegexMatcher",
    "HashMatcher",
    "MatcherError",
    "PatternTooLongError",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
]
