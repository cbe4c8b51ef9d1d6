"""URI component extraction and query canonicalization.

Turns a request URI into the string a claim rule is compared against.
Where a component is ambiguous the browser URL reading wins: scheme and
host are lowercased, a scheme's default port reads as empty, and a
hierarchical URL with no path reads as "/".

The query component is canonicalized on both sides of the comparison:
parameters are parsed, the token-carrying ``cat`` parameter is removed,
the rest are stably sorted by name and re-serialized.
"""

from __future__ import annotations

from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit

from catu._errors import InvalidCatuError
from catu._labels import UriPart

# Query parameter that carries the token itself.
TOKEN_QUERY_PARAM = "cat"

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def parse_uri(uri: str | SplitResult) -> SplitResult:
    """Split a URI string, or pass an already split one through.

    Raises:
        InvalidCatuError: If the URI cannot be split or has a bad port.
    """
    if isinstance(uri, SplitResult):
        parsed = uri
    else:
        try:
            parsed = urlsplit(uri)
        except ValueError as e:
            msg = f"Invalid URI {uri!r}"
            raise InvalidCatuError(msg, str(e)) from e
    try:
        parsed.port
    except ValueError as e:
        msg = f"Invalid URI {parsed.geturl()!r}"
        raise InvalidCatuError(msg, str(e)) from e
    return parsed


def uri_part_value(uri: SplitResult, part: UriPart) -> str:
    """Extract the normalized value of ``part`` from ``uri``."""
    match part:
        case UriPart.SCHEME:
            return uri.scheme.lower()
        case UriPart.HOST:
            return _host(uri)
        case UriPart.PORT:
            return _port(uri)
        case UriPart.PATH:
            return _path(uri)
        case UriPart.QUERY:
            return canonical_query(uri.query)
        case UriPart.PARENT_PATH:
            path = _path(uri)
            idx = path.rfind("/")
            return path[:idx] if idx != -1 else ""
        case UriPart.FILENAME:
            return _filename(_path(uri))
        case UriPart.STEM:
            filename = _filename(_path(uri))
            idx = filename.find(".")
            return filename[:idx] if idx != -1 else filename
        case UriPart.EXTENSION:
            filename = _filename(_path(uri))
            idx = filename.find(".")
            return filename[idx:] if idx != -1 else ""
    msg = f"Unsupported URI part: {part!r}"  # pragma: no cover
    raise InvalidCatuError(msg)  # pragma: no cover


def canonical_query(query: str) -> str:
    """Canonicalize a raw query string (without the leading ``?``).

    >>> canonical_query("cat=abc&b=2&a=1")
    'a=1&b=2'
    """
    pairs = [
        (key, value)
        for key, value in parse_qsl(query, keep_blank_values=True)
        if key != TOKEN_QUERY_PARAM
    ]
    # sorted() is stable: equal keys keep their relative order
    pairs = sorted(pairs, key=lambda kv: kv[0])
    return urlencode(pairs)


def canonical_match_query(value: str) -> str:
    """Canonicalize a declared query match value, ``?`` optional."""
    return canonical_query(value.removeprefix("?"))


def _host(uri: SplitResult) -> str:
    host = uri.hostname or ""
    if ":" in host:
        return f"[{host}]"
    return host


def _port(uri: SplitResult) -> str:
    port = uri.port
    if port is None or _DEFAULT_PORTS.get(uri.scheme.lower()) == port:
        return ""
    return str(port)


def _path(uri: SplitResult) -> str:
    if not uri.path and uri.netloc:
        return "/"
    return uri.path


def _filename(path: str) -> str:
    return path[path.rfind("/") + 1 :]
