"""URI syntax checks used by the media builders.

ADF ``media`` nodes reference external content by an absolute IRI.  The
check here is purely syntactic: a scheme, a non-empty remainder, no
whitespace or control characters, and an authority for the schemes that
require one.  Nothing is fetched or resolved.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

# RFC 3986 section 3.1: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

_FORBIDDEN_RE = re.compile(r"[\s\x00-\x1f\x7f<>\"{}|\\^`]")

_AUTHORITY_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "ws", "wss"})


def is_absolute_uri(value: object) -> bool:
    """Return ``True`` if *value* is a string holding an absolute URI/IRI.

    Parameters
    ----------
    value:
        Candidate URL, typically the ``href`` of an image token.

    Examples
    --------
    >>> is_absolute_uri("https://example.com/a.png")
    True
    >>> is_absolute_uri("images/a.png")
    False
    """
    if not isinstance(value, str) or not _SCHEME_RE.match(value):
        return False
    if _FORBIDDEN_RE.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        # Malformed IPv6 literals and the like
        return False
    if not parts.scheme:
        return False
    remainder = value[len(parts.scheme) + 1:]
    if not remainder:
        return False
    if parts.scheme.lower() in _AUTHORITY_SCHEMES and not parts.netloc:
        return False
    return True
