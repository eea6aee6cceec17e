"""
Query Canonicalization

Produces an order- and encoder-independent serialization of a URL's
user-supplied query parameters, used as signing input in canonical mode.

Canonical form:
    - parameters named keyid / expiry / signature are dropped
    - keys and values are UTF-8 percent-encoded per RFC 3986; only
      A-Z a-z 0-9 - . _ ~ stay literal, everything else becomes %XX
      (uppercase hex, space is %20 and never '+')
    - pairs are sorted by encoded key, then encoded value
    - joined as key=value with '&'

Example:
    >>> get_canonical_query([("b", "2"), ("a", "x y"), ("a", "1")])
    'a=1&a=x%20y&b=2'
"""

from typing import Iterable, List, Tuple
from urllib.parse import parse_qsl, quote, urlsplit

# Reserved signing parameters, in the order they appear in a signed URL
RESERVED_PARAMS = ("keyid", "expiry", "signature")

QueryPairs = List[Tuple[str, str]]


def percent_encode(value: str) -> str:
    """Percent-encode a string, leaving only RFC 3986 unreserved characters."""
    return quote(value, safe="~")


def parse_query(query: str) -> QueryPairs:
    """Decode a raw query string into (key, value) pairs, keeping order and blanks."""
    return parse_qsl(query, keep_blank_values=True)


def extract_user_params(url: str) -> QueryPairs:
    """
    Get the URL's query parameters minus the reserved signing ones.

    Names are matched exactly and case-sensitively, so "KeyId" is kept.
    """
    return [
        (key, value)
        for key, value in parse_query(urlsplit(url).query)
        if key not in RESERVED_PARAMS
    ]


def get_canonical_query(params: Iterable[Tuple[str, str]]) -> str:
    """
    Build the canonical query string for a set of user parameters.

    Reserved names are dropped here as well, so a raw parse of the URL
    can be passed in directly.

    Returns:
        Canonical query (without leading '?'), or "" if nothing remains
    """
    encoded = sorted(
        (percent_encode(key), percent_encode(value))
        for key, value in params
        if key not in RESERVED_PARAMS
    )
    return "&".join(f"{key}={value}" for key, value in encoded)
