"""
Signed URL Construction

Adds keyid, optional expiry and an Ed25519 signature to a URL.

Two protocol variants exist and must stay byte-for-byte compatible with
their verifiers:

LEGACY (positional):
    Existing reserved params are removed, the remaining params keep their
    original order and are re-serialized with the form encoder, then
    keyid and expiry are appended the same way. The full URL string is
    signed, so parameter order matters:
        https://host/p?b=2&a=1&keyid=k&expiry=...&signature=...

CANONICAL (asset):
    User params are replaced by their canonical query (see query.py),
    keyid and expiry are set once each (RFC 3986 encoded), and that URL
    is signed. Parameter order in the input does not matter:
        https://host/p?a=1&b=2&keyid=k&expiry=...&signature=...

In both variants the signature is appended by plain string
concatenation. Passing it through an encoder would turn '=' into %3D
and the verifier would see a different string.

A #fragment never reaches the server, so it is not part of the signed
string; it is re-attached after the signature.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
from urllib.parse import ParseResult, SplitResult, urlencode, urlsplit, urlunsplit

from urlsign.core.signing.encoding import to_base64url_with_padding
from urlsign.core.signing.errors import InvalidURLError
from urlsign.core.signing.expiry import ExpiryInput, normalize_expiry
from urlsign.core.signing.query import (
    RESERVED_PARAMS,
    extract_user_params,
    get_canonical_query,
    parse_query,
    percent_encode,
)
from urlsign.core.signing.signer import Signer, ed25519_sign, seed_from_hex

logger = logging.getLogger(__name__)


URLInput = Union[str, SplitResult, ParseResult]


class SigningMode(str, Enum):
    """Which string-to-sign protocol to use."""
    LEGACY = "legacy"
    CANONICAL = "canonical"


@dataclass(frozen=True)
class SigningOptions:
    """
    Inputs for signing a URL.

    Attributes:
        key_id: Identifier of the signing key, sent as `keyid`
        private_key: Ed25519 seed as 64 hex characters
        expiry: Optional expiry (datetime, date, epoch ms or string)
    """
    key_id: str
    private_key: str
    expiry: ExpiryInput = None

    def __post_init__(self):
        if not self.key_id:
            raise ValueError("key_id is required")

    def __repr__(self) -> str:
        return f"SigningOptions(key_id={self.key_id!r}, expiry={self.expiry!r}, private_key=<redacted>)"


def _url_to_str(url: URLInput) -> str:
    if isinstance(url, (SplitResult, ParseResult)):
        return url.geturl()
    return str(url)


def _split_absolute(url: URLInput) -> SplitResult:
    parts = urlsplit(_url_to_str(url))
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"Invalid URL (expected an absolute URL): {_url_to_str(url)!r}")
    return parts


def generate_signature(url: URLInput, private_key: str, signer: Signer = ed25519_sign) -> str:
    """
    Sign the exact string form of a URL.

    Args:
        url: URL whose string form is signed as UTF-8
        private_key: Ed25519 seed as 64 hex characters
        signer: (message, seed) -> 64-byte signature

    Returns:
        Signature as padded base64url

    Raises:
        KeyFormatError: If the private key is not 32 bytes of hex
    """
    seed = seed_from_hex(private_key)
    signature = signer(_url_to_str(url).encode("utf-8"), seed)
    return to_base64url_with_padding(signature)


def _legacy_query(parts: SplitResult, key_id: str, expiry: Optional[str]) -> str:
    params = [
        (key, value)
        for key, value in parse_query(parts.query)
        if key not in RESERVED_PARAMS
    ]
    params.append(("keyid", key_id))
    if expiry:
        params.append(("expiry", expiry))
    return urlencode(params)


def _canonical_query(canonical_query: str, key_id: str, expiry: Optional[str]) -> str:
    segments = [canonical_query] if canonical_query else []
    segments.append(f"keyid={percent_encode(key_id)}")
    if expiry:
        segments.append(f"expiry={percent_encode(expiry)}")
    return "&".join(segments)


def url_with_signing_params(
    url: URLInput,
    key_id: str,
    expiry: ExpiryInput = None,
    mode: SigningMode = SigningMode.LEGACY,
    canonical_query: Optional[str] = None,
) -> str:
    """
    Build the string-to-sign: the URL with keyid and expiry in place.

    Args:
        url: Absolute URL to sign
        key_id: Key identifier for `keyid`
        expiry: Optional expiry, normalized before use
        mode: LEGACY or CANONICAL
        canonical_query: Precomputed canonical query (CANONICAL only);
                         computed from the URL when omitted

    Returns:
        URL string without fragment and without signature

    Raises:
        InvalidURLError: If the URL is not absolute
        ExpiryFormatError, ExpiryPastError: If the expiry is invalid
    """
    if not key_id:
        raise ValueError("key_id is required")

    parts = _split_absolute(url)
    expiry_str = normalize_expiry(expiry)

    if SigningMode(mode) is SigningMode.CANONICAL:
        if canonical_query is None:
            canonical_query = get_canonical_query(extract_user_params(parts.geturl()))
        query = _canonical_query(canonical_query, key_id, expiry_str)
    else:
        query = _legacy_query(parts, key_id, expiry_str)

    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def sign_url(
    url: URLInput,
    options: SigningOptions,
    mode: SigningMode = SigningMode.LEGACY,
    signer: Signer = ed25519_sign,
) -> str:
    """
    Sign a URL, appending keyid, expiry (if any) and signature.

    Args:
        url: Absolute URL (string or urllib SplitResult/ParseResult,
             which is left untouched)
        options: Key id, private key and optional expiry
        mode: LEGACY (order-sensitive) or CANONICAL (order-independent)
        signer: Ed25519 primitive, (message, seed) -> signature

    Returns:
        The signed URL

    Raises:
        SigningError subclasses on invalid URL, expiry or key

    Example:
        >>> sign_url("https://cdn.example.com/a.jpg?w=200", options)
        'https://cdn.example.com/a.jpg?w=200&keyid=k1&signature=...'
    """
    mode = SigningMode(mode)
    parts = _split_absolute(url)

    string_to_sign = url_with_signing_params(
        parts, options.key_id, options.expiry, mode=mode,
    )
    signature = generate_signature(string_to_sign, options.private_key, signer=signer)

    logger.debug(f"Signed URL ({mode.value}): keyid={options.key_id}, path={parts.path}")

    signed = f"{string_to_sign}&signature={signature}"
    if parts.fragment:
        signed = f"{signed}#{parts.fragment}"
    return signed


def sign_asset_url(
    url: URLInput,
    options: SigningOptions,
    signer: Signer = ed25519_sign,
) -> str:
    """Sign a URL with the canonical (asset) protocol."""
    return sign_url(url, options, mode=SigningMode.CANONICAL, signer=signer)
