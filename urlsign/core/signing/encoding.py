"""
Base64url helpers.

Signatures are emitted in the same alphabet as Go's base64.URLEncoding:
'-' and '_' instead of '+' and '/', with '=' padding kept.
"""

import base64
import binascii
import re

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def normalize_base64url(b64: str) -> str:
    """Swap '+' for '-' and '/' for '_', leaving padding alone."""
    return b64.replace("+", "-").replace("/", "_")


def to_base64url_with_padding(data: bytes) -> str:
    """Encode bytes as padded base64url."""
    return normalize_base64url(base64.b64encode(data).decode("ascii"))


def from_base64url(text: str) -> bytes:
    """
    Decode base64url text, padded or not.

    Raises:
        ValueError: If the text is not base64url
    """
    if not _BASE64URL_RE.fullmatch(text):
        raise ValueError("Not a base64url string")

    if len(text) % 4:
        text += "=" * (4 - len(text) % 4)

    try:
        return base64.urlsafe_b64decode(text)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64url: {e}") from e
