"""
PEM / PKCS#8 Seed Extraction

Turns a PEM-armored Ed25519 private key into the raw 32-byte seed.

This is deliberately not an ASN.1 parser. A PKCS#8 Ed25519 key has a
small fixed shape:

    30 2e                       SEQUENCE
       02 01 00                 INTEGER 0 (version)
       30 05 06 03 2b 65 70     AlgorithmIdentifier (1.3.101.112)
       04 22                    OCTET STRING (wrapper)
          04 20 <32 bytes>      OCTET STRING (the seed)

so the seed is found by scanning for the last OCTET STRING tag (0x04)
with a length byte of 32 (0x20). A DER buffer carrying a second 32-byte
OCTET STRING after the real seed would be misread; that input is not
produced by any key generator we know of and is left unhandled.
"""

import base64
import binascii
import logging
import re

from urlsign.core.signing.errors import PemDecodeError, SeedNotFoundError

logger = logging.getLogger(__name__)


OCTET_STRING_TAG = 0x04
SEED_LENGTH = 32

_PEM_MARKER_RE = re.compile(r"-----(?:BEGIN|END)[^-]*-----")
_WHITESPACE_RE = re.compile(r"\s+")
_BASE64_BODY_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")


def decode_pem(pem: str) -> bytes:
    """
    Strip PEM armor and whitespace, then base64-decode the body.

    The label between BEGIN/END is not checked, so "PRIVATE KEY",
    "ED25519 PRIVATE KEY" etc. are all accepted. LF and CRLF line endings
    both work. An empty body decodes to b"".

    Args:
        pem: PEM text

    Returns:
        Raw DER bytes

    Raises:
        PemDecodeError: If the body is not valid base64
    """
    body = _PEM_MARKER_RE.sub("", pem)
    body = _WHITESPACE_RE.sub("", body)

    if not _BASE64_BODY_RE.fullmatch(body):
        raise PemDecodeError("PEM body contains characters outside the base64 alphabet")

    # Tolerate missing trailing padding
    if len(body) % 4:
        body += "=" * (4 - len(body) % 4)

    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise PemDecodeError(f"Invalid base64 in PEM body: {e}") from e


def extract_ed25519_seed(der: bytes) -> bytes:
    """
    Find the Ed25519 seed in a PKCS#8 DER buffer.

    Collects every position holding 0x04 0x20 followed by at least 32
    bytes and returns the bytes of the last one.

    Raises:
        SeedNotFoundError: If no such OCTET STRING exists
    """
    last_match = None
    for i in range(len(der) - 1):
        if (
            der[i] == OCTET_STRING_TAG
            and der[i + 1] == SEED_LENGTH
            and len(der) >= i + 2 + SEED_LENGTH
        ):
            last_match = i

    if last_match is None:
        raise SeedNotFoundError("Ed25519 32-byte seed not found in PKCS#8")

    start = last_match + 2
    logger.debug(f"Ed25519 seed located at DER offset {start}")
    return bytes(der[start:start + SEED_LENGTH])


def pem_to_ed25519_bytes(pem: str) -> bytes:
    """Decode a PEM private key and return its 32-byte Ed25519 seed."""
    return extract_ed25519_seed(decode_pem(pem))


def pem_to_ed25519_hex(pem: str) -> str:
    """Same as pem_to_ed25519_bytes, as 64 lowercase hex characters."""
    return pem_to_ed25519_bytes(pem).hex()
