"""
Ed25519 Signing Primitive

Thin wrapper over the cryptography library. The primitive is exposed as
a plain callable so the orchestrator can take it as an explicit
argument:

    Signer = Callable[[bytes, bytes], bytes]   # (message, seed) -> signature

SHA-512 is provided by the cryptography backend; there is no module
level hash configuration to set up or share between threads.
"""

import re
from typing import Callable

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from urlsign.core.signing.errors import KeyFormatError

SEED_LENGTH = 32
SIGNATURE_LENGTH = 64

Signer = Callable[[bytes, bytes], bytes]

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def seed_from_hex(private_key: str) -> bytes:
    """
    Convert a hex private key (64 hex chars) to the 32-byte seed.

    Raises:
        KeyFormatError: If the key is not an even-length hex string,
                        or does not decode to exactly 32 bytes
    """
    if not isinstance(private_key, str) or not _HEX_RE.fullmatch(private_key) or len(private_key) % 2:
        raise KeyFormatError("Private key must be a hex string")

    seed = bytes.fromhex(private_key)
    if len(seed) != SEED_LENGTH:
        raise KeyFormatError(
            f"Private key must be {SEED_LENGTH} bytes, got {len(seed)} bytes"
        )
    return seed


def ed25519_sign(message: bytes, seed: bytes) -> bytes:
    """
    Sign a message with an Ed25519 seed.

    Args:
        message: Bytes to sign
        seed: 32-byte private key seed

    Returns:
        64-byte signature

    Raises:
        KeyFormatError: If the seed is not 32 bytes
    """
    if len(seed) != SEED_LENGTH:
        raise KeyFormatError(
            f"Private key must be {SEED_LENGTH} bytes, got {len(seed)} bytes"
        )
    return Ed25519PrivateKey.from_private_bytes(bytes(seed)).sign(message)
