"""
Ed25519 Key Management

Key generation, serialization and loading for URL signing keys.
Uses the cryptography library for all cryptographic operations; the
private key seed itself is read with the PEM scanner in pem.py so the
signing path works on the raw hex form used by SigningOptions.
"""

import base64
from pathlib import Path
from typing import Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from urlsign.core.signing.errors import KeyFormatError
from urlsign.core.signing.pem import pem_to_ed25519_hex


def generate_keypair() -> Tuple[Ed25519PrivateKey, Ed25519PublicKey]:
    """
    Generate a new Ed25519 keypair.
    
    Returns:
        Tuple of (private_key, public_key)
    """
    private_key = Ed25519PrivateKey.generate()
    return private_key, private_key.public_key()


def private_key_to_pem(private_key: Ed25519PrivateKey) -> str:
    """Serialize a private key as unencrypted PKCS#8 PEM."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def private_key_to_hex(private_key: Ed25519PrivateKey) -> str:
    """Raw 32-byte seed of a private key, as hex."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    ).hex()


def public_key_from_seed(seed: bytes) -> Ed25519PublicKey:
    """
    Derive the public key for a 32-byte seed.

    Raises:
        KeyFormatError: If the seed is not 32 bytes
    """
    if len(seed) != 32:
        raise KeyFormatError(f"Private key must be 32 bytes, got {len(seed)} bytes")
    return Ed25519PrivateKey.from_private_bytes(bytes(seed)).public_key()


def public_key_to_base64(public_key: Ed25519PublicKey) -> str:
    """
    Serialize a public key to base64-encoded string.
    
    Args:
        public_key: Ed25519 public key object
        
    Returns:
        Base64-encoded public key string (44 characters)
    """
    raw_bytes = public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return base64.b64encode(raw_bytes).decode("ascii")


def base64_to_public_key(b64_key: str) -> Ed25519PublicKey:
    """
    Deserialize a base64-encoded public key string.
    
    Raises:
        ValueError: If the key is invalid or wrong length
    """
    try:
        raw_bytes = base64.b64decode(b64_key, validate=True)
    except ValueError as e:
        raise ValueError(f"Invalid public key: {e}") from e

    if len(raw_bytes) != 32:
        raise ValueError(f"Invalid public key length: {len(raw_bytes)} bytes (expected 32)")
    return Ed25519PublicKey.from_public_bytes(raw_bytes)


def load_private_key_hex(path: Path) -> str:
    """
    Load a PEM private key file and return its seed as hex.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PemDecodeError, SeedNotFoundError: If the PEM is not an Ed25519 key
    """
    pem = Path(path).read_text(encoding="utf-8")
    return pem_to_ed25519_hex(pem)
