"""
Shared fixtures for the URL signing tests.

Keys follow RFC 8032 test vector 1 so expected signatures are stable.
"""
import base64
from datetime import datetime, timezone

import pytest

from urlsign.core.signing.keys import public_key_from_seed


# RFC 8032, section 7.1, TEST 1
RFC8032_SEED_HEX = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_EMPTY_SIGNATURE_HEX = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)
OTHER_SEED_HEX = "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"

# PKCS#8 prefix for an Ed25519 private key, up to and including 04 20
PKCS8_ED25519_PREFIX = bytes.fromhex("302e020100300506032b657004220420")

BASE_URL = "https://cdn.example.com/images/project/dataset/image-id-100x100.jpg"
TEST_KEY_ID = "test-key-id"
FAR_EXPIRY = "2099-12-31T23:59:59Z"


def make_pem(der: bytes, label: str = "PRIVATE KEY", line_length: int = 64, newline: str = "\n") -> str:
    """Wrap DER bytes in PEM armor."""
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i:i + line_length] for i in range(0, len(body), line_length)]
    return newline.join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----"])


def make_pkcs8(seed: bytes) -> bytes:
    """Minimal PKCS#8 Ed25519 DER for a seed."""
    return PKCS8_ED25519_PREFIX + seed


@pytest.fixture
def private_key_hex():
    """RFC 8032 test seed as hex."""
    return RFC8032_SEED_HEX


@pytest.fixture
def public_key():
    """Public key matching private_key_hex."""
    return public_key_from_seed(bytes.fromhex(RFC8032_SEED_HEX))


@pytest.fixture
def rfc_pem():
    """PEM wrapping the RFC 8032 test seed."""
    return make_pem(make_pkcs8(bytes.fromhex(RFC8032_SEED_HEX)))


@pytest.fixture
def fixed_now():
    """Reference time for expiry tests."""
    return datetime(2025, 12, 31, 12, 0, 0, tzinfo=timezone.utc)
