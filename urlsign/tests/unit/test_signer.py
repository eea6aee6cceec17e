"""
Unit tests for the Ed25519 primitive wrapper and key helpers.
"""
import pytest

from urlsign.core.signing.errors import KeyFormatError
from urlsign.core.signing.keys import (
    base64_to_public_key,
    load_private_key_hex,
    public_key_from_seed,
    public_key_to_base64,
)
from urlsign.core.signing.signer import ed25519_sign, seed_from_hex

from conftest import RFC8032_EMPTY_SIGNATURE_HEX, RFC8032_SEED_HEX


class TestSeedFromHex:
    """Test private key validation."""

    def test_valid(self):
        assert seed_from_hex(RFC8032_SEED_HEX) == bytes.fromhex(RFC8032_SEED_HEX)

    def test_uppercase_accepted(self):
        assert seed_from_hex(RFC8032_SEED_HEX.upper()) == bytes.fromhex(RFC8032_SEED_HEX)

    @pytest.mark.parametrize("value", ["zz", "invalid-key", "9d61 b19d", "abc"])
    def test_not_hex(self, value):
        with pytest.raises(KeyFormatError, match="hex"):
            seed_from_hex(value)

    def test_wrong_length(self):
        with pytest.raises(KeyFormatError, match="32 bytes"):
            seed_from_hex("ab" * 10)

    def test_too_long(self):
        with pytest.raises(KeyFormatError, match="32 bytes"):
            seed_from_hex("ab" * 64)


class TestEd25519Sign:
    """Test signing against RFC 8032 vectors."""

    def test_rfc8032_vector(self):
        signature = ed25519_sign(b"", bytes.fromhex(RFC8032_SEED_HEX))
        assert signature.hex() == RFC8032_EMPTY_SIGNATURE_HEX

    def test_deterministic(self):
        seed = bytes.fromhex(RFC8032_SEED_HEX)
        assert ed25519_sign(b"message", seed) == ed25519_sign(b"message", seed)

    def test_signature_length(self):
        assert len(ed25519_sign(b"x", bytes(32))) == 64

    def test_verifies_with_public_key(self, public_key):
        signature = ed25519_sign(b"payload", bytes.fromhex(RFC8032_SEED_HEX))
        public_key.verify(signature, b"payload")

    def test_wrong_seed_length(self):
        with pytest.raises(KeyFormatError):
            ed25519_sign(b"x", bytes(31))


class TestKeys:
    """Test key serialization helpers."""

    def test_public_key_rfc8032(self):
        public_key = public_key_from_seed(bytes.fromhex(RFC8032_SEED_HEX))
        round_trip = base64_to_public_key(public_key_to_base64(public_key))
        assert public_key_to_base64(round_trip) == public_key_to_base64(public_key)

    def test_public_key_from_short_seed(self):
        with pytest.raises(KeyFormatError):
            public_key_from_seed(b"\x00" * 16)

    def test_base64_public_key_wrong_length(self):
        with pytest.raises(ValueError, match="expected 32"):
            base64_to_public_key("AAAA")

    def test_base64_public_key_garbage(self):
        with pytest.raises(ValueError):
            base64_to_public_key("not base64!")

    def test_load_private_key_hex(self, tmp_path, rfc_pem):
        path = tmp_path / "private-key.pem"
        path.write_text(rfc_pem)
        assert load_private_key_hex(path) == RFC8032_SEED_HEX

    def test_load_private_key_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_private_key_hex(tmp_path / "missing.pem")
