"""
Signed URL Verification

Checks a signed URL against the public key for its keyid.

Both signing modes append `&signature=<base64url>` to the end of the
signed string by concatenation, so the string-to-sign is recovered by
cutting the URL at the last `&signature=` (after dropping any #fragment).
The query left over is then read for keyid and expiry.

Verification never raises on untrusted input; every failure is reported
as a VerificationResult with a VerificationError.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import urlsplit

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from urlsign.core.signing.encoding import from_base64url
from urlsign.core.signing.expiry import EXPIRY_FORMAT, as_utc
from urlsign.core.signing.query import parse_query
from urlsign.core.signing.registry import KeyRegistry
from urlsign.core.signing.signer import SIGNATURE_LENGTH

logger = logging.getLogger(__name__)


SIGNATURE_MARKER = "&signature="


class VerificationError(Enum):
    """Enumeration of possible verification failures."""
    MISSING_SIGNATURE = "missing_signature"
    MISSING_KEYID = "missing_keyid"
    UNKNOWN_KEY = "unknown_key"
    INVALID_SIGNATURE_FORMAT = "invalid_signature_format"
    INVALID_EXPIRY_FORMAT = "invalid_expiry_format"
    EXPIRED = "expired"
    SIGNATURE_VERIFICATION_FAILED = "signature_verification_failed"


@dataclass
class VerificationResult:
    """
    Result of signed URL verification.
    
    Attributes:
        success: Whether verification succeeded
        error: Error type if verification failed
        error_message: Human-readable error message
        key_id: keyid from the URL (if present)
        expiry: Parsed expiry (if present and valid)
    """
    success: bool
    error: Optional[VerificationError] = None
    error_message: Optional[str] = None
    key_id: Optional[str] = None
    expiry: Optional[datetime] = None
    
    @classmethod
    def ok(cls, key_id: str, expiry: Optional[datetime]) -> "VerificationResult":
        """Create a successful result."""
        return cls(success=True, key_id=key_id, expiry=expiry)
    
    @classmethod
    def fail(cls, error: VerificationError, message: str, key_id: Optional[str] = None) -> "VerificationResult":
        """Create a failed result."""
        return cls(success=False, error=error, error_message=message, key_id=key_id)


def split_signed_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Split a signed URL into (string_to_sign, signature).

    Returns:
        The pair, or None if the URL carries no appended signature
    """
    without_fragment = url.split("#", 1)[0]
    index = without_fragment.rfind(SIGNATURE_MARKER)
    if index == -1:
        return None
    return without_fragment[:index], without_fragment[index + len(SIGNATURE_MARKER):]


def _last_value(params, name: str) -> Optional[str]:
    values = [value for key, value in params if key == name]
    return values[-1] if values else None


def verify_signed_url(
    url: str,
    public_key: Optional[Ed25519PublicKey] = None,
    registry: Optional[KeyRegistry] = None,
    now: Optional[datetime] = None,
) -> VerificationResult:
    """
    Verify a signed URL.

    Performs the following checks in order:
    1. A signature is appended
    2. keyid is present
    3. A public key is available (given directly, or from the registry)
    4. The signature is 64 bytes of base64url
    5. expiry, if present, is well-formed and strictly in the future
    6. The Ed25519 signature matches the string-to-sign

    Args:
        url: Signed URL as produced by sign_url / sign_asset_url
        public_key: Key to verify with; takes precedence over the registry
        registry: Lookup of keyid -> public key
        now: Reference time for the expiry check (defaults to now, UTC)

    Returns:
        VerificationResult with success status and details
    """
    parts = split_signed_url(url)
    if parts is None:
        return VerificationResult.fail(
            VerificationError.MISSING_SIGNATURE,
            "URL has no signature parameter"
        )
    string_to_sign, signature_b64 = parts

    params = parse_query(urlsplit(string_to_sign).query)
    key_id = _last_value(params, "keyid")
    if not key_id:
        return VerificationResult.fail(
            VerificationError.MISSING_KEYID,
            "URL has no keyid parameter"
        )

    if public_key is None and registry is not None:
        public_key = registry.get_public_key(key_id)
    if public_key is None:
        return VerificationResult.fail(
            VerificationError.UNKNOWN_KEY,
            f"Unknown key id: '{key_id}'",
            key_id=key_id,
        )

    try:
        signature = from_base64url(signature_b64)
    except ValueError as e:
        return VerificationResult.fail(
            VerificationError.INVALID_SIGNATURE_FORMAT,
            f"Invalid base64url signature: {e}",
            key_id=key_id,
        )
    if len(signature) != SIGNATURE_LENGTH:
        return VerificationResult.fail(
            VerificationError.INVALID_SIGNATURE_FORMAT,
            f"Invalid signature length: {len(signature)} bytes (expected {SIGNATURE_LENGTH})",
            key_id=key_id,
        )

    expiry = None
    expiry_str = _last_value(params, "expiry")
    if expiry_str is not None:
        try:
            expiry = datetime.strptime(expiry_str, EXPIRY_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            return VerificationResult.fail(
                VerificationError.INVALID_EXPIRY_FORMAT,
                f"Invalid expiry format: '{expiry_str}'",
                key_id=key_id,
            )
        reference = as_utc(now) if now is not None else datetime.now(timezone.utc)
        if expiry <= reference:
            return VerificationResult.fail(
                VerificationError.EXPIRED,
                f"URL expired at {expiry_str}",
                key_id=key_id,
            )

    try:
        public_key.verify(signature, string_to_sign.encode("utf-8"))
    except InvalidSignature:
        logger.debug(f"Signature mismatch for keyid={key_id}")
        return VerificationResult.fail(
            VerificationError.SIGNATURE_VERIFICATION_FAILED,
            "Signature verification failed",
            key_id=key_id,
        )

    return VerificationResult.ok(key_id=key_id, expiry=expiry)
