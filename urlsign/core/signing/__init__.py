"""
Ed25519 URL Signing Module

Signs URLs with keyid / expiry / signature query parameters so a holder
of the matching public key can check authenticity and expiry.
Supports the legacy (positional) and canonical (asset) protocols.
"""

from urlsign.core.signing.errors import (
    SigningError,
    PemDecodeError,
    SeedNotFoundError,
    ExpiryFormatError,
    ExpiryPastError,
    KeyFormatError,
    InvalidURLError,
)
from urlsign.core.signing.pem import (
    decode_pem,
    extract_ed25519_seed,
    pem_to_ed25519_bytes,
    pem_to_ed25519_hex,
)
from urlsign.core.signing.expiry import normalize_expiry
from urlsign.core.signing.query import (
    RESERVED_PARAMS,
    extract_user_params,
    get_canonical_query,
    percent_encode,
)
from urlsign.core.signing.signer import ed25519_sign, seed_from_hex
from urlsign.core.signing.urls import (
    SigningMode,
    SigningOptions,
    generate_signature,
    sign_asset_url,
    sign_url,
    url_with_signing_params,
)
from urlsign.core.signing.verify import (
    VerificationError,
    VerificationResult,
    verify_signed_url,
)

__all__ = [
    # Errors
    "SigningError",
    "PemDecodeError",
    "SeedNotFoundError",
    "ExpiryFormatError",
    "ExpiryPastError",
    "KeyFormatError",
    "InvalidURLError",
    # PEM
    "decode_pem",
    "extract_ed25519_seed",
    "pem_to_ed25519_bytes",
    "pem_to_ed25519_hex",
    # Expiry / query
    "normalize_expiry",
    "RESERVED_PARAMS",
    "extract_user_params",
    "get_canonical_query",
    "percent_encode",
    # Signing
    "ed25519_sign",
    "seed_from_hex",
    "SigningMode",
    "SigningOptions",
    "generate_signature",
    "sign_asset_url",
    "sign_url",
    "url_with_signing_params",
    # Verification
    "VerificationError",
    "VerificationResult",
    "verify_signed_url",
]
