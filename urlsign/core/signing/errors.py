"""
Signing Errors

Every failure in the signing core raises one of these synchronously.
They all derive from ValueError so callers that only care about
"bad input" can catch a single type.
"""


class SigningError(ValueError):
    """Base class for URL signing failures."""
    pass


class PemDecodeError(SigningError):
    """PEM armor or base64 body could not be decoded."""
    pass


class SeedNotFoundError(SigningError):
    """No 32-byte OCTET STRING found in the DER payload."""
    pass


class ExpiryFormatError(SigningError):
    """Expiry value could not be interpreted as an instant."""
    pass


class ExpiryPastError(SigningError):
    """Expiry is not strictly in the future."""
    pass


class KeyFormatError(SigningError):
    """Private key is not hex or not 32 bytes long."""
    pass


class InvalidURLError(SigningError):
    """URL is not absolute (missing scheme or host)."""
    pass
