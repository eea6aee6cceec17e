"""
urlsign - deterministic Ed25519 signed URLs.

Usage:
    from urlsign import SigningOptions, pem_to_ed25519_hex, sign_url

    options = SigningOptions(key_id="k1", private_key=pem_to_ed25519_hex(pem))
    signed = sign_url("https://cdn.example.com/image.jpg", options)
"""
from urlsign.core.signing import *  # noqa: F401,F403
from urlsign.core.signing import __all__  # noqa: F401

__version__ = "1.0.0"
