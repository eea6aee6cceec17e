"""
URL Signing CLI

Signs URLs with an Ed25519 PEM private key, and verifies signed URLs
against configured public keys.

Usage:
    python -m urlsign sign <url> [expiry] --pem private-key.pem --key-id my-key-id
    python -m urlsign verify <signed-url> [--keys config/keys.yaml]

Examples:
    # Sign without expiry (legacy protocol)
    python -m urlsign sign "https://example.com/api/resource" --pem ./private-key.pem --key-id my-key-id

    # Sign with expiry using the canonical (asset) protocol
    python -m urlsign sign "https://cdn.example.com/a.jpg?w=200" "2026-12-31T23:59:59Z" \\
        --pem ./private-key.pem --key-id my-key-id --mode canonical

    # Verify with an explicit public key
    python -m urlsign verify "<signed-url>" --public-key <base64>

Defaults for --pem, --key-id, --mode and --keys come from URLSIGN_* env vars / .env.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from urlsign.core.config import get_settings
from urlsign.core.signing.errors import SigningError
from urlsign.core.signing.keys import base64_to_public_key, load_private_key_hex
from urlsign.core.signing.registry import load_key_registry
from urlsign.core.signing.urls import (
    SigningMode,
    SigningOptions,
    sign_url,
)
from urlsign.core.signing.verify import split_signed_url, verify_signed_url

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False):
    """Configure logging based on verbosity."""
    settings = get_settings()
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=settings.log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_sign(args) -> int:
    """Sign a URL and print the result."""
    if not args.pem:
        print("Error: No PEM file provided (use --pem or URLSIGN_PRIVATE_KEY_PATH).", file=sys.stderr)
        return 1
    if not args.key_id:
        print("Error: No keyId provided (use --key-id or URLSIGN_KEY_ID).", file=sys.stderr)
        return 1

    pem_path = Path(args.pem)
    if not pem_path.exists():
        print(f"Error: PEM file not found: {pem_path}", file=sys.stderr)
        return 1

    try:
        private_key_hex = load_private_key_hex(pem_path)
        logger.info(f"Loaded signing key from {pem_path}")

        mode = SigningMode(args.mode)
        options = SigningOptions(
            key_id=args.key_id,
            private_key=private_key_hex,
            expiry=args.expiry,
        )
        signed_url = sign_url(args.url, options, mode=mode)
        _, signature = split_signed_url(signed_url)
    except (SigningError, ValueError) as e:
        print(f"Error generating signature: {e}", file=sys.stderr)
        return 1

    print("🔑 Signing URL with Ed25519 Key")
    print("   ✅ URL signed successfully")
    print(f"   📋 Original URL: {args.url}")
    print(f"   🧭 Mode: {mode.value}")
    print(f"   ⏰ Expires at: {args.expiry or 'never'}")
    print(f"   🔑 Signature: {signature}")
    print(f"   🌐 Signed URL: {signed_url}")
    return 0


def cmd_verify(args) -> int:
    """Verify a signed URL and print the outcome."""
    public_key = None
    registry = None
    try:
        if args.public_key:
            public_key = base64_to_public_key(args.public_key)
        else:
            registry = load_key_registry(Path(args.keys) if args.keys else None)
    except ValueError as e:
        print(f"Error loading verification keys: {e}", file=sys.stderr)
        return 1

    result = verify_signed_url(args.url, public_key=public_key, registry=registry)
    if result.success:
        expires = result.expiry.strftime("%Y-%m-%dT%H:%M:%SZ") if result.expiry else "never"
        print(f"✅ Signature valid (keyid={result.key_id}, expires={expires})")
        return 0

    print(f"❌ Verification failed: {result.error_message}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="urlsign",
        description="Sign and verify Ed25519 signed URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sign https://example.com/r --pem key.pem --key-id k1
  %(prog)s sign https://example.com/r 2026-12-31T23:59:59Z --pem key.pem --key-id k1 --mode canonical
  %(prog)s verify "https://example.com/r?keyid=k1&signature=..." --public-key <base64>
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_parser = subparsers.add_parser("sign", help="Sign a URL")
    sign_parser.add_argument("url", help="URL to sign")
    sign_parser.add_argument("expiry", nargs="?", default=None, help="Optional expiry (e.g. 2026-12-31T23:59:59Z)")
    sign_parser.add_argument(
        "--pem",
        default=settings.private_key_path,
        help="Path to the Ed25519 PEM private key (default: URLSIGN_PRIVATE_KEY_PATH)",
    )
    sign_parser.add_argument(
        "--key-id",
        default=settings.key_id,
        help="Key identifier for the keyid parameter (default: URLSIGN_KEY_ID)",
    )
    sign_parser.add_argument(
        "--mode",
        choices=[m.value for m in SigningMode],
        default=settings.signing_mode,
        help=f"Signing protocol (default: {settings.signing_mode})",
    )
    sign_parser.set_defaults(func=cmd_sign)

    verify_parser = subparsers.add_parser("verify", help="Verify a signed URL")
    verify_parser.add_argument("url", help="Signed URL")
    verify_parser.add_argument(
        "--keys",
        default=settings.keys_config,
        help="Path to keys.yaml (default: URLSIGN_KEYS_CONFIG or config/keys.yaml)",
    )
    verify_parser.add_argument("--public-key", help="Base64 raw public key (overrides --keys)")
    verify_parser.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
