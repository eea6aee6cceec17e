"""
urlsign CLI entry point.

Usage:
    python -m urlsign sign <url> [expiry] --pem private-key.pem --key-id my-key-id
    python -m urlsign verify <signed-url> [--keys config/keys.yaml]
"""
import sys

from urlsign.cli import main

if __name__ == "__main__":
    sys.exit(main())
