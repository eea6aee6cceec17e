"""
Expiry normalization.

Accepts the loose expiry inputs callers tend to have at hand and turns
them into the single canonical form that goes into a signed URL:

    YYYY-MM-DDTHH:MM:SSZ   (UTC, sub-seconds truncated)

Naive datetimes and date/time strings without an offset are taken as UTC.
Numbers are epoch milliseconds.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from dateutil import parser as date_parser

from urlsign.core.signing.errors import ExpiryFormatError, ExpiryPastError

logger = logging.getLogger(__name__)


ExpiryInput = Union[datetime, date, int, float, str, None]

EXPIRY_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fields missing from a partial date string come from here, not from today
_PARSE_DEFAULT = datetime(1970, 1, 1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_expiry(expiry: Union[datetime, date, int, float, str]) -> datetime:
    """
    Convert an expiry input to an aware UTC datetime.

    Raises:
        ExpiryFormatError: If the value cannot be interpreted
    """
    if isinstance(expiry, datetime):
        try:
            return as_utc(expiry)
        except OverflowError as e:
            raise ExpiryFormatError("Invalid expiry date format") from e

    if isinstance(expiry, date):
        return datetime(expiry.year, expiry.month, expiry.day, tzinfo=timezone.utc)

    # bool is an int subclass but never a meaningful timestamp
    if isinstance(expiry, bool):
        raise ExpiryFormatError("Invalid expiry date format")

    if isinstance(expiry, (int, float)):
        try:
            return _EPOCH + timedelta(milliseconds=expiry)
        except (OverflowError, ValueError) as e:
            raise ExpiryFormatError("Invalid expiry date format") from e

    if isinstance(expiry, str):
        if not expiry.strip():
            raise ExpiryFormatError("Invalid expiry date format")
        try:
            return as_utc(date_parser.parse(expiry, default=_PARSE_DEFAULT))
        except (ValueError, OverflowError) as e:
            raise ExpiryFormatError("Invalid expiry date format") from e

    raise ExpiryFormatError("Invalid expiry date format")


def format_expiry(instant: datetime) -> str:
    """Render an instant as YYYY-MM-DDTHH:MM:SSZ, truncating sub-seconds."""
    utc = as_utc(instant).replace(microsecond=0, tzinfo=None)
    return utc.isoformat() + "Z"


def normalize_expiry(
    expiry: ExpiryInput,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """
    Validate an expiry and format it for a signed URL.

    Args:
        expiry: datetime, date, epoch milliseconds, date/time string, or None
        now: Reference time (defaults to the current UTC time)

    Returns:
        Expiry as 'YYYY-MM-DDTHH:MM:SSZ', or None if no expiry was given

    Raises:
        ExpiryFormatError: If the expiry cannot be parsed
        ExpiryPastError: If the expiry is not strictly after `now`

    Example:
        >>> normalize_expiry("2026-12-31T23:59:59.999Z")
        '2026-12-31T23:59:59Z'
    """
    if expiry is None:
        return None

    instant = parse_expiry(expiry)
    reference = as_utc(now) if now is not None else _utc_now()

    if instant <= reference:
        raise ExpiryPastError("Expiry date must be in the future")

    return format_expiry(instant)
