# backend/services/date_utils.py
import os
import pytz
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

# Office timezone used when rendering document timestamps
OFFICE_TIMEZONE = pytz.timezone(os.environ.get('OFFICE_TIMEZONE', 'Asia/Kolkata'))


def utcnow():
    """Naive UTC timestamp, matching what the document tables store."""
    return datetime.utcnow()


def resolve_timezone(tz_name=None):
    """
    Look up a timezone by name, falling back to the office timezone.

    Args:
        tz_name (str, optional): IANA timezone name

    Returns:
        tzinfo: pytz timezone
    """
    if not tz_name:
        return OFFICE_TIMEZONE
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone '{tz_name}', using {OFFICE_TIMEZONE}")
        return OFFICE_TIMEZONE


def format_datetime_for_response(dt, tz_name=None):
    """
    Format a stored timestamp for API responses.

    Stored timestamps are naive UTC; they are rendered as ISO-8601 in the
    office timezone with the offset included.

    Args:
        dt (datetime): Naive UTC or timezone-aware datetime
        tz_name (str, optional): Override for the rendering timezone

    Returns:
        str: ISO formatted datetime, or None when dt is empty
    """
    if not dt:
        return None

    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)

    return dt.astimezone(resolve_timezone(tz_name)).isoformat()
