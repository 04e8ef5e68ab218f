"""
ID expiry date policy.

Expiry values are plain calendar dates ("2026-11-03"). They are compared
against the UTC calendar date of `now`, so the result does not depend on
the host timezone.

A date already in the past still counts as expiring soon.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

EXPIRY_FIELD_TITLE = "ID Expiry"
EXPIRY_WINDOW_DAYS = 30


def utc_today(now: datetime) -> date:
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def parse_expiry_date(text: Optional[str]) -> Optional[date]:
    """Return the calendar date in `text`, or None when it is empty or unparseable."""
    if not text or not text.strip():
        return None
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return utc_today(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        logger.debug("Ignoring unparseable expiry date %r", text)
        return None


def days_until_expiry(text: Optional[str], now: datetime) -> Optional[int]:
    expiry = parse_expiry_date(text)
    if expiry is None:
        return None
    return (expiry - utc_today(now)).days


def is_expiring_soon(text: Optional[str], now: datetime, window_days: int = EXPIRY_WINDOW_DAYS) -> bool:
    expiry = parse_expiry_date(text)
    if expiry is None:
        return False
    return expiry <= utc_today(now) + timedelta(days=window_days)
