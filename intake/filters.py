from datetime import datetime, timedelta, timezone
from typing import List, Sequence

from intake.models import NormalizedResponse

FILTER_CHOICES = ("all", "expiring", "recent")
RECENT_DAYS = 7


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_recent(response: NormalizedResponse, now: datetime, days: int = RECENT_DAYS) -> bool:
    return _as_utc(response.submitted_at) >= _as_utc(now) - timedelta(days=days)


def search_responses(responses: Sequence[NormalizedResponse], term: str) -> List[NormalizedResponse]:
    """Keep responses where any field value contains `term`, ignoring case."""
    if not term:
        return list(responses)
    needle = term.lower()
    return [
        r for r in responses
        if any(needle in value.lower() for value in r.fields.values())
    ]


def filter_responses(
    responses: Sequence[NormalizedResponse],
    filter_by: str,
    now: datetime,
    search_term: str = "",
) -> List[NormalizedResponse]:
    if filter_by not in FILTER_CHOICES:
        raise ValueError(f"filter_by must be one of {FILTER_CHOICES}, got {filter_by!r}")

    filtered = search_responses(responses, search_term)

    if filter_by == "expiring":
        filtered = [r for r in filtered if r.is_expiring_soon]
    elif filter_by == "recent":
        filtered = [r for r in filtered if is_recent(r, now)]

    return filtered
