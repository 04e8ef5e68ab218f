"""
Roll-up counts across forms for the dashboard view.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from intake.filters import is_recent
from intake.models import MalformedInput
from intake.service import ResponseService

logger = logging.getLogger(__name__)

# Forms beyond this are not inspected
FORM_LIMIT = 10
ACTIVITY_LIMIT = 5


@dataclass
class RecentActivity:
    form_id: str
    form_title: str
    count: int


@dataclass
class DashboardStats:
    total_forms: int = 0
    total_responses: int = 0
    expiring_ids: int = 0
    recent_responses: int = 0
    active_forms: int = 0
    average_responses_per_form: int = 0
    recent_activity: List[RecentActivity] = field(default_factory=list)


def summarize(service: ResponseService, now: Optional[datetime] = None,
              form_limit: int = FORM_LIMIT) -> DashboardStats:
    if now is None:
        now = datetime.now(timezone.utc)

    forms = service.store.list_forms()
    stats = DashboardStats(total_forms=len(forms))

    for listed in forms[:form_limit]:
        form_id = listed.get("formId") or listed.get("id")
        try:
            form, responses = service.load_responses(form_id, now=now)
        except (MalformedInput, KeyError) as e:
            logger.warning("Skipping form %s: %s", form_id, e)
            continue

        if form.published_url:
            stats.active_forms += 1

        stats.total_responses += len(responses)
        stats.expiring_ids += sum(1 for r in responses if r.is_expiring_soon)

        recent = sum(1 for r in responses if is_recent(r, now))
        stats.recent_responses += recent
        if recent:
            stats.recent_activity.append(RecentActivity(form.id, form.title, recent))

    if stats.total_forms:
        stats.average_responses_per_form = math.floor(stats.total_responses / stats.total_forms + 0.5)
    stats.recent_activity = stats.recent_activity[:ACTIVITY_LIMIT]
    return stats
