from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from intake.expiry import EXPIRY_FIELD_TITLE, EXPIRY_WINDOW_DAYS, is_expiring_soon
from intake.models import FileNames, Form, NormalizedResponse, RawAnswer, RawResponse

FILE_NAME_SEPARATOR = ", "


def answer_to_text(answer: Optional[RawAnswer]) -> str:
    if answer is None:
        return ""
    if isinstance(answer, FileNames):
        return FILE_NAME_SEPARATOR.join(answer.names)
    return answer.value


def reconcile(
    form: Form,
    raw_responses: Iterable[RawResponse],
    now: Optional[datetime] = None,
    window_days: int = EXPIRY_WINDOW_DAYS,
) -> List[NormalizedResponse]:
    """
    Re-key each raw response by question title for display.

    - Every question of the form gets a field, "" when unanswered
    - Fields follow form question order
    - When two questions share a title the later one wins
    - Answers to question ids not in the form are dropped
    """
    if now is None:
        now = datetime.now(timezone.utc)

    normalized = []
    for raw in raw_responses:
        fields: Dict[str, str] = {}
        for question in form.questions:
            fields[question.title] = answer_to_text(raw.answers.get(question.id))

        normalized.append(
            NormalizedResponse(
                id=raw.id,
                submitted_at=raw.submitted_at,
                fields=fields,
                is_expiring_soon=is_expiring_soon(fields.get(EXPIRY_FIELD_TITLE), now, window_days),
            )
        )

    return normalized
