import uuid
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from intake.expiry import EXPIRY_WINDOW_DAYS
from intake.models import Form, NormalizedResponse, Question, QuestionKind
from intake.parse_forms import parse_form, parse_responses
from intake.reconcile import reconcile
from intake.store import FormStore


class QuestionNotFound(KeyError):
    pass


class ResponseService:
    """Loads a form and its responses from a store and reconciles them."""

    def __init__(self, store: FormStore, window_days: int = EXPIRY_WINDOW_DAYS):
        self.store = store
        self.window_days = window_days

    def load_form(self, form_id: str) -> Form:
        return parse_form(self.store.get_form(form_id))

    def load_responses(
        self, form_id: str, now: Optional[datetime] = None
    ) -> Tuple[Form, List[NormalizedResponse]]:
        form = self.load_form(form_id)
        raw = parse_responses(self.store.get_form_responses(form_id))
        return form, reconcile(form, raw, now=now, window_days=self.window_days)

    def add_question(
        self,
        form_id: str,
        title: str,
        kind: QuestionKind = QuestionKind.SHORT_TEXT,
        required: bool = False,
        options: Sequence[str] = (),
    ) -> Question:
        """Append a question to the end of the form. Options are kept for choice questions only."""
        form = self.load_form(form_id)
        question = Question(
            id=f"question_{uuid.uuid4().hex[:8]}",
            title=title,
            kind=kind,
            required=required,
            options=list(options) if kind == QuestionKind.SINGLE_CHOICE else [],
        )
        self.store.update_form(form_id, [*form.questions, question])
        return question

    def remove_question(self, form_id: str, question_id: str) -> Question:
        form = self.load_form(form_id)
        remaining = [q for q in form.questions if q.id != question_id]
        if len(remaining) == len(form.questions):
            raise QuestionNotFound(question_id)

        removed = next(q for q in form.questions if q.id == question_id)
        self.store.update_form(form_id, remaining)
        return removed
