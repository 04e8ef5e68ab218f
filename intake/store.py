"""
Form stores.

A store hands out raw Google-Forms-shaped dicts; callers run them through
intake.parse_forms. Stores are passed explicitly to whatever needs them.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from intake.demo_data import default_form_items, demo_form, demo_responses, form_urls
from intake.models import Question
from intake.parse_forms import question_to_item

logger = logging.getLogger(__name__)


class FormNotFound(KeyError):
    pass


class FormStore(Protocol):
    def list_forms(self) -> List[dict]: ...

    def get_form(self, form_id: str) -> dict: ...

    def create_form(self, title: str, description: str = "",
                    questions: Optional[Sequence[Question]] = None) -> dict: ...

    def update_form(self, form_id: str, questions: Sequence[Question]) -> dict: ...

    def delete_form(self, form_id: str) -> None: ...

    def get_form_responses(self, form_id: str) -> dict: ...

    def add_response(self, form_id: str, payload: dict) -> dict: ...


def new_form_payload(title: str, description: str = "",
                     questions: Optional[Sequence[Question]] = None,
                     now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    form_id = f"form_{uuid.uuid4().hex[:12]}"
    return {
        "formId": form_id,
        "info": {"title": title, "description": description},
        "createdTime": now.isoformat(),
        "modifiedTime": now.isoformat(),
        **form_urls(form_id),
        "items": [question_to_item(q) for q in questions or []],
    }


def _form_id(form: dict) -> str:
    return form.get("formId") or form.get("id")


class LocalFormStore:
    """
    Forms and responses kept in one JSON file:

        {"forms": [...], "responses": {"<form id>": [...]}}

    An empty store is seeded with the demo intake form. A form saved
    without items is served with the default intake questions, and a form
    with no stored responses is served the demo responses.
    """

    def __init__(self, path, today: Optional[datetime] = None):
        self.path = Path(path)
        self.today = today

    def _now(self) -> datetime:
        return self.today or datetime.now(timezone.utc)

    def _read(self) -> dict:
        if not self.path.exists():
            return {"forms": [], "responses": {}}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Form store {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RuntimeError(f"Form store {self.path} must hold a JSON object")
        data.setdefault("forms", [])
        data.setdefault("responses", {})
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _find(self, data: dict, form_id: str) -> dict:
        for form in data["forms"]:
            if _form_id(form) == form_id:
                return form
        raise FormNotFound(form_id)

    def list_forms(self) -> List[dict]:
        data = self._read()
        if not data["forms"]:
            logger.info("Seeding empty store %s with the demo form", self.path)
            data["forms"].append(demo_form(self._now()))
            self._write(data)
        return [dict(form) for form in data["forms"]]

    def get_form(self, form_id: str) -> dict:
        form = dict(self._find(self._read(), form_id))
        if not form.get("items"):
            form["items"] = default_form_items()
        return form

    def create_form(self, title: str, description: str = "",
                    questions: Optional[Sequence[Question]] = None) -> dict:
        data = self._read()
        form = new_form_payload(title, description, questions, now=self._now())
        data["forms"].append(form)
        self._write(data)
        logger.info("Created form %s (%s)", form["formId"], title)
        return form

    def update_form(self, form_id: str, questions: Sequence[Question]) -> dict:
        data = self._read()
        form = self._find(data, form_id)
        form["items"] = [question_to_item(q) for q in questions]
        form["modifiedTime"] = self._now().isoformat()
        self._write(data)
        logger.info("Updated form %s with %d question(s)", form_id, len(questions))
        return dict(form)

    def delete_form(self, form_id: str) -> None:
        data = self._read()
        form = self._find(data, form_id)
        data["forms"].remove(form)
        data["responses"].pop(form_id, None)
        self._write(data)

    def get_form_responses(self, form_id: str) -> dict:
        data = self._read()
        self._find(data, form_id)
        stored = data["responses"].get(form_id)
        if stored is None:
            return {"responses": demo_responses(self._now())}
        return {"responses": list(stored)}

    def add_response(self, form_id: str, payload: dict) -> dict:
        data = self._read()
        self._find(data, form_id)
        data["responses"].setdefault(form_id, []).append(payload)
        self._write(data)
        return payload


class SupabaseFormStore:
    """
    Forms and responses kept in two Supabase tables, each row holding the
    raw payload as JSON:

        forms(form_id text, payload jsonb)
        form_responses(form_id text, payload jsonb)
    """

    def __init__(self, client, forms_table: str = "forms",
                 responses_table: str = "form_responses"):
        self.client = client
        self.forms_table = forms_table
        self.responses_table = responses_table

    def list_forms(self) -> List[dict]:
        result = self.client.table(self.forms_table).select("*").execute()
        return [row["payload"] for row in result.data or []]

    def get_form(self, form_id: str) -> dict:
        result = (
            self.client.table(self.forms_table)
            .select("*")
            .eq("form_id", form_id)
            .execute()
        )
        if not result.data:
            raise FormNotFound(form_id)
        return result.data[0]["payload"]

    def create_form(self, title: str, description: str = "",
                    questions: Optional[Sequence[Question]] = None) -> dict:
        form = new_form_payload(title, description, questions)
        result = self.client.table(self.forms_table).insert({
            "form_id": form["formId"],
            "payload": form,
        }).execute()

        if not result.data:
            raise RuntimeError(f"Insert into {self.forms_table} failed: {result}")

        logger.info("Created form %s (%s)", form["formId"], title)
        return form

    def update_form(self, form_id: str, questions: Sequence[Question]) -> dict:
        form = dict(self.get_form(form_id))
        form["items"] = [question_to_item(q) for q in questions]
        form["modifiedTime"] = datetime.now(timezone.utc).isoformat()

        result = (
            self.client.table(self.forms_table)
            .update({"payload": form})
            .eq("form_id", form_id)
            .execute()
        )

        if not result.data:
            raise RuntimeError(f"Update of {self.forms_table} failed: {result}")

        logger.info("Updated form %s with %d question(s)", form_id, len(questions))
        return form

    def delete_form(self, form_id: str) -> None:
        self.get_form(form_id)
        self.client.table(self.responses_table).delete().eq("form_id", form_id).execute()
        self.client.table(self.forms_table).delete().eq("form_id", form_id).execute()

    def get_form_responses(self, form_id: str) -> dict:
        result = (
            self.client.table(self.responses_table)
            .select("*")
            .eq("form_id", form_id)
            .execute()
        )
        return {"responses": [row["payload"] for row in result.data or []]}

    def add_response(self, form_id: str, payload: dict) -> dict:
        result = self.client.table(self.responses_table).insert({
            "form_id": form_id,
            "payload": payload,
        }).execute()

        if not result.data:
            raise RuntimeError(f"Insert into {self.responses_table} failed: {result}")

        return payload
