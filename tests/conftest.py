from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from intake.models import FileNames, Form, Question, QuestionKind, RawResponse, TextValue

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def days_from_now(days: int) -> str:
    return (NOW + timedelta(days=days)).date().isoformat()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def intake_form():
    return Form(
        id="form_1",
        title="Client Information Form",
        published_url="https://docs.google.com/forms/d/form_1/viewform",
        questions=[
            Question(id="q1", title="Name", kind=QuestionKind.SHORT_TEXT, required=True),
            Question(id="q6", title="Image ID", kind=QuestionKind.SHORT_TEXT),
            Question(id="q7", title="ID Expiry", kind=QuestionKind.DATE, required=True),
            Question(id="q9", title="Plan", kind=QuestionKind.SINGLE_CHOICE,
                     options=["Basic", "Premium"]),
        ],
    )


@pytest.fixture
def make_response(now):
    def _make(response_id="resp_1", submitted_days_ago=1, **answers):
        return RawResponse(
            id=response_id,
            submitted_at=now - timedelta(days=submitted_days_ago),
            answers=answers,
        )
    return _make


@pytest.fixture
def ann(make_response):
    return make_response(
        q1=TextValue(value="Ann"),
        q6=FileNames(names=["a.png", "b.png"]),
        q7=TextValue(value=days_from_now(10)),
    )


class FakeTable:
    """The slice of the supabase query builder the store uses."""

    def __init__(self, rows):
        self.rows = rows
        self.op = None
        self.row = None
        self.filters = []

    def select(self, *_columns):
        self.op = "select"
        return self

    def insert(self, row):
        self.op = "insert"
        self.row = row
        return self

    def update(self, values):
        self.op = "update"
        self.row = values
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.op == "insert":
            self.rows.append(self.row)
            return SimpleNamespace(data=[self.row])
        matched = [row for row in self.rows if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(self.row)
        if self.op == "delete":
            self.rows[:] = [row for row in self.rows if not self._matches(row)]
        return SimpleNamespace(data=matched)


class FakeSupabase:
    def __init__(self):
        self.tables = {}

    def table(self, name):
        return FakeTable(self.tables.setdefault(name, []))


@pytest.fixture
def fake_supabase():
    return FakeSupabase()
