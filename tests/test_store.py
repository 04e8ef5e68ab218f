import json

import pytest

from intake.demo_data import DEMO_FORM_ID
from intake.models import Question, QuestionKind
from intake.parse_forms import parse_form, parse_responses
from intake.store import FormNotFound, LocalFormStore, SupabaseFormStore


@pytest.fixture
def local_store(tmp_path, now):
    return LocalFormStore(tmp_path / "store" / "forms.json", today=now)


QUESTIONS = [
    Question(id="q1", title="Full Name", required=True),
    Question(id="q7", title="ID Expiry", kind=QuestionKind.DATE),
]


# =============================================================================
# LOCAL STORE
# =============================================================================

def test_empty_store_is_seeded_with_demo_form(local_store):
    forms = local_store.list_forms()

    assert [f["formId"] for f in forms] == [DEMO_FORM_ID]
    assert local_store.path.exists()
    assert len(local_store.list_forms()) == 1


def test_form_without_items_gets_default_questions(local_store):
    local_store.list_forms()

    form = parse_form(local_store.get_form(DEMO_FORM_ID))

    assert len(form.questions) == 17
    assert form.title == "Client Information Form"


def test_demo_responses_served_when_none_stored(local_store, now):
    local_store.list_forms()
    form = parse_form(local_store.get_form(DEMO_FORM_ID))

    raw = parse_responses(local_store.get_form_responses(DEMO_FORM_ID))

    assert [r.id for r in raw] == ["resp_1", "resp_2", "resp_3"]
    assert raw[0].answers["q7"].value == "2026-11-03"
    assert all(r.submitted_at < now for r in raw)
    assert {q.id for q in form.questions} >= set(raw[0].answers)


def test_create_form_persists_questions(local_store):
    created = local_store.create_form("Intake", "desc", QUESTIONS)

    on_disk = json.loads(local_store.path.read_text(encoding="utf-8"))
    assert on_disk["forms"][0]["formId"] == created["formId"]

    form = parse_form(local_store.get_form(created["formId"]))
    assert form.questions == QUESTIONS
    assert form.published_url.endswith(f"{created['formId']}/viewform")


def test_create_form_ids_are_unique(local_store):
    first = local_store.create_form("A")
    second = local_store.create_form("B")

    assert first["formId"] != second["formId"]


def test_stored_responses_replace_demo_responses(local_store):
    form_id = local_store.create_form("Intake", questions=QUESTIONS)["formId"]
    payload = {"responseId": "r1", "createTime": "2026-10-18T10:00:00Z",
               "answers": {"q1": {"textAnswers": {"answers": [{"value": "Ann"}]}}}}

    local_store.add_response(form_id, payload)

    assert local_store.get_form_responses(form_id) == {"responses": [payload]}


def test_delete_form_removes_responses(local_store):
    form_id = local_store.create_form("Intake")["formId"]
    local_store.add_response(form_id, {"responseId": "r1"})

    local_store.delete_form(form_id)

    with pytest.raises(FormNotFound):
        local_store.get_form(form_id)
    assert form_id not in json.loads(local_store.path.read_text(encoding="utf-8"))["responses"]


@pytest.mark.parametrize("call", [
    lambda s: s.get_form("missing"),
    lambda s: s.get_form_responses("missing"),
    lambda s: s.add_response("missing", {}),
    lambda s: s.delete_form("missing"),
])
def test_unknown_form(local_store, call):
    with pytest.raises(FormNotFound):
        call(local_store)


# =============================================================================
# SUPABASE STORE
# =============================================================================

def test_supabase_create_and_get(fake_supabase):
    store = SupabaseFormStore(fake_supabase)

    created = store.create_form("Intake", "desc", QUESTIONS)

    assert fake_supabase.tables["forms"][0]["form_id"] == created["formId"]
    assert store.get_form(created["formId"]) == created
    assert store.list_forms() == [created]


def test_supabase_responses_scoped_to_form(fake_supabase):
    store = SupabaseFormStore(fake_supabase)
    a = store.create_form("A")["formId"]
    b = store.create_form("B")["formId"]

    store.add_response(a, {"responseId": "ra"})
    store.add_response(b, {"responseId": "rb"})

    assert store.get_form_responses(a) == {"responses": [{"responseId": "ra"}]}


def test_supabase_delete(fake_supabase):
    store = SupabaseFormStore(fake_supabase)
    form_id = store.create_form("A")["formId"]
    store.add_response(form_id, {"responseId": "ra"})

    store.delete_form(form_id)

    assert fake_supabase.tables["forms"] == []
    assert fake_supabase.tables["form_responses"] == []


def test_supabase_unknown_form(fake_supabase):
    with pytest.raises(FormNotFound):
        SupabaseFormStore(fake_supabase).get_form("missing")


def test_supabase_failed_insert_raises(fake_supabase, monkeypatch):
    store = SupabaseFormStore(fake_supabase)
    table = fake_supabase.table("forms")
    monkeypatch.setattr(fake_supabase, "table", lambda name: table)
    monkeypatch.setattr(table, "execute", lambda: type("Result", (), {"data": []})())

    with pytest.raises(RuntimeError, match="Insert into forms failed"):
        store.create_form("A")


def test_update_form_replaces_questions(local_store, now):
    form_id = local_store.create_form("Intake", questions=QUESTIONS)["formId"]
    edited = [QUESTIONS[1], Question(id="q9", title="Plan", kind=QuestionKind.SINGLE_CHOICE,
                                     options=["Basic", "Premium"])]

    local_store.update_form(form_id, edited)

    assert parse_form(local_store.get_form(form_id)).questions == edited
    assert local_store.get_form(form_id)["modifiedTime"] == now.isoformat()


def test_update_unknown_form(local_store):
    with pytest.raises(FormNotFound):
        local_store.update_form("missing", QUESTIONS)


def test_corrupt_store_file_names_path(local_store):
    local_store.path.parent.mkdir(parents=True)
    local_store.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RuntimeError, match="forms.json"):
        local_store.list_forms()


def test_store_file_must_hold_object(local_store):
    local_store.path.parent.mkdir(parents=True)
    local_store.path.write_text("[]", encoding="utf-8")

    with pytest.raises(RuntimeError, match="JSON object"):
        local_store.get_form("anything")


def test_supabase_update_form(fake_supabase):
    store = SupabaseFormStore(fake_supabase)
    form_id = store.create_form("Intake", questions=QUESTIONS)["formId"]

    store.update_form(form_id, QUESTIONS[:1])

    assert parse_form(store.get_form(form_id)).questions == QUESTIONS[:1]
    assert len(fake_supabase.tables["forms"]) == 1


def test_supabase_update_unknown_form(fake_supabase):
    with pytest.raises(FormNotFound):
        SupabaseFormStore(fake_supabase).update_form("missing", QUESTIONS)
