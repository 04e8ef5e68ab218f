from datetime import datetime
from typing import List

from pydantic import ValidationError

from intake.models import (
    FileNames,
    Form,
    MalformedInput,
    Question,
    QuestionKind,
    RawResponse,
    TextValue,
)


def _object(value, where: str) -> dict:
    """`value` as a dict, {} when missing."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedInput(f"{where} must be an object, got {type(value).__name__}")
    return value


def _list(value, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedInput(f"{where} must be a list, got {type(value).__name__}")
    return value


def _question_kind(question: dict) -> QuestionKind:
    if "choiceQuestion" in question:
        return QuestionKind.SINGLE_CHOICE
    if "dateQuestion" in question:
        return QuestionKind.DATE
    if (question.get("textQuestion") or {}).get("paragraph"):
        return QuestionKind.LONG_TEXT
    # Unknown question types are shown as short text
    return QuestionKind.SHORT_TEXT


def parse_form(payload: dict) -> Form:
    """
    Coerce a Google-Forms-style form payload into a Form.

    - Form id is read from "formId", falling back to "id"
    - Only items carrying a questionItem become questions, in item order
    - Choice options keep their order
    """
    if not isinstance(payload, dict):
        raise MalformedInput(f"form payload must be an object, got {type(payload).__name__}")

    form_id = payload.get("formId") or payload.get("id")
    if not form_id:
        raise MalformedInput("form payload has no formId")

    info = _object(payload.get("info"), f"form {form_id}: info")
    title = info.get("title") or payload.get("name") or payload.get("title") or "Untitled Form"

    questions = []
    for index, item in enumerate(_list(payload.get("items"), f"form {form_id}: items")):
        where = f"form {form_id}: item {index}"
        item = _object(item, where)
        if item.get("questionItem") is None:
            continue
        question_item = _object(item["questionItem"], f"{where} questionItem")
        question = _object(question_item.get("question"), f"{where} question")

        question_id = question.get("questionId")
        if not question_id:
            raise MalformedInput(f"{where} has no questionId")

        where = f"form {form_id}: question {question_id}"
        for key in ("textQuestion", "dateQuestion", "choiceQuestion"):
            _object(question.get(key), f"{where} {key}")

        choice = question.get("choiceQuestion") or {}
        options = [
            _object(opt, f"{where} option").get("value", "")
            for opt in _list(choice.get("options"), f"{where} options")
        ]

        try:
            questions.append(
                Question(
                    id=question_id,
                    title=item.get("title") or "",
                    kind=_question_kind(question),
                    required=bool(question.get("required", False)),
                    options=options,
                )
            )
        except ValidationError as e:
            raise MalformedInput(f"{where}: {e}") from e

    try:
        return Form(
            id=form_id,
            title=title,
            description=info.get("description") or payload.get("description") or "",
            published_url=payload.get("publishedUrl") or payload.get("webViewLink") or "",
            edit_url=payload.get("editUrl") or "",
            questions=questions,
        )
    except ValidationError as e:
        raise MalformedInput(f"form {form_id}: {e}") from e


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise MalformedInput(f"missing or non-string timestamp: {value!r}")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise MalformedInput(f"unparseable timestamp: {value!r}") from e


def parse_answer(question_id: str, answer: dict):
    where = f"answer for {question_id}"
    if not isinstance(answer, dict):
        raise MalformedInput(f"{where} must be an object")

    if "textAnswers" in answer:
        text_answers = _object(answer["textAnswers"], f"{where} textAnswers")
        values = _list(text_answers.get("answers"), f"{where} textAnswers.answers")
        # Only the first value is kept
        first = _object(values[0], f"{where} text value").get("value") if values else None
        return TextValue(value=str(first) if first is not None else "")

    if "fileUploadAnswers" in answer:
        file_answers = _object(answer["fileUploadAnswers"], f"{where} fileUploadAnswers")
        uploads = _list(file_answers.get("answers"), f"{where} fileUploadAnswers.answers")
        return FileNames(names=[
            str(_object(u, f"{where} upload").get("fileName", "")) for u in uploads
        ])

    raise MalformedInput(f"{where} has no textAnswers or fileUploadAnswers")


def parse_response(payload: dict) -> RawResponse:
    if not isinstance(payload, dict):
        raise MalformedInput(f"response payload must be an object, got {type(payload).__name__}")

    response_id = payload.get("responseId") or payload.get("id")
    if not response_id:
        raise MalformedInput("response payload has no responseId")

    raw_answers = _object(payload.get("answers"), f"response {response_id}: answers")

    try:
        answers = {qid: parse_answer(qid, ans) for qid, ans in raw_answers.items()}
        submitted_at = parse_timestamp(payload.get("createTime") or payload.get("timestamp"))
    except MalformedInput as e:
        raise MalformedInput(f"response {response_id}: {e}") from e

    try:
        return RawResponse(id=response_id, submitted_at=submitted_at, answers=answers)
    except ValidationError as e:
        raise MalformedInput(f"response {response_id}: {e}") from e


def parse_responses(payload) -> List[RawResponse]:
    """Accepts {"responses": [...]} as returned by a store, or a bare list."""
    if isinstance(payload, dict):
        payload = payload.get("responses") or []
    if not isinstance(payload, list):
        raise MalformedInput("responses payload must be a list")
    return [parse_response(item) for item in payload]


def question_to_item(question: Question) -> dict:
    """Inverse of the question part of parse_form, used when storing a form."""
    body = {"questionId": question.id, "required": question.required}
    if question.kind == QuestionKind.SINGLE_CHOICE:
        body["choiceQuestion"] = {
            "type": "RADIO",
            "options": [{"value": opt} for opt in question.options],
        }
    elif question.kind == QuestionKind.DATE:
        body["dateQuestion"] = {}
    elif question.kind == QuestionKind.LONG_TEXT:
        body["textQuestion"] = {"paragraph": True}
    else:
        body["textQuestion"] = {}
    return {"title": question.title, "questionItem": {"question": body}}
