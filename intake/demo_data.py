"""
Demo content served by the local store: the standard client intake
questions and three canned submissions whose ID expiry dates sit 15, 60 and
25 days after `today`.
"""

from datetime import datetime, timedelta

DEMO_FORM_ID = "demo_form_1"
DEMO_FORM_TITLE = "Client Information Form"
DEMO_FORM_DESCRIPTION = (
    "Comprehensive client intake form for collecting personal and financial information"
)

# (question id, title, question body)
INTAKE_QUESTIONS = [
    ("q1", "Full Name", {"textQuestion": {}, "required": True}),
    ("q2", "Birthday", {"dateQuestion": {}, "required": True}),
    ("q3", "Address", {"textQuestion": {"paragraph": True}, "required": True}),
    ("q4", "Email Address", {"textQuestion": {}, "required": True}),
    ("q5", "Contact Number", {"textQuestion": {}, "required": True}),
    ("q6", "Image ID", {"textQuestion": {}, "required": True}),
    ("q7", "ID Expiry", {"dateQuestion": {}, "required": True}),
    ("q8", "Social Security Number", {"textQuestion": {}, "required": True}),
    ("q9", "Image SSN", {"textQuestion": {}, "required": True}),
    ("q10", "Account Number", {"textQuestion": {}, "required": True}),
    ("q11", "Routing Number", {"textQuestion": {}, "required": True}),
    ("q12", "Image Account", {"textQuestion": {}, "required": True}),
    ("q13", "Application 1", {"textQuestion": {}, "required": False}),
    ("q14", "Application 2", {"textQuestion": {}, "required": False}),
    ("q15", "Application 3", {"textQuestion": {}, "required": False}),
    ("q16", "Client's Name", {"textQuestion": {}, "required": True}),
    ("q17", "Visit Plan", {"textQuestion": {"paragraph": True}, "required": True}),
]

DEMO_CLIENTS = [
    # response id, days ago submitted, ID expires in days, answers
    ("resp_1", 5, 15, {
        "q1": "John Smith",
        "q2": "1990-05-15",
        "q3": "123 Main St, City, State 12345",
        "q4": "john.smith@email.com",
        "q5": "(555) 123-4567",
        "q6": "ID123456789",
        "q8": "***-**-1234",
        "q16": "John Smith",
        "q17": "Regular consultation visit",
    }),
    ("resp_2", 2, 60, {
        "q1": "Jane Doe",
        "q2": "1985-08-22",
        "q3": "456 Oak Ave, City, State 67890",
        "q4": "jane.doe@email.com",
        "q5": "(555) 987-6543",
        "q6": "ID987654321",
        "q8": "***-**-5678",
        "q16": "Jane Doe",
        "q17": "Follow-up appointment",
    }),
    ("resp_3", 1, 25, {
        "q1": "Mike Johnson",
        "q2": "1992-12-10",
        "q3": "789 Pine St, City, State 54321",
        "q4": "mike.johnson@email.com",
        "q5": "(555) 456-7890",
        "q6": "ID456789123",
        "q8": "***-**-9012",
        "q16": "Mike Johnson",
        "q17": "Initial consultation",
    }),
]


def form_urls(form_id: str) -> dict:
    return {
        "publishedUrl": f"https://docs.google.com/forms/d/{form_id}/viewform",
        "editUrl": f"https://docs.google.com/forms/d/{form_id}/edit",
    }


def default_form_items() -> list:
    return [
        {"title": title, "questionItem": {"question": {"questionId": qid, **body}}}
        for qid, title, body in INTAKE_QUESTIONS
    ]


def demo_form(now: datetime) -> dict:
    return {
        "formId": DEMO_FORM_ID,
        "info": {"title": DEMO_FORM_TITLE, "description": DEMO_FORM_DESCRIPTION},
        "createdTime": now.isoformat(),
        "modifiedTime": now.isoformat(),
        **form_urls(DEMO_FORM_ID),
        "items": [],
    }


def text_answer(value: str) -> dict:
    return {"textAnswers": {"answers": [{"value": value}]}}


def demo_responses(today: datetime) -> list:
    responses = []
    for response_id, days_ago, expires_in, answers in DEMO_CLIENTS:
        payload_answers = {qid: text_answer(value) for qid, value in answers.items()}
        payload_answers["q7"] = text_answer((today + timedelta(days=expires_in)).date().isoformat())
        responses.append({
            "responseId": response_id,
            "createTime": (today - timedelta(days=days_ago)).isoformat(),
            "answers": payload_answers,
        })
    return responses
