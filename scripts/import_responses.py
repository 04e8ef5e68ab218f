"""
import_responses.py
-------------------
Validates a file of Google-Forms-style responses against a form and adds
them to the configured store.

Usage:
    python -m scripts.import_responses --form demo_form_1 --input responses.json
"""

import argparse
import json
from pathlib import Path

from intake.config import build_store, load_settings
from intake.models import MalformedInput
from intake.parse_forms import parse_form, parse_response


def load_payloads(input_path: Path) -> list:
    data = json.loads(input_path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("responses", [])
    return data


def validate_payloads(payloads: list, question_ids: set) -> list:
    """Return the payloads that parse, warning about the rest. Nothing is written here."""
    valid = []
    for payload in payloads:
        try:
            raw = parse_response(payload)
        except MalformedInput as e:
            print(f"⚠️ Skipping malformed response: {e}")
            continue

        unknown = set(raw.answers) - question_ids
        if unknown:
            print(f"⚠️ Response {raw.id} answers unknown questions {sorted(unknown)}; they will not be shown.")

        valid.append(payload)
    return valid


def main():
    parser = argparse.ArgumentParser(description="Import responses into a form store")
    parser.add_argument("--form", required=True, help="Form id to attach responses to")
    parser.add_argument("--input", required=True, help="Path to a responses JSON file")
    args = parser.parse_args()

    store = build_store(load_settings())
    form = parse_form(store.get_form(args.form))
    question_ids = {q.id for q in form.questions}

    payloads = load_payloads(Path(args.input))
    print(f"🧾 Loaded {len(payloads)} responses from {args.input}")

    valid = validate_payloads(payloads, question_ids)
    for payload in valid:
        store.add_response(form.id, payload)

    print(f"✅ Imported {len(valid)} responses into {form.title} ({form.id})")


if __name__ == "__main__":
    main()
