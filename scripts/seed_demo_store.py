"""
seed_demo_store.py
------------------
Writes a local forms store holding the demo intake form and its three
canned responses, with ID expiry dates relative to today.

Usage:
    python -m scripts.seed_demo_store --output data/forms_store.json
"""

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from intake.demo_data import DEMO_FORM_ID, default_form_items, demo_form, demo_responses


def build_store_data(today: datetime) -> dict:
    form = demo_form(today)
    form["items"] = default_form_items()
    return {
        "forms": [form],
        "responses": {DEMO_FORM_ID: demo_responses(today)},
    }


def main():
    parser = argparse.ArgumentParser(description="Write a demo local forms store")
    parser.add_argument("--output", default="data/forms_store.json", help="Path to save the store JSON")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing store")
    args = parser.parse_args()

    output = Path(args.output)
    if output.exists() and not args.force:
        raise SystemExit(f"⚠️ {output} already exists; pass --force to overwrite it")

    data = build_store_data(datetime.now(timezone.utc))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    print(f"✅ Wrote {len(data['responses'][DEMO_FORM_ID])} demo responses → {output}")


if __name__ == "__main__":
    main()
