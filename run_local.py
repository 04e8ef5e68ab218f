import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from intake.config import build_store, load_settings
from intake.dashboard import summarize
from intake.demo_data import default_form_items
from intake.expiry import EXPIRY_FIELD_TITLE, days_until_expiry
from intake.filters import FILTER_CHOICES, filter_responses
from intake.models import MalformedInput, QuestionKind
from intake.parse_forms import parse_form
from intake.service import QuestionNotFound, ResponseService
from intake.store import FormNotFound


def intake_questions():
    """The standard client intake questions, as Question models."""
    return parse_form({"formId": "intake", "items": default_form_items()}).questions


def cmd_forms(service, args):
    forms = service.store.list_forms()
    print(f"📋 {len(forms)} form(s)")
    for listed in forms:
        form = parse_form(listed)
        print(f"- {form.id}: {form.title}")
        if form.published_url:
            print(f"    {form.published_url}")


def cmd_create(service, args):
    questions = intake_questions() if args.intake else []
    form = service.store.create_form(args.title, args.description, questions)
    print(f"✅ Created form {form['formId']} with {len(questions)} question(s)")
    print(f"    {form['publishedUrl']}")


def cmd_add_question(service, args):
    question = service.add_question(
        args.form_id,
        args.title,
        kind=QuestionKind(args.kind),
        required=args.required,
        options=args.option,
    )
    print(f"✅ Added {question.kind.value} question {question.id}: {question.title}")
    if question.options:
        print(f"    options: {', '.join(question.options)}")


def cmd_remove_question(service, args):
    question = service.remove_question(args.form_id, args.question_id)
    print(f"🗑️  Removed question {question.id}: {question.title}")


def cmd_delete(service, args):
    service.store.delete_form(args.form_id)
    print(f"🗑️  Deleted form {args.form_id}")


def cmd_responses(service, args):
    now = datetime.now(timezone.utc)
    form, responses = service.load_responses(args.form_id, now=now)
    shown = filter_responses(responses, args.filter, now, search_term=args.search)

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in shown], indent=2, ensure_ascii=False))
        return

    print(f"\n=== {form.title}: {len(shown)} of {len(responses)} response(s) ===")
    for r in shown:
        status = "ID Expiring Soon" if r.is_expiring_soon else "Active"
        print(f"\n[{r.id}] {r.submitted_at:%Y-%m-%d %H:%M} — {status}")
        for title, value in r.fields.items():
            if not value:
                continue
            if title == EXPIRY_FIELD_TITLE:
                days = days_until_expiry(value, now)
                if days is not None:
                    value = f"{value} ({days} days)"
            print(f"  {title}: {value}")


def cmd_dashboard(service, args):
    stats = summarize(service)

    print("\n=== DASHBOARD ===")
    print(f"Forms:                 {stats.total_forms} ({stats.active_forms} published)")
    print(f"Responses:             {stats.total_responses}")
    print(f"Avg responses/form:    {stats.average_responses_per_form}")
    print(f"Recent (7 days):       {stats.recent_responses}")
    print(f"IDs expiring soon:     {stats.expiring_ids}")

    if stats.expiring_ids:
        s = "" if stats.expiring_ids == 1 else "s"
        print(f"\n⚠️  {stats.expiring_ids} ID{s} expiring soon")

    for activity in stats.recent_activity:
        print(f"- {activity.count} new response(s) on {activity.form_title}")


def build_parser():
    parser = argparse.ArgumentParser(description="Browse intake forms and their responses")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("forms", help="List forms").set_defaults(func=cmd_forms)

    create = sub.add_parser("create", help="Create a form")
    create.add_argument("title")
    create.add_argument("--description", default="")
    create.add_argument("--intake", action="store_true",
                        help="Add the standard client intake questions")
    create.set_defaults(func=cmd_create)

    add_question = sub.add_parser("add-question", help="Append a question to a form")
    add_question.add_argument("form_id")
    add_question.add_argument("title")
    add_question.add_argument("--kind", choices=[k.value for k in QuestionKind],
                              default=QuestionKind.SHORT_TEXT.value)
    add_question.add_argument("--required", action="store_true")
    add_question.add_argument("--option", action="append", default=[],
                              help="Choice option, repeat for each (SINGLE_CHOICE only)")
    add_question.set_defaults(func=cmd_add_question)

    remove_question = sub.add_parser("remove-question", help="Remove a question from a form")
    remove_question.add_argument("form_id")
    remove_question.add_argument("question_id")
    remove_question.set_defaults(func=cmd_remove_question)

    delete = sub.add_parser("delete", help="Delete a form and its responses")
    delete.add_argument("form_id")
    delete.set_defaults(func=cmd_delete)

    responses = sub.add_parser("responses", help="Show the responses of a form")
    responses.add_argument("form_id")
    responses.add_argument("--filter", choices=FILTER_CHOICES, default="all")
    responses.add_argument("--search", default="")
    responses.add_argument("--json", action="store_true", help="Print normalized responses as JSON")
    responses.set_defaults(func=cmd_responses)

    sub.add_parser("dashboard", help="Summary across forms").set_defaults(func=cmd_dashboard)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        service = ResponseService(build_store(settings), window_days=settings.window_days)
        args.func(service, args)
    except FormNotFound as e:
        print(f"❌ Form not found: {e.args[0]}", file=sys.stderr)
        return 1
    except QuestionNotFound as e:
        print(f"❌ Question not found: {e.args[0]}", file=sys.stderr)
        return 1
    except MalformedInput as e:
        print(f"❌ Malformed data: {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
