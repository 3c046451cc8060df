import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime

from intake.config import settings
from intake.schemas import ParseContext, ParseRequest
from intake.sentry import flush as sentry_flush
from intake.sentry import init_sentry


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_request(text: str, date: str | None = None) -> ParseRequest:
    if date is None:
        return ParseRequest(input=text)
    return ParseRequest(input=text, context=ParseContext(current_date=datetime.fromisoformat(date)))


def parse_answers(pairs: list[str]) -> dict[str, str]:
    answers = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep or not field.strip():
            raise ValueError(f"Answer must look like field=value, got {pair!r}")
        answers[field.strip()] = value.strip()
    return answers


def print_result(result, pretty: bool) -> None:
    print(json.dumps(result.to_dict(), indent=2 if pretty else None))


async def parse_text(text: str, date: str | None, pretty: bool) -> None:
    from intake.services import get_intent_parser

    result = await get_intent_parser().parse(build_request(text, date))
    print_result(result, pretty)


async def clarify_text(text: str, date: str | None, answers: list[str], pretty: bool) -> None:
    from intake.services import get_intent_parser

    result = await get_intent_parser().process_clarification(
        build_request(text, date), parse_answers(answers)
    )
    print_result(result, pretty)


def check_config() -> None:
    print("Intake Configuration Check\n")
    rows = [
        ("User timezone", settings.user_timezone),
        ("Accept threshold", settings.accept_threshold),
        ("Heuristic threshold", settings.heuristic_threshold),
        ("Strategy timeout (s)", settings.strategy_timeout_seconds),
        ("Working hours", f"{settings.default_work_start}-{settings.default_work_end}"),
        ("Sentry", "configured" if settings.has_sentry else "disabled"),
        ("Log level", settings.log_level),
    ]
    for name, value in rows:
        print(f"  {name}: {value}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Planner natural-language intake")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    parse_cmd = subparsers.add_parser("parse", help="Parse free text into planner items")
    parse_cmd.add_argument("text")
    parse_cmd.add_argument("--date", help="Reference date/time (ISO 8601)")
    parse_cmd.add_argument("--pretty", action="store_true")

    clarify_cmd = subparsers.add_parser("clarify", help="Re-parse text with clarification answers")
    clarify_cmd.add_argument("text")
    clarify_cmd.add_argument("--date", help="Reference date/time (ISO 8601)")
    clarify_cmd.add_argument(
        "--answer", action="append", default=[], metavar="FIELD=VALUE", help="Clarification answer"
    )
    clarify_cmd.add_argument("--pretty", action="store_true")

    subparsers.add_parser("check-config", help="Show active configuration")

    args = parser.parse_args()

    setup_logging()
    init_sentry()

    try:
        if args.command == "parse":
            asyncio.run(parse_text(args.text, args.date, args.pretty))
        elif args.command == "clarify":
            asyncio.run(clarify_text(args.text, args.date, args.answer, args.pretty))
        elif args.command == "check-config":
            check_config()
        else:
            parser.print_help()
    except ValueError as e:
        # Bad --date or --answer
        print(f"Error: {e}")
        sys.exit(2)
    finally:
        sentry_flush(timeout=2.0)


if __name__ == "__main__":
    main()
