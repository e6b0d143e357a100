"""Command-line entry point: ``survey-logic``.

Runs the evaluation core against survey definition files, for checking
logic and piping while authoring a survey.

Usage::

    # List surveys in the configured survey directory
    survey-logic list

    # Evaluate a survey (by id or file path) against an answer snapshot
    survey-logic evaluate customer_feedback --answers answers.json
    survey-logic evaluate surveys/follow_up.json --answers-json '{"q1": "Yes"}'

    # Report logic and piping problems (exit code 1 if any)
    survey-logic validate customer_feedback

Load errors (missing file, unknown survey id, invalid definition or
answers) exit with code 2.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from survey_logic.config import Settings, load_settings
from survey_logic.constants import SURVEY_FILE_SUFFIXES
from survey_logic.engine import SurveyEngine
from survey_logic.models.question import Survey
from survey_logic.piping import PipingEngine
from survey_logic.store import SurveyStore, load_survey
from survey_logic.validation import validate_logic, validate_piping

logger = logging.getLogger(__name__)


def _resolve_survey(ref: str, settings: Settings) -> Survey:
    """Load *ref* as a file path if it looks like one, else as a store id."""
    path = Path(ref)
    if path.suffix in SURVEY_FILE_SUFFIXES or path.exists():
        return load_survey(path)
    store = SurveyStore(settings.survey_dir)
    store.load()
    try:
        return store.get(ref)
    except KeyError:
        raise ValueError(f"unknown survey {ref!r}") from None


def _load_answers(args: argparse.Namespace) -> dict[str, Any]:
    if args.answers_json is not None:
        raw = json.loads(args.answers_json)
    elif args.answers == "-":
        raw = json.load(sys.stdin)
    elif args.answers is not None:
        with open(args.answers, "r", encoding="utf-8") as f:
            raw = json.load(f)
    else:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("answers must be a JSON object keyed by question id")
    return raw


def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    store = SurveyStore(settings.survey_dir)
    store.load()
    for survey_id in store.list_ids():
        survey = store.get(survey_id)
        print(f"{survey_id}\t{len(survey.questions)} questions\t{survey.title}")
    return 0


def _cmd_evaluate(args: argparse.Namespace, settings: Settings) -> int:
    survey = _resolve_survey(args.survey, settings)
    answers = _load_answers(args)
    engine = SurveyEngine(piping=PipingEngine(no_answer_text=settings.no_answer_text))
    result = engine.evaluate(survey, answers)

    payload = result.model_dump()
    payload["progress"] = result.progress
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    survey = _resolve_survey(args.survey, settings)
    logic_issues = validate_logic(survey)
    piping = validate_piping(survey.questions)

    payload = {
        "survey_id": survey.id,
        "logic": [issue.model_dump() for issue in logic_issues],
        "piping": [issue.model_dump() for issue in piping.errors],
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 1 if logic_issues or not piping.valid else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-logic",
        description="Evaluate survey visibility logic and answer piping.",
    )
    parser.add_argument(
        "--survey-dir",
        default=None,
        help="Directory of survey definitions (default: $SURVEY_LOGIC_SURVEY_DIR or surveys/)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List surveys in the survey directory")

    evaluate = sub.add_parser("evaluate", help="Run one evaluation pass")
    evaluate.add_argument("survey", help="Survey id or path to a definition file")
    group = evaluate.add_mutually_exclusive_group()
    group.add_argument("--answers", help="Path to an answers JSON file ('-' for stdin)")
    group.add_argument("--answers-json", help="Answers as an inline JSON object")

    validate = sub.add_parser("validate", help="Report logic and piping problems")
    validate.add_argument("survey", help="Survey id or path to a definition file")

    return parser


_COMMANDS = {
    "list": _cmd_list,
    "evaluate": _cmd_evaluate,
    "validate": _cmd_validate,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    if args.survey_dir is not None:
        settings = replace(settings, survey_dir=args.survey_dir)

    level = "DEBUG" if args.verbose else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        return _COMMANDS[args.command](args, settings)
    except (FileNotFoundError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.debug("Load failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


def cli() -> None:
    """Console-script entry point: ``survey-logic``."""
    sys.exit(main())
