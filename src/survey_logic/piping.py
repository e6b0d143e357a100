"""Answer piping — substitutes earlier answers into question text.

Syntax: ``{{question_id}}`` or, positionally, ``{{Q1}}``, ``{{Q2}}``, ...
(1-indexed into the survey's declaration order).  Whitespace inside the
braces is ignored.

  - "Hi {{name}}, what's your favorite color?" -> "Hi John, what's your favorite color?"
  - "You chose {{Q2}}. Are you sure?"          -> "You chose Red, Blue. Are you sure?"

Only questions declared *before* the one being rendered may be piped.
Forward references, self references, and references to unknown
questions render as an empty string so future answers never leak into
earlier prompts.  Tokens whose content is not a plain reference (e.g.
``{{ first name }}``) are left verbatim.

This is plain string interpolation; nothing inside the braces is ever
evaluated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from survey_logic.constants import LIST_SEPARATOR, NO_ANSWER_TEXT
from survey_logic.models.evaluation import PipingContext
from survey_logic.values import is_empty

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\{\{([^{}]*)\}\}")
_REF_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")
_POSITIONAL_RE = re.compile(r"^[Qq](\d+)$")


def _reference(token_body: str) -> str | None:
    """Return the stripped reference inside a token, or None if malformed."""
    key = token_body.strip()
    if _REF_RE.match(key):
        return key
    return None


def resolve_reference(key: str, question_order: list[str]) -> str | None:
    """Map a reference key to a question id.

    An exact question id wins over the positional ``Q<n>`` form, so a
    survey whose ids happen to be ``Q1``, ``Q2`` keeps working.
    """
    if key in question_order:
        return key
    match = _POSITIONAL_RE.match(key)
    if match:
        index = int(match.group(1)) - 1
        if 0 <= index < len(question_order):
            return question_order[index]
    return None


def format_answer(value: Any, no_answer_text: str = NO_ANSWER_TEXT) -> str:
    """Format an answer value for display inside piped text."""
    if is_empty(value):
        return no_answer_text
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        parts = [text for text in (format_answer(v, "") for v in value) if text]
        return LIST_SEPARATOR.join(parts) if parts else no_answer_text
    if isinstance(value, Mapping):
        return LIST_SEPARATOR.join(f"{k}: {format_answer(v, '')}" for k, v in value.items())
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PipingEngine:
    """Applies answer piping to prompt and description strings.

    Args:
        no_answer_text: substituted for an eligible reference whose
            answer is missing or empty
    """

    def __init__(self, no_answer_text: str = NO_ANSWER_TEXT) -> None:
        self._no_answer_text = no_answer_text

    def apply(self, template: str | None, context: PipingContext) -> str | None:
        """Replace every reference in *template* with its formatted answer."""
        if not template:
            return template

        eligible = self._eligible_ids(context)

        def _substitute(match: re.Match) -> str:
            key = _reference(match.group(1))
            if key is None:
                return match.group(0)
            qid = resolve_reference(key, context.question_order)
            if qid is None or qid not in eligible:
                logger.debug(
                    "Piping reference %r not available to %r",
                    key, context.current_question_id,
                )
                return ""
            return format_answer(context.answers.get(qid), self._no_answer_text)

        return _TOKEN_RE.sub(_substitute, template)

    @staticmethod
    def _eligible_ids(context: PipingContext) -> set[str]:
        """Question ids that may be piped into the current question's text."""
        order = context.question_order
        current = context.current_question_id
        if current is None:
            return set(order)
        if current not in order:
            return set()
        return set(order[: order.index(current)])


_engine = PipingEngine()


def apply_piping(template: str | None, context: PipingContext) -> str | None:
    """Module-level shorthand for :meth:`PipingEngine.apply`."""
    return _engine.apply(template, context)


def has_piping(text: str | None) -> bool:
    """True if *text* contains at least one well-formed reference."""
    return bool(extract_placeholders(text))


def extract_placeholders(text: str | None) -> list[str]:
    """Return the reference keys in *text*, in order of appearance."""
    if not text:
        return []
    keys = []
    for match in _TOKEN_RE.finditer(text):
        key = _reference(match.group(1))
        if key is not None:
            keys.append(key)
    return keys
