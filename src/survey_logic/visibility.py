"""VisibilityResolver — decides whether a question is currently shown.

Each question may carry a logic rule-set.  On every answer change the
host re-runs the resolver over every question in declaration order:

  1. No logic, or no rules → visible (default-visible policy).
  2. Rules are scanned in stored order; the first rule whose condition
     matches decides:
       - show → visible
       - hide → hidden
       - jump → hidden, and the jump target is surfaced as a hint
  3. No rule matched → visible (default-visible policy).

A rule whose condition references the owning question itself is never
allowed to match.  Raw logic dicts are parsed tolerantly, so a malformed
rule is dropped rather than breaking the form.

The resolver is pure: it reads the logic and the answer snapshot and
writes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from survey_logic.evaluator import ConditionEvaluator
from survey_logic.models.action import HideAction, JumpAction, ShowAction
from survey_logic.models.evaluation import VisibilityDecision
from survey_logic.models.question import Question, QuestionLogic

logger = logging.getLogger(__name__)


class VisibilityResolver:
    """Evaluates question logic rule-sets against an answer snapshot.

    Args:
        evaluator: optional condition evaluator; a fresh one by default
    """

    def __init__(self, evaluator: ConditionEvaluator | None = None) -> None:
        self._evaluator = evaluator or ConditionEvaluator()

    def resolve(
        self,
        logic: QuestionLogic | Mapping[str, Any] | None,
        answers: Mapping[str, Any],
        *,
        question_id: str | None = None,
    ) -> VisibilityDecision:
        """Scan the rules and return the full decision.

        Args:
            logic: the question's rule-set (model or raw dict), or None
            answers: current answers keyed by question id
            question_id: id of the owning question, used to ignore
                         self-referencing rules
        """
        parsed = QuestionLogic.coerce(logic)
        if parsed is None or not parsed.rules:
            return VisibilityDecision(visible=True)

        for rule in parsed.rules:
            if question_id is not None and question_id in rule.condition.question_ids():
                logger.warning(
                    "Question %s: ignoring self-referencing rule %r", question_id, rule.id,
                )
                continue

            if not self._evaluator.evaluate(rule.condition, answers):
                continue

            action = rule.action
            if isinstance(action, ShowAction):
                return VisibilityDecision(visible=True, rule_id=rule.id, action="show")
            elif isinstance(action, HideAction):
                return VisibilityDecision(visible=False, rule_id=rule.id, action="hide")
            elif isinstance(action, JumpAction):
                return VisibilityDecision(
                    visible=False,
                    rule_id=rule.id,
                    action="jump",
                    jump_target=action.target_question_id,
                )
            else:
                logger.warning("Rule %r has unsupported action %r", rule.id, action)

        # No rule matched: default-visible policy
        return VisibilityDecision(visible=True)

    def is_visible(
        self,
        logic: QuestionLogic | Mapping[str, Any] | None,
        answers: Mapping[str, Any],
        *,
        question_id: str | None = None,
    ) -> bool:
        """True if the question should be rendered."""
        return self.resolve(logic, answers, question_id=question_id).visible

    def visible_questions(
        self, questions: Iterable[Question], answers: Mapping[str, Any]
    ) -> list[Question]:
        """Filter *questions* to the visible ones, keeping declaration order."""
        return [
            q for q in questions
            if self.is_visible(q.logic, answers, question_id=q.id)
        ]


_resolver = VisibilityResolver()


def resolve_visibility(
    logic: QuestionLogic | Mapping[str, Any] | None,
    answers: Mapping[str, Any],
    *,
    question_id: str | None = None,
) -> VisibilityDecision:
    """Module-level shorthand for :meth:`VisibilityResolver.resolve`."""
    return _resolver.resolve(logic, answers, question_id=question_id)


def is_visible(
    logic: QuestionLogic | Mapping[str, Any] | None,
    answers: Mapping[str, Any],
    *,
    question_id: str | None = None,
) -> bool:
    """Module-level shorthand for :meth:`VisibilityResolver.is_visible`."""
    return _resolver.is_visible(logic, answers, question_id=question_id)
