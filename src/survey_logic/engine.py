"""SurveyEngine — one full evaluation pass over a survey.

The host calls :meth:`SurveyEngine.evaluate` on every answer change.
Each pass:

  1. runs the visibility resolver over every question in declaration order
  2. pipes earlier answers into the prompt and description of each
     visible question
  3. collects jump hints from matched jump rules
  4. counts answered vs. total visible questions for progress display

Stateless engine pattern: nothing is cached between passes and neither
the survey nor the answer snapshot is modified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from survey_logic.models.evaluation import (
    PipingContext,
    RenderedQuestion,
    SurveyEvaluation,
)
from survey_logic.models.question import Survey
from survey_logic.piping import PipingEngine
from survey_logic.values import is_empty
from survey_logic.visibility import VisibilityResolver

logger = logging.getLogger(__name__)


class SurveyEngine:
    """Runs visibility and piping over a whole survey.

    Args:
        resolver: optional visibility resolver
        piping: optional piping engine (e.g. with a custom no-answer text)
    """

    def __init__(
        self,
        resolver: VisibilityResolver | None = None,
        piping: PipingEngine | None = None,
    ) -> None:
        self._resolver = resolver or VisibilityResolver()
        self._piping = piping or PipingEngine()

    def evaluate(self, survey: Survey, answers: Mapping[str, Any]) -> SurveyEvaluation:
        """Compute the visible, piped question list for the current answers."""
        base_context = PipingContext(answers=answers, question_order=survey.question_order)
        rendered: list[RenderedQuestion] = []
        hidden: list[str] = []
        jumps: dict[str, str] = {}
        answered = 0

        for q in survey.questions:
            decision = self._resolver.resolve(q.logic, answers, question_id=q.id)
            if decision.jump_target is not None:
                jumps[q.id] = decision.jump_target
            if not decision.visible:
                hidden.append(q.id)
                continue

            context = base_context.model_copy(update={"current_question_id": q.id})
            rendered.append(RenderedQuestion(
                id=q.id,
                type=q.type,
                question=self._piping.apply(q.question, context) or "",
                description=self._piping.apply(q.description, context),
                required=q.required,
                options=q.options,
            ))
            if not is_empty(answers.get(q.id)):
                answered += 1

        logger.debug(
            "Survey %s: %d visible, %d hidden, %d answered",
            survey.id, len(rendered), len(hidden), answered,
        )
        return SurveyEvaluation(
            survey_id=survey.id,
            questions=rendered,
            hidden=hidden,
            jumps=jumps,
            answered=answered,
            total=len(rendered),
        )

    def render_text(self, survey: Survey, text: str, answers: Mapping[str, Any]) -> str:
        """Pipe answers into text that does not belong to a question.

        Every question in the survey may be referenced, e.g. in a closing
        message shown after the last question.
        """
        context = PipingContext(answers=answers, question_order=survey.question_order)
        return self._piping.apply(text, context) or ""
