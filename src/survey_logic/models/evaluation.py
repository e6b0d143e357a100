"""Evaluation models — the contract between the SDK and its host.

These models describe what one evaluation pass returns.  They hold no
references back into the survey definition, so a host can serialise them
straight into an API response or a UI store.

  - VisibilityDecision: outcome of the rule scan for one question
  - PipingContext: what the piping engine needs to resolve references
  - RenderedQuestion: a visible question with piped prompt/description
  - SurveyEvaluation: the whole pass (visible set, hints, progress)
  - LogicIssue / PipingIssue: authoring-time validation findings
"""

from collections.abc import Mapping
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .action import ActionType


class VisibilityDecision(BaseModel):
    """Result of scanning one question's rules.

    ``rule_id`` and ``action`` are None when no rule matched (or there
    were no rules) and the default-visible policy applied.
    ``jump_target`` is only set for a matching jump rule; it is a hint
    for the host, never enforced here.
    """

    visible: bool
    rule_id: Optional[str] = None
    action: Optional[ActionType] = None
    jump_target: Optional[str] = None


class PipingContext(BaseModel):
    """Answers plus declaration order, scoped to the question being rendered.

    ``current_question_id`` None means the text does not belong to a
    question (e.g. a closing message) and every question in
    ``question_order`` may be referenced.
    """

    answers: Mapping[str, Any] = Field(default_factory=dict)
    question_order: list[str] = []
    current_question_id: Optional[str] = None


class RenderedQuestion(BaseModel):
    """A visible question with answer references substituted."""

    id: str
    type: str
    question: str
    description: Optional[str] = None
    required: bool = False
    options: Optional[list[str]] = None


class SurveyEvaluation(BaseModel):
    """Output of one evaluation pass over a survey."""

    survey_id: str
    questions: list[RenderedQuestion]
    hidden: list[str] = []
    # owning question id → jump target id, for matched jump rules
    jumps: dict[str, str] = {}
    answered: int = 0
    total: int = 0

    @property
    def visible_ids(self) -> list[str]:
        return [q.id for q in self.questions]

    @property
    def progress(self) -> float:
        """Percentage of visible questions answered (0 when none are visible)."""
        if self.total == 0:
            return 0.0
        return round(self.answered * 100.0 / self.total, 1)


class LogicIssue(BaseModel):
    """One problem found in a survey's logic rules."""

    question_id: str
    rule_id: Optional[str] = None
    kind: Literal[
        "self_reference", "unknown_question", "invalid_jump", "circular_dependency",
    ]
    detail: str


class PipingIssue(BaseModel):
    """One problem found in a question's piping placeholders."""

    question_id: str
    question_index: int
    placeholder: str
    error: str


class PipingValidationResult(BaseModel):
    """Result of :func:`survey_logic.validation.validate_piping`."""

    errors: list[PipingIssue] = []

    @property
    def valid(self) -> bool:
        return not self.errors
