"""Question, logic rule, and survey models.

A survey is an ordered list of questions.  Each question may carry a
logic rule-set (``QuestionLogic``) that decides its visibility:

  - rules are evaluated top-to-bottom; the first matching rule wins
  - a rule pairs a ``Condition`` with an ``Action``
  - a condition is either simple (one question, one operator) or
    compound (``and``/``or`` over nested conditions)

Logic is stored as camelCase JSON by the survey builder
(``questionId``, ``targetQuestionId``); snake_case names are accepted as
well.

Rule-sets are parsed tolerantly: a malformed rule is dropped with a
warning instead of failing the whole question, so one bad rule cannot
break a published form.  A dropped rule behaves exactly like a rule that
never matches.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .action import Action

logger = logging.getLogger(__name__)


QuestionType = Literal[
    "short_text", "long_text", "number", "email", "phone",
    "single_choice", "multiple_choice", "dropdown",
    "rating", "scale",
    "date", "time", "datetime",
    "file_upload", "location", "signature",
]

Operator = Literal[
    "equals", "not_equals",
    "contains", "not_contains",
    "greater_than", "less_than",
    "greater_than_or_equal", "less_than_or_equal",
    "is_empty", "is_not_empty",
    "in_list", "not_in_list",
]


# --- Conditions ---

class SimpleCondition(BaseModel):
    """Compares the answer to one question against a value.

    ``value`` is unused by ``is_empty`` / ``is_not_empty`` and must be a
    list for ``in_list`` / ``not_in_list``.
    """

    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId", min_length=1)
    operator: Operator
    value: Any = None

    def question_ids(self) -> set[str]:
        return {self.question_id}


class CompoundCondition(BaseModel):
    """AND/OR over nested conditions."""

    type: Literal["and", "or"]
    conditions: list[Condition]

    def question_ids(self) -> set[str]:
        ids: set[str] = set()
        for cond in self.conditions:
            ids |= cond.question_ids()
        return ids


Condition = Union[SimpleCondition, CompoundCondition]

CompoundCondition.model_rebuild()


# --- Rules ---

class Rule(BaseModel):
    """If ``condition`` matches, ``action`` decides the question's visibility."""

    id: Optional[str] = None
    condition: Condition
    action: Action


class QuestionLogic(BaseModel):
    """Ordered rule-set attached to a question; first match wins."""

    rules: list[Rule] = []

    @classmethod
    def coerce(cls, raw: Any) -> Optional[QuestionLogic]:
        """Parse host-supplied logic, dropping rules that fail validation.

        Accepts ``None``, a ``QuestionLogic``, or a ``{"rules": [...]}``
        dict.  Anything else yields an empty rule-set (always visible).
        """
        if raw is None or isinstance(raw, QuestionLogic):
            return raw
        if not isinstance(raw, dict):
            logger.warning("Ignoring logic of unexpected type %s", type(raw).__name__)
            return cls()

        raw_rules = raw.get("rules") or []
        if not isinstance(raw_rules, list):
            logger.warning("Ignoring logic rules of unexpected type %s", type(raw_rules).__name__)
            return cls()

        rules: list[Rule] = []
        for index, raw_rule in enumerate(raw_rules):
            if isinstance(raw_rule, Rule):
                rules.append(raw_rule)
                continue
            try:
                rules.append(Rule.model_validate(raw_rule))
            except ValidationError as exc:
                rule_id = raw_rule.get("id") if isinstance(raw_rule, dict) else None
                logger.warning(
                    "Dropping malformed logic rule #%d (id=%r): %d validation error(s)",
                    index, rule_id, exc.error_count(),
                )
        return cls(rules=rules)


# --- Questions & surveys ---

class Question(BaseModel):
    """A single survey question as the evaluation core sees it."""

    id: str = Field(min_length=1)
    type: QuestionType
    question: str = ""
    description: Optional[str] = None
    required: bool = False
    # Choice labels for single_choice / multiple_choice / dropdown
    options: Optional[list[str]] = None
    logic: Optional[QuestionLogic] = None

    @field_validator("logic", mode="before")
    @classmethod
    def _coerce_logic(cls, v: Any) -> Optional[QuestionLogic]:
        return QuestionLogic.coerce(v)


class Survey(BaseModel):
    """Ordered list of questions; list position is declaration order."""

    id: str
    title: str = ""
    description: Optional[str] = None
    questions: list[Question] = []

    @model_validator(mode="after")
    def _chk_unique_ids(self):
        seen: set[str] = set()
        for q in self.questions:
            if q.id in seen:
                raise ValueError(f"duplicate question id: {q.id}")
            seen.add(q.id)
        return self

    @property
    def question_order(self) -> list[str]:
        """Question ids in declaration order."""
        return [q.id for q in self.questions]

    def get_question(self, question_id: str) -> Question:
        """Look up a question by id.  Raises ``KeyError`` if unknown."""
        for q in self.questions:
            if q.id == question_id:
                return q
        raise KeyError(question_id)
