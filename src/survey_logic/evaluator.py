"""ConditionEvaluator — decides whether a logic condition matches.

Simple conditions compare the answer to one question against a value;
compound conditions AND/OR nested conditions together.  The evaluator
never raises for bad input: an unknown operator, a missing comparison
value, or an operand that does not parse all evaluate to ``False``
(the condition does not match).

Operator semantics (all answer coercion goes through ``survey_logic.values``):

  - is_empty / is_not_empty: None, "", [] count as empty
  - equals / not_equals: numeric when the answer is a number and the
    value parses as one, otherwise compared as normalized text
  - contains / not_contains: element membership for list answers,
    case-sensitive substring for scalar answers
  - greater_than, less_than, greater_than_or_equal, less_than_or_equal:
    both operands parsed as numbers
  - in_list / not_in_list: the answer is one of the values in a list

Every operator except the emptiness checks fails closed on an
unanswered question.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from survey_logic.constants import EMPTINESS_OPERATORS, NUMERIC_OPERATORS
from survey_logic.models.question import CompoundCondition, Condition, SimpleCondition
from survey_logic.values import is_empty, is_number, to_list, to_number, to_text

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """Evaluates logic conditions against an answer snapshot."""

    def evaluate(self, condition: Condition, answers: Mapping[str, Any]) -> bool:
        """Evaluate *condition* against the answers keyed by question id.

        Compound ``and`` is true when every nested condition matches (and
        so for an empty list); ``or`` needs at least one match.
        """
        if isinstance(condition, CompoundCondition):
            results = (self.evaluate(c, answers) for c in condition.conditions)
            if condition.type == "and":
                return all(results)
            return any(results)
        return self.matches(condition, answers.get(condition.question_id))

    def matches(self, condition: SimpleCondition | Mapping[str, Any], value: Any) -> bool:
        """Test one simple condition against an answer value.

        *condition* may also be a raw ``{"operator": ..., "value": ...}``
        mapping as stored by the builder; the question id is not needed
        here because the caller already looked the answer up.
        """
        if isinstance(condition, SimpleCondition):
            op, expected = condition.operator, condition.value
        elif isinstance(condition, Mapping):
            op, expected = condition.get("operator"), condition.get("value")
            if not isinstance(op, str):
                logger.warning("Ignoring condition with non-string operator %r", op)
                return False
        else:
            logger.warning("Cannot evaluate condition of type %s", type(condition).__name__)
            return False
        return self._compare(op, value, expected)

    @staticmethod
    def _compare(op: Any, answer: Any, expected: Any) -> bool:
        """Apply an operator to an answer and the rule's comparison value."""
        if op in EMPTINESS_OPERATORS:
            empty = is_empty(answer)
            return empty if op == "is_empty" else not empty

        # Unanswered questions never match a comparison
        if answer is None:
            return False

        if expected is None:
            logger.debug("Operator %s has no comparison value; not matching", op)
            return False

        if op == "equals":
            return _equals(answer, expected)

        if op == "not_equals":
            return not _equals(answer, expected)

        if op == "contains":
            return _contains(answer, expected)

        if op == "not_contains":
            return not _contains(answer, expected)

        # --- Numeric comparisons ---
        if op in NUMERIC_OPERATORS:
            ans_num = to_number(answer)
            exp_num = to_number(expected)
            if ans_num is None or exp_num is None:
                return False

            if op == "greater_than":
                return ans_num > exp_num
            if op == "less_than":
                return ans_num < exp_num
            if op == "greater_than_or_equal":
                return ans_num >= exp_num
            return ans_num <= exp_num

        # --- List membership ---
        if op in ("in_list", "not_in_list"):
            options = to_list(expected)
            if options is None:
                logger.debug("Operator %s expects a list value, got %r", op, expected)
                return False
            found = to_text(answer) in {to_text(o) for o in options}
            return found if op == "in_list" else not found

        logger.warning("Unknown condition operator: %s", op)
        return False


def _equals(answer: Any, expected: Any) -> bool:
    if is_number(answer):
        ans_num = to_number(answer)
        exp_num = to_number(expected)
        if ans_num is not None and exp_num is not None:
            return ans_num == exp_num
    return to_text(answer) == to_text(expected)


def _contains(answer: Any, expected: Any) -> bool:
    items = to_list(answer)
    if items is not None:
        needle = to_text(expected)
        return any(to_text(item) == needle for item in items)
    return to_text(expected) in to_text(answer)


_evaluator = ConditionEvaluator()


def condition_matches(condition: SimpleCondition | Mapping[str, Any], value: Any) -> bool:
    """Module-level shorthand for :meth:`ConditionEvaluator.matches`."""
    return _evaluator.matches(condition, value)
