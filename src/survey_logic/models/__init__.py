"""Public model re-exports for survey_logic.

Consumers should import from ``survey_logic.models`` rather than
reaching into sub-modules directly.
"""

# --- Actions ---
from survey_logic.models.action import (
    Action,
    ActionType,
    HideAction,
    JumpAction,
    ShowAction,
)

# --- Questions / logic ---
from survey_logic.models.question import (
    CompoundCondition,
    Condition,
    Operator,
    Question,
    QuestionLogic,
    QuestionType,
    Rule,
    SimpleCondition,
    Survey,
)

# --- Evaluation results ---
from survey_logic.models.evaluation import (
    LogicIssue,
    PipingContext,
    PipingIssue,
    PipingValidationResult,
    RenderedQuestion,
    SurveyEvaluation,
    VisibilityDecision,
)

__all__ = [
    # Actions
    "Action",
    "ActionType",
    "HideAction",
    "JumpAction",
    "ShowAction",
    # Questions / logic
    "CompoundCondition",
    "Condition",
    "Operator",
    "Question",
    "QuestionLogic",
    "QuestionType",
    "Rule",
    "SimpleCondition",
    "Survey",
    # Evaluation
    "LogicIssue",
    "PipingContext",
    "PipingIssue",
    "PipingValidationResult",
    "RenderedQuestion",
    "SurveyEvaluation",
    "VisibilityDecision",
]
