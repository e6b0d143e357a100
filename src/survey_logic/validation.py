"""Authoring-time checks for survey logic and piping.

Evaluation never raises for broken configurations; it degrades to
conservative defaults instead.  These checks let a host surface the
underlying problems to survey authors before a survey is published:

  - logic rules that reference their own question
  - logic rules that reference questions not in the survey
  - jump actions whose target is unknown or not after the owning question
  - circular dependencies between questions' logic
  - piping placeholders that are self, forward, or unknown references
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from survey_logic.models.action import JumpAction
from survey_logic.models.evaluation import LogicIssue, PipingIssue, PipingValidationResult
from survey_logic.models.question import Question, Survey
from survey_logic.piping import extract_placeholders, resolve_reference

logger = logging.getLogger(__name__)


def _dependency_graph(questions: Iterable[Question]) -> dict[str, set[str]]:
    """Map each question id to the ids its logic conditions read (self edges excluded)."""
    graph: dict[str, set[str]] = {}
    for q in questions:
        deps: set[str] = set()
        if q.logic is not None:
            for rule in q.logic.rules:
                deps |= rule.condition.question_ids()
        deps.discard(q.id)
        graph[q.id] = deps
    return graph


def detect_circular_dependencies(questions: Iterable[Question]) -> list[str]:
    """Return the question ids on the first logic cycle found, or ``[]``.

    An edge ``a → b`` means question *a*'s visibility reads the answer to
    *b*.  Self references are reported by :func:`validate_logic` and are
    not treated as cycles here.
    """
    graph = _dependency_graph(questions)
    visited: set[str] = set()
    path: list[str] = []
    on_path: set[str] = set()

    def _dfs(node: str) -> list[str]:
        visited.add(node)
        path.append(node)
        on_path.add(node)
        for dep in sorted(graph.get(node, ())):
            if dep in on_path:
                return path[path.index(dep):]
            if dep not in visited:
                cycle = _dfs(dep)
                if cycle:
                    return cycle
        path.pop()
        on_path.discard(node)
        return []

    for qid in graph:
        if qid not in visited:
            cycle = _dfs(qid)
            if cycle:
                return cycle
    return []


def validate_logic(survey: Survey) -> list[LogicIssue]:
    """Collect every logic problem in *survey*, in declaration order."""
    order = survey.question_order
    position = {qid: i for i, qid in enumerate(order)}
    issues: list[LogicIssue] = []

    for index, q in enumerate(survey.questions):
        if q.logic is None:
            continue
        for rule in q.logic.rules:
            deps = rule.condition.question_ids()
            if q.id in deps:
                issues.append(LogicIssue(
                    question_id=q.id,
                    rule_id=rule.id,
                    kind="self_reference",
                    detail="condition references its own question",
                ))
            for dep in sorted(deps - {q.id}):
                if dep not in position:
                    issues.append(LogicIssue(
                        question_id=q.id,
                        rule_id=rule.id,
                        kind="unknown_question",
                        detail=f"condition references unknown question {dep!r}",
                    ))

            action = rule.action
            if isinstance(action, JumpAction):
                target = action.target_question_id
                if target not in position:
                    issues.append(LogicIssue(
                        question_id=q.id,
                        rule_id=rule.id,
                        kind="invalid_jump",
                        detail=f"jump target {target!r} does not exist",
                    ))
                elif position[target] <= index:
                    issues.append(LogicIssue(
                        question_id=q.id,
                        rule_id=rule.id,
                        kind="invalid_jump",
                        detail=f"jump target {target!r} must come after the question",
                    ))

    cycle = detect_circular_dependencies(survey.questions)
    if cycle:
        issues.append(LogicIssue(
            question_id=cycle[0],
            kind="circular_dependency",
            detail=" -> ".join(cycle + [cycle[0]]),
        ))

    if issues:
        logger.info("Survey %s: %d logic issue(s)", survey.id, len(issues))
    return issues


def validate_piping(questions: Iterable[Question]) -> PipingValidationResult:
    """Check every placeholder in prompts and descriptions.

    Only earlier questions may be piped; self, forward, and unknown
    references are reported.
    """
    questions = list(questions)
    order = [q.id for q in questions]
    errors: list[PipingIssue] = []

    for index, q in enumerate(questions):
        placeholders = extract_placeholders(q.question) + extract_placeholders(q.description)
        for key in placeholders:
            qid = resolve_reference(key, order)
            if qid is None:
                error = "Referenced question does not exist"
            elif order.index(qid) == index:
                error = "Self-reference detected"
            elif order.index(qid) > index:
                error = "Forward reference detected (can only reference previous questions)"
            else:
                continue
            errors.append(PipingIssue(
                question_id=q.id,
                question_index=index,
                placeholder=key,
                error=error,
            ))

    return PipingValidationResult(errors=errors)
