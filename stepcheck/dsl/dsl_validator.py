"""
dsl_validator.py: structural checks for a workflow definition

Every scope (root, Parallel branch, Map iterator) is checked by the same
reentrant ``validate_scope``; issues go into a plain list threaded through
the calls, in discovery order:

    structural issues, state by state   →   reachability warnings of the scope

Nested scopes are validated at the point their owning state is visited, so
their issues appear between the owner's structural issues and its reference
issues.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Collection, Dict, List, Optional

from stepcheck.dsl.dsl_model import (
    ChoiceRule,
    JsonObject,
    Severity,
    StateNode,
    StateType,
    ValidationIssue,
    ValidationResult,
    WorkflowScope,
    is_object,
)
from stepcheck.dsl.path_utils import ROOT_PATH, index_path, join_path
from stepcheck.dsl.reachability import find_unreachable

logger = logging.getLogger(__name__)


def _add_issue(
    issues: List[ValidationIssue],
    severity: Severity,
    message: str,
    path: str,
    state_name: Optional[Any] = None,
) -> None:
    issues.append(
        ValidationIssue(
            severity=severity,
            message=message,
            path=path,
            state_name=None if state_name is None else str(state_name),
        )
    )


def _error(issues, message, path, state_name=None):
    _add_issue(issues, Severity.ERROR, message, path, state_name)


def _warning(issues, message, path, state_name=None):
    _add_issue(issues, Severity.WARNING, message, path, state_name)


# ------------------------------------------------------------------ #
#                     Per-type rules
# ------------------------------------------------------------------ #

TypeRule = Callable[[StateNode, str, Any, List[ValidationIssue]], None]


def _no_type_rules(node: StateNode, state_path: str, name: Any, issues: List[ValidationIssue]) -> None:
    pass


def _check_choice(node: StateNode, state_path: str, name: Any, issues: List[ValidationIssue]) -> None:
    choices_path = join_path(state_path, "Choices")
    choices = node.choices

    if not isinstance(choices, list) or not choices:
        _error(issues, "Choice must have a non-empty `Choices` array.", choices_path, name)
    else:
        for idx, raw in enumerate(choices):
            choice_path = index_path(choices_path, idx)
            if not is_object(raw):
                _error(issues, "Each item in `Choices` must be an object.", choice_path, name)
                continue
            if not isinstance(ChoiceRule.model_validate(raw).next, str):
                _error(issues, "Each Choice must have `Next`.", join_path(choice_path, "Next"), name)

    if node.declares_end:
        _error(issues, "Choice does not support `End`.", join_path(state_path, "End"), name)

    if node.has_next:
        _error(
            issues,
            "Choice does not support `Next`; use `Default` and `Choices[].Next`.",
            join_path(state_path, "Next"),
            name,
        )


def _check_parallel(node: StateNode, state_path: str, name: Any, issues: List[ValidationIssue]) -> None:
    branches_path = join_path(state_path, "Branches")
    branches = node.branches

    if not isinstance(branches, list) or not branches:
        _error(issues, "Parallel must have a non-empty `Branches` array.", branches_path, name)
        return

    for idx, branch in enumerate(branches):
        branch_path = index_path(branches_path, idx)
        if not is_object(branch):
            _error(issues, "Each branch must be an object.", branch_path, name)
            continue
        validate_scope(branch, branch_path, issues)


def _check_map(node: StateNode, state_path: str, name: Any, issues: List[ValidationIssue]) -> None:
    iterator_path = join_path(state_path, "Iterator")
    if not is_object(node.iterator):
        _error(issues, "Map must have an `Iterator` object.", iterator_path, name)
        return
    validate_scope(node.iterator, iterator_path, issues)


# one entry per StateType; unknown type names fall back to _no_type_rules
TYPE_RULES: Dict[StateType, TypeRule] = {
    StateType.TASK: _no_type_rules,
    StateType.PASS: _no_type_rules,
    StateType.WAIT: _no_type_rules,
    StateType.FAIL: _no_type_rules,
    StateType.SUCCEED: _no_type_rules,
    StateType.CHOICE: _check_choice,
    StateType.PARALLEL: _check_parallel,
    StateType.MAP: _check_map,
}


# ------------------------------------------------------------------ #
#                     Per-state checks
# ------------------------------------------------------------------ #

def _check_transition_fields(node: StateNode, state_path: str, name: Any, issues: List[ValidationIssue]) -> None:
    if node.has_next and node.has_end:
        _error(issues, "A state cannot have `Next` and `End: true` at the same time.", state_path, name)

    if node.is_terminal:
        if node.has_next or node.declares_end:
            _warning(
                issues,
                f"States of type {node.type} typically do not use `Next`/`End`.",
                state_path,
                name,
            )
    elif node.state_type != StateType.CHOICE and not node.has_next and not node.has_end:
        _error(issues, "State must have `Next` or `End: true`.", state_path, name)


def _check_references(
    node: StateNode,
    state_path: str,
    name: Any,
    declared: Collection[Any],
    issues: List[ValidationIssue],
) -> None:
    if node.has_next and node.next not in declared:
        _error(
            issues,
            f"Next points to a missing state: {node.next}.",
            join_path(state_path, "Next"),
            name,
        )

    if node.state_type != StateType.CHOICE:
        return

    if isinstance(node.default, str) and node.default not in declared:
        _error(
            issues,
            f"Default points to a missing state: {node.default}.",
            join_path(state_path, "Default"),
            name,
        )

    if isinstance(node.choices, list):
        for idx, raw in enumerate(node.choices):
            if not is_object(raw):
                continue
            target = ChoiceRule.model_validate(raw).next
            if isinstance(target, str) and target not in declared:
                _error(
                    issues,
                    f"Choices[{idx}].Next points to a missing state: {target}.",
                    join_path(index_path(join_path(state_path, "Choices"), idx), "Next"),
                    name,
                )


def _validate_state(
    name: Any,
    raw: Any,
    state_path: str,
    declared: Collection[Any],
    issues: List[ValidationIssue],
) -> None:
    if not is_object(raw):
        _error(issues, "State definition must be an object.", state_path, name)
        return

    node = StateNode.model_validate(raw)
    if node.type_name is None:
        # type drives every rule below
        _error(issues, "State is missing a valid `Type`.", join_path(state_path, "Type"), name)
        return

    _check_transition_fields(node, state_path, name, issues)

    state_type = node.state_type
    rule = TYPE_RULES[state_type] if state_type is not None else _no_type_rules
    rule(node, state_path, name, issues)

    _check_references(node, state_path, name, declared, issues)


# ------------------------------------------------------------------ #
#                     Scope & document entry points
# ------------------------------------------------------------------ #

def validate_scope(scope: JsonObject, scope_path: str, issues: List[ValidationIssue]) -> List[ValidationIssue]:
    """
    Check one ``StartAt`` + ``States`` scope and every scope nested in it.

    Appends to ``issues`` and returns it. Never raises on a decoded JSON
    object graph; the only early exit is a non-object ``States``.
    """
    view = WorkflowScope.model_validate(scope)
    start_at, states = view.start_at, view.states
    states_path = join_path(scope_path, "States")

    if not view.has_start_at:
        _error(issues, "`StartAt` must be a string.", join_path(scope_path, "StartAt"))

    if not view.has_states:
        _error(issues, "`States` must be an object.", states_path)
        return issues

    declared = set(states)
    start_resolved = view.has_start_at and start_at in declared
    if view.has_start_at and not start_resolved:
        _error(
            issues,
            f"StartAt points to a missing state: {start_at}.",
            join_path(scope_path, "StartAt"),
        )

    for name, raw in states.items():
        _validate_state(name, raw, join_path(states_path, name), declared, issues)

    if start_resolved:
        for name in find_unreachable(start_at, states):
            _warning(issues, "State is not reachable from `StartAt`.", join_path(states_path, name), name)

    logger.debug("validated scope %s (%d states)", scope_path, len(declared))
    return issues


def validate_definition(definition: Any) -> ValidationResult:
    """Validate a decoded workflow definition; the result is fully recomputed each call."""
    issues: List[ValidationIssue] = []

    if not is_object(definition):
        _error(issues, "Definition must be a JSON object.", ROOT_PATH)
    else:
        validate_scope(definition, ROOT_PATH, issues)

    result = ValidationResult(issues=issues)
    logger.debug(
        "validation finished: %d error(s), %d warning(s)",
        result.error_count,
        result.warning_count,
    )
    return result
