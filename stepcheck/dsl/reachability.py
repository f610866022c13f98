from typing import Any, List, Mapping, Set

from stepcheck.dsl.dsl_model import (
    ChoiceRule,
    StateNode,
    StateType,
    WorkflowScope,
    is_object,
)


def collect_transitions(state: StateNode) -> List[str]:
    """Outgoing edges of one state, in field order.

    Branch / Iterator edges stop at the child scope's ``StartAt``; nested
    scopes are checked on their own and never merged into the parent graph.
    """
    transitions: List[str] = []
    if state.has_next:
        transitions.append(state.next)

    state_type = state.state_type

    if state_type == StateType.CHOICE:
        if isinstance(state.choices, list):
            for raw in state.choices:
                if not is_object(raw):
                    continue
                rule = ChoiceRule.model_validate(raw)
                if isinstance(rule.next, str):
                    transitions.append(rule.next)
        if isinstance(state.default, str):
            transitions.append(state.default)

    elif state_type == StateType.PARALLEL:
        if isinstance(state.branches, list):
            for raw in state.branches:
                if not is_object(raw):
                    continue
                branch = WorkflowScope.model_validate(raw)
                if branch.has_start_at and branch.has_states:
                    transitions.append(branch.start_at)

    elif state_type == StateType.MAP:
        if is_object(state.iterator):
            iterator = WorkflowScope.model_validate(state.iterator)
            if iterator.has_start_at:
                transitions.append(iterator.start_at)

    return transitions


def find_reachable(start_at: str, states: Mapping[Any, Any]) -> Set[Any]:
    """Names visited from ``start_at``; explicit stack, so chain length is unbounded."""
    reachable: Set[Any] = set()
    stack = [start_at]

    while stack:
        current = stack.pop()
        if current in reachable:
            continue
        reachable.add(current)

        raw = states.get(current)
        if not is_object(raw):
            continue

        for target in collect_transitions(StateNode.model_validate(raw)):
            if target in states and target not in reachable:
                stack.append(target)

    return reachable


def find_unreachable(start_at: str, states: Mapping[Any, Any]) -> List[Any]:
    """Declared names never visited from ``start_at``, in declaration order."""
    reachable = find_reachable(start_at, states)
    return [name for name in states if name not in reachable]
