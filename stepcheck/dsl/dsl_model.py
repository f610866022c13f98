from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict

# -----------------------------
# alias generator
# -----------------------------

def to_pascal_case(s: str) -> str:
    return ''.join(word.capitalize() for word in s.split('_'))


class DSLBase(BaseModel):
    """Lenient view over a raw definition object.

    Field values are kept as-is (``Any``) so building a view never fails on a
    well-formed object graph; the validator decides what a bad value means.
    Only the PascalCase document keys are recognised.
    """
    model_config = ConfigDict(alias_generator=to_pascal_case, frozen=True)


JsonObject = Dict[str, Any]


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


# -----------------------------
# State tags
# -----------------------------

class StateType(str, Enum):
    TASK = "Task"
    PASS = "Pass"
    CHOICE = "Choice"
    WAIT = "Wait"
    FAIL = "Fail"
    SUCCEED = "Succeed"
    PARALLEL = "Parallel"
    MAP = "Map"


TERMINAL_TYPES: FrozenSet[StateType] = frozenset({StateType.SUCCEED, StateType.FAIL})


# -----------------------------
# Scope & State views
# -----------------------------

class WorkflowScope(DSLBase):
    """A ``StartAt`` + ``States`` pair: the root, a Parallel branch or a Map iterator."""
    start_at: Any = None
    states: Any = None

    @property
    def has_start_at(self) -> bool:
        return isinstance(self.start_at, str)

    @property
    def has_states(self) -> bool:
        return is_object(self.states)


class ChoiceRule(DSLBase):
    # comparison fields are opaque here, only the transition matters
    next: Any = None


class StateNode(DSLBase):
    type: Any = None
    next: Any = None
    end: Any = None
    choices: Any = None
    default: Any = None
    branches: Any = None
    iterator: Any = None

    @property
    def type_name(self) -> Optional[str]:
        if isinstance(self.type, str) and self.type.strip():
            return self.type
        return None

    @property
    def state_type(self) -> Optional[StateType]:
        """Known tag, or None for blank and custom type names."""
        try:
            return StateType(self.type)
        except ValueError:
            return None

    @property
    def is_terminal(self) -> bool:
        return self.state_type in TERMINAL_TYPES

    @property
    def has_next(self) -> bool:
        return isinstance(self.next, str)

    @property
    def has_end(self) -> bool:
        return self.end is True

    @property
    def declares_end(self) -> bool:
        return isinstance(self.end, bool)


# -----------------------------
# Validation output
# -----------------------------

class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    severity: Severity
    message: str
    path: str
    state_name: Optional[str] = None


class ValidationResult(BaseModel):
    """Issues in discovery order."""
    issues: List[ValidationIssue] = []

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0
