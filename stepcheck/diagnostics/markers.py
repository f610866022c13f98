"""
Diagnostics assembly: validation issues + source ranges → editor markers.

A parse failure supersedes every structural issue: the editor gets a single
error marker at the document start carrying the parser's message.
"""

import logging
from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel

from stepcheck.config import SUMMARY_TOP_ISSUES
from stepcheck.diagnostics.source_locator import SourceLocator, SourceRange
from stepcheck.dsl.dsl_loader import DefinitionFormat, parse_definition_text
from stepcheck.dsl.dsl_model import Severity, ValidationIssue, ValidationResult
from stepcheck.dsl.dsl_validator import validate_definition

logger = logging.getLogger(__name__)

DiagnosticsStatus = Literal["invalid-definition", "errors", "warnings", "ok"]


class Marker(SourceRange):
    message: str
    severity: Severity
    path: Optional[str] = None
    state_name: Optional[str] = None


class DiagnosticsSummary(BaseModel):
    status: DiagnosticsStatus
    error_count: int
    warning_count: int
    top_issues: List[ValidationIssue] = []
    parse_error: Optional[str] = None


class Diagnostics(BaseModel):
    summary: DiagnosticsSummary
    markers: List[Marker]
    issues: List[ValidationIssue]


def create_markers(
    text: str,
    issues: Sequence[ValidationIssue],
    parse_error: Optional[str] = None,
) -> List[Marker]:
    """One marker per issue, in issue order; exactly one marker on a parse failure."""
    locator = SourceLocator(text)

    if parse_error:
        return [
            Marker(
                **locator.document_start().model_dump(),
                message=parse_error,
                severity=Severity.ERROR,
            )
        ]

    markers: List[Marker] = []
    for issue in issues:
        found = locator.locate(issue.path, issue.state_name)
        markers.append(
            Marker(
                **found.model_dump(),
                message=issue.message,
                severity=issue.severity,
                path=issue.path,
                state_name=issue.state_name,
            )
        )
    return markers


def summarize(
    result: ValidationResult,
    parse_error: Optional[str] = None,
    top: Optional[int] = None,
) -> DiagnosticsSummary:
    """Severity counts and the first few issues for a status indicator."""
    top = SUMMARY_TOP_ISSUES if top is None else top

    if parse_error:
        return DiagnosticsSummary(
            status="invalid-definition",
            error_count=1,
            warning_count=0,
            parse_error=parse_error,
        )

    if result.error_count:
        status = "errors"
    elif result.warning_count:
        status = "warnings"
    else:
        status = "ok"

    return DiagnosticsSummary(
        status=status,
        error_count=result.error_count,
        warning_count=result.warning_count,
        top_issues=result.issues[:max(top, 0)],
    )


def build_diagnostics(text: str, fmt: DefinitionFormat = "json") -> Diagnostics:
    """Full pass over one committed text: parse attempt, validation, markers, summary."""
    outcome = parse_definition_text(text, fmt)
    if outcome.ok:
        result = validate_definition(outcome.document)
    else:
        logger.debug("definition does not parse: %s", outcome.error)
        result = ValidationResult()

    return Diagnostics(
        summary=summarize(result, outcome.error),
        markers=create_markers(text, result.issues, outcome.error),
        issues=result.issues,
    )
