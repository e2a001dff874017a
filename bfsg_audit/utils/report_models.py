# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Pydantic models for accessibility violations and audit reports.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Enum for violation severity levels."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"


class ColorPair(BaseModel):
    """Foreground/background colors exactly as declared in the inline style."""

    model_config = ConfigDict(frozen=True)

    foreground: str
    background: str


class Violation(BaseModel):
    """A single accessibility finding emitted by an analyzer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    type: Severity
    rule: str
    element: str
    message: str
    suggestion: str
    auto_fixable: bool = False

    # Rule-specific details
    src: Optional[str] = None
    href: Optional[str] = None
    name: Optional[str] = None
    content: Optional[str] = None
    colors: Optional[ColorPair] = None
    count: Optional[int] = None
    link_text: Optional[str] = Field(default=None, alias="linkText")
    fix_example: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the violation, leaving out details that were not set."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LanguageStats(BaseModel):
    """Summary of the language analysis of one document."""

    total_issues: int = 0
    critical_issues: int = 0
    has_main_lang: bool = False


class LanguageReport(BaseModel):
    """Issues and statistics produced by the language analyzer."""

    issues: List[Violation] = Field(default_factory=list)
    stats: LanguageStats = Field(default_factory=LanguageStats)


class CriterionSummary(BaseModel):
    """A WCAG success criterion referenced by at least one violation."""

    criterion: str
    name: str
    level: str
    count: int = 0


class AuditSummary(BaseModel):
    """Model for audit summary details."""

    total_issues: int = 0
    categories: Dict[str, int] = Field(default_factory=dict)
    severity_counts: Dict[str, int] = Field(
        default_factory=lambda: {severity.value: 0 for severity in Severity}
    )
    auto_fixable: int = 0
    criteria: List[CriterionSummary] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=datetime.now)


def create_audit_summary(violations: Dict[str, List[Violation]]) -> AuditSummary:
    """
    Create an audit summary from an analysis result.

    Args:
        violations: Mapping of analyzer key to its violations

    Returns:
        AuditSummary object with calculated statistics
    """
    # bfsg_audit.audit imports this module
    from bfsg_audit.audit.standards import get_criterion_info, parse_rule

    summary = AuditSummary()
    criteria: Dict[str, CriterionSummary] = {}

    for category, records in violations.items():
        summary.categories[category] = len(records)
        summary.total_issues += len(records)

        for record in records:
            summary.severity_counts[record.type] = (
                summary.severity_counts.get(record.type, 0) + 1
            )
            if record.auto_fixable:
                summary.auto_fixable += 1

            for criterion in parse_rule(record.rule):
                if criterion not in criteria:
                    info = get_criterion_info(criterion)
                    criteria[criterion] = CriterionSummary(
                        criterion=criterion,
                        name=info.get("name", ""),
                        level=info.get("level", ""),
                    )
                criteria[criterion].count += 1

    summary.criteria = sorted(
        criteria.values(),
        key=lambda item: tuple(int(part) for part in item.criterion.split(".")),
    )
    return summary
