# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Generate accessibility audit reports in various formats.

Reports are built from an analysis result (analyzer name to violations) and
use the Pydantic summary model for the counts.
"""

import json
from typing import Any, Dict, List, Optional

from bfsg_audit.audit.standards import SEVERITY_LEVELS
from bfsg_audit.utils.config import REPORT_FORMATS
from bfsg_audit.utils.logging_helper import ConfigurationError, setup_logger
from bfsg_audit.utils.report_models import AuditSummary, Violation, create_audit_summary

logger = setup_logger(__name__)

# Details printed for each violation in detailed text reports
_DETAIL_FIELDS = (
    ("element", "Element"),
    ("name", "Name"),
    ("src", "Source"),
    ("href", "Link"),
    ("linkText", "Link text"),
    ("content", "Content"),
    ("count", "Count"),
    ("fix_example", "Example"),
)


def filter_violations(
    violations: Dict[str, List[Violation]], severity_threshold: str = "notice"
) -> Dict[str, List[Violation]]:
    """
    Drop violations below a severity threshold.

    Args:
        violations: Mapping of analyzer name to its violations
        severity_threshold: Lowest severity to keep

    Returns:
        Filtered mapping; categories left without violations are omitted

    Raises:
        ConfigurationError: If the threshold is not a known severity
    """
    if severity_threshold not in SEVERITY_LEVELS:
        raise ConfigurationError(
            f"Unknown severity threshold: {severity_threshold}. "
            f"Expected one of: {', '.join(SEVERITY_LEVELS)}"
        )

    min_severity = SEVERITY_LEVELS[severity_threshold]
    filtered = {}
    for category, records in violations.items():
        kept = [
            record for record in records if SEVERITY_LEVELS.get(record.type, 0) >= min_severity
        ]
        if kept:
            filtered[category] = kept
    return filtered


def summarize(violations: Dict[str, List[Violation]]) -> AuditSummary:
    """Create the summary model for an analysis result."""
    return create_audit_summary(violations)


def generate_report(
    violations: Dict[str, List[Violation]],
    report_format: str = "text",
    source: Optional[str] = None,
    detailed: bool = False,
    severity_threshold: str = "notice",
    output_path: Optional[str] = None,
) -> str:
    """
    Generate an accessibility audit report in the specified format.

    Args:
        violations: Mapping of analyzer name to its violations
        report_format: Format of the report (json or text)
        source: Name of the audited document, shown in the report
        detailed: Whether to include element details in text reports
        severity_threshold: Lowest severity included in the report
        output_path: Optional path where the report should be saved

    Returns:
        The formatted report

    Raises:
        ConfigurationError: If the format or the threshold is not supported
    """
    if report_format not in REPORT_FORMATS:
        raise ConfigurationError(
            f"Unsupported report format: {report_format}. "
            f"Supported formats: {', '.join(REPORT_FORMATS)}"
        )

    filtered = filter_violations(violations, severity_threshold)
    summary = summarize(filtered)

    if report_format == "json":
        report = generate_json_report(filtered, summary, source)
    else:
        report = generate_text_report(filtered, summary, source, detailed)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report)
        logger.info(f"Generated {report_format} report: {output_path}")

    return report


def generate_json_report(
    violations: Dict[str, List[Violation]],
    summary: AuditSummary,
    source: Optional[str] = None,
) -> str:
    """
    Generate a JSON report.

    Args:
        violations: Mapping of analyzer name to its violations
        summary: Summary of the violations
        source: Name of the audited document

    Returns:
        The JSON document
    """
    report_data: Dict[str, Any] = {
        "source": source,
        "summary": summary.model_dump(mode="json"),
        "violations": {
            category: [record.to_dict() for record in records]
            for category, records in violations.items()
        },
    }
    return json.dumps(report_data, indent=2, ensure_ascii=False)


def generate_text_report(
    violations: Dict[str, List[Violation]],
    summary: AuditSummary,
    source: Optional[str] = None,
    detailed: bool = False,
) -> str:
    """
    Generate a text report.

    Args:
        violations: Mapping of analyzer name to its violations
        summary: Summary of the violations
        source: Name of the audited document
        detailed: Whether to include element details

    Returns:
        The report text
    """
    text = ["ACCESSIBILITY AUDIT REPORT", "=" * 80, ""]

    if source:
        text.append(f"File: {source}")

    if not violations:
        text.append("No accessibility issues found!")
        return "\n".join(text) + "\n"

    # Add summary section
    text.append("SUMMARY")
    text.append("-" * 80)
    text.append(f"Total issues: {summary.total_issues}")
    for severity, count in summary.severity_counts.items():
        if count:
            text.append(f"  {severity}: {count}")
    text.append(f"Auto-fixable: {summary.auto_fixable}")
    if summary.criteria:
        text.append("WCAG criteria:")
        for criterion in summary.criteria:
            text.append(
                f"  {criterion.criterion} {criterion.name} ({criterion.level}): {criterion.count}"
            )
    text.append("")

    # Add issues section
    for category, records in violations.items():
        text.append(f"{category} - {len(records)} issues found:")
        for record in records:
            text.append(f"  - [{record.rule}] {record.message}")
            if detailed:
                data = record.to_dict()
                text.append(f"    Severity: {record.type}")
                for field, label in _DETAIL_FIELDS:
                    if field in data:
                        text.append(f"    {label}: {data[field]}")
                if record.colors is not None:
                    text.append(
                        f"    Colors: {record.colors.foreground} on {record.colors.background}"
                    )
            text.append(f"    Suggestion: {record.suggestion}")
        text.append("")

    return "\n".join(text)
