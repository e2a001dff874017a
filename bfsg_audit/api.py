# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
API for HTML accessibility auditing.

This module provides the functions for auditing HTML markup and HTML files.
Options are resolved through the configuration manager, so defaults,
environment variables and runtime overrides apply.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

from bfsg_audit.audit.auditor import AccessibilityAuditor
from bfsg_audit.audit.report_generator import generate_report, summarize
from bfsg_audit.utils.config import resolve_audit_options
from bfsg_audit.utils.logging_helper import AccessibilityAuditError, setup_logger
from bfsg_audit.utils.report_models import Violation

# Set up module-level logger
logger = setup_logger(__name__)


def create_auditor(
    options: Optional[Dict[str, Any]] = None,
) -> Tuple[AccessibilityAuditor, Dict[str, Any]]:
    """
    Create an auditor from resolved audit options.

    Args:
        options: Audit option overrides (checks, compliance_level, ...)

    Returns:
        The auditor and the resolved options

    Raises:
        ConfigurationError: If the options are invalid
    """
    resolved = resolve_audit_options(options)
    auditor = AccessibilityAuditor(
        checks=resolved["checks"],
        compliance_level=resolved["compliance_level"],
    )
    return auditor, resolved


def analyze_html(
    html, options: Optional[Dict[str, Any]] = None
) -> Dict[str, List[Violation]]:
    """
    Audit HTML markup for accessibility issues.

    Args:
        html: HTML markup, BeautifulSoup object or HtmlDocument
        options: Audit option overrides

    Returns:
        Mapping of analyzer name to its violations
    """
    auditor, _ = create_auditor(options)
    return auditor.analyze(html)


def is_accessible(html, options: Optional[Dict[str, Any]] = None) -> bool:
    """Return True if the HTML has no accessibility violations."""
    auditor, _ = create_auditor(options)
    return auditor.is_accessible(html)


def audit_html_file(
    html_path: str,
    options: Optional[Dict[str, Any]] = None,
    output_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Audit an HTML file for accessibility issues.

    Args:
        html_path: Path to the HTML file
        options: Audit option overrides
        output_path: Path to save the audit report

    Returns:
        Dictionary containing the violations, analyzer errors, summary and
        the formatted report

    Raises:
        AccessibilityAuditError: If the file cannot be read
        ConfigurationError: If the options are invalid
    """
    auditor, resolved = create_auditor(options)

    try:
        with open(html_path, "r", encoding="utf-8") as f:
            html_content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise AccessibilityAuditError(f"Failed to read HTML file {html_path}: {e}") from e

    logger.debug(f"Auditing {html_path}")
    violations = auditor.analyze(html_content)

    if output_path:
        # Create output directory if needed
        output_dir = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(output_dir, exist_ok=True)

    report = generate_report(
        violations,
        report_format=resolved.get("report_format", "text"),
        source=html_path,
        detailed=resolved.get("detailed", False),
        severity_threshold=resolved.get("severity_threshold", "notice"),
        output_path=output_path,
    )

    audit_results: Dict[str, Any] = {
        "html_path": html_path,
        "violations": violations,
        "errors": auditor.get_errors(),
        "summary": summarize(violations),
        "report": report,
    }
    if output_path:
        audit_results["report_path"] = output_path
    return audit_results
