# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
BFSG Accessibility Audit Package.

This package checks HTML documents against the accessibility requirements of
the German Barrierefreiheitsstärkungsgesetz (BFSG) and WCAG 2.1.

Main Components:
- Rule analyzers for images, forms, headings, contrast, ARIA, links,
  keyboard navigation and language
- Audit coordinator and report generation
- Command line interface (bfsg-audit)
"""

__version__ = "0.1.0"

from bfsg_audit.api import analyze_html, audit_html_file, is_accessible
from bfsg_audit.audit.auditor import AccessibilityAuditor
from bfsg_audit.utils.logging_helper import (
    AccessibilityAuditError,
    BfsgAuditError,
    ConfigurationError,
    DocumentError,
)

__all__ = [
    "__version__",
    "AccessibilityAuditor",
    "analyze_html",
    "audit_html_file",
    "is_accessible",
    "BfsgAuditError",
    "AccessibilityAuditError",
    "ConfigurationError",
    "DocumentError",
]
