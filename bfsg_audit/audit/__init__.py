# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility audit module for HTML documents.

This module provides functionality for auditing HTML documents against the
BFSG (Barrierefreiheitsstärkungsgesetz) and WCAG 2.1 accessibility rules.
"""

from bfsg_audit.audit.auditor import AccessibilityAuditor
from bfsg_audit.audit.document import HtmlDocument, load_document
from bfsg_audit.audit.report_generator import generate_report

__all__ = ["AccessibilityAuditor", "HtmlDocument", "load_document", "generate_report"]
