# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Auditor.

This module provides the coordinator that runs the enabled analyzers over a
document and merges their violations by analyzer name.
"""

from typing import Dict, List, Optional

from bfsg_audit.audit.analyzers import (
    AriaAnalyzer,
    BaseAnalyzer,
    ContrastAnalyzer,
    FormAnalyzer,
    HeadingAnalyzer,
    ImageAnalyzer,
    KeyboardNavigationAnalyzer,
    LanguageAnalyzer,
    LinkAnalyzer,
    MixedLanguageDetector,
)
from bfsg_audit.audit.document import load_document
from bfsg_audit.utils.config import validate_checks, validate_compliance_level
from bfsg_audit.utils.logging_helper import (
    describe_exception,
    log_exception,
    setup_logger,
)
from bfsg_audit.utils.report_models import Violation

# Set up module-level logger
logger = setup_logger(__name__)

AnalysisResult = Dict[str, List[Violation]]


class AccessibilityAuditor:
    """Class for auditing HTML content against the BFSG/WCAG accessibility rules."""

    def __init__(
        self,
        checks: Optional[Dict[str, bool]] = None,
        compliance_level: str = "AA",
        language_detectors: Optional[List[MixedLanguageDetector]] = None,
    ):
        """
        Initialize the accessibility auditor.

        Args:
            checks: Mapping of analyzer name to enabled flag. Analyzers that
                are not listed are enabled.
            compliance_level: WCAG level (A, AA or AAA) for the contrast threshold
            language_detectors: Mixed language detectors for the language analyzer

        Raises:
            ConfigurationError: If a check name or the compliance level is invalid
        """
        self.checks = validate_checks(checks or {})
        self.compliance_level = validate_compliance_level(compliance_level)
        self.language_detectors = language_detectors

        self.analyzers: Dict[str, BaseAnalyzer] = {}
        self._register_default_analyzers()

        self.violations: AnalysisResult = {}
        self.errors: Dict[str, str] = {}

    def _register_default_analyzers(self) -> None:
        factories = (
            ("images", ImageAnalyzer),
            ("forms", FormAnalyzer),
            ("headings", HeadingAnalyzer),
            ("contrast", lambda: ContrastAnalyzer(self.compliance_level)),
            ("aria", AriaAnalyzer),
            ("links", LinkAnalyzer),
            ("keyboard", KeyboardNavigationAnalyzer),
            ("language", lambda: LanguageAnalyzer(self.language_detectors)),
        )

        for name, factory in factories:
            if self.checks[name]:
                self.analyzers[name] = factory()

        disabled = [name for name, enabled in self.checks.items() if not enabled]
        if disabled:
            logger.debug(f"Disabled checks: {', '.join(disabled)}")

    def register_analyzer(self, name: str, analyzer: BaseAnalyzer) -> None:
        """
        Register an additional analyzer or replace an existing one.

        Args:
            name: Key of the analyzer's violations in the result
            analyzer: The analyzer instance
        """
        self.analyzers[name] = analyzer

    def analyze(self, document) -> AnalysisResult:
        """
        Run all enabled analyzers over a document.

        An analyzer that fails is logged and recorded in ``get_errors()``;
        the remaining analyzers still run.

        Args:
            document: HTML markup, BeautifulSoup object or HtmlDocument

        Returns:
            Mapping of analyzer name to its violations, analyzers without
            findings omitted

        Raises:
            DocumentError: If the document cannot be traversed
        """
        document = load_document(document)

        violations: AnalysisResult = {}
        errors: Dict[str, str] = {}

        for name, analyzer in self.analyzers.items():
            logger.debug(f"Running analyzer: {name}")
            try:
                results = analyzer.analyze(document)
            except Exception as e:
                log_exception(logger, e, f"Error running {name} analyzer")
                errors[name] = describe_exception(e)
                continue

            if results:
                violations[name] = results

        self.violations = violations
        self.errors = errors

        total = sum(len(records) for records in violations.values())
        logger.debug(f"Audit found {total} issue(s) in {len(violations)} categories")
        return violations

    def is_accessible(self, document) -> bool:
        """Return True if no analyzer reports a violation for the document."""
        return not self.analyze(document)

    def get_violations(self) -> AnalysisResult:
        """Violations of the most recent analysis."""
        return self.violations

    def get_errors(self) -> Dict[str, str]:
        """Analyzers that failed during the most recent analysis."""
        return self.errors
