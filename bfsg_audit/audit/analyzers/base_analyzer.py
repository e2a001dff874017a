# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Base Accessibility Analyzer.

This module provides the base class for all accessibility analyzers and the
collector that keeps their findings in document order.
"""

from typing import Any, List, Optional, Tuple

from bs4 import Tag

from bfsg_audit.audit.document import (
    HtmlDocument,
    get_attribute,
    get_element_text,
    has_attribute,
    load_document,
)
from bfsg_audit.utils.logging_helper import setup_logger
from bfsg_audit.utils.report_models import Violation

# Set up module-level logger
logger = setup_logger(__name__)


class ViolationCollector:
    """
    Collects the violations of a single analyzer run.

    Per-element violations are ordered by the pre-order position of the
    element that triggered them. Aggregate violations have no single element
    and always follow, in the order they were added.
    """

    def __init__(self, document: HtmlDocument):
        self.document = document
        self._located: List[Tuple[int, int, Violation]] = []
        self._aggregates: List[Violation] = []

    def __len__(self) -> int:
        return len(self._located) + len(self._aggregates)

    def add(self, node: Tag, /, **fields: Any) -> Violation:
        """
        Record a violation triggered by ``node``.

        Args:
            node: The element the violation is about
            **fields: Violation fields (type, rule, element, message, ...)

        Returns:
            The recorded violation
        """
        violation = Violation(**fields)
        self._located.append(
            (self.document.position(node), len(self._located), violation)
        )
        return violation

    def add_summary(self, **fields: Any) -> Violation:
        """Record an aggregate violation."""
        violation = Violation(**fields)
        self._aggregates.append(violation)
        return violation

    def violations(self) -> List[Violation]:
        ordered = sorted(self._located, key=lambda item: (item[0], item[1]))
        return [violation for _, _, violation in ordered] + list(self._aggregates)


class BaseAnalyzer:
    """Base class for accessibility analyzers."""

    # Analyzer key in the audit result
    name = ""

    def analyze(self, document) -> List[Violation]:
        """
        Perform the accessibility analysis.

        Args:
            document: HtmlDocument, BeautifulSoup object or HTML markup

        Returns:
            Violations in document order, aggregate findings last

        Raises:
            DocumentError: If the document cannot be traversed
        """
        document = load_document(document)
        collector = ViolationCollector(document)

        logger.debug(f"Running {self.__class__.__name__} on {len(document)} elements")
        self.run(document, collector)

        violations = collector.violations()
        logger.debug(f"{self.__class__.__name__} found {len(violations)} issue(s)")
        return violations

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        """
        Run the analyzer's checks.

        Args:
            document: The document to check
            collector: Receives the violations found
        """
        # This method should be overridden by subclasses
        raise NotImplementedError("Subclasses must implement run() method")

    @staticmethod
    def get_attribute(element: Tag, attribute: str, default: Optional[str] = None) -> Optional[str]:
        return get_attribute(element, attribute, default)

    @staticmethod
    def has_attribute(element: Tag, attribute: str) -> bool:
        return has_attribute(element, attribute)

    @staticmethod
    def get_element_text(element: Tag) -> str:
        """
        Get the trimmed text content of an element.

        Args:
            element: BeautifulSoup Tag object

        Returns:
            Text content of the element
        """
        return get_element_text(element).strip()
