# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Heading structure checks.

This module provides checks for heading hierarchy, empty headings and the
main page heading.
"""

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument, truncate

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class HeadingAnalyzer(BaseAnalyzer):
    """Check heading structure and text (WCAG 1.3.1, 2.4.6)."""

    name = "headings"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        headings = document.select(HEADING_TAGS)

        self._check_hierarchy(headings, collector)
        self._check_heading_text(headings, collector)
        self._check_main_heading(headings, collector)

    def _check_hierarchy(self, headings, collector: ViolationCollector) -> None:
        """
        Walk the headings in document order and flag skipped levels.

        Every heading re-baselines the walk, so a second skip after a first
        one is reported again.
        """
        previous_level = 0

        for heading in headings:
            level = int(heading.name[1])

            if previous_level > 0 and level > previous_level + 1:
                collector.add(
                    heading,
                    type="error",
                    rule="WCAG 1.3.1",
                    element=heading.name,
                    message=f"Heading hierarchy broken: {heading.name} follows h{previous_level}",
                    content=truncate(self.get_element_text(heading)),
                    suggestion=f"Use h{previous_level + 1} instead of {heading.name}",
                    auto_fixable=False,
                )

            previous_level = level

    def _check_heading_text(self, headings, collector: ViolationCollector) -> None:
        for heading in headings:
            text = self.get_element_text(heading)

            if not text:
                collector.add(
                    heading,
                    type="error",
                    rule="WCAG 1.3.1, 2.4.6",
                    element=heading.name,
                    message=f"Empty {heading.name} heading found",
                    suggestion="Remove empty heading or add descriptive text",
                    auto_fixable=False,
                )
            elif len(text) < 3:
                collector.add(
                    heading,
                    type="warning",
                    rule="WCAG 2.4.6",
                    element=heading.name,
                    message=f"Very short heading text: '{text}'",
                    suggestion="Use more descriptive heading text",
                    auto_fixable=False,
                )

    def _check_main_heading(self, headings, collector: ViolationCollector) -> None:
        h1_tags = [heading for heading in headings if heading.name == "h1"]

        if not h1_tags:
            collector.add_summary(
                type="warning",
                rule="WCAG 1.3.1, 2.4.6",
                element="h1",
                message="No h1 heading found on the page",
                suggestion="Add a main h1 heading to describe the page content",
                auto_fixable=False,
            )
            return

        if len(h1_tags) == 1:
            return

        collector.add_summary(
            type="warning",
            rule="WCAG 1.3.1",
            element="h1",
            message=f"Multiple h1 headings found ({len(h1_tags)} total)",
            suggestion="Use only one h1 per page for the main heading",
            auto_fixable=False,
        )

        # List every h1 for reference
        for index, h1 in enumerate(h1_tags, start=1):
            preview = truncate(self.get_element_text(h1))
            if preview:
                collector.add_summary(
                    type="notice",
                    rule="WCAG 1.3.1",
                    element="h1",
                    message=f"h1 #{index}: '{preview}'",
                    suggestion="Consider using h2 or restructuring the content",
                    auto_fixable=False,
                )
