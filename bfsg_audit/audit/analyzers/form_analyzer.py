# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Form accessibility checks.

This module provides checks for form control labels, form names and
required field indication.
"""

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument

# Input types that never need a visible label
UNLABELED_INPUT_TYPES = ("hidden", "submit", "button")

FORM_NAME_ELEMENTS = ("h1", "h2", "h3", "h4", "h5", "h6", "legend")

REQUIRABLE_ELEMENTS = ("input", "textarea", "select")


class FormAnalyzer(BaseAnalyzer):
    """Check form labels and required fields (WCAG 1.3.1, 3.3.2)."""

    name = "forms"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        labelled_ids = {
            self.get_attribute(label, "for")
            for label in document.select("label")
            if self.has_attribute(label, "for")
        }

        self._check_controls_without_labels(document, collector, labelled_ids)
        self._check_forms_accessibility(document, collector)
        self._check_required_fields(document, collector)

    def _check_controls_without_labels(
        self, document: HtmlDocument, collector: ViolationCollector, labelled_ids: set
    ) -> None:
        for control in document.select(("input", "textarea", "select"), self._needs_label):
            control_id = self.get_attribute(control, "id", "")
            if control_id and control_id in labelled_ids:
                continue

            if control.name == "input":
                message = "Form input without associated label"
            else:
                message = f"{control.name.capitalize()} without associated label"

            collector.add(
                control,
                type="error",
                rule="WCAG 1.3.1, 3.3.2",
                element=control.name,
                message=message,
                name=self.get_attribute(control, "name") or "unnamed",
                suggestion="Add a <label> element or aria-label attribute",
                auto_fixable=False,
            )

    def _needs_label(self, control: Tag) -> bool:
        if self.has_attribute(control, "aria-label") or self.has_attribute(
            control, "aria-labelledby"
        ):
            return False
        if control.name == "input":
            input_type = (self.get_attribute(control, "type") or "").strip().lower()
            return input_type not in UNLABELED_INPUT_TYPES
        return True

    def _check_forms_accessibility(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        for form in document.select("form"):
            if self.has_attribute(form, "aria-label") or self.has_attribute(
                form, "aria-labelledby"
            ):
                continue

            # A heading or legend inside the form can serve as its label
            if document.select_within(form, FORM_NAME_ELEMENTS, limit=1):
                continue

            collector.add(
                form,
                type="warning",
                rule="WCAG 1.3.1",
                element="form",
                message="Form without descriptive label or heading",
                suggestion="Add aria-label to the form or include a heading/legend",
                auto_fixable=False,
            )

    def _check_required_fields(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        required = document.select(
            REQUIRABLE_ELEMENTS, lambda el: self.has_attribute(el, "required")
        )
        for control in required:
            if self.get_attribute(control, "aria-required") == "true":
                continue

            collector.add(
                control,
                type="warning",
                rule="WCAG 3.3.2",
                element=control.name,
                message="Required field without aria-required attribute",
                name=self.get_attribute(control, "name") or "unnamed",
                suggestion='Add aria-required="true" for better screen reader support',
                auto_fixable=True,
            )
