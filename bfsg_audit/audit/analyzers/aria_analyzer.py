# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
ARIA checks.

This module provides checks for ARIA roles, required state attributes,
conflicting attributes and id references.
"""

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument

VALID_ROLES = frozenset(
    [
        "alert", "alertdialog", "application", "article", "banner", "button",
        "checkbox", "columnheader", "combobox", "complementary", "contentinfo",
        "definition", "dialog", "directory", "document", "feed", "figure",
        "form", "grid", "gridcell", "group", "heading", "img", "link",
        "list", "listbox", "listitem", "log", "main", "marquee", "math",
        "menu", "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
        "navigation", "none", "note", "option", "presentation", "progressbar",
        "radio", "radiogroup", "region", "row", "rowgroup", "rowheader",
        "scrollbar", "search", "searchbox", "separator", "slider", "spinbutton",
        "status", "switch", "tab", "table", "tablist", "tabpanel", "term",
        "textbox", "timer", "toolbar", "tooltip", "tree", "treegrid", "treeitem",
    ]
)

# Implicit roles of native elements
IMPLICIT_ROLES = {
    "button": "button",
    "a": "link",
    "article": "article",
    "aside": "complementary",
    "footer": "contentinfo",
    "header": "banner",
    "main": "main",
    "nav": "navigation",
    "section": "region",
}

# Implicit roles of input elements, by type
IMPLICIT_INPUT_ROLES = {
    "button": "button",
    "checkbox": "checkbox",
    "radio": "radio",
    "range": "slider",
}

ROLE_REQUIREMENTS = {
    "checkbox": ("aria-checked",),
    "combobox": ("aria-expanded",),
    "slider": ("aria-valuenow", "aria-valuemin", "aria-valuemax"),
    "spinbutton": ("aria-valuenow",),
}

FOCUSABLE_ELEMENTS = ("a", "button", "input", "select", "textarea")

ID_REFERENCE_ATTRIBUTES = ("aria-labelledby", "aria-describedby")

NON_INTERACTIVE_ELEMENTS = ("div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6")
INTERACTIVE_STATE_ATTRIBUTES = ("aria-pressed", "aria-checked", "aria-selected")
INTERACTIVE_ROLES = ("button", "checkbox", "link", "menuitem", "option", "radio", "switch", "tab")


def implicit_role(element: Tag):
    """Return the implicit ARIA role of a native element, if it has one."""
    if element.name == "input":
        input_type = (element.get("type") or "").strip().lower()
        return IMPLICIT_INPUT_ROLES.get(input_type)
    return IMPLICIT_ROLES.get(element.name)


class AriaAnalyzer(BaseAnalyzer):
    """Check ARIA usage (WCAG 1.3.1, 4.1.2)."""

    name = "aria"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        self._check_roles(document, collector)
        self._check_required_attributes(document, collector)
        self._check_conflicting_attributes(document, collector)
        self._check_id_references(document, collector)
        self._check_non_interactive_elements(document, collector)

    def _check_roles(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for element in document.select(predicate=lambda el: self.has_attribute(el, "role")):
            role = self.get_attribute(element, "role")

            if role not in VALID_ROLES:
                collector.add(
                    element,
                    type="error",
                    rule="WCAG 4.1.2",
                    element=element.name,
                    message=f"Invalid ARIA role: '{role}'",
                    suggestion="Use a valid ARIA role from the WAI-ARIA specification",
                    auto_fixable=False,
                )

            if implicit_role(element) == role:
                collector.add(
                    element,
                    type="warning",
                    rule="WCAG 4.1.2",
                    element=element.name,
                    message=f"Redundant ARIA role '{role}' on {element.name}",
                    suggestion="Remove redundant role attribute",
                    auto_fixable=True,
                )

    def _check_required_attributes(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        for role, required in ROLE_REQUIREMENTS.items():
            elements = document.select(
                predicate=lambda el, role=role: self.get_attribute(el, "role") == role
            )
            for element in elements:
                for attribute in required:
                    if self.has_attribute(element, attribute):
                        continue
                    collector.add(
                        element,
                        type="error",
                        rule="WCAG 4.1.2",
                        element=element.name,
                        message=f"Role '{role}' requires {attribute} attribute",
                        suggestion=f"Add {attribute} attribute to element with role='{role}'",
                        auto_fixable=False,
                    )

    def _check_conflicting_attributes(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        hidden_focusable = document.select(
            FOCUSABLE_ELEMENTS, lambda el: self.get_attribute(el, "aria-hidden") == "true"
        )
        for element in hidden_focusable:
            collector.add(
                element,
                type="error",
                rule="WCAG 4.1.2",
                element=element.name,
                message='Focusable element with aria-hidden="true"',
                suggestion="Remove aria-hidden or make element non-focusable",
                auto_fixable=False,
            )

        both_labels = document.select(
            predicate=lambda el: self.has_attribute(el, "aria-label")
            and self.has_attribute(el, "aria-labelledby")
        )
        for element in both_labels:
            collector.add(
                element,
                type="warning",
                rule="WCAG 4.1.2",
                element=element.name,
                message="Element has both aria-label and aria-labelledby",
                suggestion="Use either aria-label or aria-labelledby, not both",
                auto_fixable=False,
            )

    def _check_id_references(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for attribute in ID_REFERENCE_ATTRIBUTES:
            elements = document.select(
                predicate=lambda el, attribute=attribute: self.has_attribute(el, attribute)
            )
            for element in elements:
                for reference in self.get_attribute(element, attribute).split():
                    if document.has_id(reference):
                        continue
                    collector.add(
                        element,
                        type="error",
                        rule="WCAG 1.3.1, 4.1.2",
                        element=element.name,
                        message=f"{attribute} references non-existent ID: '{reference}'",
                        suggestion="Ensure the referenced ID exists in the document",
                        auto_fixable=False,
                    )

    def _check_non_interactive_elements(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        for element in document.select(NON_INTERACTIVE_ELEMENTS):
            if self.get_attribute(element, "role") in INTERACTIVE_ROLES:
                continue

            for attribute in INTERACTIVE_STATE_ATTRIBUTES:
                if not self.has_attribute(element, attribute):
                    continue
                collector.add(
                    element,
                    type="warning",
                    rule="WCAG 4.1.2",
                    element=element.name,
                    message=f"Interactive ARIA attribute '{attribute}' on non-interactive element",
                    suggestion="Add an appropriate interactive role or remove the attribute",
                    auto_fixable=False,
                )
