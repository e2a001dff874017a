# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Keyboard navigation checks.

This module provides checks for skip links, tab order, focus traps in
dialogs and elements that only react to the mouse.
"""

import re
from typing import Optional

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument

# Interactive elements that should be keyboard accessible
INTERACTIVE_ELEMENTS = (
    "a", "button", "input", "select", "textarea",
    "audio", "video", "iframe", "embed", "object",
)

# Roles that make an element interactive
FOCUSABLE_ROLES = (
    "button", "link", "textbox", "menuitem", "tab",
    "checkbox", "radio", "combobox", "slider",
)

DIALOG_ROLES = ("dialog", "alertdialog")

SKIP_LINK_WORDS = ("skip", "jump", "main")
SKIP_LINK_EXAMPLE = '<a href="#main" class="skip-link">Skip to main content</a>'

MOUSE_EVENTS = ("onmouseover", "onmouseout", "onmousedown", "onmouseup")
KEYBOARD_EVENTS = ("onkeydown", "onkeyup", "onkeypress", "onfocus", "onblur")

# Optional minus sign followed by ASCII digits
_TABINDEX = re.compile(r"^-?[0-9]+$")


def parse_tabindex(value: Optional[str]) -> Optional[int]:
    """
    Parse a tabindex value as an HTML integer.

    >>> parse_tabindex(" 2 ")
    2
    >>> parse_tabindex("1.5") is None
    True
    """
    if value is None:
        return None
    value = value.strip()
    if not _TABINDEX.match(value):
        return None
    return int(value)


class KeyboardNavigationAnalyzer(BaseAnalyzer):
    """Check keyboard accessibility (WCAG 2.1.1, 2.1.2, 2.4.1, 2.4.3)."""

    name = "keyboard"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        self._check_skip_links(document, collector)
        self._check_tab_order(document, collector)
        self._check_focus_traps(document, collector)
        self._check_interactive_elements(document, collector)
        self._check_positive_tabindex(document, collector)
        self._check_click_handlers(document, collector)
        self._check_mouse_only_handlers(document, collector)

    def _check_skip_links(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        body = document.find("body")
        first_links = document.select_within(body, "a", limit=3) if body is not None else []

        for link in first_links:
            href = self.get_attribute(link, "href", "")
            text = self.get_element_text(link).lower()
            if href.startswith("#") and any(word in text for word in SKIP_LINK_WORDS):
                return

        collector.add_summary(
            type="warning",
            rule="WCAG 2.4.1",
            element="navigation",
            message="No skip link found at the beginning of the page",
            suggestion="Add a skip link to main content for keyboard users",
            auto_fixable=True,
            fix_example=SKIP_LINK_EXAMPLE,
        )

    def _check_tab_order(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        tabindexes = [
            parse_tabindex(self.get_attribute(element, "tabindex"))
            for element in document.select(
                predicate=lambda el: self.has_attribute(el, "tabindex")
            )
        ]
        positive = [value for value in tabindexes if value is not None and value > 0]

        if positive and len(positive) < len(tabindexes):
            collector.add_summary(
                type="warning",
                rule="WCAG 2.4.3",
                element="various",
                message="Mixed tabindex values can create confusing navigation order",
                count=len(positive),
                suggestion='Use tabindex="0" for natural flow or tabindex="-1" to remove from tab order',
                auto_fixable=False,
            )

    def _check_focus_traps(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for modal in document.select(predicate=self._is_modal):
            if self.get_attribute(modal, "aria-modal") != "true":
                collector.add(
                    modal,
                    type="error",
                    rule="WCAG 2.1.2",
                    element=modal.name,
                    message='Modal/dialog without aria-modal="true" may create keyboard trap',
                    suggestion='Add aria-modal="true" and implement focus management',
                    auto_fixable=True,
                )

            if not (
                self.has_attribute(modal, "aria-label")
                or self.has_attribute(modal, "aria-labelledby")
            ):
                collector.add(
                    modal,
                    type="error",
                    rule="WCAG 4.1.2",
                    element=modal.name,
                    message="Modal/dialog without accessible name",
                    suggestion="Add aria-label or aria-labelledby to identify the modal",
                    auto_fixable=False,
                )

    def _is_modal(self, element: Tag) -> bool:
        if self.get_attribute(element, "role") in DIALOG_ROLES:
            return True
        return "modal" in self.get_attribute(element, "class", "")

    def _check_interactive_elements(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        enabled = document.select(
            INTERACTIVE_ELEMENTS, lambda el: not self.has_attribute(el, "disabled")
        )

        for element in enabled:
            if self.get_attribute(element, "tabindex") == "-1":
                collector.add(
                    element,
                    type="warning",
                    rule="WCAG 2.1.1",
                    element=element.name,
                    message=f"Interactive {element.name} removed from tab order",
                    suggestion="Ensure element is still keyboard accessible via other means",
                    auto_fixable=True,
                )

            if element.name == "a" and not self.has_attribute(element, "href"):
                collector.add(
                    element,
                    type="error",
                    rule="WCAG 2.1.1",
                    element="a",
                    message="Link without href is not keyboard accessible",
                    suggestion="Add href attribute or use button element for actions",
                    auto_fixable=False,
                )

    def _check_positive_tabindex(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        count = 0
        for element in document.select(predicate=lambda el: self.has_attribute(el, "tabindex")):
            value = parse_tabindex(self.get_attribute(element, "tabindex"))
            if value is not None and value > 0:
                count += 1

        if count:
            collector.add_summary(
                type="warning",
                rule="WCAG 2.4.3",
                element="various",
                message=f"Found {count} element(s) with positive tabindex",
                suggestion="Avoid positive tabindex values; use DOM order for natural tab flow",
                auto_fixable=True,
            )

    def _check_click_handlers(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        for element in document.select(predicate=lambda el: self.has_attribute(el, "onclick")):
            if element.name in INTERACTIVE_ELEMENTS:
                continue
            if self.get_attribute(element, "role") in FOCUSABLE_ROLES:
                continue

            tabindex = self.get_attribute(element, "tabindex")
            if tabindex is not None and tabindex != "-1":
                continue

            collector.add(
                element,
                type="error",
                rule="WCAG 2.1.1",
                element=element.name,
                message="Non-interactive element with click handler is not keyboard accessible",
                suggestion="Add tabindex=\"0\" and keyboard event handlers (onkeydown/onkeyup)",
                auto_fixable=True,
            )

    def _check_mouse_only_handlers(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        mouse_elements = document.select(
            predicate=lambda el: any(self.has_attribute(el, event) for event in MOUSE_EVENTS)
        )

        for element in mouse_elements:
            if any(self.has_attribute(element, event) for event in KEYBOARD_EVENTS):
                continue

            collector.add(
                element,
                type="warning",
                rule="WCAG 2.1.1",
                element=element.name,
                message="Element with mouse events lacks keyboard event handlers",
                suggestion="Add equivalent keyboard event handlers for all mouse interactions",
                auto_fixable=False,
            )
