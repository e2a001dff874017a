# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Link-related accessibility checks.

This module provides checks for link text, empty links, new window links and
download links.
"""

import re
from urllib.parse import urlparse

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import (
    HtmlDocument,
    has_child_elements,
    has_direct_text,
    truncate,
)

# Common non-descriptive link texts to avoid
NON_DESCRIPTIVE_TEXTS = frozenset(
    [
        "click here",
        "here",
        "read more",
        "more",
        "link",
        "click",
        "go",
        "start",
        "download",
        "learn more",
        "continue",
        "see more",
        "view more",
        "details",
    ]
)

NEW_WINDOW_TARGETS = ("_blank", "blank")
NEW_WINDOW_CUES = ("new window", "new tab", "opens in")

FILE_INDICATORS = ("pdf", "download", "document", "file")
_DOCUMENT_HREF = re.compile(r"\.(pdf|doc|docx|xls|xlsx|zip|rar)$", re.IGNORECASE)

_URL_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*$", re.IGNORECASE)
# Schemes that are valid without a host part
_HOSTLESS_SCHEMES = ("mailto", "news", "file")


def is_url(text: str) -> bool:
    """
    Check if text is a syntactically valid absolute URL.

    Args:
        text: The text to check

    Returns:
        True if the text is a URL, False otherwise
    """
    if not text or any(char.isspace() for char in text):
        return False

    try:
        parsed = urlparse(text)
    except ValueError:
        return False

    if not _URL_SCHEME.match(parsed.scheme):
        return False
    if parsed.netloc:
        return True
    return parsed.scheme.lower() in _HOSTLESS_SCHEMES and bool(parsed.path)


class LinkAnalyzer(BaseAnalyzer):
    """Check for proper link text and behavior (WCAG 2.4.4, 2.4.9, 3.2.5)."""

    name = "links"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        links = document.select("a", lambda el: self.has_attribute(el, "href"))

        self._check_link_text(links, collector)
        self._check_empty_links(links, collector)
        self._check_image_links(document, collector)
        self._check_links_without_href(document, collector)
        self._check_adjacent_duplicates(links, collector)
        self._check_new_window_links(document, collector)
        self._check_link_purpose(links, collector)

    def _check_link_text(self, links, collector: ViolationCollector) -> None:
        for link in links:
            link_text = self.get_element_text(link).lower()

            if link_text in NON_DESCRIPTIVE_TEXTS:
                collector.add(
                    link,
                    type="error",
                    rule="WCAG 2.4.4, 2.4.9",
                    element="a",
                    message=f"Non-descriptive link text: '{link_text}'",
                    href=self.get_attribute(link, "href"),
                    suggestion="Use descriptive text that explains the link destination or purpose",
                    auto_fixable=False,
                )

            if 0 < len(link_text) <= 2 and not self.has_attribute(link, "aria-label"):
                collector.add(
                    link,
                    type="warning",
                    rule="WCAG 2.4.4",
                    element="a",
                    message=f"Very short link text: '{link_text}'",
                    href=self.get_attribute(link, "href"),
                    suggestion="Consider using more descriptive text or adding aria-label",
                    auto_fixable=False,
                )

    def _check_empty_links(self, links, collector: ViolationCollector) -> None:
        for link in links:
            if has_direct_text(link) or has_child_elements(link):
                continue
            if self.has_attribute(link, "aria-label") or self.has_attribute(link, "title"):
                continue

            collector.add(
                link,
                type="error",
                rule="WCAG 2.4.4, 4.1.2",
                element="a",
                message="Empty link without accessible text",
                href=self.get_attribute(link, "href"),
                suggestion="Add link text, aria-label, or title attribute",
                auto_fixable=False,
            )

    def _check_image_links(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for img in document.select("img", self._is_unlabeled_link_image):
            link = img.parent
            if self.get_element_text(link) or self.has_attribute(link, "aria-label"):
                continue

            collector.add(
                img,
                type="error",
                rule="WCAG 2.4.4, 1.1.1",
                element="a",
                message="Link with image lacking alternative text",
                href=self.get_attribute(link, "href"),
                suggestion="Add alt text to image or aria-label to link",
                auto_fixable=False,
            )

    def _is_unlabeled_link_image(self, img: Tag) -> bool:
        parent = img.parent
        if parent is None or parent.name != "a" or not self.has_attribute(parent, "href"):
            return False
        return not self.get_attribute(img, "alt")

    def _check_links_without_href(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        for link in document.select("a", lambda el: not self.has_attribute(el, "href")):
            collector.add(
                link,
                type="warning",
                rule="WCAG 2.4.4",
                element="a",
                message="Anchor element without href attribute",
                content=truncate(self.get_element_text(link)),
                suggestion="Add href attribute or use a different element",
                auto_fixable=False,
            )

    def _check_adjacent_duplicates(self, links, collector: ViolationCollector) -> None:
        """
        Compare each link with the link before it in document order.

        Only a link whose immediately preceding sibling node is another link
        is reported; duplicates further apart are not.
        """
        previous_href = None

        for link in links:
            href = self.get_attribute(link, "href")

            if href and href == previous_href:
                sibling = link.previous_sibling
                if isinstance(sibling, Tag) and sibling.name == "a":
                    collector.add(
                        link,
                        type="warning",
                        rule="WCAG 2.4.4",
                        element="a",
                        message="Adjacent duplicate links to same destination",
                        href=href,
                        suggestion="Combine duplicate links or differentiate their purposes",
                        auto_fixable=False,
                    )

            previous_href = href

    def _check_new_window_links(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        new_window_links = document.select(
            "a", lambda el: self.get_attribute(el, "target") in NEW_WINDOW_TARGETS
        )

        for link in new_window_links:
            link_text = self.get_element_text(link)
            labels = (
                link_text,
                self.get_attribute(link, "aria-label", ""),
                self.get_attribute(link, "title", ""),
            )
            has_warning = any(
                cue in label.lower() for label in labels for cue in NEW_WINDOW_CUES
            )

            if not has_warning:
                collector.add(
                    link,
                    type="warning",
                    rule="WCAG 3.2.5",
                    element="a",
                    message="Link opens in new window without warning",
                    href=self.get_attribute(link, "href", ""),
                    link_text=truncate(link_text),
                    suggestion='Add "(opens in new window)" to link text or aria-label',
                    auto_fixable=True,
                )

            rel = self.get_attribute(link, "rel", "").lower()
            if "noopener" not in rel or "noreferrer" not in rel:
                collector.add(
                    link,
                    type="warning",
                    rule="Security Best Practice",
                    element="a",
                    message='External link missing rel="noopener noreferrer"',
                    href=self.get_attribute(link, "href", ""),
                    suggestion='Add rel="noopener noreferrer" for security',
                    auto_fixable=True,
                )

    def _check_link_purpose(self, links, collector: ViolationCollector) -> None:
        for link in links:
            href = self.get_attribute(link, "href")
            link_text = self.get_element_text(link)

            if is_url(link_text):
                collector.add(
                    link,
                    type="warning",
                    rule="WCAG 2.4.4",
                    element="a",
                    message="URL used as link text",
                    href=href,
                    link_text=truncate(link_text),
                    suggestion="Use descriptive text instead of URL",
                    auto_fixable=False,
                )

            match = _DOCUMENT_HREF.search(href)
            if match and not any(word in link_text.lower() for word in FILE_INDICATORS):
                file_type = match.group(1).upper()
                collector.add(
                    link,
                    type="warning",
                    rule="WCAG 2.4.4",
                    element="a",
                    message="File download link without file type indication",
                    href=href,
                    link_text=truncate(link_text),
                    suggestion=f"Add file type and size info (e.g., 'Document ({file_type}, 2MB)')",
                    auto_fixable=False,
                )
