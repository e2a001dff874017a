# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Language checks.

This module provides checks for the page language (required by BFSG §3),
language codes on parts of the page and unmarked language changes.
"""

from typing import Dict, Iterable, List, Optional

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument, load_document, truncate
from bfsg_audit.utils.report_models import LanguageReport, LanguageStats, Severity

# Most common ISO 639-1 language codes
VALID_LANGUAGE_CODES = frozenset(
    [
        "de", "en", "fr", "es", "it", "nl", "pl", "pt", "ru", "tr",
        "ar", "zh", "ja", "ko", "hi", "sv", "no", "da", "fi", "el",
        "cs", "hu", "ro", "bg", "hr", "sr", "sk", "sl", "uk", "vi",
        "th", "id", "ms", "fa", "he", "ur", "bn", "ta", "te", "mr",
    ]
)

TEXT_ELEMENTS = (
    "p", "div", "span", "h1", "h2", "h3", "h4", "h5", "h6", "li", "td", "th",
)

# Text must be longer than this before its language is guessed
MIN_TEXT_LENGTH = 20

ENGLISH_FUNCTION_WORDS = (
    "the", "and", "for", "with", "from", "about", "this", "that", "have", "will",
)
GERMAN_FUNCTION_WORDS = (
    "der", "die", "das", "und", "für", "mit", "von", "über", "diese", "haben",
)


def extract_language_code(lang: str) -> str:
    """
    Return the primary subtag of a language tag.

    >>> extract_language_code(" en-US ")
    'en'
    """
    return lang.strip().lower().split("-")[0]


def is_valid_language_code(lang: str) -> bool:
    return extract_language_code(lang) in VALID_LANGUAGE_CODES


class MixedLanguageDetector:
    """
    Decides whether a passage is written in another language than the one it
    inherits from its ancestors.

    Detectors are called with the passage text and the inherited primary
    language code, which may be None.
    """

    def __call__(self, text: str, language: Optional[str]) -> bool:
        raise NotImplementedError("Subclasses must implement __call__() method")


class FunctionWordDetector(MixedLanguageDetector):
    """
    Detect foreign passages by counting common function words.

    For each inherited language the detector knows a list of function words
    of the language a passage is likely to switch to. A passage counts as
    foreign when at least ``threshold`` distinct words from that list occur
    surrounded by spaces.
    """

    def __init__(
        self,
        indicators: Optional[Dict[str, Iterable[str]]] = None,
        threshold: int = 3,
    ):
        if indicators is None:
            indicators = {
                "de": ENGLISH_FUNCTION_WORDS,
                "en": GERMAN_FUNCTION_WORDS,
            }
        self.indicators = {language: tuple(words) for language, words in indicators.items()}
        self.threshold = threshold

    def __call__(self, text: str, language: Optional[str]) -> bool:
        if not language:
            return False

        words = self.indicators.get(language)
        if not words:
            return False

        haystack = text.lower()
        matches = sum(1 for word in words if f" {word} " in haystack)
        return matches >= self.threshold


class LanguageAnalyzer(BaseAnalyzer):
    """Check language declarations (WCAG 3.1.1, 3.1.2, BFSG §3)."""

    name = "language"

    def __init__(self, detectors: Optional[List[MixedLanguageDetector]] = None):
        """
        Initialize the analyzer.

        Args:
            detectors: Mixed language detectors; a passage is reported when
                any of them fires. Defaults to a FunctionWordDetector.
        """
        self.detectors = list(detectors) if detectors is not None else [FunctionWordDetector()]

    def inspect(self, document) -> LanguageReport:
        """
        Analyze the document and summarize the result.

        Args:
            document: HtmlDocument, BeautifulSoup object or HTML markup

        Returns:
            LanguageReport with the issues and statistics
        """
        document = load_document(document)
        issues = self.analyze(document)

        root = document.find("html")
        stats = LanguageStats(
            total_issues=len(issues),
            critical_issues=sum(1 for issue in issues if issue.type == Severity.CRITICAL.value),
            has_main_lang=root is not None and bool(self.get_attribute(root, "lang")),
        )
        return LanguageReport(issues=issues, stats=stats)

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        self._check_main_language(document, collector)
        self._check_mixed_language(document, collector)
        self._check_language_codes(document, collector)
        self._check_xml_lang(document, collector)

    def _check_main_language(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        root = document.find("html")

        if root is None:
            collector.add_summary(
                type="critical",
                rule="WCAG 3.1.1, BFSG §3",
                element="<html>",
                message="No html element found in document",
                suggestion="Ensure document has proper html structure",
                auto_fixable=False,
            )
            return

        lang = self.get_attribute(root, "lang")
        if not lang:
            collector.add(
                root,
                type="critical",
                rule="WCAG 3.1.1, BFSG §3",
                element="<html>",
                message="Missing language attribute on html element",
                suggestion='Add lang attribute to html element (e.g., lang="de" for German)',
                auto_fixable=False,
            )
        elif not is_valid_language_code(lang):
            collector.add(
                root,
                type="error",
                rule="WCAG 3.1.1, BFSG §3",
                element="<html>",
                message=f"Invalid language code: {lang}",
                suggestion='Use valid ISO 639-1 language code (e.g., "de", "en", "fr")',
                auto_fixable=False,
            )

    def _check_mixed_language(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        # Elements with their own lang attribute already declare their language
        candidates = document.select(
            TEXT_ELEMENTS, lambda el: not self.has_attribute(el, "lang")
        )

        for element in candidates:
            text = self.get_element_text(element)
            if len(text) <= MIN_TEXT_LENGTH:
                continue

            language = self._inherited_language(element)
            if not any(detector(text, language) for detector in self.detectors):
                continue

            collector.add(
                element,
                type="warning",
                rule="WCAG 3.1.2",
                element=element.name,
                message="Possible language change without lang attribute",
                content=truncate(text) + "...",
                suggestion="Add lang attribute to elements with different language",
                auto_fixable=False,
            )

    def _inherited_language(self, element: Tag) -> Optional[str]:
        """Primary language code of the nearest ancestor with a lang attribute."""
        for ancestor in element.parents:
            if ancestor.name and self.has_attribute(ancestor, "lang"):
                return extract_language_code(self.get_attribute(ancestor, "lang"))
        return None

    def _check_language_codes(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for element in document.select(predicate=lambda el: bool(self.get_attribute(el, "lang"))):
            lang = self.get_attribute(element, "lang")
            if is_valid_language_code(lang):
                continue

            collector.add(
                element,
                type="error",
                rule="WCAG 3.1.1",
                element=f"<{element.name}>",
                message=f"Invalid language code: {lang}",
                suggestion="Use valid ISO 639-1 language code",
                auto_fixable=False,
            )

    def _check_xml_lang(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for element in document.select(predicate=lambda el: self.has_attribute(el, "xml:lang")):
            lang = self.get_attribute(element, "lang")
            if lang and self.get_attribute(element, "xml:lang") != lang:
                collector.add(
                    element,
                    type="warning",
                    rule="WCAG 3.1.1",
                    element=f"<{element.name}>",
                    message="Mismatched lang and xml:lang attributes",
                    suggestion="Ensure lang and xml:lang attributes have the same value",
                    auto_fixable=False,
                )
