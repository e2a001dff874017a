# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Color contrast checks.

This module provides checks for color contrast declared in inline styles.
Stylesheets and computed styles are not resolved.
"""

import re
from typing import Optional, Tuple

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument, has_direct_text
from bfsg_audit.audit.standards import CONTRAST_REQUIREMENTS
from bfsg_audit.utils.config import validate_compliance_level
from bfsg_audit.utils.logging_helper import setup_logger
from bfsg_audit.utils.report_models import ColorPair

# Set up module-level logger
logger = setup_logger(__name__)

RGB = Tuple[int, int, int]

_HEX_COLOR = re.compile(r"^#?([0-9a-f]{6}|[0-9a-f]{3})$", re.IGNORECASE)
_RGB_COLOR = re.compile(r"rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)

NAMED_COLORS = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}

LIGHT_GRAY_FRAGMENTS = ("#999", "#aaa", "#bbb", "#ccc")

TEXT_TAGS = ("p", "span", "h1", "h2", "h3", "h4", "h5", "h6")


def extract_style_value(style: str, prop: str) -> Optional[str]:
    """
    Extract the value of a property from an inline style.

    The property name must not be the tail of a longer name, so ``color``
    does not match inside ``background-color``.

    Args:
        style: Inline style attribute value
        prop: CSS property name

    Returns:
        The trimmed value, or None if the property is not declared
    """
    pattern = r"(?<![\w-])" + re.escape(prop) + r"\s*:\s*([^;]+)"
    match = re.search(pattern, style, re.IGNORECASE)
    if match:
        return match.group(1).strip()
    return None


def parse_color(color: str) -> Optional[RGB]:
    """
    Convert a CSS color to an RGB tuple.

    Supports 6 and 3 digit hex (``#`` optional), ``rgb(r, g, b)`` and a few
    named colors.

    Args:
        color: Color value

    Returns:
        Tuple of (r, g, b) values, or None if the color is not understood
    """
    hex_match = _HEX_COLOR.match(color)
    if hex_match:
        hex_value = hex_match.group(1)
        if len(hex_value) == 3:
            hex_value = "".join(digit * 2 for digit in hex_value)
        return (
            int(hex_value[0:2], 16),
            int(hex_value[2:4], 16),
            int(hex_value[4:6], 16),
        )

    rgb_match = _RGB_COLOR.search(color)
    if rgb_match:
        components = tuple(int(value) for value in rgb_match.groups())
        if all(value <= 255 for value in components):
            return components
        return None

    return NAMED_COLORS.get(color.lower())


def _gamma_correct(value: float) -> float:
    """Convert an sRGB channel value to linear light."""
    if value <= 0.03928:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: RGB) -> float:
    """
    Calculate relative luminance of a color.

    Args:
        rgb: Tuple of (r, g, b) values

    Returns:
        Relative luminance between 0 and 1
    """
    r, g, b = (_gamma_correct(channel / 255) for channel in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> Optional[float]:
    """
    Calculate the contrast ratio between two CSS colors.

    Returns:
        The ratio (1 to 21), or None if either color cannot be parsed
    """
    rgb1 = parse_color(foreground)
    rgb2 = parse_color(background)
    if rgb1 is None or rgb2 is None:
        return None

    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


class ContrastAnalyzer(BaseAnalyzer):
    """Check for sufficient color contrast (WCAG 1.4.3, 1.4.6)."""

    name = "contrast"

    def __init__(self, compliance_level: str = "AA"):
        """
        Initialize the analyzer.

        Args:
            compliance_level: WCAG level (A, AA or AAA) selecting the threshold

        Raises:
            ConfigurationError: If the level is not known
        """
        level = validate_compliance_level(compliance_level)
        if level not in CONTRAST_REQUIREMENTS:
            logger.info(
                f"WCAG level {level} has no contrast criterion, applying the AA minimum"
            )
            level = "AA"

        self.compliance_level = level
        self.threshold = CONTRAST_REQUIREMENTS[level]["normal"]

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        self._check_inline_styles(document, collector)
        self._check_problematic_patterns(document, collector)
        self._check_text_without_background(document, collector)

    def _check_inline_styles(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        rule = "WCAG 1.4.6" if self.compliance_level == "AAA" else "WCAG 1.4.3"

        for element in document.select(predicate=lambda el: self.has_attribute(el, "style")):
            style = self.get_attribute(element, "style")
            color = extract_style_value(style, "color")
            background = extract_style_value(style, "background-color")
            if not color or not background:
                continue

            ratio = contrast_ratio(color, background)
            if ratio is None:
                logger.debug(f"Skipping unparseable colors {color!r} / {background!r}")
                continue

            if ratio < self.threshold:
                collector.add(
                    element,
                    type="error",
                    rule=rule,
                    element=element.name,
                    message=f"Insufficient color contrast ratio: {ratio:.2f}:1",
                    colors=ColorPair(foreground=color, background=background),
                    suggestion=(
                        f"Increase contrast to at least {self.threshold:.1f}:1 "
                        f"for WCAG {self.compliance_level} compliance"
                    ),
                    auto_fixable=False,
                )

    def _check_problematic_patterns(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        patterns = [
            (
                document.select(predicate=self._has_light_gray_style),
                "Light gray text may have insufficient contrast",
            ),
            (
                document.select("input", lambda el: self.has_attribute(el, "placeholder")),
                "Placeholder text often has low contrast",
            ),
            (
                document.select(predicate=lambda el: self.has_attribute(el, "disabled")),
                "Disabled elements should still meet minimum contrast requirements",
            ),
        ]

        for elements, message in patterns:
            if elements:
                collector.add_summary(
                    type="warning",
                    rule="WCAG 1.4.3",
                    element="various",
                    message=message,
                    count=len(elements),
                    suggestion="Review and test contrast ratios for these elements",
                    auto_fixable=False,
                )

    def _has_light_gray_style(self, element: Tag) -> bool:
        style = self.get_attribute(element, "style")
        return bool(style) and any(fragment in style for fragment in LIGHT_GRAY_FRAGMENTS)

    def _check_text_without_background(
        self, document: HtmlDocument, collector: ViolationCollector
    ) -> None:
        count = 0
        for element in document.select(predicate=self._is_text_element):
            style = self.get_attribute(element, "style")
            if style and "color:" in style and "background" not in style:
                count += 1

        if count:
            collector.add_summary(
                type="notice",
                rule="WCAG 1.4.3",
                element="text elements",
                message=f"Found {count} text element(s) with color but no explicit background",
                suggestion="Ensure sufficient contrast with inherited or default backgrounds",
                auto_fixable=False,
            )

    @staticmethod
    def _is_text_element(element: Tag) -> bool:
        if element.name in TEXT_TAGS:
            return True
        return element.name == "div" and has_direct_text(element)
