# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Image accessibility checks.

This module provides checks for text alternatives on images.
"""

from bs4 import Tag

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.document import HtmlDocument


class ImageAnalyzer(BaseAnalyzer):
    """Check for alt text on images (WCAG 1.1.1)."""

    name = "images"

    def run(self, document: HtmlDocument, collector: ViolationCollector) -> None:
        for img in document.select("img"):
            if not self.has_attribute(img, "alt"):
                collector.add(
                    img,
                    type="error",
                    rule="WCAG 1.1.1",
                    element="img",
                    message="Image without alt text found",
                    src=self.get_attribute(img, "src", ""),
                    suggestion="Add an alt attribute to describe the image",
                    auto_fixable=True,
                )
            elif self.get_attribute(img, "alt") == "" and not self._is_decorative(img):
                collector.add(
                    img,
                    type="warning",
                    rule="WCAG 1.1.1",
                    element="img",
                    message="Image with empty alt text may not be decorative",
                    src=self.get_attribute(img, "src", ""),
                    suggestion="Verify if the image is truly decorative or needs descriptive text",
                    auto_fixable=False,
                )

    def _is_decorative(self, img: Tag) -> bool:
        return (
            self.get_attribute(img, "role") == "presentation"
            or self.get_attribute(img, "aria-hidden") == "true"
        )
