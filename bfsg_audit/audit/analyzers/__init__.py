# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility analyzers.

Each analyzer checks one area of the BFSG/WCAG requirements and returns its
violations in document order.
"""

from bfsg_audit.audit.analyzers.base_analyzer import BaseAnalyzer, ViolationCollector
from bfsg_audit.audit.analyzers.image_analyzer import ImageAnalyzer
from bfsg_audit.audit.analyzers.form_analyzer import FormAnalyzer
from bfsg_audit.audit.analyzers.heading_analyzer import HeadingAnalyzer
from bfsg_audit.audit.analyzers.contrast_analyzer import ContrastAnalyzer
from bfsg_audit.audit.analyzers.aria_analyzer import AriaAnalyzer
from bfsg_audit.audit.analyzers.link_analyzer import LinkAnalyzer
from bfsg_audit.audit.analyzers.keyboard_analyzer import KeyboardNavigationAnalyzer
from bfsg_audit.audit.analyzers.language_analyzer import (
    FunctionWordDetector,
    LanguageAnalyzer,
    MixedLanguageDetector,
)

__all__ = [
    "BaseAnalyzer",
    "ViolationCollector",
    "ImageAnalyzer",
    "FormAnalyzer",
    "HeadingAnalyzer",
    "ContrastAnalyzer",
    "AriaAnalyzer",
    "LinkAnalyzer",
    "KeyboardNavigationAnalyzer",
    "LanguageAnalyzer",
    "MixedLanguageDetector",
    "FunctionWordDetector",
]
