"""
WCAG standards and criteria information.

This module provides information about WCAG standards and criteria.
"""

import re
from typing import List

# Severity levels (higher number = more severe)
SEVERITY_LEVELS = {
    "notice": 1,
    "warning": 2,
    "error": 3,
    "critical": 4,
}

# Minimum contrast ratios per compliance level
CONTRAST_REQUIREMENTS = {
    "AA": {
        "normal": 4.5,
        "large": 3.0,  # 18pt+ or 14pt+ bold
    },
    "AAA": {
        "normal": 7.0,
        "large": 4.5,
    },
}

# WCAG criteria information
WCAG_CRITERIA = {
    "1.1.1": {
        "name": "Non-text Content",
        "level": "A",
        "description": "All non-text content that is presented to the user has a text alternative that serves the equivalent purpose.",
    },
    "1.3.1": {
        "name": "Info and Relationships",
        "level": "A",
        "description": "Information, structure, and relationships conveyed through presentation can be programmatically determined.",
    },
    "1.4.3": {
        "name": "Contrast (Minimum)",
        "level": "AA",
        "description": "The visual presentation of text and images of text has a contrast ratio of at least 4.5:1.",
    },
    "1.4.6": {
        "name": "Contrast (Enhanced)",
        "level": "AAA",
        "description": "The visual presentation of text and images of text has a contrast ratio of at least 7:1.",
    },
    "2.1.1": {
        "name": "Keyboard",
        "level": "A",
        "description": "All functionality is operable through a keyboard interface.",
    },
    "2.1.2": {
        "name": "No Keyboard Trap",
        "level": "A",
        "description": "If keyboard focus can be moved to a component, focus can be moved away from that component using only a keyboard interface.",
    },
    "2.4.1": {
        "name": "Bypass Blocks",
        "level": "A",
        "description": "A mechanism is available to bypass blocks of content that are repeated on multiple Web pages.",
    },
    "2.4.3": {
        "name": "Focus Order",
        "level": "A",
        "description": "Focusable components receive focus in an order that preserves meaning and operability.",
    },
    "2.4.4": {
        "name": "Link Purpose (In Context)",
        "level": "A",
        "description": "The purpose of each link can be determined from the link text alone or from the link text together with its programmatically determined link context.",
    },
    "2.4.6": {
        "name": "Headings and Labels",
        "level": "AA",
        "description": "Headings and labels describe topic or purpose.",
    },
    "2.4.9": {
        "name": "Link Purpose (Link Only)",
        "level": "AAA",
        "description": "A mechanism is available to allow the purpose of each link to be identified from link text alone.",
    },
    "3.1.1": {
        "name": "Language of Page",
        "level": "A",
        "description": "The default human language of each Web page can be programmatically determined.",
    },
    "3.1.2": {
        "name": "Language of Parts",
        "level": "AA",
        "description": "The human language of each passage or phrase in the content can be programmatically determined.",
    },
    "3.2.5": {
        "name": "Change on Request",
        "level": "AAA",
        "description": "Changes of context are initiated only by user request or a mechanism is available to turn off such changes.",
    },
    "3.3.2": {
        "name": "Labels or Instructions",
        "level": "A",
        "description": "Labels or instructions are provided when content requires user input.",
    },
    "4.1.2": {
        "name": "Name, Role, Value",
        "level": "A",
        "description": "For all user interface components, the name and role can be programmatically determined.",
    },
}

_CRITERION_PATTERN = re.compile(r"\b\d+\.\d+\.\d+\b")


def get_criterion_info(criterion_id: str) -> dict:
    """
    Get information about a WCAG criterion.

    Args:
        criterion_id: WCAG criterion ID (e.g., '1.1.1')

    Returns:
        Dictionary with criterion information
    """
    return WCAG_CRITERIA.get(
        criterion_id,
        {
            "name": "Unknown Criterion",
            "level": "Unknown",
            "description": "No description available",
        },
    )


def parse_rule(rule: str) -> List[str]:
    """
    Extract the WCAG criterion IDs referenced by a violation rule.

    >>> parse_rule("WCAG 1.3.1, 3.3.2")
    ['1.3.1', '3.3.2']
    >>> parse_rule("Security Best Practice")
    []
    """
    return _CRITERION_PATTERN.findall(rule or "")
