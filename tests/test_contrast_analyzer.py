import pytest

from bfsg_audit.audit.analyzers import ContrastAnalyzer
from bfsg_audit.audit.analyzers.contrast_analyzer import (
    contrast_ratio,
    extract_style_value,
    parse_color,
)
from bfsg_audit.utils.logging_helper import ConfigurationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#ffffff", (255, 255, 255)),
        ("#FFF", (255, 255, 255)),
        ("000000", (0, 0, 0)),
        ("rgb(10, 20, 30)", (10, 20, 30)),
        ("RGB( 1 ,2, 3 )", (1, 2, 3)),
        ("Grey", (128, 128, 128)),
    ],
)
def test_parse_color(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", ["#ff", "rgb(300, 0, 0)", "hsl(0, 0%, 0%)", "transparent"])
def test_parse_color_rejects_unknown_values(value):
    assert parse_color(value) is None


def test_contrast_ratio_extremes():
    assert contrast_ratio("#000", "#fff") == pytest.approx(21.0)
    assert contrast_ratio("#fff", "#000") == pytest.approx(21.0)
    assert contrast_ratio("red", "red") == pytest.approx(1.0)
    assert contrast_ratio("#000", "nonsense") is None


def test_extract_style_value_does_not_match_inside_longer_names():
    style = "background-color: #fff; color: #333"

    assert extract_style_value(style, "color") == "#333"
    assert extract_style_value(style, "background-color") == "#fff"
    assert extract_style_value("background-color: #fff", "color") is None


def test_low_contrast_inline_style_is_an_error():
    html = '<p style="color: #999; background-color: #fff">Faint text</p>'
    violations = ContrastAnalyzer().analyze(html)

    assert [violation.type for violation in violations] == ["error", "warning"]
    error, warning = violations
    assert error.rule == "WCAG 1.4.3"
    assert error.message == "Insufficient color contrast ratio: 2.85:1"
    assert error.colors.foreground == "#999"
    assert error.colors.background == "#fff"
    assert error.suggestion == "Increase contrast to at least 4.5:1 for WCAG AA compliance"
    assert warning.message == "Light gray text may have insufficient contrast"
    assert warning.count == 1


def test_sufficient_contrast_passes():
    html = '<p style="color: #767676; background-color: #ffffff">Readable</p>'

    assert ContrastAnalyzer().analyze(html) == []


def test_aaa_level_uses_enhanced_threshold():
    html = '<p style="color: #767676; background-color: #ffffff">Readable at AA</p>'
    analyzer = ContrastAnalyzer("AAA")

    violations = analyzer.analyze(html)

    assert analyzer.threshold == 7.0
    assert len(violations) == 1
    assert violations[0].rule == "WCAG 1.4.6"
    assert violations[0].suggestion.endswith("7.0:1 for WCAG AAA compliance")


def test_level_a_applies_aa_minimum():
    analyzer = ContrastAnalyzer("a")

    assert analyzer.compliance_level == "AA"
    assert analyzer.threshold == 4.5


def test_unknown_level_is_rejected():
    with pytest.raises(ConfigurationError):
        ContrastAnalyzer("AAAA")


def test_unparseable_colors_are_skipped():
    html = '<span style="color: var(--text); background-color: #fff">x</span>'

    assert ContrastAnalyzer().analyze(html) == []


def test_placeholder_and_disabled_summaries():
    html = (
        '<input type="text" placeholder="Name" aria-label="Name">'
        '<input type="email" placeholder="Mail" aria-label="Mail">'
        "<button disabled>Send</button>"
    )
    violations = ContrastAnalyzer().analyze(html)

    assert [(violation.message, violation.count) for violation in violations] == [
        ("Placeholder text often has low contrast", 2),
        ("Disabled elements should still meet minimum contrast requirements", 1),
    ]
    assert all(violation.element == "various" for violation in violations)


def test_text_with_color_but_no_background_is_a_notice():
    html = (
        '<p style="color: #333">One</p>'
        '<div style="color: #333">Direct text</div>'
        '<div style="color: #333"><span>nested only</span></div>'
    )
    violations = ContrastAnalyzer().analyze(html)

    assert len(violations) == 1
    assert violations[0].type == "notice"
    assert violations[0].message == "Found 2 text element(s) with color but no explicit background"
