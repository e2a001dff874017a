import json

import pytest
from pydantic import ValidationError

from bfsg_audit.audit.report_generator import (
    filter_violations,
    generate_report,
    summarize,
)
from bfsg_audit.utils.logging_helper import ConfigurationError
from bfsg_audit.utils.report_models import ColorPair, Violation


def _violation(severity="error", rule="WCAG 1.1.1", message="Image without alt text found", **fields):
    return Violation(
        type=severity,
        rule=rule,
        element=fields.pop("element", "img"),
        message=message,
        suggestion=fields.pop("suggestion", "Add an alt attribute to describe the image"),
        **fields,
    )


@pytest.fixture
def violations():
    return {
        "images": [_violation(src="logo.png", auto_fixable=True)],
        "contrast": [
            _violation(
                rule="WCAG 1.4.3",
                element="p",
                message="Insufficient color contrast ratio: 2.85:1",
                colors=ColorPair(foreground="#999", background="#fff"),
            ),
            _violation(severity="notice", rule="WCAG 1.4.3", element="text elements", message="Found 1 text element(s)"),
        ],
        "links": [
            _violation(
                severity="warning",
                rule="Security Best Practice",
                element="a",
                message='External link missing rel="noopener noreferrer"',
                href="https://example.com",
            )
        ],
    }


def test_violation_is_immutable():
    violation = _violation()

    with pytest.raises(ValidationError):
        violation.message = "changed"


def test_violation_rejects_unknown_severity():
    with pytest.raises(ValidationError):
        _violation(severity="fatal")


def test_violation_to_dict_omits_unset_details():
    violation = _violation(severity="warning", element="a", link_text="Example")

    assert violation.to_dict() == {
        "type": "warning",
        "rule": "WCAG 1.1.1",
        "element": "a",
        "message": "Image without alt text found",
        "suggestion": "Add an alt attribute to describe the image",
        "auto_fixable": False,
        "linkText": "Example",
    }


def test_filter_violations_drops_empty_categories(violations):
    filtered = filter_violations(violations, "error")

    assert list(filtered) == ["images", "contrast"]
    assert len(filtered["contrast"]) == 1


def test_filter_violations_rejects_unknown_threshold(violations):
    with pytest.raises(ConfigurationError):
        filter_violations(violations, "severe")


def test_summary_counts(violations):
    summary = summarize(violations)

    assert summary.total_issues == 4
    assert summary.categories == {"images": 1, "contrast": 2, "links": 1}
    assert summary.severity_counts == {"critical": 0, "error": 2, "warning": 1, "notice": 1}
    assert summary.auto_fixable == 1
    assert [(item.criterion, item.count) for item in summary.criteria] == [("1.1.1", 1), ("1.4.3", 2)]
    assert summary.criteria[1].name == "Contrast (Minimum)"


def test_text_report(violations):
    report = generate_report(violations, source="index.html")
    lines = report.splitlines()

    assert lines[0] == "ACCESSIBILITY AUDIT REPORT"
    assert lines[1] == "=" * 80
    assert "File: index.html" in lines
    assert "Total issues: 4" in lines
    assert "images - 1 issues found:" in lines
    assert "  - [WCAG 1.1.1] Image without alt text found" in lines
    assert "    Suggestion: Add an alt attribute to describe the image" in lines
    assert "    Source: logo.png" not in lines


def test_detailed_text_report(violations):
    report = generate_report(violations, detailed=True)

    assert "    Source: logo.png" in report
    assert "    Colors: #999 on #fff" in report
    assert "    Link: https://example.com" in report
    assert "    Severity: warning" in report


def test_text_report_without_violations():
    report = generate_report({}, source="clean.html")

    assert "File: clean.html" in report
    assert "No accessibility issues found!" in report
    assert "SUMMARY" not in report


def test_json_report(violations):
    data = json.loads(generate_report(violations, report_format="json", source="index.html"))

    assert data["source"] == "index.html"
    assert data["summary"]["total_issues"] == 4
    assert data["violations"]["contrast"][0]["colors"] == {"foreground": "#999", "background": "#fff"}
    assert "href" not in data["violations"]["images"][0]


def test_json_report_applies_severity_threshold(violations):
    data = json.loads(
        generate_report(violations, report_format="json", severity_threshold="warning")
    )

    assert data["summary"]["total_issues"] == 3
    assert data["summary"]["severity_counts"]["notice"] == 0


def test_report_written_to_file(violations, tmp_path):
    output = tmp_path / "report.json"

    report = generate_report(violations, report_format="json", output_path=str(output))

    assert output.read_text(encoding="utf-8") == report


def test_unsupported_format(violations):
    with pytest.raises(ConfigurationError):
        generate_report(violations, report_format="html")
