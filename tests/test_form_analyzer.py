import pytest

from bfsg_audit.audit.analyzers import FormAnalyzer


def _analyze(html):
    return FormAnalyzer().analyze(html)


def test_input_without_label_is_an_error():
    violations = _analyze('<input type="text" id="email" name="email">')

    assert len(violations) == 1
    assert violations[0].type == "error"
    assert violations[0].rule == "WCAG 1.3.1, 3.3.2"
    assert violations[0].message == "Form input without associated label"
    assert violations[0].name == "email"


def test_input_with_matching_label_passes():
    html = '<label for="email">E-Mail</label><input type="text" id="email" name="email">'

    assert _analyze(html) == []


def test_label_for_other_id_does_not_count():
    html = '<label for="phone">Phone</label><input type="text" id="email">'

    assert len(_analyze(html)) == 1


def test_unnamed_input_without_id():
    violations = _analyze("<input>")

    assert len(violations) == 1
    assert violations[0].name == "unnamed"


@pytest.mark.parametrize(
    "control",
    [
        '<input type="hidden" name="token">',
        '<input type="submit" value="Send">',
        '<input type="BUTTON" value="Go">',
        '<input type="text" aria-label="Search">',
        '<input type="text" aria-labelledby="search-label">',
    ],
)
def test_controls_that_need_no_label(control):
    assert _analyze(control) == []


def test_textarea_and_select_messages():
    violations = _analyze('<textarea name="comment"></textarea><select name="country"></select>')

    assert [violation.message for violation in violations] == [
        "Textarea without associated label",
        "Select without associated label",
    ]
    assert [violation.element for violation in violations] == ["textarea", "select"]


def test_form_without_heading_or_legend_is_a_warning():
    violations = _analyze('<form><button type="submit">Send</button></form>')

    assert len(violations) == 1
    assert violations[0].type == "warning"
    assert violations[0].message == "Form without descriptive label or heading"


@pytest.mark.parametrize(
    "form",
    [
        '<form aria-label="Newsletter"></form>',
        '<form aria-labelledby="newsletter-title"></form>',
        "<form><h2>Newsletter</h2></form>",
        "<form><fieldset><legend>Contact</legend></fieldset></form>",
    ],
)
def test_named_forms_pass(form):
    assert _analyze(form) == []


def test_required_field_without_aria_required():
    violations = _analyze('<input type="text" name="city" aria-label="City" required>')

    assert len(violations) == 1
    assert violations[0].message == "Required field without aria-required attribute"
    assert violations[0].element == "input"
    assert violations[0].auto_fixable is True


def test_required_field_with_aria_required_passes():
    html = '<input type="text" aria-label="City" required aria-required="true">'

    assert _analyze(html) == []


def test_unlabelled_required_field_reports_both_problems_in_check_order():
    violations = _analyze('<input type="email" name="mail" required>')

    assert [violation.message for violation in violations] == [
        "Form input without associated label",
        "Required field without aria-required attribute",
    ]
