import io
import json

import pytest
import yaml

import bfsg_audit.cli as cli
from bfsg_audit import __version__
from bfsg_audit.api import create_auditor
from bfsg_audit.audit.analyzers import BaseAnalyzer
from bfsg_audit.cli import EXIT_ERROR, EXIT_OK, EXIT_VIOLATIONS, build_options, main
from bfsg_audit.utils.logging_helper import ConfigurationError


@pytest.fixture
def accessible_file(tmp_path, accessible_html):
    path = tmp_path / "accessible.html"
    path.write_text(accessible_html, encoding="utf-8")
    return str(path)


@pytest.fixture
def inaccessible_file(tmp_path, inaccessible_html):
    path = tmp_path / "inaccessible.html"
    path.write_text(inaccessible_html, encoding="utf-8")
    return str(path)


def test_accessible_file_exits_ok(accessible_file, capsys):
    assert main(["--quiet", accessible_file]) == EXIT_OK

    out = capsys.readouterr().out
    assert "ACCESSIBILITY AUDIT REPORT" in out
    assert "No accessibility issues found!" in out


def test_violations_exit_code(inaccessible_file, capsys):
    assert main(["-q", inaccessible_file]) == EXIT_VIOLATIONS

    out = capsys.readouterr().out
    assert "images - 1 issues found:" in out


def test_json_output(inaccessible_file, capsys):
    main(["-q", "--format", "json", inaccessible_file])

    data = json.loads(capsys.readouterr().out)
    assert data["source"] == inaccessible_file
    assert list(data["violations"]) == ["images", "forms", "links"]


def test_multiple_json_reports_form_an_array(accessible_file, inaccessible_file, capsys):
    code = main(["-q", "-f", "json", accessible_file, inaccessible_file])

    data = json.loads(capsys.readouterr().out)
    assert code == EXIT_VIOLATIONS
    assert [report["source"] for report in data] == [accessible_file, inaccessible_file]


def test_reads_standard_input(monkeypatch, inaccessible_html, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(inaccessible_html))

    assert main(["-q", "-f", "json", "-"]) == EXIT_VIOLATIONS
    assert json.loads(capsys.readouterr().out)["source"] == "<stdin>"


def test_report_written_to_output_file(inaccessible_file, tmp_path, capsys):
    output = tmp_path / "reports" / "audit.txt"

    assert main(["-q", "-o", str(output), inaccessible_file]) == EXIT_VIOLATIONS

    assert "Non-descriptive link text: 'read more'" in output.read_text(encoding="utf-8")
    assert capsys.readouterr().out == ""


def test_selected_and_disabled_checks(inaccessible_file, capsys):
    main(["-q", "-f", "json", "--checks", "images,links", inaccessible_file])
    assert list(json.loads(capsys.readouterr().out)["violations"]) == ["images", "links"]

    main(["-q", "-f", "json", "--disable", "images", inaccessible_file])
    assert list(json.loads(capsys.readouterr().out)["violations"]) == ["forms", "links"]


def test_severity_threshold_controls_exit_code(inaccessible_file, capsys):
    assert main(["-q", "--severity", "critical", inaccessible_file]) == EXIT_OK
    assert "No accessibility issues found!" in capsys.readouterr().out


def test_config_file(inaccessible_file, tmp_path, capsys):
    config = tmp_path / "bfsg.yaml"
    config.write_text(
        yaml.safe_dump({"audit": {"checks": {"images": False, "forms": False, "links": False}}}),
        encoding="utf-8",
    )

    assert main(["-q", "--config", str(config), inaccessible_file]) == EXIT_OK


def test_save_config(accessible_file, tmp_path):
    saved = tmp_path / "saved.yaml"

    main(["-q", "--level", "AAA", "--save-config", str(saved), accessible_file])

    data = yaml.safe_load(saved.read_text(encoding="utf-8"))
    assert data["audit"]["compliance_level"] == "AAA"
    assert data["audit"]["checks"]["contrast"] is True


def test_version(capsys):
    assert main(["--version"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == f"bfsg-audit v{__version__}"


def test_no_inputs_prints_usage(capsys):
    assert main([]) == EXIT_ERROR
    assert "usage:" in capsys.readouterr().err


def test_unknown_check_is_an_error(accessible_file, capsys):
    assert main(["-q", "--checks", "images,videos", accessible_file]) == EXIT_ERROR
    assert "Error: Unknown checks: videos" in capsys.readouterr().err


def test_missing_file_is_an_error(tmp_path, capsys):
    assert main(["-q", str(tmp_path / "missing.html")]) == EXIT_ERROR
    assert "Failed to read HTML file" in capsys.readouterr().err


def test_invalid_level_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        main(["--level", "B", "page.html"])


def test_build_options():
    options = build_options(
        {"format": "json", "level": "AAA", "checks": "images, forms", "disable": "forms", "detailed": True}
    )

    assert options["report_format"] == "json"
    assert options["compliance_level"] == "AAA"
    assert options["detailed"] is True
    assert options["checks"]["images"] is True
    assert options["checks"]["forms"] is False
    assert options["checks"]["links"] is False


def test_build_options_rejects_unknown_disabled_check():
    with pytest.raises(ConfigurationError):
        build_options({"disable": "sound"})


class BrokenAnalyzer(BaseAnalyzer):
    name = "broken"

    def run(self, document, collector):
        raise RuntimeError("boom")


def test_analyzer_failure_exits_with_error(accessible_file, monkeypatch, capsys):
    def create_broken_auditor(options):
        auditor, resolved = create_auditor(options)
        auditor.register_analyzer("broken", BrokenAnalyzer())
        return auditor, resolved

    monkeypatch.setattr(cli, "create_auditor", create_broken_auditor)

    assert main(["-q", accessible_file]) == EXIT_ERROR
    assert "No accessibility issues found!" in capsys.readouterr().out


def test_empty_audit_section_in_config(accessible_file, tmp_path):
    config = tmp_path / "empty-section.yaml"
    config.write_text("audit:\n", encoding="utf-8")

    assert main(["-q", "--config", str(config), accessible_file]) == EXIT_OK


@pytest.mark.parametrize("content", ["audit:\n  - images\n", "audit: strict\n"])
def test_audit_section_must_be_a_mapping(accessible_file, tmp_path, capsys, content):
    config = tmp_path / "bad-section.yaml"
    config.write_text(content, encoding="utf-8")

    assert main(["-q", "--config", str(config), accessible_file]) == EXIT_ERROR
    assert "must be a mapping" in capsys.readouterr().err
