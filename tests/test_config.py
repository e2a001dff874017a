import json

import pytest
import yaml

from bfsg_audit.utils.config import (
    ANALYZER_KEYS,
    ConfigManager,
    config_manager,
    load_config_file,
    resolve_audit_options,
    save_config,
    validate_checks,
    validate_compliance_level,
)
from bfsg_audit.utils.logging_helper import ConfigurationError


def test_default_audit_options():
    options = resolve_audit_options()

    assert options["compliance_level"] == "AA"
    assert options["checks"] == {key: True for key in ANALYZER_KEYS}
    assert options["severity_threshold"] == "notice"
    assert options["report_format"] == "text"
    assert options["detailed"] is False


def test_user_options_take_precedence(monkeypatch):
    monkeypatch.setenv("BFSG_AUDIT_COMPLIANCE_LEVEL", "AAA")
    config_manager.set_user_config({"compliance_level": "A"}, "audit")

    assert resolve_audit_options()["compliance_level"] == "AAA"
    assert resolve_audit_options({"compliance_level": "aa"})["compliance_level"] == "AA"


def test_environment_variables_reach_nested_checks(monkeypatch):
    monkeypatch.setenv("BFSG_AUDIT_CHECKS_CONTRAST", "false")
    monkeypatch.setenv("BFSG_AUDIT_DETAILED", "yes")

    options = resolve_audit_options()

    assert options["checks"]["contrast"] is False
    assert options["checks"]["images"] is True
    assert options["detailed"] is True


def test_partial_check_overrides_are_merged():
    options = resolve_audit_options({"checks": {"language": False}})

    assert options["checks"]["language"] is False
    assert options["checks"]["links"] is True


def test_get_config_does_not_leak_overrides():
    manager = ConfigManager({"audit": {"checks": {"images": True}}})

    manager.get_config({"checks": {"images": False}}, section="audit")

    assert manager.defaults["audit"]["checks"]["images"] is True


@pytest.mark.parametrize(
    "options",
    [
        {"checks": {"video": True}},
        {"checks": {"images": "off"}},
        {"compliance_level": "AAAA"},
        {"report_format": "pdf"},
        {"detailed": "yes"},
    ],
)
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        resolve_audit_options(options)


def test_validate_checks_fills_missing_keys():
    checks = validate_checks({"aria": False})

    assert set(checks) == set(ANALYZER_KEYS)
    assert checks["aria"] is False


def test_validate_compliance_level():
    assert validate_compliance_level(" aaa ") == "AAA"
    with pytest.raises(ConfigurationError):
        validate_compliance_level("")


def test_load_yaml_and_json_config(tmp_path):
    yaml_path = tmp_path / "audit.yaml"
    yaml_path.write_text("audit:\n  compliance_level: AAA\n", encoding="utf-8")
    json_path = tmp_path / "audit.json"
    json_path.write_text(json.dumps({"severity_threshold": "error"}), encoding="utf-8")

    assert load_config_file(str(yaml_path)) == {"audit": {"compliance_level": "AAA"}}
    assert load_config_file(str(json_path)) == {"severity_threshold": "error"}


def test_empty_yaml_config(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config_file(str(path)) == {}


@pytest.mark.parametrize(
    "name, content",
    [
        ("missing.yaml", None),
        ("audit.toml", "level = 'AA'"),
        ("broken.json", "{not json"),
        ("list.yaml", "- images\n- forms\n"),
    ],
)
def test_unloadable_config_files(tmp_path, name, content):
    path = tmp_path / name
    if content is not None:
        path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config_file(str(path))


def test_save_config_round_trip(tmp_path):
    config = {"audit": {"compliance_level": "AAA", "checks": {"images": False}}}
    yaml_path = tmp_path / "saved.yaml"
    json_path = tmp_path / "saved.json"

    save_config(config, str(yaml_path))
    save_config(config, str(json_path), "json")

    assert yaml.safe_load(yaml_path.read_text(encoding="utf-8")) == config
    assert json.loads(json_path.read_text(encoding="utf-8")) == config


def test_save_config_rejects_unknown_format(tmp_path):
    with pytest.raises(ConfigurationError):
        save_config({}, str(tmp_path / "config.ini"), "ini")
