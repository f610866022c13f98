import pytest

from stepcheck.dsl.dsl_loader import (
    DefinitionLoadError,
    detect_format,
    load_dsl_file,
    parse_definition_text,
)


@pytest.mark.parametrize(
    "name, fmt",
    [("flow.json", "json"), ("flow.asl.json", "json"), ("flow.yaml", "yaml"), ("FLOW.YML", "yaml")],
)
def test_detect_format(name, fmt):
    assert detect_format(name) == fmt


@pytest.mark.parametrize("name", ["flow.txt", "flow"])
def test_detect_format_rejects_unknown_suffix(name):
    with pytest.raises(DefinitionLoadError):
        detect_format(name)


def test_parse_json_text(hello_world, as_text):
    outcome = parse_definition_text(as_text(hello_world))
    assert outcome.ok
    assert outcome.document == hello_world


def test_parse_failure_is_reported_not_raised():
    outcome = parse_definition_text('{"StartAt": ')
    assert not outcome.ok
    assert outcome.document is None
    assert outcome.error.startswith("Invalid JSON:")


@pytest.mark.parametrize("fmt", ["json", "yaml"])
def test_runaway_nesting_is_reported_not_raised(fmt):
    outcome = parse_definition_text("[" * 100000 + "]" * 100000, fmt)
    assert not outcome.ok
    assert outcome.document is None


def test_parse_yaml_text():
    outcome = parse_definition_text("StartAt: A\nStates:\n  A:\n    Type: Succeed\n", "yaml")
    assert outcome.document == {"StartAt": "A", "States": {"A": {"Type": "Succeed"}}}

    broken = parse_definition_text("StartAt: [A\n", "yaml")
    assert broken.error.startswith("Invalid YAML:")


def test_load_dsl_file(tmp_path, hello_world, as_text):
    path = tmp_path / "hello.json"
    path.write_text(as_text(hello_world), encoding="utf-8")
    assert load_dsl_file(path).document == hello_world


def test_load_missing_file(tmp_path):
    with pytest.raises(DefinitionLoadError):
        load_dsl_file(tmp_path / "missing.json")
