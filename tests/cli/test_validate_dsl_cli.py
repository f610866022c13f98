import json

from stepcheck.dsl.validate_dsl import EXIT_INVALID, EXIT_OK, EXIT_UNREADABLE, main


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_clean_definition_exits_zero(tmp_path, capsys, hello_world, as_text):
    path = _write(tmp_path, "hello.json", as_text(hello_world))
    assert main([path]) == EXIT_OK
    out = capsys.readouterr().out
    assert "no issues" in out


def test_errors_are_printed_with_positions(tmp_path, capsys, hello_world, as_text):
    hello_world["States"]["Hello"]["Next"] = "Nowhere"
    path = _write(tmp_path, "broken.json", as_text(hello_world))
    assert main([path]) == EXIT_INVALID
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith(f"{path}:")
    assert ": error: Next points to a missing state: Nowhere. (<root>.States.Hello.Next)" in out[0]
    assert "1 error(s), 1 warning(s)" in out[-1]


def test_warnings_only_fail_in_strict_mode(tmp_path, hello_world, as_text):
    hello_world["States"]["Orphan"] = {"Type": "Succeed"}
    path = _write(tmp_path, "orphan.json", as_text(hello_world))
    assert main([path]) == EXIT_OK
    assert main([path, "--strict"]) == EXIT_INVALID


def test_json_report(tmp_path, capsys):
    path = _write(tmp_path, "bad.yaml", "StartAt: A\nStates: []\n")
    assert main([path, "--format", "json"]) == EXIT_INVALID
    report = json.loads(capsys.readouterr().out)
    summary = report[path]["summary"]
    assert summary["status"] == "errors"
    assert [m["path"] for m in report[path]["markers"]] == ["<root>.States"]


def test_invalid_json_text(tmp_path, capsys):
    path = _write(tmp_path, "cut.json", '{"StartAt": "A", ')
    assert main([path]) == EXIT_INVALID
    out = capsys.readouterr().out
    assert f"{path}:1:1: error: Invalid JSON:" in out


def test_unreadable_file_exits_two(tmp_path, hello_world, as_text):
    good = _write(tmp_path, "hello.json", as_text(hello_world))
    assert main([str(tmp_path / "missing.json"), good]) == EXIT_UNREADABLE
    assert main([_write(tmp_path, "notes.txt", "hi")]) == EXIT_UNREADABLE
