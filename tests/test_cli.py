import json

from aeolis.cli import main


def write_il(tmp_path, *lines):
    path = tmp_path / "prog.il"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_prints_values_and_exits_zero(tmp_path, capsys):
    path = write_il(
        tmp_path,
        "- _entry",
        "var a int",
        "var b int",
        "var c int",
        "assg a 2",
        "assg b 3",
        "bind in a",
        "bind in b",
        "bind out c",
        "call add",
        "bind in c",
        "call print",
        "---",
    )

    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "5\n"


def test_deadlock_reported_with_nonzero_status(tmp_path, capsys):
    path = write_il(
        tmp_path,
        "- _entry",
        "var a int",
        "bind in a",
        "call print",
        "---",
    )

    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert "[DEADLOCKED]" in err
    assert "1 queued" in err


def test_parse_error_reported(tmp_path, capsys):
    path = write_il(tmp_path, "- _entry", "goto 10", "---")

    assert main([str(path)]) == 1
    assert "[UNKNOWN_INSTRUCTION] Unknown instruction 'goto' (line 2)" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.il")]) == 2
    assert "not found" in capsys.readouterr().err


def test_dump_state(tmp_path, capsys):
    path = write_il(tmp_path, "- _entry", "var x int", "assg x 3", "---")

    assert main([str(path), "--dump-state"]) == 0
    state = json.loads(capsys.readouterr().err)
    assert state == {"x": {"type": "int", "value": "3", "ready": True, "bound": False}}


def test_skip_blank_lines_flag(tmp_path, capsys):
    path = write_il(tmp_path, "- _entry", "", "var x int", "---")

    assert main([str(path)]) == 1
    capsys.readouterr()
    assert main([str(path), "--skip-blank-lines"]) == 0


def test_negative_max_dispatches_reported(tmp_path, capsys):
    path = write_il(tmp_path, "- _entry", "---")

    assert main([str(path), "--max-dispatches", "-1"]) == 1
    err = capsys.readouterr().err
    assert "[INVALID_SETTINGS]" in err
    assert "max_dispatches" in err


def test_bad_environment_value_reported(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("AEOLIS_MAX_DISPATCHES", "abc")
    path = write_il(tmp_path, "- _entry", "---")

    assert main([str(path)]) == 1
    assert "[INVALID_SETTINGS] Setting 'max_dispatches'" in capsys.readouterr().err


def test_non_utf8_file_reported(tmp_path, capsys):
    path = tmp_path / "prog.il"
    path.write_bytes(b"- _entry\nvar \xff int\n---\n")

    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert "[INVALID_ENCODING]" in err
    assert "byte 13" in err
