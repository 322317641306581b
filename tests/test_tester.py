import pytest

from shelltools.tester import Outcome, ShellTest, main, parse_tests


def test_parse_full_test():
    (test,) = parse_tests("`greet` `echo hi` 0 in`x` out`hi\n` err``", 1)
    assert test == ShellTest(
        id=1, command="echo hi", name="greet", exit_code=0, stdin="x", stdout="hi\n"
    )


def test_parse_defaults():
    (test,) = parse_tests("`true`", 1)
    assert test.command == "true"
    assert test.name == "Unnamed test"
    assert (test.exit_code, test.stdin, test.stdout, test.stderr) == (0, "", "", "")


def test_parse_numbers_from_start():
    tests = parse_tests("`a` `true`\n`b` `false` 1\n", 5)
    assert [t.id for t in tests] == [5, 6]
    assert [t.command for t in tests] == ["true", "false"]
    assert tests[1].exit_code == 1


def test_parse_rejects_large_exit_code():
    with pytest.raises(ValueError):
        parse_tests("`x` `true` 999", 1)


def test_passing_test():
    outcome = ShellTest(1, "echo hi", stdout="hi\n").execute()
    assert outcome.passed
    assert outcome == Outcome()


def test_stdin_is_fed():
    assert ShellTest(1, "cat", stdin="abc", stdout="abc").execute().passed


def test_exit_code_mismatch():
    assert ShellTest(1, "exit 3").execute() == Outcome("$?", 0, 3)


def test_stdout_mismatch():
    assert ShellTest(1, "echo hi", stdout="x").execute() == Outcome("stdout", "x", "hi\n")


def test_stderr_mismatch():
    outcome = ShellTest(1, "echo oops >&2").execute()
    assert outcome == Outcome("stderr", "", "oops\n")
    assert not outcome.passed


def test_outcome_text():
    assert "Passed!" in str(Outcome())
    assert "FAILED $?" in str(Outcome("$?", 0, 3))


def test_main_runs_given_files(tmp_path, capsys):
    path = tmp_path / "a.test"
    path.write_text("`greet` `echo hi` out`hi\n`", encoding="utf-8")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("greet#1: ")
    assert "Passed!" in out


def test_main_globs_test_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.test").write_text("`first` `true`", encoding="utf-8")
    (tmp_path / "b.test").write_text("`second` `exit 2`", encoding="utf-8")
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("first#1: ")
    assert lines[1].startswith("second#2: ")
    assert "FAILED $?" in lines[1]


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.test")]) == 1