from pathlib import PurePath

import pytest

from shelltools.template_cli import main, prepare_file, prepare_main, prepared_name
from shelltools.template_parse import parse_doc


def test_prepared_name_inserts_marker():
    assert prepared_name("notes.txt") == PurePath("notes.rehan.txt")


def test_prepared_name_replaces_last_extension_only():
    assert prepared_name("dir/a.tar.gz").name == "a.tar.rehan.gz"
    assert prepared_name("dir/a.tar.gz").parent == PurePath("dir")


def test_prepared_name_without_extension():
    assert prepared_name("Makefile").name.startswith("Makefile.rehan")


def test_prepare_round_trip(tmp_path):
    original = "int main() { return {0}; }\n{{odd}}\n"
    source = tmp_path / "code.c"
    source.write_text(original, encoding="utf-8")
    dest = prepare_file(source)
    assert str(dest) == str(prepared_name(source))
    assert parse_doc(str(dest)).format({}).content == original


def test_prepare_refuses_to_overwrite(tmp_path):
    source = tmp_path / "a.txt"
    source.write_text("x", encoding="utf-8")
    prepare_file(source)
    with pytest.raises(FileExistsError):
        prepare_file(source)


def test_prepare_main_reports_failure(tmp_path):
    assert prepare_main([str(tmp_path / "absent.txt")]) == 1


def test_prepare_main_success(tmp_path):
    source = tmp_path / "a.txt"
    source.write_text("{}", encoding="utf-8")
    assert prepare_main([str(source)]) == 0
    assert (tmp_path / "a.rehan.txt").exists()


def test_main_writes_document(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    template = tmp_path / "greet.rehan"
    template.write_text(
        "#input name [UpperCaseFirst]\n#filename out-{name}.txt\n#done\nHi {name}!\n",
        encoding="utf-8",
    )
    assert main([str(template), "name:world"]) == 0
    written = (tmp_path / "out-World.txt").read_text(encoding="utf-8")
    assert written == "Hi World!\n"


def test_main_refuses_existing_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    template = tmp_path / "t.rehan"
    template.write_text("#filename out.txt\n#done\nbody\n", encoding="utf-8")
    (tmp_path / "out.txt").write_text("keep", encoding="utf-8")
    assert main([str(template)]) == 1
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "keep"


def test_main_without_file_argument(capsys):
    assert main([]) == 1
    assert "Missing file argument" in capsys.readouterr().err


def test_main_missing_input(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    template = tmp_path / "t.rehan"
    template.write_text("#input name\n#done\n{name}\n", encoding="utf-8")
    assert main([str(template)]) == 1
    assert "Missing input" in capsys.readouterr().err