import pytest

from shelltools.fpwd import ConfigError, Edit, format_path, load_config, main, parse_config


def test_edit_replaces_all_by_default():
    assert Edit("a", "b").apply("aaa") == "bbb"


def test_edit_respects_count():
    assert Edit("a", "b", 1).apply("aaa") == "b" + "aa"


def test_format_path_applies_in_order_and_escape():
    edits = [Edit("/home/u", "~"), Edit("~", "\\e[1m~")]
    assert format_path("/home/u/x", edits) == "\x1b[1m~/x"


def test_format_path_no_edits():
    assert format_path("/tmp", []) == "/tmp"


def test_parse_config_dotted_pairs():
    text = '(((from . "/home/u") (to . "~") (replace_n . 1)) ((from . "x") (to . "y")))'
    assert parse_config(text) == [Edit("/home/u", "~", 1), Edit("x", "y", None)]


def test_parse_config_vector_and_optional_forms():
    text = '#(((from . "a") (to . "b") (replace_n 2)) ((from . "c") (to . "d") (replace_n)))'
    assert parse_config(text) == [Edit("a", "b", 2), Edit("c", "d", None)]


def test_parse_config_string_escapes():
    (edit,) = parse_config(r'(((from . "q\"q") (to . "z")))')
    assert edit.old == 'q"q'


@pytest.mark.parametrize(
    "text",
    [
        '(((from . 1) (to . "b")))',
        '(((to . "b")))',
        '(((from . "a") (to . "b"))',
        '(((from . "a") (to . "b") (replace_n . "x")))',
        '"just a string"',
    ],
)
def test_parse_config_errors(text):
    with pytest.raises(ConfigError):
        parse_config(text)


def test_load_config_default_when_no_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("FPWDRS_CONFIG", str(tmp_path / "missing.lsp"))
    assert load_config() == [Edit(str(tmp_path), "~")]


def test_load_config_reads_file(tmp_path, monkeypatch):
    cfg = tmp_path / "c.lsp"
    cfg.write_text('(((from . "p") (to . "q")))')
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("FPWDRS_CONFIG", str(cfg))
    assert load_config() == [Edit("p", "q")]


def test_load_config_bad_file(tmp_path, monkeypatch):
    cfg = tmp_path / "c.lsp"
    cfg.write_text("(((")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("FPWDRS_CONFIG", str(cfg))
    with pytest.raises(ConfigError):
        load_config()


def test_load_config_needs_home(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(ConfigError):
        load_config()


def test_main_prints_formatted_pwd(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("FPWDRS_CONFIG", str(tmp_path / "none"))
    monkeypatch.setenv("PWD", str(tmp_path / "proj"))
    assert main([]) == 0
    assert capsys.readouterr().out == "~/proj"


def test_main_without_pwd(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("PWD", raising=False)
    assert main([]) == 1
    assert "$PWD" in capsys.readouterr().err