import pytest

from shelltools.runner import Config, RunnerError, help_text, main, read_configs


def test_from_text_parses_settings():
    config = Config.from_text("proj]\nhas=a:b\nfindAny=c:d\nexec=make\nenv=MODE fast")
    assert config.name == "proj"
    assert config.has == [["a", "b"]]
    assert config.find_any == ["c", "d"]
    assert config.commands == ["make"]
    assert config.env == [("MODE", "fast")]


def test_line_without_equals():
    with pytest.raises(RunnerError, match="Can't read scope setter"):
        Config.from_text("x]\nnoequals")


def test_unknown_setting():
    with pytest.raises(RunnerError, match='Unknown name "bogus"'):
        Config.from_text("x]\nbogus=1")


def test_env_needs_space():
    with pytest.raises(RunnerError, match="must contain space"):
        Config("x").append("env", "NOSPACE")


def test_read_configs_splits_scopes():
    configs = read_configs("[first]\nexec=one\n[second]\nexec=two\n")
    assert [c.name for c in configs] == ["first", "second"]
    assert configs[1].commands == ["two"]


def test_find_returns_first_existing(tmp_path):
    present = tmp_path / "here"
    present.write_text("")
    config = Config("x", find_any=[str(tmp_path / "missing"), str(present)])
    assert config.find() == str(present)


def test_find_raises_when_none_exists(tmp_path):
    config = Config("x", find_any=[str(tmp_path / "missing")])
    with pytest.raises(RunnerError, match="Can't find single findAny file"):
        config.find()


def test_verify_has_groups(tmp_path):
    present = tmp_path / "here"
    present.write_text("")
    assert Config("x", has=[[str(tmp_path / "no"), str(present)]]).verify(False) is True
    assert Config("x", has=[[str(tmp_path / "no")]]).verify(False) is False


def test_verify_raises_on_missing_find_any(tmp_path):
    config = Config("x", find_any=[str(tmp_path / "no")])
    with pytest.raises(RunnerError):
        config.verify(True)


def test_execute_exports_found_and_env(tmp_path):
    found = tmp_path / "found.txt"
    found.write_text("")
    out = tmp_path / "out"
    config = Config(
        "x",
        find_any=[str(found)],
        commands=[f'printf "%s|%s" "$found" "$EXTRA" > "{out}"'],
        env=[("EXTRA", "value")],
    )
    config.execute()
    assert out.read_text() == f"{found}|value"


def test_execute_env_overrides_found(tmp_path):
    found = tmp_path / "found.txt"
    found.write_text("")
    out = tmp_path / "out"
    config = Config(
        "x",
        find_any=[str(found)],
        commands=[f'printf "%s" "$found" > "{out}"'],
        env=[("found", "override")],
    )
    config.execute()
    assert out.read_text() == "override"


def test_main_verify_prints_scope(tmp_path, capsys):
    present = tmp_path / "here"
    present.write_text("")
    cfg = tmp_path / "runner.cfg"
    cfg.write_text(
        f"[first]\nhas={tmp_path / 'absent'}\n[second]\nhas={present}\nexec=true\n"
    )
    assert main(["-v", "-c", str(cfg)]) == 0
    assert capsys.readouterr().out == "Found scope second\n"


def test_main_no_matching_scope(tmp_path, capsys):
    cfg = tmp_path / "runner.cfg"
    cfg.write_text(f"[only]\nhas={tmp_path / 'absent'}\n")
    assert main(["--config", str(cfg)]) == 1
    assert "Can't find single run scope" in capsys.readouterr().err


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert capsys.readouterr().out == help_text(None) + "\n"
    assert help_text(None).startswith("usage $ run")


def test_main_unknown_argument(capsys):
    assert main(["--bogus"]) == 1
    assert "Unknown argument '--bogus'" in capsys.readouterr().err


def test_main_config_needs_value(capsys):
    assert main(["-c"]) == 1
    assert "--config must provide config file" in capsys.readouterr().err