from shelltools.size import format_size, main, total_size


def test_total_size_sums_files(tmp_path):
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / "a").write_bytes(b"x" * 10)
    (tmp_path / "b").write_bytes(b"y" * 5)
    assert total_size([tmp_path]) == 15


def test_total_size_multiple_paths(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"12")
    b.write_bytes(b"345")
    assert total_size([a, b]) == total_size([a]) + total_size([b])


def test_total_size_missing_path_ignored(tmp_path):
    assert total_size([tmp_path / "missing"]) == 0


def test_format_small_counts_in_bytes():
    assert format_size(5) == "5b"
    assert format_size(10 * 1024) == "10240b"


def test_format_units():
    assert format_size(20 * 1024) == "20.00Kib"
    assert format_size(11 * 1024 * 1024).endswith("Mib")
    assert format_size(11 * 1024 * 1024 * 1024).endswith("Gib")


def test_main_prints(tmp_path, capsys):
    (tmp_path / "f").write_bytes(b"abc")
    assert main([str(tmp_path)]) == 0
    assert capsys.readouterr().out == format_size(3) + "\n"