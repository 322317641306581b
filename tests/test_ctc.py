import pytest

from shelltools.ctc import decode_digits, encode_chars, main


def test_encode_unpiped_format():
    assert encode_chars("A", False) == ["A: 65"]


def test_encode_piped_is_code_points_only():
    lines = encode_chars("abc", True)
    assert lines == [str(ord(c)) for c in "abc"]


@pytest.mark.parametrize("word", ["Hello", "xyz", "ü→"])
def test_round_trip(word):
    codes = " ".join(encode_chars(word, True))
    assert decode_digits(codes, False).split() == list(word)


def test_commas_and_spaces_are_separators():
    assert decode_digits("72,105", False) == decode_digits("72 105", False)


def test_trailing_separator_ignored():
    assert decode_digits("65,", False) == decode_digits("65", False)


def test_piped_prefixes_argument():
    line = decode_digits("65", True)
    assert line.startswith("65: ")
    assert line[len("65: "):] == decode_digits("65", False)


def test_empty_code_list_gives_empty_line():
    assert decode_digits("", False) == ""


def test_empty_piece_raises():
    with pytest.raises(ValueError):
        decode_digits("1,,2", False)


@pytest.mark.parametrize("arg", ["1114112", "55296"])
def test_invalid_code_point_raises(arg):
    with pytest.raises(ValueError):
        decode_digits(arg, False)


def test_main_mixed_arguments(capsys):
    assert main(["-1", "A", "66"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == encode_chars("A", True) + [decode_digits("66", True)]


def test_main_invalid_returns_error(capsys):
    assert main(["1,,2"]) == 1
    assert capsys.readouterr().err