"""Convert between characters and their numeric code points."""

import re
import sys

_SEPARATORS = re.compile(r"[ ,]")
_CODE_LIST_CHARS = frozenset("0123456789 ,")


def _is_code_list(arg):
    return all(c in _CODE_LIST_CHARS for c in arg)


def _code_points(arg):
    pieces = _SEPARATORS.split(arg)
    if pieces[-1] == "":
        pieces.pop()
    return [int(piece) for piece in pieces]


def _to_char(code):
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        raise ValueError(f"{code} is not a valid code point")
    return chr(code)


def decode_digits(arg, piped):
    """Turn a list of code points separated by spaces or commas into characters.

    Returns the output line without its trailing newline.
    """
    prefix = f"{arg}: " if piped else ""
    return prefix + "".join(f"{_to_char(code)} " for code in _code_points(arg))


def encode_chars(word, piped):
    """Return one line per character of ``word`` giving its code point."""
    if piped:
        return [str(ord(c)) for c in word]
    return [f"{c}: {ord(c)}" for c in word]


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    piped = bool(args) and args[0] == "-1"
    if piped:
        args = args[1:]
    try:
        for arg in args:
            if _is_code_list(arg):
                print(decode_digits(arg, piped))
            else:
                for line in encode_chars(arg, piped):
                    print(line)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())