"""Keep only the input lines that match a tree of text filters."""

import fnmatch
import re
import sys
from dataclasses import dataclass, field
from enum import Enum

HELP = """
usage filter [i](mode)(pattern)

excludes lines that don't fit the patterns with speficied modes

if 'i' is the prefix of a mode the filter will exclude lines the *do* fit the pattern

modes:
=   : equals $pattern
^|s : starts with $pattern
$|z : ends with $pattern
+|h : includes $pattern
-|e : excludes $pattern (shorthand for i+)
.|r : matches regex $pattern
?|g : matches glob $pattern

filters can be grouped with and[ ... ], or[ ... ] or not[ . ] to execute multiple filters at once with logical joinings in them

the only way to print this text is to execute with no arguments
"""

_AND = "and["
_OR = "or["
_NOT = "not["
_CLOSE = "]"


class FilterError(Exception):
    """A filter expression could not be built."""


class Mode(Enum):
    IS = "="
    STARTS = "s"
    ENDS = "z"
    INCLUDES = "h"
    REGEX = "r"
    GLOB = "g"


_MODE_CHARS = {
    "=": Mode.IS,
    "s": Mode.STARTS,
    "^": Mode.STARTS,
    "z": Mode.ENDS,
    "$": Mode.ENDS,
    "h": Mode.INCLUDES,
    "+": Mode.INCLUDES,
    "r": Mode.REGEX,
    ".": Mode.REGEX,
    "g": Mode.GLOB,
    "?": Mode.GLOB,
}


def _check_glob(pattern):
    """Reject glob patterns with unclosed classes or malformed '**'."""
    pos = 0
    length = len(pattern)
    while pos < length:
        char = pattern[pos]
        if char == "[":
            start = pos + 1
            if start < length and pattern[start] == "!":
                start += 1
            close = pattern.find("]", start + 1)
            if start >= length or close == -1:
                raise FilterError(f"invalid range pattern in glob {pattern!r}")
            pos = close + 1
            continue
        if char == "*":
            end = pos
            while end < length and pattern[end] == "*":
                end += 1
            run = end - pos
            if run > 2:
                raise FilterError(
                    f"wildcards are either regular `*` or recursive `**` in glob {pattern!r}"
                )
            if run == 2:
                before_ok = pos == 0 or pattern[pos - 1] == "/"
                after_ok = end == length or pattern[end] == "/"
                if not (before_ok and after_ok):
                    raise FilterError(
                        f"recursive wildcards must form a single path component in glob {pattern!r}"
                    )
            pos = end
            continue
        pos += 1


@dataclass(frozen=True)
class RawFilter:
    """A single text test, optionally inverted."""

    mode: Mode
    pattern: str
    invert: bool = False
    _regex: re.Pattern | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.mode is Mode.REGEX:
            try:
                object.__setattr__(self, "_regex", re.compile(self.pattern))
            except re.error as error:
                raise FilterError(str(error)) from error
        elif self.mode is Mode.GLOB:
            _check_glob(self.pattern)

    def compare(self, text):
        match self.mode:
            case Mode.IS:
                matched = text == self.pattern
            case Mode.STARTS:
                matched = text.startswith(self.pattern)
            case Mode.ENDS:
                matched = text.endswith(self.pattern)
            case Mode.INCLUDES:
                matched = self.pattern in text
            case Mode.REGEX:
                matched = self._regex.search(text) is not None
            case Mode.GLOB:
                matched = fnmatch.fnmatchcase(text, self.pattern)
        return self.invert != matched


@dataclass(frozen=True)
class And:
    """True when every inner filter is."""

    filters: tuple = ()

    def compare(self, text):
        return all(f.compare(text) for f in self.filters)


@dataclass(frozen=True)
class Or:
    """True when any inner filter is."""

    filters: tuple = ()

    def compare(self, text):
        return any(f.compare(text) for f in self.filters)


@dataclass(frozen=True)
class Not:
    """True when the inner filter is false."""

    filter: object

    def compare(self, text):
        return not self.filter.compare(text)


def parse_raw(text):
    """Build a :class:`RawFilter` from ``[i](mode)(pattern)``."""
    if not text:
        raise FilterError("Missing text")
    mode_char, pattern = text[0], text[1:]
    invert = mode_char == "i"
    if invert:
        if not pattern:
            raise FilterError("Missing mode")
        mode_char, pattern = pattern[0], pattern[1:]
    if mode_char in ("e", "-"):
        return RawFilter(Mode.INCLUDES, pattern, not invert)
    mode = _MODE_CHARS.get(mode_char)
    if mode is None:
        raise FilterError(f"No such filter mode {mode_char}")
    return RawFilter(mode, pattern, invert)


def _take(tokens, message):
    token = next(tokens, None)
    if token is None:
        raise FilterError(message)
    return token


def _open(arg, tokens):
    if arg == _NOT:
        return _single(tokens)
    if arg == _AND:
        return And(_group(tokens))
    if arg == _OR:
        return Or(_group(tokens))
    return parse_raw(arg)


def _single(tokens):
    arg = _take(tokens, "Not closing command")
    if arg == _CLOSE:
        raise FilterError("Missing command")
    inner = _open(arg, tokens)
    closer = _take(tokens, "Not closing command")
    if closer != _CLOSE:
        raise FilterError("Too many filters in group")
    return Not(inner)


def _group(tokens):
    filters = []
    while (arg := _take(tokens, "Not closing command")) != _CLOSE:
        filters.append(_open(arg, tokens))
    return tuple(filters)


def parse(args):
    """Parse command-line words into one filter; words after it are ignored."""
    tokens = iter(args)
    arg = _take(tokens, "Missing command")
    if arg == _CLOSE:
        raise FilterError("Closed unopened command")
    return _open(arg, tokens)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(HELP, file=sys.stderr)
        return 0
    try:
        line_filter = parse(args)
    except FilterError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    try:
        for line in sys.stdin:
            if line.endswith("\n"):
                line = line[:-1].removesuffix("\r")
            if line_filter.compare(line):
                sys.stdout.write(line + "\n")
        sys.stdout.flush()
    except BrokenPipeError:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())