"""Print the working directory with configured substitutions applied."""

import os
import re
import sys
from dataclasses import dataclass

_DEFAULT_REPLACE_LIMIT = 999


class ConfigError(Exception):
    """The substitution configuration could not be obtained."""


@dataclass(frozen=True)
class Edit:
    """Replace up to ``count`` occurrences of ``old`` with ``new`` (999 if None)."""

    old: str
    new: str
    count: int | None = None

    def apply(self, path):
        limit = _DEFAULT_REPLACE_LIMIT if self.count is None else self.count
        return path.replace(self.old, self.new, limit)


def format_path(path, edits):
    """Apply every edit in order, then turn each literal ``\\e`` into ESC."""
    for edit in edits:
        path = edit.apply(path)
    return path.replace("\\e", "\x1b")


_LEXEME_PATTERN = re.compile(
    r'(?P<space>\s+|;[^\n]*)'
    r'|(?P<vopen>#\()'
    r'|(?P<open>\()'
    r'|(?P<close>\))'
    r'|(?P<string>"(?:[^"\\]|\\.)*")'
    r'|(?P<atom>[^\s()";]+)'
    r'|(?P<junk>.)',
    re.DOTALL,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


@dataclass(frozen=True)
class _Symbol:
    name: str


@dataclass(frozen=True)
class _Dotted:
    head: list
    tail: object


_DOT = object()


def _unescape(body):
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def _atom(text):
    if text == ".":
        return _DOT
    if re.fullmatch(r"[+-]?\d+", text):
        return int(text)
    if text in ("#nil", "#f"):
        return None if text == "#nil" else False
    if text == "#t":
        return True
    return _Symbol(text)


def _lexemes(text):
    for match in _LEXEME_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind == "space":
            continue
        if kind == "junk":
            raise ConfigError(f"unexpected character {match.group()!r}")
        yield kind, match.group()


class _Reader:
    def __init__(self, text):
        self._items = list(_lexemes(text))
        self._pos = 0

    def _next(self):
        if self._pos >= len(self._items):
            raise ConfigError("unexpected end of input")
        item = self._items[self._pos]
        self._pos += 1
        return item

    def read(self):
        value = self._value()
        if value is _DOT:
            raise ConfigError("unexpected '.'")
        return value

    def finish(self):
        if self._pos != len(self._items):
            raise ConfigError("trailing data after expression")

    def _value(self):
        kind, text = self._next()
        if kind == "string":
            return _unescape(text[1:-1])
        if kind == "atom":
            return _atom(text)
        if kind == "close":
            raise ConfigError("unexpected ')'")
        return self._list(dotted_allowed=kind == "open")

    def _list(self, dotted_allowed):
        items = []
        while True:
            kind = self._items[self._pos][0] if self._pos < len(self._items) else None
            if kind is None:
                raise ConfigError("unclosed list")
            if kind == "close":
                self._pos += 1
                return items
            value = self._value()
            if value is _DOT:
                if not dotted_allowed or not items:
                    raise ConfigError("misplaced '.'")
                tail = self.read()
                if self._next()[0] != "close":
                    raise ConfigError("expected ')' after dotted tail")
                if isinstance(tail, list):
                    return items + tail
                return _Dotted(items, tail)
            items.append(value)


def _key_name(key):
    if isinstance(key, _Symbol):
        return key.name
    if isinstance(key, str):
        return key
    raise ConfigError(f"invalid field name {key!r}")


def _fields(entry):
    if not isinstance(entry, list):
        raise ConfigError("each edit must be a list of fields")
    fields = {}
    for field in entry:
        if isinstance(field, _Dotted) and len(field.head) == 1:
            fields[_key_name(field.head[0])] = field.tail
        elif isinstance(field, list) and field:
            key, *rest = field
            fields[_key_name(key)] = rest[0] if len(rest) == 1 else rest
        else:
            raise ConfigError("each field must be a (name . value) pair")
    return fields


def _count(value):
    if value is None or value == []:
        return None
    if isinstance(value, list) and len(value) == 1:
        value = value[0]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"replace_n must be a non-negative integer, got {value!r}")
    return value


def _text_field(fields, name):
    if name not in fields:
        raise ConfigError(f"missing field {name}")
    value = fields[name]
    if not isinstance(value, str):
        raise ConfigError(f"field {name} must be a string")
    return value


def parse_config(text):
    """Parse a list of edits written as s-expressions.

    Each edit is an association list such as
    ``((from . "/home/me") (to . "~") (replace_n . 1))``.
    """
    reader = _Reader(text)
    entries = reader.read()
    reader.finish()
    if not isinstance(entries, list):
        raise ConfigError("configuration must be a list of edits")
    edits = []
    for entry in entries:
        fields = _fields(entry)
        edits.append(
            Edit(
                _text_field(fields, "from"),
                _text_field(fields, "to"),
                _count(fields.get("replace_n")),
            )
        )
    return edits


def load_config():
    """Load the edits from $FPWDRS_CONFIG or ~/.config/fpwd.lsp.

    Without a readable file, the home directory is replaced by '~'.
    """
    home = os.environ.get("HOME")
    if home is None:
        raise ConfigError("Can't read $HOME")
    filename = os.environ.get("FPWDRS_CONFIG", home + "/.config/fpwd.lsp")
    try:
        with open(filename, encoding="utf-8") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError):
        return [Edit(home, "~")]
    try:
        return parse_config(content)
    except ConfigError as error:
        print(repr(error), file=sys.stderr)
        raise ConfigError("Parse error in ~/.config/fpwd.lsp") from error


def main(argv=None):
    try:
        edits = load_config()
        pwd = os.environ.get("PWD")
        if pwd is None:
            raise ConfigError("Can't find $PWD env variable")
    except ConfigError as error:
        print(f"fpwd ERROR: {error}", file=sys.stderr)
        return 1
    print(format_path(pwd, edits), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())