"""Folders of to-do entries kept in a TOML file, edited from the command line."""

import datetime
import os
import re
import sys
import tomllib
from dataclasses import dataclass, field

import tomli_w


class TodosError(Exception):
    """A fatal problem: missing environment, unreadable files or bad syntax."""


class TodosWarning(Exception):
    """A user error while applying a command."""


def get_file_path():
    """Return $TODOS_RS, or ~/.todos.toml."""
    configured = os.environ.get("TODOS_RS")
    if configured is not None:
        return configured
    home = os.environ.get("HOME")
    if home is None:
        raise TodosError("Can't find neither $HOME nor $TODOS_RS env vars")
    return home + "/.todos.toml"


def get_conf_file_path():
    """Return $TODOS_RS_SCANCONF, or ~/.config/.todos_scanner.toml."""
    configured = os.environ.get("TODOS_RS_SCANCONF")
    if configured is not None:
        return configured
    home = os.environ.get("HOME")
    if home is None:
        raise TodosError("Can't find neither $HOME nor $TODOS_RS env vars")
    return home + "/.config/.todos_scanner.toml"


@dataclass
class Scanner:
    """Regular expressions, by file extension, that find to-do comments."""

    patterns: dict = field(default_factory=dict)

    @classmethod
    def from_config(cls):
        """Read the scanner configuration: a table of extension to regex."""
        path = get_conf_file_path()
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError):
            raise TodosError(f"Can't read scanner config file {path}") from None
        try:
            conf = tomllib.loads(text)
        except tomllib.TOMLDecodeError as error:
            raise TodosError(str(error)) from error
        patterns = {}
        for ext, regex in conf.items():
            if not isinstance(regex, str):
                raise TodosError(f"regex for extension .{ext} must be a string")
            try:
                patterns[ext] = re.compile(regex)
            except re.error as error:
                raise TodosError(str(error)) from error
        return cls(patterns)

    def find_all(self, file_name, content):
        """Return every match in ``content`` of the regex for ``file_name``'s extension."""
        _, sep, ext = file_name.rpartition(".")
        if not sep:
            raise TodosError(f"File missing extension {file_name}")
        regex = self.patterns.get(ext)
        if regex is None:
            raise TodosError(f"Missing regex for extension .{ext}")
        return [match.group(0) for match in regex.finditer(content)]


@dataclass(frozen=True)
class Scan:
    files: tuple

    def __post_init__(self):
        object.__setattr__(self, "files", tuple(self.files))


@dataclass(frozen=True)
class OpenFile:
    file_name: str


@dataclass(frozen=True)
class MakeFolder:
    name: str


@dataclass(frozen=True)
class ListFolder:
    name: str


@dataclass(frozen=True)
class Add:
    folder: str
    value: str
    meta: str | None = None


@dataclass(frozen=True)
class Delete:
    folder: str
    value: str


@dataclass(frozen=True)
class DeleteFolder:
    name: str


@dataclass(frozen=True)
class ForceDeleteFolder:
    name: str


def _now():
    return datetime.datetime.now().astimezone()


@dataclass
class Entry:
    """One to-do item with optional metadata and its creation time."""

    value: str
    meta: str | None = None
    created: datetime.datetime = field(default_factory=_now)

    def to_table(self):
        table = {"value": self.value}
        if self.meta is not None:
            table["meta"] = self.meta
        table["created"] = self.created.isoformat()
        return table

    @classmethod
    def from_table(cls, table):
        if not isinstance(table, dict):
            raise TodosError("each entry must be a table")
        value = table.get("value")
        if not isinstance(value, str):
            raise TodosError("missing field `value`")
        meta = table.get("meta")
        if meta is not None and not isinstance(meta, str):
            raise TodosError("field `meta` must be a string")
        created = table.get("created")
        if isinstance(created, str):
            try:
                created = datetime.datetime.fromisoformat(created)
            except ValueError as error:
                raise TodosError(str(error)) from error
        if not isinstance(created, datetime.datetime):
            raise TodosError("missing field `created`")
        return cls(value, meta, created)


def _read_data(path):
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError):
        text = ""
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as error:
        raise TodosError(str(error)) from error
    data = {}
    for folder, entries in raw.items():
        if not isinstance(entries, list):
            raise TodosError(f"folder `{folder}` must be an array of entries")
        data[folder] = [Entry.from_table(e) for e in entries]
    return data


@dataclass
class AppData:
    """The folders of entries and the file they are kept in."""

    file: str
    data: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path):
        """Load ``path``; a missing or unreadable file gives no folders."""
        return cls(path, _read_data(path))

    def _folder(self, name):
        folder = self.data.get(name)
        if folder is None:
            raise TodosWarning(f"folder '{name}' not found")
        return folder

    def _scan(self, files):
        scanner = Scanner.from_config()
        try:
            found = []
            for file_name in files:
                with open(file_name, encoding="utf-8") as handle:
                    content = handle.read()
                found.extend(scanner.find_all(file_name, content))
        except (OSError, UnicodeDecodeError, TodosError) as error:
            print(error)
            return
        for match in found:
            print(match)

    def apply(self, command):
        """Apply one command; raise :class:`TodosWarning` on user errors."""
        match command:
            case OpenFile(file_name=file_name):
                self.save()
                self.data = _read_data(file_name)
                self.file = file_name
            case MakeFolder(name=name):
                self.data[name] = []
            case ListFolder():
                pass
            case Add(folder=folder, value=value, meta=meta):
                self._folder(folder).append(Entry(value, meta))
            case Delete(folder=folder, value=value):
                entries = self._folder(folder)
                pos = next((i for i, e in enumerate(entries) if e.value == value), None)
                if pos is None:
                    raise TodosWarning(f"value '{value}' not found in folder '{folder}'")
                last = entries.pop()
                if pos < len(entries):
                    entries[pos] = last
            case DeleteFolder(name=name):
                if self._folder(name):
                    raise TodosWarning(
                        f"folder '{name}' not empty, use -Df to force deletion"
                    )
                del self.data[name]
            case ForceDeleteFolder(name=name):
                self._folder(name)
                del self.data[name]
            case Scan(files=files):
                self._scan(files)
            case _:
                raise TodosError(f"unsupported command {command!r}")

    def markdown(self):
        """List every folder as a heading followed by its entries."""
        parts = []
        for name, entries in self.data.items():
            parts.append(f"# {name}\n")
            parts.extend(f"- {entry.value}\n" for entry in entries)
            parts.append("\n")
        return "".join(parts)

    def save(self):
        document = {
            name: [entry.to_table() for entry in entries]
            for name, entries in self.data.items()
        }
        try:
            with open(self.file, "w", encoding="utf-8") as handle:
                handle.write(tomli_w.dumps(document))
        except OSError as error:
            raise TodosError(str(error)) from error


def _next(words, for_cmd):
    try:
        return next(words)
    except StopIteration:
        raise TodosError(f"Malformed command, {for_cmd} needs more values") from None


def parse_args(args):
    """Turn command-line words into commands."""
    words = list(args)
    commands = []
    pos = 0

    def take(for_cmd):
        nonlocal pos
        if pos >= len(words):
            raise TodosError(f"Malformed command, {for_cmd} needs more values")
        word = words[pos]
        pos += 1
        return word

    single = {
        "--file": OpenFile,
        "-f": MakeFolder,
        "-l": ListFolder,
        "-df": DeleteFolder,
        "-Df": ForceDeleteFolder,
    }
    while pos < len(words):
        cmd = words[pos]
        pos += 1
        if cmd == "--scan":
            files = []
            while pos < len(words) and not words[pos].startswith("-"):
                files.append(words[pos])
                pos += 1
            commands.append(Scan(files))
        elif cmd in single:
            commands.append(single[cmd](take(cmd)))
        elif cmd == "-a":
            folder = take(cmd)
            value = take(cmd)
            meta = None
            if pos < len(words) and words[pos].startswith("#"):
                meta = words[pos]
                pos += 1
            commands.append(Add(folder, value, meta))
        elif cmd == "-d":
            folder = take(cmd)
            commands.append(Delete(folder, take(cmd)))
        elif cmd.startswith("-"):
            raise TodosError(f"No such command {cmd}")
        else:
            raise TodosError(
                f"Malformed command command previous to '{cmd}' didn't need this value"
            )
    return commands


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        app_data = AppData.from_file(get_file_path())
        commands = parse_args(args)
        for command in commands:
            try:
                app_data.apply(command)
            except (TodosWarning, TodosError, OSError) as user_error:
                app_data.save()
                print(f"[WARNING] {user_error}", file=sys.stderr)
                print("Halting early because of user error", file=sys.stderr)
                return 2
        app_data.save()
    except (TodosError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    print(app_data.markdown())
    return 0


if __name__ == "__main__":
    sys.exit(main())