"""Directory trees as nested atoms and branches, with two text renderings."""

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any


@dataclass(frozen=True)
class Atom:
    """A leaf: a file, or anything that is not a directory."""

    value: Any

    def map(self, dir_cb, file_cb):
        return Atom(file_cb(self.value))


@dataclass(frozen=True)
class Branch:
    """A directory holding its children."""

    head: Any
    children: tuple = ()

    def map(self, dir_cb, file_cb):
        """Map heads with ``dir_cb(head, children)`` and leaves with ``file_cb``."""
        head = dir_cb(self.head, self.children)
        return Branch(head, tuple(child.map(dir_cb, file_cb) for child in self.children))


def read_dir(path):
    """Read ``path`` recursively into a tree of :class:`Atom` and :class:`Branch`."""
    path = Path(path)
    if not path.is_dir():
        return Atom(path)
    return Branch(path, tuple(read_dir(child) for child in path.iterdir()))


def _file_name(path):
    name = PurePath(path).name
    return None if name in ("", "..") else name


def _atom_name(path):
    name = _file_name(path)
    if name is None:
        raise ValueError(f"{path} has no file name")
    return name


def _branch_name(path):
    return _file_name(path) or "."


def _tree_lines(entry, pad, segment, out):
    if isinstance(entry, Atom):
        out.append(f"{pad}{_atom_name(entry.value)}\n")
        return
    out.append(f"{pad}{_branch_name(entry.head)}\n")
    last = len(entry.children) - 1
    for idx, child in enumerate(entry.children):
        if idx == last:
            _tree_lines(child, segment + "└──", segment + "   ", out)
        else:
            _tree_lines(child, segment + "├──", segment + "│  ", out)


def render_tree(entry):
    """Render a tree with box-drawing branches, one name per line."""
    out = []
    _tree_lines(entry, "", "", out)
    return "".join(out)


def _path_lines(entry, parent, out):
    if isinstance(entry, Atom):
        out.append(f"{parent}{_atom_name(entry.value)}\n")
        return
    name = _branch_name(entry.head)
    out.append(f"{parent}{name}/\n")
    down = f"{parent}{name}/"
    for child in entry.children:
        _path_lines(child, down, out)


def render_paths(entry):
    """Render every entry as a relative path, directories ending in '/'."""
    out = []
    _path_lines(entry, "", out)
    return "".join(out)