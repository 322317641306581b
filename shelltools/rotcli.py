"""Command that reads graph description files and exports the graph."""

import sys

from shelltools.graph import Graph, RotError
from shelltools.rotbuild import build
from shelltools.rotexport import export_with_dot, to_dot, to_rot
from shelltools.rotparse import parse

_USAGE = "Usage:\n  rot [files.rot] [dot/any dot -T type]"


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE, file=sys.stderr)
        return 2
    *inputs, export = args
    graph = Graph()
    try:
        for input_file in inputs:
            with open(input_file, encoding="utf-8") as handle:
                code = handle.read()
            build(graph, parse(code))
        if export == "rot":
            print(to_rot(graph))
        elif export == "dot":
            print(to_dot(graph))
        else:
            data = export_with_dot(graph, export)
            sys.stdout.flush()
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
    except (RotError, OSError, UnicodeDecodeError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())