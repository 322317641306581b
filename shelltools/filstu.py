"""List every file below a directory."""

import sys

from shelltools.tree import read_dir


def collect_files(path):
    """Return the paths of all non-directory entries below ``path``."""
    files = []
    read_dir(path).map(lambda head, children: None, files.append)
    return files


def _debug_list(items):
    if not items:
        return "[]"
    body = "".join(f'    "{_escape(str(item))}",\n' for item in items)
    return f"[\n{body}]"


def _escape(text):
    return text.replace("\\", "\\\\").replace('"', '\\"')


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    root = args[0] if args else "./src"
    try:
        files = collect_files(root)
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    print(_debug_list(files))
    return 0


if __name__ == "__main__":
    sys.exit(main())