"""Recursively list directories as relative paths."""

import sys

from shelltools.tree import read_dir, render_paths


def list_paths(paths):
    """Render every given path recursively; the current directory if none."""
    paths = list(paths) or ["."]
    return "".join(render_paths(read_dir(path)) for path in paths)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        text = list_paths(args)
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    try:
        sys.stdout.write(text)
        sys.stdout.flush()
    except BrokenPipeError:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())