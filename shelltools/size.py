"""Sum the sizes of all files below the given paths."""

import os
import sys

from shelltools.tree import read_dir

_KIB = 1024
_MIB = 1024 * 1024
_GIB = 1024 * 1024 * 1024


def total_size(paths):
    """Return the total byte size of every file below ``paths``.

    Entries whose size cannot be read are skipped.
    """
    total = 0

    def add(path):
        nonlocal total
        try:
            total += os.stat(path).st_size
        except OSError:
            pass

    for path in paths:
        read_dir(path).map(lambda head, children: head, add)
    return total


def format_size(count):
    """Format a byte count, switching unit only past ten of the next unit."""
    if count > 10 * _GIB:
        return f"{count / _GIB:.2f}Gib"
    if count > 10 * _MIB:
        return f"{count / _MIB:.2f}Mib"
    if count > 10 * _KIB:
        return f"{count / _KIB:.2f}Kib"
    return f"{count}b"


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        count = total_size(args)
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    print(format_size(count))
    return 0


if __name__ == "__main__":
    sys.exit(main())