"""One-line coloured summary of ``git status``."""

import subprocess
import sys

_BRANCH_PREFIX = "On branch "

_MARKERS = (
    ("working tree clean", "\x1b[0;32mü"),
    ("Untracked files", "\x1b[0;31m+"),
    ("Changes to be committed", "\x1b[0;31m→"),
    ("Your branch is ahead", "\x1b[5;34m↑"),
    ("behind", "\x1b[5;91m↓"),
    ("diverged", "\x1b[5;91m↓\x1b[5;34m↑"),
    ("Changes not staged for commit", "\x1b[0;31m*"),
)


def summarize(output):
    """Build the coloured summary from the text of ``git status``."""
    lines = output.splitlines()
    if not lines:
        raise ValueError("expected `git status` to output a line")
    first = lines[0]
    if not first.startswith(_BRANCH_PREFIX):
        raise ValueError("expected first line of `git status`")
    branch = first[len(_BRANCH_PREFIX):]
    marks = "".join(mark for phrase, mark in _MARKERS if phrase in output)
    return f"\x1b[1;95m{branch} {marks}\x1b[0m"


def main(argv=None):
    try:
        result = subprocess.run(["git", "status"], capture_output=True, check=False)
    except OSError:
        print("not in git repo", file=sys.stderr)
        return 1
    try:
        text = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        print("can't convert output to UTF-8", file=sys.stderr)
        return 1
    try:
        summary = summarize(text)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    print(summary, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())