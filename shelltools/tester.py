"""Run shell commands described in ``.test`` files and compare their results."""

import glob
import re
import subprocess
import sys
from dataclasses import dataclass

_PATTERN = re.compile(
    r"(?:`(.*?)`)?\s*`(.*?)`\s*(\d{1,3})?\s*(?:in`((?:.|\n)*?)`)?"
    r"\s*(?:out`((?:.|\n)*?)`)?\s*(?:err`((?:.|\n)*?)`)?"
)


@dataclass(frozen=True)
class Outcome:
    """The result of a test; ``check`` names the failed check, None if passed."""

    check: str | None = None
    expected: object = None
    got: object = None

    @property
    def passed(self):
        return self.check is None

    def __str__(self):
        if self.check is None:
            return "\x1b[92mPassed!\x1b[0m"
        return (
            f"\x1b[91mFAILED {self.check}\x1b[0m expected: {self.expected}, got: {self.got}"
        )


@dataclass(frozen=True)
class ShellTest:
    """A shell command with the input to give it and the results it must produce."""

    id: int
    command: str
    name: str = "Unnamed test"
    exit_code: int = 0
    stdin: str = ""
    stdout: str = ""
    stderr: str = ""

    def execute(self):
        """Run the command with ``/bin/sh`` and compare exit code, stdout and stderr."""
        result = subprocess.run(
            ["/bin/sh", "-c", self.command],
            input=self.stdin.encode("utf-8"),
            capture_output=True,
            check=False,
        )
        status = max(result.returncode, 0)
        stdout = result.stdout.decode("utf-8")
        stderr = result.stderr.decode("utf-8")
        if status != self.exit_code:
            return Outcome("$?", self.exit_code, status & 0xFF)
        if stdout != self.stdout:
            return Outcome("stdout", self.stdout, stdout)
        if stderr != self.stderr:
            return Outcome("stderr", self.stderr, stderr)
        return Outcome()


def _exit_code(text):
    if not text.isascii() or int(text) > 255:
        raise ValueError(f"can't parse int {text!r}")
    return int(text)


def parse_tests(content, start):
    """Parse every test in ``content``, numbering them from ``start``."""
    tests = []
    for test_id, match in enumerate(_PATTERN.finditer(content), start):
        name, command, code, stdin, stdout, stderr = match.groups()
        tests.append(
            ShellTest(
                id=test_id,
                command=command,
                name="Unnamed test" if name is None else name,
                exit_code=0 if code is None else _exit_code(code),
                stdin=stdin or "",
                stdout=stdout or "",
                stderr=stderr or "",
            )
        )
    return tests


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    files = args or sorted(glob.glob("*.test", include_hidden=True))
    tests = []
    try:
        for file_name in files:
            with open(file_name, encoding="utf-8") as handle:
                content = handle.read()
            tests.extend(parse_tests(content, len(tests) + 1))
    except (OSError, ValueError) as error:
        print(error, file=sys.stderr)
        return 1
    try:
        for test in tests:
            print(f"{test.name}#{test.id}: {test.execute()}")
    except (OSError, UnicodeDecodeError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())