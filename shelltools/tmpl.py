"""Run a project template script with arguments."""

import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

EXEC = "bash"
EXT = ".sh"


class TemplateError(Exception):
    """The template to run could not be determined."""

    def __str__(self):
        return f"tmpl encountered an error: {self.args[0]}"


@dataclass
class ToRun:
    """A template script and the arguments to pass it."""

    name: Path
    args: list = field(default_factory=list)

    def run(self):
        """Run the script and wait for it; return its exit status."""
        return subprocess.run([EXEC, str(self.name), *self.args], check=False).returncode


def template_dir():
    """Return $TMPLRS_DIR, or the templates folder under $HOME."""
    configured = os.environ.get("TMPLRS_DIR")
    if configured is not None:
        return configured
    home = os.environ.get("HOME")
    if home is None:
        raise TemplateError("can't find neither $HOME nor $TMPLRS_DIR in env")
    return os.path.join(home, "Templates/tmpl-rs/")


def gather(args):
    """Build the template to run from a name followed by its arguments."""
    args = list(args)
    if not args:
        raise TemplateError("Must specify template name")
    name, *rest = args
    return ToRun(Path(template_dir()) / (name + EXT), rest)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    prog_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "tmpl"
    try:
        gather(args).run()
    except (TemplateError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        print(f"usage: {prog_name} [project template] [project args]", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())