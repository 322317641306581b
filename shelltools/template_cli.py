"""Commands that fill a template file, and that turn a file into a template."""

import sys
from pathlib import PurePath

from shelltools.template import TemplateError
from shelltools.template_parse import parse_args, parse_doc


def prepared_name(path):
    """Return the template name for ``path``: ``notes.txt`` becomes ``notes.rehan.txt``."""
    path = PurePath(path)
    extension = path.suffix[1:]
    return path.with_name(f"{path.stem}.rehan.{extension}")


def prepare_file(path):
    """Write a template holding ``path``'s text verbatim; return its path."""
    with open(path, encoding="utf-8", newline="") as handle:
        content = handle.read()
    dest = prepared_name(path)
    escaped = content.replace("{", "{{").replace("}", "}}")
    with open(dest, "x", encoding="utf-8", newline="") as out:
        out.write("#done\n")
        out.write(escaped)
    return dest


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if not args:
            raise TemplateError("Missing file argument")
        file_name, *rest = args
        doc = parse_doc(file_name).format(parse_args(rest))
        with open(doc.file_name, "x", encoding="utf-8", newline="") as out:
            out.write(doc.content)
    except (TemplateError, OSError, UnicodeDecodeError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


def prepare_main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        for path in args:
            prepare_file(path)
    except (OSError, UnicodeDecodeError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())