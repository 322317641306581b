"""Read template files: directive header, ``#done`` line, then content."""

import re

from shelltools.template import (
    FilenameDirective,
    FormatDirective,
    InputDirective,
    RawDocument,
    SetDirective,
    TemplateError,
    Transform,
    TransformKind,
    _parse_float,
)

_TRANSFORM_SPLIT = re.compile(r"[)\[\]]")
_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_ARITY = {
    TransformKind.IS_SMALLER_THAN: 1,
    TransformKind.IS_GREATER_THAN: 1,
    TransformKind.IS_NUMBER_IN_RANGE: 2,
}
_NEEDS_ARGS = ("#filename", "#input", "#format", "#set")


def _transform(name, args):
    try:
        kind = TransformKind(name)
    except ValueError:
        raise TemplateError(f"Unkown Transformer {name}") from None
    if kind in _ARITY:
        if len(args) != _ARITY[kind]:
            raise TemplateError(f"Transformer {name} was wrong argument count")
        return Transform(kind, tuple(_parse_float(arg) for arg in args))
    if args:
        raise TemplateError(f"Unkown Transformer {name}")
    return Transform(kind)


def parse_transforms(line):
    """Parse transforms such as ``[UpperCaseFirst][IsNumberInRange(1, 5)]``."""
    transforms = []
    for piece in _TRANSFORM_SPLIT.split(line):
        piece = piece.strip()
        if not piece:
            continue
        name, _, arg_text = piece.partition("(")
        args = [arg.strip() for arg in arg_text.split(",") if arg.strip()]
        transforms.append(_transform(name, args))
    return transforms


def parse_directive(line):
    """Parse one header line; return None for comments and shebangs."""
    name, sep, rest = line.partition(" ")
    args = rest if sep else None
    if name in ("#!", "#comment"):
        return None
    if name not in _NEEDS_ARGS:
        raise TemplateError(f"Unkown Directive {name}")
    if args is None:
        raise TemplateError(f"Directive {name} needs more arguments")
    if name == "#filename":
        return FilenameDirective(args)
    if name == "#input":
        var, sep, transforms = args.partition(" ")
        if not sep:
            return InputDirective(args)
        return InputDirective(var, parse_transforms(transforms))
    if name == "#format":
        var, sep, expr = args.partition(" ")
        if not sep:
            raise TemplateError(f"Directive {name} needs more arguments")
        return FormatDirective(var, expr)
    parts = args.split(" ", 2)
    if len(parts) != 3:
        raise TemplateError(f"Directive {name} needs more arguments")
    var, source, transforms = parts
    return SetDirective(var, source, parse_transforms(transforms))


def parse_doc(file_name):
    """Read a template file into its directives and its content."""
    with open(file_name, encoding="utf-8", newline="") as handle:
        text = handle.read()
    lines = iter(_LINE.findall(text))
    directives = []
    for line in lines:
        line = line.strip()
        if line == "#done":
            break
        directive = parse_directive(line)
        if directive is not None:
            directives.append(directive)
    return RawDocument(file_name, directives, "".join(lines))


def parse_args(args):
    """Map ``name:value`` arguments by name and the others by their position."""
    variables = {}
    for position, arg in enumerate(args):
        name, sep, value = arg.partition(":")
        if sep:
            variables[name] = value
        else:
            variables[str(position)] = arg
    return variables