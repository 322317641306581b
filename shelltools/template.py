"""Template documents driven by directives that read, check and format variables."""

import math
import re
from dataclasses import dataclass, field
from enum import Enum

_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1
_FIELD = re.compile(r"\{\{|\}\}|\{([^{}]*)\}|[{}]")


class TemplateError(Exception):
    """A template could not be parsed, checked or formatted."""


def _show(number):
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _parse_int(text):
    if not text:
        raise TemplateError("cannot parse integer from empty string")
    if not _INT.fullmatch(text):
        raise TemplateError(f"invalid digit found in string {text!r}")
    number = int(text)
    if not _I128_MIN <= number <= _I128_MAX:
        raise TemplateError(f"number {text} too large to fit in target type")
    return number


def _parse_float(text):
    if not text:
        raise TemplateError("cannot parse float from empty string")
    if not _FLOAT.fullmatch(text):
        raise TemplateError(f"invalid float literal {text!r}")
    return float(text)


def upper_case_first(text):
    """Return ``text`` with its first character upper-cased."""
    return text[:1].upper() + text[1:]


def format_string(template, variables):
    """Substitute ``{name}`` and ``{name:spec}`` fields; ``{{`` and ``}}`` escape braces."""

    def replace(match):
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        if match.group(1) is None:
            raise TemplateError(f"Invalid format string: unmatched {token!r}")
        key, _, spec = match.group(1).partition(":")
        if key not in variables:
            raise TemplateError(f"Invalid key: {key}")
        value = variables[key]
        if not spec:
            return value
        try:
            return format(value, spec)
        except ValueError as error:
            raise TemplateError(f"Invalid format for {key}: {error}") from error

    return _FIELD.sub(replace, template)


class TransformKind(Enum):
    UPPER_CASE_FIRST = "UpperCaseFirst"
    ALL_UPPER_CASE = "AllUpperCase"
    ALL_LOWER_CASE = "AllLowerCase"
    IS_INT = "IsInt"
    IS_NUMBER = "IsNumber"
    IS_SMALLER_THAN = "IsSmallerThan"
    IS_GREATER_THAN = "IsGreaterThan"
    IS_NUMBER_IN_RANGE = "IsNumberInRange"


@dataclass(frozen=True)
class Transform:
    """A change or check applied to a variable's value."""

    kind: TransformKind
    args: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def apply(self, value):
        """Return the transformed value, or raise if a check fails."""
        match self.kind:
            case TransformKind.UPPER_CASE_FIRST:
                return upper_case_first(value)
            case TransformKind.ALL_UPPER_CASE:
                return value.upper()
            case TransformKind.ALL_LOWER_CASE:
                return value.lower()
            case TransformKind.IS_INT:
                _parse_int(value)
                return value
            case TransformKind.IS_NUMBER:
                _parse_float(value)
                return value
            case TransformKind.IS_GREATER_THAN:
                (limit,) = self.args
                number = _parse_float(value)
                if number > limit:
                    return value
                raise TemplateError(
                    f"Value {_show(number)} is not greater than {_show(limit)}"
                )
            case TransformKind.IS_SMALLER_THAN:
                (limit,) = self.args
                number = _parse_float(value)
                if number < limit:
                    return value
                raise TemplateError(
                    f"Value {_show(number)} is not smaller than {_show(limit)}"
                )
            case TransformKind.IS_NUMBER_IN_RANGE:
                low, high = self.args
                number = _parse_float(value)
                if low >= number >= high:
                    return value
                raise TemplateError(
                    f"Value {_show(number)} is out range [{_show(low)}, {_show(high)}]"
                )
        raise TemplateError(f"Unkown Transformer {self.kind}")


def _apply_all(transforms, value):
    for transform in transforms:
        value = transform.apply(value)
    return value


@dataclass
class RuntimeDoc:
    """The state that directives change while a document is built."""

    file_name: str
    vars: dict
    input_index: int = 0


@dataclass(frozen=True)
class FilenameDirective:
    """Set the output file name from a format expression."""

    expr: str

    def act(self, doc):
        doc.file_name = format_string(self.expr, doc.vars)


@dataclass(frozen=True)
class InputDirective:
    """Take a named input, or the next positional one, through its transforms."""

    name: str
    transforms: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "transforms", tuple(self.transforms))

    def act(self, doc):
        if self.name in doc.vars:
            value = doc.vars[self.name]
        elif str(doc.input_index) in doc.vars:
            value = doc.vars[str(doc.input_index)]
        else:
            raise TemplateError(f"Missing input {self.name} index {doc.input_index}")
        value = _apply_all(self.transforms, value)
        doc.input_index += 1
        doc.vars[self.name] = value


@dataclass(frozen=True)
class FormatDirective:
    """Define a variable from a format expression."""

    name: str
    expr: str

    def act(self, doc):
        doc.vars[self.name] = format_string(self.expr, doc.vars)


@dataclass(frozen=True)
class SetDirective:
    """Copy a variable through transforms into another."""

    name: str
    source: str
    transforms: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "transforms", tuple(self.transforms))

    def act(self, doc):
        if self.source not in doc.vars:
            raise TemplateError(f"Missing variable {self.source}")
        doc.vars[self.name] = _apply_all(self.transforms, doc.vars[self.source])


@dataclass(frozen=True)
class Document:
    """A finished document: where to write it and what to write."""

    file_name: str
    content: str


@dataclass
class RawDocument:
    """A parsed template before its directives have run."""

    file_name: str
    directives: list = field(default_factory=list)
    actual_content: str = ""

    def format(self, inputs):
        """Run the directives against ``inputs`` and format the content."""
        doc = RuntimeDoc(self.file_name, dict(inputs))
        for directive in self.directives:
            directive.act(doc)
        return Document(doc.file_name, format_string(self.actual_content, doc.vars))