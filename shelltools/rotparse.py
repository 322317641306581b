"""Tokenise graph descriptions into nodes, node lists, links and properties."""

from dataclasses import dataclass
from enum import Enum

from shelltools.graph import RotError


@dataclass(frozen=True)
class NodeItem:
    name: str


@dataclass(frozen=True)
class NodeVecItem:
    names: tuple

    def __post_init__(self):
        object.__setattr__(self, "names", tuple(self.names))


@dataclass(frozen=True)
class PropsItem:
    props: dict


@dataclass(frozen=True)
class LinkItem:
    pass


class ParserState(Enum):
    NOTHING = "Nothing"
    ON_NODE = "OnNode"
    ON_NODE_VEC = "OnNodeVec"
    ON_NODE_VEC_END = "OnNodeVecEnd"
    ON_LINK_END = "OnLinkEnd"
    ON_LINK = "OnLink"
    ON_PROP = "OnProp"
    ON_COMMENT = "OnComment"


_S = ParserState
_IDLE = (_S.NOTHING, _S.ON_LINK_END, _S.ON_NODE_VEC_END)
_ERR = "Problem parsing .rot file\n"


def parse(text):
    """Split ``text`` into items; a name is only complete at '-', '{' or a newline."""
    items = []
    state = _S.NOTHING
    buffer = ""
    names = []
    for ch in text:
        if state in _IDLE and ch in " \n\t":
            continue
        if state in _IDLE and ch == "#":
            state = _S.ON_COMMENT
        elif state is _S.ON_COMMENT:
            if ch == "\n":
                state = _S.NOTHING
        elif state in _IDLE and ch == "[":
            state = _S.ON_NODE_VEC
        elif state is _S.ON_NODE_VEC and ch == ",":
            names.append(buffer)
            buffer = ""
        elif state is _S.ON_NODE_VEC and ch == "]":
            if buffer:
                names.append(buffer)
            items.append(NodeVecItem(names))
            state = _S.ON_NODE_VEC_END
            buffer = ""
            names = []
        elif state in (_S.ON_NODE_VEC_END, _S.NOTHING) and ch == "-":
            state = _S.ON_LINK
        elif state is _S.ON_NODE and ch == "-":
            items.append(NodeItem(buffer))
            state = _S.ON_LINK
            buffer = ""
        elif state is _S.ON_LINK and ch == ">":
            items.append(LinkItem())
            state = _S.ON_LINK_END
        elif state is _S.ON_NODE and ch == "\n":
            items.append(NodeItem(buffer))
            state = _S.NOTHING
            buffer = ""
        elif state in (_S.ON_LINK_END, _S.ON_NODE_VEC_END) and ch == "{":
            state = _S.ON_PROP
            buffer = ""
        elif state is _S.ON_NODE and ch == "{":
            items.append(NodeItem(buffer))
            state = _S.ON_PROP
            buffer = ""
        elif state is _S.ON_PROP and ch == "}":
            items.append(PropsItem(parse_props(buffer)))
            state = _S.NOTHING
            buffer = ""
        elif (state is _S.ON_NODE_VEC and ch == "{") or (state is _S.ON_NODE and ch == ","):
            raise RotError(f"{_ERR}Ilegal char for name | char: {ch} buffer: {buffer}")
        elif state is _S.ON_LINK:
            raise RotError(f"{_ERR}Ilegal syntax on node link {ch}")
        elif state in _IDLE:
            state = _S.ON_NODE
            buffer += ch
        else:
            buffer += ch
    if state in (_S.ON_NODE, _S.NOTHING, _S.ON_NODE_VEC_END, _S.ON_LINK_END):
        return items
    raise RotError(f"{_ERR}Unclosed State {state.value}")


class _PropState(Enum):
    ON_KEY = 1
    ON_VALUE = 2
    SHOULD_VALUE = 3
    SHOULD_KEY = 4


def parse_props(text):
    """Parse ``key: "value", ...`` into a dict."""
    P = _PropState
    items = {}
    state = P.SHOULD_KEY
    buffer = ""
    key = ""
    for ch in text:
        if state is P.ON_KEY and ch == ":":
            key = buffer
            buffer = ""
            state = P.SHOULD_VALUE
        elif state in (P.SHOULD_VALUE, P.SHOULD_KEY) and ch in " \t\n":
            continue
        elif state is P.SHOULD_VALUE and ch == '"':
            state = P.ON_VALUE
        elif state is P.SHOULD_VALUE:
            raise RotError(
                f"{_ERR}Key {buffer} followed by ilegal char {buffer}, "
                "expecting either '\"' or whitespace"
            )
        elif state is P.ON_VALUE and ch == '"':
            items[key] = buffer
            buffer = ""
            key = ""
            state = P.SHOULD_KEY
        elif state is P.SHOULD_KEY and ch == ",":
            continue
        elif state is P.SHOULD_KEY:
            buffer += ch
            state = P.ON_KEY
        else:
            buffer += ch
    if key and buffer:
        items[key] = buffer
    elif key:
        raise RotError(f"{_ERR}Property key without value {key}")
    elif buffer:
        raise RotError(f"Problem in parsing .rot code\nValue: {buffer} missing a key")
    return items