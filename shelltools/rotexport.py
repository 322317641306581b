"""Write a graph out as graph text, as dot, or through the graphviz ``dot`` tool."""

import subprocess

from shelltools.graph import RotError

_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
}


def _quote(text):
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch != " " and not ch.isprintable():
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _rot_props(props):
    if props is None:
        return ""
    return "{" + ", ".join(f"{_quote(k)}: {_quote(v)}" for k, v in props.items()) + "}"


def _dot_props(props):
    if props is None:
        return ""
    return " [" + "".join(f"{k}={v}," for k, v in props.items()) + "]"


def _endpoints(graph, link):
    source = graph.get_node_by_id(link.from_node_id).name
    target = graph.get_node_by_id(link.to_node_id).name
    return source, target


def to_rot(graph):
    """Render nodes then links, one per line, with properties as a quoted map."""
    lines = [f"{node.name}{_rot_props(node.props)}\n" for node in graph.nodes]
    for link in graph.links:
        source, target = _endpoints(graph, link)
        lines.append(f"{source}->{target}{_rot_props(link.props)}\n")
    return "".join(lines)


def to_dot(graph):
    """Render the graph as a graphviz digraph."""
    parts = ["digraph RotGraph {"]
    parts.extend(f"\t{node.name}{_dot_props(node.props)}\n" for node in graph.nodes)
    for link in graph.links:
        source, target = _endpoints(graph, link)
        parts.append(f"\t{source}->{target}{_dot_props(link.props)}\n")
    parts.append("}")
    return "".join(parts)


def export_with_dot(graph, fmt):
    """Feed the dot rendering to ``dot -T<fmt>`` and return what it prints."""
    script = to_dot(graph).encode("utf-8")
    try:
        result = subprocess.run(
            ["dot", f"-T{fmt}"],
            input=script,
            stdout=subprocess.PIPE,
            check=False,
        )
    except OSError as error:
        raise RotError(str(error)) from error
    return result.stdout