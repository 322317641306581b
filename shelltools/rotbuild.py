"""Build a graph from parsed items."""

from dataclasses import dataclass

from shelltools.graph import RotError
from shelltools.rotparse import LinkItem, NodeItem, NodeVecItem, PropsItem

_DOUBLE_PROP = 'Problem building graph: property item followed by property item "{...}{...}"'
_DOUBLE_LINK = 'Problem building graph: link item followed by link item "->->"'


def _with_props(items):
    """Pair each node, node list or link with the properties that follow it."""
    out = []
    previous = PropsItem({})
    for item in [*items, LinkItem()]:
        if isinstance(item, PropsItem):
            if isinstance(previous, PropsItem):
                raise RotError(_DOUBLE_PROP)
            out.append((previous, item.props))
        elif not isinstance(previous, PropsItem):
            out.append((previous, None))
        previous = item
    return out


def _copy(props):
    return None if props is None else dict(props)


@dataclass
class _Pending:
    source: object
    props: dict | None


def _touch(graph, name, props):
    node = graph.make_or_get_node(name)
    if props is not None:
        node.extend(dict(props))
    return node.id


def _targets(entity):
    return [entity.name] if isinstance(entity, NodeItem) else list(entity.names)


def _link(graph, pending, target, props):
    if isinstance(pending.source, NodeItem):
        from_ids = [graph.get_id_by_name(pending.source.name)]
        to_ids = [_touch(graph, name, props) for name in _targets(target)]
    else:
        from_ids = [graph.get_id_by_name(name) for name in pending.source.names]
        if isinstance(target, NodeItem):
            try:
                to_ids = [graph.get_id_by_name(target.name)]
            except RotError:
                to_ids = [graph.new_node(target.name, _copy(props)).id]
        else:
            to_ids = [graph.get_id_by_name(name) for name in target.names]
    for from_id in from_ids:
        for to_id in to_ids:
            graph.link_nodes(from_id, to_id, _copy(pending.props))


def build(graph, items):
    """Add the nodes and links described by ``items`` to ``graph``."""
    pending = None
    last = None
    for entity, props in _with_props(items):
        if isinstance(entity, LinkItem):
            if last is None or isinstance(last, LinkItem):
                raise RotError(_DOUBLE_LINK)
            pending = _Pending(last, props)
        elif pending is None:
            if isinstance(last, LinkItem):
                raise AssertionError("link without a pending source")
            for name in _targets(entity):
                _touch(graph, name, props)
        else:
            _link(graph, pending, entity, props)
            pending = None
        last = entity