import pytest

from shelltools.graph import Graph, RotError


def test_new_node_ids_index_nodes():
    graph = Graph()
    first = graph.new_node("a", None)
    second = graph.new_node("b", {"k": "v"})
    assert graph.get_node_by_id(first.id) is first
    assert graph.get_node_by_id(second.id) is second
    assert graph.get_id_by_name("b") == second.id
    assert second.props == {"k": "v"}


def test_new_node_twice_is_an_error():
    graph = Graph()
    graph.new_node("a", None)
    with pytest.raises(RotError, match="Tried to overwrite node a"):
        graph.new_node("a", None)


def test_missing_name():
    with pytest.raises(RotError, match="No such node named ghost"):
        Graph().get_id_by_name("ghost")


def test_missing_node_id():
    graph = Graph()
    graph.new_node("a", None)
    with pytest.raises(RotError, match="No such node #5"):
        graph.get_node_by_id(5)
    with pytest.raises(RotError):
        graph.get_node_by_id(-1)


def test_missing_link_id():
    with pytest.raises(RotError, match="No such link #0"):
        Graph().get_link_by_id(0)


def test_make_or_get_returns_existing():
    graph = Graph()
    node = graph.make_or_get_node("x")
    assert graph.make_or_get_node("x") is node
    assert len(graph.nodes) == 1
    assert node.props is None


def test_link_nodes_records_both_ends():
    graph = Graph()
    a = graph.new_node("a", None)
    b = graph.new_node("b", None)
    link = graph.link_nodes(a.id, b.id, {"w": "1"})
    assert graph.get_link_by_id(link.id) is link
    assert link.id in a.links
    assert link.id in b.back_links
    assert link.id not in a.back_links
    assert (link.from_node_id, link.to_node_id) == (a.id, b.id)
    assert link.props == {"w": "1"}


def test_link_to_missing_node_fails():
    graph = Graph()
    a = graph.new_node("a", None)
    with pytest.raises(RotError, match="No such node"):
        graph.link_nodes(a.id, 9, None)


def test_extend_merges_with_new_values_winning():
    graph = Graph()
    node = graph.new_node("a", None)
    node.extend({"a": "1"})
    node.extend({"b": "2", "a": "3"})
    assert node.props == {"a": "3", "b": "2"}


def test_extend_prop_returns_node():
    graph = Graph()
    node = graph.new_node("a", {"x": "1"})
    result = graph.extend_prop(node.id, {"y": "2"})
    assert result is node
    assert result.props == {"x": "1", "y": "2"}