"""A directed graph of named nodes and links, both carrying string properties."""

from dataclasses import dataclass, field


class RotError(Exception):
    """A graph description could not be parsed or built."""


@dataclass
class Node:
    """A named node with optional properties and the ids of its links."""

    id: int
    name: str
    props: dict | None = None
    links: set = field(default_factory=set)
    back_links: set = field(default_factory=set)

    def extend(self, props):
        """Merge ``props`` into the node's properties; new values win."""
        if self.props is None:
            self.props = dict(props)
        else:
            self.props = {**self.props, **props}


@dataclass
class Link:
    """A directed link between two nodes, by id."""

    id: int
    from_node_id: int
    to_node_id: int
    props: dict | None = None


@dataclass
class Graph:
    """Nodes and links, with nodes also reachable by name."""

    nodes: list = field(default_factory=list)
    links: list = field(default_factory=list)
    nodes_by_name: dict = field(default_factory=dict)

    def get_id_by_name(self, name):
        try:
            return self.nodes_by_name[name]
        except KeyError:
            raise RotError(f"No such node named {name}") from None

    def get_node_by_id(self, node_id):
        if not 0 <= node_id < len(self.nodes):
            raise RotError(f"No such node #{node_id}")
        return self.nodes[node_id]

    def get_link_by_id(self, link_id):
        if not 0 <= link_id < len(self.links):
            raise RotError(f"No such link #{link_id}")
        return self.links[link_id]

    def extend_prop(self, node_id, prop):
        """Merge ``prop`` into the properties of the node ``node_id``."""
        node = self.get_node_by_id(node_id)
        node.extend(prop)
        return node

    def link_nodes(self, from_node_id, to_node_id, props):
        """Add a link between two nodes and record it on both of them."""
        link = Link(len(self.links), from_node_id, to_node_id, props)
        self.links.append(link)
        self.get_node_by_id(from_node_id).links.add(link.id)
        self.get_node_by_id(to_node_id).back_links.add(link.id)
        return link

    def make_or_get_node(self, name):
        """Return the node called ``name``, creating it without properties if needed."""
        if name in self.nodes_by_name:
            return self.nodes[self.nodes_by_name[name]]
        return self.new_node(name, None)

    def new_node(self, name, props):
        """Create a node; a node of the same name must not exist yet."""
        if name in self.nodes_by_name:
            raise RotError(f"Tried to overwrite node {name}")
        node = Node(len(self.nodes), name, props)
        self.nodes_by_name[name] = node.id
        self.nodes.append(node)
        return node