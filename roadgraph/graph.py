"""
graph.py — Road Graph Container
================================
Single source of truth for a road network.  Algorithms and the renderer
both talk to this object.

Responsibilities:
  1. Node / edge registration while the builder runs   (add / ensure / get)
  2. Adjacency queries                                  (edges_from, degree, …)
  3. Freezing: once built, the graph is read-only
  4. Integrity check                                    (validate)
  5. Serialisation for the renderer                     (to_dict)

Design decisions:
  - Nodes live in an insertion-ordered dict keyed by id, edges in a flat
    list plus an id index for O(1) lookup.
  - Adjacency is the node's own `edges` list, so neighbour queries are
    O(degree), not O(E).
  - Edge ids are unique per graph.  Registering an id twice is a no-op
    that hands back the edge already stored.
  - A simplified graph keeps a reference to the raw graph it came from in
    `raw`; a raw graph has `raw = None`.
"""

from typing import Dict, Iterator, List, Optional

from roadgraph.edge import Edge
from roadgraph.geo import Point
from roadgraph.node import Node


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class GraphError(Exception):
    """Base class for graph failures that are programming errors."""


class GraphIntegrityError(GraphError):
    """An edge or adjacency entry points at something the graph doesn't hold."""


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
class Graph:
    """
    Attributes:
        nodes  : {node_id: Node}
        edges  : [Edge, …] in registration order
        raw    : the pre-simplification Graph, or None
    """

    def __init__(self, raw: Optional["Graph"] = None):
        self.nodes:   Dict[str, Node] = {}
        self.edges:   List[Edge]      = []
        self.raw:     Optional[Graph] = raw
        self._by_id:  Dict[str, Edge] = {}
        self._frozen: bool            = False

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self._check_mutable()
        self.nodes.setdefault(node.id, node)
        return self.nodes[node.id]

    def ensure_node(self, node_id: str, point: Point) -> Node:
        """Return the node with this id, creating it at `point` if new."""
        node = self.nodes.get(node_id)
        if node is None:
            node = self.add_node(Node(node_id, point.lat, point.lon))
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id is not None and node_id in self.nodes

    def first_node_id(self) -> Optional[str]:
        return next(iter(self.nodes), None)

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self._check_mutable()
        existing = self._by_id.get(edge.id)
        if existing is not None:
            return existing
        tail = self.nodes.get(edge.source)
        if tail is None or edge.target not in self.nodes:
            raise GraphIntegrityError(
                f"Edge {edge.id} references a node that is not in the graph"
            )
        self.edges.append(edge)
        self._by_id[edge.id] = edge
        tail.edges.append(edge)
        return edge

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._by_id.get(edge_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._by_id

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def edges_from(self, node_id: str) -> List[Edge]:
        node = self.nodes.get(node_id)
        return node.edges if node is not None else []

    def degree(self, node_id: str) -> int:
        return len(self.edges_from(node_id))

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def iter_edges(self, edge_ids) -> Iterator[Edge]:
        """Edges for the given ids, silently skipping unknown ones."""
        for eid in edge_ids:
            edge = self._by_id.get(eid)
            if edge is not None:
                yield edge

    # ==================================================================
    # FREEZE / INTEGRITY
    # ==================================================================
    def freeze(self) -> "Graph":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def validate(self) -> None:
        """Raise GraphIntegrityError if the structural invariants don't hold."""
        for edge in self.edges:
            if edge.source not in self.nodes or edge.target not in self.nodes:
                raise GraphIntegrityError(f"Edge {edge.id} has a dangling endpoint")
        for node in self.nodes.values():
            for edge in node.edges:
                if edge.source != node.id:
                    raise GraphIntegrityError(
                        f"Node {node.id} lists edge {edge.id} that starts elsewhere"
                    )
                if self._by_id.get(edge.id) is not edge:
                    raise GraphIntegrityError(
                        f"Node {node.id} lists edge {edge.id} unknown to the graph"
                    )
        if sum(len(n.edges) for n in self.nodes.values()) != len(self.edges):
            raise GraphIntegrityError("Edge list and adjacency lists disagree")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphError("Graph is frozen; build a new one instead")

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes":      [n.to_dict() for n in self.nodes.values()],
            "edges":      [e.to_dict() for e in self.edges],
            "simplified": self.raw is not None,
        }

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, simplified={self.raw is not None})"
