"""
edge.py — Road Edge
===================
One directed, weighted hop of the road graph.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - An undirected road segment becomes TWO edges (forward + backward),
    each built on its own; nothing ties their identities together.
  - Edges are frozen once built.  Algorithms only ever read them.
  - `way` is an opaque reference to the originating way record; the graph
    never looks inside it.
  - A compound edge (output of simplification) lists the raw edge ids it
    replaces in `sub_edges` and carries the full polyline in `geometry`,
    so a renderer can still draw the real street shape.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from roadgraph.geo import Point


def make_edge_id(source: str, target: str) -> str:
    return f"{source}->{target}"


@dataclass(frozen=True, eq=False)
class Edge:
    """
    Attributes:
        id        : "<source>-><target>" (plus a "#n" suffix for parallel compound edges).
        source    : ID of the tail node.
        target    : ID of the head node.
        weight    : Length in metres (sum of the parts for a compound edge).
        way       : Originating way record (opaque).
        geometry  : Ordered points from source to target.
        sub_edges : Raw edge ids this edge stands for, in travel order.
    """

    id:        str
    source:    str
    target:    str
    weight:    float
    way:       Optional[Any]          = None
    geometry:  Tuple[Point, ...]      = ()
    sub_edges: Tuple[str, ...]        = ()

    @property
    def is_compound(self) -> bool:
        return len(self.sub_edges) > 1

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":        self.id,
            "source":    self.source,
            "target":    self.target,
            "weight":    self.weight,
            "way_id":    getattr(self.way, "id", None),
            "geometry":  [p.to_list() for p in self.geometry],
            "sub_edges": list(self.sub_edges),
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight:.1f})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
