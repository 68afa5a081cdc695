"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Works on the component reachable from the source (or the graph's first
node).  That component's edges are sorted by weight, lightest first, and
an edge is accepted iff its endpoints are still in different trees of the
union-find forest.

Each road segment exists in both directions; the second direction always
finds its endpoints already joined and is rejected.

Yields a Snapshot per accepted edge.
"""

from typing import Dict, Iterable, Optional

from config import DEFAULT_DELAY_MS
from algorithms.common import reachable_from, resolve_start
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Graph


# ---------------------------------------------------------------------------
# Union-find (disjoint set forest)
# ---------------------------------------------------------------------------
class UnionFind:
    """Path halving in find(), union by rank in union()."""

    def __init__(self, items: Iterable[str]):
        self.parent: Dict[str, str] = {}
        self.rank:   Dict[str, int] = {}
        for item in items:
            self.parent[item] = item
            self.rank[item] = 0

    def find(self, x: str) -> str:
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, x: str, y: str) -> bool:
        """Join the sets of x and y.  False if they were already one set."""
        x_root = self.find(x)
        y_root = self.find(y)
        if x_root == y_root:
            return False
        if self.rank[x_root] < self.rank[y_root]:
            x_root, y_root = y_root, x_root
        self.parent[y_root] = x_root
        if self.rank[x_root] == self.rank[y_root]:
            self.rank[x_root] += 1
        return True


def kruskal(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
) -> SnapshotStream:
    start = resolve_start(graph, source)
    if start is None:
        return Snapshot()

    reachable, edges = reachable_from(graph, start)
    forest = UnionFind(reachable)
    sb = SnapshotBuilder()

    for edge in sorted(edges, key=lambda e: e.weight):
        if forest.union(edge.source, edge.target):
            sb.visit_edge(edge)
            yield sb.build(delay_ms)

    return sb.build(delay_ms)
