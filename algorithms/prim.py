"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows one tree outward from the source (or the graph's first node).  The
heap holds frontier edges keyed by (weight, insertion order); the
lightest edge reaching a node outside the tree is accepted, and that
node's own edges join the frontier.

Components the start node can't reach are never visited.

Yields a Snapshot per accepted edge.
"""

import heapq
import itertools
from typing import List, Optional, Tuple

from config import DEFAULT_DELAY_MS
from algorithms.common import resolve_start
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Edge, Graph


def prim(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
) -> SnapshotStream:
    start = resolve_start(graph, source)
    if start is None:
        return Snapshot()

    order = itertools.count()
    in_tree = {start}
    frontier: List[Tuple[float, int, Edge]] = []
    sb = SnapshotBuilder()

    def push_edges(node_id: str) -> None:
        for edge in graph.edges_from(node_id):
            if edge.target not in in_tree:
                heapq.heappush(frontier, (edge.weight, next(order), edge))

    push_edges(start)
    while frontier:
        _, _, edge = heapq.heappop(frontier)
        if edge.target in in_tree:
            continue
        in_tree.add(edge.target)
        sb.visit_edge(edge)
        push_edges(edge.target)
        yield sb.build(delay_ms)

    return sb.build(delay_ms)
