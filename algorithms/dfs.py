"""
dfs.py — Depth-First Search
============================
Generator-based DFS with an explicit stack.

Each stack frame is (node_id, iterator over its outgoing edges).  The top
frame advances to its next unseen neighbour, which is pushed and explored
before any sibling; an exhausted frame is popped (backtrack).

Yields a Snapshot every time an edge leads to a node not seen before.
"""

from typing import Iterator, List, Optional, Tuple

from config import DEFAULT_DELAY_MS
from algorithms.common import resolve_start
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Edge, Graph


def dfs(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
) -> SnapshotStream:
    start = resolve_start(graph, source)
    if start is None:
        return Snapshot()

    sb = SnapshotBuilder()
    seen = {start}
    stack: List[Tuple[str, Iterator[Edge]]] = [(start, iter(graph.edges_from(start)))]

    while stack:
        _, pending = stack[-1]
        for edge in pending:
            if edge.target in seen:
                continue
            seen.add(edge.target)
            sb.visit_edge(edge)
            stack.append((edge.target, iter(graph.edges_from(edge.target))))
            yield sb.build(delay_ms)
            break
        else:
            stack.pop()     # every neighbour handled, backtrack

    return sb.build(delay_ms)
