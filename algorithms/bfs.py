"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the road graph.  Starts at the given source, or
at the first node of the graph when none is given, and yields a Snapshot
every time an edge leads to a node not seen before.

Nodes outside the start node's component are never touched.
"""

from collections import deque
from typing import Optional

from config import DEFAULT_DELAY_MS
from algorithms.common import resolve_start
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Graph


def bfs(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
) -> SnapshotStream:
    """
    Args:
        graph    : The graph to walk.
        source   : Start node id (optional).
        sink     : Ignored; accepted so every producer shares one signature.
        delay_ms : Pacing hint stamped on each Snapshot.

    Yields:
        Snapshot – one per newly discovered edge.
    """
    start = resolve_start(graph, source)
    if start is None:
        return Snapshot()

    sb    = SnapshotBuilder()
    queue = deque([start])
    seen  = {start}

    while queue:
        node_id = queue.popleft()
        for edge in graph.edges_from(node_id):
            if edge.target in seen:
                continue
            seen.add(edge.target)
            queue.append(edge.target)
            sb.visit_edge(edge)
            yield sb.build(delay_ms)

    return sb.build(delay_ms)
