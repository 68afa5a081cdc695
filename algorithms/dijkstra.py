"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Phase 1 (EXPLORE) yields a Snapshot on every relaxation that improves a
tentative distance.  Phase 2 (PATH) starts over from empty sets and
replays the shortest path from sink back to source at half speed.

Heap entries are (distance, node_id).  There is no decrease-key: improved
nodes are pushed again and the stale entries are thrown away when popped,
using the `finalized` set.  The search stops as soon as the sink is
finalized.

Correctness note: Dijkstra requires non-negative weights, which road
lengths always are.
"""

import heapq
from typing import Dict, List, Optional, Set, Tuple

from config import DEFAULT_DELAY_MS
from algorithms.common import Parents, replay_path, resolve_endpoints
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Graph


def dijkstra(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
) -> SnapshotStream:
    endpoints = resolve_endpoints(graph, source, sink)
    if endpoints is None:
        return Snapshot()
    source, sink = endpoints

    INF = float("inf")
    dist:      Dict[str, float]         = {source: 0.0}
    parents:   Parents                  = {}
    finalized: Set[str]                 = set()
    heap:      List[Tuple[float, str]]  = [(0.0, source)]
    sb = SnapshotBuilder()

    while heap:
        d, node_id = heapq.heappop(heap)
        if node_id in finalized:
            continue                    # stale entry
        finalized.add(node_id)
        if node_id == sink:
            break

        for edge in graph.edges_from(node_id):
            new_dist = d + edge.weight
            if new_dist < dist.get(edge.target, INF):
                dist[edge.target] = new_dist
                parents[edge.target] = (node_id, edge.id)
                heapq.heappush(heap, (new_dist, edge.target))
                sb.visit_edge(edge)
                yield sb.build(delay_ms)

    return (yield from replay_path(parents, source, sink, delay_ms))
