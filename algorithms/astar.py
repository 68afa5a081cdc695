"""
astar.py — A* Search
=====================
Dijkstra with a sense of direction: the heap is keyed by
f = g + h, where g is the distance travelled so far and h is the
great-circle distance from the node to the sink.

h never overestimates (a road can't be shorter than the straight line
over the sphere), so the path found is still optimal, and A* touches no
more nodes than Dijkstra on the same query.

Snapshot structure is identical to Dijkstra: EXPLORE snapshots on every
improving relaxation, then the PATH replay.
"""

import heapq
from typing import Callable, Dict, List, Optional, Set, Tuple

from config import DEFAULT_DELAY_MS
from algorithms.common import Parents, replay_path, resolve_endpoints
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Graph, distance


def great_circle_heuristic(graph: Graph, sink: str) -> Callable[[str], float]:
    """h(node_id) = metres from the node to the fixed sink."""
    goal = graph.nodes[sink].point

    def h(node_id: str) -> float:
        return distance(graph.nodes[node_id].point, goal)

    return h


def astar(
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
    h = great_circle_heuristic(graph, sink)
    g:         Dict[str, float]         = {source: 0.0}
    parents:   Parents                  = {}
    finalized: Set[str]                 = set()
    open_set:  List[Tuple[float, str]]  = [(h(source), source)]
    sb = SnapshotBuilder()

    while open_set:
        _, node_id = heapq.heappop(open_set)
        if node_id in finalized:
            continue
        finalized.add(node_id)
        if node_id == sink:
            break

        for edge in graph.edges_from(node_id):
            if edge.target in finalized:
                continue
            tentative = g[node_id] + edge.weight
            if tentative < g.get(edge.target, INF):
                g[edge.target] = tentative
                parents[edge.target] = (node_id, edge.id)
                heapq.heappush(open_set, (tentative + h(edge.target), edge.target))
                sb.visit_edge(edge)
                yield sb.build(delay_ms)

    return (yield from replay_path(parents, source, sink, delay_ms))
