"""
common.py — Shared Pieces of the Algorithm Generators
======================================================
  • resolve_start()      – explicit source, or the graph's first node
  • resolve_endpoints()  – source + sink that both exist, or None
  • reachable_from()     – breadth walk bounding Bellman-Ford / Kruskal
  • replay_path()        – walk parent links from sink back to source,
                           one Snapshot per hop, at the slower replay pace

An unresolvable start is not an error: the caller simply returns an empty
Snapshot without yielding anything.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from config import PATH_REPLAY_DELAY_FACTOR
from algorithms.snapshot import Phase, SnapshotBuilder, SnapshotStream
from roadgraph import Edge, Graph

logger = logging.getLogger(__name__)

# node_id → (parent node_id, edge id used to reach it)
Parents = Dict[str, Tuple[str, str]]


def resolve_start(graph: Graph, source: Optional[str]) -> Optional[str]:
    if source is None:
        return graph.first_node_id()
    if not graph.has_node(source):
        logger.debug(f"Start node {source} is not in the graph; nothing to do")
        return None
    return source


def resolve_endpoints(
    graph: Graph,
    source: Optional[str],
    sink: Optional[str],
) -> Optional[Tuple[str, str]]:
    if not graph.has_node(source) or not graph.has_node(sink):
        logger.debug(f"Endpoints {source!r} → {sink!r} not both in the graph; nothing to do")
        return None
    return source, sink


def reachable_from(graph: Graph, start: str) -> Tuple[List[str], List[Edge]]:
    """
    Nodes reachable from `start` in breadth-first order, and every edge
    leaving one of them (in node order, then adjacency order).
    """
    seen = {start}
    order = [start]
    queue = deque([start])
    while queue:
        for edge in graph.edges_from(queue.popleft()):
            if edge.target not in seen:
                seen.add(edge.target)
                order.append(edge.target)
                queue.append(edge.target)
    edges = [edge for nid in order for edge in graph.edges_from(nid)]
    return order, edges


def replay_path(
    parents: Parents,
    source: str,
    sink: str,
    delay_ms: float,
) -> SnapshotStream:
    """
    Second phase of every shortest-path run.  Starts from empty sets and
    grows the path one hop at a time, sink first.  A sink without a parent
    means no path: nothing is yielded and the result stays empty.  So does
    source == sink, a path of zero hops with nothing to draw.
    """
    sb = SnapshotBuilder(Phase.PATH)
    pace = delay_ms * PATH_REPLAY_DELAY_FACTOR

    if source == sink:
        return sb.build(pace)

    current = sink
    hops = 0
    while current != source:
        link = parents.get(current)
        if link is None or hops > len(parents):
            logger.info(f"No path from {source} to {sink}")
            break
        parent_id, edge_id = link
        sb.visit_node(current)
        sb.visit_node(parent_id)
        sb.edges.add(edge_id)
        current = parent_id
        hops += 1
        yield sb.build(pace)
    return sb.build(pace)
