"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
Structure:
  • A silent breadth walk from the source finds the reachable subgraph.
  • |reachable| - 1 rounds of relaxing every edge leaving a reachable node.
    All rounds run, even when a round changes nothing.
  • The same sink → source path replay as Dijkstra.

Yields a Snapshot for each successful relaxation; the sets accumulate
across rounds.

Only non-negative weights are supported: there is no negative-cycle
round.  Road lengths can't be negative, so nothing here needs one.

A sink that isn't reachable ends up without a parent.  The path replay
then yields nothing and the final Snapshot is empty: "no path found".
"""

from typing import Dict, Optional

from config import DEFAULT_DELAY_MS
from algorithms.common import Parents, reachable_from, replay_path, resolve_endpoints
from algorithms.snapshot import Snapshot, SnapshotBuilder, SnapshotStream
from roadgraph import Graph


def bellman_ford(
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
    reachable, edges = reachable_from(graph, source)
    dist:    Dict[str, float] = {nid: INF for nid in reachable}
    parents: Parents          = {}
    dist[source] = 0.0
    sb = SnapshotBuilder()

    for _ in range(len(reachable) - 1):
        for edge in edges:
            new_dist = dist[edge.source] + edge.weight
            if new_dist < dist[edge.target]:
                dist[edge.target] = new_dist
                parents[edge.target] = (edge.source, edge.id)
                sb.visit_edge(edge)
                yield sb.build(delay_ms)

    return (yield from replay_path(parents, source, sink, delay_ms))
