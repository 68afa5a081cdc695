"""
random_edges.py — Random Edges (demo)
======================================
Not an algorithm so much as a screensaver: pick a uniformly random edge
that hasn't been shown yet, show it, repeat until every edge is shown.

Each pick swaps a random entry of the pending list to the end and pops
it, so a run over E edges is O(E).  Randomness comes from a private
random.Random; pass `seed` for a reproducible order.
"""

import random
from typing import Optional

from config import DEFAULT_DELAY_MS
from algorithms.snapshot import SnapshotBuilder, SnapshotStream
from roadgraph import Graph


def random_edges(
    graph: Graph,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    delay_ms: float = DEFAULT_DELAY_MS,
    seed: Optional[int] = None,
) -> SnapshotStream:
    rng = random.Random(seed)
    pending = list(graph.edges)
    sb = SnapshotBuilder()

    while pending:
        i = rng.randrange(len(pending))
        pending[i], pending[-1] = pending[-1], pending[i]
        sb.visit_edge(pending.pop())
        yield sb.build(delay_ms)

    return sb.build(delay_ms)
