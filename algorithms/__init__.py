"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the animator knows about.

    from algorithms import REGISTRY, get_algorithm_by_id

REGISTRY is an ordered dict:
    {
        "dfs": AlgorithmInfo(id, name, description, category, requires_source, requires_sink, run, …),
        …
    }

Every `run` has the same shape:

    run(graph, source=None, sink=None, delay_ms=50) → generator of Snapshot,
                                                     returning the final Snapshot

so adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.snapshot     import Phase, Snapshot, SnapshotBuilder, SnapshotStream
from algorithms.dfs          import dfs
from algorithms.bfs          import bfs
from algorithms.dijkstra     import dijkstra
from algorithms.astar        import astar
from algorithms.bellman_ford import bellman_ford
from algorithms.kruskal      import kruskal
from algorithms.prim         import prim
from algorithms.random_edges import random_edges


class Category(Enum):
    TRAVERSAL     = "traversal"
    SHORTEST_PATH = "shortest-path"
    MST           = "mst"
    DEMO          = "demo"


# ---------------------------------------------------------------------------
# AlgorithmInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmInfo:
    id:               str                              # registry key, e.g. "bfs"
    name:             str                              # human label, e.g. "Breadth-First Search"
    description:      str                              # one-liner for the UI card
    category:         Category
    requires_source:  bool
    requires_sink:    bool
    run:              Callable[..., SnapshotStream]    # the generator function
    complexity_time:  str = ""                         # e.g. "O(V + E)"
    complexity_space: str = ""

    def to_dict(self) -> dict:
        return {
            "id":               self.id,
            "name":             self.name,
            "description":      self.description,
            "category":         self.category.value,
            "requires_source":  self.requires_source,
            "requires_sink":    self.requires_sink,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
        }


def build_registry(entries: List[AlgorithmInfo]) -> Dict[str, AlgorithmInfo]:
    """Index entries by id, keeping their order.  Duplicate ids are a bug."""
    registry: Dict[str, AlgorithmInfo] = {}
    for info in entries:
        if info.id in registry:
            raise ValueError(f"Duplicate algorithm id: {info.id}")
        registry[info.id] = info
    return registry


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgorithmInfo] = build_registry([

    AlgorithmInfo(
        id="dfs", name="Depth-First Search", run=dfs,
        description="Explores as far as possible along each branch before backtracking.",
        category=Category.TRAVERSAL, requires_source=False, requires_sink=False,
        complexity_time="O(V + E)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="bfs", name="Breadth-First Search", run=bfs,
        description="Explores every path equally, layer by layer.",
        category=Category.TRAVERSAL, requires_source=False, requires_sink=False,
        complexity_time="O(V + E)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="dijkstra", name="Dijkstra's Algorithm", run=dijkstra,
        description="Greedily expands the closest node, then traces the shortest path.",
        category=Category.SHORTEST_PATH, requires_source=True, requires_sink=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="astar", name="A* Search", run=astar,
        description="Dijkstra guided by straight-line distance to the destination.",
        category=Category.SHORTEST_PATH, requires_source=True, requires_sink=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="bellman-ford", name="Bellman–Ford", run=bellman_ford,
        description="Relaxes every reachable edge |V|-1 times. Slow, thorough, correct.",
        category=Category.SHORTEST_PATH, requires_source=True, requires_sink=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="kruskal", name="Kruskal's MST", run=kruskal,
        description="Adds the lightest edge that doesn't close a cycle until the component is spanned.",
        category=Category.MST, requires_source=False, requires_sink=False,
        complexity_time="O(E log E)", complexity_space="O(V)",
    ),

    AlgorithmInfo(
        id="prim", name="Prim's MST", run=prim,
        description="Grows a single tree by always taking the lightest edge out of it.",
        category=Category.MST, requires_source=False, requires_sink=False,
        complexity_time="O(E log E)", complexity_space="O(E)",
    ),

    AlgorithmInfo(
        id="random-edges", name="Random Edges", run=random_edges,
        description="Randomly selects edges until all are visited (demo).",
        category=Category.DEMO, requires_source=False, requires_sink=False,
        complexity_time="O(E)", complexity_space="O(E)",
    ),
])


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm_by_id(algorithm_id: str) -> Optional[AlgorithmInfo]:
    """Return AlgorithmInfo by id, or None."""
    return REGISTRY.get(algorithm_id)


def list_algorithms() -> List[AlgorithmInfo]:
    """Return all registered algorithms in registration order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: Category) -> List[AlgorithmInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


__all__ = [
    "AlgorithmInfo",
    "Category",
    "Phase",
    "REGISTRY",
    "Snapshot",
    "SnapshotBuilder",
    "SnapshotStream",
    "build_registry",
    "get_algorithm_by_id",
    "list_algorithms",
    "algorithms_by_category",
]
