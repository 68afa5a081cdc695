"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (every Snapshot plus the final one),
then computes the numbers an analytics panel or a comparison needs.

Usage:
    rec = Recorder()
    rec.start("dijkstra", graph, source=a, sink=b)
    rec.run_to_completion()          # exhausts the producer
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # JSON-ready dict

Comparison Mode:
    Run two Recorders on the SAME graph and endpoints, then
    compare(rec1, rec2) → ComparisonResult.

A shortest-path run that finds nothing still completes normally: its
final Snapshot is empty and `path_found` is False.  Check that flag
instead of assuming success.
"""

import logging
import math
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from config import DEFAULT_DELAY_MS
from algorithms import AlgorithmInfo, Category, Phase, Snapshot, get_algorithm_by_id
from engine.stepper import Stepper
from roadgraph import Graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what an analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm_id:    str   = ""
    algorithm_name:  str   = ""
    source:          Optional[str] = None
    sink:            Optional[str] = None
    total_steps:     int   = 0          # number of Snapshots yielded
    nodes_explored:  int   = 0          # nodes touched before any path replay
    edges_explored:  int   = 0
    path_found:      bool  = False
    path_edges:      int   = 0          # edges on the replayed path
    path_cost:       float = 0.0        # metres along the replayed path
    wall_time_ms:    float = 0.0


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_nodes: str = ""   # which algorithm explored fewer nodes
    winner_edges: str = ""
    winner_path:  str = ""   # which algorithm found the cheaper path

    def to_dict(self) -> dict:
        return asdict(self)


def path_cost(graph: Graph, snapshot: Snapshot) -> float:
    """Total weight of the edges in a snapshot."""
    return math.fsum(edge.weight for edge in graph.iter_edges(snapshot.visited_edges))


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps    : Full list of Snapshots from the run.
        final    : The producer's terminal Snapshot.
        metrics  : Computed RunMetrics (available after run_to_completion).
        stepper  : The underlying Stepper (for live step-by-step access).
    """

    def __init__(self):
        self.steps:   List[Snapshot]       = []
        self.final:   Optional[Snapshot]   = None
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._info:   Optional[AlgorithmInfo] = None
        self._graph:  Optional[Graph]         = None
        self._source: Optional[str]           = None
        self._sink:   Optional[str]           = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algorithm_id: str,
        graph: Graph,
        source: Optional[str] = None,
        sink: Optional[str] = None,
        delay_ms: float = DEFAULT_DELAY_MS,
        **options: Any,
    ) -> None:
        """Create the producer and a Stepper around it."""
        info = get_algorithm_by_id(algorithm_id)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algorithm_id}")

        self._info   = info
        self._graph  = graph
        self._source = source
        self._sink   = sink
        self.steps   = []
        self.final   = None
        self.metrics = None

        self.stepper = Stepper()
        self.stepper.start(info.run(graph, source=source, sink=sink, delay_ms=delay_ms, **options))

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the producer, record every Snapshot, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        wall_ms = (time.monotonic() - started) * 1000

        self.steps = list(self.stepper.steps)
        self.final = self.stepper.final or Snapshot()
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            f"{self.metrics.algorithm_id}: {self.metrics.total_steps} steps, "
            f"{self.metrics.nodes_explored} nodes explored in {self.metrics.wall_time_ms} ms"
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algorithm_id": self._info.id if self._info else "",
            "source":       self._source,
            "sink":         self._sink,
            "metrics":      asdict(self.metrics) if self.metrics else {},
            "final":        self.final.to_dict() if self.final else None,
            "steps":        [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._info
        final = self.final or Snapshot()

        explored = [s for s in self.steps if s.phase == Phase.EXPLORE]
        last_explore = explored[-1] if explored else Snapshot()

        is_route = info is not None and info.category == Category.SHORTEST_PATH
        trivial = self._source is not None and self._source == self._sink
        path_found = is_route and final.phase == Phase.PATH and (trivial or not final.is_empty)

        return RunMetrics(
            algorithm_id=info.id if info else "",
            algorithm_name=info.name if info else "",
            source=self._source,
            sink=self._sink,
            total_steps=len(self.steps),
            nodes_explored=len(last_explore.visited_nodes),
            edges_explored=len(last_explore.visited_edges),
            path_found=path_found,
            path_edges=len(final.visited_edges) if path_found else 0,
            path_cost=path_cost(self._graph, final) if path_found and self._graph else 0.0,
            wall_time_ms=round(wall_ms, 2),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    if l.path_found and r.path_found:
        winner_path = winner(l.path_cost, r.path_cost, l.algorithm_name, r.algorithm_name)
    elif l.path_found or r.path_found:
        winner_path = l.algorithm_name if l.path_found else r.algorithm_name
    else:
        winner_path = "none"

    return ComparisonResult(
        left=l,
        right=r,
        winner_nodes=winner(l.nodes_explored, r.nodes_explored, l.algorithm_name, r.algorithm_name),
        winner_edges=winner(l.edges_explored, r.edges_explored, l.algorithm_name, r.algorithm_name),
        winner_path=winner_path,
    )
