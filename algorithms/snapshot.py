"""
snapshot.py — Visitation Snapshot
==================================
Every algorithm is a generator that yields Snapshot objects.
A Snapshot is a frozen-in-time picture of what a renderer needs to draw
one frame:

    • Which edges have been visited
    • Which nodes have been visited
    • Which phase the run is in (exploring, or replaying the found path)
    • How long the consumer should wait before asking for the next one

Design decisions:
  - Snapshot is a frozen dataclass over frozensets.  The algorithm
    generator is the only writer; steppers and renderers are pure readers.
  - Within one phase the sets only grow.  The switch from EXPLORE to PATH
    is the one place a run starts again from empty sets.
  - The generator's *return* value is the terminal Snapshot, so callers
    that drain a run with `yield from` or a StopIteration handler get it
    for free.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Generator, Set

from config import DEFAULT_DELAY_MS
from roadgraph import Edge


class Phase(Enum):
    EXPLORE = "explore"    # search / traversal / tree growth
    PATH    = "path"       # replaying the reconstructed shortest path


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        visited_edges : Edge ids touched so far in this phase.
        visited_nodes : Node ids touched so far in this phase.
        phase         : Phase this snapshot belongs to.
        delay_ms      : Pause the consumer should take after showing it.
    """

    visited_edges: FrozenSet[str] = field(default_factory=frozenset)
    visited_nodes: FrozenSet[str] = field(default_factory=frozenset)
    phase:         Phase          = Phase.EXPLORE
    delay_ms:      float          = DEFAULT_DELAY_MS

    @property
    def is_empty(self) -> bool:
        return not self.visited_edges and not self.visited_nodes

    def covers(self, other: "Snapshot") -> bool:
        """True if this snapshot contains everything `other` does."""
        return (self.visited_edges >= other.visited_edges
                and self.visited_nodes >= other.visited_nodes)

    def to_dict(self) -> dict:
        return {
            "visited_edges": sorted(self.visited_edges),
            "visited_nodes": sorted(self.visited_nodes),
            "phase":         self.phase.value,
            "delay_ms":      self.delay_ms,
        }


# The type every producer in this package returns
SnapshotStream = Generator[Snapshot, None, Snapshot]


# ---------------------------------------------------------------------------
# Scratch-pad so algorithms don't rebuild frozensets by hand
# ---------------------------------------------------------------------------
class SnapshotBuilder:
    """
    Mutable working sets for one phase of one run.

    Usage inside an algorithm generator:
        sb = SnapshotBuilder()
        sb.visit_edge(edge)
        yield sb.build(delay_ms)
    """

    def __init__(self, phase: Phase = Phase.EXPLORE):
        self.reset(phase)

    def reset(self, phase: Phase = Phase.EXPLORE) -> None:
        self.phase: Phase     = phase
        self.edges: Set[str]  = set()
        self.nodes: Set[str]  = set()

    def visit_edge(self, edge: Edge) -> None:
        self.edges.add(edge.id)
        self.nodes.add(edge.source)
        self.nodes.add(edge.target)

    def visit_node(self, node_id: str) -> None:
        self.nodes.add(node_id)

    def build(self, delay_ms: float = DEFAULT_DELAY_MS) -> Snapshot:
        return Snapshot(
            visited_edges=frozenset(self.edges),
            visited_nodes=frozenset(self.nodes),
            phase=self.phase,
            delay_ms=delay_ms,
        )
