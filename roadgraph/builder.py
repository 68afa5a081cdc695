"""
builder.py — Road Graph Builder
================================
Turns tagged map ways into the graph the algorithms run on.

Pipeline:
  1. parse_ways()        – raw elements → WayRecord, malformed ones dropped
  2. build_raw_graph()   – every consecutive point pair becomes a forward
                           and a backward edge weighted by great-circle
                           distance; endpoints merge on quantised coordinate
  3. simplify_graph()    – chains of degree-2 nodes collapse into compound
                           edges between "important" nodes (degree ≠ 2);
                           weights are summed exactly, sub-edge ids and the
                           full polyline are kept for drawing
  4. build_graph()       – 1 → 3 in one call, returns the simplified graph
                           with the raw one attached as `graph.raw`

Known limitation: a closed loop made only of degree-2 nodes has no
important node to start a walk from, so it vanishes from the simplified
graph.  Pass keep_isolated_cycles=True to promote one node per such loop.
"""

import logging
import math
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from config import KEEP_ISOLATED_CYCLES, ROUTABLE_TAGS
from roadgraph.edge import Edge, make_edge_id
from roadgraph.geo import Point, distance, point_id
from roadgraph.graph import Graph
from roadgraph.node import Node

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class WayRecord:
    """One tagged polyline from the map source."""

    id:       Any
    tags:     Dict[str, str]     = field(default_factory=dict)
    geometry: Tuple[Point, ...]  = ()

    @classmethod
    def from_element(cls, element: dict) -> Optional["WayRecord"]:
        """Parse an Overpass-style element; None if it isn't a usable way."""
        if not isinstance(element, dict) or element.get("type", "way") != "way":
            return None
        try:
            geometry = tuple(Point.from_dict(p) for p in element.get("geometry") or ())
            tags = dict(element.get("tags") or {})
        except (KeyError, TypeError, ValueError):
            return None
        return cls(id=element.get("id"), tags=tags, geometry=geometry)

    def is_routable(self, routable_tags: Sequence[str] = ROUTABLE_TAGS) -> bool:
        return len(self.geometry) >= 2 and any(tag in self.tags for tag in routable_tags)


def parse_ways(
    elements: Iterable[Any],
    routable_tags: Sequence[str] = ROUTABLE_TAGS,
) -> List[WayRecord]:
    """Keep only routable ways with at least two points."""
    ways = []
    skipped = 0
    for element in elements:
        way = element if isinstance(element, WayRecord) else WayRecord.from_element(element)
        if way is None or not way.is_routable(routable_tags):
            skipped += 1
            continue
        ways.append(way)
    logger.info(f"Parsed {len(ways)} routable ways ({skipped} elements skipped)")
    return ways


# ---------------------------------------------------------------------------
# Raw graph
# ---------------------------------------------------------------------------
def build_raw_graph(ways: Iterable[WayRecord]) -> Graph:
    """One node per distinct quantised point, two directed edges per segment."""
    graph = Graph()
    for way in ways:
        for a, b in zip(way.geometry, way.geometry[1:]):
            from_id, to_id = point_id(a), point_id(b)
            if from_id == to_id:
                continue
            graph.ensure_node(from_id, a)
            graph.ensure_node(to_id, b)
            weight = distance(a, b)
            graph.add_edge(Edge(
                id=make_edge_id(from_id, to_id), source=from_id, target=to_id,
                weight=weight, way=way, geometry=(a, b), sub_edges=(make_edge_id(from_id, to_id),),
            ))
            graph.add_edge(Edge(
                id=make_edge_id(to_id, from_id), source=to_id, target=from_id,
                weight=weight, way=way, geometry=(b, a), sub_edges=(make_edge_id(to_id, from_id),),
            ))
    graph.freeze()
    logger.info(f"Raw road graph: {graph.node_count()} nodes, {graph.edge_count()} edges")
    return graph


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------
@dataclass
class _Chain:
    target:    str
    sub_edges: List[str]
    weights:   List[float]
    geometry:  List[Point]
    way:       Any


def important_nodes(raw: Graph) -> Set[str]:
    """Nodes whose degree is not exactly 2."""
    return {nid for nid, node in raw.nodes.items() if node.degree != 2}


def _walk_chain(raw: Graph, first: Edge, important: Set[str]) -> Optional[_Chain]:
    """
    Follow `first` through degree-2 nodes until an important node.
    Returns None when the walk gets stuck.
    """
    chain = _Chain(
        target=first.target,
        sub_edges=[first.id],
        weights=[first.weight],
        geometry=list(first.geometry),
        way=first.way,
    )
    prev, current = first.source, first.target
    passed: Set[str] = set()
    while current not in important:
        if current in passed:
            return None
        passed.add(current)
        step = next((e for e in raw.edges_from(current) if e.target != prev), None)
        if step is None:
            return None
        chain.sub_edges.append(step.id)
        chain.weights.append(step.weight)
        chain.geometry.extend(step.geometry[1:])
        prev, current = current, step.target
    chain.target = current
    return chain


def _cycle_anchors(raw: Graph, important: Set[str]) -> Set[str]:
    """Smallest node id of every component that has no important node."""
    reached: Set[str] = set(important)
    queue = deque(important)
    while queue:
        for edge in raw.edges_from(queue.popleft()):
            if edge.target not in reached:
                reached.add(edge.target)
                queue.append(edge.target)

    anchors: Set[str] = set()
    for nid in raw.nodes:
        if nid in reached:
            continue
        component = [nid]
        reached.add(nid)
        queue = deque([nid])
        while queue:
            for edge in raw.edges_from(queue.popleft()):
                if edge.target not in reached:
                    reached.add(edge.target)
                    component.append(edge.target)
                    queue.append(edge.target)
        anchors.add(min(component))
    return anchors


def simplify_graph(raw: Graph, keep_isolated_cycles: bool = KEEP_ISOLATED_CYCLES) -> Graph:
    """Collapse degree-2 chains of `raw` into compound edges."""
    important = important_nodes(raw)
    if keep_isolated_cycles:
        anchors = _cycle_anchors(raw, important)
        if anchors:
            logger.info(f"Promoting {len(anchors)} node(s) to keep isolated loops")
        important |= anchors

    simple = Graph(raw=raw)
    for nid, node in raw.nodes.items():
        if nid in important:
            simple.add_node(Node(nid, node.lat, node.lon))

    taken: Counter = Counter()
    dead_ends = 0
    for nid in simple.node_ids():
        for first in raw.edges_from(nid):
            chain = _walk_chain(raw, first, important)
            if chain is None:
                dead_ends += 1
                logger.info(f"Dropping dead-end chain starting with {first.id}")
                continue
            base = make_edge_id(nid, chain.target)
            taken[base] += 1
            simple.add_edge(Edge(
                id=base if taken[base] == 1 else f"{base}#{taken[base]}",
                source=nid,
                target=chain.target,
                weight=math.fsum(chain.weights),
                way=chain.way,
                geometry=tuple(chain.geometry),
                sub_edges=tuple(chain.sub_edges),
            ))

    simple.freeze()
    logger.info(
        f"Simplified road graph: {raw.node_count()} → {simple.node_count()} nodes, "
        f"{raw.edge_count()} → {simple.edge_count()} edges ({dead_ends} dead-end walks)"
    )
    return simple


# ---------------------------------------------------------------------------
# One-shot entry point
# ---------------------------------------------------------------------------
def build_graph(
    elements: Iterable[Any],
    simplify: bool = True,
    keep_isolated_cycles: bool = KEEP_ISOLATED_CYCLES,
    routable_tags: Sequence[str] = ROUTABLE_TAGS,
) -> Graph:
    """Elements → routable graph.  Simplified (with `.raw`) unless simplify=False."""
    raw = build_raw_graph(parse_ways(elements, routable_tags))
    if not simplify:
        return raw
    return simplify_graph(raw, keep_isolated_cycles=keep_isolated_cycles)
