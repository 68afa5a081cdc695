"""
Pytest configuration and shared fixtures.

Two kinds of graphs are used across the suite:
  • hand-wired graphs with letter node ids and unit-ish weights, for the
    textbook scenarios (cycle, two components, single node)
  • graphs built from way elements, for everything that depends on real
    coordinates (simplification, A* heuristic, cross-checking distances)
"""

from typing import Dict, Iterable, List, Tuple

import pytest

from roadgraph import Edge, Graph, Node, build_graph, make_edge_id

# 3 x 3 street grid: intersection coordinates and the shape point that sits
# halfway along every block
LATS = [52.5000, 52.5010, 52.5020]
LONS = [13.4000, 13.4013, 13.4026]
LAT_MIDS = [52.5005, 52.5015]
LON_MIDS = [13.40065, 13.40195]


def way(way_id, points: Iterable[Tuple[float, float]], **tags) -> dict:
    """Overpass-style way element; tagged as a residential road unless told otherwise."""
    return {
        "type": "way",
        "id": way_id,
        "tags": tags or {"highway": "residential"},
        "geometry": [{"lat": lat, "lon": lon} for lat, lon in points],
    }


def wire(nodes: Dict[str, Tuple[float, float]], roads: List[Tuple[str, str, float]]) -> Graph:
    """Graph with explicit node ids; every road becomes two directed edges."""
    graph = Graph()
    for nid, (lat, lon) in nodes.items():
        graph.add_node(Node(nid, lat, lon))
    for a, b, weight in roads:
        graph.add_edge(Edge(make_edge_id(a, b), a, b, weight))
        graph.add_edge(Edge(make_edge_id(b, a), b, a, weight))
    return graph.freeze()


def drain(stream):
    """Run a producer to the end: (every yielded Snapshot, the returned one)."""
    steps = []
    while True:
        try:
            steps.append(next(stream))
        except StopIteration as stop:
            return steps, stop.value


@pytest.fixture
def grid_elements() -> List[dict]:
    elements = []
    for r, lat in enumerate(LATS):
        pts = [(lat, LONS[0]), (lat, LON_MIDS[0]), (lat, LONS[1]), (lat, LON_MIDS[1]), (lat, LONS[2])]
        elements.append(way(100 + r, pts))
    for c, lon in enumerate(LONS):
        pts = [(LATS[0], lon), (LAT_MIDS[0], lon), (LATS[1], lon), (LAT_MIDS[1], lon), (LATS[2], lon)]
        elements.append(way(200 + c, pts))
    # noise the builder must ignore
    elements.append({"type": "way", "id": 900, "tags": {"building": "yes"},
                     "geometry": [{"lat": 52.5001, "lon": 13.4001}, {"lat": 52.5002, "lon": 13.4002}]})
    elements.append(way(901, [(52.51, 13.41)]))
    elements.append({"type": "relation", "id": 902, "tags": {"highway": "primary"}})
    return elements


@pytest.fixture
def grid_graph(grid_elements) -> Graph:
    return build_graph(grid_elements)


@pytest.fixture
def raw_grid_graph(grid_elements) -> Graph:
    return build_graph(grid_elements, simplify=False)


@pytest.fixture
def spur_graph() -> Graph:
    """
    A straight east-west road, ten equal blocks long.  Start three blocks
    from the west end, finish at the east end.
    """
    pts = [(48.8500, 2.3000 + 0.001 * i) for i in range(11)]
    return build_graph([way(1, pts)], simplify=False)


@pytest.fixture
def cycle_graph() -> Graph:
    """A-B-C-D-A, every road of length 1."""
    nodes = {"A": (0.0, 0.0), "B": (0.0, 1e-6), "C": (1e-6, 1e-6), "D": (1e-6, 0.0)}
    return wire(nodes, [("A", "B", 1.0), ("B", "C", 1.0), ("C", "D", 1.0), ("D", "A", 1.0)])


@pytest.fixture
def weighted_cycle_graph() -> Graph:
    """A-B-C-D-A with distinct weights 1, 2, 3, 4; the MST drops D-A."""
    nodes = {"A": (0.0, 0.0), "B": (0.0, 1.0), "C": (1.0, 1.0), "D": (1.0, 0.0)}
    return wire(nodes, [("A", "B", 1.0), ("B", "C", 2.0), ("C", "D", 3.0), ("D", "A", 4.0)])


@pytest.fixture
def two_component_graph() -> Graph:
    nodes = {"A": (0.0, 0.0), "B": (0.0, 1.0), "C": (5.0, 5.0), "D": (5.0, 6.0)}
    return wire(nodes, [("A", "B", 1.0), ("C", "D", 1.0)])


@pytest.fixture
def single_node_graph() -> Graph:
    return wire({"solo": (10.0, 10.0)}, [])
