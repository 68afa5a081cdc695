import itertools
import math

import pytest

from conftest import LATS, LONS, drain
from algorithms import Phase
from algorithms.astar import astar, great_circle_heuristic
from algorithms.bellman_ford import bellman_ford
from algorithms.dijkstra import dijkstra
from roadgraph import Point, point_id


ROUTERS = [dijkstra, astar, bellman_ford]


def cost(graph, snapshot):
    return math.fsum(e.weight for e in graph.iter_edges(snapshot.visited_edges))


def last_explore(steps):
    explore = [s for s in steps if s.phase is Phase.EXPLORE]
    return explore[-1] if explore else None


def assert_is_path(graph, snapshot, source, sink):
    """The edges of `snapshot` chain from source to sink with no branches."""
    out = {}
    for edge in graph.iter_edges(snapshot.visited_edges):
        assert edge.source not in out
        out[edge.source] = edge.target
    current, hops = source, 0
    while current != sink:
        current = out[current]
        hops += 1
    assert hops == len(snapshot.visited_edges)


# ---------------------------------------------------------------------------
# Textbook cases
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("run", ROUTERS)
def test_four_cycle_opposite_corner(run, cycle_graph):
    steps, final = drain(run(cycle_graph, source="A", sink="C"))
    assert final.phase is Phase.PATH
    assert cost(cycle_graph, final) == 2.0
    assert final.visited_nodes in ({"A", "B", "C"}, {"A", "D", "C"})
    assert_is_path(cycle_graph, final, "A", "C")
    assert final == steps[-1]


@pytest.mark.parametrize("run", ROUTERS)
def test_source_equals_sink(run, cycle_graph):
    steps, final = drain(run(cycle_graph, source="B", sink="B"))
    assert [s for s in steps if s.phase is Phase.PATH] == []
    assert final.phase is Phase.PATH
    assert final.is_empty


@pytest.mark.parametrize("run", ROUTERS)
@pytest.mark.parametrize("source,sink", [(None, "C"), ("A", None), ("A", "Z"), ("Z", "A"), (None, None)])
def test_missing_endpoint_yields_nothing(run, cycle_graph, source, sink):
    steps, final = drain(run(cycle_graph, source=source, sink=sink))
    assert steps == []
    assert final.is_empty


@pytest.mark.parametrize("run", ROUTERS)
def test_unreachable_sink_gives_empty_path(run, two_component_graph):
    steps, final = drain(run(two_component_graph, source="A", sink="C"))
    assert all(s.phase is Phase.EXPLORE for s in steps)
    assert final.phase is Phase.PATH
    assert final.is_empty
    assert all("C" not in s.visited_nodes for s in steps)


def test_bellman_ford_disconnected_explores_one_component(two_component_graph):
    steps, _ = drain(bellman_ford(two_component_graph, source="A", sink="C"))
    assert len(steps) == 1
    assert steps[0].visited_edges == {"A->B"}


# ---------------------------------------------------------------------------
# Snapshot stream shape
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("run", ROUTERS)
def test_phases_never_go_back_and_sets_grow(run, grid_graph):
    ids = grid_graph.node_ids()
    steps, _ = drain(run(grid_graph, source=ids[0], sink=ids[-1]))
    phases = [s.phase for s in steps]
    assert phases == sorted(phases, key=lambda p: p is Phase.PATH)
    assert Phase.PATH in phases
    for prev, snap in zip(steps, steps[1:]):
        if prev.phase is snap.phase:
            assert snap.covers(prev)


@pytest.mark.parametrize("run", ROUTERS)
def test_path_replay_is_slower(run, grid_graph):
    ids = grid_graph.node_ids()
    steps, final = drain(run(grid_graph, source=ids[0], sink=ids[-1], delay_ms=10))
    assert {s.delay_ms for s in steps if s.phase is Phase.EXPLORE} == {10}
    assert {s.delay_ms for s in steps if s.phase is Phase.PATH} == {20}
    assert final.delay_ms == 20


@pytest.mark.parametrize("run", ROUTERS)
def test_path_replay_runs_sink_first(run, spur_graph):
    ids = spur_graph.node_ids()
    steps, final = drain(run(spur_graph, source=ids[3], sink=ids[10]))
    path = [s for s in steps if s.phase is Phase.PATH]
    assert len(path) == 7
    assert path[0].visited_nodes == {ids[9], ids[10]}
    assert path[-1].visited_nodes == frozenset(ids[3:])


# ---------------------------------------------------------------------------
# Cross-checks on real coordinates
# ---------------------------------------------------------------------------
def test_routers_agree_on_every_grid_pair(grid_graph):
    for source, sink in itertools.permutations(grid_graph.node_ids(), 2):
        costs = [cost(grid_graph, drain(run(grid_graph, source=source, sink=sink))[1])
                 for run in ROUTERS]
        assert costs[0] > 0
        assert costs[1] == pytest.approx(costs[0], rel=1e-9)
        assert costs[2] == pytest.approx(costs[0], rel=1e-9)


def test_simplified_and_raw_costs_match(grid_graph):
    raw = grid_graph.raw
    for source, sink in itertools.permutations(grid_graph.node_ids(), 2):
        simple_cost = cost(grid_graph, drain(dijkstra(grid_graph, source=source, sink=sink))[1])
        raw_cost = cost(raw, drain(dijkstra(raw, source=source, sink=sink))[1])
        assert simple_cost == pytest.approx(raw_cost, rel=1e-9)


def test_astar_explores_no_more_than_dijkstra(spur_graph):
    ids = spur_graph.node_ids()
    d_steps, _ = drain(dijkstra(spur_graph, source=ids[3], sink=ids[10]))
    a_steps, _ = drain(astar(spur_graph, source=ids[3], sink=ids[10]))
    d_nodes = last_explore(d_steps).visited_nodes
    a_nodes = last_explore(a_steps).visited_nodes
    assert len(d_nodes) == 11
    assert len(a_nodes) == 9
    assert a_nodes <= d_nodes


def test_heuristic_is_straight_line_distance(grid_graph):
    sink = point_id(Point(LATS[1], LONS[1]))
    h = great_circle_heuristic(grid_graph, sink)
    assert h(sink) == 0.0
    for edge in grid_graph.edges:
        if edge.target == sink:
            assert h(edge.source) <= edge.weight + 1e-6
