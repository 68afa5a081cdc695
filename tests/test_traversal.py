import pytest

from conftest import drain
from algorithms import Phase, Snapshot
from algorithms.bfs import bfs
from algorithms.dfs import dfs


TRAVERSALS = [bfs, dfs]


@pytest.mark.parametrize("run", TRAVERSALS)
def test_reaches_every_node_of_the_component(run, grid_graph):
    steps, final = drain(run(grid_graph))
    assert final.visited_nodes == frozenset(grid_graph.nodes)
    # a spanning tree of the component: one new edge per discovered node
    assert len(steps) == grid_graph.node_count() - 1
    assert len(final.visited_edges) == grid_graph.node_count() - 1
    assert final == steps[-1]


@pytest.mark.parametrize("run", TRAVERSALS)
def test_one_new_edge_per_snapshot(run, raw_grid_graph):
    steps, _ = drain(run(raw_grid_graph))
    previous = Snapshot()
    for snap in steps:
        assert snap.phase is Phase.EXPLORE
        assert snap.covers(previous)
        assert len(snap.visited_edges - previous.visited_edges) == 1
        previous = snap


@pytest.mark.parametrize("run", TRAVERSALS)
def test_starts_at_first_node_without_source(run, cycle_graph):
    steps, _ = drain(run(cycle_graph))
    first_edge, = steps[0].visited_edges
    assert first_edge.startswith("A->")


@pytest.mark.parametrize("run", TRAVERSALS)
def test_explicit_source(run, cycle_graph):
    steps, final = drain(run(cycle_graph, source="C"))
    first_edge, = steps[0].visited_edges
    assert first_edge.startswith("C->")
    assert final.visited_nodes == {"A", "B", "C", "D"}


@pytest.mark.parametrize("run", TRAVERSALS)
def test_unknown_source_yields_nothing(run, cycle_graph):
    steps, final = drain(run(cycle_graph, source="nowhere"))
    assert steps == []
    assert final.is_empty


@pytest.mark.parametrize("run", TRAVERSALS)
def test_other_component_is_untouched(run, two_component_graph):
    _, final = drain(run(two_component_graph, source="A"))
    assert final.visited_nodes == {"A", "B"}
    assert final.visited_edges == {"A->B"}


@pytest.mark.parametrize("run", TRAVERSALS)
def test_delay_is_stamped_on_every_snapshot(run, cycle_graph):
    steps, _ = drain(run(cycle_graph, delay_ms=7))
    assert {s.delay_ms for s in steps} == {7}


def test_bfs_visits_layer_by_layer(cycle_graph):
    steps, _ = drain(bfs(cycle_graph, source="A"))
    # both neighbours of A come before the opposite corner
    assert steps[1].visited_nodes == {"A", "B", "D"}
    assert "C" in steps[2].visited_nodes


def test_dfs_goes_deep_first(cycle_graph):
    steps, _ = drain(dfs(cycle_graph, source="A"))
    # A → B → C → D is one unbroken branch
    edges = [next(iter(b.visited_edges - a.visited_edges))
             for a, b in zip([Snapshot()] + steps, steps)]
    assert edges == ["A->B", "B->C", "C->D"]
