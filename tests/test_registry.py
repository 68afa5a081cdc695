import inspect

import pytest

from conftest import drain
from algorithms import (
    REGISTRY, AlgorithmInfo, Category, algorithms_by_category, build_registry,
    get_algorithm_by_id, list_algorithms,
)


def test_registration_order():
    assert list(REGISTRY) == [
        "dfs", "bfs", "dijkstra", "astar", "bellman-ford", "kruskal", "prim", "random-edges",
    ]
    assert [a.id for a in list_algorithms()] == list(REGISTRY)


def test_lookup():
    info = get_algorithm_by_id("astar")
    assert info.name == "A* Search"
    assert info.requires_source and info.requires_sink
    assert get_algorithm_by_id("quicksort") is None


def test_only_shortest_path_needs_endpoints():
    for info in list_algorithms():
        routes = info.category is Category.SHORTEST_PATH
        assert info.requires_source is routes
        assert info.requires_sink is routes


def test_categories():
    assert [a.id for a in algorithms_by_category(Category.MST)] == ["kruskal", "prim"]
    assert [a.id for a in algorithms_by_category(Category.DEMO)] == ["random-edges"]


def test_every_run_shares_one_signature():
    for info in list_algorithms():
        assert inspect.isgeneratorfunction(info.run)
        params = list(inspect.signature(info.run).parameters)
        assert params[:4] == ["graph", "source", "sink", "delay_ms"]


def test_duplicate_ids_are_rejected():
    info = get_algorithm_by_id("bfs")
    with pytest.raises(ValueError):
        build_registry([info, info])


def test_to_dict_is_json_friendly():
    card = get_algorithm_by_id("bellman-ford").to_dict()
    assert card["category"] == "shortest-path"
    assert "run" not in card


@pytest.mark.parametrize("info", list_algorithms(), ids=lambda a: a.id)
def test_single_node_graph_without_endpoints(info, single_node_graph):
    steps, final = drain(info.run(single_node_graph))
    assert steps == []
    assert final.is_empty


@pytest.mark.parametrize("info", list_algorithms(), ids=lambda a: a.id)
def test_single_node_graph_with_endpoints(info, single_node_graph):
    steps, final = drain(info.run(single_node_graph, source="solo", sink="solo"))
    assert steps == []
    assert final.is_empty


@pytest.mark.parametrize("info", list_algorithms(), ids=lambda a: a.id)
def test_runs_are_lazy(info, grid_graph):
    ids = grid_graph.node_ids()
    stream = info.run(grid_graph, source=ids[0], sink=ids[-1])
    first = next(stream)
    assert not first.is_empty
    stream.close()


def test_algorithm_info_is_frozen():
    info = get_algorithm_by_id("dfs")
    with pytest.raises(AttributeError):
        info.name = "something else"
    assert isinstance(info, AlgorithmInfo)
