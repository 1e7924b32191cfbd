from __future__ import annotations

import itertools
from collections import deque

import pytest

from graph_algorithms.paths import BidirectionalBFS, BreadthFirstShortestPath, DepthFirstSearch, Dijkstra
from graph_model.models import Edge, EdgeState, Graph, GraphIntegrityError, Node, NodeState
from graph_model.samples import SAMPLE_GRAPHS

ALL_ENGINES = [BidirectionalBFS(), Dijkstra(), DepthFirstSearch(), BreadthFirstShortestPath()]


def make_graph(node_ids: str, edges: list[tuple], directed: bool = False) -> Graph:
    return Graph(
        nodes=[Node(id=node_id, label=node_id) for node_id in node_ids],
        edges=[Edge(*item) for item in edges],
        directed=directed,
    )


def simple_path() -> Graph:
    return SAMPLE_GRAPHS["Simple Path"]


def weighted() -> Graph:
    return SAMPLE_GRAPHS["Weighted Graph"]


def hop_distance(graph: Graph, source: str, target: str) -> int | None:
    neighbors: dict[str, set[str]] = {node_id: set() for node_id in graph.node_ids}
    for edge in graph.edges:
        neighbors[edge.source].add(edge.target)
        if not graph.directed:
            neighbors[edge.target].add(edge.source)
    seen = {source: 0}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for nei in neighbors[current]:
            if nei not in seen:
                seen[nei] = seen[current] + 1
                queue.append(nei)
    return seen.get(target)


def connected(graph: Graph, left: str, right: str) -> bool:
    for edge in graph.edges:
        if (edge.source, edge.target) == (left, right):
            return True
        if not graph.directed and (edge.target, edge.source) == (left, right):
            return True
    return False


def path_cost(graph: Graph, path: list[str]) -> float:
    total = 0.0
    for left, right in zip(path, path[1:]):
        total += min(
            edge.cost
            for edge in graph.edges
            if (edge.source, edge.target) == (left, right)
            or (not graph.directed and (edge.target, edge.source) == (left, right))
        )
    return total


def cheapest_by_enumeration(graph: Graph, source: str, target: str) -> float | None:
    best: float | None = None

    def walk(node_id: str, seen: list[str]) -> None:
        nonlocal best
        if node_id == target:
            cost = path_cost(graph, seen)
            best = cost if best is None else min(best, cost)
            return
        for other in graph.node_ids:
            if other not in seen and connected(graph, node_id, other):
                walk(other, seen + [other])

    walk(source, [source])
    return best


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_missing_source_is_reported_not_raised(engine) -> None:
    result = engine.run(simple_path(), "Q", "E")
    assert result.found is False
    assert result.steps == []
    assert result.path == []
    assert result.error == "Source node 'Q' not found"


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_missing_target_is_reported_not_raised(engine) -> None:
    result = engine.run(simple_path(), "A", "Q")
    assert result.found is False
    assert result.error == "Target node 'Q' not found"


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_source_equals_target_is_trivial(engine) -> None:
    result = engine.run(simple_path(), "C", "C")
    assert result.found is True
    assert result.path == ["C"]
    assert result.error is None
    assert len(result.steps) == 1
    assert result.steps[0].node_states["C"] is NodeState.PATH
    assert result.steps[0].node_states["A"] is NodeState.DEFAULT


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_disconnected_components_have_no_path(engine) -> None:
    graph = make_graph("ABCD", [("A", "B"), ("C", "D")])
    result = engine.run(graph, "A", "D")
    assert result.found is False
    assert result.error is None
    assert result.path == []
    assert result.steps


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_dangling_edge_fails_fast(engine) -> None:
    graph = Graph(nodes=[Node("A"), Node("B")], edges=[Edge("A", "Z")])
    with pytest.raises(GraphIntegrityError):
        engine.run(graph, "A", "B")


@pytest.mark.parametrize("engine", ALL_ENGINES, ids=lambda e: e.name)
def test_runs_are_deterministic(engine) -> None:
    first = engine.run(SAMPLE_GRAPHS["Grid Graph"], "1", "9")
    second = engine.run(SAMPLE_GRAPHS["Grid Graph"], "1", "9")
    assert first.steps == second.steps
    assert first.path == second.path
    assert first.metrics == second.metrics


def test_bfs_simple_path() -> None:
    result = BreadthFirstShortestPath().run(simple_path(), "A", "E")
    assert result.found is True
    assert result.path == ["A", "B", "D", "E"]
    assert result.metrics is not None
    assert result.metrics.path_length == 3

    final = result.steps[-1]
    assert final.edge_states["A-B"] is EdgeState.PATH
    assert final.edge_states["B-A"] is EdgeState.PATH
    assert final.edge_states["C-D"] is EdgeState.DEFAULT


def test_bfs_respects_direction() -> None:
    graph = make_graph("ABC", [("A", "B"), ("C", "B")], directed=True)
    assert BreadthFirstShortestPath().run(graph, "A", "C").found is False
    assert BreadthFirstShortestPath().run(graph, "C", "B").path == ["C", "B"]


def test_recorded_steps_do_not_change_after_later_updates() -> None:
    result = BreadthFirstShortestPath().run(simple_path(), "A", "E")
    first = result.steps[0]
    assert first.node_states["A"] is NodeState.SOURCE
    assert first.node_states["B"] is NodeState.DEFAULT
    assert first.edge_states["A-B"] is EdgeState.DEFAULT
    assert result.steps[-1].node_states["B"] is NodeState.PATH

    first.node_states["B"] = NodeState.VISITED
    assert result.steps[1].node_states["B"] is not NodeState.VISITED


def test_bidirectional_trace_shape() -> None:
    result = BidirectionalBFS().run(simple_path(), "A", "E")
    assert result.found is True
    assert result.path == ["A", "B", "D", "E"]

    messages = [step.message for step in result.steps]
    assert len(messages) == 5
    assert messages[0].startswith("Starting bidirectional BFS")
    assert messages[1].startswith("Forward frontier expanded")
    assert messages[2].startswith("Backward frontier expanded")
    assert messages[3] == "Searches meet at node 'D'!"

    meet = result.steps[3]
    assert meet.forward_frontier == ("C", "D")
    assert meet.backward_frontier == ("D",)
    assert meet.node_states["B"] is NodeState.FORWARD_FRONTIER
    assert meet.node_states["A"] is NodeState.SOURCE
    assert meet.node_states["E"] is NodeState.TARGET


def test_bidirectional_and_bfs_agree_on_hop_count() -> None:
    for name in ("Simple Path", "Grid Graph", "Weighted Graph", "Disconnected Graph", "Directed Graph (PageRank)"):
        graph = SAMPLE_GRAPHS[name]
        for source, target in itertools.permutations(graph.node_ids, 2):
            bfs = BreadthFirstShortestPath().run(graph, source, target)
            bidir = BidirectionalBFS().run(graph, source, target)
            expected = hop_distance(graph, source, target)
            if expected is None:
                assert not bfs.found and not bidir.found
                continue
            for result in (bfs, bidir):
                assert len(result.path) - 1 == expected, (name, source, target)
                assert result.path[0] == source and result.path[-1] == target
                assert all(connected(graph, left, right) for left, right in zip(result.path, result.path[1:]))


def test_bidirectional_walks_predecessors_on_directed_graphs() -> None:
    chain = make_graph("ABC", [("A", "B"), ("B", "C")], directed=True)
    result = BidirectionalBFS().run(chain, "A", "C")
    assert result.path == ["A", "B", "C"]
    assert result.steps[-2].message == "Searches meet at node 'B'!"
    assert result.steps[-2].edge_states["B-C"] is EdgeState.EXPLORING

    converging = make_graph("ABC", [("A", "B"), ("C", "B")], directed=True)
    assert BidirectionalBFS().run(converging, "A", "C").found is False


def test_dijkstra_weighted_sample() -> None:
    result = Dijkstra().run(weighted(), "S", "T")
    assert result.found is True
    assert result.path == ["S", "B", "A", "C", "T"]
    assert result.steps[-1].distances["T"] == 11
    assert path_cost(weighted(), result.path) == 11
    assert len(result.steps) == 14
    assert result.steps[-1].message.startswith("Shortest path found! Total distance: 11.")


def test_dijkstra_initial_distances() -> None:
    first = Dijkstra().run(weighted(), "S", "T").steps[0]
    assert first.distances["S"] == 0
    assert first.distances["T"] == float("inf")


def test_dijkstra_is_minimal_for_every_pair() -> None:
    graph = weighted()
    for source, target in itertools.permutations(graph.node_ids, 2):
        result = Dijkstra().run(graph, source, target)
        best = cheapest_by_enumeration(graph, source, target)
        assert result.found is True
        assert path_cost(graph, result.path) == best
        assert result.steps[-1].distances[target] == best


def test_dijkstra_default_weight_is_one() -> None:
    graph = make_graph("ABC", [("A", "B"), ("B", "C"), ("A", "C", 5)])
    result = Dijkstra().run(graph, "A", "C")
    assert result.path == ["A", "B", "C"]
    assert result.steps[-1].distances["C"] == 2


def test_dijkstra_unreachable_message() -> None:
    graph = make_graph("ABCD", [("A", "B"), ("C", "D")])
    result = Dijkstra().run(graph, "A", "D")
    assert result.steps[-1].message == "No path exists - remaining nodes unreachable"


def test_dfs_backtracks_and_returns_first_path() -> None:
    result = DepthFirstSearch().run(simple_path(), "A", "E")
    assert result.found is True
    assert result.path == ["A", "B", "D", "E"]

    messages = [step.message for step in result.steps]
    assert len(messages) == 8
    assert messages[5] == "Backtracking from 'C'"
    assert result.steps[5].node_states["C"] is NodeState.VISITED
    assert result.steps[-1].node_states["C"] is NodeState.VISITED
    assert result.steps[-1].edge_states["D-E"] is EdgeState.PATH
    assert result.steps[-1].edge_states["E-D"] is EdgeState.PATH


def test_dfs_path_is_valid_walk() -> None:
    graph = SAMPLE_GRAPHS["Grid Graph"]
    for target in graph.node_ids[1:]:
        result = DepthFirstSearch().run(graph, "1", target)
        assert result.found is True
        assert result.path[0] == "1" and result.path[-1] == target
        assert len(set(result.path)) == len(result.path)
        assert all(connected(graph, left, right) for left, right in zip(result.path, result.path[1:]))


def test_dfs_handles_long_chains_without_recursion() -> None:
    size = 1100
    graph = Graph(
        nodes=[Node(id=str(i)) for i in range(size)],
        edges=[Edge(str(i), str(i + 1)) for i in range(size - 1)],
        directed=True,
    )
    result = DepthFirstSearch().run(graph, "0", str(size - 1))
    assert result.found is True
    assert len(result.path) == size


def test_dfs_exhausts_graph_when_no_path() -> None:
    graph = make_graph("ABCDE", [("A", "B"), ("B", "C"), ("D", "E")])
    result = DepthFirstSearch().run(graph, "A", "E")
    assert result.found is False
    backtracks = [step.message for step in result.steps if step.message.startswith("Backtracking")]
    assert backtracks == ["Backtracking from 'C'", "Backtracking from 'B'", "Backtracking from 'A'"]
    assert result.metrics.visited_nodes == 3
