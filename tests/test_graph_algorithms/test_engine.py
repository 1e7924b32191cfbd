from __future__ import annotations

import pytest

from graph_algorithms.config import AlgorithmConfig, load_algorithm_config
from graph_algorithms.engine import AlgorithmType, GraphAlgorithmsEngine
from graph_model.samples import SAMPLE_GRAPHS


def make_engine(**overrides) -> GraphAlgorithmsEngine:
    cfg = AlgorithmConfig(
        damping_factor=overrides.get("damping_factor", 0.85),
        max_iterations=overrides.get("max_iterations", 12),
        num_partitions=overrides.get("num_partitions", 3),
        partition_strategy=overrides.get("partition_strategy", "hash"),
    )
    return GraphAlgorithmsEngine(cfg)


def test_dispatches_path_algorithms_by_name() -> None:
    engine = make_engine()
    graph = SAMPLE_GRAPHS["Simple Path"]
    for name in ("bidirectional-bfs", "dijkstra", "dfs", "shortest-path"):
        result = engine.run(name, graph, "A", "E")
        assert result.found is True, name
        assert result.path[0] == "A" and result.path[-1] == "E"


def test_path_algorithms_need_both_endpoints() -> None:
    engine = make_engine()
    graph = SAMPLE_GRAPHS["Simple Path"]
    for source, target in ((None, "E"), ("A", None), ("", "E")):
        result = engine.run(AlgorithmType.DIJKSTRA, graph, source, target)
        assert result.error == "Select source and target"
        assert result.steps == []


def test_unknown_algorithm_is_a_failure_result() -> None:
    result = make_engine().run("bellman-ford", SAMPLE_GRAPHS["Simple Path"], "A", "E")
    assert result.found is False
    assert result.error == "Unknown algorithm"


def test_pagerank_ignores_endpoints_and_uses_config() -> None:
    engine = make_engine(max_iterations=12)
    graph = SAMPLE_GRAPHS["Directed Graph (PageRank)"]
    result = engine.run(AlgorithmType.PAGERANK, graph)
    assert result.found is True
    assert len(result.steps) == 6

    pregel = engine.run(AlgorithmType.PREGEL_PAGERANK, graph, "Home", "Blog")
    assert len(pregel.steps) == 13
    assert "across 3 partitions" in pregel.steps[0].message


def test_damping_factor_flows_into_pagerank() -> None:
    graph = SAMPLE_GRAPHS["Directed Graph (PageRank)"]
    low = make_engine(damping_factor=0.5).run("pagerank", graph)
    high = make_engine(damping_factor=0.95).run("pagerank", graph)
    assert low.steps[-1].page_rank_values != high.steps[-1].page_rank_values


def test_compare_keys_results_by_algorithm() -> None:
    engine = make_engine()
    results = engine.compare(
        [AlgorithmType.SHORTEST_PATH, "dfs", "nope"],
        SAMPLE_GRAPHS["Grid Graph"],
        "1",
        "9",
    )
    assert list(results) == ["shortest-path", "dfs", "nope"]
    assert len(results["shortest-path"].path) == 5
    assert results["dfs"].found is True
    assert results["nope"].error == "Unknown algorithm"


def test_needs_endpoints() -> None:
    assert AlgorithmType.DFS.needs_endpoints is True
    assert AlgorithmType.PAGERANK.needs_endpoints is False
    assert AlgorithmType.PREGEL_PAGERANK.needs_endpoints is False


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALGO_PAGERANK_DAMPING", "0.9")
    monkeypatch.setenv("ALGO_MAX_ITERATIONS", "7")
    monkeypatch.setenv("ALGO_NUM_PARTITIONS", "2")
    monkeypatch.setenv("ALGO_PARTITION_STRATEGY", "RANGE")
    cfg = load_algorithm_config()
    assert cfg == AlgorithmConfig(damping_factor=0.9, max_iterations=7, num_partitions=2, partition_strategy="range")


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ALGO_PAGERANK_DAMPING", "ALGO_MAX_ITERATIONS", "ALGO_NUM_PARTITIONS", "ALGO_PARTITION_STRATEGY"):
        monkeypatch.delenv(name, raising=False)
    assert load_algorithm_config() == AlgorithmConfig()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"damping_factor": 1.5},
        {"max_iterations": 0},
        {"num_partitions": 0},
        {"partition_strategy": "random"},
    ],
)
def test_invalid_config_is_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        AlgorithmConfig(**kwargs)
