from __future__ import annotations

import random
import time

from graph_algorithms.config import AlgorithmConfig
from graph_algorithms.engine import AlgorithmType, GraphAlgorithmsEngine
from graph_model.models import Edge, Graph, Node


def make_engine() -> GraphAlgorithmsEngine:
    cfg = AlgorithmConfig(
        damping_factor=0.85,
        max_iterations=20,
        num_partitions=4,
        partition_strategy="hash",
    )
    return GraphAlgorithmsEngine(cfg)


def make_grid(side: int) -> Graph:
    nodes = [Node(id=f"{row}:{col}", x=col * 50.0, y=row * 50.0, label=f"{row}:{col}") for row in range(side) for col in range(side)]
    edges = []
    for row in range(side):
        for col in range(side):
            if col + 1 < side:
                edges.append(Edge(f"{row}:{col}", f"{row}:{col + 1}", random.randint(1, 9)))
            if row + 1 < side:
                edges.append(Edge(f"{row}:{col}", f"{row + 1}:{col}", random.randint(1, 9)))
    return Graph(nodes=nodes, edges=edges, directed=False)


def main(side: int = 30) -> None:
    random.seed(42)
    engine = make_engine()
    graph = make_grid(side)
    source, target = "0:0", f"{side - 1}:{side - 1}"

    print(f"nodes={len(graph.nodes)} edges={len(graph.edges)}")
    for algorithm in AlgorithmType:
        start = time.perf_counter()
        result = engine.run(algorithm, graph, source, target)
        elapsed = time.perf_counter() - start
        print(f"algorithm={algorithm.value} elapsed_sec={elapsed:.4f} steps={len(result.steps)} found={result.found}")


if __name__ == "__main__":
    main()
