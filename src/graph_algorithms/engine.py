from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from graph_model.models import AlgorithmResult, Graph

from .config import AlgorithmConfig
from .pagerank import PageRank
from .paths import BidirectionalBFS, BreadthFirstShortestPath, DepthFirstSearch, Dijkstra, PathEngine
from .pregel import PregelPageRank


class AlgorithmType(str, Enum):
    BIDIRECTIONAL_BFS = "bidirectional-bfs"
    DIJKSTRA = "dijkstra"
    DFS = "dfs"
    SHORTEST_PATH = "shortest-path"
    PAGERANK = "pagerank"
    PREGEL_PAGERANK = "pregel-pagerank"

    @property
    def needs_endpoints(self) -> bool:
        return self not in (AlgorithmType.PAGERANK, AlgorithmType.PREGEL_PAGERANK)


PATH_ENGINES: dict[AlgorithmType, PathEngine] = {
    AlgorithmType.BIDIRECTIONAL_BFS: BidirectionalBFS(),
    AlgorithmType.DIJKSTRA: Dijkstra(),
    AlgorithmType.DFS: DepthFirstSearch(),
    AlgorithmType.SHORTEST_PATH: BreadthFirstShortestPath(),
}


class GraphAlgorithmsEngine:
    """Selects and runs one engine per call.

    Holds only configuration; every run builds its own adjacency and trace,
    so one instance can serve any number of independent runs.
    """

    def __init__(self, config: AlgorithmConfig | None = None) -> None:
        self.config = config or AlgorithmConfig()
        self.logger = logging.getLogger("graph-algorithms")
        self._pagerank = PageRank()
        self._pregel = PregelPageRank()

    @staticmethod
    def resolve(algorithm: AlgorithmType | str) -> AlgorithmType | None:
        try:
            return AlgorithmType(algorithm)
        except ValueError:
            return None

    def run(
        self,
        algorithm: AlgorithmType | str,
        graph: Graph,
        source: str | None = None,
        target: str | None = None,
    ) -> AlgorithmResult:
        kind = self.resolve(algorithm)
        if kind is None:
            self.logger.info("algorithm=%s error=unknown", algorithm)
            return AlgorithmResult.failure("Unknown algorithm")

        if kind.needs_endpoints:
            if not source or not target:
                return AlgorithmResult.failure("Select source and target")
            return PATH_ENGINES[kind].run(graph, source, target)

        if kind is AlgorithmType.PAGERANK:
            return self._pagerank.run(graph, self.config.max_iterations, self.config.damping_factor)

        return self._pregel.run(
            graph,
            num_partitions=self.config.num_partitions,
            iterations=self.config.max_iterations,
            damping_factor=self.config.damping_factor,
            strategy=self.config.partition_strategy,
        )

    def compare(
        self,
        algorithms: Iterable[AlgorithmType | str],
        graph: Graph,
        source: str | None = None,
        target: str | None = None,
    ) -> dict[str, AlgorithmResult]:
        results: dict[str, AlgorithmResult] = {}
        for algorithm in algorithms:
            kind = self.resolve(algorithm)
            key = kind.value if kind is not None else str(algorithm)
            results[key] = self.run(algorithm, graph, source, target)
        return results
