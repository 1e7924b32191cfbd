from .config import AlgorithmConfig, load_algorithm_config
from .engine import AlgorithmType, GraphAlgorithmsEngine
from .pagerank import PageRank
from .partitioning import partition_graph
from .paths import BidirectionalBFS, BreadthFirstShortestPath, DepthFirstSearch, Dijkstra
from .pregel import PregelPageRank
from .replay import TracePlayer

__all__ = [
    "AlgorithmConfig",
    "AlgorithmType",
    "BidirectionalBFS",
    "BreadthFirstShortestPath",
    "DepthFirstSearch",
    "Dijkstra",
    "GraphAlgorithmsEngine",
    "PageRank",
    "PregelPageRank",
    "TracePlayer",
    "load_algorithm_config",
    "partition_graph",
]
