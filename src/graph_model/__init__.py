from .models import (
    AlgorithmMetrics,
    AlgorithmResult,
    AlgorithmStep,
    Edge,
    EdgeState,
    Graph,
    GraphIntegrityError,
    Node,
    NodeState,
    PartitionStats,
)
from .samples import SAMPLE_GRAPHS, get_sample_graph
from .wire_models import (
    AlgorithmMetricsValue,
    AlgorithmResultValue,
    AlgorithmStepValue,
    EdgeValue,
    GraphValue,
    NodeValue,
    PartitionStatsValue,
    dump_graph_json,
    load_graph_json,
)

__all__ = [
    "AlgorithmMetrics",
    "AlgorithmMetricsValue",
    "AlgorithmResult",
    "AlgorithmResultValue",
    "AlgorithmStep",
    "AlgorithmStepValue",
    "Edge",
    "EdgeState",
    "EdgeValue",
    "Graph",
    "GraphIntegrityError",
    "GraphValue",
    "Node",
    "NodeState",
    "NodeValue",
    "PartitionStats",
    "PartitionStatsValue",
    "SAMPLE_GRAPHS",
    "dump_graph_json",
    "get_sample_graph",
    "load_graph_json",
]
