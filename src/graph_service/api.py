from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from graph_algorithms.config import AlgorithmConfig, load_algorithm_config
from graph_algorithms.engine import AlgorithmType, GraphAlgorithmsEngine
from graph_algorithms.partitioning import partition_graph
from graph_model.samples import SAMPLE_GRAPHS, get_sample_graph
from graph_model.wire_models import AlgorithmResultValue, GraphValue

from .schemas import AlgorithmConfigValue, CompareRequest, PartitionRequest, RunRequest

logger = logging.getLogger("graph-service")

app = FastAPI(title="Graph Algorithm Trace Service")
config = load_algorithm_config()


def _engine_for(overrides: AlgorithmConfigValue | None) -> GraphAlgorithmsEngine:
    effective: AlgorithmConfig = overrides.apply(config) if overrides else config
    return GraphAlgorithmsEngine(effective)


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/algorithms")
def list_algorithms() -> list[str]:
    return [item.value for item in AlgorithmType]


@app.get("/graphs/samples")
def list_sample_graphs() -> list[str]:
    return list(SAMPLE_GRAPHS)


@app.get("/graphs/samples/{name}")
def get_sample(name: str) -> dict:
    graph = get_sample_graph(name)
    if graph is None:
        raise HTTPException(status_code=404, detail=f"Sample graph '{name}' not found")
    return GraphValue.from_domain(graph).to_exchange_dict()


@app.post("/algorithms/compare")
def compare_algorithms(payload: CompareRequest) -> dict[str, AlgorithmResultValue]:
    unknown = [name for name in payload.algorithms if GraphAlgorithmsEngine.resolve(name) is None]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown algorithm(s): {', '.join(unknown)}")

    results = _engine_for(payload.config).compare(
        payload.algorithms,
        payload.graph.to_domain(),
        payload.source,
        payload.target,
    )
    logger.info("compare algorithms=%s", ",".join(results))
    return {name: AlgorithmResultValue.from_domain(result) for name, result in results.items()}


@app.post("/algorithms/{algorithm}/run")
def run_algorithm(algorithm: str, payload: RunRequest) -> AlgorithmResultValue:
    kind = GraphAlgorithmsEngine.resolve(algorithm)
    if kind is None:
        raise HTTPException(status_code=404, detail=f"Unknown algorithm '{algorithm}'")

    result = _engine_for(payload.config).run(kind, payload.graph.to_domain(), payload.source, payload.target)
    return AlgorithmResultValue.from_domain(result)


@app.post("/graph/partition")
def post_partition(payload: PartitionRequest) -> dict:
    graph = partition_graph(payload.graph.to_domain(), payload.strategy, payload.num_partitions)
    return GraphValue.from_domain(graph).to_exchange_dict()
