from __future__ import annotations

import logging
import math
from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import models

logger = logging.getLogger("graph-model")


def distance_to_wire(value: float) -> float | None:
    return None if math.isinf(value) else value


def distance_from_wire(value: float | None) -> float:
    return math.inf if value is None else value


class WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class NodeValue(WireModel):
    id: str
    x: float = 0.0
    y: float = 0.0
    label: str | None = None
    partition_id: int | None = Field(default=None, alias="partitionId")

    @classmethod
    def from_domain(cls, node: models.Node) -> "NodeValue":
        return cls(id=node.id, x=node.x, y=node.y, label=node.display_label, partition_id=node.partition_id)

    def to_domain(self) -> models.Node:
        return models.Node(
            id=self.id,
            x=self.x,
            y=self.y,
            label=self.label if self.label is not None else self.id,
            partition_id=self.partition_id,
        )


class EdgeValue(WireModel):
    source: str
    target: str
    weight: float | None = None

    @classmethod
    def from_domain(cls, edge: models.Edge) -> "EdgeValue":
        return cls(source=edge.source, target=edge.target, weight=edge.weight)

    def to_domain(self) -> models.Edge:
        return models.Edge(source=self.source, target=self.target, weight=self.weight)


class GraphValue(WireModel):
    """Graph exchange format: ``{nodes, edges, directed}``."""

    nodes: list[NodeValue] = Field(default_factory=list)
    edges: list[EdgeValue] = Field(default_factory=list)
    directed: bool = False

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "GraphValue":
        duplicates = sorted(node_id for node_id, count in Counter(n.id for n in self.nodes).items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate node ids: {', '.join(duplicates)}")
        return self

    @classmethod
    def from_domain(cls, graph: models.Graph) -> "GraphValue":
        return cls(
            nodes=[NodeValue.from_domain(item) for item in graph.nodes],
            edges=[EdgeValue.from_domain(item) for item in graph.edges],
            directed=graph.directed,
        )

    def to_domain(self) -> models.Graph:
        known = {node.id for node in self.nodes}
        edges = []
        dropped = 0
        for item in self.edges:
            if item.source not in known or item.target not in known:
                dropped += 1
                continue
            edges.append(item.to_domain())
        if dropped:
            logger.warning("dropped_edges=%d reason=unknown endpoint", dropped)

        return models.Graph(
            nodes=tuple(item.to_domain() for item in self.nodes),
            edges=tuple(edges),
            directed=self.directed,
        )

    def to_exchange_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def load_graph_json(raw: str | bytes) -> models.Graph:
    return GraphValue.model_validate_json(raw).to_domain()


def dump_graph_json(graph: models.Graph, indent: int | None = 2) -> str:
    return GraphValue.from_domain(graph).model_dump_json(by_alias=True, exclude_none=True, indent=indent)


class PartitionStatsValue(WireModel):
    active_nodes: int
    messages_sent: int

    @classmethod
    def from_domain(cls, stats: models.PartitionStats) -> "PartitionStatsValue":
        return cls(active_nodes=stats.active_nodes, messages_sent=stats.messages_sent)

    def to_domain(self) -> models.PartitionStats:
        return models.PartitionStats(**self.model_dump())


class AlgorithmStepValue(WireModel):
    node_states: dict[str, models.NodeState]
    edge_states: dict[str, models.EdgeState]
    message: str
    current_nodes: list[str] | None = None
    forward_frontier: list[str] | None = None
    backward_frontier: list[str] | None = None
    page_rank_values: dict[str, float] | None = None
    distances: dict[str, float | None] | None = Field(default=None, description="null means unreachable")
    partition_stats: dict[int, PartitionStatsValue] | None = None

    @staticmethod
    def _listed(items: tuple[str, ...] | None) -> list[str] | None:
        return list(items) if items is not None else None

    @staticmethod
    def _tupled(items: list[str] | None) -> tuple[str, ...] | None:
        return tuple(items) if items is not None else None

    @classmethod
    def from_domain(cls, step: models.AlgorithmStep) -> "AlgorithmStepValue":
        return cls(
            node_states=dict(step.node_states),
            edge_states=dict(step.edge_states),
            message=step.message,
            current_nodes=cls._listed(step.current_nodes),
            forward_frontier=cls._listed(step.forward_frontier),
            backward_frontier=cls._listed(step.backward_frontier),
            page_rank_values=dict(step.page_rank_values) if step.page_rank_values is not None else None,
            distances=(
                {key: distance_to_wire(value) for key, value in step.distances.items()}
                if step.distances is not None
                else None
            ),
            partition_stats=(
                {key: PartitionStatsValue.from_domain(value) for key, value in step.partition_stats.items()}
                if step.partition_stats is not None
                else None
            ),
        )

    def to_domain(self) -> models.AlgorithmStep:
        return models.AlgorithmStep(
            node_states=dict(self.node_states),
            edge_states=dict(self.edge_states),
            message=self.message,
            current_nodes=self._tupled(self.current_nodes),
            forward_frontier=self._tupled(self.forward_frontier),
            backward_frontier=self._tupled(self.backward_frontier),
            page_rank_values=dict(self.page_rank_values) if self.page_rank_values is not None else None,
            distances=(
                {key: distance_from_wire(value) for key, value in self.distances.items()}
                if self.distances is not None
                else None
            ),
            partition_stats=(
                {key: value.to_domain() for key, value in self.partition_stats.items()}
                if self.partition_stats is not None
                else None
            ),
        )


class AlgorithmMetricsValue(WireModel):
    time_complexity: str
    space_complexity: str
    visited_nodes: int
    visited_edges: int
    path_length: int | None = None

    @classmethod
    def from_domain(cls, metrics: models.AlgorithmMetrics) -> "AlgorithmMetricsValue":
        return cls(
            time_complexity=metrics.time_complexity,
            space_complexity=metrics.space_complexity,
            visited_nodes=metrics.visited_nodes,
            visited_edges=metrics.visited_edges,
            path_length=metrics.path_length,
        )

    def to_domain(self) -> models.AlgorithmMetrics:
        return models.AlgorithmMetrics(**self.model_dump())


class AlgorithmResultValue(WireModel):
    steps: list[AlgorithmStepValue] = Field(default_factory=list)
    path: list[str] = Field(default_factory=list)
    found: bool
    error: str | None = None
    metrics: AlgorithmMetricsValue | None = None

    @classmethod
    def from_domain(cls, result: models.AlgorithmResult) -> "AlgorithmResultValue":
        return cls(
            steps=[AlgorithmStepValue.from_domain(item) for item in result.steps],
            path=list(result.path),
            found=result.found,
            error=result.error,
            metrics=AlgorithmMetricsValue.from_domain(result.metrics) if result.metrics else None,
        )

    def to_domain(self) -> models.AlgorithmResult:
        return models.AlgorithmResult(
            steps=[item.to_domain() for item in self.steps],
            path=list(self.path),
            found=self.found,
            error=self.error,
            metrics=self.metrics.to_domain() if self.metrics else None,
        )
