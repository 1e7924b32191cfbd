from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum


class GraphIntegrityError(ValueError):
    """Raised when a graph reaches an engine with dangling edges or duplicate ids."""


class NodeState(str, Enum):
    DEFAULT = "default"
    SOURCE = "source"
    TARGET = "target"
    VISITING = "visiting"
    VISITED = "visited"
    PATH = "path"
    FORWARD_FRONTIER = "forward-frontier"
    BACKWARD_FRONTIER = "backward-frontier"


class EdgeState(str, Enum):
    DEFAULT = "default"
    EXPLORING = "exploring"
    PATH = "path"
    VISITED = "visited"


@dataclass(frozen=True, slots=True)
class Node:
    id: str
    x: float = 0.0
    y: float = 0.0
    label: str = ""
    partition_id: int | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.id


@dataclass(frozen=True, slots=True)
class Edge:
    source: str
    target: str
    weight: float | None = None

    @property
    def cost(self) -> float:
        return 1 if self.weight is None else self.weight


@dataclass(frozen=True, slots=True)
class Graph:
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    directed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    @property
    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def has_node(self, node_id: str) -> bool:
        return any(node.id == node_id for node in self.nodes)

    def label_for(self, node_id: str) -> str:
        for node in self.nodes:
            if node.id == node_id:
                return node.display_label
        return node_id

    def validate(self) -> None:
        duplicates = sorted(node_id for node_id, count in Counter(self.node_ids).items() if count > 1)
        if duplicates:
            raise GraphIntegrityError(f"duplicate node ids: {', '.join(duplicates)}")

        known = set(self.node_ids)
        for edge in self.edges:
            if edge.source not in known or edge.target not in known:
                raise GraphIntegrityError(f"edge {edge.source}->{edge.target} references an unknown node")


@dataclass(frozen=True, slots=True)
class PartitionStats:
    active_nodes: int = 0
    messages_sent: int = 0


@dataclass(frozen=True, slots=True)
class AlgorithmStep:
    """One recorded frame of an algorithm run.

    Steps are built by ``TraceRecorder`` from fresh copies of the engine's
    working maps, so nothing an engine does after recording can reach them.
    """

    node_states: dict[str, NodeState]
    edge_states: dict[str, EdgeState]
    message: str
    current_nodes: tuple[str, ...] | None = None
    forward_frontier: tuple[str, ...] | None = None
    backward_frontier: tuple[str, ...] | None = None
    page_rank_values: dict[str, float] | None = None
    distances: dict[str, float] | None = None
    partition_stats: dict[int, PartitionStats] | None = None


@dataclass(frozen=True, slots=True)
class AlgorithmMetrics:
    time_complexity: str
    space_complexity: str
    visited_nodes: int
    visited_edges: int
    path_length: int | None = None


@dataclass(slots=True)
class AlgorithmResult:
    steps: list[AlgorithmStep] = field(default_factory=list)
    path: list[str] = field(default_factory=list)
    found: bool = False
    error: str | None = None
    metrics: AlgorithmMetrics | None = None

    @classmethod
    def failure(cls, error: str) -> "AlgorithmResult":
        return cls(steps=[], path=[], found=False, error=error)
