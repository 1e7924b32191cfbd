from __future__ import annotations

from collections.abc import Iterable, Mapping

from graph_model.models import AlgorithmStep, EdgeState, Graph, NodeState, PartitionStats


def edge_key(source: str, target: str) -> str:
    return f"{source}-{target}"


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_adjacency(graph: Graph) -> dict[str, list[str]]:
    """Neighbour lists in edge insertion order; undirected edges count both ways."""
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in graph.node_ids}
    for edge in graph.edges:
        adjacency[edge.source].append(edge.target)
        if not graph.directed:
            adjacency[edge.target].append(edge.source)
    return adjacency


def build_reverse_adjacency(graph: Graph) -> dict[str, list[str]]:
    """Predecessor lists; identical to ``build_adjacency`` for undirected graphs."""
    if not graph.directed:
        return build_adjacency(graph)
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in graph.node_ids}
    for edge in graph.edges:
        adjacency[edge.target].append(edge.source)
    return adjacency


def build_weighted_adjacency(graph: Graph) -> dict[str, list[tuple[str, float]]]:
    adjacency: dict[str, list[tuple[str, float]]] = {node_id: [] for node_id in graph.node_ids}
    for edge in graph.edges:
        adjacency[edge.source].append((edge.target, edge.cost))
        if not graph.directed:
            adjacency[edge.target].append((edge.source, edge.cost))
    return adjacency


def build_out_links(graph: Graph) -> dict[str, list[str]]:
    """Outgoing neighbours following edge records only, ignoring ``directed``."""
    out_links: dict[str, list[str]] = {node_id: [] for node_id in graph.node_ids}
    for edge in graph.edges:
        out_links[edge.source].append(edge.target)
    return out_links


def rank_node_states(ranks: Mapping[str, float]) -> dict[str, NodeState]:
    if not ranks:
        return {}
    max_rank = max(ranks.values())
    states: dict[str, NodeState] = {}
    for node_id, rank in ranks.items():
        if rank >= max_rank * 0.8:
            states[node_id] = NodeState.PATH
        elif rank >= max_rank * 0.5:
            states[node_id] = NodeState.VISITING
        else:
            states[node_id] = NodeState.VISITED
    return states


def _frozen(items: Iterable[str] | None) -> tuple[str, ...] | None:
    return tuple(items) if items is not None else None


class TraceRecorder:
    """Working node/edge state for one run plus the steps recorded from it.

    ``record`` copies every mutable argument, so the engine may keep mutating
    ``node_states``/``edge_states`` and its tables after a step is taken.
    """

    def __init__(self, graph: Graph, mirror_undirected: bool = True) -> None:
        self.graph = graph
        self.node_states: dict[str, NodeState] = {node_id: NodeState.DEFAULT for node_id in graph.node_ids}
        self.edge_states: dict[str, EdgeState] = {}
        for edge in graph.edges:
            self.edge_states[edge_key(edge.source, edge.target)] = EdgeState.DEFAULT
            if mirror_undirected and not graph.directed:
                self.edge_states[edge_key(edge.target, edge.source)] = EdgeState.DEFAULT
        self.steps: list[AlgorithmStep] = []
        self._labels = {node.id: node.display_label for node in graph.nodes}

    def label(self, node_id: str) -> str:
        return self._labels.get(node_id, node_id)

    def labels(self, node_ids: Iterable[str]) -> str:
        return ", ".join(self.label(node_id) for node_id in node_ids)

    def set_node(self, node_id: str, state: NodeState) -> None:
        self.node_states[node_id] = state

    def set_edge(self, source: str, target: str, state: EdgeState) -> None:
        self.edge_states[edge_key(source, target)] = state

    def mark_path(self, path: list[str], edges_too: bool = True) -> None:
        for node_id in path:
            self.node_states[node_id] = NodeState.PATH
        if not edges_too:
            return
        for left, right in zip(path, path[1:]):
            self.set_edge(left, right, EdgeState.PATH)
            if not self.graph.directed:
                self.set_edge(right, left, EdgeState.PATH)

    def record(
        self,
        message: str,
        *,
        current_nodes: Iterable[str] | None = None,
        forward_frontier: Iterable[str] | None = None,
        backward_frontier: Iterable[str] | None = None,
        page_rank_values: Mapping[str, float] | None = None,
        distances: Mapping[str, float] | None = None,
        partition_stats: Mapping[int, PartitionStats] | None = None,
    ) -> AlgorithmStep:
        step = AlgorithmStep(
            node_states=dict(self.node_states),
            edge_states=dict(self.edge_states),
            message=message,
            current_nodes=_frozen(current_nodes),
            forward_frontier=_frozen(forward_frontier),
            backward_frontier=_frozen(backward_frontier),
            page_rank_values=dict(page_rank_values) if page_rank_values is not None else None,
            distances=dict(distances) if distances is not None else None,
            partition_stats=dict(partition_stats) if partition_stats is not None else None,
        )
        self.steps.append(step)
        return step
