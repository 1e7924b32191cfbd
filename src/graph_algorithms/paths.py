from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass

from graph_model.models import AlgorithmMetrics, AlgorithmResult, EdgeState, Graph, NodeState

from .trace import (
    TraceRecorder,
    build_adjacency,
    build_reverse_adjacency,
    build_weighted_adjacency,
    format_number,
)

logger = logging.getLogger("graph-algorithms")


@dataclass(slots=True)
class _Counters:
    nodes: int = 0
    edges: int = 0


class PathEngine:
    """Shared run contract for the source/target search engines.

    Subclasses implement ``_search``; validation and the source == target
    short circuit happen here before any adjacency is built.
    """

    name = "path"
    time_complexity = "O(V + E)"
    space_complexity = "O(V)"

    def run(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        graph.validate()

        if not graph.has_node(source_id):
            result = AlgorithmResult.failure(f"Source node '{source_id}' not found")
        elif not graph.has_node(target_id):
            result = AlgorithmResult.failure(f"Target node '{target_id}' not found")
        elif source_id == target_id:
            trace = TraceRecorder(graph)
            trace.set_node(source_id, NodeState.PATH)
            trace.record("Source equals target - trivial path")
            result = self._finish(trace, [source_id], _Counters(nodes=1))
        else:
            result = self._search(graph, source_id, target_id)

        logger.info(
            "algorithm=%s source=%s target=%s steps=%d found=%s error=%s",
            self.name,
            source_id,
            target_id,
            len(result.steps),
            result.found,
            result.error,
        )
        return result

    def _search(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        raise NotImplementedError

    def _metrics(self, counters: _Counters, path: list[str]) -> AlgorithmMetrics:
        return AlgorithmMetrics(
            time_complexity=self.time_complexity,
            space_complexity=self.space_complexity,
            visited_nodes=counters.nodes,
            visited_edges=counters.edges,
            path_length=len(path) - 1 if path else None,
        )

    def _finish(self, trace: TraceRecorder, path: list[str], counters: _Counters) -> AlgorithmResult:
        return AlgorithmResult(steps=trace.steps, path=path, found=True, metrics=self._metrics(counters, path))

    def _not_found(self, trace: TraceRecorder, message: str, counters: _Counters) -> AlgorithmResult:
        trace.record(message)
        return AlgorithmResult(steps=trace.steps, path=[], found=False, metrics=self._metrics(counters, []))

    @staticmethod
    def _describe(trace: TraceRecorder, path: list[str]) -> str:
        return " → ".join(trace.label(node_id) for node_id in path)


class BidirectionalBFS(PathEngine):
    """Breadth-first search run from both ends, one full level per side per round."""

    name = "bidirectional-bfs"
    time_complexity = "O(b^(d/2))"
    space_complexity = "O(b^(d/2))"

    def _search(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        trace = TraceRecorder(graph)
        adjacency = build_adjacency(graph)
        predecessors = build_reverse_adjacency(graph)
        counters = _Counters()

        forward_queue: deque[str] = deque([source_id])
        forward_parent: dict[str, str | None] = {source_id: None}
        backward_queue: deque[str] = deque([target_id])
        backward_parent: dict[str, str | None] = {target_id: None}
        frontiers = (forward_queue, backward_queue)

        trace.set_node(source_id, NodeState.SOURCE)
        trace.set_node(target_id, NodeState.TARGET)
        trace.record(
            f"Starting bidirectional BFS from '{trace.label(source_id)}' and '{trace.label(target_id)}'",
            forward_frontier=[source_id],
            backward_frontier=[target_id],
        )

        meeting: str | None = None
        while forward_queue and backward_queue and meeting is None:
            meeting = self._expand_level(
                trace, adjacency, forward_queue, forward_parent, backward_parent,
                NodeState.FORWARD_FRONTIER, NodeState.SOURCE, frontiers, counters,
            )
            if meeting is not None:
                break
            trace.record(
                f"Forward frontier expanded. Queue: [{trace.labels(forward_queue)}]",
                forward_frontier=forward_queue,
                backward_frontier=backward_queue,
            )

            meeting = self._expand_level(
                trace, predecessors, backward_queue, backward_parent, forward_parent,
                NodeState.BACKWARD_FRONTIER, NodeState.TARGET, frontiers, counters, reverse=graph.directed,
            )
            if meeting is not None:
                break
            trace.record(
                f"Backward frontier expanded. Queue: [{trace.labels(backward_queue)}]",
                forward_frontier=forward_queue,
                backward_frontier=backward_queue,
            )

        if meeting is None:
            return self._not_found(trace, "No path exists between nodes", counters)

        path: list[str] = []
        node: str | None = meeting
        while node is not None:
            path.append(node)
            node = forward_parent.get(node)
        path.reverse()

        node = backward_parent.get(meeting)
        while node is not None:
            path.append(node)
            node = backward_parent.get(node)

        trace.mark_path(path)
        trace.record(f"Path found! Length: {len(path) - 1} edges. Path: {self._describe(trace, path)}")
        return self._finish(trace, path, counters)

    @staticmethod
    def _expand_level(
        trace: TraceRecorder,
        adjacency: dict[str, list[str]],
        queue: deque[str],
        parents: dict[str, str | None],
        other_parents: dict[str, str | None],
        frontier_state: NodeState,
        anchor_state: NodeState,
        frontiers: tuple[deque[str], deque[str]],
        counters: _Counters,
        reverse: bool = False,
    ) -> str | None:
        for _ in range(len(queue)):
            current = queue.popleft()
            counters.nodes += 1
            if trace.node_states[current] != anchor_state:
                trace.set_node(current, frontier_state)

            for neighbor in adjacency[current]:
                counters.edges += 1
                if neighbor in parents:
                    continue
                parents[neighbor] = current
                queue.append(neighbor)
                if reverse:
                    trace.set_edge(neighbor, current, EdgeState.EXPLORING)
                else:
                    trace.set_edge(current, neighbor, EdgeState.EXPLORING)

                if neighbor in other_parents:
                    trace.record(
                        f"Searches meet at node '{neighbor}'!",
                        forward_frontier=frontiers[0],
                        backward_frontier=frontiers[1],
                    )
                    return neighbor
        return None


class Dijkstra(PathEngine):
    """Dijkstra's algorithm with a linear scan of the unvisited set.

    The scan walks unvisited nodes in graph order and keeps the first strict
    minimum, which fixes tie-breaking and therefore the recorded trace.
    """

    name = "dijkstra"
    time_complexity = "O(V^2 + E)"
    space_complexity = "O(V)"

    def _search(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        trace = TraceRecorder(graph)
        adjacency = build_weighted_adjacency(graph)
        counters = _Counters()

        distances: dict[str, float] = {}
        previous: dict[str, str | None] = {}
        unvisited: dict[str, None] = {}
        for node_id in graph.node_ids:
            distances[node_id] = 0 if node_id == source_id else math.inf
            previous[node_id] = None
            unvisited[node_id] = None

        trace.set_node(source_id, NodeState.SOURCE)
        trace.set_node(target_id, NodeState.TARGET)
        trace.record(
            f"Starting Dijkstra from '{trace.label(source_id)}'. All distances initialized to ∞ except source (0)",
            distances=distances,
        )

        while unvisited:
            current: str | None = None
            min_dist = math.inf
            for node_id in unvisited:
                if distances[node_id] < min_dist:
                    min_dist = distances[node_id]
                    current = node_id

            if current is None:
                return self._not_found(trace, "No path exists - remaining nodes unreachable", counters)

            counters.nodes += 1
            if current == target_id:
                path: list[str] = []
                node: str | None = target_id
                while node is not None:
                    path.append(node)
                    node = previous[node]
                path.reverse()

                trace.mark_path(path)
                trace.record(
                    f"Shortest path found! Total distance: {format_number(distances[target_id])}. "
                    f"Path: {self._describe(trace, path)}",
                    distances=distances,
                )
                return self._finish(trace, path, counters)

            del unvisited[current]
            if current != source_id:
                trace.set_node(current, NodeState.VISITING)
            trace.record(
                f"Visiting '{trace.label(current)}' (distance: {format_number(distances[current])})",
                distances=distances,
                current_nodes=[current],
            )

            for neighbor, weight in adjacency[current]:
                if neighbor not in unvisited:
                    continue
                counters.edges += 1
                trace.set_edge(current, neighbor, EdgeState.EXPLORING)

                candidate = distances[current] + weight
                if candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    trace.record(
                        f"Updated distance to '{trace.label(neighbor)}': {format_number(candidate)} "
                        f"(via '{trace.label(current)}')",
                        distances=distances,
                    )

            if current != source_id:
                trace.set_node(current, NodeState.VISITED)

        return self._not_found(trace, "Target not reachable", counters)


@dataclass(slots=True)
class _Frame:
    node_id: str
    cursor: int = 0


class DepthFirstSearch(PathEngine):
    """Depth-first search driven by an explicit frame stack.

    Each frame keeps a cursor into its node's neighbour list, so the visit
    order and backtracking steps match the recursive formulation without
    growing the interpreter stack.
    """

    name = "dfs"

    def _search(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        trace = TraceRecorder(graph)
        adjacency = build_adjacency(graph)
        counters = _Counters()
        visited: set[str] = set()
        path: list[str] = []

        trace.set_node(source_id, NodeState.SOURCE)
        trace.set_node(target_id, NodeState.TARGET)
        trace.record(f"Starting DFS from '{trace.label(source_id)}'")

        def enter(node_id: str) -> bool:
            visited.add(node_id)
            path.append(node_id)
            counters.nodes += 1
            if node_id not in (source_id, target_id):
                trace.set_node(node_id, NodeState.VISITING)
            trace.record(
                f"Visiting '{trace.label(node_id)}'. Stack: [{trace.labels(path)}]",
                current_nodes=[node_id],
            )
            return node_id == target_id

        found = enter(source_id)
        stack = [_Frame(source_id)]
        while stack and not found:
            frame = stack[-1]
            neighbors = adjacency[frame.node_id]
            descended = False
            while frame.cursor < len(neighbors):
                neighbor = neighbors[frame.cursor]
                frame.cursor += 1
                if neighbor in visited:
                    continue
                counters.edges += 1
                trace.set_edge(frame.node_id, neighbor, EdgeState.EXPLORING)
                if enter(neighbor):
                    found = True
                else:
                    stack.append(_Frame(neighbor))
                descended = True
                break

            if descended:
                continue

            stack.pop()
            path.pop()
            if frame.node_id not in (source_id, target_id):
                trace.set_node(frame.node_id, NodeState.VISITED)
            trace.record(f"Backtracking from '{trace.label(frame.node_id)}'")

        if not found:
            return self._not_found(trace, "No path exists", counters)

        trace.mark_path(path)
        trace.record(f"Path found! Length: {len(path) - 1} edges. Path: {self._describe(trace, path)}")
        return self._finish(trace, list(path), counters)


class BreadthFirstShortestPath(PathEngine):
    """Single-queue BFS that stops at the first discovery of the target."""

    name = "shortest-path"

    def _search(self, graph: Graph, source_id: str, target_id: str) -> AlgorithmResult:
        trace = TraceRecorder(graph)
        adjacency = build_adjacency(graph)
        counters = _Counters()

        queue: deque[str] = deque([source_id])
        parents: dict[str, str | None] = {source_id: None}

        trace.set_node(source_id, NodeState.SOURCE)
        trace.set_node(target_id, NodeState.TARGET)
        trace.record(f"Starting BFS from '{trace.label(source_id)}'")

        while queue:
            current = queue.popleft()
            counters.nodes += 1
            if current not in (source_id, target_id):
                trace.set_node(current, NodeState.VISITING)
            trace.record(
                f"Visiting '{trace.label(current)}'. Queue: [{trace.labels(queue)}]",
                current_nodes=[current],
            )

            for neighbor in adjacency[current]:
                counters.edges += 1
                if neighbor in parents:
                    continue
                parents[neighbor] = current
                queue.append(neighbor)
                trace.set_edge(current, neighbor, EdgeState.EXPLORING)

                if neighbor == target_id:
                    path: list[str] = []
                    node: str | None = target_id
                    while node is not None:
                        path.append(node)
                        node = parents[node]
                    path.reverse()

                    trace.mark_path(path)
                    trace.record(
                        f"Shortest path found! Length: {len(path) - 1} edges. Path: {self._describe(trace, path)}"
                    )
                    counters.nodes += 1
                    return self._finish(trace, path, counters)

            if current not in (source_id, target_id):
                trace.set_node(current, NodeState.VISITED)

        return self._not_found(trace, "No path exists", counters)
