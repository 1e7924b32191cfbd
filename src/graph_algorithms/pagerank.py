from __future__ import annotations

import logging

from graph_model.models import AlgorithmMetrics, AlgorithmResult, Graph

from .trace import TraceRecorder, build_out_links, rank_node_states

logger = logging.getLogger("graph-algorithms")


def ranked_ids(ranks: dict[str, float]) -> list[str]:
    """Node ids by descending rank; ties keep graph order."""
    return [node_id for node_id, _ in sorted(ranks.items(), key=lambda item: item[1], reverse=True)]


class PageRank:
    """Power-iteration PageRank over the edge records of a graph.

    Runs a fixed number of iterations with no convergence exit. Rank held by
    nodes without outgoing edges is not redistributed, so the total mass can
    drop below 1 on graphs with dangling nodes.
    """

    name = "pagerank"
    time_complexity = "O(k * (V + E))"
    space_complexity = "O(V + E)"

    def run(self, graph: Graph, iterations: int = 20, damping_factor: float = 0.85) -> AlgorithmResult:
        graph.validate()

        n = len(graph.nodes)
        if n == 0:
            logger.info("algorithm=%s error=%s", self.name, "Empty graph")
            return AlgorithmResult.failure("Empty graph")

        trace = TraceRecorder(graph, mirror_undirected=False)
        out_links = build_out_links(graph)
        incoming: dict[str, list[str]] = {node_id: [] for node_id in graph.node_ids}
        for edge in graph.edges:
            incoming[edge.target].append(edge.source)

        ranks = {node_id: 1 / n for node_id in graph.node_ids}
        trace.record(
            f"Initializing PageRank. Each node starts with value {1 / n:.4f}",
            page_rank_values=ranks,
        )

        base = (1 - damping_factor) / n
        for iteration in range(iterations):
            new_ranks: dict[str, float] = {}
            for node_id in graph.node_ids:
                rank_sum = 0.0
                for source in incoming[node_id]:
                    rank_sum += ranks[source] / (len(out_links[source]) or 1)
                new_ranks[node_id] = base + damping_factor * rank_sum
            ranks.update(new_ranks)
            trace.node_states.update(rank_node_states(ranks))

            if iteration % 5 == 0 or iteration == iterations - 1:
                top = ", ".join(f"{trace.label(node_id)}: {ranks[node_id]:.4f}" for node_id in ranked_ids(ranks)[:3])
                trace.record(f"Iteration {iteration + 1}/{iterations}. Top nodes: {top}", page_rank_values=ranks)

        ordered = ranked_ids(ranks)
        leader = ordered[0]
        trace.record(
            f"PageRank complete! Highest: '{trace.label(leader)}' ({ranks[leader]:.4f})",
            page_rank_values=ranks,
        )

        logger.info("algorithm=%s iterations=%d steps=%d leader=%s", self.name, iterations, len(trace.steps), leader)
        return AlgorithmResult(
            steps=trace.steps,
            path=ordered,
            found=True,
            metrics=AlgorithmMetrics(
                time_complexity=self.time_complexity,
                space_complexity=self.space_complexity,
                visited_nodes=n,
                visited_edges=len(graph.edges),
            ),
        )
