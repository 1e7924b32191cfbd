from __future__ import annotations

import logging
import math
from dataclasses import replace

from graph_model.models import Graph

from .config import PARTITION_STRATEGIES, PartitionStrategy

logger = logging.getLogger("graph-algorithms")


def _utf16_units(text: str) -> list[int]:
    units: list[int] = []
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            units.append(0xD800 + (code >> 10))
            units.append(0xDC00 + (code & 0x3FF))
        else:
            units.append(code)
    return units


def string_hash(text: str) -> int:
    """``hash = hash * 31 + unit`` over UTF-16 code units, as a signed 32-bit int."""
    value = 0
    for unit in _utf16_units(text):
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def hash_partition_id(node_id: str, num_partitions: int) -> int:
    return abs(string_hash(node_id)) % num_partitions


def partition_graph(graph: Graph, strategy: PartitionStrategy, num_partitions: int) -> Graph:
    """Return a copy of ``graph`` with every node's ``partition_id`` assigned.

    Assignment is recomputed from scratch on each call; any partition ids
    already present on the input are ignored. Node order is preserved.
    """
    if strategy not in PARTITION_STRATEGIES:
        raise ValueError(f"unknown partition strategy {strategy!r}")

    if num_partitions <= 1:
        assignment = {node_id: 0 for node_id in graph.node_ids}
    elif strategy == "hash":
        assignment = {node_id: hash_partition_id(node_id, num_partitions) for node_id in graph.node_ids}
    else:
        ordered = sorted(graph.node_ids)
        chunk_size = math.ceil(len(ordered) / num_partitions)
        assignment = {node_id: index // chunk_size for index, node_id in enumerate(ordered)}

    logger.debug("partitioned nodes=%d strategy=%s partitions=%d", len(assignment), strategy, num_partitions)
    return replace(
        graph,
        nodes=tuple(replace(node, partition_id=assignment[node.id]) for node in graph.nodes),
    )
