from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

PartitionStrategy = Literal["hash", "range"]
PARTITION_STRATEGIES: tuple[str, ...] = ("hash", "range")


@dataclass(slots=True)
class AlgorithmConfig:
    damping_factor: float = 0.85
    max_iterations: int = 20
    num_partitions: int = 4
    partition_strategy: PartitionStrategy = "hash"

    def __post_init__(self) -> None:
        if not 0.0 <= self.damping_factor <= 1.0:
            raise ValueError(f"damping_factor must be within [0, 1], got {self.damping_factor}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.num_partitions < 1:
            raise ValueError(f"num_partitions must be positive, got {self.num_partitions}")
        if self.partition_strategy not in PARTITION_STRATEGIES:
            raise ValueError(f"partition_strategy must be one of {PARTITION_STRATEGIES}, got {self.partition_strategy!r}")


def load_algorithm_config() -> AlgorithmConfig:
    return AlgorithmConfig(
        damping_factor=float(os.getenv("ALGO_PAGERANK_DAMPING", "0.85")),
        max_iterations=int(os.getenv("ALGO_MAX_ITERATIONS", "20")),
        num_partitions=int(os.getenv("ALGO_NUM_PARTITIONS", "4")),
        partition_strategy=os.getenv("ALGO_PARTITION_STRATEGY", "hash").lower(),
    )
