from __future__ import annotations

from dataclasses import replace
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from graph_algorithms.config import AlgorithmConfig
from graph_model.wire_models import GraphValue


class AlgorithmConfigValue(BaseModel):
    """Per-request overrides; fields left unset fall back to the service config."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    damping_factor: float | None = Field(None, ge=0.0, le=1.0, alias="dampingFactor")
    max_iterations: int | None = Field(None, ge=1, alias="maxIterations")
    num_partitions: int | None = Field(None, ge=1, alias="numPartitions")
    partition_strategy: Literal["hash", "range"] | None = Field(None, alias="partitionStrategy")

    def apply(self, base: AlgorithmConfig) -> AlgorithmConfig:
        overrides = self.model_dump(exclude_none=True)
        return replace(base, **overrides) if overrides else base


class RunRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    graph: GraphValue
    source: str | None = None
    target: str | None = None
    config: AlgorithmConfigValue | None = None


class CompareRequest(RunRequest):
    algorithms: list[str] = Field(..., min_length=1, description="Algorithm names, run independently")


class PartitionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    graph: GraphValue
    strategy: Literal["hash", "range"] = "hash"
    num_partitions: int = Field(1, ge=1, alias="numPartitions")
