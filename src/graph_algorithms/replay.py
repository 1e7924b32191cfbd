from __future__ import annotations

from graph_model.models import AlgorithmResult, AlgorithmStep


class TracePlayer:
    """Read-only cursor over the steps of a finished run."""

    def __init__(self, result: AlgorithmResult) -> None:
        self._steps = tuple(result.steps)
        self.index = 0

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def current(self) -> AlgorithmStep | None:
        if not self._steps:
            return None
        return self._steps[self.index]

    @property
    def at_end(self) -> bool:
        return self.index >= len(self._steps) - 1

    def step_forward(self) -> AlgorithmStep | None:
        if not self.at_end:
            self.index += 1
        return self.current

    def step_backward(self) -> AlgorithmStep | None:
        if self.index > 0:
            self.index -= 1
        return self.current

    def jump_to(self, index: int) -> AlgorithmStep | None:
        if 0 <= index < len(self._steps):
            self.index = index
        return self.current

    def reset(self) -> AlgorithmStep | None:
        self.index = 0
        return self.current
