from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class GenerationStats:
    iteration: int
    best: int
    mean: float
    worst: int
    std: float
    distinct: int

    def describe(self) -> str:
        return (
            f"gen={self.iteration} best={self.best} mean={self.mean:.2f} "
            f"worst={self.worst} std={self.std:.2f} distinct={self.distinct}"
        )


def summarize_generation(iteration: int, fitnesses: Sequence[int], genomes: Sequence[str]) -> GenerationStats:
    """Fitness summary over scored candidates only."""

    arr = np.asarray([value for value in fitnesses if value >= 0], dtype=np.float64)
    if arr.size == 0:
        return GenerationStats(iteration, best=-1, mean=0.0, worst=-1, std=0.0, distinct=len(set(genomes)))
    return GenerationStats(
        iteration=iteration,
        best=int(arr.max()),
        mean=float(arr.mean()),
        worst=int(arr.min()),
        std=float(arr.std()),
        distinct=len(set(genomes)),
    )


__all__ = ["GenerationStats", "summarize_generation"]
