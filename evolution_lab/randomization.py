from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class SimulationRNG:
    """Explicit random source threaded through seeding, mutation and selection."""

    seed: Optional[int] = None
    _random: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("choice on empty sequence")
        return self._random.choice(seq)

    def random(self) -> float:
        return self._random.random()

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        return self._random.sample(population, k)


def resolve_seed(seed: Optional[int]) -> int:
    if seed is not None:
        return int(seed)
    return random.SystemRandom().randrange(0, 0xFFFFFFFF)


__all__ = ["SimulationRNG", "resolve_seed"]
