from __future__ import annotations

from pathlib import Path
import sys
from itertools import cycle
from typing import Iterable, List, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from evolution_lab.config import SimulationConfig, TimingConfig
from evolution_lab.randomization import SimulationRNG


class ScriptedRNG:
    """Replays fixed symbol choices, uniform samples and parent pairs."""

    def __init__(
        self,
        choices: Iterable[str] = ("a",),
        randoms: Iterable[float] = (0.0,),
        samples: Iterable[Sequence[int]] = ((0, 1),),
    ) -> None:
        self._choices = cycle(list(choices))
        self._randoms = cycle(list(randoms))
        self._samples = cycle([list(pair) for pair in samples])

    def choice(self, seq):
        return next(self._choices)

    def random(self) -> float:
        return next(self._randoms)

    def sample(self, population, k: int) -> List[int]:
        picked = next(self._samples)
        assert len(picked) == k
        return list(picked)


@pytest.fixture()
def rng() -> SimulationRNG:
    return SimulationRNG(1234)


@pytest.fixture()
def demo_config() -> SimulationConfig:
    return SimulationConfig(
        target="hey",
        population_size=60,
        survivors_kept=8,
        display_columns=5,
        mutation_probability=0.2,
        seed=11,
        timing=TimingConfig.instant(),
    )


@pytest.fixture()
def binary_config() -> SimulationConfig:
    return SimulationConfig(
        target="ab",
        population_size=4,
        survivors_kept=2,
        display_columns=2,
        mutation_probability=0.0,
        alphabet="ab",
        timing=TimingConfig.instant(),
    )


@pytest.fixture()
def binary_rng() -> ScriptedRNG:
    # seeds aa, bb, aa, bb; every child takes position 0 from parent A and position 1 from parent B
    return ScriptedRNG(choices="aabb", randoms=(0.1, 0.9), samples=((0, 1),))
