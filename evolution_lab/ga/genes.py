"""Pure genetic operators for string genomes."""

from __future__ import annotations

from typing import Sequence

from ..config import DEFAULT_ALPHABET
from ..errors import LengthMismatch
from ..randomization import SimulationRNG

Genome = str


def score(genome: Genome, target: str) -> int:
    """Count positions where ``genome`` matches ``target``."""

    if len(genome) != len(target):
        raise LengthMismatch(len(target), len(genome))
    return sum(1 for ours, theirs in zip(genome, target) if ours == theirs)


def random_genome(length: int, rng: SimulationRNG, alphabet: Sequence[str] = DEFAULT_ALPHABET) -> Genome:
    return "".join(rng.choice(alphabet) for _ in range(length))


def breed(
    parent_a: Genome,
    parent_b: Genome,
    mutation_probability: float,
    rng: SimulationRNG,
    alphabet: Sequence[str] = DEFAULT_ALPHABET,
) -> Genome:
    """Uniform crossover with per-position mutation.

    Each position draws one sample in [0, 1). Samples above
    ``1 - mutation_probability`` mutate to a fresh symbol, samples above half of
    that threshold copy ``parent_b`` and the rest copy ``parent_a``, so both
    parents contribute with equal weight.
    """

    if len(parent_a) != len(parent_b):
        raise LengthMismatch(len(parent_a), len(parent_b), what="parent_b")
    inherit = 1.0 - mutation_probability
    inherit_a = inherit / 2.0
    child = []
    for char_a, char_b in zip(parent_a, parent_b):
        sample = rng.random()
        if sample > inherit:
            child.append(rng.choice(alphabet))
        elif sample > inherit_a:
            child.append(char_b)
        else:
            child.append(char_a)
    return "".join(child)


__all__ = ["Genome", "breed", "random_genome", "score"]
