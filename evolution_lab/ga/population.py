from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from ..config import DEFAULT_ALPHABET
from ..errors import ConfigurationError, InvalidSampleSize, LengthMismatch
from ..randomization import SimulationRNG
from .genes import Genome, breed, random_genome, score

LOGGER = logging.getLogger("evolution.population")

UNSCORED = -1


@dataclass
class Candidate:
    """One genome and its fitness; ``-1`` marks a candidate not yet scored."""

    genome: Genome
    fitness: int = UNSCORED

    @property
    def is_scored(self) -> bool:
        return self.fitness != UNSCORED

    def evaluate(self, target: str) -> int:
        self.fitness = score(self.genome, target)
        return self.fitness


@dataclass(frozen=True)
class BreedingPlan:
    slot: int
    parent_a: int
    parent_b: int
    child: Genome


class Population:
    """Fixed-capacity ordered sequence of candidates, mutated in place."""

    def __init__(self, capacity: int, genome_length: int, alphabet: Sequence[str] = DEFAULT_ALPHABET) -> None:
        if capacity <= 0:
            raise ConfigurationError("population capacity must be positive")
        self.capacity = capacity
        self.genome_length = genome_length
        self.alphabet = alphabet
        self._candidates: List[Candidate] = []

    @classmethod
    def from_genomes(cls, genomes: Sequence[Genome], alphabet: Sequence[str] = DEFAULT_ALPHABET) -> "Population":
        if not genomes:
            raise ConfigurationError("at least one genome is required")
        length = len(genomes[0])
        population = cls(len(genomes), length, alphabet)
        for genome in genomes:
            if len(genome) != length:
                raise LengthMismatch(length, len(genome))
            population._candidates.append(Candidate(genome))
        return population

    def __len__(self) -> int:
        return len(self._candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self._candidates[index]

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    @property
    def is_full(self) -> bool:
        return len(self._candidates) >= self.capacity

    def genomes(self) -> List[Genome]:
        return [candidate.genome for candidate in self._candidates]

    def fitnesses(self) -> List[int]:
        return [candidate.fitness for candidate in self._candidates]

    def seed(self, rng: SimulationRNG) -> int:
        """Fill up to capacity with random unscored candidates; returns how many were added."""

        added = 0
        while len(self._candidates) < self.capacity:
            genome = random_genome(self.genome_length, rng, self.alphabet)
            self._candidates.append(Candidate(genome))
            added += 1
        if added:
            LOGGER.debug("seeded %d candidate(s)", added)
        return added

    def unscored_indices(self) -> List[int]:
        return [idx for idx, candidate in enumerate(self._candidates) if not candidate.is_scored]

    def evaluate(self, target: str) -> int:
        """Score every unscored candidate; already scored ones are left alone."""

        indices = self.unscored_indices()
        for idx in indices:
            self._candidates[idx].evaluate(target)
        return len(indices)

    def rank_steps(self) -> Iterator[Tuple[int, int]]:
        """Odd-even transposition sort, descending by fitness.

        Yields each ``(i, i + 1)`` pair right after it has been swapped so the
        caller can observe the sort one swap at a time. Equal fitness never
        swaps. Sorting stops once an even and an odd sweep in a row are quiet.
        """

        candidates = self._candidates
        size = len(candidates)
        quiet_sweeps = 0
        odd = False
        while size > 1 and quiet_sweeps < 2:
            swapped = False
            for i in range(1 if odd else 0, size - 1, 2):
                if candidates[i].fitness >= candidates[i + 1].fitness:
                    continue
                candidates[i], candidates[i + 1] = candidates[i + 1], candidates[i]
                swapped = True
                yield i, i + 1
            quiet_sweeps = 0 if swapped else quiet_sweeps + 1
            odd = not odd

    def rank(self) -> int:
        swaps = sum(1 for _ in self.rank_steps())
        LOGGER.debug("ranked population with %d swap(s)", swaps)
        return swaps

    def best(self) -> Candidate:
        if not self._candidates:
            raise IndexError("population is empty")
        return self._candidates[0]

    def cull(self, keep: int) -> range:
        """Return the slots ``[keep, size)`` that breeding will overwrite."""

        if not 0 < keep < len(self._candidates):
            raise ConfigurationError(f"cannot keep {keep} of {len(self._candidates)} candidates")
        return range(keep, len(self._candidates))

    def plan_child(
        self,
        slot: int,
        keep: int,
        mutation_probability: float,
        rng: SimulationRNG,
    ) -> BreedingPlan:
        if keep < 2:
            raise InvalidSampleSize(keep)
        parent_a, parent_b = rng.sample(range(keep), 2)
        child = breed(
            self._candidates[parent_a].genome,
            self._candidates[parent_b].genome,
            mutation_probability,
            rng,
            self.alphabet,
        )
        return BreedingPlan(slot=slot, parent_a=parent_a, parent_b=parent_b, child=child)

    def install(self, plan: BreedingPlan) -> Candidate:
        if len(plan.child) != self.genome_length:
            raise LengthMismatch(self.genome_length, len(plan.child))
        candidate = Candidate(plan.child)
        self._candidates[plan.slot] = candidate
        return candidate

    def breed_generation(
        self,
        keep: int,
        mutation_probability: float,
        rng: SimulationRNG,
    ) -> List[BreedingPlan]:
        """Replace every slot in ``[keep, size)`` with a freshly bred child."""

        if keep < 2:
            raise InvalidSampleSize(keep)
        plans: List[BreedingPlan] = []
        for slot in self.cull(keep):
            plan = self.plan_child(slot, keep, mutation_probability, rng)
            self.install(plan)
            plans.append(plan)
        return plans


__all__ = ["BreedingPlan", "Candidate", "Population", "UNSCORED"]
