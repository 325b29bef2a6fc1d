from __future__ import annotations

import pytest

from evolution_lab.errors import ConfigurationError, InvalidSampleSize, LengthMismatch
from evolution_lab.ga.population import UNSCORED, BreedingPlan, Candidate, Population
from evolution_lab.randomization import SimulationRNG


def _with_fitness(values):
    population = Population.from_genomes([f"{idx:02d}" for idx in range(len(values))], alphabet="0123456789")
    for candidate, value in zip(population, values):
        candidate.fitness = value
    return population


def test_seed_fills_to_capacity_once(rng: SimulationRNG) -> None:
    population = Population(10, 4, "abc")
    assert population.seed(rng) == 10
    assert population.is_full
    genomes = population.genomes()
    assert all(len(genome) == 4 and set(genome) <= set("abc") for genome in genomes)
    assert all(candidate.fitness == UNSCORED for candidate in population)

    assert population.seed(rng) == 0
    assert population.genomes() == genomes


def test_evaluate_skips_scored_candidates(rng: SimulationRNG) -> None:
    population = Population(6, 3)
    population.seed(rng)
    population[0].fitness = 3
    assert population.evaluate("hey") == 5
    assert population[0].fitness == 3
    for candidate in list(population)[1:]:
        assert candidate.is_scored
        assert 0 <= candidate.fitness <= 3
    assert population.evaluate("hey") == 0


def test_rank_sorts_descending_through_adjacent_swaps() -> None:
    population = _with_fitness([2, 0, 3, 1])
    swaps = list(population.rank_steps())
    assert population.fitnesses() == [3, 2, 1, 0]
    assert swaps
    assert all(j == i + 1 for i, j in swaps)


def test_rank_needs_several_passes_for_reversed_order() -> None:
    population = _with_fitness(list(range(10)))
    swaps = population.rank()
    assert population.fitnesses() == list(range(9, -1, -1))
    # a reversed sequence needs one swap per inverted pair
    assert swaps == 45


def test_rank_never_swaps_equal_fitness() -> None:
    population = _with_fitness([1, 1, 1, 1, 1])
    before = population.genomes()
    assert population.rank() == 0
    assert population.genomes() == before


def test_rank_random_population_is_non_increasing(rng: SimulationRNG) -> None:
    population = Population(60, 5)
    population.seed(rng)
    population.evaluate("hello")
    before = sorted(population.genomes())
    population.rank()
    fitness = population.fitnesses()
    assert all(fitness[i] >= fitness[i + 1] for i in range(len(fitness) - 1))
    assert sorted(population.genomes()) == before
    assert population.best().fitness == max(fitness)


def test_cull_returns_vacated_slots() -> None:
    population = _with_fitness([5, 4, 3, 2, 1])
    assert population.cull(2) == range(2, 5)
    with pytest.raises(ConfigurationError):
        population.cull(0)
    with pytest.raises(ConfigurationError):
        population.cull(5)


def test_breed_generation_keeps_survivors_and_resets_children(rng: SimulationRNG) -> None:
    population = Population(12, 3)
    population.seed(rng)
    population.evaluate("hey")
    population.rank()
    survivors = [Candidate(c.genome, c.fitness) for c in list(population)[:4]]

    plans = population.breed_generation(4, 0.2, rng)

    assert [plan.slot for plan in plans] == list(range(4, 12))
    assert list(population)[:4] == survivors
    for slot in range(4, 12):
        assert population[slot].fitness == UNSCORED
        assert len(population[slot].genome) == 3
    for plan in plans:
        assert plan.parent_a != plan.parent_b
        assert 0 <= plan.parent_a < 4 and 0 <= plan.parent_b < 4


def test_breed_generation_requires_two_parents(rng: SimulationRNG) -> None:
    population = Population(5, 3)
    population.seed(rng)
    with pytest.raises(InvalidSampleSize) as exc:
        population.breed_generation(1, 0.2, rng)
    assert exc.value.available == 1


def test_install_rejects_wrong_length(rng: SimulationRNG) -> None:
    population = Population(4, 3)
    population.seed(rng)
    with pytest.raises(LengthMismatch):
        population.install(BreedingPlan(slot=3, parent_a=0, parent_b=1, child="toolong"))


def test_from_genomes_requires_equal_lengths() -> None:
    with pytest.raises(LengthMismatch):
        Population.from_genomes(["abc", "ab"])
