"""Genetic engine: operators, population and generation statistics."""

from .genes import Genome, breed, random_genome, score
from .population import UNSCORED, BreedingPlan, Candidate, Population
from .statistics import GenerationStats, summarize_generation

__all__ = [
    "BreedingPlan",
    "Candidate",
    "GenerationStats",
    "Genome",
    "Population",
    "UNSCORED",
    "breed",
    "random_genome",
    "score",
    "summarize_generation",
]
