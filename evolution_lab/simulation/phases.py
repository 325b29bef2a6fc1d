from __future__ import annotations

from enum import Enum


class Phase(Enum):
    SEED_POPULATION = "seed_population"
    COMPUTE_FITNESS = "compute_fitness"
    ORDER_BY_FITNESS = "order_by_fitness"
    REMOVE_UNFIT = "remove_unfit"
    BREED_NEW = "breed_new"
    SIMULATION_END = "simulation_end"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return self is Phase.SIMULATION_END


_LABELS = {
    Phase.SEED_POPULATION: "Seeding the population",
    Phase.COMPUTE_FITNESS: "Computing fitness",
    Phase.ORDER_BY_FITNESS: "Sorting by fitness",
    Phase.REMOVE_UNFIT: "Removing unfit candidates",
    Phase.BREED_NEW: "Creating new candidates",
    Phase.SIMULATION_END: "End of the Simulation Reached!!",
}


__all__ = ["Phase"]
