"""Phase state machine driving one evolution run.

Every call to :func:`transition` executes exactly one phase against the
simulation state and returns the render events that narrate it. Nothing here
draws or sleeps; the runner replays the events against a render port, which
keeps the sequencing testable without a terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..config import SimulationConfig
from ..errors import SimulationFinished
from ..ga.population import Population
from ..ga.statistics import GenerationStats, summarize_generation
from ..randomization import SimulationRNG
from .events import DelayEvent, DelayKind, FrameEvent, RenderEvent, SummaryEvent
from .phases import Phase
from .presentation import PresentationState, compose_snapshot

LOGGER = logging.getLogger("evolution.machine")


@dataclass
class SimulationState:
    config: SimulationConfig
    rng: SimulationRNG
    population: Population
    presentation: PresentationState = field(default_factory=PresentationState)
    phase: Phase = Phase.SEED_POPULATION
    iteration_count: int = 0
    history: List[GenerationStats] = field(default_factory=list)

    @classmethod
    def create(cls, config: SimulationConfig, rng: Optional[SimulationRNG] = None) -> "SimulationState":
        population = Population(config.population_size, len(config.target), config.alphabet)
        return cls(
            config=config,
            rng=rng if rng is not None else SimulationRNG(config.seed),
            population=population,
        )

    @property
    def target(self) -> str:
        return self.config.target

    @property
    def solved(self) -> bool:
        return len(self.population) > 0 and self.population.best().fitness == len(self.target)


@dataclass(frozen=True)
class PhaseStep:
    phase: Phase
    next_phase: Optional[Phase]
    events: Tuple[RenderEvent, ...]

    @property
    def frame_count(self) -> int:
        return sum(1 for event in self.events if isinstance(event, FrameEvent))


class _Narrator:
    """Collects the events of one phase."""

    def __init__(self, state: SimulationState, phase: Phase) -> None:
        self._state = state
        self._label = phase.label
        self.events: List[RenderEvent] = []

    def frame(self) -> None:
        snapshot = compose_snapshot(self._state.population, self._state.presentation)
        self.events.append(FrameEvent(snapshot=snapshot, label=self._label))

    def action(self) -> None:
        self.frame()
        self.events.append(DelayEvent(DelayKind.ACTION))

    def close(self) -> None:
        self._state.presentation.clear_focus()
        self.frame()
        self.events.append(DelayEvent(DelayKind.PHASE))


def _seed_population(state: SimulationState, narrator: _Narrator) -> Phase:
    population, presentation = state.population, state.presentation
    population.seed(state.rng)
    presentation.resize(len(population))
    previous: Optional[int] = None
    for idx in range(len(population)):
        if previous is not None:
            presentation.unfocus(previous)
        presentation.focus(idx)
        presentation.show(idx)
        narrator.action()
        previous = idx
    narrator.close()
    return Phase.COMPUTE_FITNESS


def _compute_fitness(state: SimulationState, narrator: _Narrator) -> Phase:
    population, presentation = state.population, state.presentation
    state.iteration_count += 1
    previous: Optional[int] = None
    for idx in population.unscored_indices():
        if previous is not None:
            presentation.unfocus(previous)
        presentation.focus(idx)
        population[idx].evaluate(state.target)
        presentation.reveal(idx)
        narrator.action()
        previous = idx
    narrator.close()

    stats = summarize_generation(state.iteration_count, population.fitnesses(), population.genomes())
    state.history.append(stats)
    LOGGER.info("fitness computed %s", stats.describe())
    return Phase.ORDER_BY_FITNESS


def _order_by_fitness(state: SimulationState, narrator: _Narrator) -> Phase:
    stride = state.config.timing.swap_frame_stride
    swaps = 0
    for i, j in state.population.rank_steps():
        state.presentation.swap(i, j)
        swaps += 1
        if swaps % stride == 0:
            narrator.action()
    narrator.close()
    LOGGER.debug("sorted with %d swap(s)", swaps)

    if state.solved:
        return Phase.SIMULATION_END
    return Phase.REMOVE_UNFIT


def _remove_unfit(state: SimulationState, narrator: _Narrator) -> Phase:
    presentation = state.presentation
    vacated = state.population.cull(state.config.survivors_kept)
    for idx in reversed(vacated):
        presentation.focus(idx)
        narrator.action()
        presentation.unfocus(idx)
        presentation.hide(idx)
    narrator.close()
    LOGGER.debug("culled %d candidate(s)", len(vacated))
    return Phase.BREED_NEW


def _breed_new(state: SimulationState, narrator: _Narrator) -> Phase:
    population, presentation = state.population, state.presentation
    config = state.config
    keep = config.survivors_kept
    for slot in population.cull(keep):
        plan = population.plan_child(slot, keep, config.mutation_probability, state.rng)
        presentation.focus(plan.parent_a, plan.parent_b, slot)
        narrator.action()
        population.install(plan)
        presentation.reset(slot, visible=True, focus=True)
        narrator.action()
        presentation.unfocus(plan.parent_a, plan.parent_b, slot)
    narrator.close()
    return Phase.COMPUTE_FITNESS


def _simulation_end(state: SimulationState, narrator: _Narrator) -> None:
    best = state.population.best()
    narrator.frame()
    narrator.events.append(SummaryEvent(best_genome=best.genome, iteration_count=state.iteration_count))
    LOGGER.info("target %r reached after %d iteration(s)", best.genome, state.iteration_count)


_HANDLERS: Dict[Phase, Callable[[SimulationState, _Narrator], Optional[Phase]]] = {
    Phase.SEED_POPULATION: _seed_population,
    Phase.COMPUTE_FITNESS: _compute_fitness,
    Phase.ORDER_BY_FITNESS: _order_by_fitness,
    Phase.REMOVE_UNFIT: _remove_unfit,
    Phase.BREED_NEW: _breed_new,
    Phase.SIMULATION_END: _simulation_end,
}


def transition(state: SimulationState) -> PhaseStep:
    """Run the current phase and advance ``state.phase``.

    The terminal phase produces its summary once; afterwards the state keeps
    ``SIMULATION_END`` and reports no next phase.
    """

    phase = state.phase
    narrator = _Narrator(state, phase)
    next_phase = _HANDLERS[phase](state, narrator)
    if next_phase is not None:
        LOGGER.debug("%s -> %s", phase.name, next_phase.name)
        state.phase = next_phase
    return PhaseStep(phase=phase, next_phase=next_phase, events=tuple(narrator.events))


class PhaseMachine:
    def __init__(self, state: SimulationState) -> None:
        self.state = state
        self._finished = False

    @classmethod
    def from_config(cls, config: SimulationConfig, rng: Optional[SimulationRNG] = None) -> "PhaseMachine":
        return cls(SimulationState.create(config, rng))

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def finished(self) -> bool:
        return self._finished

    def step(self) -> PhaseStep:
        if self._finished:
            raise SimulationFinished("the simulation has already ended")
        result = transition(self.state)
        if result.phase.is_terminal:
            self._finished = True
        return result


__all__ = ["PhaseMachine", "PhaseStep", "SimulationState", "transition"]
