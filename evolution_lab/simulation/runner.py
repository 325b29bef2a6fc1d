from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import TimingConfig
from ..ga.statistics import GenerationStats
from ..logging_utils import RunLogger
from ..render.interfaces import RenderPortProtocol
from .events import DelayEvent, DelayKind, FrameEvent, RenderEvent, SummaryEvent
from .machine import PhaseMachine, PhaseStep

LOGGER = logging.getLogger("evolution.runner")


@dataclass(frozen=True)
class RunResult:
    best_genome: str
    iteration_count: int
    cancelled: bool
    frames: int
    history: List[GenerationStats] = field(default_factory=list)


class SimulationRunner:
    """Replays phase events against a render port until the run ends or is cancelled."""

    def __init__(
        self,
        machine: PhaseMachine,
        port: RenderPortProtocol,
        timing: Optional[TimingConfig] = None,
        logger: Optional[RunLogger] = None,
    ) -> None:
        self.machine = machine
        self.port = port
        self.timing = timing or machine.state.config.timing
        self.logger = logger
        self.frames = 0

    def _delay_for(self, kind: DelayKind) -> float:
        if kind is DelayKind.PHASE:
            return self.timing.phase_delay
        return self.timing.action_delay

    def _dispatch(self, event: RenderEvent) -> None:
        if isinstance(event, FrameEvent):
            self.port.render_frame(event.snapshot, event.label)
            self.frames += 1
        elif isinstance(event, DelayEvent):
            seconds = self._delay_for(event.kind)
            if seconds > 0:
                self.port.delay(seconds)
        elif isinstance(event, SummaryEvent):
            self.port.render_summary(event.best_genome, event.iteration_count)
        else:
            raise TypeError(f"unsupported render event {event!r}")

    def _step(self) -> PhaseStep:
        if self.logger is None:
            return self.machine.step()
        logger = self.logger
        logger.bind(phase=self.machine.phase.name.lower())

        def advance() -> PhaseStep:
            step = self.machine.step()
            logger.bind(iteration=self.machine.state.iteration_count)
            return step

        return logger.timed(
            "PHASE",
            lambda step: f"frames={step.frame_count} next={step.next_phase.name.lower() if step.next_phase else '-'}",
            advance,
            level="DEBUG",
        )

    def run(self, cancel: Optional[threading.Event] = None) -> RunResult:
        cancelled = False
        while not self.machine.finished:
            if cancel is not None and cancel.is_set():
                cancelled = True
                break
            step = self._step()
            for event in step.events:
                if cancel is not None and cancel.is_set():
                    cancelled = True
                    break
                self._dispatch(event)
            if cancelled:
                break

        if self.logger is not None:
            self.logger.unbind("phase", "iteration")
        state = self.machine.state
        best = state.population.best().genome if len(state.population) else ""
        if cancelled:
            LOGGER.warning("run cancelled in phase %s", state.phase.name)
        return RunResult(
            best_genome=best,
            iteration_count=state.iteration_count,
            cancelled=cancelled,
            frames=self.frames,
            history=list(state.history),
        )


__all__ = ["RunResult", "SimulationRunner"]
